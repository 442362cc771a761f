# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Process-local session store."""

from __future__ import annotations

import asyncio
import copy
import time
from typing import Any, NamedTuple


class _Entry(NamedTuple):
    data: dict[str, Any]
    expires_at: float

    def expired(self) -> bool:
        return time.monotonic() > self.expires_at


class InMemorySessionStore:
    """Keeps sessions in a dict, each with its own expiry.

    Data is deep-copied in and out so flash messages taken by one request
    cannot reappear through another request's stale reference. For tests
    and single-process servers; use :class:`RedisSessionStore` otherwise.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._lock = asyncio.Lock()

    def _live(self, session_id: str) -> _Entry | None:
        entry = self._entries.get(session_id)
        if entry is not None and entry.expired():
            del self._entries[session_id]
            return None
        return entry

    async def get(self, session_id: str) -> dict[str, Any] | None:
        async with self._lock:
            entry = self._live(session_id)
        return copy.deepcopy(entry.data) if entry is not None else None

    async def save(self, session_id: str, data: dict[str, Any], ttl: int) -> None:
        async with self._lock:
            self._entries[session_id] = _Entry(copy.deepcopy(data), time.monotonic() + ttl)

    async def delete(self, session_id: str) -> None:
        async with self._lock:
            self._entries.pop(session_id, None)

    async def exists(self, session_id: str) -> bool:
        async with self._lock:
            return self._live(session_id) is not None
