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
"""Session store on a ``redis.asyncio`` client."""

from __future__ import annotations

import json
from typing import Any

import structlog

logger = structlog.get_logger("flyvalid.session.redis")


class RedisSessionStore:
    """Stores each session as one JSON value with a Redis-side expiry.

    Message dicts written by the flash scope are plain JSON, so they round
    trip without custom encoding.
    """

    def __init__(self, client: Any, key_prefix: str = "flyvalid:session:") -> None:
        self._client = client
        self._key_prefix = key_prefix

    def _key(self, session_id: str) -> str:
        return self._key_prefix + session_id

    async def get(self, session_id: str) -> dict[str, Any] | None:
        raw = await self._client.get(self._key(session_id))
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("session_unreadable", session_id=session_id)
            return None
        return data if isinstance(data, dict) else None

    async def save(self, session_id: str, data: dict[str, Any], ttl: int) -> None:
        await self._client.set(self._key(session_id), json.dumps(data).encode(), ex=ttl)

    async def delete(self, session_id: str) -> None:
        await self._client.delete(self._key(session_id))

    async def exists(self, session_id: str) -> bool:
        return bool(await self._client.exists(self._key(session_id)))
