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
"""Flash scope — carries validation messages across exactly one redirect.

On a redirect outcome the current messages are written into the session.
The next request takes them out of the session before its handler runs
(so they are gone afterwards whether or not anything reads them) and
exposes them through a :class:`FlashCarrier` that yields them once.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from flyvalid.session.session import HttpSession
from flyvalid.validation.message import Message

logger = structlog.get_logger("flyvalid.session.flash")

DEFAULT_FLASH_KEY = "_flyvalid_flash_messages"


class FlashCarrier:
    """Single-read holder for messages carried over from the previous request."""

    __slots__ = ("_messages", "_consumed")

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        self._messages: tuple[Message, ...] = tuple(messages)
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def read(self) -> tuple[Message, ...]:
        """Return the carried messages the first time; an empty tuple afterwards."""
        if self._consumed:
            return ()
        self._consumed = True
        messages, self._messages = self._messages, ()
        return messages

    def __bool__(self) -> bool:
        return not self._consumed and bool(self._messages)

    def __len__(self) -> int:
        return 0 if self._consumed else len(self._messages)

    def __repr__(self) -> str:
        return f"FlashCarrier({len(self)} messages, consumed={self._consumed})"


class FlashScope:
    """Reads and writes flash messages in an :class:`HttpSession`."""

    def __init__(self, key: str = DEFAULT_FLASH_KEY) -> None:
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def put_messages(self, session: HttpSession, messages: Iterable[Message]) -> None:
        """Store *messages* for the next request, appending to any already pending."""
        pending: list[dict[str, Any]] = list(session.get(self._key) or [])
        pending.extend(m.to_dict() for m in messages)
        session.set(self._key, pending)
        logger.debug("flash_messages_stored", session_id=session.id, count=len(pending))

    def pop_messages(self, session: HttpSession) -> list[Message]:
        """Remove and return pending messages; empty when there are none."""
        raw = session.pop(self._key, None) or []
        return [Message.from_dict(item) for item in raw]

    def take(self, session: HttpSession) -> FlashCarrier:
        return FlashCarrier(self.pop_messages(session))
