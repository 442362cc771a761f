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
"""SessionFilter — cookie-bound sessions plus the flash hand-off."""

from __future__ import annotations

import uuid
from typing import Any

import structlog

from flyvalid.container.ordering import HIGHEST_PRECEDENCE, order
from flyvalid.session.flash import FlashCarrier, FlashScope
from flyvalid.session.ports.outbound import SessionStore
from flyvalid.session.session import HttpSession
from flyvalid.web.filters import OncePerRequestFilter
from flyvalid.web.ports.filter import CallNext

logger = structlog.get_logger("flyvalid.session")


@order(HIGHEST_PRECEDENCE + 150)
class SessionFilter(OncePerRequestFilter):
    """Opens the session named by the cookie and saves it after the response.

    Before the handler runs, ``request.state.session`` holds the
    :class:`HttpSession` and ``request.state.flash`` a :class:`FlashCarrier`
    with whatever the previous request flashed. Taking the flash marks the
    session modified, so the messages are gone from the store afterwards
    whether or not the handler read them.
    """

    def __init__(
        self,
        store: SessionStore,
        cookie_name: str = "FLYVALID_SESSION",
        ttl: int = 1800,
        flash: FlashScope | None = None,
    ) -> None:
        self._store = store
        self._cookie_name = cookie_name
        self._ttl = ttl
        self._flash = flash or FlashScope()

    @property
    def flash(self) -> FlashScope:
        return self._flash

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        session = await self._open(request.cookies.get(self._cookie_name))
        request.state.session = session
        request.state.flash = self._flash.take(session) if self._flash.key in session else FlashCarrier()

        try:
            response = await call_next(request)
        finally:
            await self._close(session)
        self._write_cookie(response, session)
        return response

    async def _open(self, session_id: str | None) -> HttpSession:
        if session_id:
            data = await self._store.get(session_id)
            if data is not None:
                return HttpSession(session_id, data)
            logger.debug("session_expired", session_id=session_id)
        return HttpSession(uuid.uuid4().hex, is_new=True)

    async def _close(self, session: HttpSession) -> None:
        if session.invalidated:
            await self._store.delete(session.id)
        elif session.modified:
            await self._store.save(session.id, session.get_data(), self._ttl)

    def _write_cookie(self, response: Any, session: HttpSession) -> None:
        if session.invalidated:
            response.delete_cookie(key=self._cookie_name)
        elif session.is_new:
            response.set_cookie(
                key=self._cookie_name,
                value=session.id,
                max_age=self._ttl,
                httponly=True,
                samesite="lax",
            )
