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
"""WebFilterChainMiddleware — runs the ordered WebFilter chain around the app."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, cast

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from flyvalid.container.ordering import get_order
from flyvalid.web.ports.filter import CallNext, WebFilter


class _ResponseBuffer:
    """ASGI ``send`` target that collects a downstream response."""

    def __init__(self) -> None:
        self.status = 200
        self.headers: list[tuple[bytes, bytes]] = []
        self.chunks: list[bytes] = []

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", []))
        elif message["type"] == "http.response.body" and message.get("body"):
            self.chunks.append(message["body"])

    def to_response(self) -> Response:
        response = Response(content=b"".join(self.chunks), status_code=self.status)
        response.raw_headers[:] = self.headers
        return response


class WebFilterChainMiddleware:
    """Pure ASGI middleware running :class:`WebFilter` instances by ``@order``.

    The chain is composed once. Its innermost link buffers the application's
    response into a Starlette ``Response`` so filters (sessions in particular)
    can still set cookies and headers after the handler returned.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self.filters = sorted(filters, key=get_order)
        chain: CallNext = self._downstream
        for web_filter in reversed(self.filters):
            chain = _link(web_filter, chain)
        self._chain = chain

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        response = cast(Response, await self._chain(Request(scope, receive, send)))
        await response(scope, receive, send)

    async def _downstream(self, request: Request) -> Response:
        buffer = _ResponseBuffer()
        await self.app(request.scope, request.receive, buffer)
        return buffer.to_response()


def _link(web_filter: WebFilter, next_call: CallNext) -> CallNext:
    async def call(request: Any) -> Any:
        if web_filter.should_not_filter(request):
            return await next_call(request)
        return await web_filter.do_filter(request, next_call)

    return call
