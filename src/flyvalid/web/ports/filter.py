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
"""WebFilter port — what the filter chain expects of each filter."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

CallNext = Callable[[Any], Awaitable[Any]]
"""The rest of the chain: takes the request, returns the eventual response."""


@runtime_checkable
class WebFilter(Protocol):
    """A request/response interceptor placed in the chain by ``@order``.

    Session handling and request logging are both filters; see
    :class:`~flyvalid.web.filters.OncePerRequestFilter` for path scoping.
    """

    async def do_filter(self, request: Any, call_next: CallNext) -> Any: ...

    def should_not_filter(self, request: Any) -> bool: ...
