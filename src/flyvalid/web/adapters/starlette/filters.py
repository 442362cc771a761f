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
"""Request logging with the validation outcome of each request."""

from __future__ import annotations

import time
from typing import Any

import structlog
from starlette.requests import Request

from flyvalid.container.ordering import HIGHEST_PRECEDENCE, order
from flyvalid.web.filters import OncePerRequestFilter
from flyvalid.web.ports.filter import CallNext

logger = structlog.get_logger("flyvalid.web")


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def _validation_tally(request: Request) -> dict[str, Any]:
    validator = getattr(request.state, "validator", None)
    if validator is None:
        return {"messages": 0, "has_errors": False}
    return {"messages": len(validator.store), "has_errors": validator.has_errors()}


@order(HIGHEST_PRECEDENCE + 200)
class RequestLoggingFilter(OncePerRequestFilter):
    """Emits one ``http_request`` event per request.

    Besides status and duration the event carries how many messages the
    request's :class:`~flyvalid.validation.Validator` collected and whether
    any was an error, which is how on-error flows show up in the logs.
    """

    async def do_filter(self, request: Request, call_next: CallNext) -> Any:
        log = logger.bind(method=request.method, path=request.url.path)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            log.error("http_request_failed", duration_ms=_elapsed_ms(start), error_type=type(exc).__name__)
            raise
        log.info(
            "http_request",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(start),
            **_validation_tally(request),
        )
        return response
