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
"""Global exception handler for flyvalid exceptions."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse

from flyvalid.kernel.exceptions import (
    BusinessException,
    ConfigurationException,
    DispatcherMisuseException,
    FlyValidException,
    ValidationException,
)

logger = structlog.get_logger("flyvalid.web")

# Exception -> HTTP status code mapping (most specific first)
_STATUS_MAP: dict[type, int] = {
    ValidationException: 422,
    BusinessException: 400,
    ConfigurationException: 500,
    DispatcherMisuseException: 500,
}


def _get_status_code(exc: Exception) -> int:
    for exc_type, status in _STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return status
    return 500


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a :class:`FlyValidException` as a structured JSON error."""
    transaction_id = getattr(request.state, "transaction_id", None) or str(uuid.uuid4())
    status = _get_status_code(exc)
    body: dict[str, Any] = {
        "error": {
            "message": str(exc),
            "code": getattr(exc, "code", None) or type(exc).__name__,
            "transaction_id": transaction_id,
            "timestamp": datetime.now(UTC).isoformat(),
            "status": status,
            "path": request.url.path,
        }
    }
    if isinstance(exc, FlyValidException) and exc.context:
        body["error"]["context"] = exc.context

    if status >= 500:
        logger.error("request_misconfigured", path=request.url.path, code=body["error"]["code"], error=str(exc))
    return JSONResponse(body, status_code=status)
