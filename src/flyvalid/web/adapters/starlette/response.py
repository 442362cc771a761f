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
"""Conversion of handler return values into Starlette responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from starlette.responses import JSONResponse, Response

from flyvalid.validation.message import Message
from flyvalid.validation.views import MessageList, ValidationMessages


def _jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, ValidationMessages):
        return result.to_dict()
    if isinstance(result, MessageList):
        return [m.to_dict() for m in result]
    if isinstance(result, Message):
        return result.to_dict()
    return result


def handle_return_value(result: Any, status_code: int = 200) -> Response:
    """Build the response for a handler that finished without an on-error flow.

    ``None`` becomes an empty body (204 unless the mapping set another
    status), a ``Response`` passes through, and anything else is sent as
    JSON. Pydantic models and message views are serialized first, so a REST
    handler may simply ``return validator.messages``.
    """
    if isinstance(result, Response):
        return result
    if result is None:
        return Response(status_code=204 if status_code == 200 else status_code)
    return JSONResponse(_jsonable(result), status_code=status_code)
