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
"""Pydantic integration helpers for validation."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from flyvalid.kernel.exceptions import ValidationException
from flyvalid.validation.message import Message, Severity

T = TypeVar("T", bound=BaseModel)


def error_category(loc: tuple[Any, ...], prefix: str | None = None) -> str:
    """Build a dot-path category from a pydantic error location."""
    path = ".".join(str(part) for part in loc)
    if prefix:
        return f"{prefix}.{path}" if path else prefix
    return path


def messages_from_error(
    exc: ValidationError,
    prefix: str | None = None,
    severity: Severity = Severity.ERROR,
) -> list[Message]:
    """Convert every error of a pydantic ``ValidationError`` into a :class:`Message`."""
    return [
        Message(error_category(tuple(e["loc"]), prefix), e["msg"], severity)
        for e in exc.errors()
    ]


def validate_model(model: type[T], data: dict[str, Any]) -> T:
    """Validate data against a Pydantic model.

    Raises:
        ValidationException: If validation fails, with structured error details.
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors()
        detail = "; ".join(f"{error_category(tuple(e['loc']))}: {e['msg']}" for e in errors)
        raise ValidationException(
            f"Validation failed: {detail}",
            code="VALIDATION_ERROR",
            context={"messages": [m.to_dict() for m in messages_from_error(exc)]},
        ) from exc
