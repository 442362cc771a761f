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
"""ParameterResolver — binds handler parameters from a Starlette request."""

from __future__ import annotations

import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError
from starlette.requests import Request

from flyvalid.validation.message import Message
from flyvalid.validation.validator import Validator

_MISSING = object()
_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@dataclass
class ResolvedParam:
    """How a single handler parameter is filled."""

    name: str
    kind: str
    annotation: Any = None
    default: Any = _MISSING


class ParameterResolver:
    """Inspects a handler signature once and resolves its arguments per request.

    Parameter kinds:

    - ``request``: the Starlette request (by name or ``Request`` annotation)
    - ``validator``: the request's :class:`Validator`
    - ``model``: a pydantic model built from the JSON or form body; failures
      become ERROR messages under the parameter name and the value is ``None``
    - ``value``: path parameter, then query parameter, then form field,
      coerced to ``int``/``float``/``bool`` when annotated so (``Optional``
      annotations included)
    """

    def __init__(self, handler: Any) -> None:
        self.params = self._inspect(handler)

    @property
    def injected(self) -> set[str]:
        return {p.name for p in self.params if p.kind in ("request", "validator")}

    def _inspect(self, handler: Any) -> list[ResolvedParam]:
        try:
            hints = typing.get_type_hints(handler)
        except (NameError, TypeError):
            hints = {}
        params: list[ResolvedParam] = []

        for name, param in inspect.signature(handler).parameters.items():
            if name == "self" or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            hint = hints.get(name)
            default = param.default if param.default is not inspect.Parameter.empty else _MISSING

            if name == "request" or hint is Request:
                kind = "request"
            elif name == "validator" or hint is Validator:
                kind = "validator"
            elif isinstance(hint, type) and issubclass(hint, BaseModel):
                kind = "model"
            else:
                kind = "value"
            params.append(ResolvedParam(name, kind, hint, default))

        return params

    async def resolve(self, request: Request, validator: Validator) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        form: dict[str, Any] | None = None
        for param in self.params:
            if param.kind == "request":
                kwargs[param.name] = request
            elif param.kind == "validator":
                kwargs[param.name] = validator
            elif param.kind == "model":
                data = await _read_body(request)
                if data is None:
                    validator.add(Message.error(param.name, "request body is not valid JSON"))
                    kwargs[param.name] = None
                else:
                    kwargs[param.name] = validator.validate(param.annotation, data, param.name)
            else:
                if form is None:
                    form = await _read_form(request)
                kwargs[param.name] = self._resolve_value(request, form, param, validator)
        return kwargs

    async def complete(
        self,
        request: Request,
        validator: Validator,
        bound: dict[str, Any],
    ) -> dict[str, Any]:
        """Fill the parameters *bound* lacks from *request*.

        Used for forward targets, which share the request and validator of
        the handler that forwarded. Values are read without adding messages.
        Required values the request does not carry are left out.
        """
        result = dict(bound)
        form: dict[str, Any] | None = None
        for param in self.params:
            if param.name in result:
                continue
            if param.kind == "request":
                result[param.name] = request
            elif param.kind == "validator":
                result[param.name] = validator
            elif param.kind == "model":
                data = await _read_body(request)
                try:
                    result[param.name] = param.annotation.model_validate(data or {})
                except ValidationError:
                    result[param.name] = None
            else:
                if form is None:
                    form = await _read_form(request)
                raw = _lookup(request, form, param.name)
                if raw is None:
                    if param.default is not _MISSING:
                        result[param.name] = param.default
                    continue
                try:
                    result[param.name] = _coerce(raw, param.annotation)
                except ValueError:
                    result[param.name] = None if param.default is _MISSING else param.default
        return result

    def _resolve_value(
        self,
        request: Request,
        form: dict[str, Any],
        param: ResolvedParam,
        validator: Validator,
    ) -> Any:
        raw = _lookup(request, form, param.name)
        if raw is None:
            if param.default is not _MISSING:
                return param.default
            return None
        try:
            return _coerce(raw, param.annotation)
        except ValueError:
            validator.add(Message.error(param.name, f"'{raw}' is not a valid value"))
            return None


def _lookup(request: Request, form: dict[str, Any], name: str) -> Any:
    raw = request.path_params.get(name)
    if raw is None:
        raw = request.query_params.get(name)
    if raw is None:
        raw = form.get(name)
    return raw


def _unwrap_optional(annotation: Any) -> Any:
    """``int | None`` and ``Optional[int]`` -> ``int``; anything else unchanged."""
    if typing.get_origin(annotation) not in (typing.Union, types.UnionType):
        return annotation
    args = [a for a in typing.get_args(annotation) if a is not type(None)]
    return args[0] if len(args) == 1 else annotation


def _coerce(raw: Any, annotation: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    annotation = _unwrap_optional(annotation)
    if annotation is int:
        return int(raw)
    if annotation is float:
        return float(raw)
    if annotation is bool:
        return raw.lower() in ("true", "1", "yes", "on")
    return raw


def _is_form(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return any(content_type.startswith(t) for t in _FORM_TYPES)


async def _read_form(request: Request) -> dict[str, Any]:
    if request.method in ("GET", "HEAD") or not _is_form(request):
        return {}
    form = await request.form()
    return dict(form)


async def _read_body(request: Request) -> dict[str, Any] | None:
    """Body as a dict; ``None`` when it is not valid JSON."""
    if request.method in ("GET", "HEAD"):
        return dict(request.query_params)
    if _is_form(request):
        return await _read_form(request)
    body = await request.body()
    if not body:
        return {}
    try:
        data = await request.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else {}
