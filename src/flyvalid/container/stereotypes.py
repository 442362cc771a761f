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
"""Stereotype decorators that mark classes as request handlers.

- @controller: handler whose actions render views or redirect
- @rest_controller: handler whose actions return JSON bodies

Only classes carrying one of these stereotypes are accepted as on-error
flow targets.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

T = TypeVar("T", bound=type)

HANDLER_STEREOTYPES = frozenset({"controller", "rest_controller"})


def _make_stereotype(stereotype_name: str) -> Callable[..., Any]:
    """Factory that creates a stereotype decorator with the given name."""

    @overload
    def stereotype(cls: T) -> T: ...

    @overload
    def stereotype(*, name: str = "") -> Callable[[T], T]: ...

    def stereotype(cls: T | None = None, *, name: str = "") -> T | Callable[[T], T]:
        def decorator(cls: T) -> T:
            cls.__flyvalid_stereotype__ = stereotype_name  # type: ignore[attr-defined]
            cls.__flyvalid_handler_name__ = name or cls.__name__  # type: ignore[attr-defined]
            return cls

        if cls is not None:
            return decorator(cls)
        return decorator

    stereotype.__name__ = stereotype_name
    stereotype.__qualname__ = stereotype_name
    return stereotype


controller = _make_stereotype("controller")
rest_controller = _make_stereotype("rest_controller")


def is_handler(cls: Any) -> bool:
    """Return ``True`` if *cls* is a class decorated as a handler."""
    return isinstance(cls, type) and (
        getattr(cls, "__flyvalid_stereotype__", None) in HANDLER_STEREOTYPES
    )


def handler_name(cls: type) -> str:
    """Logical handler name used for route names and view lookup."""
    return str(cls.__dict__.get("__flyvalid_handler_name__", cls.__name__))
