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
"""Route declarations for handler classes.

``@request_mapping`` gives a handler its base path; the per-method
decorators attach a :class:`RouteMapping` that the web adapter turns into a
named route::

    @controller
    @request_mapping("/clientes")
    class ClienteController:
        @get_mapping("/form")
        def form(self): ...

        @post_mapping("/", status_code=201)
        def adiciona(self, validator: Validator, nome: str = ""): ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])

_BASE_PATH_ATTR = "__flyvalid_request_mapping__"
_MAPPING_ATTR = "__flyvalid_mapping__"


@dataclass(frozen=True)
class RouteMapping:
    method: str
    path: str = ""
    status_code: int = 200


def request_mapping(path: str) -> Callable[[T], T]:
    def decorator(cls: T) -> T:
        setattr(cls, _BASE_PATH_ATTR, path.rstrip("/"))
        return cls

    return decorator


def base_path(cls: type) -> str:
    return str(getattr(cls, _BASE_PATH_ATTR, ""))


def _mapping_for(method: str) -> Callable[..., Callable[[F], F]]:
    def mapping(path: str = "", *, status_code: int = 200) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            setattr(func, _MAPPING_ATTR, RouteMapping(method, path, status_code))
            return func

        return decorator

    mapping.__name__ = mapping.__qualname__ = f"{method.lower()}_mapping"
    return mapping


get_mapping = _mapping_for("GET")
post_mapping = _mapping_for("POST")
put_mapping = _mapping_for("PUT")
delete_mapping = _mapping_for("DELETE")


def get_route_mapping(func: Any) -> RouteMapping | None:
    mapping = getattr(func, _MAPPING_ATTR, None)
    return mapping if isinstance(mapping, RouteMapping) else None
