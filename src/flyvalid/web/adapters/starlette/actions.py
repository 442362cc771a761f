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
"""Routable handler actions and their registry."""

from __future__ import annotations

import inspect
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from starlette.requests import Request
from starlette.routing import Route

from flyvalid.kernel.exceptions import FlowConfigurationException
from flyvalid.validation.validator import Validator
from flyvalid.web.adapters.starlette.resolver import ParameterResolver


@dataclass
class HandlerAction:
    """One routable method of one handler instance."""

    handler: type
    instance: Any
    method_name: str
    method: Any
    resolver: ParameterResolver
    status_code: int
    route: Route

    @property
    def route_name(self) -> str:
        return self.route.name

    @property
    def renders_views(self) -> bool:
        return getattr(self.handler, "__flyvalid_stereotype__", "") == "controller"

    def bind(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
        """Bind explicit flow arguments to parameter names, skipping injected ones."""
        return bind_arguments(self.method, args, kwargs, skip=self.resolver.injected, owner=self.handler)

    async def arguments(
        self,
        request: Request,
        validator: Validator,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> dict[str, Any]:
        """Full call arguments for a forward to this action.

        Explicit flow arguments win; the rest come from the current request.
        """
        bound = self.bind(args, kwargs)
        complete = await self.resolver.complete(request, validator, bound)
        try:
            inspect.signature(self.method).bind(**complete)
        except TypeError as exc:
            raise FlowConfigurationException(
                f"Cannot call {self.handler.__name__}.{self.method_name}: {exc}",
                code="FLOW_ARGS",
                context={"target": self.handler.__name__, "method": self.method_name},
            ) from exc
        return complete


def bind_arguments(
    method: Any,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    *,
    skip: set[str] | frozenset[str] = frozenset(),
    owner: type | None = None,
) -> dict[str, Any]:
    """Map *args* and *kwargs* onto *method*'s parameter names.

    ``self`` and the names in *skip* are not bindable. Mismatches raise
    :class:`FlowConfigurationException` with code ``FLOW_ARGS``.
    """
    sig = inspect.signature(method)
    params = [p for name, p in sig.parameters.items() if name != "self" and name not in skip]
    try:
        bound = sig.replace(parameters=params).bind_partial(*args, **kwargs)
    except TypeError as exc:
        label = f"{owner.__name__}.{method.__name__}" if owner is not None else method.__qualname__
        raise FlowConfigurationException(
            f"Arguments do not match {label}: {exc}",
            code="FLOW_ARGS",
            context={"target": label},
        ) from exc
    return dict(bound.arguments)


class ActionRegistry:
    """Lookup of :class:`HandlerAction` by handler class and method name."""

    def __init__(self) -> None:
        self._actions: dict[tuple[type, str], HandlerAction] = {}

    def register(self, action: HandlerAction) -> None:
        self._actions[(action.handler, action.method_name)] = action

    def find(self, handler: type, method: str) -> HandlerAction | None:
        for cls in handler.__mro__:
            action = self._actions.get((cls, method))
            if action is not None:
                return action
        return None

    def get(self, handler: type, method: str) -> HandlerAction:
        action = self.find(handler, method)
        if action is None:
            raise FlowConfigurationException(
                f"No route is mapped for {handler.__name__}.{method}",
                code="FLOW_ROUTE",
                context={"target": handler.__name__, "method": method},
            )
        return action

    def __iter__(self) -> Iterator[HandlerAction]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)
