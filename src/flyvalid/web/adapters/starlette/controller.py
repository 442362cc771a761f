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
"""Handler discovery, route collection, and request dispatching."""

from __future__ import annotations

import inspect
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import structlog
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from flyvalid.container.stereotypes import handler_name, is_handler
from flyvalid.kernel.exceptions import ConfigurationException, ValidationFlowInterrupt
from flyvalid.validation.validator import Validator
from flyvalid.web.adapters.starlette.actions import HandlerAction
from flyvalid.web.adapters.starlette.resolver import ParameterResolver
from flyvalid.web.mappings import base_path, get_route_mapping

if TYPE_CHECKING:
    from flyvalid.web.adapters.starlette.outcome import OutcomeResolver

logger = structlog.get_logger("flyvalid.web")


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class ControllerRegistrar:
    """Builds Starlette routes from handler instances.

    For each handler:
    1. Reads the ``@request_mapping`` base path from the class
    2. Finds ``@*_mapping`` methods
    3. Builds a :class:`ParameterResolver` per method
    4. Creates a named Route (``"<Handler>.<method>"``) whose endpoint runs
       the method with a fresh :class:`Validator` and turns a
       :class:`ValidationFlowInterrupt` into a response
    """

    def __init__(self, outcomes: OutcomeResolver, *, strict_targets: bool = True) -> None:
        self._outcomes = outcomes
        self._strict = strict_targets
        self.registry = outcomes.registry

    def collect_routes(self, handlers: Iterable[Any]) -> list[Route]:
        routes: list[Route] = []
        for handler in handlers:
            instance = handler() if isinstance(handler, type) else handler
            cls = type(instance)
            if not is_handler(cls):
                raise ConfigurationException(
                    f"{cls.__name__} is not decorated with @controller or @rest_controller",
                    code="NOT_A_HANDLER",
                )
            prefix = base_path(cls)

            for attr_name in dir(cls):
                if attr_name.startswith("_"):
                    continue
                mapping = get_route_mapping(getattr(cls, attr_name, None))
                if mapping is None:
                    continue

                method = getattr(instance, attr_name)
                name = f"{handler_name(cls)}.{attr_name}"
                action = HandlerAction(
                    handler=cls,
                    instance=instance,
                    method_name=attr_name,
                    method=method,
                    resolver=ParameterResolver(method),
                    status_code=mapping.status_code,
                    route=Route(
                        prefix + mapping.path or "/",
                        self._make_endpoint(cls, attr_name),
                        methods=[mapping.method],
                        name=name,
                    ),
                )
                self.registry.register(action)
                routes.append(action.route)
                logger.debug("route_mapped", route=name, path=action.route.path, method=mapping.method)

        return routes

    def _make_endpoint(self, cls: type, method_name: str) -> Any:
        async def endpoint(request: Request) -> Response:
            action = self.registry.get(cls, method_name)
            flash = getattr(request.state, "flash", None)
            request.state.flash_messages = flash.read() if flash is not None else ()

            validator = Validator(current=action.instance, strict=self._strict)
            request.state.validator = validator
            try:
                kwargs = await action.resolver.resolve(request, validator)
                result = await _maybe_await(action.method(**kwargs))
            except ValidationFlowInterrupt as interrupt:
                return await self._outcomes.resolve(request, validator, interrupt.outcome)
            return self._outcomes.respond(action, request, validator, result)

        return endpoint
