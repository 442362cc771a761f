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
"""OutcomeResolver — turns flow outcomes and handler results into responses."""

from __future__ import annotations

import inspect
from typing import Any
from urllib.parse import urlencode

import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.routing import NoMatchFound

from flyvalid.kernel.exceptions import (
    ConfigurationException,
    FlowConfigurationException,
    ValidationFlowInterrupt,
)
from flyvalid.session.flash import FlashScope
from flyvalid.validation.flow import FlowMode, FlowOutcome
from flyvalid.validation.validator import Validator
from flyvalid.web.adapters.starlette.actions import ActionRegistry, HandlerAction, bind_arguments
from flyvalid.web.adapters.starlette.resolver import ParameterResolver
from flyvalid.web.adapters.starlette.response import handle_return_value
from flyvalid.web.ports.view import ViewRenderer
from flyvalid.web.views import ViewResolver, message_context

logger = structlog.get_logger("flyvalid.web")

_MAX_FORWARDS = 5


class OutcomeResolver:
    """Converts a :class:`FlowOutcome` into a Starlette response.

    - FORWARD: calls the target action in-process with the same validator,
      so every message stays visible to it
    - REDIRECT: moves the messages into the flash scope and redirects to the
      target action's route
    - RENDER_PAGE: renders the target action's view with the current messages
    - STATUS_CODE: JSON body ``{"status": 400, "messages": [...]}``
    """

    def __init__(
        self,
        registry: ActionRegistry | None = None,
        *,
        renderer: ViewRenderer | None = None,
        views: ViewResolver | None = None,
        flash: FlashScope | None = None,
        redirect_status: int = 302,
    ) -> None:
        self.registry = registry if registry is not None else ActionRegistry()
        self._renderer = renderer
        self._views = views or ViewResolver()
        self._flash = flash or FlashScope()
        self._redirect_status = redirect_status

    async def resolve(
        self,
        request: Request,
        validator: Validator,
        outcome: FlowOutcome,
        _depth: int = 0,
    ) -> Response:
        if outcome.mode is FlowMode.FORWARD:
            return await self._forward(request, validator, outcome, _depth)
        if outcome.mode is FlowMode.REDIRECT:
            return self._redirect(request, outcome)
        if outcome.mode is FlowMode.RENDER_PAGE:
            return self._render_page(request, outcome)
        return JSONResponse(outcome.payload(), status_code=outcome.status or 400)

    def respond(
        self,
        action: HandlerAction,
        request: Request,
        validator: Validator,
        result: Any,
    ) -> Response:
        """Response for a handler that completed normally."""
        if isinstance(result, Response) or not action.renders_views or self._renderer is None:
            return handle_return_value(result, action.status_code)

        context = self._context(request, validator.store.all())
        if isinstance(result, dict):
            context.update(result)
        elif result is not None:
            context["result"] = result
        template = self._views.template_for(action.handler, action.method_name)
        return self._renderer.render(template, context, action.status_code)

    async def _forward(
        self,
        request: Request,
        validator: Validator,
        outcome: FlowOutcome,
        depth: int,
    ) -> Response:
        if depth >= _MAX_FORWARDS:
            raise FlowConfigurationException(
                f"Forward loop detected at {outcome.describe()}",
                code="FLOW_LOOP",
                context={"destination": outcome.describe()},
            )
        action = self._action(outcome)
        kwargs = await action.arguments(request, validator, outcome.args, outcome.kwargs)
        validator.current = action.instance
        try:
            result = action.method(**kwargs)
            if inspect.isawaitable(result):
                result = await result
        except ValidationFlowInterrupt as interrupt:
            return await self.resolve(request, validator, interrupt.outcome, depth + 1)
        return self.respond(action, request, validator, result)

    def _redirect(self, request: Request, outcome: FlowOutcome) -> Response:
        session = getattr(request.state, "session", None)
        if session is None:
            raise ConfigurationException(
                "Redirect on error needs SessionFilter to carry messages to the next request",
                code="FLASH_UNAVAILABLE",
            )
        action = self._action(outcome)
        arguments = action.bind(outcome.args, outcome.kwargs)
        path_names = set(action.route.param_convertors)
        path_params = {k: v for k, v in arguments.items() if k in path_names}
        query = {k: v for k, v in arguments.items() if k not in path_names and v is not None}

        try:
            url = str(request.app.url_path_for(action.route_name, **path_params))
        except NoMatchFound as exc:
            raise FlowConfigurationException(
                f"Cannot build a URL for {outcome.describe()} from {sorted(path_params)}",
                code="FLOW_ROUTE",
                context={"destination": outcome.describe()},
            ) from exc
        if query:
            url = f"{url}?{urlencode(query)}"

        self._flash.put_messages(session, outcome.messages)
        logger.debug("validation_redirect", location=url, messages=len(outcome.messages))
        return RedirectResponse(url, status_code=self._redirect_status)

    def _render_page(self, request: Request, outcome: FlowOutcome) -> Response:
        if self._renderer is None:
            raise ConfigurationException(
                "Rendering a page on error needs a ViewRenderer",
                code="VIEW_RENDERER_MISSING",
            )
        if outcome.target is None or outcome.method is None or not hasattr(outcome.target, outcome.method):
            raise FlowConfigurationException(
                f"Cannot render a page for {outcome.describe()}",
                code="FLOW_METHOD",
            )
        context = self._context(request, outcome.messages)
        context.update(self._page_arguments(outcome))
        template = self._views.template_for(outcome.target, outcome.method)
        return self._renderer.render(template, context)

    def _page_arguments(self, outcome: FlowOutcome) -> dict[str, Any]:
        """Flow arguments by parameter name; the target need not be routed."""
        action = self.registry.find(outcome.target, outcome.method)
        if action is not None:
            return action.bind(outcome.args, outcome.kwargs)
        method = getattr(outcome.target, outcome.method)
        skip = ParameterResolver(method).injected
        return bind_arguments(method, outcome.args, outcome.kwargs, skip=skip, owner=outcome.target)

    def _action(self, outcome: FlowOutcome) -> HandlerAction:
        if outcome.target is None or outcome.method is None:
            raise FlowConfigurationException(
                f"{outcome.mode.value} outcome has no target", code="FLOW_TARGET"
            )
        return self.registry.get(outcome.target, outcome.method)

    @staticmethod
    def _context(request: Request, messages: Any) -> dict[str, Any]:
        carried = getattr(request.state, "flash_messages", ())
        context = message_context([*carried, *messages])
        context["request"] = request
        return context
