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
"""flyvalid web application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware

from flyvalid.config.properties.session import SessionProperties
from flyvalid.config.properties.validation import ValidationProperties
from flyvalid.core.config import Config
from flyvalid.kernel.exceptions import FlyValidException
from flyvalid.logging.port import LoggingPort
from flyvalid.session.factory import create_session_store
from flyvalid.session.filter import SessionFilter
from flyvalid.session.flash import FlashScope
from flyvalid.session.ports.outbound import SessionStore
from flyvalid.web.adapters.starlette.controller import ControllerRegistrar
from flyvalid.web.adapters.starlette.errors import global_exception_handler
from flyvalid.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flyvalid.web.adapters.starlette.filters import RequestLoggingFilter
from flyvalid.web.adapters.starlette.jinja import Jinja2ViewRenderer
from flyvalid.web.adapters.starlette.outcome import OutcomeResolver
from flyvalid.web.ports.filter import WebFilter
from flyvalid.web.ports.view import ViewRenderer
from flyvalid.web.views import ViewResolver


def create_app(
    handlers: Iterable[Any],
    config: Config | None = None,
    *,
    session_store: SessionStore | None = None,
    renderer: ViewRenderer | None = None,
    filters: Sequence[WebFilter] = (),
    logging_port: LoggingPort | None = None,
    debug: bool = False,
) -> Starlette:
    """Create a Starlette application that routes to *handlers*.

    Includes:
    - WebFilter chain (request logging, sessions with flash messages, + user filters)
    - One named route per mapped handler method, each with its own Validator
    - On-error flow handling (forward, redirect, render page, 400)
    - Global exception handler for flyvalid errors

    When no *renderer* is given and ``flyvalid.validation.templates_dir``
    exists, a Jinja2 renderer over that directory is used. A *logging_port*
    (for example :class:`~flyvalid.logging.StructlogAdapter`) is configured
    from the same config before anything else.
    """
    config = config or Config.with_defaults()
    if logging_port is not None:
        logging_port.configure(config)
    validation = config.bind(ValidationProperties)
    sessions = config.bind(SessionProperties)

    if renderer is None and Path(validation.templates_dir).is_dir():
        renderer = Jinja2ViewRenderer(validation.templates_dir)

    flash = FlashScope(validation.flash_key)
    outcomes = OutcomeResolver(
        renderer=renderer,
        views=ViewResolver(validation.view_pattern),
        flash=flash,
        redirect_status=validation.redirect_status,
    )
    registrar = ControllerRegistrar(outcomes, strict_targets=validation.strict_targets)
    routes = registrar.collect_routes(handlers)

    chain: list[WebFilter] = [RequestLoggingFilter()]
    if sessions.enabled:
        chain.append(
            SessionFilter(
                store=session_store or create_session_store(sessions),
                cookie_name=sessions.cookie_name,
                ttl=sessions.ttl,
                flash=flash,
            )
        )
    chain.extend(filters)

    app = Starlette(
        debug=debug,
        routes=routes,
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
        exception_handlers={FlyValidException: global_exception_handler},
    )
    app.state.action_registry = registrar.registry
    return app
