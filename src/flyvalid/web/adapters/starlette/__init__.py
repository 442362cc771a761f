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
"""Starlette web adapter."""

from flyvalid.web.adapters.starlette.actions import ActionRegistry, HandlerAction
from flyvalid.web.adapters.starlette.app import create_app
from flyvalid.web.adapters.starlette.controller import ControllerRegistrar
from flyvalid.web.adapters.starlette.errors import global_exception_handler
from flyvalid.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flyvalid.web.adapters.starlette.filters import RequestLoggingFilter
from flyvalid.web.adapters.starlette.jinja import Jinja2ViewRenderer
from flyvalid.web.adapters.starlette.outcome import OutcomeResolver
from flyvalid.web.adapters.starlette.resolver import ParameterResolver
from flyvalid.web.adapters.starlette.response import handle_return_value

__all__ = [
    "ActionRegistry",
    "ControllerRegistrar",
    "HandlerAction",
    "Jinja2ViewRenderer",
    "OutcomeResolver",
    "ParameterResolver",
    "RequestLoggingFilter",
    "WebFilterChainMiddleware",
    "create_app",
    "global_exception_handler",
    "handle_return_value",
]
