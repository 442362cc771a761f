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
"""flyvalid Web — handler mappings, filters, and view resolution.

Framework-agnostic types are exported here. The Starlette adapter lives in
:mod:`flyvalid.web.adapters.starlette`::

    from flyvalid.web.adapters.starlette import create_app
"""

from flyvalid.container.stereotypes import controller, rest_controller
from flyvalid.web.filters import OncePerRequestFilter
from flyvalid.web.mappings import (
    RouteMapping,
    delete_mapping,
    get_mapping,
    post_mapping,
    put_mapping,
    request_mapping,
)
from flyvalid.web.ports.filter import WebFilter
from flyvalid.web.ports.view import ViewRenderer
from flyvalid.web.views import ViewResolver, message_context

__all__ = [
    "OncePerRequestFilter",
    "RouteMapping",
    "ViewRenderer",
    "ViewResolver",
    "WebFilter",
    "controller",
    "delete_mapping",
    "get_mapping",
    "message_context",
    "post_mapping",
    "put_mapping",
    "request_mapping",
    "rest_controller",
]
