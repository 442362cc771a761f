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
"""View resolution and the message context published to templates."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from flyvalid.container.stereotypes import handler_name
from flyvalid.validation.message import Message, Severity
from flyvalid.validation.views import MessageList, ValidationMessages

DEFAULT_VIEW_PATTERN = "{handler}/{method}.html"


class ViewResolver:
    """Maps a handler action to its template by naming convention.

    The handler name is the class name without a ``Controller`` suffix, with
    its first letter lowered: ``ClienteController.form`` resolves to
    ``cliente/form.html`` with the default pattern.
    """

    def __init__(self, pattern: str = DEFAULT_VIEW_PATTERN) -> None:
        self._pattern = pattern

    def template_for(self, target: type, method: str) -> str:
        name = handler_name(target)
        if name.endswith("Controller") and name != "Controller":
            name = name[: -len("Controller")]
        name = name[:1].lower() + name[1:]
        return self._pattern.format(handler=name, method=method)


def message_context(messages: Iterable[Message]) -> dict[str, Any]:
    """The ``errors`` and ``vmessages`` names published to views."""
    snapshot = list(messages)
    return {
        "errors": MessageList([m for m in snapshot if m.severity is Severity.ERROR]),
        "vmessages": ValidationMessages(snapshot),
    }
