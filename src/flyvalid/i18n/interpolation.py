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
"""Message interpolation — ``(template, context) -> text`` before messages reach the engine."""

from __future__ import annotations

from collections.abc import Mapping
from string import Template
from typing import Any

from flyvalid.i18n.ports.outbound import MessageSource
from flyvalid.validation.message import Message, Severity


def interpolate(template: str, context: Mapping[str, Any]) -> str:
    """Substitute ``${name}`` placeholders; unknown names are left untouched."""
    return Template(template).safe_substitute({k: str(v) for k, v in context.items()})


class MessageInterpolator:
    """Builds rendered :class:`Message` values from bundle keys.

    Templates are looked up by key in a :class:`MessageSource`. A text that
    is wrapped in braces (``"{validation.not_null}"``) is treated as a key;
    anything else is used as a literal template.
    """

    def __init__(self, source: MessageSource, locale: str | None = None) -> None:
        self._source = source
        self._locale = locale

    def render(self, text: str, context: Mapping[str, Any] | None = None) -> str:
        template = text
        if text.startswith("{") and text.endswith("}"):
            template = self._source.get_template(text[1:-1], self._locale)
        return interpolate(template, context or {})

    def message(
        self,
        category: str,
        text: str,
        severity: Severity = Severity.ERROR,
        **context: Any,
    ) -> Message:
        return Message(category, self.render(text, context), severity)

    def error(self, category: str, text: str, **context: Any) -> Message:
        return self.message(category, text, Severity.ERROR, **context)
