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
"""Jinja2-based ViewRenderer."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from starlette.responses import HTMLResponse

from flyvalid.kernel.exceptions import ConfigurationException


class Jinja2ViewRenderer:
    """Renders templates from a directory with an autoescaping Jinja2 environment."""

    def __init__(self, directory: str | Path = "templates", environment: Environment | None = None) -> None:
        self._env = environment or Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, template: str, context: dict[str, Any], status_code: int = 200) -> HTMLResponse:
        try:
            compiled = self._env.get_template(template)
        except TemplateNotFound as exc:
            raise ConfigurationException(
                f"View template '{template}' not found",
                code="VIEW_NOT_FOUND",
                context={"template": template},
            ) from exc
        return HTMLResponse(compiled.render(**context), status_code=status_code)
