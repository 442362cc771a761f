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
"""StructlogAdapter — the LoggingPort used by flyvalid applications.

Configuration keys::

    flyvalid:
      logging:
        format: console        # or json
        level:
          root: INFO
          flyvalid.web: DEBUG  # any other key is a logger name
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from flyvalid.core.config import Config

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


class StructlogAdapter:
    """Routes structlog through stdlib logging, rendered as console text or JSON."""

    def __init__(self) -> None:
        self._format = "console"
        self._root_level = "INFO"

    @property
    def format(self) -> str:
        return self._format

    @property
    def root_level(self) -> str:
        return self._root_level

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section("flyvalid.logging.level"))
        self._root_level = str(levels.pop("root", "INFO")).upper()
        self._format = str(config.get("flyvalid.logging.format", "console")).lower()

        renderer = (
            structlog.processors.JSONRenderer()
            if self._format == "json"
            else structlog.dev.ConsoleRenderer()
        )
        structlog.configure(
            processors=[*_SHARED_PROCESSORS, renderer],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_level(self._root_level), force=True)

        for name, level in levels.items():
            self.set_level(name, str(level))

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))
