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
"""Message model — immutable validation facts classified by severity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(Enum):
    """Classification of a validation message.

    Only ``ERROR`` sends a request down the on-error flow.
    """

    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    SUCCESS = "SUCCESS"


@dataclass(frozen=True)
class Message:
    """A single validation fact.

    ``category`` is a dot-path such as ``"cliente.nome"`` and is only ever
    used as a lookup key. ``text`` is final, already-rendered text.
    """

    category: str
    text: str
    severity: Severity = Severity.ERROR

    @classmethod
    def error(cls, category: str, text: str) -> Message:
        return cls(category, text, Severity.ERROR)

    @classmethod
    def warn(cls, category: str, text: str) -> Message:
        return cls(category, text, Severity.WARN)

    @classmethod
    def info(cls, category: str, text: str) -> Message:
        return cls(category, text, Severity.INFO)

    @classmethod
    def success(cls, category: str, text: str) -> Message:
        return cls(category, text, Severity.SUCCESS)

    def to_dict(self) -> dict[str, str]:
        """Serialize to a JSON-safe dict."""
        return {
            "category": self.category,
            "text": self.text,
            "severity": self.severity.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        """Rebuild a message from :meth:`to_dict` output."""
        return cls(
            category=str(data["category"]),
            text=str(data["text"]),
            severity=Severity(data.get("severity", Severity.ERROR.value)),
        )
