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
"""Read-only message collections exposed to the view layer.

Two conventional names are published for templates:

- ``errors``: ERROR-severity messages only
- ``vmessages``: every severity, grouped as ``errors``, ``warnings``,
  ``infos`` and ``successes``

Each collection answers ``from_(category)`` with the ordered texts for that
category and ``join(category, separator)`` with those texts concatenated::

    {{ errors.join("cliente.nome", " - ") }}
    {{ errors.for_("cliente.nome").join(" - ") }}
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from flyvalid.validation.message import Message, Severity


class CategoryMessages:
    """Texts of one category, in insertion order."""

    __slots__ = ("category", "_texts")

    def __init__(self, category: str, texts: list[str]) -> None:
        self.category = category
        self._texts = texts

    def join(self, separator: str = ", ") -> str:
        return separator.join(self._texts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._texts)

    def __len__(self) -> int:
        return len(self._texts)

    def __bool__(self) -> bool:
        return bool(self._texts)

    def __str__(self) -> str:
        return self.join()


class MessageList:
    """Queryable, read-only sequence of messages."""

    def __init__(self, messages: Iterable[Message]) -> None:
        self._messages = messages

    def from_(self, category: str) -> list[str]:
        """Texts for *category* in insertion order; empty for unknown categories."""
        return [m.text for m in self._messages if m.category == category]

    def for_(self, category: str) -> CategoryMessages:
        return CategoryMessages(category, self.from_(category))

    def join(self, category: str, separator: str = ", ") -> str:
        return separator.join(self.from_(category))

    def has(self, category: str) -> bool:
        return any(m.category == category for m in self._messages)

    def grouped(self) -> dict[str, list[str]]:
        """Texts keyed by category, categories in first-seen order."""
        result: dict[str, list[str]] = {}
        for message in self._messages:
            result.setdefault(message.category, []).append(message.text)
        return result

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"MessageList({list(self)!r})"


class ValidationMessages:
    """All messages grouped by severity, published to views as ``vmessages``."""

    def __init__(self, messages: Iterable[Message]) -> None:
        self._messages = messages

    def _of(self, severity: Severity) -> MessageList:
        return MessageList([m for m in self._messages if m.severity is severity])

    @property
    def errors(self) -> MessageList:
        return self._of(Severity.ERROR)

    @property
    def warnings(self) -> MessageList:
        return self._of(Severity.WARN)

    @property
    def infos(self) -> MessageList:
        return self._of(Severity.INFO)

    @property
    def successes(self) -> MessageList:
        return self._of(Severity.SUCCESS)

    def all(self) -> MessageList:
        return MessageList(self._messages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": self.errors.grouped(),
            "warnings": self.warnings.grouped(),
            "infos": self.infos.grouped(),
            "successes": self.successes.grouped(),
        }
