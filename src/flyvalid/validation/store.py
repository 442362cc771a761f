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
"""MessageStore — append-only, insertion-ordered collection of messages."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Iterator

from flyvalid.validation.message import Message, Severity


class MessageView:
    """Lazy, restartable view over a store filtered by a predicate.

    Every iteration walks the underlying store again, so a view taken
    before an ``add`` also reflects that message.
    """

    __slots__ = ("_source", "_predicate")

    def __init__(
        self,
        source: list[Message],
        predicate: Callable[[Message], bool] | None = None,
    ) -> None:
        self._source = source
        self._predicate = predicate

    def __iter__(self) -> Iterator[Message]:
        if self._predicate is None:
            return iter(list(self._source))
        return (m for m in list(self._source) if self._predicate(m))

    def __len__(self) -> int:
        if self._predicate is None:
            return len(self._source)
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MessageView):
            return list(self) == list(other)
        if isinstance(other, (list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"MessageView({list(self)!r})"

    def texts(self) -> list[str]:
        return [m.text for m in self]


class MessageStore:
    """Ordered multiset of :class:`Message` values.

    Identical messages added twice appear twice. There is no removal: the
    store lives for one request and is discarded with it.
    """

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        self._messages: list[Message] = []
        self._severity_counts: Counter[Severity] = Counter()
        self.extend(messages)

    def add(self, message: Message) -> None:
        """Append *message*. Any category string is accepted."""
        if not isinstance(message, Message):
            raise TypeError(f"Expected Message, got {type(message).__name__}")
        self._messages.append(message)
        self._severity_counts[message.severity] += 1

    def extend(self, messages: Iterable[Message]) -> None:
        for message in messages:
            self.add(message)

    def all(self) -> MessageView:
        return MessageView(self._messages)

    def by_severity(self, severity: Severity) -> MessageView:
        return MessageView(self._messages, lambda m: m.severity is severity)

    def by_category(self, category: str) -> MessageView:
        """Messages whose category equals *category* exactly, in insertion order."""
        return MessageView(self._messages, lambda m: m.category == category)

    def has_severity(self, severity: Severity) -> bool:
        return self._severity_counts[severity] > 0

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(m.category for m in self._messages))

    def __iter__(self) -> Iterator[Message]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"MessageStore({len(self._messages)} messages)"
