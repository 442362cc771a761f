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
"""Explicit constraint rules registered against field paths.

A :class:`ConstraintSet` is the programmatic counterpart of declarative
field constraints: each rule pairs a dot-path with a predicate and the text
to report when the predicate fails::

    rules = (
        ConstraintSet()
        .rule("nome", not_none(), "não pode ser nulo")
        .rule("nome", min_length(50), "não pode ser menor que 50")
    )
    validator.check(rules, cliente, prefix="cliente")
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from flyvalid.validation.message import Message, Severity

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class Constraint:
    path: str
    predicate: Predicate
    text: str
    severity: Severity = Severity.ERROR


def resolve_path(obj: Any, path: str) -> Any:
    """Walk a dot-path through attributes or mapping keys; ``None`` when absent."""
    current = obj
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, dict):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


class ConstraintSet:
    """Ordered collection of constraints evaluated against one object."""

    def __init__(self) -> None:
        self._constraints: list[Constraint] = []

    def rule(
        self,
        path: str,
        predicate: Predicate,
        text: str,
        severity: Severity = Severity.ERROR,
    ) -> ConstraintSet:
        self._constraints.append(Constraint(path, predicate, text, severity))
        return self

    def evaluate(self, obj: Any, prefix: str | None = None) -> Iterator[Message]:
        """Yield a message for every failing rule, in registration order."""
        for constraint in self._constraints:
            value = resolve_path(obj, constraint.path)
            if constraint.predicate(value):
                continue
            category = f"{prefix}.{constraint.path}" if prefix else constraint.path
            yield Message(category, constraint.text, constraint.severity)

    def __len__(self) -> int:
        return len(self._constraints)


# ---------------------------------------------------------------------------
# Predicate factories
# ---------------------------------------------------------------------------


def not_none() -> Predicate:
    return lambda value: value is not None


def not_blank() -> Predicate:
    return lambda value: value is not None and str(value).strip() != ""


def min_length(size: int) -> Predicate:
    """Passes for ``None`` so it composes with :func:`not_none`."""
    return lambda value: value is None or len(value) >= size


def max_length(size: int) -> Predicate:
    return lambda value: value is None or len(value) <= size


def min_value(minimum: float) -> Predicate:
    return lambda value: value is None or value >= minimum


def max_value(maximum: float) -> Predicate:
    return lambda value: value is None or value <= maximum
