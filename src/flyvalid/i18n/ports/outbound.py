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
"""MessageSource protocol — port for resolving message templates by key."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MessageSource(Protocol):
    """Abstract message-template lookup.

    Implementations return the raw template for a key; placeholder
    substitution is done by :class:`~flyvalid.i18n.interpolation.MessageInterpolator`.
    """

    def get_template(self, code: str, locale: str | None = None) -> str:
        """Return the template for *code*. Raises ``KeyError`` when unknown."""
        ...

    def has_template(self, code: str, locale: str | None = None) -> bool: ...


