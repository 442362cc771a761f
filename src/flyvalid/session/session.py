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
"""HttpSession — the server-side session seen by one request."""

from __future__ import annotations

import time
from collections.abc import Iterator, MutableMapping
from typing import Any

_CREATED_AT = "_created_at"


class HttpSession(MutableMapping[str, Any]):
    """Dict-like session data that remembers whether it needs saving.

    Names starting with ``_`` hold engine state such as pending flash
    messages and are left out of :meth:`attribute_names`.
    """

    def __init__(self, session_id: str, data: dict[str, Any] | None = None, *, is_new: bool = False) -> None:
        self._id = session_id
        self._data = data if data is not None else {}
        self._data.setdefault(_CREATED_AT, time.time())
        self._is_new = is_new
        self._dirty = is_new
        self._invalidated = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_new(self) -> bool:
        return self._is_new

    @property
    def created_at(self) -> float:
        return float(self._data[_CREATED_AT])

    @property
    def modified(self) -> bool:
        return self._dirty

    @property
    def invalidated(self) -> bool:
        return self._invalidated

    def __getitem__(self, name: str) -> Any:
        return self._data[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._data[name] = value
        self._dirty = True

    def __delitem__(self, name: str) -> None:
        del self._data[name]
        self._dirty = True

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def set(self, name: str, value: Any) -> None:
        self[name] = value

    def attribute_names(self) -> list[str]:
        return [name for name in self._data if not name.startswith("_")]

    def invalidate(self) -> None:
        self._invalidated = True
        self._dirty = True

    def get_data(self) -> dict[str, Any]:
        """The raw dict handed to the :class:`SessionStore` on save."""
        return self._data

    def __repr__(self) -> str:
        return f"HttpSession({self._id!r}, attributes={self.attribute_names()})"
