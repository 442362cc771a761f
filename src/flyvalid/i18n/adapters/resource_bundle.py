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
"""Resource-bundle message source — loads message templates from YAML/JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]


class ResourceBundleMessageSource:
    """Resolves message templates from locale-specific YAML or JSON files.

    File naming convention::

        {base_path}/messages_{locale}.yaml   (preferred)
        {base_path}/messages_{locale}.json   (fallback)

    Nested keys are flattened with dots, so::

        validation:
          not_null: "não pode ser nulo"

    is looked up as ``get_template("validation.not_null", "pt_BR")``.
    A locale such as ``pt_BR`` falls back to ``pt`` and then to the
    default locale.
    """

    def __init__(self, base_path: str | Path = "i18n/", default_locale: str = "en") -> None:
        self._base_path = Path(base_path)
        self._default_locale = default_locale
        self._cache: dict[str, dict[str, str]] = {}

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def get_template(self, code: str, locale: str | None = None) -> str:
        for candidate in self._candidates(locale):
            template = self._load_bundle(candidate).get(code)
            if template is not None:
                return template
        raise KeyError(f"No message found for code '{code}' in locale '{locale or self._default_locale}'")

    def has_template(self, code: str, locale: str | None = None) -> bool:
        return any(code in self._load_bundle(c) for c in self._candidates(locale))

    def _candidates(self, locale: str | None) -> list[str]:
        candidates: list[str] = []
        if locale:
            candidates.append(locale)
            if "_" in locale:
                candidates.append(locale.split("_", 1)[0])
        if self._default_locale not in candidates:
            candidates.append(self._default_locale)
        return candidates

    def _load_bundle(self, locale: str) -> dict[str, str]:
        """Load and cache the message bundle for *locale*."""
        if locale in self._cache:
            return self._cache[locale]

        messages: dict[str, str] = {}
        for suffix in (".yaml", ".yml"):
            path = self._base_path / f"messages_{locale}{suffix}"
            if path.is_file():
                with path.open(encoding="utf-8") as fh:
                    messages = _flatten(yaml.safe_load(fh) or {})
                break
        else:
            json_path = self._base_path / f"messages_{locale}.json"
            if json_path.is_file():
                with json_path.open(encoding="utf-8") as fh:
                    messages = _flatten(json.load(fh) or {})

        self._cache[locale] = messages
        return messages


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested dict into dot-separated keys with string values."""
    items: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            items.update(_flatten(value, full_key))
        else:
            items[full_key] = str(value)
    return items
