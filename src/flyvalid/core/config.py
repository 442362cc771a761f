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
"""Configuration: packaged defaults, YAML/TOML files, env overrides, binding.

Keys are dot paths into nested mappings (``flyvalid.validation.flash_key``).
Lookup order, highest first:

1. ``FLYVALID_*`` environment variables (``FLYVALID_VALIDATION_FLASH_KEY``)
2. the config file and its profile overlays, or the dict given to ``Config``
3. ``flyvalid/resources/flyvalid-defaults.yaml``

String values may reference other keys or environment variables with
``${name}`` or ``${name:default}``.
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10
_PREFIX_ATTR = "__flyvalid_config_prefix__"
_DEFAULTS_SOURCE = "flyvalid-defaults.yaml (defaults)"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Bind a dataclass or pydantic model to the config section at *prefix*.

    ::

        @config_properties(prefix="flyvalid.validation")
        @dataclass
        class ValidationProperties:
            strict_targets: bool = True
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def _read_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            return tomllib.load(fh)
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _read_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("flyvalid.resources").joinpath("flyvalid-defaults.yaml")
    return yaml.safe_load(resource.read_text(encoding="utf-8")) or {}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        merged[key] = _merge(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return merged


def _env_name(key: str) -> str:
    return "FLYVALID_" + key.removeprefix("flyvalid.").upper().replace(".", "_").replace("-", "_")


def _coerce(value: Any, expected: Any) -> Any:
    if not isinstance(value, str):
        return value
    if expected is bool:
        return value.strip().lower() in ("true", "1", "yes", "on")
    if expected is int:
        return int(value)
    if expected is float:
        return float(value)
    return value


class Config:
    """Read-only view over merged configuration data."""

    def __init__(self, data: dict[str, Any] | None = None, sources: list[str] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._sources = list(sources or [])

    @classmethod
    def with_defaults(cls, data: dict[str, Any] | None = None) -> Config:
        """Packaged defaults overlaid with *data*; the usual way to build a test config."""
        return cls(_merge(_read_defaults(), data or {}), [_DEFAULTS_SOURCE])

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load *path*, then ``<stem>-<profile><suffix>`` for each active profile.

        A missing *path* is not an error; the result then holds only the
        defaults (or nothing, with ``load_defaults=False``).
        """
        path = Path(path)
        data = _read_defaults() if load_defaults else {}
        sources = [_DEFAULTS_SOURCE] if load_defaults else []

        candidates = [(path, str(path))]
        candidates += [
            (path.with_name(f"{path.stem}-{profile}{path.suffix}"), f"profile {profile}")
            for profile in active_profiles or []
        ]
        if path.is_file():
            for candidate, label in candidates:
                if candidate.is_file():
                    data = _merge(data, _read_file(candidate))
                    sources.append(label)
        return cls(data, sources)

    @property
    def loaded_sources(self) -> list[str]:
        return list(self._sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dot path *key*, or *default* when unset."""
        from_env = os.environ.get(_env_name(key))
        if from_env is not None:
            return from_env
        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._expand(value, 0)
        return value

    def _expand(self, value: str, depth: int) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply; check for a reference cycle")

        def replace(match: re.Match[str]) -> str:
            name, has_default, fallback = match.group(1).partition(":")
            if name in os.environ:
                return os.environ[name]
            found = self._lookup(name)
            if found is not None:
                text = str(found)
                return self._expand(text, depth + 1) if "${" in text else text
            if has_default:
                return fallback
            raise ValueError(f"Placeholder '${{{match.group(1)}}}' is not set in the environment or config")

        return _PLACEHOLDER.sub(replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` class from its section.

        Dataclass fields are read one by one through :meth:`get`, so env
        overrides and placeholders apply per field. Pydantic models validate
        the raw section.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        if issubclass(config_cls, BaseModel):
            try:
                return config_cls.model_validate(self.get_section(prefix))
            except ValidationError as exc:
                raise ValueError(f"Invalid '{prefix}' configuration for {config_cls.__name__}:\n{exc}") from exc

        hints = get_type_hints(config_cls)
        values: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is not None:
                values[field.name] = _coerce(value, hints.get(field.name))
        return config_cls(**values)
