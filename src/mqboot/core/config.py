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
"""Type-safe configuration with YAML/TOML files, env vars, and Pydantic binding."""

from __future__ import annotations

import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml  # type: ignore[import-untyped]
from pydantic import AliasChoices, BaseModel, ValidationError

from mqboot.kernel.exceptions import ConfigurationException

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_RE = re.compile(r"([a-z\d])([A-Z])")

_CONFIG_PROPERTIES_ATTR = "__mqboot_config_prefix__"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a Pydantic model as bindable to a configuration prefix.

    Config.bind() validates the section under *prefix* with
    model_validate(), giving type coercion, nested model support and
    fail-fast validation at startup.

    Usage:
        @config_properties(prefix="ibm.mq")
        class MQConfigurationProperties(BaseModel):
            queue_manager: str = "QM1"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def to_snake_case(key: str) -> str:
    """Normalise a kebab-case, camelCase or snake_case key to snake_case.

    ``queue-manager``, ``queueManager`` and ``queue_manager`` all become
    ``queue_manager``; acronyms are kept together, so ``useIBMCipherMappings``
    becomes ``use_ibm_cipher_mappings``.
    """
    key = _ACRONYM_RE.sub(r"\1_\2", key)
    key = _CAMEL_RE.sub(r"\1_\2", key)
    return key.replace("-", "_").lower()


def env_key(key: str) -> str:
    """Map a dotted config key to its environment variable name.

    ``ibm.mq.queue-manager`` -> ``IBM_MQ_QUEUE_MANAGER``.
    """
    return key.upper().replace(".", "_").replace("-", "_")


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (IBM_MQ_QUEUE_MANAGER format)
    2. Configuration dict / YAML / TOML file values
    3. Model defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Config sources that were merged, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Merge the mqboot config files found under *base_dir*.

        Merge order (later wins):
        1. Library defaults (mqboot-defaults.yaml from package)
        2. config/mqboot.{yaml,toml}, then mqboot.{yaml,toml}
        3. For each profile in order: config/mqboot-{profile}.*, then mqboot-{profile}.*
        4. Environment variables (applied at read time by get() and bind())

        Raises:
            ConfigurationException: A file exists but is not valid YAML/TOML.
        """
        data = cls._load_library_defaults() if load_defaults else {}
        sources = ["mqboot-defaults.yaml (library defaults)"] if load_defaults else []

        for path, label in _candidate_files(Path(base_dir), active_profiles or []):
            data = cls._deep_merge(data, cls._load_config_data(path))
            sources.append(label)

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Parse one YAML or TOML file, reporting syntax errors as configuration errors."""
        try:
            if path.suffix == ".toml":
                with open(path, "rb") as f:
                    return tomllib.load(f) or {}
            with open(path) as f:
                loaded = yaml.safe_load(f)
        except (yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationException(
                f"Cannot parse config file '{path}': {exc}",
                code="MQCFG_SOURCE",
                context={"path": str(path)},
            ) from exc
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigurationException(
                f"Config file '{path}' must hold a mapping at the top level",
                code="MQCFG_SOURCE",
                context={"path": str(path)},
            )
        return loaded

    @staticmethod
    def _load_library_defaults() -> dict[str, Any]:
        defaults_file = importlib.resources.files("mqboot.resources").joinpath("mqboot-defaults.yaml")
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _lookup(self, key: str) -> Any:
        """Walk the nested data by dotted key; None when any segment is missing."""
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        String values containing ``${...}`` placeholders are resolved:
        - ``${ENV_VAR}`` from environment variables
        - ``${ibm.mq.key}`` from other config values
        - ``${key:default}`` falls back to *default* when neither exists
        """
        env_val = os.environ.get(env_key(key))
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        if _depth > _MAX_PLACEHOLDER_DEPTH:
            raise ConfigurationException(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references.",
                code="MQCFG_PLACEHOLDER",
            )
        return _PLACEHOLDER_RE.sub(lambda m: self._resolve_one(m.group(1), _depth), value)

    def _resolve_one(self, inner: str, depth: int) -> str:
        ref_key, _, fallback = inner.partition(":")

        env_val = os.environ.get(ref_key)
        if env_val is not None:
            return env_val

        referenced = self._lookup(ref_key)
        if referenced is not None:
            return self._resolve_placeholders(str(referenced), depth + 1)

        if ":" in inner:
            return fallback

        raise ConfigurationException(
            f"Cannot resolve placeholder '${{{inner}}}': not found in environment or config",
            code="MQCFG_PLACEHOLDER",
            context={"placeholder": inner},
        )

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a nested dict."""
        current: Any = self._data
        for part in prefix.split("."):
            if isinstance(current, dict):
                current = current.get(part, {})
            else:
                return {}
        return current if isinstance(current, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties Pydantic model.

        Keys under the prefix are matched leniently (kebab-case, camelCase and
        snake_case, plus any field aliases), environment variables override
        file values per field, and placeholders are resolved before
        validation.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ConfigurationException(
                f"{config_cls.__name__} is not decorated with @config_properties",
                code="MQCFG_NOT_BINDABLE",
            )
        if not (isinstance(config_cls, type) and issubclass(config_cls, BaseModel)):
            raise ConfigurationException(
                f"{config_cls.__name__} must be a Pydantic BaseModel to be bound",
                code="MQCFG_NOT_BINDABLE",
            )

        section = _canonicalize(self.get_section(prefix), config_cls)
        section = self._deep_merge(section, _env_overrides(prefix, config_cls))
        section = self._resolve_section(section)

        try:
            return cast(T, config_cls.model_validate(section))
        except ValidationError as exc:
            raise ConfigurationException(
                f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}",
                code="MQCFG_VALIDATION",
                context={"prefix": prefix, "errors": exc.errors(include_url=False)},
            ) from exc

    def _resolve_section(self, section: dict[str, Any]) -> dict[str, Any]:
        resolved: dict[str, Any] = {}
        for key, value in section.items():
            if isinstance(value, dict):
                resolved[key] = self._resolve_section(value)
            elif isinstance(value, str) and "${" in value:
                resolved[key] = self._resolve_placeholders(value)
            else:
                resolved[key] = value
        return resolved


def _field_names(field_name: str, field: Any) -> list[str]:
    """Return the field name followed by its snake_case validation aliases."""
    names = [field_name]
    alias = field.validation_alias
    if isinstance(alias, AliasChoices):
        names.extend(to_snake_case(c) for c in alias.choices if isinstance(c, str))
    elif isinstance(alias, str):
        names.append(to_snake_case(alias))
    return list(dict.fromkeys(names))


def _nested_model(field: Any) -> type[BaseModel] | None:
    annotation = field.annotation
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def _canonicalize(section: dict[str, Any], model_cls: type[BaseModel]) -> dict[str, Any]:
    """Normalise source keys and fold aliases onto field names, recursively.

    When a field appears under several accepted names, the field's own name
    wins, then aliases in declaration order. Unknown keys are kept as-is.
    """
    normalized = {to_snake_case(str(k)): v for k, v in section.items()}
    result: dict[str, Any] = {}
    claimed: set[str] = set()

    for name, field in model_cls.model_fields.items():
        for candidate in _field_names(name, field):
            if candidate in normalized:
                value = normalized[candidate]
                nested = _nested_model(field)
                if nested is not None and isinstance(value, dict):
                    value = _canonicalize(value, nested)
                result[name] = value
                break
        claimed.update(_field_names(name, field))

    for key, value in normalized.items():
        if key not in claimed:
            result[key] = value
    return result


def _env_overrides(prefix: str, model_cls: type[BaseModel]) -> dict[str, Any]:
    """Collect environment variable overrides for every field of *model_cls*.

    Both the underscore form (``IBM_MQ_QUEUE_MANAGER``) and the squashed
    form (``IBM_MQ_QUEUEMANAGER``) are recognised for each accepted name.
    """
    overrides: dict[str, Any] = {}
    base = env_key(prefix)
    for name, field in model_cls.model_fields.items():
        nested = _nested_model(field)
        if nested is not None:
            nested_overrides = _env_overrides(f"{prefix}.{name}", nested)
            if nested_overrides:
                overrides[name] = nested_overrides
            continue
        for candidate in _field_names(name, field):
            keys = (f"{base}_{candidate.upper()}", f"{base}_{candidate.replace('_', '').upper()}")
            value = next((os.environ[k] for k in keys if k in os.environ), None)
            if value is not None:
                overrides[name] = value
                break
    return overrides


def _candidate_files(base_dir: Path, profiles: list[str]) -> Iterator[tuple[Path, str]]:
    """Yield existing config files in merge order, with a label for each."""
    stems = [("mqboot", "")] + [(f"mqboot-{p}", f" (profile: {p})") for p in profiles]
    for stem, suffix in stems:
        for search_dir in (base_dir / "config", base_dir):
            for ext in (".yaml", ".toml"):
                path = search_dir / f"{stem}{ext}"
                if path.is_file():
                    yield path, f"{path}{suffix}"
