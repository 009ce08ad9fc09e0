"""YAML settings source with per-environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


CONFIG_DIR_ENV_VAR = "MICROBLOG_CONFIG_DIR"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Nested mappings are merged key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml_dir(directory: Path) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    if not directory.is_dir():
        return merged
    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            merged = deep_merge(merged, yaml.safe_load(f) or {})
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load ``config/base/*.yaml`` then ``config/environments/{APP_ENV}/*.yaml``.

    Files inside each directory are merged in name order. The config directory
    defaults to ``<project root>/config`` and can be moved with the
    ``MICROBLOG_CONFIG_DIR`` environment variable.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        self._config_dir = self._find_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        self._yaml_data = deep_merge(
            _read_yaml_dir(self._config_dir / "base"),
            _read_yaml_dir(self._config_dir / "environments" / self._app_env),
        )

    @staticmethod
    def _find_config_dir() -> Path:
        override = os.getenv(CONFIG_DIR_ENV_VAR)
        if override:
            return Path(override)
        # src/microblog/core/config/yaml_source.py -> project root
        return Path(__file__).resolve().parents[4] / "config"

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Return the YAML value for a single top-level field."""
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        """Return all merged YAML configuration data."""
        return self._yaml_data
