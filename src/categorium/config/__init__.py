"""Configuration management for Categorium.

Settings live in one YAML file. Only the keys a user changed need to be in
it; everything else falls back to :class:`CategoriumConfig` defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import CategoriumConfig
from .resolver import (
    ENV_PREFIX,
    assign_nested,
    collect_env_overrides,
    parse_value,
    resolve_with_precedence,
)

DEFAULT_CONFIG_PATH = Path("~/.categorium/config.yaml")
_CONFIG_HEADER = (
    "# Categorium configuration.\n"
    "# Edit with `categorium config edit` or `categorium config set KEY --value VALUE`.\n"
)


class ConfigManager:
    """Read, validate, and write the Categorium configuration file."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = env if env is not None else os.environ

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
        env_overrides: Mapping[str, str] | None = None,
    ) -> CategoriumConfig:
        """Return the effective configuration.

        Args:
            cli_overrides: Values from command-line flags; dotted keys allowed.
            include_env: Whether ``CATEGORIUM__*`` variables are applied.
            env_overrides: Environment to read instead of the manager's own.

        Raises:
            ConfigError: If the file or any override is invalid.
        """
        self.ensure_exists()
        env = None
        if include_env:
            env = collect_env_overrides(env_overrides if env_overrides is not None else self._env)
        return resolve_with_precedence(
            defaults=CategoriumConfig(),
            file_overrides=self._read_file(),
            env_overrides=env,
            cli_overrides=cli_overrides,
        )

    def set_value(self, key: str, raw_value: str) -> str:
        """Validate and persist one setting given as a dotted ``key``.

        Args:
            key: Dotted setting path such as ``auto.dedupe``.
            raw_value: Value text, parsed like an environment override.

        Returns:
            str: The normalized dotted key that was written.

        Raises:
            ConfigError: If the key is empty, the value cannot be parsed, or the
                resulting configuration is invalid. The file is left unchanged.
        """
        path = [segment.strip() for segment in key.split(".") if segment.strip()]
        if not path:
            raise ConfigError("KEY must specify a dotted path such as 'auto.dedupe'.")

        data = self._read_file()
        assign_nested(data, path, parse_value(raw_value, path))
        resolve_with_precedence(defaults=CategoriumConfig(), file_overrides=data)
        self.save(data)
        return ".".join(path)

    def replace_text(self, text: str) -> None:
        """Validate YAML ``text`` and make it the new configuration file.

        Raises:
            ConfigError: If the text is not a valid configuration mapping.
        """
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError("Configuration file must contain a top-level mapping.")
        resolve_with_precedence(defaults=CategoriumConfig(), file_overrides=data)
        self.save(data)

    def save(self, config: CategoriumConfig | Mapping[str, Any]) -> None:
        """Write ``config`` to disk."""
        if isinstance(config, CategoriumConfig):
            data = config.model_dump(mode="json")
        else:
            data = dict(config)
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        body = yaml.safe_dump(data, sort_keys=False)
        self._config_path.write_text(_CONFIG_HEADER + body, encoding="utf-8")

    def ensure_exists(self) -> Path:
        """Write the default configuration if no file exists yet."""
        if not self._config_path.exists():
            self.save(CategoriumConfig())
        return self._config_path

    def read_text(self) -> str:
        """Return the configuration file contents, or an empty string."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")

    def _read_file(self) -> dict[str, Any]:
        try:
            data = yaml.safe_load(self.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")
        return data


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "CategoriumConfig",
    "ConfigError",
    "resolve_with_precedence",
]
