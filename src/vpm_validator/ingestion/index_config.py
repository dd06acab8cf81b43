"""Configuration loader for index sources.

Reads the list of VPM indices to build the version catalog from a settings
file (default: settings.json). JSON is the default format; files ending in
``.yaml`` or ``.yml`` are read with PyYAML. Each entry must have an ``id`` and
``url`` (an http(s) URL or a filesystem path); optional fields are
``enabled`` (default True), ``description`` and ``token_env`` (name of the
environment variable holding a bearer token for the index).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .index_feed import DEFAULT_INDEX_URL

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "settings.json"
CONFIG_PATH_ENV_VAR = "VPM_VALIDATOR_SETTINGS"

_YAML_SUFFIXES = {".yaml", ".yml"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class IndexSourceConfig:
    """Configuration for a single index source."""

    id: str
    url: str
    enabled: bool
    description: str
    token_env: str

    @property
    def token(self) -> str | None:
        """Return the bearer token from the environment, if configured."""
        if not self.token_env:
            return None
        return os.environ.get(self.token_env) or None

    @classmethod
    def from_dict(cls, data: dict[str, Any], index: int) -> IndexSourceConfig:
        """Create an IndexSourceConfig from a dictionary, validating fields."""
        source_id = data.get("id")
        if not source_id or not isinstance(source_id, str):
            raise ConfigError(f"Index at position {index} is missing required 'id' field")

        url = data.get("url")
        if not url or not isinstance(url, str):
            raise ConfigError(f"Index '{source_id}' is missing required 'url' field")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ConfigError(f"Index '{source_id}' has invalid 'enabled' field (must be boolean)")

        description = data.get("description", "")
        if not isinstance(description, str):
            raise ConfigError(
                f"Index '{source_id}' has invalid 'description' field (must be string)"
            )

        token_env = data.get("token_env", "")
        if not isinstance(token_env, str):
            raise ConfigError(f"Index '{source_id}' has invalid 'token_env' field (must be string)")

        return cls(
            id=source_id,
            url=url,
            enabled=enabled,
            description=description,
            token_env=token_env,
        )


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    indices: list[IndexSourceConfig]

    def get_enabled_indices(self) -> list[IndexSourceConfig]:
        """Return only the index sources that are enabled."""
        return [source for source in self.indices if source.enabled]


def default_settings() -> Settings:
    """Settings used when no configuration file exists: the public index only."""
    return Settings(
        indices=[
            IndexSourceConfig(
                id="vpmm",
                url=DEFAULT_INDEX_URL,
                enabled=True,
                description="Public VPM index",
                token_env="",
            )
        ]
    )


def _resolve_config_path(path: Path | str | None = None) -> Path:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. VPM_VALIDATOR_SETTINGS environment variable
    3. Default path (settings.json in repo root)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return DEFAULT_CONFIG_PATH


def _decode(config_path: Path, content: str) -> Any:
    if config_path.suffix.lower() in _YAML_SUFFIXES:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON or YAML file.

    Args:
        path: Optional path to the config file. If not provided, uses the
            VPM_VALIDATOR_SETTINGS env var or falls back to settings.json.

    Returns:
        A Settings object containing validated index sources.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    data = _decode(config_path, content)

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    indices_data = data.get("indices")
    if indices_data is None:
        raise ConfigError("Configuration is missing required 'indices' array")

    if not isinstance(indices_data, list):
        raise ConfigError("'indices' must be an array")

    if not indices_data:
        raise ConfigError("'indices' array must contain at least one entry")

    indices: list[IndexSourceConfig] = []
    seen_ids: set[str] = set()

    for index, source_data in enumerate(indices_data):
        if not isinstance(source_data, dict):
            raise ConfigError(f"Index at position {index} must be an object")

        source = IndexSourceConfig.from_dict(source_data, index)

        if source.id in seen_ids:
            raise ConfigError(f"Duplicate index ID: '{source.id}'")
        seen_ids.add(source.id)

        indices.append(source)

    return Settings(indices=indices)


def load_settings_or_default(path: Path | str | None = None) -> Settings:
    """Like load_settings, but fall back to default_settings() when nothing is configured.

    An explicitly requested file (argument or environment variable) must exist.
    """
    config_path = _resolve_config_path(path)
    if config_path == DEFAULT_CONFIG_PATH and not config_path.exists():
        return default_settings()
    return load_settings(config_path)
