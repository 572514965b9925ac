"""Configuration loading for Roster.

Settings come from an optional ``roster.yaml`` file and are then overridden by
``ROSTER_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "roster.yaml"

_ENV_PREFIX = "ROSTER_"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class RosterConfig:
    """Runtime settings for the API server."""

    database_url: str = "sqlite:///roster.db"
    host: str = "127.0.0.1"
    port: int = 8000
    log_dir: str = "logs"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RosterConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary, usually parsed from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If unknown keys are present or the port is not an integer.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        values = dict(data)
        if "port" in values:
            values["port"] = _parse_port(values["port"])
        return cls(**values)

    def with_env(self, environ: dict[str, str] | None = None) -> RosterConfig:
        """Return a copy with ROSTER_* environment variables applied."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for f in fields(self):
            raw = env.get(f"{_ENV_PREFIX}{f.name.upper()}")
            if raw is None:
                values[f.name] = getattr(self, f.name)
            elif f.name == "port":
                values[f.name] = _parse_port(raw)
            else:
                values[f.name] = raw
        return RosterConfig(**values)


def _parse_port(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"port must be an integer, got {value!r}") from e


def find_config(start: Path | None = None) -> Path | None:
    """Find roster.yaml in the given directory or any parent.

    Args:
        start: Directory to start searching from. Defaults to the working directory.

    Returns:
        Path to the config file, or None if there is none.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, environ: dict[str, str] | None = None) -> RosterConfig:
    """Load configuration from a YAML file and the environment.

    Args:
        path: Path to a YAML config file. When None, defaults are used.
        environ: Environment mapping to read overrides from (defaults to os.environ).

    Returns:
        The effective configuration.

    Raises:
        ConfigError: If the file cannot be read or holds invalid settings.
    """
    config = RosterConfig()
    if path is not None:
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        config = RosterConfig.from_dict(data)

    return config.with_env(environ)
