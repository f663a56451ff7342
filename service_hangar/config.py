"""Configuration for service hangar.

Configuration comes from an optional YAML file, overridden by
environment variables:

    discovery:
      verbose: true
      use_secondary: false
      resolver: entry_points      # entry_points | static | chained
      diagnostics: logging        # logging | events | both | none
      paths: []                   # extra import roots for the secondary context
    logging:
      level: INFO
      json_format: false
      file: null
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .domain.exceptions import ConfigurationError

RESOLVERS = ("entry_points", "static", "chained")
DIAGNOSTICS = ("logging", "events", "both", "none")

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class DiscoveryConfig:
    """Discovery settings.

    Attributes:
        verbose: Report failures to the diagnostics sink.
        use_secondary: Default for load_services() when the caller does not say.
        resolver: Registry resolver strategy.
        diagnostics: Diagnostics sink selection.
        paths: Extra import roots appended to sys.path for the default
            secondary context.
    """

    verbose: bool = True
    use_secondary: bool = False
    resolver: str = "entry_points"
    diagnostics: str = "logging"
    paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.resolver not in RESOLVERS:
            raise ConfigurationError(f"discovery.resolver must be one of {', '.join(RESOLVERS)}")
        if self.diagnostics not in DIAGNOSTICS:
            raise ConfigurationError(f"discovery.diagnostics must be one of {', '.join(DIAGNOSTICS)}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> DiscoveryConfig:
        """Create DiscoveryConfig from a dictionary.

        Raises:
            ConfigurationError: If configuration values are invalid.
        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("discovery section must be a mapping")

        paths = data.get("paths") or ()
        if isinstance(paths, str):
            paths = (paths,)
        elif not isinstance(paths, (list, tuple)):
            raise ConfigurationError("discovery.paths must be a path or a list of paths")

        return cls(
            verbose=bool(data.get("verbose", True)),
            use_secondary=bool(data.get("use_secondary", False)),
            resolver=data.get("resolver", "entry_points"),
            diagnostics=data.get("diagnostics", "logging"),
            paths=tuple(str(p) for p in paths),
        )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    json_format: bool = False
    file: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LoggingConfig:
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("logging section must be a mapping")
        return cls(
            level=str(data.get("level", "INFO")).upper(),
            json_format=bool(data.get("json_format", False)),
            file=data.get("file"),
        )


@dataclass(frozen=True)
class HangarConfig:
    """Complete service hangar configuration."""

    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> HangarConfig:
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration root must be a mapping")
        return cls(
            discovery=DiscoveryConfig.from_dict(data.get("discovery")),
            logging=LoggingConfig.from_dict(data.get("logging")),
        )


def load_config_from_file(config_path: str | Path) -> dict[str, Any]:
    """Load raw configuration from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Configuration dictionary (empty for an empty file).

    Raises:
        ConfigurationError: If the file is missing or not valid YAML.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping in {path}")
    return data


def load_config(config_path: str | Path | None = None, env: Mapping[str, str] | None = None) -> HangarConfig:
    """Load configuration from an optional file and apply environment overrides.

    Args:
        config_path: Optional YAML file.
        env: Optional environment mapping (defaults to os.environ).

    Returns:
        HangarConfig instance.
    """
    env = os.environ if env is None else env

    config = HangarConfig.from_dict(load_config_from_file(config_path) if config_path else None)

    discovery = config.discovery
    if "SERVICE_HANGAR_VERBOSE" in env:
        discovery = replace(discovery, verbose=_env_bool(env["SERVICE_HANGAR_VERBOSE"]))
    if "SERVICE_HANGAR_USE_SECONDARY" in env:
        discovery = replace(discovery, use_secondary=_env_bool(env["SERVICE_HANGAR_USE_SECONDARY"]))
    if "SERVICE_HANGAR_RESOLVER" in env:
        discovery = replace(discovery, resolver=env["SERVICE_HANGAR_RESOLVER"].strip().lower())

    logging_config = config.logging
    if "SERVICE_HANGAR_LOG_LEVEL" in env:
        logging_config = replace(logging_config, level=env["SERVICE_HANGAR_LOG_LEVEL"].strip().upper())
    if "SERVICE_HANGAR_JSON_LOGS" in env:
        logging_config = replace(logging_config, json_format=_env_bool(env["SERVICE_HANGAR_JSON_LOGS"]))

    return HangarConfig(discovery=discovery, logging=logging_config)
