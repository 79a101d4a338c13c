# ============================================================================
# LogTree - Configuration Management
#
# Purpose: Load and manage configuration from YAML and env vars
# Inputs: YAML files, environment variables
# Outputs: Config model with all settings
# Dependencies: pyyaml, pydantic, pathlib
# Usage: config = Config.from_default() or Config.from_yaml("path.yaml")
#
# Changelog:
#   2026-09-02: Initial configuration system (record, registry, logging sections)
#   2026-09-14: Level/stream names validated through levels.parse_level and
#               sinks.parse_stream; YAML is merged over defaults so env
#               overrides work for keys absent from the file
# ============================================================================

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError, field_validator

from LogTree.errors import ConfigurationError
from LogTree.levels import Level, parse_level
from LogTree.sinks.stream import StreamKind, parse_stream
from LogTree.utils.time import TIMEFMT


class RecordConfig(BaseModel):
    """Record line rendering."""

    time_format: str = TIMEFMT
    module_width: int = Field(default=8, ge=0)  # Module names are cut to this many characters
    max_message_length: int = Field(default=255, ge=1)
    max_record_length: int = Field(default=255, ge=1)


class RegistryConfig(BaseModel):
    """Logger tree settings."""

    max_module_subfields: int = Field(default=32, ge=1)  # Lookups stop descending past this depth
    root_level: Union[str, int] = "WARNING"
    root_stream: Union[str, int] = "DEVNULL"

    @field_validator("root_level")
    @classmethod
    def _check_level(cls, value: Union[str, int]) -> str:
        try:
            return parse_level(value).name
        except ConfigurationError as e:
            raise ValueError(e.message) from e

    @field_validator("root_stream")
    @classmethod
    def _check_stream(cls, value: Union[str, int]) -> str:
        try:
            return parse_stream(value).name
        except ConfigurationError as e:
            raise ValueError(e.message) from e

    @property
    def root_level_value(self) -> Level:
        return parse_level(self.root_level)

    @property
    def root_stream_value(self) -> StreamKind:
        return parse_stream(self.root_stream)


class LoggingConfig(BaseModel):
    """Diagnostic channel (stdlib logging) configuration."""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Config(BaseModel):
    """Root configuration object."""

    record: RecordConfig = Field(default_factory=RecordConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """
        Load configuration from a YAML file with environment variable overrides.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML is invalid
            ConfigurationError: If values fail validation
        """
        yaml_path = Path(path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        return cls._build(data)

    @classmethod
    def from_default(cls) -> "Config":
        """
        Load configuration from default config file.

        Returns:
            Config instance
        """
        package_root = Path(__file__).parent.parent.parent
        default_config = package_root / "configs" / "default.yaml"

        if default_config.exists():
            return cls.from_yaml(str(default_config))
        else:
            return cls._build({})

    @classmethod
    def _build(cls, data: Dict[str, Any]) -> "Config":
        merged = cls._merge(cls().model_dump(), data)
        merged = cls._apply_env_overrides(merged)
        try:
            return cls(**merged)
        except ValidationError as e:
            raise ConfigurationError("Invalid LogTree configuration", details=str(e)) from e

    @classmethod
    def _merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge override into base (override wins)."""
        result = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = cls._merge(result[key], value)
            else:
                result[key] = value
        return result

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables follow the pattern:
        LOGTREE_<SECTION>_<KEY>=value

        Keys may contain underscores (e.g. max_module_subfields), so we match
        against actual keys in the config data rather than naively splitting
        the env var name on ``_``.

        Examples:
            LOGTREE_REGISTRY_ROOT_LEVEL=debug          → data["registry"]["root_level"]
            LOGTREE_RECORD_MAX_MESSAGE_LENGTH=120      → data["record"]["max_message_length"]

        Args:
            data: Configuration dictionary

        Returns:
            Updated configuration dictionary
        """
        prefix = "LOGTREE_"

        section_keys = sorted(data.keys(), key=len, reverse=True)

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            remainder = env_key[len(prefix) :].lower()

            for section in section_keys:
                section_prefix = section + "_"
                if not remainder.startswith(section_prefix):
                    continue

                rest = remainder[len(section_prefix) :]
                section_data = data.get(section)
                if not isinstance(section_data, dict):
                    break

                if rest in section_data:
                    section_data[rest] = cls._parse_env_value(env_value)
                break

        return data

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """
        Parse environment variable value to appropriate type.

        Args:
            value: String value from environment

        Returns:
            Parsed value (str, int, float, or bool)
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value


def load_config(path: Optional[str] = None) -> Config:
    """Load from an explicit YAML path, or the packaged default."""
    if path is not None:
        return Config.from_yaml(path)
    return Config.from_default()
