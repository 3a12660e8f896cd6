"""Configuration management for eventscan using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".eventscan.json"


class TypeTag(str, Enum):
    """Type tags used by field type rules."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


class NamingConvention(str, Enum):
    """Known key naming conventions. Only snake_case has a checker so far."""
    SNAKE_CASE = "snake_case"
    CAMEL_CASE = "camelCase"
    MIXED = "mixed"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"


_LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.TRACE: logging.DEBUG,
}


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(frozen=True)

    @property
    def numeric_level(self) -> int:
        return _LOG_LEVELS[self.level]


class ScannerConfig(BaseModel):
    """Complete rule set for scanning events.

    The model is frozen so one instance can be shared by any number of scans.
    Field names accept both the camelCase keys used in config files and their
    snake_case attribute names.
    """
    required_fields: tuple[str, ...] = Field(alias="requiredFields", default=())
    field_types: dict[str, TypeTag] = Field(alias="fieldTypes", default_factory=dict)
    naming_convention: str = Field(
        alias="namingConvention", default=NamingConvention.SNAKE_CASE.value
    )
    domain_rules: dict[str, tuple[Any, ...]] = Field(alias="domainRules", default_factory=dict)
    timestamp_fields: tuple[str, ...] = Field(alias="timestampFields", default=("timestamp",))
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    @field_validator("naming_convention", mode="before")
    @classmethod
    def validate_naming_convention(cls, v):
        # Unknown conventions are allowed and simply produce no naming issues
        if isinstance(v, Enum):
            return v.value
        return v

    @field_validator("domain_rules")
    @classmethod
    def validate_domain_rules(cls, v):
        for field_name, allowed in v.items():
            if not allowed:
                raise ValueError(f"domain rule for '{field_name}' must list at least one value")
        return v

    def to_dict(self) -> dict[str, Any]:
        """Dump using the camelCase keys of the config file format."""
        return self.model_dump(mode="json", by_alias=True)


def load_config(config_path: str | Path | None = None) -> ScannerConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .eventscan.json

    Returns:
        ScannerConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If config file specified but not found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return create_default_config()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError, RecursionError) as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object")

    try:
        return ScannerConfig(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .eventscan.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> ScannerConfig:
    """Create the default rule set for user activity events."""
    return ScannerConfig(
        required_fields=("event_name", "user_id", "timestamp", "environment"),
        field_types={
            "event_name": TypeTag.STRING,
            "user_id": TypeTag.NUMBER,
            "timestamp": TypeTag.STRING,
            "environment": TypeTag.STRING,
            "source": TypeTag.STRING,
            "action_type": TypeTag.STRING,
        },
        naming_convention=NamingConvention.SNAKE_CASE,
        domain_rules={
            "environment": ("prod", "staging", "dev"),
            "action_type": ("LOGIN", "LOGOUT", "PURCHASE", "VIEW"),
        },
    )
