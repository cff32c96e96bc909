"""Configuration management for fieldcheck using Pydantic models."""

import json
import logging
import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".fieldcheck.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class RuleConfig(BaseModel):
    """A single rule in the field's rule set."""
    kind: str
    priority: int = 0
    error_message: str = Field(alias="errorMessage")
    pattern: str | None = None

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v):
        from fieldcheck.validation.rules import RULE_TYPES

        if v not in RULE_TYPES:
            raise ValueError(f"kind must be one of {sorted(RULE_TYPES)}, got: {v}")
        return v

    @model_validator(mode="after")
    def validate_pattern(self):
        """Pattern rules need a compilable pattern; emptiness checks take none."""
        if self.kind == "pattern_match":
            if self.pattern is None:
                raise ValueError("pattern_match rules require a pattern")
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValueError(f"invalid pattern {self.pattern!r}: {e}") from e
        elif self.kind == "non_empty" and self.pattern is not None:
            raise ValueError("non_empty rules take no pattern")
        return self

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class OutputConfig(BaseModel):
    """Output configuration section."""
    valid_text: str = Field(alias="validText", default="valid")
    default_error: str = Field(alias="defaultError", default="Unknown error")

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class FieldcheckConfig(BaseModel):
    """Complete fieldcheck configuration model."""
    rules: list[RuleConfig] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> FieldcheckConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .fieldcheck.json

    Returns:
        FieldcheckConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid, or an explicit config_path
                    does not exist or cannot be read
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ValueError(f"Config file not found: {config_path}")

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Cannot read config file {config_path}: {e}") from e

        try:
            config = FieldcheckConfig(**config_data)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e

        logger.info(f"Loaded {len(config.rules)} rules from {config_path}")
        return config

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .fieldcheck.json by searching up the directory tree.

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


def create_default_config() -> FieldcheckConfig:
    """Create the zero-config default: no rules, so every value is valid."""
    return FieldcheckConfig()
