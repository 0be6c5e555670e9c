"""
Configuration management system for selector-ingest.

Provides a hierarchical configuration system with support for file-based
configuration, environment variables, and runtime updates.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DataConfig(BaseModel):
    """Ingestion defaults shared by all adapters."""
    model_config = ConfigDict(validate_assignment=True)

    delimiter: str = ","
    encoding: str = "utf-8"
    support_threshold: float = 0.0
    target_attr_count: int = 0

    @field_validator('delimiter')
    @classmethod
    def validate_delimiter(cls, v):
        if len(v) != 1:
            raise ValueError("delimiter must be a single character")
        return v

    @field_validator('support_threshold')
    @classmethod
    def validate_support_threshold(cls, v):
        if not 0.0 <= v <= 1.0:
            raise ValueError("support_threshold must lie in [0, 1]")
        return v

    @field_validator('target_attr_count')
    @classmethod
    def validate_target_attr_count(cls, v):
        if v < 0:
            raise ValueError("target_attr_count must be non-negative")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    model_config = ConfigDict(validate_assignment=True, use_enum_values=True)

    level: LogLevel = LogLevel.INFO
    file_logging: bool = False
    log_file: Optional[Path] = None
    console_logging: bool = True
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class IngestConfig(BaseModel):
    """Main configuration class for selector-ingest."""
    model_config = ConfigDict(validate_assignment=True, use_enum_values=True)

    data: DataConfig = Field(default_factory=DataConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, config_file: Optional[Union[str, Path]] = None, **kwargs):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML configuration file
            **kwargs: Override specific configuration sections
        """
        config_data: Dict[str, Any] = {}
        if config_file:
            config_data = _load_config_file(config_file)

        _merge(config_data, _load_environment_variables())
        _merge(config_data, kwargs)

        super().__init__(**config_data)

    def save_config(self, config_file: Union[str, Path]) -> None:
        """Save current configuration to YAML file."""
        config_path = Path(config_file)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w') as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False, indent=2)

    def update(self, **kwargs) -> None:
        """Update configuration values, accepting 'section.key' for nested settings."""
        for key, value in kwargs.items():
            if '.' in key:
                section, subkey = key.split('.', 1)
                section_obj = getattr(self, section, None)
                if section_obj is not None and hasattr(section_obj, subkey):
                    setattr(section_obj, subkey, value)
            elif hasattr(self, key):
                setattr(self, key, value)

    @staticmethod
    def get_user_config_path() -> Path:
        """Get the user's configuration file path."""
        return Path.home() / ".selector_ingest" / "config.yaml"

    def load_user_config(self) -> None:
        """Load user's configuration file if it exists."""
        user_config = self.get_user_config_path()
        if user_config.exists():
            for section, values in _load_config_file(user_config).items():
                if isinstance(values, dict):
                    self.update(**{f"{section}.{k}": v for k, v in values.items()})


def _load_config_file(config_file: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    config_path = Path(config_file)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def _load_environment_variables() -> Dict[str, Any]:
    """Load configuration from environment variables."""
    config: Dict[str, Any] = {}

    env_mappings = {
        'SELECTOR_INGEST_LOG_LEVEL': ('logging', 'level'),
        'SELECTOR_INGEST_DELIMITER': ('data', 'delimiter'),
        'SELECTOR_INGEST_ENCODING': ('data', 'encoding'),
        'SELECTOR_INGEST_SUPPORT_THRESHOLD': ('data', 'support_threshold'),
        'SELECTOR_INGEST_TARGET_ATTR_COUNT': ('data', 'target_attr_count'),
    }

    for env_var, (section, key) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            if key == 'support_threshold':
                value = float(value)
            elif key == 'target_attr_count':
                value = int(value)
            elif key == 'level':
                value = value.upper()
            config.setdefault(section, {})[key] = value

    return config


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key].update(value)
        else:
            base[key] = value


# Default configuration instance
_default_config: Optional[IngestConfig] = None

def get_default_config() -> IngestConfig:
    """Get the default configuration instance."""
    global _default_config
    if _default_config is None:
        _default_config = IngestConfig()
        _default_config.load_user_config()
    return _default_config


def reset_default_config() -> None:
    """Drop the cached default configuration so it is rebuilt on next access."""
    global _default_config
    _default_config = None
