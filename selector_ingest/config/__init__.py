"""Configuration management for selector-ingest."""

from .settings import (
    IngestConfig,
    DataConfig,
    LoggingConfig,
    LogLevel,
    get_default_config,
    reset_default_config,
)

__all__ = [
    "IngestConfig",
    "DataConfig",
    "LoggingConfig",
    "LogLevel",
    "get_default_config",
    "reset_default_config",
]
