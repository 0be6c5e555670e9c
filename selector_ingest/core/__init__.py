"""Core functionality for selector-ingest."""

from .exceptions import (
    IngestError,
    FormatMismatchError,
    IOFailureError,
    EmptySourceError,
    MissingStructuralSectionError,
    ConfigurationError,
)

__all__ = [
    "IngestError",
    "FormatMismatchError",
    "IOFailureError",
    "EmptySourceError",
    "MissingStructuralSectionError",
    "ConfigurationError",
]
