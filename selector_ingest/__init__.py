"""
selector-ingest: dataset ingestion for frequent-pattern mining

Reads delimited text tables and sparse/dense binary matrices, builds an
attribute catalog with selector frequencies, and streams fixed-width
normalized records for a downstream mining engine.
"""

__version__ = "0.3.0"

# Configuration
from .config.settings import IngestConfig, get_default_config

# Catalog and adapters
from .data import (
    Attribute,
    AttributeKind,
    Selector,
    SelectorSet,
    NULL_SYMBOL,
    prepare_selectors,
    DataFormat,
    DataFormatAdapter,
    DelimitedTextAdapter,
    BinaryMatrixAdapter,
    detect_data_format,
    get_adapter,
    register_adapter,
)

# High-level API and export
from .core.api import load_catalog, stream_records, stream_transactions
from .core.export import CatalogExporter, export_catalog

# Exceptions
from .core.exceptions import (
    IngestError,
    FormatMismatchError,
    IOFailureError,
    EmptySourceError,
    MissingStructuralSectionError,
    ConfigurationError,
)

__all__ = [
    "__version__",

    # Configuration
    "IngestConfig",
    "get_config",
    "configure",

    # Catalog
    "Attribute",
    "AttributeKind",
    "Selector",
    "SelectorSet",
    "NULL_SYMBOL",
    "prepare_selectors",

    # Adapters
    "DataFormat",
    "DataFormatAdapter",
    "DelimitedTextAdapter",
    "BinaryMatrixAdapter",
    "detect_data_format",
    "get_adapter",
    "register_adapter",

    # API
    "load_catalog",
    "stream_records",
    "stream_transactions",
    "CatalogExporter",
    "export_catalog",

    # Exceptions
    "IngestError",
    "FormatMismatchError",
    "IOFailureError",
    "EmptySourceError",
    "MissingStructuralSectionError",
    "ConfigurationError",
]


def get_config() -> IngestConfig:
    """Get the global configuration instance."""
    return get_default_config()


def configure(**kwargs) -> None:
    """Update global configuration, e.g. ``configure(**{"data.delimiter": ";"})``."""
    get_default_config().update(**kwargs)
