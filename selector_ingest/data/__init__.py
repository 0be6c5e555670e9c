"""Attribute catalog and format adapters for selector-ingest."""

from .catalog import Attribute, AttributeKind, Selector, NULL_SYMBOL
from .selectors import SelectorSet, prepare_selectors
from .adapters import (
    DataFormat,
    DataFormatAdapter,
    detect_data_format,
    get_adapter,
    register_adapter,
)
from .delimited import DelimitedTextAdapter
from .binary import BinaryMatrixAdapter

register_adapter(DataFormat.DELIMITED, DelimitedTextAdapter)
register_adapter(DataFormat.BINARY_MATRIX, BinaryMatrixAdapter)

__all__ = [
    "Attribute",
    "AttributeKind",
    "Selector",
    "NULL_SYMBOL",
    "SelectorSet",
    "prepare_selectors",
    "DataFormat",
    "DataFormatAdapter",
    "DelimitedTextAdapter",
    "BinaryMatrixAdapter",
    "detect_data_format",
    "get_adapter",
    "register_adapter",
]
