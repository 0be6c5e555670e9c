"""
Sparse/dense binary matrix adapter.

Reads declaration-style files::

    @relation baskets
    @attribute bread numeric
    @attribute 'whole milk' numeric
    @data
    1,0
    {0 1, 1 1}
    {1:1}

Each attribute is a presence flag. Only the "1" selector is ever created;
zeros, garbage tokens and out-of-range sparse indices count as absence.
Rows may be dense (comma separated) or sparse (``{index value, ...}``
with either ``index value`` or ``index:value`` pairs); the streaming pass
always returns dense "0"/"1" records.
"""

import math
from enum import Enum
from pathlib import Path
from typing import Dict, IO, List, Optional

import numpy as np

from ..core.exceptions import MissingStructuralSectionError
from ..utils.logging import get_logger
from .adapters import CatalogScan, DataFormat, DataFormatAdapter, open_source
from .catalog import Attribute


logger = get_logger(__name__)

ONE = "1"
ZERO = "0"
DATA_MARKER = "@data"


class HeaderLine(str, Enum):
    """Kinds of line found before the data section."""
    RELATION = "relation"
    ATTRIBUTE = "attribute"
    COMMENT = "comment"
    DATA = "data"
    BLANK = "blank"
    UNKNOWN = "unknown"


def classify_header_line(line: str) -> HeaderLine:
    """Classify a header line by its leading structural marker (case-insensitive)."""
    s = line.lstrip("\ufeff").strip()
    if not s:
        return HeaderLine.BLANK
    if s.startswith("%"):
        return HeaderLine.COMMENT

    lowered = s.lower()
    if lowered.startswith("@relation"):
        return HeaderLine.RELATION
    if lowered.startswith("@attribute"):
        return HeaderLine.ATTRIBUTE
    if lowered.split(None, 1)[0] == DATA_MARKER:
        return HeaderLine.DATA
    return HeaderLine.UNKNOWN


def parse_attribute_name(rest: str) -> str:
    """
    Extract the attribute name from the text following '@attribute'.

    Accepts ``f0 numeric`` as well as quoted names such as ``'f 0' numeric``.
    Returns an empty string when no name is present.
    """
    rest = rest.strip()
    if not rest:
        return ""
    if rest[0] in ("'", '"'):
        end = rest.find(rest[0], 1)
        if end > 1:
            return rest[1:end]
    return rest.split()[0]


def parse_sparse_pairs(line: str) -> Dict[int, str]:
    """
    Parse ``{i v, j v}`` or ``{i:v, j:v}`` into an index -> value mapping.

    Segments without a numeric index are dropped; a repeated index keeps its
    last value. Indices are not range checked here.
    """
    inside = line.strip()
    if inside.startswith("{"):
        inside = inside[1:]
    if inside.endswith("}"):
        inside = inside[:-1]

    pairs = {}
    for segment in inside.split(","):
        parts = segment.replace(":", " ").split()
        if len(parts) < 2:
            continue
        try:
            index = int(parts[0])
        except ValueError:
            continue
        pairs[index] = parts[1]
    return pairs


def is_one(token: Optional[str]) -> bool:
    """True for '1', '1.0' and 'true' (any case)."""
    if token is None:
        return False
    token = token.strip()
    return token in ("1", "1.0") or token.lower() == "true"


class BinaryMatrixAdapter(DataFormatAdapter):
    """Adapter for presence/absence matrices with a declaration header."""

    data_format = DataFormat.BINARY_MATRIX
    default_delimiter = ","

    @staticmethod
    def min_support_count(row_count: int, support_threshold: float) -> int:
        """floor(rows * threshold), with no lower bound of one."""
        return int(math.floor(row_count * support_threshold))

    def one_indices(self, line: str, width: int) -> List[int]:
        """Attribute positions holding a one in a stripped data line."""
        if line.startswith("{"):
            return sorted(
                index for index, value in parse_sparse_pairs(line).items()
                if 0 <= index < width and is_one(value)
            )

        tokens = line.split(self.delimiter)[:width]
        return [index for index, token in enumerate(tokens) if is_one(token)]

    def _read_declarations(self, handle: IO[str], path: Path) -> List[str]:
        """Consume the header up to '@data' and return the declared attribute names."""
        names = []
        for line in handle:
            kind = classify_header_line(line)
            if kind is HeaderLine.ATTRIBUTE:
                declaration = line.lstrip("\ufeff").strip()
                name = parse_attribute_name(declaration[len("@attribute"):])
                names.append(name or f"attr{len(names)}")
            elif kind is HeaderLine.DATA:
                return names
        raise MissingStructuralSectionError(path=str(path), section=DATA_MARKER)

    def _scan(self, path: Path, target_attr_count: int, support_threshold: float) -> CatalogScan:
        if target_attr_count:
            logger.warning(
                "Binary matrices have no prediction target, ignoring target attribute count",
                requested=target_attr_count,
            )

        with open_source(path, self.encoding) as handle:
            names = self._read_declarations(handle, path)
            width = len(names)
            ones_freq = np.zeros(width, dtype=np.int64)

            rows = 0
            for line in handle:
                s = line.strip()
                if not s or s.startswith("%"):
                    continue
                rows += 1
                indices = self.one_indices(s, width)
                if indices:
                    ones_freq[indices] += 1

        attributes = []
        for attr_id, name in enumerate(names):
            attr = Attribute(attr_id, name)
            if ones_freq[attr_id] > 0:
                attr.observe(ONE, int(ones_freq[attr_id]))
            attributes.append(attr)

        logger.info(
            "Binary matrix scan complete",
            attributes=width,
            rows=rows,
            ones=int(ones_freq.sum()),
        )

        return CatalogScan(
            attributes=attributes,
            row_count=rows,
            target_attr_count=0,
            min_sup_count=self.min_support_count(rows, support_threshold),
        )

    def _skip_header(self, handle: IO[str], path: Path) -> int:
        return len(self._read_declarations(handle, path))

    def _parse_record(self, line: str, width: int) -> Optional[List[str]]:
        s = line.strip()
        if not s or s.startswith("%"):
            return None

        record = [ZERO] * width
        for index in self.one_indices(s, width):
            record[index] = ONE
        return record
