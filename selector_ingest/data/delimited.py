"""
Delimited-text adapter.

All columns are treated as categories. Parsing is quote aware (delimiters
inside double quotes do not split, ``""`` escapes a quote) and every row is
aligned to the header width: short rows are padded with the null symbol,
long rows truncated. Malformed rows are repaired, never rejected.
"""

import math
from pathlib import Path
from typing import IO, List, Optional, Sequence

from ..core.exceptions import EmptySourceError
from ..utils.logging import get_logger
from .adapters import CatalogScan, DataFormat, DataFormatAdapter, open_source
from .catalog import Attribute, NULL_SYMBOL


logger = get_logger(__name__)

SAMPLE_ROWS = 3


def split_quoted(line: str, delimiter: str) -> List[str]:
    """
    Split ``line`` on ``delimiter``, ignoring delimiters inside double quotes.

    A doubled quote inside a quoted span yields one literal quote. An
    unterminated quote runs to the end of the line.
    """
    tokens = []
    current = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            tokens.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1

    tokens.append("".join(current))
    return tokens


def normalize_token(token: Optional[str]) -> str:
    """Trim a raw token and strip surrounding quotes; empty or 'NA' becomes the null symbol."""
    if token is None:
        return NULL_SYMBOL
    value = token.strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1].replace('""', '"').strip()
    if not value or value.upper() == "NA":
        return NULL_SYMBOL
    return value


def align(tokens: Sequence[str], width: int, fill: str) -> List[str]:
    """Right-pad with ``fill`` or truncate so exactly ``width`` tokens remain."""
    aligned = list(tokens[:width])
    if len(aligned) < width:
        aligned.extend([fill] * (width - len(aligned)))
    return aligned


def read_header(handle: IO[str]) -> Optional[str]:
    """Return the first non-blank line without its byte-order mark, or None if there is none."""
    for line in handle:
        if line.startswith("\ufeff"):
            line = line[1:]
        if line.strip():
            return line.rstrip("\r\n")
    return None


class DelimitedTextAdapter(DataFormatAdapter):
    """Adapter for header + rows files split on a single delimiter character."""

    data_format = DataFormat.DELIMITED

    @staticmethod
    def min_support_count(row_count: int, support_threshold: float) -> int:
        """ceil(rows * threshold), at least 1 when the threshold is positive."""
        if support_threshold > 0:
            return max(math.ceil(row_count * support_threshold), 1)
        return 0

    def tokenize(self, line: str, width: int) -> List[str]:
        """Split, align and normalize one data line."""
        tokens = align(split_quoted(line.rstrip("\r\n"), self.delimiter), width, NULL_SYMBOL)
        return [normalize_token(token) for token in tokens]

    def _scan(self, path: Path, target_attr_count: int, support_threshold: float) -> CatalogScan:
        with open_source(path, self.encoding) as handle:
            header = read_header(handle)
            if header is None:
                raise EmptySourceError(path=str(path))

            attributes = []
            for attr_id, name in enumerate(split_quoted(header, self.delimiter)):
                attributes.append(Attribute(attr_id, name.strip() or f"col{attr_id}"))
            width = len(attributes)

            rows = 0
            for line in handle:
                if not line.strip():
                    continue
                rows += 1
                if rows <= SAMPLE_ROWS:
                    logger.debug("Sample row", row=line.strip())

                for attr, value in zip(attributes, self.tokenize(line, width)):
                    if value != NULL_SYMBOL:
                        attr.observe(value)

        if target_attr_count > width:
            logger.warning(
                "Target attribute count exceeds header width, clamping",
                requested=target_attr_count,
                header_columns=width,
            )
        logger.info("Delimited scan complete", header_columns=width, data_lines=rows)

        return CatalogScan(
            attributes=attributes,
            row_count=rows,
            target_attr_count=min(target_attr_count, width),
            min_sup_count=self.min_support_count(rows, support_threshold),
        )

    def _skip_header(self, handle: IO[str], path: Path) -> int:
        header = read_header(handle)
        if header is None:
            raise EmptySourceError(path=str(path))
        return len(split_quoted(header, self.delimiter))

    def _parse_record(self, line: str, width: int) -> Optional[List[str]]:
        if not line.strip():
            return None
        return self.tokenize(line, width)
