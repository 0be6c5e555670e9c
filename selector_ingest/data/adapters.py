"""
Data format adapters for selector-ingest.

Every adapter exposes the same two-pass contract:

* ``compute_statistics`` reads the whole source once, builds the attribute
  catalog with selector frequencies and derives the minimum support count;
* ``bind`` / ``next_record`` re-read the source from the start and yield one
  fixed-width, normalized token list per data row.

Format specific parsing lives entirely in the concrete adapters.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, IO, Iterator, List, Optional, Union

from ..config.settings import IngestConfig, get_default_config
from ..core.exceptions import ConfigurationError, FormatMismatchError, IOFailureError
from ..utils.logging import get_logger
from .catalog import Attribute
from .selectors import SelectorSet, prepare_selectors


logger = get_logger(__name__)

PathLike = Union[str, Path]


class DataFormat(str, Enum):
    """Supported source formats."""
    DELIMITED = "delimited"
    BINARY_MATRIX = "binary_matrix"
    UNKNOWN = "unknown"


_EXTENSION_FORMATS = {
    ".csv": DataFormat.DELIMITED,
    ".tsv": DataFormat.DELIMITED,
    ".txt": DataFormat.DELIMITED,
    ".arff": DataFormat.BINARY_MATRIX,
}

# Delimiters implied by the file name; an explicit delimiter option wins
_EXTENSION_DELIMITERS = {
    ".tsv": "\t",
}


def detect_data_format(path: PathLike) -> DataFormat:
    """Detect the source format from the file extension."""
    return _EXTENSION_FORMATS.get(Path(path).suffix.lower(), DataFormat.UNKNOWN)


@contextmanager
def open_source(path: PathLike, encoding: str) -> Iterator[IO[str]]:
    """Open a source for one full scan, reporting read errors as IOFailureError."""
    try:
        with open(path, "r", encoding=encoding) as handle:
            yield handle
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailureError(path=str(path), reason=e) from e


@dataclass
class CatalogScan:
    """Outcome of one statistics scan, committed to the adapter only on success."""
    attributes: List[Attribute] = field(default_factory=list)
    row_count: int = 0
    target_attr_count: int = 0
    min_sup_count: int = 0


class DataFormatAdapter(ABC):
    """
    Abstract base class for format adapters.

    Subclasses declare ``data_format`` and implement the scan, header skipping
    and single-line record parsing for their format. The base class owns the
    stream handle and the derived counters.
    """

    data_format: DataFormat = DataFormat.UNKNOWN
    # Fixed separator of the format; None means the configured text delimiter
    default_delimiter: Optional[str] = None

    def __init__(
        self,
        delimiter: Optional[str] = None,
        encoding: Optional[str] = None,
        config: Optional[IngestConfig] = None,
    ):
        config = config or get_default_config()
        if delimiter is None:
            delimiter = self.default_delimiter or config.data.delimiter
        self.delimiter = delimiter
        self.encoding = encoding or config.data.encoding
        if len(self.delimiter) != 1:
            raise ConfigurationError(config_key="delimiter", value=self.delimiter)

        self.attributes: List[Attribute] = []
        self.attr_count = 0
        self.target_attr_count = 0
        self.predict_attr_count = 0
        self.row_count = 0
        self.min_sup_count = 0
        self.selectors: Optional[SelectorSet] = None
        self.source: Optional[Path] = None

        self._input: Optional[IO[str]] = None
        self._input_path: Optional[Path] = None
        self._width = 0

    # ------------------------------------------------------------------
    # format hooks

    @abstractmethod
    def _scan(self, path: Path, target_attr_count: int, support_threshold: float) -> CatalogScan:
        """Read the whole source once and return the populated catalog."""

    @abstractmethod
    def _skip_header(self, handle: IO[str], path: Path) -> int:
        """Consume structural header content; return the header's attribute count."""

    @abstractmethod
    def _parse_record(self, line: str, width: int) -> Optional[List[str]]:
        """Turn one data line into a record of ``width`` tokens, or None to skip the line."""

    # ------------------------------------------------------------------
    # statistics pass

    def compute_statistics(
        self,
        path: PathLike,
        target_attr_count: int = 0,
        support_threshold: float = 0.0,
    ) -> SelectorSet:
        """
        Scan the source once and populate the attribute catalog.

        Args:
            path: Source file
            target_attr_count: Number of trailing attributes used as prediction targets
            support_threshold: Relative minimum support in [0, 1]

        Returns:
            The prepared selector set, also kept on ``self.selectors``

        Raises:
            FormatMismatchError: If the file is not in this adapter's format
            EmptySourceError / MissingStructuralSectionError: If the header or
                data section is missing
            IOFailureError: If the file cannot be read
        """
        path = self._check_format(path)
        if target_attr_count < 0:
            raise ConfigurationError(config_key="target_attr_count", value=target_attr_count)
        if not 0.0 <= support_threshold <= 1.0:
            raise ConfigurationError(config_key="support_threshold", value=support_threshold)

        logger.info(f"Computing statistics with {self.__class__.__name__}", path=path)
        scan = self._scan(path, target_attr_count, support_threshold)

        self.attributes = scan.attributes
        self.attr_count = len(scan.attributes)
        self.target_attr_count = scan.target_attr_count
        self.predict_attr_count = self.attr_count - scan.target_attr_count
        self.row_count = scan.row_count
        self.min_sup_count = scan.min_sup_count
        self.source = path

        self.selectors = prepare_selectors(
            self.attributes, self.min_sup_count, self.predict_attr_count
        )

        logger.info(
            "Statistics computed",
            attributes=self.attr_count,
            rows=self.row_count,
            min_sup_count=self.min_sup_count,
            frequent_selectors=len(self.selectors),
        )
        return self.selectors

    @property
    def has_statistics(self) -> bool:
        return self.selectors is not None

    # ------------------------------------------------------------------
    # streaming pass

    def bind(self, path: PathLike) -> None:
        """(Re)open ``path`` positioned on the first data line, closing any previous stream."""
        path = self._check_format(path)
        self.close()

        try:
            handle = open(path, "r", encoding=self.encoding)
        except OSError as e:
            raise IOFailureError(path=str(path), reason=e) from e

        try:
            header_width = self._skip_header(handle, path)
        except (OSError, UnicodeDecodeError) as e:
            handle.close()
            raise IOFailureError(path=str(path), reason=e) from e
        except BaseException:
            handle.close()
            raise

        self._input = handle
        self._input_path = path
        self._width = header_width
        if self.has_statistics:
            if path.resolve() == self.source.resolve():
                self._width = self.attr_count
            else:
                logger.warning(
                    "Binding a source other than the scanned one, using its header width",
                    scanned=self.source,
                    path=path,
                    header_width=header_width,
                )
        logger.debug("Bound data source", path=path, width=self._width)

    @property
    def is_bound(self) -> bool:
        return self._input is not None

    def next_record(self) -> Optional[List[str]]:
        """Return the next record as exactly ``attr_count`` tokens, or None at end of stream."""
        if self._input is None:
            return None

        try:
            for line in self._input:
                record = self._parse_record(line, self._width)
                if record is not None:
                    return record
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailureError(path=str(self._input_path), reason=e) from e
        return None

    def iter_records(self) -> Iterator[List[str]]:
        """Yield records from the bound stream until it is exhausted."""
        while True:
            record = self.next_record()
            if record is None:
                return
            yield record

    def close(self) -> None:
        if self._input is not None:
            self._input.close()
            self._input = None
            self._input_path = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ------------------------------------------------------------------

    def describe(self) -> Dict[str, object]:
        """Summary counters for reporting."""
        return {
            "adapter": self.__class__.__name__,
            "format": self.data_format.value,
            "source": str(self.source) if self.source else None,
            "attr_count": self.attr_count,
            "target_attr_count": self.target_attr_count,
            "predict_attr_count": self.predict_attr_count,
            "row_count": self.row_count,
            "min_sup_count": self.min_sup_count,
            "selector_count": sum(len(attr) for attr in self.attributes),
            "frequent_selector_count": len(self.selectors) if self.selectors else 0,
        }

    def _check_format(self, path: PathLike) -> Path:
        path = Path(path)
        detected = detect_data_format(path)
        if detected != self.data_format:
            raise FormatMismatchError(
                path=str(path),
                detected_format=detected.value,
                expected_format=self.data_format.value,
            )
        return path


# Registry of available adapters
_adapters: Dict[DataFormat, Callable[..., DataFormatAdapter]] = {}

def register_adapter(data_format: DataFormat, factory: Callable[..., DataFormatAdapter]) -> None:
    """Register the adapter factory used for ``data_format`` files."""
    _adapters[data_format] = factory


def get_adapter(path: PathLike, **options) -> DataFormatAdapter:
    """
    Build the adapter for a file, chosen from its detected format.

    Args:
        path: Source file
        **options: Passed to the adapter constructor (delimiter, encoding, config).
            A ``.tsv`` file is split on tabs unless ``delimiter`` is given.

    Raises:
        FormatMismatchError: If no adapter handles the detected format
    """
    data_format = detect_data_format(path)
    factory = _adapters.get(data_format)
    if factory is None:
        raise FormatMismatchError(path=str(path))

    suffix = Path(path).suffix.lower()
    if options.get("delimiter") is None and suffix in _EXTENSION_DELIMITERS:
        options["delimiter"] = _EXTENSION_DELIMITERS[suffix]

    adapter = factory(**options)
    logger.info(f"Detected format: {adapter.__class__.__name__}", path=path)
    return adapter
