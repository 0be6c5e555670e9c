"""
Catalog export functionality for selector-ingest.

Flattens an adapter's attribute catalog into a pandas DataFrame and writes
plain-text summaries to an explicit writer.
"""

import pandas as pd
from pathlib import Path
from typing import Optional, TextIO, Union

from ..data.adapters import DataFormatAdapter
from ..utils.logging import get_logger

logger = get_logger(__name__)

CATALOG_COLUMNS = [
    "attr_id",
    "attr_name",
    "kind",
    "value",
    "frequency",
    "support",
    "is_frequent",
]


class CatalogExporter:
    """
    Export the selector frequency table of a computed catalog.

    One row per selector, in attribute order and then insertion order.
    """

    def __init__(self, decimal_precision: int = 6):
        """
        Initialize catalog exporter.

        Args:
            decimal_precision: Number of decimal places for relative support
        """
        self.decimal_precision = decimal_precision

    def to_frame(
        self,
        adapter: DataFormatAdapter,
        export_file: Optional[Union[str, Path]] = None,
    ) -> pd.DataFrame:
        """
        Build the selector table.

        Args:
            adapter: Adapter whose statistics have been computed
            export_file: Optional CSV path to save the table to

        Returns:
            DataFrame with the columns in ``CATALOG_COLUMNS``
        """
        frequent = set()
        if adapter.selectors is not None:
            frequent = {selector.key for selector in adapter.selectors}

        rows = []
        for attr in adapter.attributes:
            for selector in attr.selectors:
                support = selector.frequency / adapter.row_count if adapter.row_count else 0.0
                rows.append({
                    "attr_id": attr.attr_id,
                    "attr_name": attr.name,
                    "kind": attr.kind.value,
                    "value": selector.value,
                    "frequency": selector.frequency,
                    "support": round(support, self.decimal_precision),
                    "is_frequent": selector.key in frequent,
                })

        frame = pd.DataFrame(rows, columns=CATALOG_COLUMNS)

        if export_file:
            export_path = Path(export_file)
            export_path.parent.mkdir(parents=True, exist_ok=True)
            frame.to_csv(export_path, index=False)
            logger.info("Catalog exported", path=export_path, selectors=len(frame))

        return frame

    def write_summary(self, adapter: DataFormatAdapter, writer: TextIO, top: int = 10) -> None:
        """Write the dataset counters and the most frequent selectors to ``writer``."""
        for key, value in adapter.describe().items():
            writer.write(f"{key}: {value}\n")

        if adapter.selectors is None or not len(adapter.selectors):
            return

        writer.write(f"top {min(top, len(adapter.selectors))} selectors:\n")
        for selector in adapter.selectors.selectors[:top]:
            writer.write(f"  {selector}\n")


def export_catalog(
    adapter: DataFormatAdapter,
    export_file: Union[str, Path],
    decimal_precision: int = 6,
) -> pd.DataFrame:
    """Convenience wrapper around ``CatalogExporter.to_frame`` that always writes a CSV."""
    return CatalogExporter(decimal_precision=decimal_precision).to_frame(adapter, export_file)
