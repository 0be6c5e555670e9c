"""
Main API functions for selector-ingest.

High-level entry points tying format detection, the statistics pass and the
streaming pass together.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..config.settings import IngestConfig, get_default_config
from ..data.adapters import DataFormatAdapter, get_adapter
from ..utils.logging import get_logger

logger = get_logger(__name__)


def load_catalog(
    path: Union[str, Path],
    adapter: Optional[DataFormatAdapter] = None,
    target_attr_count: Optional[int] = None,
    support_threshold: Optional[float] = None,
    config: Optional[IngestConfig] = None,
    **options
) -> DataFormatAdapter:
    """
    Build the attribute catalog for a dataset file.

    Args:
        path: Source file (.csv/.tsv/.txt or .arff)
        adapter: Adapter to use (picked from the file extension if None)
        target_attr_count: Trailing target attributes (config default if None)
        support_threshold: Relative minimum support (config default if None)
        config: Configuration supplying defaults
        **options: Adapter constructor options such as ``delimiter``

    Returns:
        The adapter, holding the catalog, counters and prepared selectors

    Examples:
        >>> adapter = load_catalog("baskets.arff", support_threshold=0.25)
        >>> adapter.min_sup_count
    """
    config = config or get_default_config()
    if adapter is None:
        adapter = get_adapter(path, config=config, **options)

    if target_attr_count is None:
        target_attr_count = config.data.target_attr_count
    if support_threshold is None:
        support_threshold = config.data.support_threshold

    adapter.compute_statistics(path, target_attr_count, support_threshold)
    return adapter


def stream_records(
    path: Union[str, Path],
    adapter: Optional[DataFormatAdapter] = None,
    config: Optional[IngestConfig] = None,
    **options
) -> Iterator[List[str]]:
    """
    Yield every record of ``path`` as a fixed-width token list.

    Statistics are computed first, with configuration defaults, when the
    adapter has none. The stream is bound from the start of the file and
    closed once the generator is exhausted or discarded.
    """
    config = config or get_default_config()
    if adapter is None:
        adapter = get_adapter(path, config=config, **options)

    if not adapter.has_statistics:
        load_catalog(path, adapter=adapter, config=config)

    adapter.bind(path)
    try:
        yield from adapter.iter_records()
    finally:
        adapter.close()


def stream_transactions(
    path: Union[str, Path],
    adapter: DataFormatAdapter,
) -> Iterator[List[int]]:
    """
    Yield each record of ``path`` as the ids of the frequent selectors it contains.

    ``adapter`` must already hold statistics (see ``load_catalog``).
    """
    if adapter.selectors is None:
        raise ValueError("compute statistics before streaming transactions")

    selectors = adapter.selectors
    for record in stream_records(path, adapter=adapter):
        yield selectors.encode(record)
