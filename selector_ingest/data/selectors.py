"""
Selector preparation for the mining engine.

Turns a populated attribute catalog into the candidate selector set: the
frequent selectors ordered by descending frequency, each with a dense id,
split into predictor and target groups.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .catalog import Attribute, Selector, NULL_SYMBOL


@dataclass
class SelectorSet:
    """Frequent selectors with dense ids, as consumed by the mining engine."""
    selectors: List[Selector] = field(default_factory=list)
    predict_count: int = 0
    min_sup_count: int = 0
    infrequent_count: int = 0
    _index: Dict[Tuple[int, str], int] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self._index = {s.key: i for i, s in enumerate(self.selectors)}

    def __len__(self) -> int:
        return len(self.selectors)

    def __iter__(self):
        return iter(self.selectors)

    def id_of(self, attr_id: int, value: str) -> Optional[int]:
        return self._index.get((attr_id, value))

    @property
    def predictor_selectors(self) -> List[Selector]:
        return [s for s in self.selectors if s.attr_id < self.predict_count]

    @property
    def target_selectors(self) -> List[Selector]:
        return [s for s in self.selectors if s.attr_id >= self.predict_count]

    def encode(self, record: Sequence[str]) -> List[int]:
        """
        Convert a streamed record into the sorted ids of the frequent selectors it contains.

        Null tokens and values without a frequent selector are ignored.
        """
        ids = []
        for attr_id, value in enumerate(record):
            if value == NULL_SYMBOL:
                continue
            selector_id = self._index.get((attr_id, value))
            if selector_id is not None:
                ids.append(selector_id)
        ids.sort()
        return ids


def prepare_selectors(
    attributes: Sequence[Attribute],
    min_sup_count: int,
    predict_attr_count: Optional[int] = None,
) -> SelectorSet:
    """
    Build the candidate selector set from a populated catalog.

    Args:
        attributes: Catalog produced by a statistics computation
        min_sup_count: Absolute minimum support; selectors below it are dropped
        predict_attr_count: Attributes with an id at or above this are targets
            (defaults to all attributes being predictors)

    Returns:
        SelectorSet ordered by descending frequency, then attribute id
    """
    if predict_attr_count is None:
        predict_attr_count = len(attributes)

    candidates = []
    infrequent = 0
    for attr in attributes:
        for order, selector in enumerate(attr.selectors):
            if selector.frequency >= min_sup_count:
                candidates.append((-selector.frequency, attr.attr_id, order, selector))
            else:
                infrequent += 1

    candidates.sort(key=lambda item: item[:3])

    return SelectorSet(
        selectors=[item[3] for item in candidates],
        predict_count=predict_attr_count,
        min_sup_count=min_sup_count,
        infrequent_count=infrequent,
    )
