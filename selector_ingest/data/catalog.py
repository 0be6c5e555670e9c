"""
Attribute catalog for selector-ingest.

An Attribute is one column of the source dataset; each distinct value it
holds is tracked by a Selector carrying the observed frequency.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


NULL_SYMBOL = "?"


class AttributeKind(str, Enum):
    """Declared attribute kinds. Every attribute is treated as a category."""
    CATEGORY = "category"


@dataclass
class Selector:
    """An (attribute, value) pair with its observed frequency."""
    attr_id: int
    attr_name: str
    value: str
    frequency: int = 0

    @property
    def key(self) -> tuple:
        return (self.attr_id, self.value)

    def __str__(self) -> str:
        return f"{self.attr_name}={self.value} ({self.frequency})"


@dataclass
class Attribute:
    """One column/feature and the selectors observed for it."""
    attr_id: int
    name: str
    kind: AttributeKind = AttributeKind.CATEGORY
    distinct_values: Dict[str, Selector] = field(default_factory=dict)

    def observe(self, value: str, count: int = 1) -> Selector:
        """Record ``count`` more occurrences of ``value``, creating its selector on first sight."""
        selector = self.distinct_values.get(value)
        if selector is None:
            selector = Selector(self.attr_id, self.name, value, count)
            self.distinct_values[value] = selector
        else:
            selector.frequency += count
        return selector

    def frequency_of(self, value: str) -> int:
        selector = self.distinct_values.get(value)
        return selector.frequency if selector is not None else 0

    @property
    def selectors(self) -> List[Selector]:
        return list(self.distinct_values.values())

    def __len__(self) -> int:
        return len(self.distinct_values)
