"""
Tests for the attribute catalog data model.
"""

import pytest

from selector_ingest.data.catalog import Attribute, AttributeKind, Selector, NULL_SYMBOL


pytestmark = pytest.mark.unit


class TestAttribute:
    """Test selector bookkeeping on a single attribute."""

    def test_defaults_to_category_kind(self):
        attr = Attribute(0, "outlook")

        assert attr.kind is AttributeKind.CATEGORY
        assert attr.kind.value == "category"
        assert len(attr) == 0

    def test_observe_creates_then_increments(self):
        attr = Attribute(2, "windy")

        first = attr.observe("true")
        second = attr.observe("true")

        assert first is second
        assert first.frequency == 2
        assert first.attr_id == 2
        assert first.attr_name == "windy"

    def test_observe_with_count(self):
        attr = Attribute(1, "milk")
        attr.observe("1", 7)

        assert attr.frequency_of("1") == 7

    def test_unseen_value_has_zero_frequency_and_no_selector(self):
        attr = Attribute(0, "outlook")
        attr.observe("sunny")

        assert attr.frequency_of("rainy") == 0
        assert "rainy" not in attr.distinct_values

    def test_selectors_keep_insertion_order(self):
        attr = Attribute(0, "outlook")
        for value in ["sunny", "overcast", "sunny", "rainy", "overcast"]:
            attr.observe(value)

        assert [s.value for s in attr.selectors] == ["sunny", "overcast", "rainy"]
        assert [s.frequency for s in attr.selectors] == [2, 2, 1]


class TestSelector:
    """Test the selector value object."""

    def test_key_and_str(self):
        selector = Selector(3, "play", "yes", 9)

        assert selector.key == (3, "yes")
        assert str(selector) == "play=yes (9)"

    def test_null_symbol(self):
        assert NULL_SYMBOL == "?"
