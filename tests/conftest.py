"""
Shared pytest configuration and fixtures for selector-ingest tests.

This module provides dataset files written to a temporary directory and
keeps every test isolated from user configuration and environment variables.
"""

import pytest

from selector_ingest.config.settings import reset_default_config
from selector_ingest.utils.logging import setup_logging


# Test configuration
pytest_plugins = []


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Ignore ~/.selector_ingest and SELECTOR_INGEST_* variables during tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for var in (
        "SELECTOR_INGEST_LOG_LEVEL",
        "SELECTOR_INGEST_DELIMITER",
        "SELECTOR_INGEST_ENCODING",
        "SELECTOR_INGEST_SUPPORT_THRESHOLD",
        "SELECTOR_INGEST_TARGET_ATTR_COUNT",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_default_config()
    # console handlers would hold on to a captured stream between tests
    setup_logging(console=False)
    yield
    reset_default_config()


@pytest.fixture
def write_dataset(tmp_path):
    """Write ``content`` to ``tmp_path / name`` and return the path."""
    def _write(name, content, encoding="utf-8"):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=encoding)
        return path
    return _write


@pytest.fixture
def weather_csv(write_dataset):
    """Small delimited dataset with quoting, nulls and ragged rows."""
    return write_dataset("weather.csv", "\n".join([
        "outlook,temp,windy,play",
        "sunny,hot,false,no",
        'sunny,"hot",true,no',
        "overcast,hot,false,yes",
        "",
        "rainy,NA,false,yes",
        "rainy,cool",
        "overcast,cool,true,yes,extra",
        '"sunny, mostly",mild,,no',
        "",
    ]))


@pytest.fixture
def baskets_arff(write_dataset):
    """Binary matrix mixing dense and sparse rows."""
    return write_dataset("baskets.arff", "\n".join([
        "% grocery baskets",
        "@relation baskets",
        "",
        "@attribute bread numeric",
        "@attribute 'whole milk' numeric",
        "@attribute eggs {0,1}",
        "@attribute butter numeric",
        "@data",
        "1,1,0,0",
        "{0 1, 2 1}",
        "% mid-data comment",
        "{1:1, 3:true}",
        "",
        "0,1.0,0",
        "{7 1, 0 0}",
    ]))


@pytest.fixture
def ten_row_sources(write_dataset):
    """The same ten-row presence table in both formats."""
    rows = [
        (1, 0), (1, 1), (0, 1), (0, 0), (1, 0),
        (0, 1), (1, 1), (0, 0), (0, 1), (1, 0),
    ]
    csv_lines = ["a,b"] + [f"{a},{b}" for a, b in rows]
    arff_lines = ["@relation ten", "@attribute a numeric", "@attribute b numeric", "@data"]
    arff_lines += [f"{a},{b}" for a, b in rows]
    return (
        write_dataset("ten.csv", "\n".join(csv_lines) + "\n"),
        write_dataset("ten.arff", "\n".join(arff_lines) + "\n"),
    )


# Markers for different test types
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (medium speed)"
    )
