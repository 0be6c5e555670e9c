"""
Tests for configuration management.
"""

import pydantic
import pytest

import selector_ingest
from selector_ingest.config.settings import (
    DataConfig,
    IngestConfig,
    LogLevel,
    get_default_config,
    reset_default_config,
)
from selector_ingest.data.delimited import DelimitedTextAdapter


pytestmark = pytest.mark.unit


class TestIngestConfig:
    """Test configuration sources and validation."""

    def test_defaults(self):
        config = IngestConfig()

        assert config.data.delimiter == ","
        assert config.data.encoding == "utf-8"
        assert config.data.support_threshold == 0.0
        assert config.data.target_attr_count == 0
        assert config.logging.level == "INFO"

    def test_keyword_overrides(self):
        config = IngestConfig(data={"delimiter": ";", "support_threshold": 0.3})

        assert config.data.delimiter == ";"
        assert config.data.support_threshold == 0.3
        assert config.data.encoding == "utf-8"

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("SELECTOR_INGEST_DELIMITER", "\t")
        monkeypatch.setenv("SELECTOR_INGEST_SUPPORT_THRESHOLD", "0.2")
        monkeypatch.setenv("SELECTOR_INGEST_TARGET_ATTR_COUNT", "1")
        monkeypatch.setenv("SELECTOR_INGEST_LOG_LEVEL", "debug")

        config = IngestConfig()

        assert config.data.delimiter == "\t"
        assert config.data.support_threshold == 0.2
        assert config.data.target_attr_count == 1
        assert config.logging.level == LogLevel.DEBUG

    def test_keywords_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("SELECTOR_INGEST_DELIMITER", "\t")

        config = IngestConfig(data={"delimiter": "|"})

        assert config.data.delimiter == "|"

    @pytest.mark.parametrize("values", [
        {"delimiter": ""},
        {"delimiter": "::"},
        {"support_threshold": 1.5},
        {"support_threshold": -0.1},
        {"target_attr_count": -2},
    ])
    def test_invalid_values(self, values):
        with pytest.raises(pydantic.ValidationError):
            DataConfig(**values)

    def test_assignment_is_validated(self):
        config = IngestConfig()

        with pytest.raises(pydantic.ValidationError):
            config.data.support_threshold = 2.0

    def test_yaml_round_trip(self, tmp_path):
        config = IngestConfig(data={"delimiter": ";", "support_threshold": 0.4})
        config_file = tmp_path / "conf" / "ingest.yaml"

        config.save_config(config_file)
        loaded = IngestConfig(config_file=config_file)

        assert loaded.data.delimiter == ";"
        assert loaded.data.support_threshold == 0.4

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            IngestConfig(config_file=tmp_path / "nope.yaml")

    def test_nested_update(self):
        config = IngestConfig()
        config.update(**{"data.delimiter": "|", "logging.level": "WARNING"})

        assert config.data.delimiter == "|"
        assert config.logging.level == "WARNING"


class TestDefaultConfig:
    """Test the shared default configuration."""

    def test_user_config_file_is_loaded(self):
        user_file = IngestConfig.get_user_config_path()
        user_file.parent.mkdir(parents=True)
        user_file.write_text("data:\n  delimiter: ';'\n")
        reset_default_config()

        assert get_default_config().data.delimiter == ";"

    def test_adapters_take_defaults_from_config(self):
        selector_ingest.configure(**{"data.delimiter": "|"})

        assert selector_ingest.get_config().data.delimiter == "|"
        assert DelimitedTextAdapter().delimiter == "|"

    def test_explicit_config_for_adapter(self):
        config = IngestConfig(data={"encoding": "latin-1"})

        assert DelimitedTextAdapter(config=config).encoding == "latin-1"
