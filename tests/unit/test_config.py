"""
Unit tests for MatcherConfig.
"""

import logging

import pytest

from paramsparser.config import MatcherConfig, setup_logging


class TestMatcherConfig:
    """Tests for defaults, environment loading and validation."""

    def test_defaults(self):
        config = MatcherConfig()

        assert config.max_line_length == 8192
        assert config.strict is False
        assert config.log_level == "INFO"
        assert config.log_format == "text"
        assert config.log_matches is True

    def test_from_env_defaults(self):
        """Test that an empty environment gives the dataclass defaults."""
        assert MatcherConfig.from_env() == MatcherConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PARAMS_MAX_LINE_LENGTH", "1024")
        monkeypatch.setenv("PARAMS_STRICT", "yes")
        monkeypatch.setenv("PARAMS_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PARAMS_LOG_FORMAT", "json")
        monkeypatch.setenv("PARAMS_LOG_MATCHES", "0")

        config = MatcherConfig.from_env()

        assert config.max_line_length == 1024
        assert config.strict is True
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.log_matches is False

    @pytest.mark.parametrize("value, expected", [
        ("1", True),
        ("TRUE", True),
        ("on", True),
        ("0", False),
        ("false", False),
        ("", False),
    ])
    def test_strict_flag_values(self, monkeypatch, value, expected):
        monkeypatch.setenv("PARAMS_STRICT", value)

        assert MatcherConfig.from_env().strict is expected

    def test_validate_ok(self):
        MatcherConfig(log_level="debug", log_format="json").validate()

    def test_validate_line_length(self):
        with pytest.raises(ValueError):
            MatcherConfig(max_line_length=0).validate()

    def test_validate_log_level(self):
        with pytest.raises(ValueError):
            MatcherConfig(log_level="LOUD").validate()

    def test_validate_log_format(self):
        with pytest.raises(ValueError):
            MatcherConfig(log_format="xml").validate()


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_sets_package_level(self):
        package_logger = logging.getLogger("paramsparser")
        previous = package_logger.level
        try:
            setup_logging(MatcherConfig(log_level="ERROR"))
            assert package_logger.level == logging.ERROR
        finally:
            package_logger.setLevel(previous)
