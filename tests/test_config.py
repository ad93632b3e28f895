"""Tests for validator configuration."""

import logging

import pytest
from rdf_shapes.config import ValidatorConfig


class TestValidatorConfig:
    """Test ValidatorConfig."""

    def test_defaults(self):
        """Test default values."""
        config = ValidatorConfig()
        assert config.query_timeout_seconds == 30.0
        assert config.parallel is False
        assert config.max_workers is None
        assert config.log_level is None

    def test_to_dict(self):
        """Test conversion to dictionary."""
        config = ValidatorConfig(query_timeout_seconds=5.0, parallel=True, max_workers=2)
        assert config.to_dict() == {
            "query_timeout_seconds": 5.0,
            "parallel": True,
            "max_workers": 2,
            "log_level": None,
        }

    def test_from_dict_round_trip(self):
        """Test from_dict restores to_dict output."""
        config = ValidatorConfig(query_timeout_seconds=None, parallel=True, log_level="debug")
        restored = ValidatorConfig.from_dict(config.to_dict())
        assert restored == config
        assert restored.log_level == "DEBUG"

    def test_from_dict_missing_keys(self):
        """Test missing keys fall back to defaults."""
        config = ValidatorConfig.from_dict({"parallel": True})
        assert config.parallel is True
        assert config.query_timeout_seconds == 30.0

    @pytest.mark.parametrize("kwargs", [
        {"query_timeout_seconds": 0},
        {"query_timeout_seconds": -1.0},
        {"max_workers": 0},
        {"log_level": "LOUD"},
    ])
    def test_invalid_values(self, kwargs):
        """Test invalid settings are rejected."""
        with pytest.raises(ValueError):
            ValidatorConfig(**kwargs)

    def test_apply_logging(self):
        """Test the package logger level is set."""
        logger = logging.getLogger("rdf_shapes")
        previous = logger.level
        try:
            ValidatorConfig(log_level="DEBUG").apply_logging()
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)
