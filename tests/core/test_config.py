# tests/core/test_config.py
"""
Tests for the Config class: integer parsing and validation.
"""

import os
from unittest.mock import patch

import pytest

from kubefit.core.config import Config, _get_int


class TestGetInt:
    def test_returns_default_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _get_int("MAX_WORKERS", 8) == 8

    def test_empty_value_uses_default(self):
        with patch.dict(os.environ, {"MAX_WORKERS": ""}):
            assert _get_int("MAX_WORKERS", 8) == 8

    def test_parses_integer(self):
        with patch.dict(os.environ, {"MAX_WORKERS": "3"}):
            assert _get_int("MAX_WORKERS", 8) == 3

    def test_rejects_non_integer(self):
        with patch.dict(os.environ, {"MAX_WORKERS": "many"}):
            with pytest.raises(ValueError, match="MAX_WORKERS must be an integer"):
                _get_int("MAX_WORKERS", 8)


class TestValidateInstance:
    def test_defaults_are_valid(self):
        Config().validate_instance()

    @pytest.mark.parametrize(
        "attribute,value,message",
        [
            ("LOG_LEVEL", "chatty", "LOG_LEVEL"),
            ("MAX_WORKERS", 0, "MAX_WORKERS"),
            ("OVERPROVISION_THRESHOLD_PERCENT", 0, "OVERPROVISION_THRESHOLD_PERCENT"),
            ("OVERPROVISION_THRESHOLD_PERCENT", 101, "OVERPROVISION_THRESHOLD_PERCENT"),
            ("OVERPROVISION_TOP_N", 0, "OVERPROVISION_TOP_N"),
            ("NODE_NAME_WIDTH", 0, "NODE_NAME_WIDTH"),
        ],
    )
    def test_invalid_values_raise(self, attribute, value, message):
        cfg = Config()
        setattr(cfg, attribute, value)

        with pytest.raises(ValueError, match=message):
            cfg.validate_instance()

    def test_lowercase_log_level_is_accepted(self):
        cfg = Config()
        cfg.LOG_LEVEL = "debug"
        cfg.validate_instance()

    def test_empty_request_only_warns(self, caplog):
        cfg = Config()
        cfg.DS_CPU_REQUEST = ""

        cfg.validate_instance()

        assert "evaluated as 0" in caplog.text
