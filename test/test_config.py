# Test type: unit
# Validation: environment-driven config, logging setup, exception hierarchy
# Command: pytest test/test_config.py -v

import json
import logging

import pytest

from app.config import AppConfig
from app.exceptions import CalculatorError, ConfigurationError, InvalidInputError
from app.logging import JsonFormatter, setup_logging

_ENV_VARS = ("FINCALC_HOST", "FINCALC_PORT", "FINCALC_BASE_PATH", "FINCALC_RELOAD", "LOG_LEVEL", "LOG_FORMAT")


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# AppConfig.from_env
# ---------------------------------------------------------------------------

class TestAppConfig:
    def test_defaults(self, clean_env):
        config = AppConfig.from_env()
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 5477
        assert config.server.reload is False
        assert config.logging.level == "INFO"
        assert config.logging.format_type == "standard"
        assert config.base_path == "/financial/v1"

    def test_overrides(self, clean_env):
        clean_env.setenv("FINCALC_PORT", "8080")
        clean_env.setenv("FINCALC_RELOAD", "TRUE")
        clean_env.setenv("LOG_FORMAT", "JSON")
        config = AppConfig.from_env()
        assert config.server.port == 8080
        assert config.server.reload is True
        assert config.logging.format_type == "json"

    def test_base_path_normalised(self, clean_env):
        clean_env.setenv("FINCALC_BASE_PATH", "calc/v2/")
        assert AppConfig.from_env().base_path == "/calc/v2"

    def test_empty_base_path(self, clean_env):
        clean_env.setenv("FINCALC_BASE_PATH", "/")
        assert AppConfig.from_env().base_path == ""

    def test_port_not_integer(self, clean_env):
        clean_env.setenv("FINCALC_PORT", "http")
        with pytest.raises(ConfigurationError):
            AppConfig.from_env()

    def test_port_out_of_range(self, clean_env):
        clean_env.setenv("FINCALC_PORT", "70000")
        with pytest.raises(ConfigurationError):
            AppConfig.from_env()

    def test_unknown_log_format(self, clean_env):
        clean_env.setenv("LOG_FORMAT", "xml")
        with pytest.raises(ConfigurationError, match="LOG_FORMAT"):
            AppConfig.from_env()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:
    def test_json_formatter(self):
        record = logging.LogRecord("app.utils.tax", logging.INFO, __file__, 1, "tax=%s", (97_500,), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.utils.tax"
        assert payload["message"] == "tax=97500"
        assert "timestamp" in payload

    def test_setup_replaces_handler(self):
        setup_logging("DEBUG")
        setup_logging("DEBUG", "json")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("app").level == logging.DEBUG
        setup_logging("INFO")

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.INFO


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class TestExceptions:
    def test_invalid_input_is_value_error(self):
        assert issubclass(InvalidInputError, CalculatorError)
        assert issubclass(InvalidInputError, ValueError)

    def test_configuration_error_is_calculator_error(self):
        assert issubclass(ConfigurationError, CalculatorError)
        assert not issubclass(ConfigurationError, ValueError)
