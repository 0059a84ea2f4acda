"""Unit tests for settings, policy models and logging setup."""

import logging

import pydantic
import pytest
import structlog

from deskcalc import (
    CalculatorSettings,
    HistoryConfig,
    ValidationPolicy,
    configure_logging,
    configure_logging_from,
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    calc_level = logging.getLogger("deskcalc").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("deskcalc").setLevel(calc_level)
    structlog.reset_defaults()


class TestModels:
    """Tests for the frozen policy models."""

    def test_policy_defaults(self):
        policy = ValidationPolicy()
        assert policy.validation_enabled is True
        assert policy.strict_mode is False
        assert policy.min_number_value == -1e15
        assert policy.max_number_value == 1e15

    def test_policy_is_frozen(self):
        policy = ValidationPolicy()
        with pytest.raises(pydantic.ValidationError):
            policy.strict_mode = True  # type: ignore[misc]

    def test_history_defaults(self):
        assert HistoryConfig().max_entries == 100
        assert HistoryConfig(max_entries=None).max_entries is None


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, clean_env):
        settings = CalculatorSettings()
        assert settings.validation == ValidationPolicy()
        assert settings.history.max_entries == 100
        assert settings.verbose is False
        assert settings.log_json is False

    def test_nested_env_overrides(self, clean_env):
        clean_env.setenv("DESKCALC_VALIDATION__STRICT_MODE", "true")
        clean_env.setenv("DESKCALC_VALIDATION__MAX_NUMBER_VALUE", "1000")
        clean_env.setenv("DESKCALC_HISTORY__MAX_ENTRIES", "5")
        settings = CalculatorSettings()
        assert settings.validation.strict_mode is True
        assert settings.validation.max_number_value == 1000.0
        assert settings.validation.min_number_value == -1e15
        assert settings.history.max_entries == 5

    def test_init_kwargs_win_over_env(self, clean_env):
        clean_env.setenv("DESKCALC_VERBOSE", "true")
        assert CalculatorSettings(verbose=False).verbose is False
        assert CalculatorSettings().verbose is True

    def test_settings_are_frozen(self, clean_env):
        settings = CalculatorSettings()
        with pytest.raises(pydantic.ValidationError):
            settings.verbose = True  # type: ignore[misc]


class TestConfigureLogging:
    """Tests for structlog wiring."""

    def test_verbose_enables_debug(self, restore_logging):
        configure_logging(verbose=True)
        assert logging.getLogger("deskcalc").level == logging.DEBUG

    def test_quiet_by_default(self, restore_logging):
        configure_logging()
        assert logging.getLogger("deskcalc").level == logging.WARNING
        assert len(logging.getLogger().handlers) == 1

    def test_settings_drive_level(self, restore_logging, clean_env):
        clean_env.setenv("DESKCALC_VERBOSE", "true")
        configure_logging_from(CalculatorSettings())
        assert logging.getLogger("deskcalc").level == logging.DEBUG

        configure_logging_from(CalculatorSettings(verbose=False))
        assert logging.getLogger("deskcalc").level == logging.WARNING

    def test_settings_select_json(self, restore_logging, clean_env, capsys):
        configure_logging_from(CalculatorSettings(verbose=True, log_json=True))
        structlog.get_logger("deskcalc.test").debug("from settings")
        assert '"event": "from settings"' in capsys.readouterr().err

    def test_json_output(self, restore_logging, capsys):
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("deskcalc.test").debug("hello", answer=42)
        err = capsys.readouterr().err
        assert '"event": "hello"' in err
        assert '"answer": 42' in err
