"""Configuration policy, settings and logging setup."""

from deskcalc.config.logging import configure_logging, configure_logging_from
from deskcalc.config.models import HistoryConfig, ValidationPolicy
from deskcalc.config.settings import CalculatorSettings

__all__ = [
    "CalculatorSettings",
    "HistoryConfig",
    "ValidationPolicy",
    "configure_logging",
    "configure_logging_from",
]
