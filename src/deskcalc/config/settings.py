"""Unified settings: init kwargs, then ``DESKCALC_*`` env vars, then code defaults.

Nested sections use ``__`` as the delimiter, e.g.
``DESKCALC_VALIDATION__STRICT_MODE=true`` or ``DESKCALC_HISTORY__MAX_ENTRIES=20``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from deskcalc.config.models import HistoryConfig, ValidationPolicy


class CalculatorSettings(BaseSettings):
    """Frozen settings snapshot for building a :class:`~deskcalc.core.Calculator`."""

    model_config = SettingsConfigDict(
        env_prefix="DESKCALC_",
        env_nested_delimiter="__",
        frozen=True,
        extra="ignore",
    )

    validation: ValidationPolicy = Field(default_factory=ValidationPolicy)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    verbose: bool = False
    log_json: bool = False
