"""Pydantic configuration models with code-baked defaults.

The calculator core only ever sees these frozen snapshots; how they are
assembled (environment, CLI flags, a front end's own file) is up to the caller.
"""

from __future__ import annotations

from pydantic import BaseModel


class ValidationPolicy(BaseModel):
    """Limits and switches consumed by ``validate_with_policy``."""

    model_config = {"frozen": True}

    validation_enabled: bool = True
    strict_mode: bool = False
    min_number_value: float = -1e15
    max_number_value: float = 1e15


class HistoryConfig(BaseModel):
    """History log settings. ``max_entries=None`` keeps every entry."""

    model_config = {"frozen": True}

    max_entries: int | None = 100
