"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis profiles
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Load profile from environment or default to "dev"
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def calculator():
    """Provide a fresh, unbounded Calculator."""
    from deskcalc import Calculator

    return Calculator()


@pytest.fixture
def strict_policy():
    """Policy with strict mode switched on and default limits."""
    from deskcalc import ValidationPolicy

    return ValidationPolicy(strict_mode=True)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any DESKCALC_* variables leaking in from the host environment."""
    for key in list(os.environ):
        if key.startswith("DESKCALC_"):
            monkeypatch.delenv(key)
    return monkeypatch
