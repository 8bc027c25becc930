"""Hypothesis profiles and pytest fixtures for fallible.

Strategies live in strategies.py.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from hypothesis import HealthCheck, settings

from fallible.core.config import ResultConfig, set_config

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("dev")


@pytest.fixture(autouse=True)
def _default_config() -> Iterator[None]:
    """Every test starts from the default configuration."""
    previous = set_config(ResultConfig())
    yield
    set_config(previous)
