"""Shared test configuration, markers and fixtures."""

import pytest

from api.router import limiter
from config import settings
from services.scorers import registry
from services.session import sessions


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: exercises the real simulated latency"
    )


@pytest.fixture(autouse=True)
def _fast_scoring(monkeypatch):
    """No artificial latency, fresh scorers and sessions, no rate limiting."""
    monkeypatch.setattr(settings, "simulated_latency_s", 0.0)
    monkeypatch.setattr(settings, "scorer_backend", "heuristic")
    monkeypatch.setattr(limiter, "enabled", False)
    registry.clear()
    sessions.clear()
    yield
    registry.clear()
    sessions.clear()
