"""Lazy scorer registry: one instance per backend name, created on first use."""

import logging

from config import settings
from services.scorers.base import BaseScorer

logger = logging.getLogger(__name__)

_registry: dict[str, BaseScorer] = {}


def _create_scorer(name: str) -> BaseScorer:
    """Factory: create a scorer by name with deferred imports."""
    if name == "heuristic":
        from services.scorers.heuristic import HeuristicScorer
        return HeuristicScorer()
    elif name == "remote":
        from services.scorers.remote import RemoteScorer
        return RemoteScorer()
    else:
        raise ValueError(f"Unknown scorer: {name}")


def get_scorer(name: str | None = None) -> BaseScorer:
    """Get a scorer by name (default: settings.scorer_backend)."""
    name = name or settings.scorer_backend
    if name not in _registry:
        logger.info("Creating scorer: %s", name)
        _registry[name] = _create_scorer(name)
    return _registry[name]


async def aclose_all() -> None:
    """Close every created scorer (call on app shutdown)."""
    for scorer in _registry.values():
        await scorer.aclose()
    _registry.clear()


def clear() -> None:
    """Forget all scorers. Useful for testing."""
    _registry.clear()
