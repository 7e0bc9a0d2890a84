"""Runs a scorer and turns its failures into explicit outcomes."""

import logging

from models.requests import ScoreRequest
from models.schemas.score_outcome import ScoreOutcome
from services.scorers.base import BaseScorer
from services.scorers.errors import ScoringError

logger = logging.getLogger(__name__)


async def score_safely(scorer: BaseScorer, request: ScoreRequest, sequence: int = 0) -> ScoreOutcome:
    """Score *request*, returning a failed ScoreOutcome instead of raising.

    Cancellation is not a failure and still propagates.
    """
    try:
        response = await scorer.score(request)
    except ScoringError as e:
        logger.warning("Scorer %r failed (%s): %s", scorer.name, e.kind, e)
        return ScoreOutcome(ok=False, error_kind=e.kind, error=str(e), sequence=sequence)
    return ScoreOutcome(ok=True, response=response, sequence=sequence)
