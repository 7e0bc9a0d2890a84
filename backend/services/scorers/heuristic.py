"""Local scorer: the deterministic heuristic behind a simulated latency."""

import asyncio
import logging

from config import settings
from models.requests import ScoreRequest
from models.responses import ScoreResponse
from services.scorers.base import BaseScorer
from services.scoring_engine import derive_score

logger = logging.getLogger(__name__)


class HeuristicScorer(BaseScorer):
    name = "heuristic"

    def __init__(self, latency_s: float | None = None) -> None:
        self._latency_s = latency_s

    @property
    def latency_s(self) -> float:
        if self._latency_s is None:
            return settings.simulated_latency_s
        return self._latency_s

    async def score(self, request: ScoreRequest) -> ScoreResponse:
        # Cancellable: a superseding submission cancels us here.
        if self.latency_s > 0:
            await asyncio.sleep(self.latency_s)
        response = derive_score(request)
        logger.debug(
            "Scored pitch (%d chars): p_success=%.3f genres=%s",
            len(request.text),
            response.success_probability,
            response.inferred_genres,
        )
        return response
