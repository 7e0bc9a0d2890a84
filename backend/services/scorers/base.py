"""Abstract scoring capability shared by the heuristic and remote scorers."""

from abc import ABC, abstractmethod

from models.requests import ScoreRequest
from models.responses import ScoreResponse


class BaseScorer(ABC):
    """Asynchronous ``score(request) -> response`` capability.

    Subclasses must implement:
        - name: identifier used in the scorer registry
        - score(request): produce a ScoreResponse or raise a ScoringError

    Callers depend only on this interface, so a local heuristic and a
    remote model are interchangeable.
    """

    name: str = ""

    @abstractmethod
    async def score(self, request: ScoreRequest) -> ScoreResponse:
        """Score a pitch. Raises ScoringError subclasses on failure."""

    async def aclose(self) -> None:
        """Release held resources (HTTP clients etc.)."""
