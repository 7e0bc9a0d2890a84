"""Failure types a scorer may raise.

Request validation happens before a scorer is called (pydantic at the API
boundary), so these only cover what can go wrong while producing a score.
"""


class ScoringError(Exception):
    """Base class for scorer failures."""

    kind = "scoring_error"


class TransportError(ScoringError):
    """The scoring backend could not be reached or answered with an error status."""

    kind = "transport_error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ScorerValidationError(ScoringError):
    """The scoring backend answered with a body that is not a valid ScoreResponse."""

    kind = "validation_error"
