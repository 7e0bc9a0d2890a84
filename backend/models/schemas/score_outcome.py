"""Explicit success/failure result of one scoring call."""

from pydantic import BaseModel

from models.responses import ScoreResponse


class ScoreOutcome(BaseModel):
    """Either a response (ok=True) or a failure description (ok=False).

    Scorer failures are carried here instead of being raised so that the
    session and the view layer can render them without try/except.
    """
    ok: bool = False
    response: ScoreResponse | None = None
    error_kind: str = ""  # "transport_error" | "validation_error" | "scoring_error"
    error: str = ""
    sequence: int = 0  # submission number within a session (0 = no session)
