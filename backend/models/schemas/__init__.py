"""Pydantic contracts shared between the scoring services and the API."""

from models.schemas.report_view import ReportView
from models.schemas.score_outcome import ScoreOutcome

__all__ = [
    "ReportView",
    "ScoreOutcome",
]
