from fastapi import APIRouter, Header, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import RATINGS, TONES, ScoreRequest
from models.responses import OptionsResponse, ScoreResponse
from models.schemas.report_view import ReportView
from models.schemas.score_outcome import ScoreOutcome
from services import report_view
from services.genre_inference import GENRES
from services.scorers.registry import get_scorer
from services.scoring_service import score_safely
from services.session import sessions

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "scorer": settings.scorer_backend,
    }


@router.get("/options", response_model=OptionsResponse)
async def options():
    return OptionsResponse(
        genres=list(GENRES),
        tones=list(TONES),
        ratings=list(RATINGS),
    )


async def _run_scoring(body: ScoreRequest, client_id: str | None) -> ScoreOutcome | None:
    if len(body.text) > settings.max_pitch_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Pitch too long (max {settings.max_pitch_chars} chars)",
        )

    # Anonymous callers are independent; identified ones share a session
    # so a newer submission supersedes an in-flight one.
    if not client_id:
        return await score_safely(get_scorer(), body)
    return await sessions.get(client_id).run(body)


@router.post("/score", response_model=ScoreResponse)
@limiter.limit(settings.rate_limit)
async def score(
    request: Request,
    body: ScoreRequest,
    x_client_id: str | None = Header(default=None),
):
    outcome = await _run_scoring(body, x_client_id)
    if outcome is None:
        raise HTTPException(status_code=409, detail="Superseded by a newer submission")
    if not outcome.ok:
        raise HTTPException(status_code=502, detail=outcome.error)
    return outcome.response


@router.post("/score/report", response_model=ReportView)
@limiter.limit(settings.rate_limit)
async def score_report(
    request: Request,
    body: ScoreRequest,
    x_client_id: str | None = Header(default=None),
):
    outcome = await _run_scoring(body, x_client_id)
    if outcome is None:
        raise HTTPException(status_code=409, detail="Superseded by a newer submission")
    return report_view.build_report(outcome)


@router.delete("/score/session")
async def cancel_session(x_client_id: str = Header(...)):
    session = sessions.peek(x_client_id)
    cancelled = session.cancel() if session is not None else False
    return {"cancelled": cancelled}
