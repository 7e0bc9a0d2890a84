import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app
from models.requests import ScoreRequest
from services.scoring_engine import derive_score

client = TestClient(app)

PITCH = "Una científica crea una IA sensible que invita a un extraño experimento en una nave."


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["scorer"] == "heuristic"


def test_options():
    response = client.get("/options")
    assert response.status_code == 200
    data = response.json()
    assert "Sci-Fi" in data["genres"]
    assert data["ratings"] == ["G", "PG", "PG-13", "R", "NC-17"]
    assert data["default_rating"] == "PG-13"
    assert "feel-good" in data["tones"]


def test_score():
    response = client.post("/score", json={"text": PITCH, "rating": "PG-13"})
    assert response.status_code == 200
    data = response.json()
    assert 0.05 <= data["success_probability"] <= 0.95
    assert set(data["radar"]) == {
        "originality",
        "clarity",
        "audience_appeal",
        "budget_feasibility",
        "production_risk",
    }
    assert len(data["drivers"]) == 5
    assert len(data["nearest_items"]) == 5
    assert data["inferred_genres"] == ["Sci-Fi"]
    assert data["scorer"] == "heuristic"


def test_score_matches_engine():
    body = {"text": PITCH, "genres": ["Thriller"], "tone": "oscuro", "budget_hint_usd": "12000000"}
    response = client.post("/score", json=body)
    assert response.status_code == 200
    expected = derive_score(ScoreRequest(**body))
    assert response.json() == expected.model_dump(mode="json")


def test_score_deterministic():
    first = client.post("/score", json={"text": PITCH}).json()
    second = client.post("/score", json={"text": PITCH}).json()
    assert first == second


def test_score_negative_budget_treated_as_absent():
    with_negative = client.post("/score", json={"text": PITCH, "budget_hint_usd": -5}).json()
    without = client.post("/score", json={"text": PITCH}).json()
    assert with_negative == without


def test_score_huge_budget_treated_as_absent():
    response = client.post("/score", json={"text": PITCH, "budget_hint_usd": 10**400})
    assert response.status_code == 200
    assert response.json() == client.post("/score", json={"text": PITCH}).json()


def test_score_rejects_garbage_budget():
    response = client.post("/score", json={"text": PITCH, "budget_hint_usd": "lots"})
    assert response.status_code == 422


def test_score_rejects_unknown_rating():
    response = client.post("/score", json={"text": PITCH, "rating": "TV-MA"})
    assert response.status_code == 422


def test_score_rejects_long_pitch(monkeypatch):
    monkeypatch.setattr(settings, "max_pitch_chars", 10)
    response = client.post("/score", json={"text": PITCH})
    assert response.status_code == 400


def test_score_remote_failure_is_502(monkeypatch):
    monkeypatch.setattr(settings, "scorer_backend", "remote")
    monkeypatch.setattr(settings, "remote_scorer_url", "")
    response = client.post("/score", json={"text": PITCH})
    assert response.status_code == 502
    assert "URL" in response.json()["detail"]


def test_score_with_client_session():
    response = client.post("/score", json={"text": PITCH}, headers={"X-Client-Id": "tab-1"})
    assert response.status_code == 200
    assert response.json()["inferred_genres"] == ["Sci-Fi"]


def test_report():
    response = client.post("/score/report", json={"text": PITCH})
    assert response.status_code == 200
    data = response.json()
    assert data["has_result"] is True
    assert 0 <= data["gauge"]["angle"] <= 180
    assert len(data["radar"]) == 5
    assert data["drivers"]["y_min"] <= -0.2
    assert data["drivers"]["y_max"] >= 0.2
    assert len(data["similar"]) == 5
    assert all(row["roi"].endswith("x") for row in data["similar"])


def test_report_failure_renders_empty_state(monkeypatch):
    monkeypatch.setattr(settings, "scorer_backend", "remote")
    monkeypatch.setattr(settings, "remote_scorer_url", "")
    response = client.post("/score/report", json={"text": PITCH})
    assert response.status_code == 200
    data = response.json()
    assert data["has_result"] is False
    assert data["error"]


def test_cancel_without_pending():
    response = client.delete("/score/session", headers={"X-Client-Id": "tab-9"})
    assert response.status_code == 200
    assert response.json() == {"cancelled": False}


def test_cancel_requires_client_id():
    response = client.delete("/score/session")
    assert response.status_code == 422


def _async_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_newer_submission_supersedes_pending(monkeypatch):
    monkeypatch.setattr(settings, "simulated_latency_s", 0.3)
    headers = {"X-Client-Id": "tab-2"}
    async with _async_client() as ac:
        first = asyncio.create_task(ac.post("/score", json={"text": PITCH}, headers=headers))
        await asyncio.sleep(0.05)
        second = await ac.post("/score", json={"text": PITCH, "genres": ["Drama"]}, headers=headers)
        first = await first

    assert first.status_code == 409
    assert second.status_code == 200
    assert second.json()["inferred_genres"] == ["Drama"]


@pytest.mark.asyncio
async def test_cancel_pending_submission(monkeypatch):
    monkeypatch.setattr(settings, "simulated_latency_s", 0.3)
    headers = {"X-Client-Id": "tab-3"}
    async with _async_client() as ac:
        pending = asyncio.create_task(ac.post("/score", json={"text": PITCH}, headers=headers))
        await asyncio.sleep(0.05)
        cancel = await ac.delete("/score/session", headers=headers)
        pending = await pending

    assert cancel.status_code == 200
    assert cancel.json() == {"cancelled": True}
    assert pending.status_code == 409
