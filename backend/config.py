import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    debug: bool = False

    # Scoring backend
    scorer_backend: str = "heuristic"  # "heuristic" | "remote"
    simulated_latency_s: float = 0.6  # artificial delay of the heuristic scorer
    remote_scorer_url: str = ""  # POST endpoint of a real scoring model
    remote_timeout_s: float = 10.0

    # Request limits
    max_pitch_chars: int = 20000
    rate_limit: str = "30/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
