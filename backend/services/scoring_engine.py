"""Deterministic pitch scoring heuristic.

Maps a ScoreRequest to a ScoreResponse using fixed formulas seeded by the
request's content hash. This is a stand-in for a trained model: the
constants below are demo tuning, kept fixed so that every client sees the
same numbers for the same input.

Rules
-----
- NO I/O, NO clock, NO randomness
- Same request -> same response
- Total: never raises for a validated request
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

from models.requests import ScoreRequest, normalize_budget_hint
from models.responses import Driver, NearestItem, RadarProfile, ScoreResponse
from services.content_hash import content_hash, utf16_length
from services.genre_inference import infer_genres

FALLBACK_GENRE = "Drama"

# Additive prior per genre (unknown genres contribute 0)
GENRE_ADJUSTMENTS: dict[str, float] = {
    "Comedia": 0.03,
    "Sci-Fi": 0.02,
    "Terror": 0.00,
    "Drama": -0.01,
    "Romance": -0.02,
    "Thriller": 0.01,
    "Acción": 0.01,
}

BIG_BUDGET_GENRES = frozenset({"Sci-Fi", "Acción", "Fantasia"})
CROWD_PLEASER_GENRES = frozenset({"Comedia", "Terror"})

EPIC_RE = re.compile(r"space|batalla|drag|epic|guerra", re.IGNORECASE)
EPIC_BUDGET_USD = 40_000_000
DEFAULT_BUDGET_USD = 8_000_000
BIG_PEER_BUDGET_USD = 30_000_000
DEFAULT_PEER_BUDGET_USD = 8_000_000

# Weights of each radar axis in success_probability (risk is subtracted)
W_ORIGINALITY = 0.15
W_AUDIENCE = 0.12
W_BUDGET = 0.18
W_RISK = 0.15

# (title, year, return multiple); position selects the hash slice
REFERENCE_POOL: list[tuple[str, int, float]] = [
    ("Ex Machina", 2014, 3.7),
    ("Annihilation", 2018, 1.4),
    ("Get Out", 2017, 7.1),
    ("A Quiet Place", 2018, 5.4),
    ("Her", 2013, 2.9),
    ("Crazy Rich Asians", 2018, 7.3),
    ("Parasite", 2019, 20.0),
    ("Knives Out", 2019, 4.2),
    ("Mad Max: Fury Road", 2015, 2.7),
    ("The Conjuring", 2013, 13.3),
]
NEAREST_COUNT = 5


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


def _round_half_up(value: float, digits: int) -> float:
    """Round like JS ``Number.prototype.toFixed`` (ties away from zero)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)) + 0.0


def length_base(text: str) -> float:
    """Smooth reward for pitch length, centred on ~400 characters."""
    return min(0.4 + (math.tanh((utf16_length(text) - 400) / 600) + 1) * 0.25, 0.95)


def resolve_genres(request: ScoreRequest) -> list[str]:
    """Chosen genres, else the top-2 inferred from text, else Drama."""
    if request.genres:
        return list(request.genres)
    guessed = infer_genres(request.text)
    if guessed:
        return guessed[:2]
    return [FALLBACK_GENRE]


def genre_adjustment(genres: list[str]) -> float:
    return sum(GENRE_ADJUSTMENTS.get(g, 0.0) for g in genres)


def resolve_budget(request: ScoreRequest) -> float:
    hint = normalize_budget_hint(request.budget_hint_usd)
    if hint is not None:
        return hint
    if EPIC_RE.search(request.text):
        return EPIC_BUDGET_USD
    return DEFAULT_BUDGET_USD


def peer_budget(genres: list[str]) -> float:
    if BIG_BUDGET_GENRES.intersection(genres):
        return BIG_PEER_BUDGET_USD
    return DEFAULT_PEER_BUDGET_USD


def budget_feasibility(budget: float, peer: float) -> float:
    return _clamp(1 - abs(budget - peer) / max(1, peer * 2))


def derive_score(request: ScoreRequest) -> ScoreResponse:
    """Compute the full score report for *request*.

    Parameters
    ----------
    request : ScoreRequest
        Validated request. Negative or non-finite budget hints are
        treated as absent.

    Returns
    -------
    ScoreResponse
        success_probability in [0.05, 0.95], radar axes in [0, 1],
        five drivers by descending |impact| and the five most similar
        reference titles.
    """
    base = length_base(request.text)
    h = content_hash(request)

    genres = resolve_genres(request)
    genre_adj = genre_adjustment(genres)

    budget = resolve_budget(request)
    feasibility = budget_feasibility(budget, peer_budget(genres))

    # Sub-scores from disjoint-ish slices of the hash
    originality = _clamp((h % 100) / 100 * 0.6 + (0.2 if len(set(genres)) >= 2 else 0.05))
    clarity = _clamp(0.5 + ((h >> 5) % 50) / 150)
    audience = _clamp(
        0.4
        + (0.1 if CROWD_PLEASER_GENRES.intersection(genres) else 0)
        + ((h >> 7) % 30) / 200
    )
    risk = _clamp(1 - feasibility * 0.7 - ((h >> 9) % 20) / 100)

    originality_term = (originality - 0.5) * W_ORIGINALITY
    audience_term = (audience - 0.5) * W_AUDIENCE
    budget_term = (feasibility - 0.5) * W_BUDGET
    risk_term = (risk - 0.5) * W_RISK

    success = _clamp(
        base + genre_adj + originality_term + audience_term + budget_term - risk_term,
        0.05,
        0.95,
    )

    drivers = [
        Driver(feature="+".join(genres), impact=_round_half_up(genre_adj, 3)),
        Driver(feature="originality_index", impact=_round_half_up(originality_term, 3)),
        Driver(feature="audience_appeal", impact=_round_half_up(audience_term, 3)),
        Driver(feature="budget_vs_peers", impact=_round_half_up(budget_term, 3)),
        Driver(feature="production_risk", impact=-_round_half_up(risk_term, 3) + 0.0),
    ]
    drivers.sort(key=lambda d: abs(d.impact), reverse=True)

    return ScoreResponse(
        success_probability=success,
        radar=RadarProfile(
            originality=originality,
            clarity=clarity,
            audience_appeal=audience,
            budget_feasibility=feasibility,
            production_risk=risk,
        ),
        drivers=drivers,
        nearest_items=nearest_items(h),
        inferred_genres=genres,
        scorer="heuristic",
    )


def nearest_items(h: int) -> list[NearestItem]:
    """Pick the most "similar" reference titles for hash *h*.

    Title i gets similarity 0.6 + ((h >> (i + 1)) % 35) / 100, so values
    fall in [0.6, 0.94]. Ties keep pool order.
    """
    scored = [
        NearestItem(
            title=title,
            year=year,
            similarity=_round_half_up(0.6 + ((h >> (i + 1)) % 35) / 100, 2),
            roi=roi,
        )
        for i, (title, year, roi) in enumerate(REFERENCE_POOL)
    ]
    scored.sort(key=lambda item: item.similarity, reverse=True)
    return scored[:NEAREST_COUNT]
