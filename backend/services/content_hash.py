"""Deterministic content fingerprint for score requests.

The fingerprint seeds every pseudo-random sub-score, so it must be
identical across processes, platforms and client implementations:

* text and options are measured in UTF-16 code units (browser string
  semantics), not Python code points;
* options are serialized with a fixed key order, compact separators and
  literal non-ASCII characters (``ENCODING_VERSION`` 1);
* the hash is ``h = (h * 31 + unit) mod 2**32`` over those units.

Changing any of this changes every score. Bump ``ENCODING_VERSION`` if
you do.
"""

import json

from models.requests import ScoreRequest, normalize_budget_hint

ENCODING_VERSION = 1

_MASK32 = 0xFFFFFFFF


def utf16_code_units(text: str) -> list[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


def utf16_length(text: str) -> int:
    """Length as a browser would report it (astral chars count twice)."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def rolling_hash(text: str) -> int:
    """32-bit unsigned polynomial hash (base 31) over UTF-16 code units."""
    h = 0
    for unit in utf16_code_units(text):
        h = (h * 31 + unit) & _MASK32
    return h


def _json_number(value: float) -> int | float:
    # Integral values serialize without ".0", matching JSON written by JS.
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def canonical_options(request: ScoreRequest) -> str:
    """Serialize the structured options of a request.

    Key order is genres, tone, rating, budget_hint_usd; tone and budget
    are omitted when absent.
    """
    payload: dict = {"genres": list(request.genres)}
    if request.tone:
        payload["tone"] = request.tone
    payload["rating"] = request.rating
    budget = normalize_budget_hint(request.budget_hint_usd)
    if budget is not None:
        payload["budget_hint_usd"] = _json_number(budget)
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def content_hash(request: ScoreRequest) -> int:
    return rolling_hash(request.text + canonical_options(request))
