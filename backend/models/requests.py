import math
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from services.genre_inference import canonical_genre

RATINGS = ("G", "PG", "PG-13", "R", "NC-17")
TONES = ("luminoso", "oscuro", "feel-good", "satírico", "épico", "íntimo")

Rating = Literal["G", "PG", "PG-13", "R", "NC-17"]
Tone = Literal["luminoso", "oscuro", "feel-good", "satírico", "épico", "íntimo"]

# Whitespace stripped by JS String.prototype.trim(): unlike str.strip() it
# includes U+FEFF and excludes the U+001C-U+001F separators.
JS_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def normalize_budget_hint(value: float | None) -> float | None:
    """Treat negative or non-finite budget hints as absent."""
    if value is None:
        return None
    try:
        value = float(value)
    except OverflowError:
        # ints beyond float range
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


class ScoreRequest(BaseModel):
    text: str = Field(..., description="Pitch / logline, free text")
    genres: list[str] = Field(default_factory=list, description="Chosen genres; inferred from text when empty")
    tone: Tone | None = None
    rating: Rating = "PG-13"
    budget_hint_usd: float | None = Field(default=None, description="Target budget in USD")

    @field_validator("text", mode="before")
    @classmethod
    def _strip_text(cls, value):
        return value.strip(JS_WHITESPACE) if isinstance(value, str) else value

    @field_validator("genres")
    @classmethod
    def _dedupe_genres(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for label in value:
            label = canonical_genre(label)
            if label and label not in seen:
                seen.append(label)
        return seen

    @field_validator("tone", mode="before")
    @classmethod
    def _blank_tone(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("budget_hint_usd", mode="before")
    @classmethod
    def _coerce_budget(cls, value):
        # Blank form input means "no hint"; garbage text is a real error.
        if isinstance(value, bool):
            raise ValueError("budget_hint_usd must be a number")
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            try:
                value = float(value)
            except ValueError:
                raise ValueError("budget_hint_usd must be a number") from None
        if isinstance(value, (int, float)):
            return normalize_budget_hint(value)
        return value
