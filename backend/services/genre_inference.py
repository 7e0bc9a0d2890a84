"""Keyword-based genre inference for pitch text.

Each table entry is a set of Spanish trigger stems mapped to one genre.
Matching folds case and accents on both sides, so "Misión", "MISION" and
"mision" all hit the same stem. A genre can be reached from several
entries; counts are summed per genre.
"""

import re
import unicodedata

GENRES: tuple[str, ...] = (
    "Acción",
    "Aventura",
    "Comedia",
    "Drama",
    "Romance",
    "Terror",
    "Sci-Fi",
    "Thriller",
    "Fantasia",
    "Animación",
)

# Order matters: it breaks ties between genres with equal counts, and
# within an entry earlier stems win at the same position.
KEYWORD_TABLE: list[tuple[tuple[str, ...], str]] = [
    (("space", "nave", "planeta", "robot", "ia", "inteligencia artificial", "futuro", "alien"), "Sci-Fi"),
    (("crimen", "asesin", "investigaci", "misterio", "conspiraci", "persecuci"), "Thriller"),
    (("risa", "chiste", "comedia", "humor", "torpe", "situaci"), "Comedia"),
    (("amor", "relaci", "pareja", "romance", "coraz"), "Romance"),
    (("magia", "reino", "hechic", "drag", "fantas"), "Fantasia"),
    (("miedo", "fantasma", "demon", "pose", "slasher", "terror"), "Terror"),
    (("batalla", "guerra", "rebel", "conflicto", "misión", "acción"), "Acción"),
    (("viaje", "búsqueda", "tesoro", "aventur"), "Aventura"),
    (("animaci", "dibujo", "stop motion"), "Animación"),
    (("drama", "familia", "superar", "enfermedad", "duelo"), "Drama"),
]


def fold(text: str) -> str:
    """Lower-case and strip diacritics ("Acción" -> "accion")."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


_COMPILED: list[tuple[re.Pattern, str]] = [
    (re.compile("|".join(re.escape(fold(stem)) for stem in stems)), genre)
    for stems, genre in KEYWORD_TABLE
]


def _genre_key(label: str) -> str:
    return re.sub(r"[^0-9a-z]", "", fold(label))


_CANONICAL: dict[str, str] = {_genre_key(g): g for g in GENRES}


def canonical_genre(label: str) -> str:
    """Map a user-supplied label onto a known genre name.

    "accion", "ACCIÓN" and "scifi" resolve to "Acción" and "Sci-Fi".
    Unknown labels are returned stripped but otherwise untouched.
    """
    label = label.strip()
    return _CANONICAL.get(_genre_key(label), label)


def count_genre_matches(text: str) -> dict[str, int]:
    """Count non-overlapping stem matches per genre (zero counts omitted)."""
    folded = fold(text)
    counts: dict[str, int] = {}
    for pattern, genre in _COMPILED:
        hits = len(pattern.findall(folded))
        if hits:
            counts[genre] = counts.get(genre, 0) + hits
    return counts


def infer_genres(text: str) -> list[str]:
    """Return genres ranked by match count, ties in table order.

    Empty or non-matching text yields an empty list; callers pick the
    fallback.
    """
    counts = count_genre_matches(text)
    # dict preserves first-seen order and sorted() is stable
    return [genre for genre, _ in sorted(counts.items(), key=lambda kv: kv[1], reverse=True)]
