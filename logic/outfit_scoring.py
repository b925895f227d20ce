"""Deterministic scoring for candidate outfits."""

from __future__ import annotations

import math
from typing import Dict, Tuple

from models.taxonomy import normalize_occasion

HARMONY_BASE_SCORES: Dict[str, int] = {
    "complementary": 95,
    "analogous": 90,
    "triadic": 85,
    "monochrome": 80,
    "diverse": 75,
}
UNKNOWN_HARMONY_SCORE = 70

# occasion -> (favoured harmony labels, multiplier when favoured, multiplier otherwise)
OCCASION_MULTIPLIERS: Dict[str, Tuple[frozenset, float, float]] = {
    "formal": (frozenset({"complementary", "monochrome"}), 0.9, 0.8),
    "party": (frozenset({"complementary", "diverse"}), 0.95, 0.85),
    "casual": (frozenset({"analogous", "diverse"}), 1.0, 0.95),
    "business": (frozenset({"monochrome", "analogous"}), 0.95, 0.85),
    "sports": (frozenset({"complementary", "diverse"}), 0.9, 0.85),
    "wedding": (frozenset({"analogous", "monochrome"}), 0.95, 0.85),
}
DEFAULT_MULTIPLIER = 0.9

MIN_SCORE = 65
MAX_SCORE = 95
MIN_RATING = 1
MAX_RATING = 5


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def base_score(harmony: str) -> int:
    return HARMONY_BASE_SCORES.get(harmony, UNKNOWN_HARMONY_SCORE)


def occasion_multiplier(harmony: str, occasion: str | None) -> float:
    """Return the occasion weight in ``(0, 1]`` for the given harmony label."""

    entry = OCCASION_MULTIPLIERS.get(normalize_occasion(occasion))
    if entry is None:
        return DEFAULT_MULTIPLIER
    favoured, preferred, other = entry
    return preferred if harmony in favoured else other


def score_breakdown(harmony: str, occasion: str | None) -> Dict[str, object]:
    """Return every intermediate value of the score for diagnostics."""

    base = base_score(harmony)
    multiplier = occasion_multiplier(harmony, occasion)
    raw = int(base * multiplier)
    score = _clamp(raw, MIN_SCORE, MAX_SCORE)
    return {
        "harmony": harmony,
        "occasion": normalize_occasion(occasion),
        "base": base,
        "multiplier": multiplier,
        "raw": raw,
        "score": score,
        "rating": star_rating(score),
    }


def score_combination(harmony: str, occasion: str | None) -> int:
    """Calculate the bounded integer compatibility score."""

    return int(score_breakdown(harmony, occasion)["score"])


def star_rating(score: int) -> int:
    return _clamp(math.floor(score / 20) + 1, MIN_RATING, MAX_RATING)


__all__ = [
    "HARMONY_BASE_SCORES",
    "OCCASION_MULTIPLIERS",
    "MIN_SCORE",
    "MAX_SCORE",
    "base_score",
    "occasion_multiplier",
    "score_breakdown",
    "score_combination",
    "star_rating",
]
