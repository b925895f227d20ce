"""Pure data-to-view transformation for rendering combinations."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from models.combination import Combination

FULL_STAR = "★"
EMPTY_STAR = "☆"
MAX_STARS = 5


def star_string(rating: int) -> str:
    filled = max(0, min(MAX_STARS, rating))
    return FULL_STAR * filled + EMPTY_STAR * (MAX_STARS - filled)


def combination_view(combination: Combination) -> Dict[str, Any]:
    """Shape one combination into the fields a results card displays."""

    return {
        "title": f"Combination {combination.id}",
        "stars": star_string(combination.rating),
        "score_label": f"{combination.score}%",
        "harmony": combination.harmony,
        "images": [
            {"src": image.url, "alt": image.original_name, "clothing_type": image.clothing_type}
            for image in combination.images
        ],
        "sections": [
            {"label": "Color Harmony", "text": combination.color_analysis},
            {"label": "Style Notes", "text": combination.style_notes},
            {"label": "Recommendation", "text": combination.recommendation},
        ],
    }


def results_view(combinations: Iterable[Combination]) -> List[Dict[str, Any]]:
    return [combination_view(combination) for combination in combinations]


__all__ = ["combination_view", "results_view", "star_string"]
