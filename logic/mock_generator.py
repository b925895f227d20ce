"""Random combination stub for front-end development.

This mirrors the in-browser demo: random image subsets, a 4-5 star rating
and phrases picked at random. It is never mixed with the deterministic
scorer and is only served when ``generator_mode`` is ``mock``.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence

from models.clothing_image import ClothingImage
from models.combination import Combination
from models.taxonomy import normalize_clothing_type, normalize_color_preference, normalize_occasion
from logic.style_text import CLOTHING_TYPE_CLAUSES

logger = logging.getLogger(__name__)

COLOR_PREFERENCE_ANALYSES: Dict[str, List[str]] = {
    "bright": [
        "Vibrant colors create an energetic and confident look",
        "Bold color choices make a strong fashion statement",
        "Bright hues add personality and visual interest",
    ],
    "dark": [
        "Deep tones create a sophisticated and elegant appearance",
        "Dark colors provide a timeless and versatile foundation",
        "Rich colors convey professionalism and refinement",
    ],
    "neutral": [
        "Neutral tones offer versatility and timeless appeal",
        "Subtle colors create a balanced and harmonious look",
        "Earth tones provide a natural and calming aesthetic",
    ],
    "pastel": [
        "Soft pastels create a gentle and romantic appearance",
        "Light colors bring freshness to the outfit",
        "Delicate hues offer a dreamy and ethereal quality",
    ],
    "": [
        "Well-coordinated colors create visual harmony",
        "Complementary tones enhance the overall aesthetic",
        "Balanced color palette ensures a cohesive look",
    ],
}

OCCASION_NOTES: Dict[str, List[str]] = {
    "casual": [
        "Perfect for relaxed everyday activities and social gatherings",
        "Comfortable yet stylish for weekend outings",
        "Effortlessly chic for casual meetups and errands",
    ],
    "formal": [
        "Sophisticated ensemble suitable for business meetings",
        "Elegant combination perfect for formal events",
        "Professional appearance that commands respect",
    ],
    "party": [
        "Eye-catching outfit that stands out in social settings",
        "Fun and festive look perfect for celebrations",
        "Trendy combination that photographs beautifully",
    ],
    "business": [
        "Professional attire that projects confidence and competence",
        "Polished look suitable for corporate environments",
        "Conservative yet stylish for workplace success",
    ],
    "sports": [
        "Comfortable and functional for active pursuits",
        "Athletic-inspired look that prioritizes movement",
        "Practical combination for fitness and outdoor activities",
    ],
    "wedding": [
        "Elegant and appropriate for special celebrations",
        "Refined look that respects the formal occasion",
        "Beautiful ensemble perfect for memorable moments",
    ],
}
GENERIC_NOTE = "Stylish combination perfect for your selected occasion"


def mock_color_analysis(color_preference: Optional[str], rng: random.Random) -> str:
    options = COLOR_PREFERENCE_ANALYSES[normalize_color_preference(color_preference) or ""]
    return rng.choice(options)


def mock_style_notes(occasion: Optional[str], clothing_type: Optional[str], rng: random.Random) -> str:
    options = OCCASION_NOTES.get(normalize_occasion(occasion))
    note = rng.choice(options) if options else GENERIC_NOTE
    type_key = normalize_clothing_type(clothing_type)
    if type_key:
        note += ". " + CLOTHING_TYPE_CLAUSES[type_key] + "."
    return note


def _random_images(images: Sequence[ClothingImage], rng: random.Random) -> List[ClothingImage]:
    count = min(rng.randint(2, 4), len(images))
    shuffled = list(images)
    rng.shuffle(shuffled)
    return shuffled[:count]


def mock_combinations(
    images: Sequence[ClothingImage],
    occasion: str,
    clothing_type: Optional[str] = None,
    color_preference: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> List[Combination]:
    """Return 2-4 randomly assembled combinations with random 4-5 star ratings."""

    rng = rng or random.Random()
    total = min(max(2, len(images) // 2), 4)
    combinations = []
    for index in range(1, total + 1):
        rating = rng.randint(4, 5)
        confidence = rng.randint(80, 95)
        combinations.append(
            Combination(
                id=index,
                images=tuple(_random_images(images, rng)),
                harmony="unscored",
                score=confidence,
                rating=rating,
                style_notes=mock_style_notes(occasion, clothing_type, rng),
                color_analysis=mock_color_analysis(color_preference, rng),
                recommendation="Generated by the development mock; not scored.",
                details={"mock": True},
            )
        )
    logger.info("Generated %s mock combinations", len(combinations))
    return combinations


__all__ = ["mock_combinations", "mock_color_analysis", "mock_style_notes"]
