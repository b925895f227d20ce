"""Deterministic combination assembly with transparent diagnostics."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from logic import style_text
from logic.harmony import DEFAULT_COLORS_PER_IMAGE, evaluate_harmony, harmony_colors
from logic.outfit_scoring import score_breakdown
from models.clothing_image import ClothingImage
from models.color import Color
from models.combination import Combination

logger = logging.getLogger(__name__)

MIN_IMAGES = 2
MIN_COMBINATIONS = 2
MAX_COMBINATIONS = 4
MIN_WINDOW = 2
WINDOW_SIZES = 3


class InsufficientImagesError(ValueError):
    """Raised when fewer images than a combination needs are supplied."""


@dataclass(frozen=True)
class CombinationBuildResult:
    combinations: List[Combination]
    diagnostics: Dict[str, object]


def combination_count(image_count: int) -> int:
    """Number of combinations offered for ``image_count`` uploads."""

    return min(max(MIN_COMBINATIONS, image_count // 2), MAX_COMBINATIONS)


def sliding_windows(images: Sequence[ClothingImage]) -> List[List[ClothingImage]]:
    """Select image subsets by position, wrapping around to pad short windows.

    Window ``i`` starts at image ``i`` and holds 2, 3 or 4 images in turn.
    Clothing types are not considered, so two bottoms may share a window.
    """

    total = len(images)
    windows = []
    for index in range(combination_count(total)):
        size = min(MIN_WINDOW + index % WINDOW_SIZES, total)
        windows.append([images[(index + offset) % total] for offset in range(size)])
    return windows


def _build_one(
    window: List[ClothingImage],
    occasion: str,
    clothing_type: Optional[str],
    color_preference: Optional[str],
    colors_per_image: int,
) -> Combination:
    colors = harmony_colors(window, per_image=colors_per_image)
    harmony = evaluate_harmony(colors)
    breakdown = score_breakdown(harmony.label, occasion)
    score = int(breakdown["score"])
    color_names = [Color.from_hex(color).name for color in colors]
    return Combination(
        id=0,
        images=tuple(window),
        harmony=harmony.label,
        score=score,
        rating=int(breakdown["rating"]),
        style_notes=style_text.style_notes(harmony.label, occasion, clothing_type),
        color_analysis=style_text.color_analysis(harmony.label, color_preference, color_names),
        recommendation=style_text.recommendation(occasion, score),
        details={"colors": colors, "hue_range": round(harmony.hue_range, 1), "score": breakdown},
    )


def build_combinations(
    images: Sequence[ClothingImage],
    occasion: str,
    clothing_type: Optional[str] = None,
    color_preference: Optional[str] = None,
    colors_per_image: int = DEFAULT_COLORS_PER_IMAGE,
) -> CombinationBuildResult:
    """Score every sliding window and rank the combinations by score."""

    if len(images) < MIN_IMAGES:
        raise InsufficientImagesError(f"At least {MIN_IMAGES} images are required, got {len(images)}")

    scored = [
        _build_one(window, occasion, clothing_type, color_preference, colors_per_image)
        for window in sliding_windows(images)
    ]
    ranked = sorted(scored, key=lambda combination: -combination.score)
    combinations = [
        replace(combination, id=position)
        for position, combination in enumerate(ranked, start=1)
    ]
    diagnostics: Dict[str, object] = {
        "image_count": len(images),
        "windows": [[image.id for image in combination.images] for combination in scored],
        "scores": [combination.score for combination in combinations],
        "harmonies": [combination.harmony for combination in combinations],
    }
    logger.info(
        "Built %s combinations from %s images for occasion=%s", len(combinations), len(images), occasion
    )
    return CombinationBuildResult(combinations=combinations, diagnostics=diagnostics)


def generate_combinations(
    images: Sequence[ClothingImage],
    occasion: str,
    clothing_type: Optional[str] = None,
    color_preference: Optional[str] = None,
) -> List[Combination]:
    """Return ranked combinations, highest score first."""

    return build_combinations(images, occasion, clothing_type, color_preference).combinations


__all__ = [
    "InsufficientImagesError",
    "CombinationBuildResult",
    "combination_count",
    "sliding_windows",
    "build_combinations",
    "generate_combinations",
]
