"""Hue-based color harmony classification."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, List, Sequence

from models.clothing_image import ClothingImage
from models.color import Color

logger = logging.getLogger(__name__)

COMPLEMENTARY_RANGE = (160.0, 200.0)
ANALOGOUS_MAX_RANGE = 60.0
TRIADIC_MAX_RANGE = 120.0
DEFAULT_COLORS_PER_IMAGE = 2


@dataclass(frozen=True)
class HarmonyResult:
    """Represents the outcome of a harmony evaluation."""

    label: str
    hues: List[float]
    hue_range: float
    complementary_pair: tuple | None = None


def _as_colors(colors: Iterable[Color | str]) -> List[Color]:
    return [color if isinstance(color, Color) else Color.from_hex(color) for color in colors]


def is_complementary(hue_a: float, hue_b: float) -> bool:
    """Return True when two hues sit roughly opposite on the color wheel."""

    low, high = COMPLEMENTARY_RANGE
    return low <= abs(hue_a - hue_b) <= high


def evaluate_harmony(colors: Iterable[Color | str]) -> HarmonyResult:
    """Classify a set of colors and keep the hue evidence for diagnostics.

    Complementary detection takes precedence over the range-based labels.
    """

    hues = [color.hue for color in _as_colors(colors)]
    if len(hues) < 2:
        logger.debug("harmony %s -> monochrome (fewer than two colors)", hues)
        return HarmonyResult(label="monochrome", hues=hues, hue_range=0.0)

    hue_range = max(hues) - min(hues)
    for hue_a, hue_b in combinations(hues, 2):
        if is_complementary(hue_a, hue_b):
            logger.debug("harmony %s -> complementary via (%s, %s)", hues, hue_a, hue_b)
            return HarmonyResult(
                label="complementary", hues=hues, hue_range=hue_range, complementary_pair=(hue_a, hue_b)
            )

    if hue_range <= ANALOGOUS_MAX_RANGE:
        label = "analogous"
    elif hue_range <= TRIADIC_MAX_RANGE:
        label = "triadic"
    else:
        label = "diverse"
    logger.debug("harmony %s range=%.1f -> %s", hues, hue_range, label)
    return HarmonyResult(label=label, hues=hues, hue_range=hue_range)


def classify_harmony(colors: Iterable[Color | str]) -> str:
    """Return the harmony label for a collection of colors."""

    return evaluate_harmony(colors).label


def harmony_colors(images: Sequence[ClothingImage], per_image: int = DEFAULT_COLORS_PER_IMAGE) -> List[str]:
    """Concatenate the most dominant colors of each image, in image order."""

    return [color for image in images for color in image.colors[:per_image]]


__all__ = [
    "HarmonyResult",
    "classify_harmony",
    "evaluate_harmony",
    "harmony_colors",
    "is_complementary",
]
