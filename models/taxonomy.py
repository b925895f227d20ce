"""Canonical taxonomy definitions for uploads and outfit requests.

This module centralises the labels accepted from the request form (occasions,
clothing types, color preferences), the upload rules and the named color
table. Helper functions keep normalisation consistent across the logic,
server and CLI layers.
"""

from typing import Dict, List, Optional, Tuple


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "-").replace("_", "-")


OCCASIONS: List[str] = ["casual", "formal", "party", "business", "sports", "wedding"]

CLOTHING_TYPES: List[str] = [
    "shirt",
    "t-shirt",
    "pants",
    "jeans",
    "dress",
    "skirt",
    "jacket",
    "sweater",
]

COLOR_PREFERENCES: List[str] = ["bright", "dark", "neutral", "pastel"]

# Coarse tags produced by aspect-ratio inference on uploads.
INFERRED_TYPES: List[str] = ["top", "bottom", "dress", "shoes", "unknown"]

HARMONY_LABELS: List[str] = ["complementary", "analogous", "triadic", "monochrome", "diverse"]

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "bmp", "webp"}

NAMED_COLORS: Dict[str, Tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "gray": (128, 128, 128),
    "red": (220, 20, 60),
    "orange": (255, 140, 0),
    "yellow": (255, 215, 0),
    "green": (34, 139, 34),
    "cyan": (0, 255, 255),
    "blue": (30, 144, 255),
    "navy": (0, 0, 128),
    "purple": (128, 0, 128),
    "pink": (255, 105, 180),
    "brown": (139, 69, 19),
    "beige": (245, 245, 220),
}


def normalize_occasion(value: Optional[str]) -> str:
    """Return a lower-cased occasion key; unknown occasions pass through."""

    return _normalize_key(value or "")


def normalize_clothing_type(value: Optional[str]) -> Optional[str]:
    """Map a preferred clothing type to its canonical key or ``None``."""

    if not value:
        return None
    key = _normalize_key(value)
    if key in {"tshirt", "tee"}:
        key = "t-shirt"
    return key if key in CLOTHING_TYPES else None


def normalize_color_preference(value: Optional[str]) -> Optional[str]:
    """Return the canonical color preference or ``None`` when unset/unknown."""

    key = _normalize_key(value or "")
    return key if key in COLOR_PREFERENCES else None


def allowed_file(filename: str) -> bool:
    """Return True when the file name carries an accepted image extension."""

    if not filename or "." not in filename:
        return False
    return filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def nearest_color_name(rgb: Tuple[int, int, int]) -> str:
    """Return the named color closest to ``rgb`` by squared RGB distance."""

    r, g, b = rgb
    best_name = "black"
    best_distance = None
    for name, (nr, ng, nb) in NAMED_COLORS.items():
        distance = (r - nr) ** 2 + (g - ng) ** 2 + (b - nb) ** 2
        if best_distance is None or distance < best_distance:
            best_name = name
            best_distance = distance
    return best_name


__all__ = [
    "OCCASIONS",
    "CLOTHING_TYPES",
    "COLOR_PREFERENCES",
    "INFERRED_TYPES",
    "HARMONY_LABELS",
    "ALLOWED_EXTENSIONS",
    "NAMED_COLORS",
    "normalize_occasion",
    "normalize_clothing_type",
    "normalize_color_preference",
    "allowed_file",
    "nearest_color_name",
]
