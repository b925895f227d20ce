"""Dominant color extraction with k-means over pixel values."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np
from PIL import Image, UnidentifiedImageError
from sklearn.cluster import KMeans

from models.color import BLACK, WHITE, Color

logger = logging.getLogger(__name__)

DEFAULT_COLOR_COUNT = 5
RANDOM_STATE = 42
N_INIT = 10
MAX_SAMPLE_SIDE = 150
FALLBACK_COLORS = (BLACK.hex, WHITE.hex)


@dataclass(frozen=True)
class ExtractionResult:
    """Representative colors for one image plus its original dimensions."""

    colors: List[str] = field(default_factory=lambda: list(FALLBACK_COLORS))
    width: int = 0
    height: int = 0
    fallback: bool = False


def _fallback(width: int = 0, height: int = 0) -> ExtractionResult:
    return ExtractionResult(colors=list(FALLBACK_COLORS), width=width, height=height, fallback=True)


def _pixels(image: Image.Image) -> np.ndarray:
    sample = image.convert("RGB")
    sample.thumbnail((MAX_SAMPLE_SIDE, MAX_SAMPLE_SIDE))
    return np.asarray(sample, dtype=np.float64).reshape(-1, 3)


def cluster_colors(pixels: np.ndarray, k: int = DEFAULT_COLOR_COUNT) -> List[str]:
    """Cluster ``(N, 3)`` RGB points and return centroid hex colors, largest cluster first."""

    if pixels.size == 0:
        raise ValueError("No pixels to cluster")
    distinct = np.unique(pixels, axis=0)
    n_clusters = max(1, min(k, len(distinct)))
    kmeans = KMeans(n_clusters=n_clusters, random_state=RANDOM_STATE, n_init=N_INIT)
    labels = kmeans.fit_predict(pixels)
    counts = np.bincount(labels, minlength=n_clusters)

    clusters = []
    for index, centroid in enumerate(kmeans.cluster_centers_):
        color = Color.from_rgb(*centroid)
        clusters.append((int(counts[index]), color.hex))
    clusters.sort(key=lambda entry: (-entry[0], entry[1]))

    ordered: List[str] = []
    for _, hex_value in clusters:
        if hex_value not in ordered:
            ordered.append(hex_value)
    return ordered


def extract_colors_from_image(image: Image.Image, k: int = DEFAULT_COLOR_COUNT) -> ExtractionResult:
    """Return up to ``k`` representative colors for an already opened image."""

    width, height = image.size
    if width == 0 or height == 0:
        logger.warning("Image has no pixels, using fallback colors")
        return _fallback(width, height)
    try:
        pixels = _pixels(image)
        colors = cluster_colors(pixels, k)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Color extraction failed, using fallback colors: %s", exc)
        return _fallback(width, height)
    logger.debug("Extracted %s colors from %sx%s image: %s", len(colors), width, height, colors)
    return ExtractionResult(colors=colors, width=width, height=height)


def extract_colors(image_bytes: bytes, k: int = DEFAULT_COLOR_COUNT) -> ExtractionResult:
    """Decode raw image bytes and extract representative colors.

    Unreadable or empty images never raise; they yield the black/white
    fallback pair so the caller can keep going.
    """

    if not image_bytes:
        logger.warning("Empty image payload, using fallback colors")
        return _fallback()
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            image.load()
            return extract_colors_from_image(image, k)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        logger.warning("Unreadable image, using fallback colors: %s", exc)
        return _fallback()


__all__ = [
    "DEFAULT_COLOR_COUNT",
    "FALLBACK_COLORS",
    "ExtractionResult",
    "cluster_colors",
    "extract_colors",
    "extract_colors_from_image",
]
