"""Coarse clothing type inference from image proportions."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DRESS_MIN_RATIO = 1.6
BOTTOM_MIN_RATIO = 1.2
SHOES_MAX_RATIO = 0.75


def infer_clothing_type(width: int, height: int) -> str:
    """Guess a type tag from the height/width ratio of a product photo.

    Tall narrow shots read as dresses or bottoms, wide shots as shoes and
    everything in between as a top. Missing dimensions yield ``unknown``.
    """

    if not width or not height or width < 0 or height < 0:
        return "unknown"
    ratio = height / width
    if ratio >= DRESS_MIN_RATIO:
        tag = "dress"
    elif ratio >= BOTTOM_MIN_RATIO:
        tag = "bottom"
    elif ratio <= SHOES_MAX_RATIO:
        tag = "shoes"
    else:
        tag = "top"
    logger.debug("Inferred clothing type %s from %sx%s (ratio %.2f)", tag, width, height, ratio)
    return tag


__all__ = ["infer_clothing_type"]
