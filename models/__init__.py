"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_image import ClothingImage, from_payload
from models.color import Color
from models.combination import Combination

__all__ = ["ClothingImage", "Color", "Combination", "from_payload"]
