"""Outfit combination schema."""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from models.clothing_image import ClothingImage


@dataclass(frozen=True)
class Combination:
    id: int
    images: Tuple[ClothingImage, ...]
    harmony: str
    score: int
    rating: int
    style_notes: str = ""
    color_analysis: str = ""
    recommendation: str = ""
    details: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "images": [image.to_dict() for image in self.images],
            "score": self.score,
            "rating": self.rating,
            "harmony": self.harmony,
            "style_notes": self.style_notes,
            "color_analysis": self.color_analysis,
            "recommendation": self.recommendation,
        }
