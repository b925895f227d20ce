"""Uploaded clothing image data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from models.color import Color, to_hex
from models.taxonomy import INFERRED_TYPES


def _normalise_colors(values: Iterable[str]) -> Tuple[str, ...]:
    """Canonicalise hex strings, dropping anything that does not parse."""

    normalised = []
    for value in values or []:
        try:
            normalised.append(to_hex(str(value)))
        except ValueError:
            continue
    return tuple(normalised)


@dataclass(frozen=True)
class ClothingImage:
    """An uploaded clothing photo after color analysis.

    ``colors`` holds canonical hex strings ordered most dominant first.
    """

    id: str
    filename: str
    original_name: str
    colors: Tuple[str, ...] = field(default_factory=tuple)
    clothing_type: str = "unknown"
    url: str = ""
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", _normalise_colors(self.colors))
        if self.clothing_type not in INFERRED_TYPES:
            object.__setattr__(self, "clothing_type", "unknown")

    @property
    def color_objects(self) -> List[Color]:
        return [Color.from_hex(value) for value in self.colors]

    @property
    def color_names(self) -> List[str]:
        return [color.name for color in self.color_objects]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "filename": self.filename,
            "original_name": self.original_name,
            "colors": list(self.colors),
            "color_names": self.color_names,
            "clothing_type": self.clothing_type,
            "url": self.url,
        }


def from_payload(payload: Dict[str, Any]) -> ClothingImage:
    """Factory to build a :class:`ClothingImage` from an upload response entry."""

    image_id = payload.get("id")
    if not image_id:
        raise ValueError("Image payload is missing an 'id'")
    filename: Optional[str] = payload.get("filename")
    return ClothingImage(
        id=str(image_id),
        filename=str(filename or image_id),
        original_name=str(payload.get("original_name") or filename or image_id),
        colors=tuple(payload.get("colors") or ()),
        clothing_type=str(payload.get("clothing_type") or "unknown"),
        url=str(payload.get("url") or ""),
        width=int(payload.get("width") or 0),
        height=int(payload.get("height") or 0),
    )


__all__ = ["ClothingImage", "from_payload"]
