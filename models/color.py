"""RGB color value type with hex and hue helpers."""
from __future__ import annotations

import colorsys
import re
from dataclasses import dataclass
from typing import Tuple

from models.taxonomy import nearest_color_name

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")


def _clamp_channel(value: float) -> int:
    return max(0, min(255, int(round(value))))


@dataclass(frozen=True)
class Color:
    """A 24-bit RGB color. ``hex`` is the canonical ``#rrggbb`` form."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"RGB channel out of range: {channel}")

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> "Color":
        """Build a color from possibly fractional channels, rounding and clamping."""

        return cls(_clamp_channel(r), _clamp_channel(g), _clamp_channel(b))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        match = _HEX_PATTERN.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise ValueError(f"Invalid hex color '{value}'")
        digits = match.group(1)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(self.r, self.g, self.b)

    @property
    def hue(self) -> float:
        """Hue in degrees within ``[0, 360)``; achromatic colors report 0."""

        h, _, _ = colorsys.rgb_to_hsv(self.r / 255.0, self.g / 255.0, self.b / 255.0)
        return (h * 360.0) % 360.0

    @property
    def name(self) -> str:
        return nearest_color_name(self.rgb)

    def __str__(self) -> str:
        return self.hex


def to_hex(value: "Color | str") -> str:
    """Return the canonical hex form of a :class:`Color` or hex string."""

    if isinstance(value, Color):
        return value.hex
    return Color.from_hex(value).hex


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)

__all__ = ["Color", "BLACK", "WHITE", "to_hex"]
