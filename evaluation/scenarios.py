"""Evaluation scenarios built from solid-color swatches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass
class Swatch:
    name: str
    rgb: Tuple[int, int, int]
    size: Tuple[int, int] = (60, 80)


@dataclass
class EvaluationScenario:
    name: str
    description: str
    occasion: str
    swatches: List[Swatch]
    expectations: Dict[str, object] = field(default_factory=dict)


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="red_cyan_complementary",
        description="Opposite hues are detected as complementary.",
        occasion="party",
        swatches=[Swatch("red", (255, 0, 0)), Swatch("cyan", (0, 255, 255))],
        expectations={"harmony": "complementary", "min_combinations": 2},
    ),
    EvaluationScenario(
        name="warm_analogous",
        description="Neighbouring warm hues stay analogous.",
        occasion="casual",
        swatches=[Swatch("red", (255, 0, 0)), Swatch("orange", (255, 128, 0)), Swatch("yellow", (255, 220, 0))],
        expectations={"harmony": "analogous", "min_combinations": 2},
    ),
    EvaluationScenario(
        name="blue_navy_formal",
        description="Tints of one hue read as analogous and score within bounds.",
        occasion="formal",
        swatches=[Swatch("blue", (30, 144, 255), (60, 120)), Swatch("navy", (0, 0, 128), (80, 50))],
        expectations={"harmony": "analogous", "min_combinations": 2},
    ),
    EvaluationScenario(
        name="spread_diverse",
        description="Hues spread widely without an opposite pair are diverse.",
        occasion="wedding",
        swatches=[Swatch("red", (255, 0, 0)), Swatch("green", (0, 255, 0)), Swatch("violet", (128, 0, 255))],
        expectations={"harmony_any": "diverse", "min_combinations": 2},
    ),
]

__all__ = ["EvaluationScenario", "Swatch", "SCENARIOS"]
