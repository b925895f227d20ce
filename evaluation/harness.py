"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

import io
from typing import Dict, List

from PIL import Image

from evaluation.scenarios import EvaluationScenario, SCENARIOS, Swatch
from logic.clothing_type import infer_clothing_type
from logic.color_extraction import extract_colors
from logic.combination_builder import build_combinations
from logic.outfit_scoring import MAX_SCORE, MIN_SCORE
from models.clothing_image import ClothingImage


def swatch_bytes(swatch: Swatch, image_format: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", swatch.size, swatch.rgb).save(buffer, format=image_format)
    return buffer.getvalue()


def _swatch_image(swatch: Swatch) -> ClothingImage:
    extraction = extract_colors(swatch_bytes(swatch))
    return ClothingImage(
        id=swatch.name,
        filename=f"{swatch.name}.png",
        original_name=f"{swatch.name}.png",
        colors=tuple(extraction.colors),
        clothing_type=infer_clothing_type(extraction.width, extraction.height),
        width=extraction.width,
        height=extraction.height,
    )


def _evaluate_expectations(expectations: Dict[str, object], combinations: List[Dict[str, object]]) -> Dict[str, object]:
    checks: Dict[str, bool] = {}
    checks["min_combinations"] = len(combinations) >= int(expectations.get("min_combinations", 1))
    checks["score_bounds"] = all(MIN_SCORE <= c["score"] <= MAX_SCORE for c in combinations)
    checks["sorted"] = [c["score"] for c in combinations] == sorted((c["score"] for c in combinations), reverse=True)
    if expectations.get("harmony"):
        checks["harmony"] = all(c["harmony"] == expectations["harmony"] for c in combinations)
    if expectations.get("harmony_any"):
        checks["harmony_any"] = any(c["harmony"] == expectations["harmony_any"] for c in combinations)
    return {"passed": all(checks.values()), "checks": checks}


def run_scenario(scenario: EvaluationScenario) -> Dict[str, object]:
    images = [_swatch_image(swatch) for swatch in scenario.swatches]
    result = build_combinations(images, scenario.occasion)
    combinations = [combination.to_dict() for combination in result.combinations]
    evaluation = _evaluate_expectations(scenario.expectations, combinations)
    return {
        "scenario": scenario.name,
        "passed": evaluation["passed"],
        "checks": evaluation["checks"],
        "combination_count": len(combinations),
        "combinations": combinations,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks", "swatch_bytes"]
