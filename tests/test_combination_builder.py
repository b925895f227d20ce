"""Tests for combination selection, canned text and the view model."""
from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic import style_text
from logic.combination_builder import (
    InsufficientImagesError,
    build_combinations,
    combination_count,
    generate_combinations,
    sliding_windows,
)
from logic.mock_generator import mock_combinations
from logic.view_model import combination_view, star_string
from models.clothing_image import ClothingImage


def _images(*colors: str) -> List[ClothingImage]:
    return [
        ClothingImage(
            id=f"img{index}",
            filename=f"img{index}.png",
            original_name=f"photo{index}.png",
            colors=(color,),
            clothing_type="top",
            url=f"/uploads/img{index}.png",
        )
        for index, color in enumerate(colors)
    ]


@pytest.mark.parametrize("count, expected", [(2, 2), (3, 2), (4, 2), (6, 3), (8, 4), (12, 4)])
def test_combination_count(count: int, expected: int) -> None:
    assert combination_count(count) == expected


def test_sliding_windows_wrap_around() -> None:
    images = _images("#ff0000", "#00ff00", "#0000ff", "#ffff00", "#00ffff", "#ff00ff")
    windows = [[image.id for image in window] for window in sliding_windows(images)]
    assert windows == [
        ["img0", "img1"],
        ["img1", "img2", "img3"],
        ["img2", "img3", "img4", "img5"],
    ]


def test_windows_never_exceed_image_count() -> None:
    windows = sliding_windows(_images("#ff0000", "#00ffff"))
    assert [[image.id for image in window] for window in windows] == [["img0", "img1"], ["img1", "img0"]]


def test_red_cyan_pair_is_complementary() -> None:
    combinations = generate_combinations(_images("#FF0000", "#00FFFF"), "party")
    assert {combination.harmony for combination in combinations} == {"complementary"}
    assert all(combination.score == 90 and combination.rating == 5 for combination in combinations)


def test_combinations_sorted_by_score_with_ordinal_ids() -> None:
    images = _images("#ff0000", "#ff8000", "#00ff00", "#8000ff", "#ffcc00", "#0000ff")
    result = build_combinations(images, "formal", clothing_type="jeans", color_preference="dark")
    scores = [combination.score for combination in result.combinations]
    assert scores == sorted(scores, reverse=True)
    assert [combination.id for combination in result.combinations] == list(range(1, len(scores) + 1))
    assert all(2 <= len(combination.images) <= 4 for combination in result.combinations)
    assert result.diagnostics["image_count"] == 6
    assert "Denim" in result.combinations[0].style_notes
    assert "dark colors" in result.combinations[0].color_analysis


def test_results_are_deterministic() -> None:
    images = _images("#ff0000", "#00ff00", "#0000ff", "#ffff00")
    first = [c.to_dict() for c in generate_combinations(images, "casual")]
    second = [c.to_dict() for c in generate_combinations(images, "casual")]
    assert first == second


@pytest.mark.parametrize("count", [0, 1])
def test_fewer_than_two_images_rejected(count: int) -> None:
    with pytest.raises(InsufficientImagesError):
        build_combinations(_images(*["#ff0000"] * count), "casual")


def test_style_notes_compose_harmony_occasion_and_type() -> None:
    note = style_text.style_notes("complementary", "wedding", "dress")
    assert note.startswith(style_text.HARMONY_PHRASES["complementary"])
    assert style_text.OCCASION_PHRASES["wedding"] in note
    assert style_text.CLOTHING_TYPE_CLAUSES["dress"] in note
    assert style_text.style_notes("complementary", "wedding", "cape") == style_text.style_notes(
        "complementary", "wedding"
    )
    assert style_text.GENERIC_OCCASION_PHRASE in style_text.style_notes("mystery", "picnic")


def test_recommendation_banded_by_score() -> None:
    assert style_text.recommendation("party", 90).startswith("Highly recommended")
    assert style_text.recommendation("party", 76).startswith("Recommended")
    assert style_text.recommendation("party", 65).startswith("Worth trying")


def test_view_model_shapes_a_card() -> None:
    combination = generate_combinations(_images("#ff0000", "#00ffff"), "formal")[0]
    view = combination_view(combination)
    assert view["title"] == "Combination 1"
    assert view["stars"] == star_string(combination.rating)
    assert view["score_label"] == f"{combination.score}%"
    assert [section["label"] for section in view["sections"]] == ["Color Harmony", "Style Notes", "Recommendation"]
    assert view["images"][0]["src"].startswith("/uploads/")


def test_star_string() -> None:
    assert star_string(4) == "★★★★☆"
    assert star_string(7) == "★★★★★"
    assert star_string(0) == "☆☆☆☆☆"


def test_mock_generator_uses_injected_random_source() -> None:
    images = _images("#ff0000", "#00ff00", "#0000ff", "#ffff00")
    first = mock_combinations(images, "party", "shirt", "bright", rng=random.Random(7))
    second = mock_combinations(images, "party", "shirt", "bright", rng=random.Random(7))
    assert [c.to_dict() for c in first] == [c.to_dict() for c in second]
    for combination in first:
        assert combination.rating in (4, 5)
        assert 80 <= combination.score <= 95
        assert 2 <= len(combination.images) <= 4
        assert "shirt" in combination.style_notes.lower()
