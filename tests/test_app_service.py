"""Tests for the application service: uploads, analysis and generation flow."""
from __future__ import annotations

import io
import random
import sys
from pathlib import Path
from typing import Tuple

import pytest
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from style_app import app as app_module
from style_app.app import StyleMatcherApp
from style_app.config import StyleMatcherConfig
from logic.validation import ValidationFailure


def _png(rgb: Tuple[int, int, int], size: Tuple[int, int] = (40, 40)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, rgb).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def matcher(tmp_path: Path) -> StyleMatcherApp:
    return StyleMatcherApp(StyleMatcherConfig(upload_dir=str(tmp_path / "uploads")))


def test_health_reports_version(matcher: StyleMatcherApp) -> None:
    health = matcher.health()
    assert health["status"] == "healthy"
    assert health["version"] == "1.0.0"
    assert health["timestamp"]


def test_upload_stores_and_analyses(matcher: StyleMatcherApp) -> None:
    response = matcher.upload_images([("shirt.PNG", _png((255, 0, 0)))])
    assert response["success"] is True
    image = response["images"][0]
    assert image["colors"] == ["#ff0000"]
    assert image["color_names"] == ["red"]
    assert image["clothing_type"] == "top"
    assert image["original_name"] == "shirt.PNG"
    assert image["filename"].endswith(".png") and image["filename"] != "shirt.PNG"
    assert image["url"] == f"/uploads/{image['filename']}"
    assert matcher.upload_store.exists(image["filename"])


def test_invalid_extensions_are_skipped(matcher: StyleMatcherApp) -> None:
    response = matcher.upload_images([("notes.txt", b"hello"), ("top.jpg", _png((0, 0, 255)))])
    assert len(response["images"]) == 1
    with pytest.raises(ValidationFailure):
        matcher.upload_images([("notes.txt", b"hello")])


def test_unreadable_upload_degrades_to_fallback(matcher: StyleMatcherApp) -> None:
    response = matcher.upload_images([("broken.png", b"not really a png")])
    image = response["images"][0]
    assert image["colors"] == ["#000000", "#ffffff"]
    assert image["clothing_type"] == "unknown"


def test_upload_then_remove_restores_empty_session(matcher: StyleMatcherApp) -> None:
    session_id = matcher.start_session()
    uploaded = matcher.upload_images([("a.png", _png((10, 200, 30)))], session_id=session_id)["images"][0]
    assert [image["id"] for image in matcher.session_summary(session_id)["images"]] == [uploaded["id"]]

    assert matcher.remove_image(session_id, uploaded["id"]) is True
    assert matcher.session_summary(session_id)["images"] == []
    assert not matcher.upload_store.exists(uploaded["filename"])
    assert matcher.remove_image(session_id, uploaded["id"]) is False


def test_generation_without_images_never_computes(matcher: StyleMatcherApp, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(*_, **__):
        raise AssertionError("compute should not run")

    monkeypatch.setattr(app_module, "build_combinations", _fail)
    monkeypatch.setattr(app_module, "extract_colors", _fail)
    monkeypatch.setattr(app_module, "mock_combinations", _fail)

    with pytest.raises(ValidationFailure):
        matcher.generate_combinations({"images": [], "occasion": "casual"})

    session_id = matcher.start_session()
    with pytest.raises(ValidationFailure):
        matcher.generate_combinations({"session_id": session_id, "occasion": "casual"})
    assert matcher.session_manager.get(session_id).latest_sequence == 0


def test_generation_requires_an_occasion(matcher: StyleMatcherApp) -> None:
    images = matcher.upload_images([("a.png", _png((255, 0, 0))), ("b.png", _png((0, 255, 255)))])["images"]
    with pytest.raises(ValidationFailure) as excinfo:
        matcher.generate_combinations({"images": images, "occasion": "  "})
    assert excinfo.value.details


def test_red_and_cyan_uploads_are_complementary(matcher: StyleMatcherApp) -> None:
    images = matcher.upload_images([("red.png", _png((255, 0, 0))), ("cyan.png", _png((0, 255, 255)))])["images"]
    response = matcher.generate_combinations(
        {"images": images, "occasion": "formal", "clothingType": "shirt", "colorPreference": "bright"}
    )
    assert response["success"] is True
    assert response["total_combinations"] == len(response["combinations"]) == 2
    assert {combination["harmony"] for combination in response["combinations"]} == {"complementary"}
    assert response["combinations"][0]["score"] == 85
    assert response["combinations"][0]["rating"] == 5
    assert response["stale"] is False


def test_session_generation_stores_latest_results(matcher: StyleMatcherApp) -> None:
    session_id = matcher.start_session()
    matcher.upload_images([("a.png", _png((255, 0, 0))), ("b.png", _png((255, 128, 0)))], session_id=session_id)
    response = matcher.generate_combinations({"session_id": session_id, "occasion": "casual"})
    assert response["request_sequence"] == 1
    working_set = matcher.session_manager.get(session_id)
    assert working_set.generating is False
    assert [c.to_dict() for c in working_set.combinations] == response["combinations"]

    saved = matcher.save_combination(session_id, 1)
    assert saved is not None and saved["id"] == 1


def test_superseded_request_is_flagged_stale(matcher: StyleMatcherApp, monkeypatch: pytest.MonkeyPatch) -> None:
    session_id = matcher.start_session()
    matcher.upload_images([("a.png", _png((255, 0, 0))), ("b.png", _png((0, 0, 255)))], session_id=session_id)
    original = app_module.build_combinations

    def _newer_request_arrives(*args, **kwargs):
        matcher.session_manager.begin_generation(session_id)
        return original(*args, **kwargs)

    monkeypatch.setattr(app_module, "build_combinations", _newer_request_arrives)
    response = matcher.generate_combinations({"session_id": session_id, "occasion": "party"})

    assert response["stale"] is True
    working_set = matcher.session_manager.get(session_id)
    assert working_set.combinations == []
    assert working_set.generating is True


def test_mock_mode_uses_random_stub(tmp_path: Path) -> None:
    config = StyleMatcherConfig(upload_dir=str(tmp_path / "uploads"), generator_mode="mock")
    matcher = StyleMatcherApp(config, rng=random.Random(3))
    images = matcher.upload_images([("a.png", _png((255, 0, 0))), ("b.png", _png((0, 255, 0)))])["images"]
    response = matcher.generate_combinations({"images": images, "occasion": "party"})
    assert all(combination["rating"] in (4, 5) for combination in response["combinations"])
    assert all(combination["harmony"] == "unscored" for combination in response["combinations"])


def test_analyze_image_reports_dimensions(matcher: StyleMatcherApp) -> None:
    response = matcher.analyze_image("dress.png", _png((0, 255, 255), size=(40, 80)))
    analysis = response["analysis"]
    assert analysis["colors"] == ["#00ffff"]
    assert analysis["color_names"] == ["cyan"]
    assert analysis["dominant_color"] == "#00ffff"
    assert analysis["clothing_type"] == "dress"
    assert analysis["dimensions"] == {"width": 40, "height": 80}
    assert analysis["color_diversity"] == 1
    with pytest.raises(ValidationFailure):
        matcher.analyze_image("dress.svg", b"<svg/>")


def test_upload_that_cannot_be_analysed_leaves_no_file(
    matcher: StyleMatcherApp, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _explode(*_args, **_kwargs):
        raise RuntimeError("decoder crashed")

    monkeypatch.setattr(app_module, "extract_colors", _explode)
    with pytest.raises(RuntimeError):
        matcher.upload_images([("a.png", _png((255, 0, 0)))])
    assert list(matcher.upload_store.base_dir.iterdir()) == []


def test_removed_image_disappears_from_session_combinations(matcher: StyleMatcherApp) -> None:
    session_id = matcher.start_session()
    images = matcher.upload_images(
        [("a.png", _png((255, 0, 0))), ("b.png", _png((0, 255, 255)))], session_id=session_id
    )["images"]
    matcher.generate_combinations({"session_id": session_id, "occasion": "formal"})

    assert matcher.remove_image(session_id, images[0]["id"]) is True

    summary = matcher.session_summary(session_id)
    current = {image["id"] for image in summary["images"]}
    referenced = {image["id"] for combination in summary["combinations"] for image in combination["images"]}
    assert referenced <= current
    assert matcher.save_combination(session_id, 1) is None


def test_session_generation_rejects_foreign_images(matcher: StyleMatcherApp) -> None:
    session_id = matcher.start_session()
    matcher.upload_images([("a.png", _png((255, 0, 0))), ("b.png", _png((0, 0, 255)))], session_id=session_id)
    outsiders = matcher.upload_images([("c.png", _png((0, 255, 0))), ("d.png", _png((255, 255, 0)))])["images"]

    with pytest.raises(ValidationFailure):
        matcher.generate_combinations({"session_id": session_id, "images": outsiders, "occasion": "casual"})
    working_set = matcher.session_manager.get(session_id)
    assert working_set.combinations == []
    assert working_set.latest_sequence == 0


def test_session_generation_accepts_a_selection_of_its_own_images(matcher: StyleMatcherApp) -> None:
    session_id = matcher.start_session()
    images = matcher.upload_images(
        [("a.png", _png((255, 0, 0))), ("b.png", _png((0, 255, 255))), ("c.png", _png((0, 255, 0)))],
        session_id=session_id,
    )["images"]

    response = matcher.generate_combinations(
        {"session_id": session_id, "images": images[:2], "occasion": "formal"}
    )
    selected = {images[0]["id"], images[1]["id"]}
    for combination in response["combinations"]:
        assert {image["id"] for image in combination["images"]} <= selected
