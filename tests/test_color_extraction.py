"""Tests for k-means dominant color extraction."""

import io
import sys
from pathlib import Path

from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.clothing_type import infer_clothing_type
from logic.color_extraction import FALLBACK_COLORS, extract_colors, extract_colors_from_image


def _image_bytes(image: Image.Image, image_format: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


def _split_image(size=(40, 40)) -> Image.Image:
    """Left three quarters red, right quarter blue."""

    width, height = size
    image = Image.new("RGB", size, (255, 0, 0))
    image.paste((0, 0, 255), (width * 3 // 4, 0, width, height))
    return image


def test_solid_image_yields_single_exact_color() -> None:
    result = extract_colors(_image_bytes(Image.new("RGB", (30, 20), (255, 0, 0))))
    assert result.colors == ["#ff0000"]
    assert (result.width, result.height) == (30, 20)
    assert result.fallback is False


def test_colors_ordered_by_cluster_size() -> None:
    result = extract_colors(_image_bytes(_split_image()), k=5)
    assert result.colors == ["#ff0000", "#0000ff"]


def test_color_count_is_capped_by_k() -> None:
    image = Image.new("RGB", (40, 10))
    for index, color in enumerate([(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)]):
        image.paste(color, (index * 10, 0, index * 10 + 10, 10))
    result = extract_colors_from_image(image, k=2)
    assert 1 <= len(result.colors) <= 2
    assert all(color.startswith("#") and len(color) == 7 for color in result.colors)


def test_extraction_is_deterministic() -> None:
    payload = _image_bytes(_split_image((64, 48)))
    assert extract_colors(payload).colors == extract_colors(payload).colors


def test_rgba_input_is_converted() -> None:
    image = Image.new("RGBA", (10, 10), (0, 255, 255, 128))
    result = extract_colors(_image_bytes(image))
    assert result.colors == ["#00ffff"]


def test_unreadable_bytes_fall_back_to_black_and_white() -> None:
    result = extract_colors(b"definitely not an image")
    assert result.colors == list(FALLBACK_COLORS) == ["#000000", "#ffffff"]
    assert result.fallback is True


def test_empty_payload_falls_back() -> None:
    result = extract_colors(b"")
    assert result.colors == ["#000000", "#ffffff"]
    assert (result.width, result.height) == (0, 0)


def test_clothing_type_from_proportions() -> None:
    assert infer_clothing_type(100, 200) == "dress"
    assert infer_clothing_type(100, 130) == "bottom"
    assert infer_clothing_type(100, 100) == "top"
    assert infer_clothing_type(200, 100) == "shoes"
    assert infer_clothing_type(0, 100) == "unknown"


def test_oversized_image_falls_back_instead_of_raising(monkeypatch) -> None:
    payload = _image_bytes(Image.new("1", (200, 200), 1))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    result = extract_colors(payload)
    assert result.colors == ["#000000", "#ffffff"]
    assert result.fallback is True
