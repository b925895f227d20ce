"""Command-line entrypoint: score outfit combinations for local image files."""

import argparse
import json
from pathlib import Path
from typing import List, Optional

from style_app.config import StyleMatcherConfig
from style_app.logging_config import configure_logging
from logic.clothing_type import infer_clothing_type
from logic.color_extraction import extract_colors
from logic.combination_builder import build_combinations
from logic.view_model import results_view
from models.clothing_image import ClothingImage
from models.taxonomy import OCCASIONS, allowed_file


def load_images(paths: List[str], color_count: int) -> List[ClothingImage]:
    images = []
    for raw_path in paths:
        path = Path(raw_path)
        if not allowed_file(path.name):
            print(f"Skipping {path}: unsupported file type")
            continue
        extraction = extract_colors(path.read_bytes(), k=color_count)
        clothing_type = "unknown" if extraction.fallback else infer_clothing_type(extraction.width, extraction.height)
        images.append(
            ClothingImage(
                id=path.stem,
                filename=path.name,
                original_name=path.name,
                colors=tuple(extraction.colors),
                clothing_type=clothing_type,
                url=str(path),
                width=extraction.width,
                height=extraction.height,
            )
        )
    return images


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Score outfit combinations for clothing photos")
    parser.add_argument("images", nargs="*", help="Image files to combine")
    parser.add_argument("--occasion", default="casual", help=f"One of {', '.join(OCCASIONS)}")
    parser.add_argument("--clothing-type", default=None, help="Preferred clothing type")
    parser.add_argument("--color-preference", default=None, help="bright, dark, neutral or pastel")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API instead")
    args = parser.parse_args(argv)

    config = StyleMatcherConfig.from_env()
    configure_logging()

    if args.serve:
        import uvicorn

        uvicorn.run("server.api:app", host=config.host, port=config.port, reload=False)
        return 0

    images = load_images(args.images, config.color_count)
    if len(images) < 2:
        parser.error("at least two valid images are required")

    result = build_combinations(
        images,
        args.occasion,
        args.clothing_type,
        args.color_preference,
        colors_per_image=config.colors_per_image,
    )
    print(json.dumps(results_view(result.combinations), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
