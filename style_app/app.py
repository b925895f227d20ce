"""Style Matcher application bootstrap."""

from datetime import datetime, timezone
import logging
import random
import time
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

from pydantic import ValidationError

from style_app.config import StyleMatcherConfig
from style_app.logging_config import configure_logging, get_logger, log_event, operation_context
from logic.clothing_type import infer_clothing_type
from logic.color_extraction import extract_colors
from logic.combination_builder import MIN_IMAGES, build_combinations
from logic.mock_generator import mock_combinations
from logic.validation import GenerateCombinationsRequest, ValidationFailure, validation_failure
from memory.session_store import SessionManager
from models.clothing_image import ClothingImage
from models.color import Color
from models.combination import Combination
from models.taxonomy import allowed_file
from tools.observability import instrument_operation
from tools.upload_store import UploadStore

LOGGER = get_logger(__name__)


class StyleMatcherApp:
    """Wires together the upload store, session registry and scoring engine."""

    def __init__(self, config: StyleMatcherConfig | None = None, rng: random.Random | None = None) -> None:
        self.config = config or StyleMatcherConfig.from_env()
        configure_logging()
        self.upload_store = UploadStore(self.config.upload_dir)
        self.session_manager = SessionManager(max_images=self.config.max_images)
        self.rng = rng or random.Random()

    def health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": self.config.version,
        }

    def start_session(self) -> str:
        return self.session_manager.start_session()

    @instrument_operation("analyse_upload")
    def _analyse(self, data: bytes) -> Tuple[List[str], int, int, str]:
        extraction = extract_colors(data, k=self.config.color_count)
        clothing_type = "unknown" if extraction.fallback else infer_clothing_type(extraction.width, extraction.height)
        return extraction.colors, extraction.width, extraction.height, clothing_type

    def upload_images(
        self, files: Iterable[Tuple[str, bytes]], session_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Store and analyse every valid upload; invalid files are skipped.

        Raises :class:`ValidationFailure` when nothing valid was supplied.
        """

        with operation_context("app:upload_images", session_id=session_id) as correlation_id:
            if session_id:
                self.session_manager.get(session_id)
            images: List[ClothingImage] = []
            skipped: List[str] = []
            for original_name, data in files:
                if not original_name or not allowed_file(original_name):
                    skipped.append(original_name or "")
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "upload_skipped",
                        reason="invalid_extension",
                        correlation_id=correlation_id,
                    )
                    continue
                colors, width, height, clothing_type = self._analyse(data)
                stored_name = self.upload_store.save(original_name, data)
                images.append(
                    ClothingImage(
                        id=uuid4().hex,
                        filename=stored_name,
                        original_name=self.upload_store.safe_name(original_name),
                        colors=tuple(colors),
                        clothing_type=clothing_type,
                        url=self.upload_store.url_for(stored_name),
                        width=width,
                        height=height,
                    )
                )

            if not images:
                raise ValidationFailure("No valid images uploaded")

            if session_id:
                accepted = self.session_manager.add_images(session_id, images)
                for rejected in images[len(accepted):]:
                    self.upload_store.delete(rejected.filename)
                images = accepted
                if not images:
                    raise ValidationFailure(f"Session already holds the maximum of {self.config.max_images} images")

            log_event(
                LOGGER,
                logging.INFO,
                "upload_completed",
                image_count=len(images),
                skipped_count=len(skipped),
                session_id=session_id,
                correlation_id=correlation_id,
            )
            return {
                "success": True,
                "images": [image.to_dict() for image in images],
                "message": f"Successfully uploaded {len(images)} images",
            }

    def analyze_image(self, original_name: str, data: bytes) -> Dict[str, Any]:
        """Analyse a single image without storing it."""

        with operation_context("app:analyze_image") as correlation_id:
            if not original_name or not allowed_file(original_name):
                raise ValidationFailure("Invalid file type")
            colors, width, height, clothing_type = self._analyse(data)
            color_names = [Color.from_hex(color).name for color in colors]
            log_event(
                LOGGER,
                logging.INFO,
                "analysis_completed",
                color_count=len(colors),
                clothing_type=clothing_type,
                correlation_id=correlation_id,
            )
            return {
                "success": True,
                "analysis": {
                    "colors": colors,
                    "color_names": color_names,
                    "clothing_type": clothing_type,
                    "dimensions": {"width": width, "height": height},
                    "dominant_color": colors[0] if colors else None,
                    "color_diversity": len(set(color_names)),
                },
            }

    def _resolve_images(self, request: GenerateCombinationsRequest) -> List[ClothingImage]:
        """Pick the images to combine.

        With a session only its working set is used; payload images then act
        as a selection by id and must all belong to the session.
        """

        if not request.session_id:
            return [payload.to_image() for payload in request.images]
        session_images = list(self.session_manager.get(request.session_id).images)
        if not request.images:
            return session_images
        by_id = {image.id: image for image in session_images}
        unknown = [payload.id for payload in request.images if payload.id not in by_id]
        if unknown:
            raise ValidationFailure(
                "Images are not part of this session",
                details=[{"loc": ["images"], "msg": f"unknown image {image_id}"} for image_id in unknown],
            )
        return [by_id[payload.id] for payload in request.images]

    @instrument_operation("generate_combinations")
    def _run_generator(self, images: List[ClothingImage], request: GenerateCombinationsRequest) -> List[Combination]:
        if self.config.processing_delay_seconds > 0:
            time.sleep(self.config.processing_delay_seconds)
        if self.config.generator_mode == "mock":
            return mock_combinations(
                images, request.occasion, request.clothing_type, request.color_preference, rng=self.rng
            )
        result = build_combinations(
            images,
            request.occasion,
            request.clothing_type,
            request.color_preference,
            colors_per_image=self.config.colors_per_image,
        )
        return result.combinations

    def generate_combinations(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate the request, then score combinations for the supplied images.

        Validation happens before any compute. When a session is given the
        call runs inside its generating state and results from a superseded
        request come back flagged ``stale``.
        """

        with operation_context("app:generate_combinations") as correlation_id:
            try:
                request = GenerateCombinationsRequest.model_validate(payload or {})
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "generate_request_invalid",
                    details=str(exc),
                    correlation_id=correlation_id,
                )
                raise validation_failure("Invalid generation request", exc) from exc

            images = self._resolve_images(request)
            if len(images) < MIN_IMAGES:
                raise ValidationFailure(f"At least {MIN_IMAGES} images are required to generate combinations")

            session_id = request.session_id
            sequence = self.session_manager.begin_generation(session_id) if session_id else 0
            combinations: Optional[List[Combination]] = None
            try:
                combinations = self._run_generator(images, request)
            finally:
                accepted = (
                    self.session_manager.finish_generation(session_id, sequence, combinations)
                    if session_id
                    else True
                )

            log_event(
                LOGGER,
                logging.INFO,
                "generate_completed",
                combination_count=len(combinations),
                occasion=request.occasion,
                session_id=session_id,
                request_sequence=sequence,
                stale=not accepted,
                correlation_id=correlation_id,
            )
            return {
                "success": True,
                "combinations": [combination.to_dict() for combination in combinations],
                "total_combinations": len(combinations),
                "request_sequence": sequence,
                "stale": not accepted,
            }

    def remove_image(self, session_id: str, image_id: str) -> bool:
        removed = self.session_manager.remove_image(session_id, image_id)
        if removed is None:
            return False
        self.upload_store.delete(removed.filename)
        log_event(LOGGER, logging.INFO, "image_removed", session_id=session_id, image_id=image_id)
        return True

    def save_combination(self, session_id: str, combination_id: int) -> Optional[Dict[str, Any]]:
        combination = self.session_manager.save_combination(session_id, combination_id)
        return combination.to_dict() if combination else None

    def session_summary(self, session_id: str) -> Dict[str, Any]:
        return self.session_manager.get(session_id).summary()


__all__ = ["StyleMatcherApp"]
