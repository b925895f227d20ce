"""Pydantic schemas and helpers for validating request payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from models.clothing_image import ClothingImage
from models.color import to_hex
from models.taxonomy import INFERRED_TYPES


class ImagePayload(BaseModel):
    """One uploaded image as echoed back by the client."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    filename: Optional[str] = None
    original_name: Optional[str] = None
    colors: List[str] = Field(default_factory=list)
    clothing_type: str = "unknown"
    url: str = ""

    @field_validator("colors")
    @classmethod
    def _canonical_colors(cls, colors: List[str]) -> List[str]:
        return [to_hex(color) for color in colors]

    @field_validator("clothing_type")
    @classmethod
    def _known_type(cls, clothing_type: str) -> str:
        return clothing_type if clothing_type in INFERRED_TYPES else "unknown"

    def to_image(self) -> ClothingImage:
        return ClothingImage(
            id=self.id,
            filename=self.filename or self.id,
            original_name=self.original_name or self.filename or self.id,
            colors=tuple(self.colors),
            clothing_type=self.clothing_type,
            url=self.url,
        )


class GenerateCombinationsRequest(BaseModel):
    """Form selections plus the images to combine."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    images: List[ImagePayload] = Field(default_factory=list)
    occasion: str = Field(min_length=1)
    clothing_type: Optional[str] = Field(None, alias="clothingType")
    color_preference: Optional[str] = Field(None, alias="colorPreference")
    session_id: Optional[str] = None

    @field_validator("occasion")
    @classmethod
    def _strip_occasion(cls, occasion: str) -> str:
        stripped = occasion.strip()
        if not stripped:
            raise ValueError("occasion must be selected")
        return stripped


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["invalid"] = "invalid"
    message: str
    details: List[Dict[str, Any]] = Field(default_factory=list)


class ValidationFailure(Exception):
    """Raised when a request is rejected before any processing happens."""

    def __init__(self, message: str, details: List[Dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        return ValidationResult(message=self.message, details=self.details).model_dump()


def _error_details(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


def validation_failure(message: str, exc: ValidationError) -> ValidationFailure:
    """Translate Pydantic errors into a consistent failure."""

    return ValidationFailure(message, _error_details(exc))


__all__ = [
    "ImagePayload",
    "GenerateCombinationsRequest",
    "ValidationResult",
    "ValidationFailure",
    "validation_failure",
]
