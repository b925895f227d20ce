"""Flat upload directory keyed by generated unique file names."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from uuid import uuid4

from models.taxonomy import allowed_file

logger = logging.getLogger(__name__)


class UploadStore:
    """Stores raw upload bytes under ``<uuid>.<ext>`` so names never collide."""

    def __init__(self, base_dir: str | Path = "uploads", url_prefix: str = "/uploads") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")

    @staticmethod
    def safe_name(original_name: str) -> str:
        """Strip any directory components from a client supplied name."""

        return Path(original_name.replace("\\", "/")).name

    def save(self, original_name: str, data: bytes) -> str:
        """Write ``data`` and return the generated file name."""

        name = self.safe_name(original_name)
        if not allowed_file(name):
            raise ValueError(f"Unsupported file type '{original_name}'")
        extension = name.rsplit(".", 1)[1].lower()
        stored_name = f"{uuid4().hex}.{extension}"
        self.path_for(stored_name).write_bytes(data)
        logger.info("Stored upload as %s (%s bytes)", stored_name, len(data))
        return stored_name

    def path_for(self, stored_name: str) -> Path:
        candidate = (self.base_dir / self.safe_name(stored_name)).resolve()
        if candidate.parent != self.base_dir.resolve():
            raise ValueError(f"Invalid upload name '{stored_name}'")
        return candidate

    def url_for(self, stored_name: str) -> str:
        return f"{self.url_prefix}/{stored_name}"

    def read(self, stored_name: str) -> Optional[bytes]:
        path = self.path_for(stored_name)
        return path.read_bytes() if path.exists() else None

    def exists(self, stored_name: str) -> bool:
        return self.path_for(stored_name).exists()

    def delete(self, stored_name: str) -> bool:
        path = self.path_for(stored_name)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted upload %s", stored_name)
        return True


__all__ = ["UploadStore"]
