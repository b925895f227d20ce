"""Session-scoped working set of uploads and generated combinations."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from uuid import uuid4

from models.clothing_image import ClothingImage
from models.combination import Combination


class UnknownSessionError(KeyError):
    """Raised when a session id is not registered."""


def _without_image(combinations: Sequence[Combination], image_id: str) -> List[Combination]:
    return [c for c in combinations if all(image.id != image_id for image in c.images)]


@dataclass
class WorkingSet:
    """Everything one browser session holds between requests.

    ``latest_sequence`` only ever grows; results carrying an older sequence
    number are stale and never replace ``combinations``.
    """

    session_id: str
    images: List[ClothingImage] = field(default_factory=list)
    combinations: List[Combination] = field(default_factory=list)
    saved_combinations: List[Combination] = field(default_factory=list)
    generating: bool = False
    latest_sequence: int = 0
    created_at: float = field(default_factory=lambda: time.time())

    def image_ids(self) -> List[str]:
        return [image.id for image in self.images]

    def summary(self) -> Dict[str, object]:
        return {
            "session_id": self.session_id,
            "images": [image.to_dict() for image in self.images],
            "combinations": [combination.to_dict() for combination in self.combinations],
            "saved_combinations": [combination.to_dict() for combination in self.saved_combinations],
            "generating": self.generating,
            "latest_sequence": self.latest_sequence,
        }


class SessionManager:
    """In-memory registry of working sets; nothing is persisted."""

    def __init__(self, max_images: int = 12) -> None:
        self.max_images = max_images
        self._sessions: Dict[str, WorkingSet] = {}
        self._lock = threading.Lock()

    def start_session(self) -> str:
        session_id = str(uuid4())
        with self._lock:
            self._sessions[session_id] = WorkingSet(session_id=session_id)
        return session_id

    def get(self, session_id: str) -> WorkingSet:
        with self._lock:
            working_set = self._sessions.get(session_id)
        if working_set is None:
            raise UnknownSessionError(session_id)
        return working_set

    def session_exists(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def end_session(self, session_id: str) -> List[ClothingImage]:
        """Drop a session and return its images so their files can be removed."""

        with self._lock:
            working_set = self._sessions.pop(session_id, None)
        if working_set is None:
            raise UnknownSessionError(session_id)
        return list(working_set.images)

    def add_images(self, session_id: str, images: Sequence[ClothingImage]) -> List[ClothingImage]:
        """Append images up to ``max_images`` and return the ones accepted."""

        working_set = self.get(session_id)
        with self._lock:
            room = max(0, self.max_images - len(working_set.images))
            accepted = list(images)[:room]
            working_set.images.extend(accepted)
        return accepted

    def remove_image(self, session_id: str, image_id: str) -> Optional[ClothingImage]:
        """Drop one image along with every combination that used it."""

        working_set = self.get(session_id)
        with self._lock:
            for index, image in enumerate(working_set.images):
                if image.id == image_id:
                    removed = working_set.images.pop(index)
                    working_set.combinations = _without_image(working_set.combinations, image_id)
                    working_set.saved_combinations = _without_image(working_set.saved_combinations, image_id)
                    return removed
        return None

    def clear(self, session_id: str) -> None:
        working_set = self.get(session_id)
        with self._lock:
            working_set.images.clear()
            working_set.combinations.clear()
            working_set.saved_combinations.clear()

    def begin_generation(self, session_id: str) -> int:
        """Enter the generating state and return the new request sequence number."""

        working_set = self.get(session_id)
        with self._lock:
            working_set.latest_sequence += 1
            working_set.generating = True
            return working_set.latest_sequence

    def finish_generation(
        self, session_id: str, sequence: int, combinations: Sequence[Combination] | None
    ) -> bool:
        """Leave the generating state; keep results only from the latest request.

        ``combinations`` is ``None`` when the request failed. Returns True when
        the results were stored.
        """

        working_set = self.get(session_id)
        with self._lock:
            is_latest = sequence == working_set.latest_sequence
            if is_latest:
                working_set.generating = False
                if combinations is not None:
                    current = set(working_set.image_ids())
                    working_set.combinations = [
                        c for c in combinations if {image.id for image in c.images} <= current
                    ]
            return is_latest and combinations is not None

    def save_combination(self, session_id: str, combination_id: int) -> Optional[Combination]:
        working_set = self.get(session_id)
        with self._lock:
            current = set(working_set.image_ids())
            for combination in working_set.combinations:
                if combination.id == combination_id:
                    if not {image.id for image in combination.images} <= current:
                        return None
                    if combination not in working_set.saved_combinations:
                        working_set.saved_combinations.append(combination)
                    return combination
        return None


__all__ = ["SessionManager", "UnknownSessionError", "WorkingSet"]
