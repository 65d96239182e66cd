"""
In-memory preview registry.

Stands in for the browser's object URLs: each selected image gets a
handle that stays alive until released.
"""

import logging
import uuid

from .interfaces import IPreviewRegistry

logger = logging.getLogger(__name__)


class InMemoryPreviewRegistry(IPreviewRegistry):
    """Tracks live preview handles and their payloads."""

    def __init__(self):
        self._live: dict[str, bytes] = {}

    def create(self, payload: bytes, media_type: str) -> str:
        preview_ref = f"preview:{media_type}:{uuid.uuid4().hex}"
        self._live[preview_ref] = payload
        return preview_ref

    def release(self, preview_ref: str) -> None:
        if self._live.pop(preview_ref, None) is None:
            logger.warning(f"Release of unknown preview {preview_ref}")

    @property
    def live_count(self) -> int:
        return len(self._live)
