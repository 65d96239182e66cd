"""
Mock ID classifier.

There is no OCR behind this: a larger file is taken as a clear photo,
a smaller one as blurry or invalid. The extracted details are fixed
placeholders.
"""

import asyncio
import logging

from .interfaces import IDocumentClassifier
from .models import (
    Classification,
    ExtractedDetails,
    RejectedClassification,
    VerificationArtifact,
    VerifiedClassification,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_BYTES = 30_000
REJECTION_REASON = "Unable to verify ID"

PLACEHOLDER_DETAILS = ExtractedDetails(
    name="Student Name",
    institution="Your College",
    document_number="ID-XXXX-XXXX",
)


class SizeThresholdClassifier(IDocumentClassifier):
    """Accepts artifacts of at least `min_bytes` bytes."""

    def __init__(self, min_bytes: int = DEFAULT_MIN_BYTES, delay: float = 0.8):
        self._min_bytes = min_bytes
        self._delay = delay

    async def classify(self, artifact: VerificationArtifact) -> Classification:
        await asyncio.sleep(self._delay)

        if artifact.size >= self._min_bytes:
            logger.debug(f"Artifact accepted ({artifact.size} >= {self._min_bytes} bytes)")
            return VerifiedClassification(details=PLACEHOLDER_DETAILS.model_copy())

        logger.debug(f"Artifact rejected ({artifact.size} < {self._min_bytes} bytes)")
        return RejectedClassification(reason=REJECTION_REASON)
