"""
Verification State Machine.

    idle(no artifact) ──select image──► idle(artifact) ──verify──► verifying
          ▲                                                       │      │
          └──────remove / upload different / select new──── verified  failed

Selecting a non-image records an error and changes nothing else. The
preview of the outgoing artifact is released before a new one is
created, and exactly once.
"""

import logging
from typing import Optional

from shared.config import get_settings
from shared.exceptions import StudexError

from .classifier import SizeThresholdClassifier
from .exceptions import (
    ClassificationFailedError,
    NoArtifactError,
    UnsupportedFileTypeError,
    VerificationRejectedError,
    VerificationStateError,
)
from .interfaces import IDocumentClassifier, IPreviewRegistry
from .models import (
    ExtractedDetails,
    SelectedFile,
    VerificationArtifact,
    VerificationSnapshot,
    VerificationStatus,
    VerifiedClassification,
)
from .previews import InMemoryPreviewRegistry

logger = logging.getLogger(__name__)


class VerificationStateMachine:
    """
    ID card upload and verification.

    Not reentrant: await verify() before calling it again.
    """

    def __init__(self, classifier: IDocumentClassifier, previews: IPreviewRegistry):
        self._classifier = classifier
        self._previews = previews
        self._status = VerificationStatus.IDLE
        self._artifact: Optional[VerificationArtifact] = None
        self._details: Optional[ExtractedDetails] = None
        self._error: Optional[StudexError] = None

    @property
    def status(self) -> VerificationStatus:
        return self._status

    @property
    def artifact(self) -> Optional[VerificationArtifact]:
        return self._artifact

    @property
    def snapshot(self) -> VerificationSnapshot:
        return VerificationSnapshot(
            status=self._status,
            has_artifact=self._artifact is not None,
            preview_ref=self._artifact.preview_ref if self._artifact else None,
            details=self._details,
            error=self._error.message if self._error else None,
            error_code=self._error.code if self._error else None,
        )

    def _reset(self) -> None:
        if self._artifact is not None:
            self._previews.release(self._artifact.preview_ref)
        self._artifact = None
        self._status = VerificationStatus.IDLE
        self._details = None
        self._error = None

    def select(self, file: SelectedFile) -> VerificationSnapshot:
        """
        Take a newly picked file.

        Images replace the current artifact and return to idle; anything
        else only records an UnsupportedFileTypeError.
        """
        if not file.is_image:
            self._error = UnsupportedFileTypeError(file.media_type)
            logger.debug(f"Rejected non-image selection ({file.media_type})")
            return self.snapshot

        self._reset()
        self._artifact = VerificationArtifact(
            name=file.name,
            media_type=file.media_type,
            size=file.size,
            payload=file.payload,
            preview_ref=self._previews.create(file.payload, file.media_type),
        )
        return self.snapshot

    async def verify(self) -> VerificationSnapshot:
        """
        Classify the selected artifact.

        Raises:
            NoArtifactError: If no image is selected
            VerificationStateError: If not idle
        """
        if self._artifact is None:
            raise NoArtifactError()
        if self._status != VerificationStatus.IDLE:
            raise VerificationStateError(self._status.value)

        artifact = self._artifact
        self._status = VerificationStatus.VERIFYING
        self._error = None

        try:
            result = await self._classifier.classify(artifact)
        except Exception as e:
            if self._artifact is not artifact:
                logger.debug("Discarding classifier error for a replaced artifact")
                return self.snapshot
            logger.error(f"ID classifier failed: {e}")
            self._status = VerificationStatus.FAILED
            self._error = ClassificationFailedError(str(e) or None)
            return self.snapshot

        if self._artifact is not artifact:
            # Removed or replaced while classifying
            logger.debug("Discarding classification for a replaced artifact")
            return self.snapshot

        if isinstance(result, VerifiedClassification):
            self._status = VerificationStatus.VERIFIED
            self._details = result.details
        else:
            self._status = VerificationStatus.FAILED
            self._error = VerificationRejectedError(result.reason)
        logger.debug(f"ID verification finished: {self._status.value}")
        return self.snapshot

    def remove(self) -> VerificationSnapshot:
        """Drop the current artifact and return to idle."""
        self._reset()
        return self.snapshot

    def upload_different(self) -> VerificationSnapshot:
        """Start over after a verified or failed result."""
        return self.remove()

    def dispose(self) -> None:
        """Release any live preview. Call when the widget goes away."""
        self._reset()


def create_verification_machine() -> VerificationStateMachine:
    """Build a state machine with the configured mock classifier."""
    settings = get_settings()
    return VerificationStateMachine(
        classifier=SizeThresholdClassifier(
            min_bytes=settings.id_verification_min_bytes,
            delay=settings.id_verification_delay,
        ),
        previews=InMemoryPreviewRegistry(),
    )
