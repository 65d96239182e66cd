"""
ID verification interfaces.

The state machine only knows these two protocols, so a real document
verification backend or a different preview mechanism can be dropped in
without touching it.
"""

from typing import Protocol, runtime_checkable

from .models import Classification, VerificationArtifact


@runtime_checkable
class IDocumentClassifier(Protocol):
    """Decides whether an ID artifact is acceptable."""

    async def classify(self, artifact: VerificationArtifact) -> Classification:
        """
        Classify an artifact.

        Returns:
            VerifiedClassification with extracted details, or
            RejectedClassification with a user-facing reason
        """
        ...


@runtime_checkable
class IPreviewRegistry(Protocol):
    """
    Creates and releases preview handles for selected images.

    Every handle returned by create() must be released exactly once.
    """

    def create(self, payload: bytes, media_type: str) -> str:
        """Register a preview and return its handle."""
        ...

    def release(self, preview_ref: str) -> None:
        """Free a preview handle."""
        ...
