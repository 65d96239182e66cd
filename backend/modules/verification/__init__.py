"""
ID verification module.

Upload an ID card image, classify it, and report verified or failed.

Public API:
- VerificationStateMachine: Upload/verify state machine
- IDocumentClassifier, IPreviewRegistry: Pluggable collaborators
- SizeThresholdClassifier: Mock classifier
- Verification exceptions: UnsupportedFileTypeError, etc.
"""

from .interfaces import IDocumentClassifier, IPreviewRegistry
from .classifier import SizeThresholdClassifier, PLACEHOLDER_DETAILS
from .previews import InMemoryPreviewRegistry
from .machine import VerificationStateMachine, create_verification_machine
from .models import (
    Classification,
    ExtractedDetails,
    RejectedClassification,
    SelectedFile,
    VerificationArtifact,
    VerificationSnapshot,
    VerificationStatus,
    VerifiedClassification,
)
from .exceptions import (
    VerificationError,
    UnsupportedFileTypeError,
    VerificationRejectedError,
    ClassificationFailedError,
    NoArtifactError,
    VerificationStateError,
)

__all__ = [
    # Interfaces
    "IDocumentClassifier",
    "IPreviewRegistry",
    # Implementations
    "SizeThresholdClassifier",
    "PLACEHOLDER_DETAILS",
    "InMemoryPreviewRegistry",
    "VerificationStateMachine",
    "create_verification_machine",
    # Models
    "Classification",
    "ExtractedDetails",
    "RejectedClassification",
    "SelectedFile",
    "VerificationArtifact",
    "VerificationSnapshot",
    "VerificationStatus",
    "VerifiedClassification",
    # Exceptions
    "VerificationError",
    "UnsupportedFileTypeError",
    "VerificationRejectedError",
    "ClassificationFailedError",
    "NoArtifactError",
    "VerificationStateError",
]
