"""Classifier client interface."""

from typing import Protocol

from emotion_scanner.domain.capture import FramePayload
from emotion_scanner.domain.classification import ClassificationResult


class ClassifierClient(Protocol):
    """Interface for the remote emotion classifier."""

    async def classify(self, payload: FramePayload) -> ClassificationResult:
        """Classify a frame, or raise ClassificationError."""
