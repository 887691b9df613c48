"""Models for emotion classification results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RewardStatus(str, Enum):
    """Reward outcome reported by the classifier for a single frame."""

    NONE = "none"
    COLLECTED = "collected"
    SENT = "sent"


class ClassificationResult(BaseModel):
    """Structured response of the emotion classifier."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    emotion: str
    confidence: float = Field(ge=0.0, le=100.0)
    reward_status: RewardStatus = RewardStatus.NONE

    @property
    def is_rewarded(self) -> bool:
        """Return True when this result qualifies for a session reward."""
        return self.reward_status in {RewardStatus.COLLECTED, RewardStatus.SENT}


ERROR_LABEL = "Error"


def error_result() -> ClassificationResult:
    """Return the result projected when classification fails."""
    return ClassificationResult(emotion=ERROR_LABEL, confidence=0.0)
