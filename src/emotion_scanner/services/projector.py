"""Projection of classification results into display text."""

from emotion_scanner.domain.classification import ClassificationResult
from emotion_scanner.domain.scanner import DisplayState, SamplerStatus

EMOTION_MESSAGES: dict[str, str] = {
    "happy": "Good to see you smiling! Keep it up for a reward!",
    "sad": "Why the long face? Hope things get better!",
    "angry": "Take a deep breath. Stay calm!",
    "neutral": "Feeling calm and collected.",
    "surprise": "Whoa! Something exciting happening?",
    "fear": "Don't worry, everything's alright.",
    "disgust": "Something not quite right?",
    "error": "Couldn't detect emotion. Try again!",
}
DEFAULT_MESSAGE = "Analyzing your mood..."
PLACEHOLDER_LABEL = "..."
REWARD_BANNER = "Happy Coin! +1 Added to Wallet"

_STATUS_MESSAGES: dict[SamplerStatus, str] = {
    SamplerStatus.INITIALIZING: "Starting camera...",
    SamplerStatus.ERROR: "Could not access camera.",
    SamplerStatus.STOPPED: "Scanner stopped.",
}


def project(result: ClassificationResult | None) -> DisplayState:
    """Map the latest result to a label, percent and message."""
    if result is None:
        return DisplayState(
            label=PLACEHOLDER_LABEL, confidence_percent=0, message=DEFAULT_MESSAGE
        )
    message = EMOTION_MESSAGES.get(result.emotion.strip().lower(), DEFAULT_MESSAGE)
    percent = min(100, max(0, round(result.confidence)))
    return DisplayState(label=result.emotion, confidence_percent=percent, message=message)


def status_message(status: SamplerStatus) -> str | None:
    """Return the persistent status line for a sampler status."""
    return _STATUS_MESSAGES.get(status)
