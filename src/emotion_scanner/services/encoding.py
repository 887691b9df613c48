"""Frame encoding for classifier requests."""

from dataclasses import dataclass
from datetime import UTC, datetime

import cv2

from emotion_scanner.domain.capture import FramePayload, RawFrame
from emotion_scanner.domain.errors import FrameNotReady


@dataclass(frozen=True)
class FrameEncoder:
    """Mirror frames to match the self-view and encode them as JPEG."""

    jpeg_quality: int = 70

    def encode(self, frame: RawFrame) -> FramePayload:
        """Encode a raw frame into a mirrored JPEG payload."""
        if frame is None or frame.size == 0:
            raise FrameNotReady("Frame is empty")
        mirrored = cv2.flip(frame, 1)
        ok, buffer = cv2.imencode(
            ".jpg", mirrored, [int(cv2.IMWRITE_JPEG_QUALITY), self.jpeg_quality]
        )
        if not ok:
            raise FrameNotReady("Frame could not be encoded")
        return FramePayload(image=buffer.tobytes(), captured_at=datetime.now(tz=UTC))
