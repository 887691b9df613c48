"""Domain models for camera capture."""

import base64
from dataclasses import dataclass
from datetime import datetime

import numpy as np

RawFrame = np.ndarray


@dataclass
class CaptureSession:
    """Represents an acquired hardware video stream."""

    device_index: int
    frame_width: int
    frame_height: int
    is_active: bool = True


@dataclass(frozen=True)
class FramePayload:
    """Encoded still image ready to send to the classifier."""

    image: bytes
    captured_at: datetime
    mime_type: str = "image/jpeg"

    @property
    def data_url(self) -> str:
        """Return the payload as a base64 data URL."""
        encoded = base64.b64encode(self.image).decode("utf-8")
        return f"data:{self.mime_type};base64,{encoded}"
