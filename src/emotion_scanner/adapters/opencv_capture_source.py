"""OpenCV-backed camera capture source."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

import cv2

from emotion_scanner.domain.capture import CaptureSession, RawFrame
from emotion_scanner.domain.errors import DeviceUnavailable, FrameNotReady
from emotion_scanner.services.capture import CaptureSource

logger = logging.getLogger(__name__)


@dataclass
class OpenCvCaptureSource(CaptureSource):
    """Capture source that owns a ``cv2.VideoCapture`` device."""

    device_index: int = 0
    width: int = 640
    height: int = 480
    capture_factory: Callable[[int], cv2.VideoCapture] = cv2.VideoCapture
    _capture: cv2.VideoCapture | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def acquire(self) -> CaptureSession:
        """Open the camera at the target resolution."""
        if self._capture is not None:
            raise DeviceUnavailable(f"Camera {self.device_index} is already in use")
        capture = self.capture_factory(self.device_index)
        if not capture.isOpened():
            capture.release()
            raise DeviceUnavailable(f"Unable to open camera {self.device_index}")
        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        actual_width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH)) or self.width
        actual_height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT)) or self.height
        self._capture = capture
        logger.info(
            "Opened camera %d at %dx%d", self.device_index, actual_width, actual_height
        )
        return CaptureSession(
            device_index=self.device_index,
            frame_width=actual_width,
            frame_height=actual_height,
        )

    def current_frame(self, session: CaptureSession) -> RawFrame:
        """Read the most recent frame from the device.

        Called from a worker thread; the lock keeps ``release`` from closing
        the device in the middle of a read.
        """
        with self._lock:
            if not session.is_active or self._capture is None:
                raise FrameNotReady("Capture session is not active")
            try:
                ok, frame = self._capture.read()
            except cv2.error as exc:
                raise FrameNotReady(f"Camera read failed: {exc}") from exc
        if not ok or frame is None:
            raise FrameNotReady("Camera returned no frame")
        return frame

    def release(self, session: CaptureSession) -> None:
        """Release the device; repeated calls are no-ops."""
        session.is_active = False
        with self._lock:
            if self._capture is None:
                return
            self._capture.release()
            self._capture = None
        logger.info("Released camera %d", self.device_index)
