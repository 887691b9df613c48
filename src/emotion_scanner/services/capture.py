"""Capture source interface."""

from typing import Protocol

from emotion_scanner.domain.capture import CaptureSession, RawFrame


class CaptureSource(Protocol):
    """Interface for an exclusive hardware video stream."""

    def acquire(self) -> CaptureSession:
        """Open the device and return a session, or raise DeviceUnavailable."""

    def current_frame(self, session: CaptureSession) -> RawFrame:
        """Return the latest frame, or raise FrameNotReady."""

    def release(self, session: CaptureSession) -> None:
        """Release the device. Safe to call more than once."""
