"""Scanner error taxonomy."""


class ScannerError(Exception):
    """Base class for emotion scanner failures."""


class DeviceUnavailable(ScannerError):
    """The capture device could not be opened; fatal to the session."""


class FrameNotReady(ScannerError):
    """No frame is available yet; the tick is skipped."""


class ClassificationError(ScannerError):
    """The remote classifier failed to return a usable result."""
