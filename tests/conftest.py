"""Shared test fixtures."""

import asyncio
import time
from dataclasses import dataclass, field

import numpy as np
import pytest

from emotion_scanner.config import Settings
from emotion_scanner.containers import AppContainer
from emotion_scanner.domain.capture import CaptureSession, FramePayload, RawFrame
from emotion_scanner.domain.classification import ClassificationResult, RewardStatus
from emotion_scanner.domain.errors import DeviceUnavailable, FrameNotReady
from emotion_scanner.services.capture import CaptureSource
from emotion_scanner.services.classification import ClassifierClient
from emotion_scanner.services.encoding import FrameEncoder
from emotion_scanner.services.rewards import RewardLedger
from emotion_scanner.services.sampler import SamplerLoop


def make_frame(width: int = 64, height: int = 48) -> RawFrame:
    """Return a BGR frame whose left half is white and right half black."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, : width // 2] = 255
    return frame


@dataclass
class FakeCaptureSource(CaptureSource):
    """In-memory capture source for tests."""

    fail_acquire: bool = False
    frames_ready: bool = True
    frame: RawFrame = field(default_factory=make_frame)
    sessions: list[CaptureSession] = field(default_factory=list)
    release_calls: int = 0
    read_delay: float = 0.0
    failing_reads: int = 0
    reads: int = 0

    def acquire(self) -> CaptureSession:
        if self.fail_acquire:
            raise DeviceUnavailable("permission denied")
        session = CaptureSession(device_index=0, frame_width=640, frame_height=480)
        self.sessions.append(session)
        return session

    def current_frame(self, session: CaptureSession) -> RawFrame:
        self.reads += 1
        if self.read_delay:
            time.sleep(self.read_delay)
        if self.failing_reads:
            self.failing_reads -= 1
            raise RuntimeError("VIDIOC_DQBUF: device glitch")
        if not self.frames_ready or not session.is_active:
            raise FrameNotReady("no metadata yet")
        return self.frame

    def release(self, session: CaptureSession) -> None:
        session.is_active = False
        self.release_calls += 1


def happy(reward_status: RewardStatus = RewardStatus.NONE) -> ClassificationResult:
    return ClassificationResult(
        emotion="happy", confidence=87.4, reward_status=reward_status
    )


@dataclass
class FakeClassifierClient(ClassifierClient):
    """Scripted classifier that can hold calls open until released."""

    outcomes: list[ClassificationResult | Exception] = field(default_factory=list)
    hold: bool = False
    calls: list[FramePayload] = field(default_factory=list)
    pending: list[asyncio.Future] = field(default_factory=list)
    outstanding: int = 0
    max_outstanding: int = 0

    async def classify(self, payload: FramePayload) -> ClassificationResult:
        self.calls.append(payload)
        self.outstanding += 1
        self.max_outstanding = max(self.max_outstanding, self.outstanding)
        try:
            if self.hold:
                future = asyncio.get_running_loop().create_future()
                self.pending.append(future)
                await future
            outcome = self.outcomes.pop(0) if self.outcomes else happy()
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        finally:
            self.outstanding -= 1

    async def wait_pending(self) -> None:
        """Yield until a held call is waiting to be released."""
        while not self.pending:
            await asyncio.sleep(0.001)

    def release_next(self) -> None:
        self.pending.pop(0).set_result(None)


def build_sampler(
    source: FakeCaptureSource,
    client: FakeClassifierClient,
    *,
    interval_seconds: float = 3600.0,
    classify_timeout_seconds: float | None = 10.0,
) -> SamplerLoop:
    """Build a sampler whose timer never fires unless asked to."""
    return SamplerLoop(
        capture_source=source,
        encoder=FrameEncoder(),
        classifier=client,
        ledger=RewardLedger(),
        interval_seconds=interval_seconds,
        classify_timeout_seconds=classify_timeout_seconds,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(classifier_base_url="https://classifier.test")


@pytest.fixture
def capture_source() -> FakeCaptureSource:
    return FakeCaptureSource()


@pytest.fixture
def classifier_client() -> FakeClassifierClient:
    return FakeClassifierClient()


@dataclass
class ResourceTracker:
    """Records whether container resources were closed."""

    closed: bool = False

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def resources() -> ResourceTracker:
    return ResourceTracker()


@pytest.fixture
def container(
    settings: Settings,
    capture_source: FakeCaptureSource,
    classifier_client: FakeClassifierClient,
    resources: ResourceTracker,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        sampler=build_sampler(capture_source, classifier_client),
        close_resources=resources.close,
    )
