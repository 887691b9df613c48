"""Fixed-interval capture, classify and reward loop."""

import asyncio
import logging
from dataclasses import dataclass, field

from emotion_scanner.domain.capture import CaptureSession, FramePayload
from emotion_scanner.domain.classification import ClassificationResult, error_result
from emotion_scanner.domain.errors import (
    ClassificationError,
    DeviceUnavailable,
    FrameNotReady,
)
from emotion_scanner.domain.scanner import (
    DisplayState,
    SamplerState,
    SamplerStatus,
    ScannerSnapshot,
)
from emotion_scanner.services.capture import CaptureSource
from emotion_scanner.services.classification import ClassifierClient
from emotion_scanner.services.encoding import FrameEncoder
from emotion_scanner.services.projector import REWARD_BANNER, project, status_message
from emotion_scanner.services.rewards import RewardLedger

logger = logging.getLogger(__name__)

SNAPSHOT_QUEUE_SIZE = 16
FRAME_TIMEOUT_SECONDS = 5.0


@dataclass
class SamplerLoop:
    """Samples the camera on a fixed period with at most one call in flight.

    All state is owned by this object and touched only from the event loop
    that called ``start``. Results that resolve after ``stop`` (or after a
    restart) belong to an older session generation and are dropped.
    """

    capture_source: CaptureSource
    encoder: FrameEncoder
    classifier: ClassifierClient
    ledger: RewardLedger
    interval_seconds: float = 1.5
    classify_timeout_seconds: float | None = 10.0
    state: SamplerState = field(default_factory=SamplerState)
    latest_result: ClassificationResult | None = None
    _session: CaptureSession | None = field(default=None, init=False, repr=False)
    _generation: int = field(default=0, init=False, repr=False)
    _tick_task: "asyncio.Task[None] | None" = field(
        default=None, init=False, repr=False
    )
    _inflight_task: "asyncio.Task[None] | None" = field(
        default=None, init=False, repr=False
    )
    _subscribers: "list[asyncio.Queue[ScannerSnapshot]]" = field(
        default_factory=list, init=False, repr=False
    )

    @property
    def display_state(self) -> DisplayState:
        """Return the projection of the latest result."""
        return project(self.latest_result)

    @property
    def session(self) -> CaptureSession | None:
        """Return the active capture session, if any."""
        return self._session

    def snapshot(self) -> ScannerSnapshot:
        """Return the current read-only view of the scanner."""
        pulse_active = self.ledger.pulse_active
        return ScannerSnapshot(
            status=self.state.status,
            status_message=status_message(self.state.status),
            display=self.display_state,
            session_count=self.ledger.session_count,
            pulse_active=pulse_active,
            reward_banner=REWARD_BANNER if pulse_active else None,
        )

    def start(self) -> None:
        """Acquire the camera and begin ticking. Must run inside an event loop."""
        if self.state.status is SamplerStatus.READY:
            return
        self._generation += 1
        self.state.status = SamplerStatus.INITIALIZING
        self._publish()
        try:
            session = self.capture_source.acquire()
        except DeviceUnavailable:
            logger.exception("Could not access camera")
            self.state.status = SamplerStatus.ERROR
            self._publish()
            return
        self._session = session
        self.latest_result = None
        self.ledger.reset()
        self.state.status = SamplerStatus.READY
        self._tick_task = asyncio.create_task(self._run_ticks())
        logger.info(
            "Sampler started at %dx%d, interval %.2fs",
            session.frame_width,
            session.frame_height,
            self.interval_seconds,
        )
        self._publish()

    def stop(self) -> None:
        """Stop ticking and release the camera, even with a call in flight."""
        self._generation += 1
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None
        if self._session is not None:
            self.capture_source.release(self._session)
            self._session = None
        if self.state.status is not SamplerStatus.STOPPED:
            self.state.status = SamplerStatus.STOPPED
            logger.info("Sampler stopped")
            self._publish()

    async def drain(self, *, cancel: bool = False) -> None:
        """Wait for the outstanding sample, or cancel it when ``cancel`` is set."""
        task = self._inflight_task
        if task is None or task.done():
            return
        if cancel:
            task.cancel()
        await asyncio.wait({task})

    @property
    def subscriber_count(self) -> int:
        """Return the number of registered snapshot queues."""
        return len(self._subscribers)

    def tick(self) -> bool:
        """Run one sampling tick and return True if a sample was dispatched.

        The frame grab, encoding and classification all happen in the
        dispatched task; ``in_flight`` covers the whole sequence.
        """
        if self.state.status is not SamplerStatus.READY or self._session is None:
            return False
        if self.state.in_flight:
            logger.debug("Sample in flight, skipping tick")
            return False
        self.state.in_flight = True
        self._inflight_task = asyncio.create_task(
            self._sample(self._session, self._generation)
        )
        return True

    def subscribe(self) -> "asyncio.Queue[ScannerSnapshot]":
        """Return a queue that receives a snapshot after every update."""
        queue: asyncio.Queue[ScannerSnapshot] = asyncio.Queue(
            maxsize=SNAPSHOT_QUEUE_SIZE
        )
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: "asyncio.Queue[ScannerSnapshot]") -> None:
        """Stop delivering snapshots to a queue."""
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    async def _run_ticks(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.tick()
            except Exception:
                logger.exception("Sampling tick failed")

    def _grab(self, session: CaptureSession) -> FramePayload:
        frame = self.capture_source.current_frame(session)
        return self.encoder.encode(frame)

    async def _sample(self, session: CaptureSession, generation: int) -> None:
        try:
            try:
                payload = await asyncio.wait_for(
                    asyncio.to_thread(self._grab, session),
                    timeout=FRAME_TIMEOUT_SECONDS,
                )
            except FrameNotReady:
                logger.debug("Frame not ready, skipping tick")
                return
            except TimeoutError:
                logger.warning(
                    "Frame grab timed out after %ss", FRAME_TIMEOUT_SECONDS
                )
                return
            if generation != self._generation:
                logger.debug("Dropping frame from a finished session")
                return
            try:
                result = await asyncio.wait_for(
                    self.classifier.classify(payload),
                    timeout=self.classify_timeout_seconds,
                )
            except ClassificationError:
                logger.warning("Emotion classification failed", exc_info=True)
                result = error_result()
            except TimeoutError:
                logger.warning(
                    "Emotion classification timed out after %ss",
                    self.classify_timeout_seconds,
                )
                result = error_result()
        except Exception:
            logger.exception("Sampling failed, waiting for the next tick")
            return
        finally:
            self.state.in_flight = False
        if generation != self._generation:
            logger.debug("Dropping result from a finished session")
            return
        self._apply(result, generation)

    def _apply(self, result: ClassificationResult, generation: int) -> None:
        self.latest_result = result
        if self.ledger.record_if_rewarded(result):
            logger.info(
                "Reward %s, session total %d",
                result.reward_status.value,
                self.ledger.session_count,
            )
            asyncio.get_running_loop().call_later(
                self.ledger.pulse_seconds, self._publish_if_current, generation
            )
        self._publish()

    def _publish_if_current(self, generation: int) -> None:
        if generation == self._generation:
            self._publish()

    def _publish(self) -> None:
        if not self._subscribers:
            return
        snapshot = self.snapshot()
        for queue in self._subscribers:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(snapshot)
