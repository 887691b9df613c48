"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from emotion_scanner.adapters.httpx_classifier_client import HttpxClassifierClient
from emotion_scanner.adapters.opencv_capture_source import OpenCvCaptureSource
from emotion_scanner.config import Settings, normalize_wallet_address
from emotion_scanner.services.encoding import FrameEncoder
from emotion_scanner.services.rewards import RewardLedger
from emotion_scanner.services.sampler import SamplerLoop


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    sampler: SamplerLoop
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    capture_source = OpenCvCaptureSource(
        device_index=resolved_settings.camera_index,
        width=resolved_settings.capture_width,
        height=resolved_settings.capture_height,
    )
    classifier_client = HttpxClassifierClient.create(
        base_url=resolved_settings.classifier_base_url,
        wallet_address=normalize_wallet_address(resolved_settings.wallet_address),
        timeout=resolved_settings.classify_timeout_seconds,
    )
    sampler = SamplerLoop(
        capture_source=capture_source,
        encoder=FrameEncoder(jpeg_quality=resolved_settings.jpeg_quality),
        classifier=classifier_client,
        ledger=RewardLedger(pulse_seconds=resolved_settings.reward_pulse_seconds),
        interval_seconds=resolved_settings.sample_interval_seconds,
        classify_timeout_seconds=resolved_settings.classify_timeout_seconds,
    )

    async def close_resources() -> None:
        await classifier_client.close()

    return AppContainer(
        settings=resolved_settings,
        sampler=sampler,
        close_resources=close_resources,
    )
