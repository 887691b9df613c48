"""Tests for container wiring."""

import asyncio

from emotion_scanner.adapters.httpx_classifier_client import HttpxClassifierClient
from emotion_scanner.adapters.opencv_capture_source import OpenCvCaptureSource
from emotion_scanner.containers import build_container
from emotion_scanner.domain.scanner import SamplerStatus


def test_build_container_wires_sampler(settings) -> None:
    container = build_container(settings)

    sampler = container.sampler
    assert isinstance(sampler.capture_source, OpenCvCaptureSource)
    assert isinstance(sampler.classifier, HttpxClassifierClient)
    assert sampler.classifier.wallet_address is None
    assert sampler.interval_seconds == 1.5
    assert sampler.state.status is SamplerStatus.INITIALIZING
    asyncio.run(container.close_resources())
