"""Tests for logging configuration."""

import logging

from emotion_scanner.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("emotion_scanner")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_applies_module_levels() -> None:
    configure_logging(
        level="warning",
        module_levels={"emotion_scanner.services.sampler": "DEBUG"},
    )

    assert logging.getLogger("emotion_scanner").level == logging.WARNING
    sampler_logger = logging.getLogger("emotion_scanner.services.sampler")
    assert sampler_logger.isEnabledFor(logging.DEBUG)

    configure_logging()

    assert logging.getLogger("emotion_scanner").level == logging.INFO
