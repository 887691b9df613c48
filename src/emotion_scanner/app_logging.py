"""Logging configuration helpers."""

import logging


def configure_logging(
    level: str = "INFO", module_levels: dict[str, str] | None = None
) -> None:
    """Configure application logging with a single stream handler.

    ``module_levels`` overrides the level of individual module loggers, e.g.
    ``{"emotion_scanner.services.sampler": "DEBUG"}`` to see skipped ticks.
    Levels are reapplied on every call; the handler is installed once.
    """
    logger = logging.getLogger("emotion_scanner")
    logger.setLevel(level.upper())
    for name, module_level in (module_levels or {}).items():
        logging.getLogger(name).setLevel(module_level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
