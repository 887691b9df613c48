"""Domain models for the scanner state exposed to presentation."""

from dataclasses import dataclass
from enum import Enum


class SamplerStatus(str, Enum):
    """Lifecycle status of the sampler loop."""

    INITIALIZING = "initializing"
    READY = "ready"
    ERROR = "error"
    STOPPED = "stopped"


@dataclass
class SamplerState:
    """Mutable state owned by a single sampler loop."""

    status: SamplerStatus = SamplerStatus.INITIALIZING
    in_flight: bool = False


@dataclass(frozen=True)
class DisplayState:
    """User-facing projection of the latest classification."""

    label: str
    confidence_percent: int
    message: str


@dataclass(frozen=True)
class ScannerSnapshot:
    """Everything the presentation layer needs to render the scanner."""

    status: SamplerStatus
    status_message: str | None
    display: DisplayState
    session_count: int
    pulse_active: bool
    reward_banner: str | None
