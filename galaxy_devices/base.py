"""Base classes and data structures for Galaxy command sinks"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


# Custom exception hierarchy

class GalaxyError(Exception):
    """Base exception for Galaxy control errors"""

    # Commands that reached the sink before a batch failed
    commands_sent = 0


class DeviceNotConnectedError(GalaxyError):
    """Device is not connected"""


class DeviceCommunicationError(GalaxyError):
    """Socket communication failed"""


class ArrayValidationError(GalaxyError):
    """Array request is missing a required selection or is out of range"""


class CapacityExceededError(ArrayValidationError):
    """Array needs more outputs than the device has from the starting output"""

    def __init__(self, required: int, available: int, start_output: int):
        self.required = required
        self.available = available
        self.start_output = start_output
        super().__init__(
            f"Not enough outputs. Need {required} outputs starting from {start_output}, "
            f"but only {available} available"
        )


@dataclass(frozen=True)
class SpeakerPhase:
    """One phase-response variant of a loudspeaker model"""
    id: str  # e.g. 'pc125'
    label: str  # e.g. 'PC125'
    type_id: str  # delay integration type sent to the device
    numeric: int = 0


@dataclass(frozen=True)
class SpeakerEntry:
    """A loudspeaker model and its phase variants (phases[0] is the default)"""
    key: str
    label: str
    phases: Tuple[SpeakerPhase, ...] = ()

    @property
    def default_phase(self) -> Optional[SpeakerPhase]:
        return self.phases[0] if self.phases else None


@dataclass(frozen=True)
class StartingPoint:
    """Named preset of calibration command templates for one placement of a model"""
    id: str
    title: str
    control_points: Tuple[str, ...]


@dataclass(frozen=True)
class CompatibilityEntry:
    """Valid primary/secondary pairing for a mixed array with its delay offsets"""
    primary: str
    secondary: str
    primary_delay_ms: float = 0.0
    secondary_delay_ms: float = 0.0

    def __post_init__(self):
        """Validate delays"""
        if self.primary_delay_ms < 0 or self.secondary_delay_ms < 0:
            raise ValueError(
                f"Delays must be non-negative, got {self.primary_delay_ms}/{self.secondary_delay_ms}"
            )


class CommandSink(ABC):
    """Abstract base class for anything that accepts Galaxy set commands"""

    def __init__(self):
        self.debug = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable handler name (e.g., 'Galaxy', 'Dry run')"""
        pass

    @abstractmethod
    def connect(self) -> None:
        """Open the connection

        Raises:
            DeviceCommunicationError: If connection fails
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection"""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        pass

    @abstractmethod
    def send_command(self, line: str) -> None:
        """Send one command line (path=value)

        Raises:
            DeviceNotConnectedError: If the sink is not connected
            DeviceCommunicationError: If the write fails
        """
        pass

    def send_lines(self, lines: Iterable[str]) -> int:
        """Send lines one at a time, in order. Returns the number sent.

        On failure the raised GalaxyError carries the count already sent in
        its commands_sent attribute.
        """
        sent = 0
        try:
            for line in lines:
                self.send_command(line)
                sent += 1
        except GalaxyError as e:
            e.commands_sent = sent
            raise
        return sent

    async def send_batch(self, lines: List[str]) -> int:
        """Send a batch of command lines in order

        The whole batch is one awaited unit; commands keep their order and a
        failure stops the batch where it happened (nothing is rolled back).

        Args:
            lines: Command lines to send

        Returns:
            int: Number of commands sent
        """
        if not lines:
            return 0
        return await asyncio.to_thread(self.send_lines, list(lines))
