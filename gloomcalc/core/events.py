"""Calculator events.

This module defines the events published by the calculator session and
consumed by the log manager, the application loop and tests.

Event Design Principles:
- Events are immutable dataclasses with minimal payloads
- All events include the input revision they were produced for
- Events represent "what happened", never a request to do something
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from abc import ABC
from enum import Enum, auto

from .calc_enums import StatField

if TYPE_CHECKING:
    from .data_structures import CorrectionWarning, ResolutionResult, CombatStats


class EventType(Enum):
    """Types of calculator events that components can subscribe to."""
    # Input Events
    INPUT_CHANGED = auto()
    INPUTS_RESET = auto()

    # Calculation Events
    CALCULATION_COMPLETED = auto()
    CORRECTIONS_DETECTED = auto()

    # Logging Events
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()

    # Application Events
    SESSION_STARTED = auto()
    SESSION_ENDED = auto()


@dataclass(frozen=True)
class CalculatorEvent(ABC):
    """Base class for all calculator events."""
    revision: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class InputChanged(CalculatorEvent):
    """Event emitted when one field's raw text is replaced."""
    stat_field: StatField
    old_text: str
    new_text: str

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.INPUT_CHANGED)


@dataclass(frozen=True)
class InputsReset(CalculatorEvent):
    """Event emitted when all fields are restored to their defaults."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.INPUTS_RESET)


@dataclass(frozen=True)
class CalculationCompleted(CalculatorEvent):
    """Event emitted after the normalize -> resolve pipeline ran."""
    stats: "CombatStats"
    result: "ResolutionResult"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.CALCULATION_COMPLETED)


@dataclass(frozen=True)
class CorrectionsDetected(CalculatorEvent):
    """Event emitted when normalization altered at least one field."""
    warnings: tuple["CorrectionWarning", ...]

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.CORRECTIONS_DETECTED)


@dataclass(frozen=True)
class LogMessage(CalculatorEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: str  # "DEBUG", "INFO", "WARNING", "ERROR"
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(CalculatorEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(CalculatorEvent):
    """Event emitted when the user asks for the log to be written to disk."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)


@dataclass(frozen=True)
class SessionStarted(CalculatorEvent):
    """Event emitted when the application loop starts."""
    interactive: bool

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.SESSION_STARTED)


@dataclass(frozen=True)
class SessionEnded(CalculatorEvent):
    """Event emitted when the application loop stops."""
    reason: str = "quit"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.SESSION_ENDED)
