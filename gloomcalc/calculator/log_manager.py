"""
Log management system for calculator messages and debugging.

This module provides centralized logging with categorization, filtering,
and bounded storage for display below the calculator and for saving to disk.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional

from ..core.event_manager import EventManager
from ..core.events import (
    EventType, LogMessage as LogEvent, DebugMessage, LogSaveRequested, SessionStarted, SessionEnded
)


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()       # Startup, config loading, shutdown
    INPUT = auto()        # Field edits and resets
    CALCULATION = auto()  # Resolved results
    CORRECTION = auto()   # Normalization warnings
    DEBUG = auto()        # Debug messages
    WARNING = auto()      # Warning messages
    ERROR = auto()        # Error messages
    UI = auto()           # Renderer and command messages


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.INPUT: "INP",
    LogCategory.CALCULATION: "CLC",
    LogCategory.CORRECTION: "COR",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
    LogCategory.UI: "UI",
}


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class LogEntry:
    """A single log message with metadata."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the message for display."""
        parts = []

        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")

        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")

        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Manages calculator logging with categorization and filtering."""

    def __init__(
        self,
        event_manager: EventManager,
        max_messages: int = 500,
        default_level: LogLevel = LogLevel.INFO,
        log_dir: str = "logs"
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager for event-driven logging (required)
            max_messages: Maximum number of messages to store in the buffer
            default_level: Default log level for filtering
            log_dir: Directory that ``save_log_to_file`` writes into
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.event_manager = event_manager
        self.log_dir = log_dir

        # Categories whose messages are never shown below their own level
        self.category_levels = {
            LogCategory.DEBUG: LogLevel.DEBUG,
            LogCategory.WARNING: LogLevel.WARNING,
            LogCategory.CORRECTION: LogLevel.WARNING,
            LogCategory.ERROR: LogLevel.ERROR,
        }

        self._setup_event_subscriptions()

    def _subscriptions(self) -> list:
        return [
            (EventType.LOG_MESSAGE, self._handle_log_message_event, "log_message"),
            (EventType.DEBUG_MESSAGE, self._handle_debug_message_event, "debug_message"),
            (EventType.LOG_SAVE_REQUESTED, self._handle_log_save_request, "log_save_request"),
            (EventType.SESSION_STARTED, self._handle_session_event, "session_started"),
            (EventType.SESSION_ENDED, self._handle_session_event, "session_ended"),
        ]

    def _setup_event_subscriptions(self) -> None:
        for event_type, handler, name in self._subscriptions():
            self.event_manager.subscribe(event_type, handler, subscriber_name=f"LogManager.{name}")

    def detach(self) -> None:
        """Stop receiving events; buffered messages are kept."""
        for event_type, handler, _ in self._subscriptions():
            self.event_manager.unsubscribe(event_type, handler)

    def _handle_log_message_event(self, event) -> None:
        """Handle log message events from the event system."""
        if not isinstance(event, LogEvent):
            return

        # Map event category string to LogCategory enum
        try:
            category = LogCategory[event.category.upper()]
        except (KeyError, AttributeError):
            category = LogCategory.SYSTEM

        try:
            level = LogLevel[event.level.upper()]
        except (KeyError, AttributeError):
            level = LogLevel.INFO

        self.log(event.message, category, level)

    def _handle_debug_message_event(self, event) -> None:
        if isinstance(event, DebugMessage):
            self.log(f"[{event.source}] {event.message}", LogCategory.DEBUG, LogLevel.DEBUG)

    def _handle_log_save_request(self, event) -> None:
        if isinstance(event, LogSaveRequested):
            self.save_log_to_file()

    def _handle_session_event(self, event) -> None:
        if isinstance(event, SessionStarted):
            mode = "Interactive" if event.interactive else "One-shot"
            self.system(f"{mode} session started")
        elif isinstance(event, SessionEnded):
            self.system(f"Session ended ({event.reason})")

    def log(
        self,
        text: str,
        category: LogCategory = LogCategory.SYSTEM,
        level: Optional[LogLevel] = None
    ) -> None:
        """Add a message to the log.

        Messages are always stored; filtering happens when they are read.
        """
        if level is None:
            level = self.category_levels.get(category, LogLevel.INFO)
        self.messages.append(LogEntry(text=text, category=category, level=level))

    # Convenience methods for common categories
    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR)

    def _effective_level(self, entry: LogEntry) -> LogLevel:
        floor = self.category_levels.get(entry.category, LogLevel.DEBUG)
        return entry.level if entry.level.value >= floor.value else floor

    def get_messages(
        self,
        count: Optional[int] = None,
        categories: Optional[set[LogCategory]] = None
    ) -> list[LogEntry]:
        """Get recent messages, optionally filtered by category.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Set of categories to include (None for all,
                filtered by the current log level)

        Returns:
            List of recent messages, oldest first
        """
        if categories:
            filtered = [msg for msg in self.messages
                        if msg.category in categories]
        else:
            filtered = [
                msg for msg in self.messages
                if self._effective_level(msg).value >= self.log_level.value
            ]

        if count is not None and count < len(filtered):
            return filtered[-count:] if count > 0 else []
        return filtered

    def get_log_lines(self, count: Optional[int] = None) -> list[str]:
        """Formatted recent messages for the renderer's log panel."""
        return [msg.format() for msg in self.get_messages(count)]

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def is_debug_enabled(self) -> bool:
        """Check if debug messages are currently visible."""
        return self.log_level == LogLevel.DEBUG

    def toggle_debug(self) -> None:
        """Toggle debug message visibility."""
        if self.is_debug_enabled():
            self.set_log_level(LogLevel.INFO)
        else:
            self.set_log_level(LogLevel.DEBUG)

    def save_log_to_file(self) -> bool:
        """Save all messages to a timestamped log file.

        Returns:
            True if save was successful, False otherwise
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = os.path.join(self.log_dir, f"log_{timestamp}.log")

        try:
            os.makedirs(self.log_dir, exist_ok=True)

            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Gloomhaven Damage Calculator - Session Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")

                if not self.messages:
                    f.write("No messages to save.\n")
                else:
                    # Every buffered message, ignoring current filters
                    for msg in self.messages:
                        timestamp_str = msg.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                        f.write(f"[{timestamp_str}] [{msg.category.name}] [{msg.level.name}] {msg.text}\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return False

        self.system(f"Session log saved to {filepath}")
        return True
