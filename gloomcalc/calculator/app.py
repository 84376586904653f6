"""
Main calculator orchestration class.

This module wires the session, the event manager, the log manager and a
renderer together and runs the input loop. Each input event is processed to
completion (edit, recompute, deliver events, render) before the next one is
read.
"""
from typing import Optional

from ..core.config_loader import CalculatorConfig, get_calculator_config
from ..core.event_manager import EventManager, EventPriority
from ..core.events import LogMessage, LogSaveRequested, SessionStarted, SessionEnded
from ..core.input import HELP_TEXT, InputEvent, InputType
from ..core.renderer import Renderer
from .log_manager import LogManager
from .render_builder import RenderBuilder
from .session import CalculatorSession


class CalculatorApp:
    """Coordinates the calculator session with a renderer."""

    def __init__(
        self,
        renderer: Renderer,
        config: Optional[CalculatorConfig] = None,
        config_error: Optional[str] = None,
        debug: bool = False
    ):
        self.renderer = renderer
        self.config = config or get_calculator_config()
        self.running = False

        self.event_manager = EventManager(enable_debug_logging=debug)
        self.log_manager = LogManager(self.event_manager)
        self.event_manager.set_debug_callback(self.log_manager.debug)
        if debug:
            self.log_manager.toggle_debug()

        self.session = CalculatorSession(self.event_manager, self.config)
        icons = self.config.icons if renderer.unicode_icons else self.config.ascii_icons
        self.render_builder = RenderBuilder(icons, renderer.config, self.log_manager)

        self._emit_log(f"Configuration loaded from {self.config.source}", "SYSTEM", "INFO")
        if config_error:
            self._emit_log(config_error, "WARNING", "WARNING")

    def _emit_log(self, message: str, category: str = "SYSTEM", level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(
                revision=self.session.revision,
                message=message,
                category=category,
                level=level,
                source="CalculatorApp"
            ),
            source="CalculatorApp"
        )

    def render(self) -> None:
        # Subscribers may publish while handling, so drain until quiet
        while self.event_manager.has_queued_events():
            self.event_manager.process_events()
        self.renderer.render_frame(self.render_builder.build(self.session.snapshot))

    def run_once(self) -> None:
        """Render the current state a single time without reading input."""
        self.renderer.start()
        self.event_manager.publish(SessionStarted(revision=self.session.revision, interactive=False))
        try:
            self.render()
        finally:
            self.event_manager.publish_immediate(SessionEnded(revision=self.session.revision, reason="done"))
            self.renderer.stop()

    def run(self) -> None:
        """Interactive loop: read commands until quit or end of input."""
        self.renderer.start()
        self.running = True
        self.event_manager.publish(SessionStarted(revision=self.session.revision, interactive=True))
        reason = "quit"

        try:
            self.render()
            while self.running:
                for event in self.renderer.get_input_events():
                    self.handle_input(event)
                    if not self.running:
                        break
                if self.running:
                    self.render()
        except KeyboardInterrupt:
            reason = "interrupted"
        finally:
            self.running = False
            self.event_manager.process_events()
            self.event_manager.publish_immediate(SessionEnded(revision=self.session.revision, reason=reason))
            self.renderer.stop()

    def handle_input(self, event: InputEvent) -> None:
        """Apply one input event to the session."""
        if event.is_edit() and event.stat_field is not None:
            self.session.edit(event.stat_field, event.text)
        elif event.event_type == InputType.RESET:
            self.session.reset()
        elif event.event_type == InputType.HELP:
            self.renderer.show_message(HELP_TEXT)
        elif event.event_type == InputType.TOGGLE_DEBUG:
            self.log_manager.toggle_debug()
            if self.log_manager.is_debug_enabled():
                for entry in self.event_manager.get_recent_events(5):
                    self.log_manager.debug(
                        f"Recent {entry['event_type']} (revision {entry['revision']}, {entry['priority']})"
                    )
            state = "on" if self.log_manager.is_debug_enabled() else "off"
            self._emit_log(f"Debug messages {state}", "UI", "INFO")
        elif event.event_type == InputType.SAVE_LOG:
            # Processed after any log messages already queued
            self.event_manager.publish(LogSaveRequested(revision=self.session.revision), priority=EventPriority.LOW)
        elif event.is_quit():
            self.running = False
        else:
            self._emit_log(f"Unknown command: {(event.raw_data or '').strip()!r}", "WARNING", "WARNING")
            self.renderer.show_message(HELP_TEXT)

    def shutdown(self) -> None:
        """Detach the log manager and release all subscriptions."""
        self.log_manager.detach()
        self.event_manager.shutdown()
