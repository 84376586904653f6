import sys
from collections import deque
from typing import Iterable, Optional, TextIO

from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import RenderContext
from ..core.input import InputEvent, parse_command


class SimpleRenderer(Renderer):
    """Plain ASCII renderer (maximum compatibility).

    When ``commands`` is given the renderer plays them back instead of
    reading from the input stream, then quits.
    """

    unicode_icons = False

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        commands: Optional[Iterable[str]] = None,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None
    ):
        super().__init__(config)
        self._scripted = deque(commands) if commands is not None else None
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout
        self._frame_count = 0

    def initialize(self) -> None:
        self._print(self.config.title)
        self._print("=" * self.config.width)

    def cleanup(self) -> None:
        pass

    def _print(self, text: str = "") -> None:
        self.output_stream.write(text + "\n")

    def render_frame(self, context: RenderContext) -> None:
        self._frame_count += 1

        self._print(f"--- Revision {context.revision} ---")
        for field in context.inputs:
            flag = " (corrected)" if field.corrected else ""
            self._print(f"{field.label}: {field.text!r} -> {field.normalized}{flag}")

        if context.warning_text:
            self._print(f"WARNING: {context.warning_text}")

        self._print("-" * self.config.width)
        for result in context.results:
            self._print(f"{result.label}: {result.value}  [{result.formula}]")

        self._print("-" * self.config.width)
        for label, icons in context.breakdown.rows:
            self._print(f"{label}: {icons}")
        self._print(f"Damage = {context.breakdown.damage}")

        if context.log_lines:
            self._print("-" * self.config.width)
            for line in context.log_lines:
                self._print(line[:self.config.width])

    def show_message(self, text: str) -> None:
        self._print(text)

    def get_input_events(self) -> list[InputEvent]:
        if self._scripted is not None:
            if not self._scripted:
                return [InputEvent.quit_event()]
            return [parse_command(self._scripted.popleft())]

        line = self.input_stream.readline()
        if line == "":
            return [InputEvent.quit_event()]
        return [parse_command(line)]
