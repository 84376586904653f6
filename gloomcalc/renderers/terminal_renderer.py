import sys
from typing import Optional, TextIO

from ..core.renderer import Renderer, RendererConfig
from ..core.renderable import RenderContext, ResultRenderData
from ..core.input import InputEvent, parse_command


class TerminalRenderer(Renderer):
    """Unicode renderer with ANSI colors, reading commands line by line."""

    unicode_icons = True

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        prompt: str = "> "
    ):
        super().__init__(config)
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout
        self.prompt = prompt

        # Terminal-specific color mappings (ANSI codes)
        self.colors = {
            "title": "\033[1;95m",    # bold magenta
            "label": "\033[96m",      # cyan
            "value": "\033[1;97m",    # bold white
            "damage": "\033[1;91m",   # bold red
            "zero": "\033[1;90m",     # bold gray
            "formula": "\033[37m",    # gray
            "warning": "\033[93m",    # yellow
            "log": "\033[90m",        # dark gray
            "reset": "\033[0m",
        }

        # Box drawing characters
        self.box = {
            "top_left": "╔",
            "top_right": "╗",
            "bottom_left": "╚",
            "bottom_right": "╝",
            "horizontal": "═",
            "vertical": "║",
            "divider": "─",
        }

    def initialize(self) -> None:
        pass

    def cleanup(self) -> None:
        self._write("")

    def _write(self, text: str) -> None:
        self.output_stream.write(text + "\n")
        self.output_stream.flush()

    def _color(self, text: str, color: str) -> str:
        if not self.config.use_color:
            return text
        return f"{self.colors[color]}{text}{self.colors['reset']}"

    def _rule(self) -> str:
        return self.box["divider"] * self.config.width

    def render_frame(self, context: RenderContext) -> None:
        width = self.config.width
        inner = width - 2

        self._write(self.box["top_left"] + self.box["horizontal"] * inner + self.box["top_right"])
        self._write(self.box["vertical"] + self._color(f"⚔️  {context.title}".center(inner - 1), "title")
                    + self.box["vertical"])
        self._write(self.box["vertical"] + context.subtitle[:inner].center(inner) + self.box["vertical"])
        self._write(self.box["bottom_left"] + self.box["horizontal"] * inner + self.box["bottom_right"])

        for field in context.inputs:
            marker = self._color(" ⚠", "warning") if field.corrected else ""
            label = self._color(f"{field.icon} {field.label}:", "label")
            self._write(f"  {label} {field.text!r} -> {field.normalized}{marker}")

        if context.warning_text:
            self._write(self._color(f"  ⚠️  {context.warning_text}", "warning"))

        self._write(self._rule())
        for result in context.results:
            self._write(self._format_result(result))

        self._write(self._rule())
        self._write(self._color("Calculation Order", "title"))
        for index, step in enumerate(context.calculation_order, start=1):
            self._write(f"  {index}. {step}")

        self._write(self._rule())
        self._write(self._color("Visual Representation", "title"))
        for label, icons in context.breakdown.rows:
            self._write(f"  {label + ':':<18} {icons}")
        self._write(f"  {'':<18} → Damage = {self._color(str(context.breakdown.damage), 'damage')}")

        if context.log_lines:
            self._write(self._rule())
            for line in context.log_lines:
                self._write(self._color(line, "log"))

    def _format_result(self, result: ResultRenderData) -> str:
        color = result.highlight if result.highlight in self.colors else "value"
        value = self._color(f"{result.value:>4}", color)
        formula = self._color(result.formula, "formula")
        return f"  {result.label + ':':<18}{value}   {formula}"

    def show_message(self, text: str) -> None:
        self._write(text)

    def get_input_events(self) -> list[InputEvent]:
        """Read one command line; end of input becomes a quit event."""
        self.output_stream.write(self.prompt)
        self.output_stream.flush()

        line = self.input_stream.readline()
        if line == "":
            return [InputEvent.quit_event()]
        return [parse_command(line)]
