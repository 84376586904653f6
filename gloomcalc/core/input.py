"""Input events for the calculator prompt.

Lines typed at the prompt (or played back by the simple renderer) are parsed
into ``InputEvent`` objects that the application loop dispatches on.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional

from .calc_enums import StatField


class InputType(Enum):
    EDIT_FIELD = auto()
    RESET = auto()
    HELP = auto()
    TOGGLE_DEBUG = auto()
    SAVE_LOG = auto()
    QUIT = auto()
    UNKNOWN = auto()


COMMAND_ALIASES = {
    "reset": InputType.RESET,
    "r": InputType.RESET,
    "help": InputType.HELP,
    "?": InputType.HELP,
    "debug": InputType.TOGGLE_DEBUG,
    "save-log": InputType.SAVE_LOG,
    "save": InputType.SAVE_LOG,
    "quit": InputType.QUIT,
    "exit": InputType.QUIT,
    "q": InputType.QUIT,
}

HELP_TEXT = (
    "Commands: <hp|shield|pierce|attack> <value>, set <field> <value>, "
    "reset, debug, save-log, help, quit"
)


@dataclass
class InputEvent:
    event_type: InputType
    stat_field: Optional[StatField] = None
    text: str = ""
    raw_data: Optional[str] = None

    @classmethod
    def quit_event(cls) -> "InputEvent":
        return cls(event_type=InputType.QUIT)

    @classmethod
    def edit(cls, stat_field: StatField, text: str, raw_data: Optional[str] = None) -> "InputEvent":
        return cls(event_type=InputType.EDIT_FIELD, stat_field=stat_field, text=text, raw_data=raw_data)

    def is_edit(self) -> bool:
        return self.event_type == InputType.EDIT_FIELD

    def is_quit(self) -> bool:
        return self.event_type == InputType.QUIT


def parse_command(line: str) -> InputEvent:
    """Turn one line typed at the prompt into an input event.

    ``hp 12``, ``set hp 12`` and ``hp=12`` all edit HP. A field name with
    no value clears the field. Everything after the field name is kept as
    the raw text, so ``attack 2.9`` and ``attack abc`` reach the normalizer
    untouched.
    """
    stripped = line.strip()
    if not stripped:
        return InputEvent(event_type=InputType.UNKNOWN, raw_data=line)

    command = stripped.split(maxsplit=1)[0].lower()
    if command in COMMAND_ALIASES:
        return InputEvent(event_type=COMMAND_ALIASES[command], raw_data=line)

    body = stripped
    if command == "set":
        parts = stripped.split(maxsplit=1)
        body = parts[1] if len(parts) > 1 else ""

    parts = body.replace("=", " ", 1).split(maxsplit=1)
    name = parts[0] if parts else ""
    value = parts[1] if len(parts) > 1 else ""

    try:
        stat_field = StatField.from_name(name)
    except ValueError:
        return InputEvent(event_type=InputType.UNKNOWN, raw_data=line)

    return InputEvent.edit(stat_field, value.strip(), raw_data=line)
