"""
Input normalization for the damage calculator.

Raw field text is turned into a non-negative integer: parse, floor, then
clamp at zero. Anything that does not parse as a plain decimal number
becomes 0. Parsing is locale-independent and never raises.
"""
import math
import re
from numbers import Real
from typing import Optional, Union

from ..core.calc_enums import FIELD_ORDER
from ..core.data_structures import RawInputs, CombatStats

RawValue = Union[str, int, float]
Number = Union[int, float]

# Optional sign, digits with optional fraction (or a bare fraction), optional exponent
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

# Longer integer literals are read as floats (and overflow to infinity)
_MAX_EXACT_DIGITS = 4000


def parse_number(raw: RawValue) -> Optional[Number]:
    """Interpret raw input as a number.

    Surrounding whitespace is ignored and empty text reads as 0. Integer
    literals come back as exact ints. Returns None when the text is not a
    decimal literal; a float result may be non-finite for literals that
    overflow.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, Real):
        try:
            return float(raw)
        except OverflowError:
            return math.inf if raw > 0 else -math.inf

    text = str(raw).strip()
    if text == "":
        return 0.0
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    if _INTEGER_PATTERN.fullmatch(text) and len(text) <= _MAX_EXACT_DIGITS:
        return int(text)
    return float(text)


def normalize(raw: RawValue) -> int:
    """Convert raw input into a non-negative integer.

    Unparseable or non-finite input gives 0; otherwise the value is floored
    and then clamped to a minimum of 0.
    """
    value = parse_number(raw)
    if value is None:
        return 0
    if isinstance(value, int):
        return max(0, value)
    if not math.isfinite(value):
        return 0
    return max(0, math.floor(value))


def normalize_inputs(raw: RawInputs) -> CombatStats:
    """Normalize each field of a raw input record independently."""
    return CombatStats(**{f.value: normalize(raw.get(f)) for f in FIELD_ORDER})
