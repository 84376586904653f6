"""
Correction detection.

Compares what the user typed in a field with the integer the normalizer
produced for it and reports a warning when the two disagree.
"""
from typing import Iterable, Optional

from ..core.calc_enums import StatField, FIELD_ORDER, CORRECTION_MESSAGE, WARNING_SEPARATOR
from ..core.data_structures import RawInputs, CombatStats, CorrectionWarning
from .normalizer import parse_number


def detect_correction(
    stat_field: StatField,
    raw_text: str,
    normalized: int,
    message: str = CORRECTION_MESSAGE
) -> Optional[CorrectionWarning]:
    """Decide whether normalizing ``raw_text`` visibly changed it.

    An empty field means "not yet specified" and never warns. Negative
    values clamped to 0, fractions floored and non-numeric text defaulted to
    0 all warn; ``-0`` and ``3.0`` do not.
    """
    text = str(raw_text).strip()
    if text == "":
        return None

    value = parse_number(text)
    if value is not None and value == normalized:
        return None
    return CorrectionWarning(field=stat_field, message=message)


def detect_corrections(
    raw: RawInputs,
    stats: CombatStats,
    message: str = CORRECTION_MESSAGE
) -> tuple[CorrectionWarning, ...]:
    """Recompute all warnings, in the fixed order HP, Shield, Pierce, Attack."""
    warnings = []
    for stat_field in FIELD_ORDER:
        warning = detect_correction(stat_field, raw.get(stat_field), stats.get(stat_field), message)
        if warning is not None:
            warnings.append(warning)
    return tuple(warnings)


def format_warnings(warnings: Iterable[CorrectionWarning]) -> str:
    """Join warnings into the single line shown under the inputs."""
    return WARNING_SEPARATOR.join(str(w) for w in warnings)
