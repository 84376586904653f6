"""The calculation core: normalize, detect corrections, resolve."""

from .normalizer import normalize, normalize_inputs, parse_number
from .corrections import detect_correction, detect_corrections, format_warnings
from .resolver import resolve, describe_formulas
from .breakdown import BreakdownCalculator

__all__ = [
    "normalize",
    "normalize_inputs",
    "parse_number",
    "detect_correction",
    "detect_corrections",
    "format_warnings",
    "resolve",
    "describe_formulas",
    "BreakdownCalculator",
]
