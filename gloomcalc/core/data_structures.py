"""Unified data structures for the damage calculation pipeline.

This module provides clear definitions for the different data representations
used throughout the calculator architecture.

Data Flow:
1. RawInputs (text as edited) -> CombatStats (normalized) -> ResolutionResult
2. CombatStats + ResolutionResult -> VisualBreakdown (display aid)

Each structure serves a specific architectural layer and should not be merged.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .calc_enums import StatField, FIELD_ORDER, CORRECTION_MESSAGE


@dataclass(frozen=True)
class RawInputs:
    """Free-form text for the four fields, exactly as the user typed it.

    Transient invalid states (empty, negative, decimal, garbage) are allowed
    here; normalization happens on demand. The record is never mutated in
    place: edits produce a new instance via ``with_field``.
    """
    hp: str = ""
    shield: str = ""
    pierce: str = ""
    attack: str = ""

    def get(self, stat_field: StatField) -> str:
        return getattr(self, stat_field.value)

    def with_field(self, stat_field: StatField, text: str) -> "RawInputs":
        """Return a copy with one field replaced."""
        return replace(self, **{stat_field.value: text})

    def as_dict(self) -> dict[str, str]:
        return {f.value: self.get(f) for f in FIELD_ORDER}

    @classmethod
    def from_stats(cls, stats: "CombatStats") -> "RawInputs":
        return cls(
            hp=str(stats.hp),
            shield=str(stats.shield),
            pierce=str(stats.pierce),
            attack=str(stats.attack),
        )


@dataclass(frozen=True)
class CombatStats:
    """Normalized stats: every field is a non-negative integer."""
    hp: int
    shield: int
    pierce: int
    attack: int

    def __post_init__(self):
        for stat_field in FIELD_ORDER:
            value = getattr(self, stat_field.value)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(
                    f"{stat_field.label} must be a non-negative integer, got {value!r}"
                )

    def get(self, stat_field: StatField) -> int:
        return getattr(self, stat_field.value)

    def as_dict(self) -> dict[str, int]:
        return {f.value: self.get(f) for f in FIELD_ORDER}


# Values restored by the reset action
DEFAULT_STATS = CombatStats(hp=10, shield=2, pierce=1, attack=3)


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of the three-step formula."""
    effective_shield: int
    damage: int
    hp_left: int

    def as_dict(self) -> dict[str, int]:
        return {
            "effective_shield": self.effective_shield,
            "damage": self.damage,
            "hp_left": self.hp_left,
        }


@dataclass(frozen=True)
class CorrectionWarning:
    """Notice that normalization altered what the user typed in a field."""
    field: StatField
    message: str = CORRECTION_MESSAGE

    @property
    def label(self) -> str:
        return self.field.label

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


@dataclass(frozen=True)
class VisualBreakdown:
    """Illustrative counts derived from the resolved values.

    ``blocked + passed == attack`` and ``passed == damage`` always hold.
    """
    attack: int
    shield: int
    pierce: int
    effective_shield: int
    blocked: int
    passed: int


@dataclass(frozen=True)
class CalculationSnapshot:
    """Everything derived from one input state.

    Recomputed wholesale on every change; nothing here is updated
    incrementally.
    """
    raw: RawInputs
    stats: CombatStats
    result: ResolutionResult
    warnings: tuple[CorrectionWarning, ...]
    breakdown: VisualBreakdown
    revision: int = 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def warning_for(self, stat_field: StatField) -> Optional[CorrectionWarning]:
        for warning in self.warnings:
            if warning.field == stat_field:
                return warning
        return None
