"""Centralized calculator enums and constants.

This module contains the enums shared by the normalizer, the resolver and the
render layer, providing a single source of truth for field names and labels.
"""

from enum import Enum, auto


class StatField(Enum):
    """The four input fields, in display order."""
    HP = "hp"
    SHIELD = "shield"
    PIERCE = "pierce"
    ATTACK = "attack"

    @property
    def label(self) -> str:
        return FIELD_LABELS[self]

    @classmethod
    def from_name(cls, name: str) -> "StatField":
        """Look up a field by its key, case-insensitively.

        Raises:
            ValueError: If the name matches no field
        """
        return cls(name.strip().lower())


class ResultField(Enum):
    """The three derived outputs shown on the results surface."""
    EFFECTIVE_SHIELD = auto()
    DAMAGE = auto()
    HP_LEFT = auto()


class BreakdownRow(Enum):
    """Rows of the visual breakdown, in display order."""
    ATTACK = "attack"
    SHIELD = "shield"
    PIERCE = "pierce"
    EFFECTIVE_SHIELD = "effective_shield"
    BLOCKED = "blocked"
    PASSED = "passed"


# Fixed field order used for normalization and correction reporting
FIELD_ORDER = (StatField.HP, StatField.SHIELD, StatField.PIERCE, StatField.ATTACK)

FIELD_LABELS = {
    StatField.HP: "HP",
    StatField.SHIELD: "Shield",
    StatField.PIERCE: "Pierce",
    StatField.ATTACK: "Attack",
}

RESULT_LABELS = {
    ResultField.EFFECTIVE_SHIELD: "Effective Shield",
    ResultField.DAMAGE: "Damage Taken",
    ResultField.HP_LEFT: "Remaining HP",
}

BREAKDOWN_LABELS = {
    BreakdownRow.ATTACK: "Damage (Attack)",
    BreakdownRow.SHIELD: "Shield",
    BreakdownRow.PIERCE: "Pierce",
    BreakdownRow.EFFECTIVE_SHIELD: "Effective Shield",
    BreakdownRow.BLOCKED: "Blocked",
    BreakdownRow.PASSED: "Damage Passed",
}

CORRECTION_MESSAGE = "rounded down and/or corrected to ≥ 0"
WARNING_SEPARATOR = " • "
