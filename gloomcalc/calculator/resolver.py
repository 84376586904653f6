"""
Damage resolution.

Applies the Shield / Pierce formula in its fixed order:

1. Pierce reduces the target's Shield for this attack.
2. The remaining Shield reduces the damage.
3. The damage reduces HP.

Values never go below 0.
"""
from ..core.calc_enums import ResultField
from ..core.data_structures import CombatStats, ResolutionResult


def resolve(stats: CombatStats) -> ResolutionResult:
    """Resolve one attack against one defender."""
    effective_shield = max(stats.shield - stats.pierce, 0)
    damage = max(stats.attack - effective_shield, 0)
    hp_left = max(stats.hp - damage, 0)

    return ResolutionResult(
        effective_shield=effective_shield,
        damage=damage,
        hp_left=hp_left,
    )


def describe_formulas(stats: CombatStats, result: ResolutionResult) -> dict[ResultField, str]:
    """Formula lines shown under each result, with the actual numbers filled in."""
    return {
        ResultField.EFFECTIVE_SHIELD: f"max({stats.shield} - {stats.pierce}, 0)",
        ResultField.DAMAGE: f"max({stats.attack} - {result.effective_shield}, 0)",
        ResultField.HP_LEFT: f"max({stats.hp} - {result.damage}, 0)",
    }


CALCULATION_ORDER = (
    "Pierce reduces the target's Shield for this attack.",
    "The remaining Shield reduces the damage.",
    "Values never go below 0.",
)
