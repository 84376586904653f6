"""
Unit tests for damage resolution.

Tests the three-step Shield / Pierce formula, its clamping rules and the
formula descriptions shown next to each result.
"""
import itertools

import pytest

from gloomcalc.calculator.resolver import resolve, describe_formulas, CALCULATION_ORDER
from gloomcalc.core.calc_enums import ResultField
from gloomcalc.core.data_structures import CombatStats, ResolutionResult


def _stats(hp=10, shield=2, pierce=1, attack=3):
    return CombatStats(hp=hp, shield=shield, pierce=pierce, attack=attack)


# Small exhaustive grid for the property checks
GRID = [
    CombatStats(hp=h, shield=s, pierce=p, attack=a)
    for h, s, p, a in itertools.product(range(0, 6), range(0, 5), range(0, 5), range(0, 6))
]


class TestResolveScenarios:
    """Test the documented scenarios."""

    def test_default_values(self):
        """Test HP 10, Shield 2, Pierce 1, Attack 3."""
        assert resolve(_stats()) == ResolutionResult(effective_shield=1, damage=2, hp_left=8)

    def test_no_attack(self):
        """Test that a zero attack leaves HP untouched."""
        result = resolve(_stats(hp=5, shield=0, pierce=0, attack=0))

        assert result == ResolutionResult(effective_shield=0, damage=0, hp_left=5)

    def test_pierce_exceeds_shield(self):
        """Test that excess pierce floors effective shield at 0."""
        result = resolve(_stats(shield=3, pierce=5))

        assert result.effective_shield == 0

    def test_shield_blocks_everything(self):
        result = resolve(_stats(hp=4, shield=6, pierce=0, attack=5))

        assert result.damage == 0
        assert result.hp_left == 4

    def test_lethal_damage_floors_hp(self):
        """Test that overkill damage leaves 0 HP, never negative."""
        result = resolve(_stats(hp=2, shield=0, pierce=0, attack=9))

        assert result.damage == 9
        assert result.hp_left == 0

    def test_pierce_applies_before_shield(self):
        """Test that pierce only reduces shield, never adds damage directly."""
        result = resolve(_stats(hp=10, shield=1, pierce=4, attack=2))

        assert result.effective_shield == 0
        assert result.damage == 2


class TestResolveProperties:
    """Test invariants over a grid of inputs."""

    def test_results_never_negative(self):
        for stats in GRID:
            result = resolve(stats)
            assert result.effective_shield >= 0
            assert result.damage >= 0
            assert result.hp_left >= 0

    def test_results_bounded_by_inputs(self):
        for stats in GRID:
            result = resolve(stats)
            assert result.effective_shield <= stats.shield
            assert result.damage <= stats.attack
            assert result.hp_left <= stats.hp

    @pytest.mark.parametrize("field_name,output,direction", [
        ("pierce", "effective_shield", -1),
        ("shield", "effective_shield", 1),
        ("attack", "damage", 1),
        ("hp", "hp_left", 1),
    ])
    def test_monotonicity(self, field_name, output, direction):
        """Test that raising one input moves its output in one direction only."""
        for stats in GRID:
            bumped = CombatStats(**{**stats.as_dict(), field_name: stats.as_dict()[field_name] + 1})
            before = getattr(resolve(stats), output)
            after = getattr(resolve(bumped), output)
            assert (after - before) * direction >= 0

    def test_pure(self):
        """Test that resolving twice gives equal results."""
        stats = _stats(hp=7, shield=3, pierce=1, attack=4)
        assert resolve(stats) == resolve(stats)


class TestDescribeFormulas:
    """Test formula lines shown under each result."""

    def test_default_formulas(self):
        stats = _stats()
        formulas = describe_formulas(stats, resolve(stats))

        assert formulas[ResultField.EFFECTIVE_SHIELD] == "max(2 - 1, 0)"
        assert formulas[ResultField.DAMAGE] == "max(3 - 1, 0)"
        assert formulas[ResultField.HP_LEFT] == "max(10 - 2, 0)"

    def test_calculation_order_notes(self):
        assert len(CALCULATION_ORDER) == 3
        assert CALCULATION_ORDER[0].startswith("Pierce")
