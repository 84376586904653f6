"""
Visual breakdown of a resolved attack.

This module derives the illustrative blocked/passed counts and the icon rows
shown next to the numeric results. It has no logic of its own beyond
``blocked = min(attack, effective_shield)`` and ``passed = attack - blocked``,
so it can never disagree with the resolver.
"""
from ..core.calc_enums import BreakdownRow, BREAKDOWN_LABELS
from ..core.config_loader import IconSet
from ..core.data_structures import CombatStats, ResolutionResult, VisualBreakdown

# Icons drawn per row before the rest is shown as a count
MAX_ROW_ICONS = 40


class BreakdownCalculator:
    """Builds visual breakdowns and their icon rows."""

    @staticmethod
    def calculate(stats: CombatStats, result: ResolutionResult) -> VisualBreakdown:
        """Calculate the breakdown counts for one resolution.

        Args:
            stats: The normalized inputs
            result: The resolution of those inputs

        Returns:
            VisualBreakdown with one count per row
        """
        blocked = min(stats.attack, result.effective_shield)
        passed = stats.attack - blocked

        return VisualBreakdown(
            attack=stats.attack,
            shield=stats.shield,
            pierce=stats.pierce,
            effective_shield=result.effective_shield,
            blocked=blocked,
            passed=passed,
        )

    @staticmethod
    def count_for(breakdown: VisualBreakdown, row: BreakdownRow) -> int:
        return getattr(breakdown, row.value)

    @staticmethod
    def repeat_icon(icon: str, count: int, limit: int = MAX_ROW_ICONS) -> str:
        """Repeat an icon ``count`` times, space separated; empty for count <= 0.

        Counts above ``limit`` draw ``limit`` icons followed by ``+N``.
        """
        if count <= 0:
            return ""
        if count > limit:
            return " ".join([icon] * limit) + f" +{count - limit}"
        return " ".join([icon] * count)

    @staticmethod
    def icon_rows(breakdown: VisualBreakdown, icons: IconSet) -> list[tuple[str, str]]:
        """Label and icon string for every row, in display order.

        Empty rows show the icon set's empty marker.
        """
        rows = []
        for row in BreakdownRow:
            count = BreakdownCalculator.count_for(breakdown, row)
            symbols = BreakdownCalculator.repeat_icon(icons.icon_for(row), count) or icons.empty
            rows.append((BREAKDOWN_LABELS[row], symbols))
        return rows
