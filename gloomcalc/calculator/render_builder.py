"""
Render context building for the calculator.

This module handles the conversion from a calculation snapshot to render
contexts that can be consumed by any renderer implementation.
"""
from typing import Optional

from ..core.calc_enums import FIELD_ORDER, ResultField, RESULT_LABELS, StatField
from ..core.config_loader import IconSet
from ..core.data_structures import CalculationSnapshot
from ..core.renderable import (
    BreakdownRenderData,
    InputFieldRenderData,
    RenderContext,
    ResultRenderData,
)
from ..core.renderer import RendererConfig
from .breakdown import BreakdownCalculator
from .corrections import format_warnings
from .log_manager import LogManager
from .resolver import CALCULATION_ORDER, describe_formulas

# Label icons shown next to the input fields
FIELD_ICONS = {
    StatField.HP: "❤️",
    StatField.SHIELD: "🛡️",
    StatField.PIERCE: "⚡",
    StatField.ATTACK: "⚔️",
}

FIELD_DESCRIPTIONS = {
    StatField.HP: "Current HP",
    StatField.SHIELD: "Shield",
    StatField.PIERCE: "Pierce",
    StatField.ATTACK: "Attack Damage (already modified)",
}


class RenderBuilder:
    """Builds render contexts from calculation snapshots."""

    def __init__(
        self,
        icons: IconSet,
        renderer_config: Optional[RendererConfig] = None,
        log_manager: Optional[LogManager] = None
    ):
        self.icons = icons
        self.renderer_config = renderer_config or RendererConfig()
        self.log_manager = log_manager

    def build(self, snapshot: CalculationSnapshot) -> RenderContext:
        """Build the render context for one snapshot."""
        return RenderContext(
            title=self.renderer_config.title,
            subtitle=self.renderer_config.subtitle,
            inputs=self._build_inputs(snapshot),
            results=self._build_results(snapshot),
            calculation_order=list(CALCULATION_ORDER),
            breakdown=self._build_breakdown(snapshot),
            warning_text=format_warnings(snapshot.warnings),
            log_lines=self._build_log_lines(),
            revision=snapshot.revision,
        )

    def _build_inputs(self, snapshot: CalculationSnapshot) -> list[InputFieldRenderData]:
        return [
            InputFieldRenderData(
                key=stat_field.value,
                label=FIELD_DESCRIPTIONS[stat_field],
                text=snapshot.raw.get(stat_field),
                normalized=snapshot.stats.get(stat_field),
                icon=FIELD_ICONS[stat_field],
                corrected=snapshot.warning_for(stat_field) is not None,
            )
            for stat_field in FIELD_ORDER
        ]

    def _build_results(self, snapshot: CalculationSnapshot) -> list[ResultRenderData]:
        formulas = describe_formulas(snapshot.stats, snapshot.result)
        values = {
            ResultField.EFFECTIVE_SHIELD: snapshot.result.effective_shield,
            ResultField.DAMAGE: snapshot.result.damage,
            ResultField.HP_LEFT: snapshot.result.hp_left,
        }

        results = []
        for result_field in ResultField:
            highlight = None
            if result_field == ResultField.HP_LEFT and values[result_field] == 0:
                highlight = "zero"
            elif result_field == ResultField.DAMAGE:
                highlight = "damage"
            results.append(ResultRenderData(
                label=RESULT_LABELS[result_field],
                value=values[result_field],
                formula=formulas[result_field],
                highlight=highlight,
            ))
        return results

    def _build_breakdown(self, snapshot: CalculationSnapshot) -> BreakdownRenderData:
        return BreakdownRenderData(
            rows=BreakdownCalculator.icon_rows(snapshot.breakdown, self.icons),
            damage=snapshot.result.damage,
        )

    def _build_log_lines(self) -> list[str]:
        if self.log_manager is None or not self.renderer_config.show_log:
            return []
        return self.log_manager.get_log_lines(self.renderer_config.log_lines)
