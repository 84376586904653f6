"""
Calculator session: the single current-input record and its derived state.

Each edit replaces the raw input record wholesale and re-runs the pure
normalize -> detect -> resolve -> breakdown pipeline synchronously. Nothing
is diffed or cached between revisions.
"""
from typing import Optional

from ..core.calc_enums import StatField, FIELD_ORDER, CORRECTION_MESSAGE
from ..core.config_loader import CalculatorConfig, get_calculator_config
from ..core.data_structures import RawInputs, CalculationSnapshot
from ..core.event_manager import EventManager
from ..core.events import (
    InputChanged, InputsReset, CalculationCompleted, CorrectionsDetected, LogMessage,
    DebugMessage
)
from .breakdown import BreakdownCalculator
from .corrections import detect_corrections
from .normalizer import normalize_inputs
from .resolver import resolve


def calculate(
    raw: RawInputs,
    correction_message: str = CORRECTION_MESSAGE,
    revision: int = 0
) -> CalculationSnapshot:
    """Run the full pipeline on one input record."""
    stats = normalize_inputs(raw)
    result = resolve(stats)
    warnings = detect_corrections(raw, stats, correction_message)
    breakdown = BreakdownCalculator.calculate(stats, result)

    return CalculationSnapshot(
        raw=raw,
        stats=stats,
        result=result,
        warnings=warnings,
        breakdown=breakdown,
        revision=revision,
    )


class CalculatorSession:
    """Holds the current inputs and recomputes on every change."""

    def __init__(
        self,
        event_manager: Optional[EventManager] = None,
        config: Optional[CalculatorConfig] = None
    ):
        self.event_manager = event_manager or EventManager()
        self.config = config or get_calculator_config()
        self._revision = 0
        self._raw = self.default_inputs()
        self._snapshot = calculate(self._raw, self.config.correction_message, self._revision)

    @property
    def raw(self) -> RawInputs:
        return self._raw

    @property
    def snapshot(self) -> CalculationSnapshot:
        return self._snapshot

    @property
    def revision(self) -> int:
        return self._revision

    def default_inputs(self) -> RawInputs:
        return RawInputs.from_stats(self.config.defaults)

    def edit(self, stat_field: StatField, text: str) -> CalculationSnapshot:
        """Replace one field's raw text and recompute everything."""
        old_text = self._raw.get(stat_field)
        self._raw = self._raw.with_field(stat_field, text)
        self._revision += 1

        self.event_manager.publish(
            InputChanged(
                revision=self._revision,
                stat_field=stat_field,
                old_text=old_text,
                new_text=text,
            ),
            source="CalculatorSession"
        )
        self.event_manager.publish(
            DebugMessage(
                revision=self._revision,
                message=f"{stat_field.label} set to {text!r}",
                source="CalculatorSession",
                context={"field": stat_field.value, "old": old_text, "new": text},
            ),
            source="CalculatorSession"
        )
        return self._recompute()

    def edit_many(self, values: dict[StatField, str]) -> CalculationSnapshot:
        """Apply several edits, in field order; the result reflects all of them."""
        snapshot = self._snapshot
        for stat_field in FIELD_ORDER:
            if stat_field in values:
                snapshot = self.edit(stat_field, values[stat_field])
        return snapshot

    def reset(self) -> CalculationSnapshot:
        """Restore the default inputs."""
        self._raw = self.default_inputs()
        self._revision += 1

        self.event_manager.publish(InputsReset(revision=self._revision), source="CalculatorSession")
        self._emit_log("Inputs reset to defaults", "INPUT", "INFO")
        return self._recompute()

    def _recompute(self) -> CalculationSnapshot:
        self._snapshot = calculate(self._raw, self.config.correction_message, self._revision)
        snapshot = self._snapshot

        self.event_manager.publish(
            CalculationCompleted(
                revision=self._revision,
                stats=snapshot.stats,
                result=snapshot.result,
            ),
            source="CalculatorSession"
        )
        self._emit_log(
            f"Effective shield {snapshot.result.effective_shield}, "
            f"damage {snapshot.result.damage}, HP left {snapshot.result.hp_left}",
            "CALCULATION",
            "INFO"
        )

        if snapshot.has_warnings:
            self.event_manager.publish(
                CorrectionsDetected(revision=self._revision, warnings=snapshot.warnings),
                source="CalculatorSession"
            )
            for warning in snapshot.warnings:
                self._emit_log(str(warning), "CORRECTION", "WARNING")

        return snapshot

    def _emit_log(self, message: str, category: str, level: str) -> None:
        self.event_manager.publish(
            LogMessage(
                revision=self._revision,
                message=message,
                category=category,
                level=level,
                source="CalculatorSession"
            ),
            source="CalculatorSession"
        )
