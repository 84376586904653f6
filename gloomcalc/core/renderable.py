from dataclasses import dataclass, field
from typing import Optional


@dataclass
class InputFieldRenderData:
    """One input field as the renderer should show it."""
    key: str
    label: str
    text: str
    normalized: int
    icon: str = ""
    corrected: bool = False


@dataclass
class ResultRenderData:
    """One derived value with the formula that produced it.

    ``highlight`` is set for values that deserve attention, e.g. "zero"
    when the defender is left with no HP.
    """
    label: str
    value: int
    formula: str
    highlight: Optional[str] = None


@dataclass
class BreakdownRenderData:
    """The visual breakdown as (label, icons) rows, plus the damage total."""
    rows: list[tuple[str, str]] = field(default_factory=list)
    damage: int = 0


@dataclass
class RenderContext:
    """Everything a renderer needs to draw one frame of the calculator.

    Built from a calculation snapshot by the render builder; renderers never
    compute anything themselves.
    """
    title: str = ""
    subtitle: str = ""
    inputs: list[InputFieldRenderData] = field(default_factory=list)
    results: list[ResultRenderData] = field(default_factory=list)
    calculation_order: list[str] = field(default_factory=list)
    breakdown: BreakdownRenderData = field(default_factory=BreakdownRenderData)
    warning_text: str = ""
    log_lines: list[str] = field(default_factory=list)
    revision: int = 0
