"""Calculator configuration loader for data-driven defaults and display.

This module loads the calculator configuration from a YAML file so that the
reset defaults, the breakdown icons and the correction message are defined
externally rather than hardcoded in the calculator or the renderers.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .calc_enums import BreakdownRow, FIELD_ORDER, CORRECTION_MESSAGE
from .data_structures import CombatStats, DEFAULT_STATS
from .errors import ConfigError

DEFAULT_ICONS = {
    "attack": "🟥",
    "shield": "🟦",
    "pierce": "⬛",
    "effective_shield": "🟦",
    "blocked": "❌",
    "passed": "🟥",
    "empty": "∅",
}

DEFAULT_ASCII_ICONS = {
    "attack": "#",
    "shield": "=",
    "pierce": "/",
    "effective_shield": "=",
    "blocked": "x",
    "passed": "#",
    "empty": "-",
}


@dataclass(frozen=True)
class IconSet:
    """Symbols used to draw the visual breakdown rows."""
    symbols: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ICONS))

    def icon_for(self, row: BreakdownRow) -> str:
        return self.symbols.get(row.value, "?")

    @property
    def empty(self) -> str:
        return self.symbols.get("empty", "")


class CalculatorConfig:
    """Container for calculator configuration data."""

    def __init__(self, config_data: dict[str, Any], source: str = "<config>"):
        self.source = source
        self.defaults = self._parse_defaults(config_data.get("defaults", {}))
        self.icons = IconSet(self._parse_icons(config_data.get("icons", {}), DEFAULT_ICONS, "icons"))
        self.ascii_icons = IconSet(
            self._parse_icons(config_data.get("ascii_icons", {}), DEFAULT_ASCII_ICONS, "ascii_icons")
        )
        message = config_data.get("correction_message", CORRECTION_MESSAGE)
        if not isinstance(message, str) or not message.strip():
            raise ConfigError("correction_message must be a non-empty string", self.source)
        self.correction_message = message

    def _parse_defaults(self, section: Any) -> CombatStats:
        """Read the reset values, normalizing each one like user input."""
        # Imported here: the calculator package depends on core, not the reverse
        from ..calculator.normalizer import normalize

        if section is None:
            return DEFAULT_STATS
        if not isinstance(section, dict):
            raise ConfigError("defaults must be a mapping", self.source)

        unknown = set(section) - {f.value for f in FIELD_ORDER}
        if unknown:
            raise ConfigError(f"unknown default fields: {', '.join(sorted(map(str, unknown)))}", self.source)

        values = {
            f.value: normalize(section.get(f.value, DEFAULT_STATS.get(f)))
            for f in FIELD_ORDER
        }
        return CombatStats(**values)

    def _parse_icons(self, section: Any, fallback: dict[str, str], name: str) -> dict[str, str]:
        if section is None:
            return dict(fallback)
        if not isinstance(section, dict):
            raise ConfigError(f"{name} must be a mapping", self.source)

        icons = dict(fallback)
        for key, symbol in section.items():
            if not isinstance(symbol, str):
                raise ConfigError(f"{name}.{key} must be a string", self.source)
            icons[str(key)] = symbol
        # An unset effective_shield icon follows the shield icon
        if "effective_shield" not in section and "shield" in section:
            icons["effective_shield"] = section["shield"]
        return icons


class CalculatorConfigLoader:
    """Loader for calculator configuration files with caching and fallbacks."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or self._find_default_config_path()
        self._cached_config: Optional[CalculatorConfig] = None
        self.last_error: Optional[str] = None

    def _find_default_config_path(self) -> str:
        """Find the default calculator.yaml file relative to the project."""
        # Start from this file's directory and walk up to find assets/calculator.yaml
        current_dir = Path(__file__).parent
        for _ in range(5):  # Limit search depth
            config_path = current_dir / "assets" / "calculator.yaml"
            if config_path.exists():
                return str(config_path)
            current_dir = current_dir.parent

        # Fallback: assume it's in the working directory
        return "assets/calculator.yaml"

    def load_config(self, force_reload: bool = False) -> CalculatorConfig:
        """Load the configuration, using the cache if available.

        A missing, unreadable or malformed file yields the built-in
        configuration; the reason is kept in ``last_error``.
        """
        if self._cached_config is not None and not force_reload:
            return self._cached_config

        self.last_error = None
        if not os.path.exists(self.config_path):
            self.last_error = f"Config file not found: {self.config_path}"
            self._cached_config = self._create_fallback_config()
            return self._cached_config

        try:
            with open(self.config_path, "r", encoding="utf-8") as file:
                config_data = yaml.safe_load(file) or {}
            if not isinstance(config_data, dict):
                raise ConfigError("top level must be a mapping", self.config_path)
            self._cached_config = CalculatorConfig(config_data, source=self.config_path)
        except (OSError, ValueError, yaml.YAMLError, ConfigError) as e:
            self.last_error = f"Error loading config: {e}"
            self._cached_config = self._create_fallback_config()

        return self._cached_config

    def _create_fallback_config(self) -> CalculatorConfig:
        """Create the built-in configuration."""
        fallback_data = {
            "defaults": DEFAULT_STATS.as_dict(),
            "icons": dict(DEFAULT_ICONS),
            "ascii_icons": dict(DEFAULT_ASCII_ICONS),
            "correction_message": CORRECTION_MESSAGE,
        }
        return CalculatorConfig(fallback_data, source="<fallback>")


# Global loader instance for easy access
_default_loader = CalculatorConfigLoader()


def get_calculator_config(force_reload: bool = False) -> CalculatorConfig:
    """Get the default calculator configuration."""
    return _default_loader.load_config(force_reload)
