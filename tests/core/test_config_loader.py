"""
Unit tests for the calculator configuration loader.

Tests YAML loading, normalization of configured defaults, caching and the
fallback to the built-in configuration.
"""
import pytest

from gloomcalc.core.calc_enums import BreakdownRow, CORRECTION_MESSAGE
from gloomcalc.core.config_loader import (
    CalculatorConfig, CalculatorConfigLoader, DEFAULT_ICONS, get_calculator_config
)
from gloomcalc.core.data_structures import CombatStats, DEFAULT_STATS
from gloomcalc.core.errors import ConfigError


def _write(tmp_path, text):
    path = tmp_path / "calculator.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestCalculatorConfig:
    """Test parsing of configuration data."""

    def test_empty_data_uses_builtins(self):
        config = CalculatorConfig({})

        assert config.defaults == DEFAULT_STATS
        assert config.icons.icon_for(BreakdownRow.BLOCKED) == "❌"
        assert config.correction_message == CORRECTION_MESSAGE

    def test_defaults_are_normalized(self):
        """Test that configured defaults go through the normalizer."""
        config = CalculatorConfig({"defaults": {"hp": "12.7", "shield": -3}})

        assert config.defaults == CombatStats(hp=12, shield=0, pierce=1, attack=3)

    def test_unknown_default_field(self):
        with pytest.raises(ConfigError, match="unknown default fields: armor"):
            CalculatorConfig({"defaults": {"armor": 2}})

    def test_defaults_must_be_mapping(self):
        with pytest.raises(ConfigError):
            CalculatorConfig({"defaults": [1, 2, 3]})

    def test_icon_override(self):
        config = CalculatorConfig({"icons": {"shield": "S"}})

        assert config.icons.icon_for(BreakdownRow.SHIELD) == "S"
        assert config.icons.icon_for(BreakdownRow.EFFECTIVE_SHIELD) == "S"
        assert config.icons.icon_for(BreakdownRow.ATTACK) == DEFAULT_ICONS["attack"]

    def test_icon_must_be_string(self):
        with pytest.raises(ConfigError):
            CalculatorConfig({"icons": {"shield": 3}})

    def test_blank_message_rejected(self):
        with pytest.raises(ConfigError):
            CalculatorConfig({"correction_message": "  "})


class TestCalculatorConfigLoader:
    """Test loading from disk."""

    def test_load_yaml(self, tmp_path):
        path = _write(tmp_path, "defaults:\n  hp: 20\ncorrection_message: fixed\n")
        loader = CalculatorConfigLoader(path)

        config = loader.load_config()

        assert config.defaults.hp == 20
        assert config.correction_message == "fixed"
        assert config.source == path
        assert loader.last_error is None

    def test_missing_file_falls_back(self, tmp_path):
        loader = CalculatorConfigLoader(str(tmp_path / "nope.yaml"))

        config = loader.load_config()

        assert config.source == "<fallback>"
        assert config.defaults == DEFAULT_STATS
        assert "not found" in loader.last_error

    def test_invalid_yaml_falls_back(self, tmp_path):
        path = _write(tmp_path, "defaults: [unclosed\n")
        loader = CalculatorConfigLoader(path)

        config = loader.load_config()

        assert config.source == "<fallback>"
        assert loader.last_error.startswith("Error loading config")

    def test_malformed_content_falls_back(self, tmp_path):
        path = _write(tmp_path, "- just\n- a list\n")
        loader = CalculatorConfigLoader(path)

        assert loader.load_config().source == "<fallback>"
        assert "top level must be a mapping" in loader.last_error

    def test_empty_file_uses_builtins(self, tmp_path):
        loader = CalculatorConfigLoader(_write(tmp_path, ""))

        config = loader.load_config()

        assert config.defaults == DEFAULT_STATS
        assert loader.last_error is None

    def test_cache(self, tmp_path):
        path = _write(tmp_path, "defaults:\n  hp: 20\n")
        loader = CalculatorConfigLoader(path)
        first = loader.load_config()

        _write(tmp_path, "defaults:\n  hp: 30\n")

        assert loader.load_config() is first
        assert loader.load_config(force_reload=True).defaults.hp == 30

    def test_shipped_config_matches_builtins(self):
        """Test that the repository's calculator.yaml keeps the documented defaults."""
        config = get_calculator_config(force_reload=True)

        assert config.defaults == DEFAULT_STATS
        assert config.correction_message == CORRECTION_MESSAGE
