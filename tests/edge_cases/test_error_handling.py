"""
Edge case tests for error handling.

Stat input never raises; configuration and file problems degrade to the
built-in behavior and are reported through the log.
"""
import pytest

from gloomcalc.calculator.log_manager import LogManager, LogCategory
from gloomcalc.calculator.session import CalculatorSession, calculate
from gloomcalc.core.calc_enums import StatField, FIELD_ORDER
from gloomcalc.core.config_loader import CalculatorConfig, CalculatorConfigLoader
from gloomcalc.core.data_structures import RawInputs
from gloomcalc.core.errors import ConfigError, CalculatorError


class TestHostileInput:
    """Test that any text in any field yields a valid calculation."""

    @pytest.mark.parametrize("text", [
        "", " ", "abc", "-", ".", "1e400", "-1e400", "nan", "inf", "0x10",
        "1_000", "1,5", "--2", "½", "٣", "\x00", "9" * 400,
    ])
    def test_never_raises(self, text):
        for stat_field in FIELD_ORDER:
            raw = RawInputs.from_stats(calculate(RawInputs()).stats).with_field(stat_field, text)

            snapshot = calculate(raw)

            assert snapshot.stats.get(stat_field) >= 0
            assert snapshot.result.hp_left >= 0

    def test_huge_integer_text_is_kept_exact(self):
        snapshot = calculate(RawInputs(hp="12345678901234567890", attack="1"))

        assert snapshot.result.hp_left == 12345678901234567889


class TestConfigErrors:
    """Test configuration failures."""

    def test_config_error_is_calculator_error(self):
        error = ConfigError("bad value", "calc.yaml")

        assert isinstance(error, CalculatorError)
        assert error.source == "calc.yaml"
        assert str(error) == "calc.yaml: bad value"

    @pytest.mark.parametrize("data", [
        {"defaults": [1, 2]},
        {"defaults": {"mana": 3}},
        {"icons": "red"},
        {"icons": {"attack": 5}},
        {"correction_message": ""},
        {"correction_message": 3},
    ])
    def test_malformed_sections_raise(self, data):
        with pytest.raises(ConfigError):
            CalculatorConfig(data)

    def test_malformed_yaml_falls_back(self, tmp_path):
        path = tmp_path / "calc.yaml"
        path.write_text("defaults: [unclosed\n", encoding="utf-8")
        loader = CalculatorConfigLoader(str(path))

        config = loader.load_config()

        assert config.source == "<fallback>"
        assert loader.last_error.startswith("Error loading config:")

    def test_non_mapping_yaml_falls_back(self, tmp_path):
        path = tmp_path / "calc.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        loader = CalculatorConfigLoader(str(path))

        assert loader.load_config().source == "<fallback>"
        assert "top level must be a mapping" in loader.last_error

    @pytest.mark.parametrize("content", [
        "defaults:\n  1: 5\n",
        "defaults:\n  1: 5\n  mana: 2\n",
    ])
    def test_non_string_default_keys_fall_back(self, tmp_path, content):
        path = tmp_path / "calc.yaml"
        path.write_text(content, encoding="utf-8")
        loader = CalculatorConfigLoader(str(path))

        config = loader.load_config()

        assert config.source == "<fallback>"
        assert "unknown default fields: 1" in loader.last_error

    def test_invalid_utf8_falls_back(self, tmp_path):
        path = tmp_path / "calc.yaml"
        path.write_bytes(b"correction_message: \xff\xfe bad\n")
        loader = CalculatorConfigLoader(str(path))

        config = loader.load_config()

        assert config.source == "<fallback>"
        assert loader.last_error.startswith("Error loading config:")

    def test_empty_file_uses_builtin_values(self, tmp_path):
        path = tmp_path / "calc.yaml"
        path.write_text("", encoding="utf-8")
        loader = CalculatorConfigLoader(str(path))

        config = loader.load_config()

        assert loader.last_error is None
        assert config.defaults.as_dict() == {"hp": 10, "shield": 2, "pierce": 1, "attack": 3}


class TestLogSaveErrors:
    """Test log file failures."""

    def test_unwritable_log_dir(self, event_manager, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        manager = LogManager(event_manager, log_dir=str(blocker))

        assert manager.save_log_to_file() is False
        errors = manager.get_messages(categories={LogCategory.ERROR})
        assert errors and errors[-1].text.startswith("Failed to save log file:")


class TestSessionRobustness:
    """Test the session survives failing subscribers."""

    def test_failing_subscriber(self, event_manager, fallback_config):
        def explode(event):
            raise RuntimeError("subscriber failure")

        event_manager.subscribe_all(explode)
        session = CalculatorSession(event_manager, fallback_config)

        session.edit(StatField.ATTACK, "9")
        event_manager.process_events()

        assert session.snapshot.result.damage == 8
        assert event_manager.get_statistics()['subscriber_errors'] > 0
