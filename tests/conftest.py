"""
Basic test fixtures for the gloomcalc test suite.

Provides simple fixtures for the calculation pipeline, the event system and
the renderers.
"""

import sys
import os
import io
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from gloomcalc.core.config_loader import CalculatorConfigLoader
from gloomcalc.core.data_structures import CombatStats, RawInputs
from gloomcalc.core.event_manager import EventManager
from gloomcalc.core.renderer import RendererConfig
from gloomcalc.calculator.log_manager import LogManager
from gloomcalc.calculator.session import CalculatorSession


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def fallback_config(tmp_path):
    """The built-in configuration, independent of any file on disk."""
    loader = CalculatorConfigLoader(str(tmp_path / "missing.yaml"))
    return loader.load_config()


@pytest.fixture
def session(event_manager, fallback_config):
    """A calculator session at its default inputs."""
    return CalculatorSession(event_manager, fallback_config)


@pytest.fixture
def log_manager(event_manager, tmp_path):
    """A log manager writing into a temporary directory."""
    return LogManager(event_manager, log_dir=str(tmp_path / "logs"))


@pytest.fixture
def default_stats():
    """The reset values: HP 10, Shield 2, Pierce 1, Attack 3."""
    return CombatStats(hp=10, shield=2, pierce=1, attack=3)


@pytest.fixture
def default_raw():
    return RawInputs(hp="10", shield="2", pierce="1", attack="3")


@pytest.fixture
def plain_renderer_config():
    """Renderer settings without ANSI colors, for readable assertions."""
    return RendererConfig(use_color=False, show_log=False)


@pytest.fixture
def output_stream():
    return io.StringIO()
