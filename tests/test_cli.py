"""
Tests for the command-line entry point.
"""
import io

from gloomcalc import cli


class TestCli:
    """Test one-shot and interactive runs."""

    def test_default_calculation(self, capsys):
        assert cli.main(["--renderer", "simple"]) == 0

        output = capsys.readouterr().out
        assert "Effective Shield: 1" in output
        assert "Damage Taken: 2" in output
        assert "Remaining HP: 8" in output

    def test_one_shot_values(self, capsys):
        cli.main(["--renderer", "simple", "--hp", "5", "--shield", "0", "--pierce", "0", "--attack", "0"])

        output = capsys.readouterr().out
        assert "Remaining HP: 5" in output
        assert "Damage Taken: 0" in output

    def test_corrected_value(self, capsys):
        cli.main(["--renderer", "simple", "--attack=-4"])

        output = capsys.readouterr().out
        assert "Damage Taken: 0" in output
        assert "Attack: rounded down and/or corrected to ≥ 0" in output

    def test_terminal_renderer_without_color(self, capsys):
        cli.main(["--no-color", "--attack", "2.9"])

        output = capsys.readouterr().out
        assert "Damage Taken:" in output
        assert "\033[" not in output

    def test_missing_config_falls_back(self, capsys, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("quit\n"))

        cli.main(["--renderer", "simple", "--interactive", "--config", str(tmp_path / "none.yaml")])

        output = capsys.readouterr().out
        assert "Config file not found" in output
        assert "Remaining HP: 8" in output

    def test_malformed_config_falls_back(self, capsys, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("defaults:\n  1: 5\n", encoding="utf-8")

        assert cli.main(["--renderer", "simple", "--config", str(path)]) == 0

        assert "Remaining HP: 8" in capsys.readouterr().out

    def test_interactive(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("pierce 5\nquit\n"))

        cli.main(["--renderer", "simple", "--interactive"])

        output = capsys.readouterr().out
        assert "Effective Shield: 0" in output
        assert "Interactive session started" in output

    def test_create_renderer(self):
        config = cli.RendererConfig()

        assert isinstance(cli.create_renderer("simple", config), cli.SimpleRenderer)
        assert isinstance(cli.create_renderer("terminal", config), cli.TerminalRenderer)
