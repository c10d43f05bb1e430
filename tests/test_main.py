"""
Test Command Line Interface
===========================

Tests for the non-interactive modes of main.py.
"""

import pytest
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

import main


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Keep config in a temp dir and leave global logging alone."""
    monkeypatch.setenv("ELITE_AGENT_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("ELITE_AGENT_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(main, "setup_logging", lambda **kwargs: None)
    return tmp_path


class TestMain:
    """Tests for main()."""

    def test_ask(self, capsys):
        assert main.main(["--ask", "calculate 10 + 5"]) == 0

        out = capsys.readouterr().out
        assert "🔧 Using: calculator" in out
        assert "   10 + 5 = 15" in out
        assert "**10 + 5 = 15**" in out

    def test_ask_greeting(self, capsys):
        assert main.main(["--ask", "hello"]) == 0
        assert "Using:" not in capsys.readouterr().out

    def test_tools(self, capsys):
        assert main.main(["--tools"]) == 0

        out = capsys.readouterr().out
        assert "web_search" in out
        assert "Process data" in out

    def test_status(self, capsys):
        assert main.main(["--status"]) == 0
        assert "Response rules: 8" in capsys.readouterr().out

    def test_setup(self, isolated, capsys):
        target = isolated / "fresh" / "config.yaml"
        assert main.main(["--setup", "--config", str(target)]) == 0
        assert target.is_file()

    def test_missing_config(self, isolated, capsys):
        """Test configuration errors exit with status 1."""
        assert main.main(["--tools", "--config", str(isolated / "nope.yaml")]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_modes_are_exclusive(self):
        with pytest.raises(SystemExit):
            main.parse_args(["--web", "--tui"])

    def test_setup_custom_filename(self, isolated, capsys):
        """Test a config written by --setup loads back from the same path."""
        target = isolated / "fresh" / "my.yaml"

        assert main.main(["--setup", "--config", str(target)]) == 0
        assert target.is_file()
        assert not (isolated / "fresh" / "config.yaml").exists()

        assert main.main(["--tools", "--config", str(target)]) == 0
