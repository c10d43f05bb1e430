"""
Test Configuration Module
========================

Unit tests for configuration loading and validation.
"""

import os
import pytest
from pathlib import Path

# Add parent directory to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml

from core.config import (
    Config, ChatConfig, UIConfig, LogConfig,
    load_config, save_config, create_default_config
)
from core.exceptions import ConfigError


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the default config and log directories at a temp dir."""
    monkeypatch.setenv("ELITE_AGENT_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("ELITE_AGENT_LOG_DIR", str(tmp_path / "logs"))
    for var in (
        "ELITE_AGENT_DEBUG",
        "ELITE_AGENT_CHAT_AGENT_NAME",
        "ELITE_AGENT_CHAT_TEMPLATES_FILE",
        "ELITE_AGENT_UI_WEB_HOST",
        "ELITE_AGENT_UI_WEB_PORT",
        "ELITE_AGENT_UI_WEB_DEBUG",
        "ELITE_AGENT_LOGGING_LEVEL",
        "ELITE_AGENT_LOGGING_JSON_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


class TestChatConfig:
    """Tests for ChatConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        config = ChatConfig()
        assert config.agent_name == "Elite AI Agent"
        assert config.templates_file == ""

    def test_validation_valid(self):
        """Test valid configuration passes validation."""
        ChatConfig().validate()  # Should not raise

    def test_validation_empty_name(self):
        """Test blank agent name raises error."""
        with pytest.raises(ConfigError):
            ChatConfig(agent_name="   ").validate()

    def test_validation_missing_templates_file(self, tmp_path):
        """Test a templates file that does not exist raises error."""
        config = ChatConfig(templates_file=str(tmp_path / "missing.yaml"))
        with pytest.raises(ConfigError):
            config.validate()


class TestUIConfig:
    """Tests for UIConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        config = UIConfig()
        assert config.web_host == "127.0.0.1"
        assert config.web_port == 8080

    def test_validation_invalid_port(self):
        """Test out-of-range port raises error."""
        with pytest.raises(ConfigError):
            UIConfig(web_port=70000).validate()


class TestLogConfig:
    """Tests for LogConfig."""

    def test_validation_invalid_level(self):
        """Test unknown log level raises error."""
        with pytest.raises(ConfigError):
            LogConfig(level="CHATTY").validate()

    def test_level_is_case_insensitive(self):
        LogConfig(level="debug").validate()


class TestConfig:
    """Tests for main Config class."""

    def test_default_values(self):
        """Test default configuration values."""
        config = Config()
        assert config.app_name == "Elite AI Agent"
        assert config.chat is not None
        assert config.ui is not None

    def test_to_dict(self):
        """Test conversion to dictionary."""
        d = Config().to_dict()
        assert d["app_name"] == "Elite AI Agent"
        assert d["ui"]["web_port"] == 8080
        assert "chat" in d
        assert "logging" in d


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_without_file(self, config_dir):
        """Test loading with no config file gives defaults."""
        config = load_config()
        assert config.config_dir == str(config_dir)
        assert config.ui.web_port == 8080

    def test_yaml_values(self, config_dir):
        """Test values from the default config.yaml are applied."""
        (config_dir / "config.yaml").write_text(yaml.dump({
            "debug": True,
            "chat": {"agent_name": "Test Agent"},
            "ui": {"web_port": 9000, "unknown_key": 1},
        }))

        config = load_config()
        assert config.debug is True
        assert config.chat.agent_name == "Test Agent"
        assert config.ui.web_port == 9000

    def test_explicit_path(self, config_dir, tmp_path):
        """Test an explicit config path is used."""
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.dump({"logging": {"level": "DEBUG"}}))

        config = load_config(str(path))
        assert config.logging.level == "DEBUG"

    def test_explicit_path_missing(self, config_dir):
        """Test a missing explicit path raises error."""
        with pytest.raises(ConfigError):
            load_config(str(config_dir / "nope.yaml"))

    def test_non_mapping_yaml(self, config_dir):
        """Test a YAML file that is not a mapping raises error."""
        (config_dir / "config.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config()

    def test_invalid_section(self, config_dir):
        """Test a section that is not a mapping raises error."""
        (config_dir / "config.yaml").write_text(yaml.dump({"ui": "loud"}))
        with pytest.raises(ConfigError):
            load_config()

    def test_env_overrides(self, config_dir, monkeypatch):
        """Test environment variables override file values."""
        (config_dir / "config.yaml").write_text(yaml.dump({"ui": {"web_port": 9000}}))
        monkeypatch.setenv("ELITE_AGENT_UI_WEB_PORT", "9100")
        monkeypatch.setenv("ELITE_AGENT_UI_WEB_DEBUG", "yes")
        monkeypatch.setenv("ELITE_AGENT_CHAT_AGENT_NAME", "Env Agent")

        config = load_config()
        assert config.ui.web_port == 9100
        assert config.ui.web_debug is True
        assert config.chat.agent_name == "Env Agent"

    def test_env_invalid_int(self, config_dir, monkeypatch):
        """Test a non-numeric port override raises error."""
        monkeypatch.setenv("ELITE_AGENT_UI_WEB_PORT", "eighty")
        with pytest.raises(ConfigError):
            load_config()

    def test_env_disabled(self, config_dir, monkeypatch):
        """Test overrides are skipped when load_env is False."""
        monkeypatch.setenv("ELITE_AGENT_UI_WEB_PORT", "9100")
        config = load_config(load_env=False)
        assert config.ui.web_port == 8080

    def test_env_file(self, config_dir, monkeypatch):
        """Test values from a .env file in the config dir are applied."""
        # Register the variable so monkeypatch removes it afterwards
        monkeypatch.setenv("ELITE_AGENT_UI_WEB_HOST", "placeholder")
        monkeypatch.delenv("ELITE_AGENT_UI_WEB_HOST")

        (config_dir / ".env").write_text("# comment\nELITE_AGENT_UI_WEB_HOST=0.0.0.0\n")

        config = load_config()
        assert config.ui.web_host == "0.0.0.0"

    def test_env_file_does_not_override(self, config_dir, monkeypatch):
        """Test real environment variables win over the .env file."""
        monkeypatch.setenv("ELITE_AGENT_UI_WEB_HOST", "10.0.0.1")
        (config_dir / ".env").write_text("ELITE_AGENT_UI_WEB_HOST=0.0.0.0\n")

        config = load_config()
        assert config.ui.web_host == "10.0.0.1"


class TestSaveConfig:
    """Tests for saving and creating configuration files."""

    def test_save_and_reload(self, config_dir):
        """Test a saved config loads back with the same values."""
        config = Config()
        config.config_dir = str(config_dir)
        config.chat.agent_name = "Saved Agent"
        save_config(config)

        loaded = load_config()
        assert loaded.chat.agent_name == "Saved Agent"

    def test_create_default_config(self, tmp_path):
        """Test default config creation writes files and directories."""
        target = tmp_path / "agent"
        config = create_default_config(str(target))

        assert (target / "config.yaml").is_file()
        assert Path(config.log_dir).is_dir()

        data = yaml.safe_load((target / "config.yaml").read_text())
        assert data["app_name"] == "Elite AI Agent"

    def test_create_default_config_at_path(self, tmp_path):
        """Test an explicit file name is written as given."""
        target = tmp_path / "agent" / "custom.yaml"
        config = create_default_config(config_path=str(target))

        assert target.is_file()
        assert not (tmp_path / "agent" / "config.yaml").exists()
        assert config.config_dir == str(tmp_path / "agent")
