"""
Configuration Management - YAML-based configuration with environment overrides
=============================================================================

This module handles all configuration aspects including:
- Loading from YAML files
- Environment variable overrides
- Default values
- Configuration validation
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

from .exceptions import ConfigError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ChatConfig:
    """
    Chat behaviour configuration.

    Controls the agent's display name and where response
    template overrides are loaded from.
    """
    agent_name: str = "Elite AI Agent"
    tagline: str = "Advanced multi-tool autonomous agent"

    # Optional YAML file mapping template names to markdown text
    templates_file: str = ""

    def validate(self) -> None:
        """Validate chat configuration."""
        if not self.agent_name.strip():
            raise ConfigError("agent_name cannot be empty")

        if self.templates_file and not Path(self.templates_file).expanduser().is_file():
            raise ConfigError(
                f"Templates file not found: {self.templates_file}",
                {"path": self.templates_file}
            )


@dataclass
class UIConfig:
    """
    User interface configuration.

    Controls settings for both the terminal UI (TUI) and web UI.
    """
    # Web UI settings
    web_host: str = "127.0.0.1"
    web_port: int = 8080
    web_debug: bool = False

    # Terminal UI settings
    tui_enabled: bool = True

    def validate(self) -> None:
        """Validate UI configuration."""
        if self.web_port < 1 or self.web_port > 65535:
            raise ConfigError(f"Invalid web port: {self.web_port}")


@dataclass
class LogConfig:
    """Logging configuration passed through to setup_logging()."""
    level: str = "INFO"
    json_format: bool = False
    console_output: bool = True

    def validate(self) -> None:
        """Validate logging configuration."""
        if self.level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.level}")


@dataclass
class Config:
    """
    Main configuration container.

    Aggregates all configuration sections into a single object
    and provides methods for loading, saving, and validating.
    """
    # Application settings
    app_name: str = "Elite AI Agent"
    version: str = "1.0.0"
    debug: bool = False

    # Configuration sections
    chat: ChatConfig = field(default_factory=ChatConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LogConfig = field(default_factory=LogConfig)

    # Paths (set at runtime)
    config_dir: str = ""
    log_dir: str = ""

    def validate(self) -> None:
        """
        Validate all configuration sections.

        Raises:
            ConfigError: If any configuration section is invalid
        """
        self.chat.validate()
        self.ui.validate()
        self.logging.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "app_name": self.app_name,
            "version": self.version,
            "debug": self.debug,
            "chat": asdict(self.chat),
            "ui": asdict(self.ui),
            "logging": asdict(self.logging),
        }


def get_default_config_dir() -> Path:
    """
    Get the default configuration directory path.

    Returns:
        Path to the configuration directory
    """
    if "ELITE_AGENT_CONFIG_DIR" in os.environ:
        return Path(os.environ["ELITE_AGENT_CONFIG_DIR"])

    if "XDG_CONFIG_HOME" in os.environ:
        return Path(os.environ["XDG_CONFIG_HOME"]) / "elite-ai-agent"

    home = Path.home()
    config_home = home / ".config"

    if config_home.exists():
        return config_home / "elite-ai-agent"

    return home / ".elite-ai-agent"


def get_default_log_dir() -> Path:
    """Get the default log directory path."""
    if "ELITE_AGENT_LOG_DIR" in os.environ:
        return Path(os.environ["ELITE_AGENT_LOG_DIR"])

    if "XDG_STATE_HOME" in os.environ:
        return Path(os.environ["XDG_STATE_HOME"]) / "elite-ai-agent" / "logs"

    return Path.home() / ".local" / "state" / "elite-ai-agent" / "logs"


def load_config(config_path: Optional[str] = None, load_env: bool = True) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    This function loads configuration in the following order:
    1. Default values from dataclass
    2. Values from YAML file
    3. Environment variable overrides (including a .env file in the config dir)

    Args:
        config_path: Path to configuration file (optional)
        load_env: Whether to load environment variable overrides

    Returns:
        Config object with loaded values

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    config = Config()

    config.config_dir = str(get_default_config_dir())
    config.log_dir = str(get_default_log_dir())

    if load_env:
        _load_env_file(Path(config.config_dir) / ".env")

    if config_path:
        yaml_path = Path(config_path)
        if not yaml_path.exists():
            raise ConfigError("Config file not found", {"path": str(yaml_path)})
    else:
        yaml_path = Path(config.config_dir) / "config.yaml"

    if yaml_path.exists():
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}", {"path": str(yaml_path)})
        except IOError as e:
            raise ConfigError(f"Failed to read config file: {e}", {"path": str(yaml_path)})

        if not isinstance(yaml_config, dict):
            raise ConfigError("Config file must contain a mapping", {"path": str(yaml_path)})

        _apply_yaml_config(config, yaml_config)

    if load_env:
        _apply_env_overrides(config)

    config.validate()

    return config


def _load_env_file(env_file: Path) -> None:
    """Copy KEY=VALUE lines from a .env file into os.environ without overriding."""
    if not env_file.exists():
        return

    try:
        with open(env_file, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except IOError as e:
        raise ConfigError(f"Failed to read env file: {e}", {"path": str(env_file)})

    for line in lines:
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, value = line.split("=", 1)
            key = key.strip()
            if key and value and key not in os.environ:
                os.environ[key] = value.strip()


def _apply_yaml_config(config: Config, yaml_config: Dict[str, Any]) -> None:
    """
    Apply YAML configuration values to Config object.

    Unknown keys are ignored.

    Args:
        config: Config object to update
        yaml_config: Dictionary of configuration values from YAML
    """
    for key in ("app_name", "version", "debug"):
        if key in yaml_config:
            setattr(config, key, yaml_config[key])

    for section in ("chat", "ui", "logging"):
        section_cfg = yaml_config.get(section) or {}
        if not isinstance(section_cfg, dict):
            raise ConfigError(f"Config section '{section}' must be a mapping")

        section_obj = getattr(config, section)
        for key, value in section_cfg.items():
            if hasattr(section_obj, key):
                setattr(section_obj, key, value)


def _apply_env_overrides(config: Config) -> None:
    """
    Apply environment variable overrides to Config object.

    Environment variables follow the pattern: ELITE_AGENT_SECTION_KEY
    For example: ELITE_AGENT_UI_WEB_PORT, ELITE_AGENT_LOGGING_LEVEL

    Args:
        config: Config object to update
    """
    env_mappings = {
        "ELITE_AGENT_DEBUG": (None, "debug", bool),
        "ELITE_AGENT_LOG_DIR": (None, "log_dir"),

        # Chat settings
        "ELITE_AGENT_CHAT_AGENT_NAME": ("chat", "agent_name"),
        "ELITE_AGENT_CHAT_TEMPLATES_FILE": ("chat", "templates_file"),

        # UI settings
        "ELITE_AGENT_UI_WEB_HOST": ("ui", "web_host"),
        "ELITE_AGENT_UI_WEB_PORT": ("ui", "web_port", int),
        "ELITE_AGENT_UI_WEB_DEBUG": ("ui", "web_debug", bool),

        # Logging settings
        "ELITE_AGENT_LOGGING_LEVEL": ("logging", "level"),
        "ELITE_AGENT_LOGGING_JSON_FORMAT": ("logging", "json_format", bool),
    }

    for env_var, mapping in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        section = mapping[0]
        key = mapping[1]
        converter = mapping[2] if len(mapping) > 2 else str

        target = getattr(config, section) if section else config

        if converter == bool:
            converted = value.lower() in ("true", "1", "yes", "on")
        else:
            try:
                converted = converter(value)
            except ValueError:
                raise ConfigError(f"Invalid value for {env_var}: {value!r}")

        setattr(target, key, converted)


def save_config(config: Config, config_path: Optional[str] = None) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Config object to save
        config_path: Path to save configuration (optional)

    Raises:
        ConfigError: If configuration cannot be saved
    """
    if config_path:
        yaml_path = Path(config_path)
    else:
        yaml_path = Path(config.config_dir) / "config.yaml"

    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    except IOError as e:
        raise ConfigError(f"Failed to save config file: {e}", {"path": str(yaml_path)})


def create_default_config(
    config_dir: Optional[str] = None,
    config_path: Optional[str] = None
) -> Config:
    """
    Create a default configuration file with sensible defaults.

    Args:
        config_dir: Directory to create configuration in (optional)
        config_path: Exact file to write; its directory is used when
            config_dir is not given (optional)

    Returns:
        Config object with default values
    """
    config = Config()

    if config_path:
        config_path = str(Path(config_path).expanduser())
        if not config_dir:
            config_dir = str(Path(config_path).parent)

    if config_dir:
        config.config_dir = config_dir
        config.log_dir = str(Path(config_dir) / "logs")
    else:
        config.config_dir = str(get_default_config_dir())
        config.log_dir = str(get_default_log_dir())

    Path(config.config_dir).mkdir(parents=True, exist_ok=True)
    Path(config.log_dir).mkdir(parents=True, exist_ok=True)

    save_config(config, config_path)

    return config
