"""
Core Module - Foundation components for Elite AI Agent
======================================================

This module provides the foundational components including:
- Configuration management
- Logging setup
- Exception handling
- Shared data models
"""

from .config import Config, load_config, save_config, create_default_config
from .exceptions import (
    AgentError,
    ConfigError,
    InvalidMessageError,
    CalculationError,
    UIError,
)
from .logging import setup_logging, get_logger, set_log_context, get_log_context, clear_log_context
from .models import Capability, Message, Role, ToolInvocation

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "create_default_config",
    "AgentError",
    "ConfigError",
    "InvalidMessageError",
    "CalculationError",
    "UIError",
    "setup_logging",
    "get_logger",
    "set_log_context",
    "get_log_context",
    "clear_log_context",
    "Capability",
    "Message",
    "Role",
    "ToolInvocation",
]
