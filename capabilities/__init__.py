"""
Capabilities Module - Stub tools the agent can invoke
=====================================================

This module provides the agent's tools:
- Web search, knowledge base, image and data placeholders
- An arithmetic-only calculator
- A registry that dispatches capability names to tool functions
"""

from .calculator import calculator, evaluate, extract_expression, ExpressionParser
from .registry import ToolRegistry, DEFAULT_TOOLS

__all__ = [
    "calculator",
    "evaluate",
    "extract_expression",
    "ExpressionParser",
    "ToolRegistry",
    "DEFAULT_TOOLS",
]
