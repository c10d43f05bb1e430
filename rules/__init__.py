"""
Rules Module - Tool selection and response composition
======================================================

This module provides the agent's rule-based "intelligence":
- A generic ordered rules engine (contains, prefix, and regex matching)
- The tool selector, which collects every matching capability rule
- The response composer, which renders the first matching reply rule
- Markdown reply templates
"""

from .engine import RulesEngine, Rule, RuleMatch, MatchType, RulePriority
from .templates import TemplateManager, Template, DEFAULT_TEMPLATES
from .selector import ToolSelector, default_selection_rules
from .composer import ResponseComposer, default_response_rules

__all__ = [
    "RulesEngine",
    "Rule",
    "RuleMatch",
    "MatchType",
    "RulePriority",
    "TemplateManager",
    "Template",
    "DEFAULT_TEMPLATES",
    "ToolSelector",
    "default_selection_rules",
    "ResponseComposer",
    "default_response_rules",
]
