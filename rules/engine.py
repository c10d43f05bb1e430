"""
Rules Engine - Ordered pattern-matching decision lists
======================================================

This module implements the generic rules engine behind both the tool
selector and the response composer. A rule pairs case-insensitive
patterns with optional conditions on the request context; the engine
evaluates rules in priority order and returns either the first match
or every match.
"""

import re
from typing import Optional, List, Dict, Any, Callable, Pattern
from dataclasses import dataclass, field
from enum import Enum

from core.models import Capability


class RulePriority(Enum):
    """Priority levels for rules."""
    LOWEST = 0
    LOW = 25
    NORMAL = 50
    HIGH = 75
    HIGHEST = 100


class MatchType(Enum):
    """Types of pattern matching."""
    CONTAINS = "contains"     # Contains substring
    STARTSWITH = "startswith" # Starts with
    REGEX = "regex"           # Regular expression search


@dataclass
class RuleMatch:
    """
    Result of a rule matching a message.

    Attributes:
        rule (Rule): The matching rule
        message (str): The matched message
        groups (dict): Named groups captured by a regex pattern
        pattern (str): The pattern that matched
    """
    rule: 'Rule'
    message: str
    groups: Dict[str, str] = field(default_factory=dict)
    pattern: str = ""

    @property
    def name(self) -> str:
        return self.rule.name


@dataclass
class Rule:
    """
    A single rule for matching messages.

    A rule matches when any of its patterns matches the message and
    all of its conditions hold for the request context.

    Supported conditions:
        requires_pattern (str): An extra regex that must also match
        requires_tool (str): A tool with this name must have been invoked
        requires_tool_result (str): That tool must also have a non-empty result
        requires_any_tool (bool): At least one tool must have been invoked

    Attributes:
        name (str): Unique rule name
        patterns (list): Patterns to match (any one suffices)
        match_type (MatchType): How to match patterns
        template (str): Response template rendered when the rule wins
        capability (Capability): Tool selected when the rule matches
        priority (int): Rule priority (higher = evaluated first)
        enabled (bool): Whether rule is active
        conditions (dict): Additional conditions
    """
    name: str
    patterns: List[str]
    match_type: MatchType = MatchType.REGEX
    template: str = ""
    capability: Optional[Capability] = None
    priority: int = RulePriority.NORMAL.value
    enabled: bool = True
    conditions: Dict[str, Any] = field(default_factory=dict)

    # Optional callback for custom matching
    custom_matcher: Optional[Callable[[str], bool]] = None

    _compiled: List[Pattern] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.match_type == MatchType.REGEX:
            try:
                self._compiled = [re.compile(p, re.IGNORECASE) for p in self.patterns]
            except re.error as e:
                raise ValueError(f"Rule '{self.name}' has an invalid pattern: {e}")

    def matches(self, message: str, context: Optional[Dict[str, Any]] = None) -> Optional[RuleMatch]:
        """
        Check if this rule matches a message.

        Args:
            message: Message to check
            context: Optional context; ``invocations`` holds the ToolInvocations so far

        Returns:
            RuleMatch if matched, None otherwise
        """
        if not self.enabled:
            return None

        if not self._check_conditions(message, context or {}):
            return None

        for index, pattern in enumerate(self.patterns):
            match = self._match_pattern(index, pattern, message)
            if match:
                return match

        if self.custom_matcher and self.custom_matcher(message):
            return RuleMatch(rule=self, message=message)

        return None

    def _match_pattern(self, index: int, pattern: str, message: str) -> Optional[RuleMatch]:
        """Match a single pattern against a message, ignoring case."""
        if self.match_type == MatchType.REGEX:
            found = self._compiled[index].search(message)
            if found:
                return RuleMatch(
                    rule=self,
                    message=message,
                    groups=found.groupdict(),
                    pattern=pattern,
                )
            return None

        message_lower = message.lower()
        pattern_lower = pattern.lower()

        if self.match_type == MatchType.CONTAINS:
            if pattern_lower in message_lower:
                return RuleMatch(rule=self, message=message, pattern=pattern)

        elif self.match_type == MatchType.STARTSWITH:
            if message_lower.startswith(pattern_lower):
                return RuleMatch(rule=self, message=message, pattern=pattern)

        return None

    def _check_conditions(self, message: str, context: Dict[str, Any]) -> bool:
        """
        Check rule conditions.

        Args:
            message: Message being matched
            context: Context dictionary

        Returns:
            True if all conditions are satisfied
        """
        if not self.conditions:
            return True

        invocations = context.get("invocations") or []

        extra_pattern = self.conditions.get("requires_pattern")
        if extra_pattern and not re.search(extra_pattern, message, re.IGNORECASE):
            return False

        if self.conditions.get("requires_any_tool") and not invocations:
            return False

        required = self.conditions.get("requires_tool")
        if required and not any(inv.name == required for inv in invocations):
            return False

        required = self.conditions.get("requires_tool_result")
        if required and not any(inv.name == required and inv.result for inv in invocations):
            return False

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule to dictionary."""
        data = {
            "name": self.name,
            "patterns": self.patterns,
            "match_type": self.match_type.value,
            "priority": self.priority,
            "enabled": self.enabled,
            "conditions": self.conditions,
        }
        if self.template:
            data["template"] = self.template
        if self.capability is not None:
            data["capability"] = self.capability.value
        return data


class RulesEngine:
    """
    Ordered collection of rules.

    Rules are kept sorted by priority, highest first; rules with equal
    priority keep the order they were added in.

    Example:
        engine = RulesEngine()

        engine.add_rule(Rule(
            name="greeting",
            patterns=["hello", "hi"],
            match_type=MatchType.STARTSWITH,
            template="greeting",
        ))

        match = engine.match("Hello there!")
        if match:
            print(match.rule.template)
    """

    def __init__(self, rules: Optional[List[Rule]] = None):
        """
        Initialize rules engine.

        Args:
            rules: Initial rules, in evaluation order for equal priorities
        """
        self.rules: List[Rule] = []
        for rule in rules or []:
            self.add_rule(rule)

    def add_rule(self, rule: Rule) -> None:
        """
        Add a rule to the engine.

        Raises:
            ValueError: If a rule with the same name already exists
        """
        if self.get_rule(rule.name) is not None:
            raise ValueError(f"Duplicate rule name: {rule.name}")
        self.rules.append(rule)
        self.rules.sort(key=lambda r: r.priority, reverse=True)

    def remove_rule(self, name: str) -> bool:
        """
        Remove a rule by name.

        Returns:
            True if rule was removed
        """
        for i, rule in enumerate(self.rules):
            if rule.name == name:
                del self.rules[i]
                return True
        return False

    def get_rule(self, name: str) -> Optional[Rule]:
        """Get a rule by name."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def match(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ) -> Optional[RuleMatch]:
        """
        Find the first matching rule for a message.

        Iterates through rules in priority order and returns
        the first match found.
        """
        for rule in self.rules:
            match = rule.matches(message, context)
            if match:
                return match
        return None

    def match_all(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ) -> List[RuleMatch]:
        """Find all matching rules for a message, in priority order."""
        matches = []
        for rule in self.rules:
            match = rule.matches(message, context)
            if match:
                matches.append(match)
        return matches

    def get_all_rules(self) -> List[Rule]:
        """Get all rules."""
        return self.rules.copy()

    def to_list(self) -> List[Dict[str, Any]]:
        """Export rules as dictionaries, in evaluation order."""
        return [rule.to_dict() for rule in self.rules]
