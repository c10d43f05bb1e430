"""
Tool Selector - Decide which capabilities a query needs
=======================================================

Each capability has one rule; every rule whose patterns match the
query selects its capability. Rules are checked in the fixed order of
the Capability enum, which is also the order of the result.
"""

from typing import List, Optional

from core.logging import get_logger
from core.models import Capability
from .engine import Rule, RulesEngine, MatchType

logger = get_logger("rules.selector")


def default_selection_rules() -> List[Rule]:
    """The built-in capability triggers, one rule per capability."""
    return [
        Rule(
            name="web_search",
            capability=Capability.WEB_SEARCH,
            match_type=MatchType.CONTAINS,
            patterns=["search", "find", "look up", "what is", "who is", "where is"],
        ),
        Rule(
            name="calculator",
            capability=Capability.CALCULATOR,
            patterns=["calculate", "compute", "math", "number", r"\d+[+\-*/]", "sum", "total"],
        ),
        Rule(
            name="code_executor",
            capability=Capability.CODE_EXECUTOR,
            # Whole words only: "rust programming" is a topic, not a request to run code
            patterns=[r"\b(?:code|program|function|script|execute)s?\b"],
        ),
        Rule(
            name="knowledge_base",
            capability=Capability.KNOWLEDGE_BASE,
            match_type=MatchType.CONTAINS,
            patterns=["explain", "tell me about", "knowledge", "learn", "understand"],
        ),
        Rule(
            name="image_analyzer",
            capability=Capability.IMAGE_ANALYZER,
            match_type=MatchType.CONTAINS,
            patterns=["image", "picture", "photo", "visual", "analyze image"],
        ),
        Rule(
            name="data_processor",
            capability=Capability.DATA_PROCESSOR,
            match_type=MatchType.CONTAINS,
            patterns=["data", "process", "analyze", "statistics", "csv", "json"],
        ),
    ]


class ToolSelector:
    """
    Maps query text to the capabilities it calls for.

    Example:
        selector = ToolSelector()
        selector.select("calculate 10 + 5")  # [Capability.CALCULATOR]
    """

    def __init__(self, rules: Optional[List[Rule]] = None):
        rules = default_selection_rules() if rules is None else rules
        for rule in rules:
            if rule.capability is None:
                raise ValueError(f"Selection rule '{rule.name}' has no capability")
        self.engine = RulesEngine(rules)

    def select(self, query: str) -> List[Capability]:
        """
        Return the capabilities whose triggers match ``query``.

        Never fails; an empty or unmatched query yields an empty list.
        """
        selected: List[Capability] = []
        for match in self.engine.match_all(query):
            if match.rule.capability not in selected:
                selected.append(match.rule.capability)

        logger.debug(f"Selected tools: {[c.value for c in selected]}")
        return selected
