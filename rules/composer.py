"""
Response Composer - Pick and fill the reply template
====================================================

The composer walks an ordered list of response rules and renders the
template of the first rule that matches. Its patterns are separate
from the tool selector's: a query can select a tool without the
composer choosing that tool's template, and vice versa.

Decision order:
    1. calculation    arithmetic request with a calculator result
    2. search         search-style request with a web search result
    3. code           coding request
    4. knowledge      explanation request
    5. data           data-processing request
    6. tools_summary  any tool was invoked
    7. greeting       message starts with a greeting
    8. default        everything else
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from core.logging import get_logger
from core.models import Capability, ToolInvocation
from .engine import Rule, RuleMatch, RulesEngine, MatchType
from .templates import TemplateManager

logger = get_logger("rules.composer")

ARITHMETIC_SPAN = r"\d+[\s+\-*/()]+[\d\s+\-*/()]+\d+"


def _always(message: str) -> bool:
    return True


def default_response_rules() -> List[Rule]:
    """The built-in decision list, highest priority first."""
    return [
        Rule(
            name="calculation",
            template="calculation",
            priority=100,
            patterns=[r"calculate|compute|what is \d+|how much is"],
            conditions={
                "requires_pattern": ARITHMETIC_SPAN,
                "requires_tool_result": Capability.CALCULATOR.value,
            },
        ),
        Rule(
            name="search",
            template="search",
            priority=90,
            patterns=[r"search|find|what is|who is|where is|tell me about"],
            conditions={"requires_tool": Capability.WEB_SEARCH.value},
        ),
        Rule(
            name="code",
            template="code",
            priority=80,
            patterns=[r"code|program|function|write a"],
        ),
        Rule(
            name="knowledge",
            template="knowledge",
            priority=70,
            patterns=[r"explain|how does|why does|what does"],
        ),
        Rule(
            name="data",
            template="data",
            priority=60,
            patterns=[r"data|analyze|process|statistics"],
        ),
        Rule(
            name="tools_summary",
            template="tools_summary",
            priority=50,
            patterns=[],
            custom_matcher=_always,
            conditions={"requires_any_tool": True},
        ),
        Rule(
            name="greeting",
            template="greeting",
            priority=40,
            match_type=MatchType.STARTSWITH,
            patterns=["hi", "hello", "hey", "greetings"],
        ),
        Rule(
            name="default",
            template="default",
            priority=0,
            patterns=[],
            custom_matcher=_always,
        ),
    ]


def _result_text(result: Any) -> str:
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    return json.dumps(result, ensure_ascii=False, default=str)


def _first_result(invocations: Sequence[ToolInvocation], capability: Capability) -> str:
    for invocation in invocations:
        if invocation.name == capability and invocation.result:
            return _result_text(invocation.result)
    return ""


class ResponseComposer:
    """
    Renders the single best reply for a query and its tool results.

    Example:
        composer = ResponseComposer()
        composer.compose("hello", [])  # greeting block
    """

    def __init__(
        self,
        templates: Optional[TemplateManager] = None,
        rules: Optional[List[Rule]] = None,
        agent_name: str = "Elite AI Agent",
    ):
        self.templates = templates or TemplateManager()
        self.engine = RulesEngine(default_response_rules() if rules is None else rules)
        self.agent_name = agent_name

        missing = [
            r.template for r in self.engine.rules
            if not self.templates.has_template(r.template)
        ]
        if missing:
            raise ValueError(f"Response rules reference unknown templates: {missing}")

    def choose(self, query: str, invocations: Sequence[ToolInvocation] = ()) -> Optional[RuleMatch]:
        """Return the winning rule match, or None if no rule applies."""
        return self.engine.match(query, {"invocations": list(invocations)})

    def build_context(self, query: str, invocations: Sequence[ToolInvocation]) -> Dict[str, Any]:
        """Collect every value a template may reference."""
        return {
            "query": query,
            "agent_name": self.agent_name,
            "calculation_result": _first_result(invocations, Capability.CALCULATOR),
            "search_result": _first_result(invocations, Capability.WEB_SEARCH),
            "tool_names": ", ".join(inv.name.value for inv in invocations),
            "tool_results": "\n\n".join(_result_text(inv.result) for inv in invocations),
        }

    def compose(self, query: str, invocations: Sequence[ToolInvocation] = ()) -> str:
        """
        Compose the reply text.

        Deterministic: identical arguments always give identical output.

        Raises:
            LookupError: If the rule list has no catch-all and nothing matched
        """
        return self.render(self.choose(query, invocations), query, invocations)

    def render(
        self,
        match: Optional[RuleMatch],
        query: str,
        invocations: Sequence[ToolInvocation] = (),
    ) -> str:
        """Render the template of an already chosen rule."""
        if match is None:
            raise LookupError("No response rule matched")

        logger.debug(f"Response rule: {match.rule.name}")
        return self.templates.render(match.rule.template, self.build_context(query, invocations))
