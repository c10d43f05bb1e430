"""
Tool Registry - Dispatch from capability names to tool functions
================================================================

This module maps every Capability to the function that implements
it and records each call as a ToolInvocation.
"""

from typing import Callable, Dict, Iterable, List, Optional

from core.logging import get_logger
from core.models import Capability, ToolInvocation
from . import builtin

logger = get_logger("capabilities.registry")

ToolFunction = Callable[[str], object]

DEFAULT_TOOLS: Dict[Capability, ToolFunction] = {
    Capability.WEB_SEARCH: builtin.web_search,
    Capability.CALCULATOR: builtin.calculator,
    Capability.CODE_EXECUTOR: builtin.code_executor,
    Capability.KNOWLEDGE_BASE: builtin.knowledge_base,
    Capability.IMAGE_ANALYZER: builtin.image_analyzer,
    Capability.DATA_PROCESSOR: builtin.data_processor,
}


class ToolRegistry:
    """
    Registry of tool functions keyed by Capability.

    Every capability must have exactly one function. Individual tools
    can be swapped out (for tests or real backends) by passing overrides.

    Example:
        registry = ToolRegistry()
        invocation = registry.invoke(Capability.CALCULATOR, "calculate 2 + 2")
        print(invocation.result)  # 2 + 2 = 4
    """

    def __init__(self, overrides: Optional[Dict[Capability, ToolFunction]] = None):
        self._tools: Dict[Capability, ToolFunction] = dict(DEFAULT_TOOLS)
        if overrides:
            for capability, function in overrides.items():
                self._tools[Capability.parse(capability)] = function

        missing = [c.value for c in Capability if c not in self._tools]
        if missing:
            raise ValueError(f"No tool registered for: {', '.join(missing)}")

    def get(self, capability: Capability) -> ToolFunction:
        return self._tools[Capability.parse(capability)]

    def invoke(self, capability: Capability, query: str) -> ToolInvocation:
        """
        Run one tool on the raw query.

        Args:
            capability: Tool to run
            query: The user's message text

        Returns:
            ToolInvocation holding the tool's result
        """
        capability = Capability.parse(capability)
        result = self._tools[capability](query)
        logger.debug(f"Tool {capability.value} returned {len(str(result))} chars")
        return ToolInvocation(name=capability, input=query, result=result)

    def invoke_all(self, capabilities: Iterable[Capability], query: str) -> List[ToolInvocation]:
        """Run each tool in order; tools share no state, so order only affects output order."""
        return [self.invoke(capability, query) for capability in capabilities]

    def describe(self) -> List[Dict[str, str]]:
        """Capability metadata for display, in selection order."""
        return [
            {
                "name": capability.value,
                "label": capability.label,
                "icon": capability.icon,
                "description": capability.description,
            }
            for capability in Capability
        ]
