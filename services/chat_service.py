"""
Chat Service - Tool selection, invocation, and reply composition
================================================================

This module ties the rule engine together for one chat turn: validate
the incoming transcript, select tools for the last user message, run
them, and compose the reply.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from capabilities.registry import ToolRegistry
from core.config import Config
from core.exceptions import InvalidMessageError
from core.logging import get_logger
from core.models import Capability, Message, Role, ToolInvocation
from rules.composer import ResponseComposer
from rules.selector import ToolSelector
from rules.templates import TemplateManager

logger = get_logger("services.chat")


@dataclass
class ChatResult:
    """
    Result of one chat turn.

    Attributes:
        content (str): Markdown reply text
        tool_invocations (list): Tools that ran, in selection order
        rule (str): Name of the response rule that produced the reply
        latency_ms (int): Time spent handling the turn
    """
    content: str
    tool_invocations: List[ToolInvocation] = field(default_factory=list)
    rule: str = ""
    latency_ms: int = 0

    @property
    def tools_used(self) -> List[Capability]:
        return [invocation.name for invocation in self.tool_invocations]

    def to_message(self) -> Message:
        """The assistant turn to append to a transcript."""
        return Message(
            role=Role.ASSISTANT,
            content=self.content,
            tool_invocations=tuple(self.tool_invocations),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Response body; ``tool_invocations`` is omitted when no tool ran."""
        data: Dict[str, Any] = {"content": self.content}
        if self.tool_invocations:
            data["tool_invocations"] = [t.to_dict() for t in self.tool_invocations]
        return data


class ChatService:
    """
    Rule-based chat responder.

    Only the last message of the transcript is read; earlier turns are
    accepted but ignored.

    Example:
        service = ChatService()
        result = service.respond([{"role": "user", "content": "calculate 10 + 5"}])
        print(result.content)
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        selector: Optional[ToolSelector] = None,
        registry: Optional[ToolRegistry] = None,
        composer: Optional[ResponseComposer] = None,
    ):
        """
        Initialize the chat service.

        Args:
            config: Application configuration (defaults are used if omitted)
            selector: Tool selector override
            registry: Tool registry override
            composer: Response composer override

        Raises:
            ConfigError: If a configured templates file cannot be loaded
        """
        self.config = config or Config()
        self.selector = selector or ToolSelector()
        self.registry = registry or ToolRegistry()

        if composer is None:
            templates = TemplateManager()
            if self.config.chat.templates_file:
                templates.load_from_yaml(self.config.chat.templates_file)
                logger.info(f"Loaded template overrides from {self.config.chat.templates_file}")
            composer = ResponseComposer(templates=templates, agent_name=self.config.chat.agent_name)
        self.composer = composer

    def respond(self, messages: Sequence[Any]) -> ChatResult:
        """
        Answer the last message of a transcript.

        Args:
            messages: Message objects or wire-format dictionaries, oldest first

        Returns:
            ChatResult with the reply and tool invocations

        Raises:
            InvalidMessageError: If there is no message or the last one is not from the user
        """
        if not isinstance(messages, (list, tuple)):
            raise InvalidMessageError("Messages must be a list")

        if not messages:
            raise InvalidMessageError("No messages provided")

        last = messages[-1]
        message = last if isinstance(last, Message) else Message.from_dict(last)

        if not message.is_user:
            raise InvalidMessageError(
                "Last message must be from the user",
                {"role": message.role.value}
            )

        return self.ask(message.content)

    def ask(self, query: str) -> ChatResult:
        """
        Answer a single piece of user text.

        Args:
            query: The user's message

        Returns:
            ChatResult with the reply and tool invocations
        """
        start_time = time.time()

        selected = self.selector.select(query)
        invocations = self.registry.invoke_all(selected, query)

        match = self.composer.choose(query, invocations)
        content = self.composer.render(match, query, invocations)

        result = ChatResult(
            content=content,
            tool_invocations=invocations,
            rule=match.rule.name,
            latency_ms=int((time.time() - start_time) * 1000),
        )

        logger.info(
            f"Replied with rule '{result.rule}' using "
            f"{[c.value for c in selected] or 'no tools'}"
        )

        return result

    def describe_tools(self) -> List[Dict[str, str]]:
        """Capability metadata for the UIs."""
        return self.registry.describe()

    def describe_rules(self) -> Dict[str, List[Dict[str, Any]]]:
        """Both rule tables, in evaluation order."""
        return {
            "selection": self.selector.engine.to_list(),
            "response": self.composer.engine.to_list(),
        }
