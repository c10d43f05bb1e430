"""
Data Models - Chat messages, roles, and tool invocations
========================================================

This module defines the value types shared by the tool selector,
the response composer, and the transports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import InvalidMessageError


class Role(str, Enum):
    """Who authored a chat message."""
    USER = "user"
    ASSISTANT = "assistant"


class Capability(str, Enum):
    """
    The fixed set of tools the agent can invoke.

    Declaration order is the order the tool selector checks them in.
    """
    WEB_SEARCH = "web_search"
    CALCULATOR = "calculator"
    CODE_EXECUTOR = "code_executor"
    KNOWLEDGE_BASE = "knowledge_base"
    IMAGE_ANALYZER = "image_analyzer"
    DATA_PROCESSOR = "data_processor"

    @property
    def icon(self) -> str:
        return CAPABILITY_INFO[self][0]

    @property
    def description(self) -> str:
        return CAPABILITY_INFO[self][1]

    @property
    def label(self) -> str:
        """Human-readable name, e.g. 'web search'."""
        return self.value.replace("_", " ")

    @classmethod
    def parse(cls, name: Any) -> "Capability":
        """
        Look up a capability by wire name.

        Raises:
            InvalidMessageError: If the name is not a known capability
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise InvalidMessageError("Unknown capability", {"name": name})


CAPABILITY_INFO: Dict[Capability, Tuple[str, str]] = {
    Capability.WEB_SEARCH: ("🔍", "Search the internet"),
    Capability.CALCULATOR: ("🧮", "Perform calculations"),
    Capability.CODE_EXECUTOR: ("💻", "Execute code"),
    Capability.KNOWLEDGE_BASE: ("📚", "Access knowledge"),
    Capability.IMAGE_ANALYZER: ("🖼️", "Analyze images"),
    Capability.DATA_PROCESSOR: ("📊", "Process data"),
}


@dataclass(frozen=True)
class ToolInvocation:
    """
    Record of one capability call.

    Attributes:
        name (Capability): Which capability ran
        input (str): The text it was given
        result: What it returned (text for every built-in tool)
    """
    name: Capability
    input: str
    result: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire format."""
        return {
            "name": self.name.value,
            "input": self.input,
            "result": self.result,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ToolInvocation":
        """Create from the wire format."""
        if not isinstance(data, Mapping):
            raise InvalidMessageError("Tool invocation must be an object")
        return cls(
            name=Capability.parse(data.get("name")),
            input=data.get("input", ""),
            result=data.get("result"),
        )


@dataclass(frozen=True)
class Message:
    """
    A single chat turn.

    Attributes:
        role (Role): Author of the message
        content (str): Message text (markdown for assistant turns)
        tool_invocations (tuple): Tools run for this turn; assistant only
    """
    role: Role
    content: str
    tool_invocations: Tuple[ToolInvocation, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.role is Role.USER and self.tool_invocations:
            raise InvalidMessageError("User messages cannot carry tool invocations")

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire format; invocations are omitted when empty."""
        result: Dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.tool_invocations:
            result["tool_invocations"] = [t.to_dict() for t in self.tool_invocations]
        return result

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        """
        Create from the wire format.

        Accepts invocations under either ``tool_invocations`` or the
        browser client's ``toolCalls`` key.

        Raises:
            InvalidMessageError: If the payload is not a well-formed message
        """
        if not isinstance(data, Mapping):
            raise InvalidMessageError("Message must be an object")

        try:
            role = Role(data.get("role"))
        except ValueError:
            raise InvalidMessageError("Invalid message role", {"role": data.get("role")})

        content = data.get("content", "")
        if not isinstance(content, str):
            raise InvalidMessageError("Message content must be text")

        raw_invocations = data.get("tool_invocations")
        if raw_invocations is None:
            raw_invocations = data.get("toolCalls")
        raw_invocations = raw_invocations or []
        if not isinstance(raw_invocations, (list, tuple)):
            raise InvalidMessageError("tool_invocations must be a list")

        return cls(
            role=role,
            content=content,
            tool_invocations=tuple(ToolInvocation.from_dict(t) for t in raw_invocations),
        )
