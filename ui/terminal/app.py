"""
Textual Application - Terminal chat interface
=============================================

This module implements a Textual chat screen on top of the chat
service: a scrolling transcript with markdown replies and tool
annotations, and an input box.
"""

from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Header, Footer, Static, Input, Markdown

from core.config import Config, load_config
from core.exceptions import UIError
from core.logging import get_logger
from core.models import Message, Role, ToolInvocation
from services.chat_service import ChatService

logger = get_logger("tui.app")

ERROR_REPLY = "Sorry, I encountered an error processing your request."


def format_tool_note(invocation: ToolInvocation) -> str:
    """One-line tool annotation, with the result underneath when there is one."""
    note = f"🔧 Using: {invocation.name.value}"
    if invocation.result:
        note += f"\n   {invocation.result}"
    return note


def format_tool_bar(tools: List[dict]) -> str:
    return "  ".join(f"{t['icon']} {t['label']}" for t in tools)


def message_widgets(message: Message) -> List[Widget]:
    """Widgets that display one transcript entry."""
    if message.role is Role.USER:
        return [Static(f"You: {message.content}", classes="user-message", markup=False)]

    widgets: List[Widget] = [
        Static(format_tool_note(invocation), classes="tool-note", markup=False)
        for invocation in message.tool_invocations
    ]
    widgets.append(Markdown(message.content, classes="assistant-message"))
    return widgets


class ChatApp(App):
    """
    Terminal chat client.

    Keeps the transcript in memory for the life of the app and sends
    it to the chat service on every submit.
    """

    CSS = """
    Screen {
        background: $surface;
    }

    #tool-bar {
        color: $text-muted;
        padding: 0 1;
        height: auto;
    }

    #chat-log {
        height: 1fr;
        padding: 1 2;
    }

    .welcome {
        color: $text-muted;
        text-align: center;
        margin: 2 0;
    }

    .user-message {
        background: $primary-darken-2;
        padding: 1 2;
        margin: 1 0 0 12;
    }

    .tool-note {
        color: $accent;
        border-left: thick $accent;
        padding: 0 1;
        margin: 1 12 0 0;
    }

    .assistant-message {
        background: $panel;
        padding: 0 2;
        margin: 1 12 0 0;
    }

    #chat-input {
        dock: bottom;
        margin: 0 1 1 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+l", "clear", "Clear", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        config: Optional[Config] = None,
        service: Optional[ChatService] = None
    ):
        super().__init__()
        self.config = config or load_config()
        self.service = service or ChatService(config=self.config)
        self.transcript: List[Message] = []

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static(format_tool_bar(self.service.describe_tools()), id="tool-bar", markup=False)
        with VerticalScroll(id="chat-log"):
            yield Static(
                f"🤖 Welcome to {self.config.chat.agent_name}\n"
                "Ask me anything - I can search, calculate, analyze, and more!",
                classes="welcome",
                markup=False,
            )
        yield Input(placeholder="Ask me anything...", id="chat-input")
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.config.chat.agent_name
        self.sub_title = self.config.chat.tagline
        self.query_one("#chat-input", Input).focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        event.input.value = ""
        if not text:
            return

        user_message = Message(role=Role.USER, content=text)
        self.transcript.append(user_message)
        await self._append(user_message)

        try:
            reply = self.service.respond(self.transcript).to_message()
        except Exception as e:
            logger.error(f"Error processing chat: {e}", exc_info=True)
            reply = Message(role=Role.ASSISTANT, content=ERROR_REPLY)

        self.transcript.append(reply)
        await self._append(reply)

    async def _append(self, message: Message) -> None:
        log = self.query_one("#chat-log", VerticalScroll)
        await log.query(".welcome").remove()
        await log.mount_all(message_widgets(message))
        log.scroll_end(animate=False)

    async def action_clear(self) -> None:
        self.transcript.clear()
        await self.query_one("#chat-log", VerticalScroll).remove_children()
        self.notify("Transcript cleared")


def run_tui(config: Optional[Config] = None) -> None:
    """
    Run the terminal UI until the user quits.

    Raises:
        UIError: If the terminal UI is disabled in configuration
    """
    config = config or load_config()
    if not config.ui.tui_enabled:
        raise UIError("Terminal UI is disabled", {"setting": "ui.tui_enabled"})

    app = ChatApp(config=config)
    app.run()


if __name__ == "__main__":
    run_tui()
