"""
Services Module - Chat orchestration for Elite AI Agent
=======================================================

This module provides the main service:
- Chat Service: validates a transcript, runs the selected tools,
  and composes the reply
"""

from .chat_service import ChatService, ChatResult

__all__ = [
    "ChatService",
    "ChatResult",
]
