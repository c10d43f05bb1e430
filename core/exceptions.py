"""
Exception Definitions - Custom exceptions for Elite AI Agent
============================================================

This module defines all custom exceptions used throughout the application,
providing clear error handling and meaningful error messages.
"""


class AgentError(Exception):
    """
    Base exception for all agent errors.

    All custom exceptions in this application inherit from this base class,
    allowing for easy catching of all application-specific errors.

    Attributes:
        message (str): Human-readable error description
        details (dict): Additional error details for debugging
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            details: Optional dictionary with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return formatted error message with details if present."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(AgentError):
    """
    Configuration-related errors.

    Raised when there are issues with:
    - Invalid configuration values
    - Configuration parsing errors
    - Unreadable template override files
    """
    pass


class InvalidMessageError(AgentError):
    """
    Malformed chat input.

    Raised before any tool runs when:
    - The message sequence is empty
    - The last message is not from the user
    - A message has an unknown role or non-text content
    - A tool invocation names an unknown capability
    """
    pass


class CalculationError(AgentError):
    """
    Arithmetic expression errors.

    Raised by the expression parser on unsupported characters,
    unbalanced parentheses, or division by zero. The calculator
    tool turns it into a result string, so it never reaches callers.
    """
    pass


class UIError(AgentError):
    """
    User interface errors.

    Raised when there are issues with:
    - Terminal UI rendering
    - Web UI template errors
    """
    pass
