"""Application errors.

Everything the agent raises on purpose derives from AgentError so the HTTP
layer can log it and translate it into a 500 with a generic message.
"""

from typing import Any


class AgentError(Exception):
    """Base class for HR agent errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(AgentError):
    """Raised when credentials, certificates or the database are missing or unreachable at startup."""


class AgentNotInitializedError(AgentError):
    """Raised when the agent is asked to answer before initialize() succeeded."""

    def __init__(self, message: str = "The agent has not been initialized yet") -> None:
        super().__init__(message)


class TurnLimitExceededError(AgentError):
    """Raised when the model keeps requesting tools past the configured turn cap."""

    def __init__(self, max_turns: int) -> None:
        self.max_turns = max_turns
        super().__init__(f"Agent did not produce a final answer within {max_turns} turns")


class ToolInputError(AgentError):
    """Raised when tool arguments produced by the model fail validation."""

    def __init__(self, tool_name: str, errors: list[dict[str, Any]]) -> None:
        self.tool_name = tool_name
        self.errors = errors
        details = "; ".join(f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in errors)
        super().__init__(f"Invalid arguments for {tool_name}: {details}")


class ToolExecutionError(AgentError):
    """Raised when a tool fails while running (embedding or search failure)."""

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"{tool_name} failed: {message}")
