"""
domain.exceptions - Custom exception hierarchy for the knowledge agent.

All agent-level errors inherit from AgentError so callers can catch
broad or specific exceptions as needed.
"""

from __future__ import annotations


class AgentError(Exception):
    """Base exception for all agent-level errors."""


class ConfigurationError(AgentError):
    """Raised when required configuration values are missing or invalid."""

    def __init__(self, missing: list[str] | None = None, message: str = ""):
        self.missing = list(missing or [])
        if not message:
            message = "Missing required configuration: " + ", ".join(self.missing)
        super().__init__(message)


class RepositoryError(AgentError):
    """Raised when a hosted-store operation fails."""


class ToolExecutionError(AgentError):
    """Raised when a tool handler fails unexpectedly.

    The original exception is kept as __cause__; the message is the text
    the model sees in place of the tool output.
    """

    def __init__(self, tool_name: str, message: str):
        self.tool_name = tool_name
        super().__init__(message)


class IterationLimitExceeded(AgentError):
    """Raised when a turn uses up its model/tool iteration limit."""

    def __init__(self, max_iterations: int):
        self.max_iterations = max_iterations
        super().__init__(
            f"Agent stopped after reaching the iteration limit of {max_iterations} steps."
        )
