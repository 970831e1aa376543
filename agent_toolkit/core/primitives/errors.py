"""
Exception hierarchy raised by agents, tools and output parsers.
"""

from __future__ import annotations

from typing import Optional


class AgentError(RuntimeError):
    """Base class for failures that abort an agent run."""


class MaxIterationsExceededError(AgentError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Agent exceeded maximum iterations ({limit})")
        self.limit = limit


class ToolNotFoundError(AgentError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Tool '{name}' not found")
        self.name = name


class InvalidResponseFormatError(AgentError):
    def __init__(self, response: str) -> None:
        super().__init__(f"Invalid response format: {response}")
        self.response = response


class PlanningFailedError(AgentError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Planning failed: {reason}")
        self.reason = reason


class ExecutionFailedError(AgentError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Execution failed: {reason}")
        self.reason = reason


class MemoryRequiredError(AgentError):
    def __init__(self) -> None:
        super().__init__("Memory is required for this agent type")


class ProviderNotConfiguredError(AgentError):
    def __init__(self) -> None:
        super().__init__("LLM provider is not configured")


class ToolError(RuntimeError):
    """Raised by tools; propagates through agent loops unchanged."""


class ToolNotAuthenticatedError(ToolError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Tool '{name}' requires authentication")
        self.name = name


class RateLimitExceededError(ToolError):
    def __init__(self, name: str, retry_after: Optional[float] = None) -> None:
        message = f"Rate limit exceeded for tool '{name}'"
        if retry_after is not None:
            message += f" (retry in {retry_after:.2f}s)"
        super().__init__(message)
        self.name = name
        self.retry_after = retry_after


class InvalidToolInputError(ToolError, AgentError):
    def __init__(self, tool_input: str) -> None:
        super().__init__(f"Invalid tool input: {tool_input!r}")
        self.input = tool_input


class ToolExecutionError(ToolError):
    """Raised when a tool invocation fails."""


class OutputParserError(ValueError):
    """Raised when model output cannot be converted into the requested structure."""
