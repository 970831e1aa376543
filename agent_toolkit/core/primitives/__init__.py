"""
Foundational data structures shared across the framework.
"""

from .actions import AgentAction, AgentResult, AgentStep
from .errors import (
    AgentError,
    ExecutionFailedError,
    InvalidResponseFormatError,
    InvalidToolInputError,
    MaxIterationsExceededError,
    MemoryRequiredError,
    OutputParserError,
    PlanningFailedError,
    ProviderNotConfiguredError,
    RateLimitExceededError,
    ToolError,
    ToolExecutionError,
    ToolNotAuthenticatedError,
    ToolNotFoundError,
)
from .memory import ContextMemory
from .messages import (
    ChatMessage,
    ImagePart,
    MessageRole,
    TextPart,
    assistant_message,
    coerce_messages,
    image_message,
    mixed_message,
    system_message,
    user_message,
)
from .prompts import PromptTemplate, PromptValue
from .tools import (
    AuthenticatedTool,
    BaseTool,
    ChainedTool,
    RateLimitedTool,
    Tool,
    ToolCallable,
    ToolRegistry,
    ToolWrapper,
    describe_tools,
    find_tool,
)

__all__ = [
    "AgentAction",
    "AgentResult",
    "AgentStep",
    "AgentError",
    "ExecutionFailedError",
    "InvalidResponseFormatError",
    "InvalidToolInputError",
    "MaxIterationsExceededError",
    "MemoryRequiredError",
    "OutputParserError",
    "PlanningFailedError",
    "ProviderNotConfiguredError",
    "RateLimitExceededError",
    "ToolError",
    "ToolExecutionError",
    "ToolNotAuthenticatedError",
    "ToolNotFoundError",
    "ContextMemory",
    "ChatMessage",
    "ImagePart",
    "MessageRole",
    "TextPart",
    "assistant_message",
    "coerce_messages",
    "image_message",
    "mixed_message",
    "system_message",
    "user_message",
    "PromptTemplate",
    "PromptValue",
    "AuthenticatedTool",
    "BaseTool",
    "ChainedTool",
    "RateLimitedTool",
    "Tool",
    "ToolCallable",
    "ToolRegistry",
    "ToolWrapper",
    "describe_tools",
    "find_tool",
]
