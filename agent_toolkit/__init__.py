"""
High-level exports for the agent orchestration toolkit.

This package exposes the agent loops (ReAct, Plan-and-Execute,
Conversational), the builder that assembles them, and the core types that
can be used to extend or customize agent behaviour.
"""

from .agent import AgentBuilder, AgentConfig, AgentType
from .core.agent import (
    AgentChainBuilder,
    AgentRegistry,
    BaseAgent,
    ConversationalAgent,
    MultiAgent,
    PlanAndExecuteAgent,
    ReActAgent,
    combine,
)
from .core.chains import Chain, ConversationChain, LLMChain, SequentialChain
from .core.primitives import (
    AgentResult,
    AgentStep,
    AuthenticatedTool,
    BaseTool,
    ChatMessage,
    ContextMemory,
    MessageRole,
    PromptTemplate,
    PromptValue,
    RateLimitedTool,
    Tool,
    ToolRegistry,
)
from .llm import GenerationParameters, LLMClient

__version__ = "0.1.0"

__all__ = [
    "AgentBuilder",
    "AgentConfig",
    "AgentType",
    "AgentChainBuilder",
    "AgentRegistry",
    "BaseAgent",
    "ConversationalAgent",
    "MultiAgent",
    "PlanAndExecuteAgent",
    "ReActAgent",
    "combine",
    "Chain",
    "ConversationChain",
    "LLMChain",
    "SequentialChain",
    "AgentResult",
    "AgentStep",
    "AuthenticatedTool",
    "BaseTool",
    "ChatMessage",
    "ContextMemory",
    "MessageRole",
    "PromptTemplate",
    "PromptValue",
    "RateLimitedTool",
    "Tool",
    "ToolRegistry",
    "GenerationParameters",
    "LLMClient",
]
