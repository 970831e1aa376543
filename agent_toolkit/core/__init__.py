"""
Core primitives and loops that compose the agent pipeline.
"""

from .chains import Chain, ConversationChain, LLMChain, SequentialChain
from .primitives import (
    AgentResult,
    AgentStep,
    BaseTool,
    ChatMessage,
    ContextMemory,
    MessageRole,
    PromptTemplate,
    Tool,
    ToolRegistry,
)

__all__ = [
    "Chain",
    "ConversationChain",
    "LLMChain",
    "SequentialChain",
    "AgentResult",
    "AgentStep",
    "BaseTool",
    "ChatMessage",
    "ContextMemory",
    "MessageRole",
    "PromptTemplate",
    "Tool",
    "ToolRegistry",
]
