"""
Core agent orchestration components (loops, parsing, composition).
"""

from .base import BaseAgent
from .composition import AgentChainBuilder, AgentRegistry, MultiAgent, combine
from .conversational import ConversationalAgent
from .parsers import (
    FINAL_ANSWER_ACTION,
    JSONOutputParser,
    PlanParser,
    ReActOutputParser,
    TextOutputParser,
    ToolUseParser,
)
from .planning import (
    DEFAULT_TOOL_RULES,
    PlanAndExecuteAgent,
    PlanResult,
    PlanStep,
    ToolRule,
    select_tool_name,
)
from .react import ReActAgent

__all__ = [
    "BaseAgent",
    "AgentChainBuilder",
    "AgentRegistry",
    "MultiAgent",
    "combine",
    "ConversationalAgent",
    "FINAL_ANSWER_ACTION",
    "JSONOutputParser",
    "PlanParser",
    "ReActOutputParser",
    "TextOutputParser",
    "ToolUseParser",
    "DEFAULT_TOOL_RULES",
    "PlanAndExecuteAgent",
    "PlanResult",
    "PlanStep",
    "ToolRule",
    "select_tool_name",
    "ReActAgent",
]
