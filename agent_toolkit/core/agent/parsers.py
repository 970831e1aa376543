"""
Parsers for interpreting LLM responses within the agent loops.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from ..primitives.actions import AgentAction
from ..primitives.errors import InvalidResponseFormatError, OutputParserError, PlanningFailedError

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

FINAL_ANSWER_ACTION = "Final Answer"
USE_TOOL_MARKER = "USE_TOOL:"


def scan_prefixes(text: str, prefixes: Sequence[str]) -> Dict[str, str]:
    """
    Return the value after the first line starting with each prefix.

    Lines are stripped before matching and matching is case-sensitive. A
    prefix that never appears is missing from the result.
    """
    found: Dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        for prefix in prefixes:
            if prefix in found or not stripped.startswith(prefix):
                continue
            found[prefix] = stripped[len(prefix):].strip()
            break
    return found


class ReActOutputParser:
    """
    Reads ``Thought:``, ``Action:`` and ``Action Input:`` lines.

    Thought and action are required; the action input may be empty.
    """

    thought_prefix = "Thought:"
    action_prefix = "Action:"
    input_prefix = "Action Input:"

    def parse(self, text: str) -> AgentAction:
        found = scan_prefixes(text, (self.thought_prefix, self.action_prefix, self.input_prefix))
        thought = found.get(self.thought_prefix, "")
        action = found.get(self.action_prefix, "")
        if not thought or not action:
            raise InvalidResponseFormatError(text)
        action_input = found.get(self.input_prefix, "")
        LOGGER.debug("Parsed ReAct response: action=%s input=%s", action, action_input)
        return AgentAction(thought=thought, action=action, action_input=action_input)

    @staticmethod
    def is_final_answer(action: AgentAction) -> bool:
        return action.action == FINAL_ANSWER_ACTION


class ToolUseParser:
    """Reads the conversational ``USE_TOOL:`` / ``INPUT:`` protocol."""

    tool_prefix = USE_TOOL_MARKER
    input_prefix = "INPUT:"

    def wants_tool(self, text: str) -> bool:
        return self.tool_prefix in text

    def parse(self, text: str) -> Tuple[str, str]:
        found = scan_prefixes(text, (self.tool_prefix, self.input_prefix))
        tool_name = found.get(self.tool_prefix, "")
        if not tool_name:
            raise InvalidResponseFormatError(text)
        return tool_name, found.get(self.input_prefix, "")


class PlanParser:
    """Extracts the steps of a numbered list (``1. do this``)."""

    pattern = re.compile(r"^\d+\.\s*(.+)")

    def parse(self, text: str) -> List[str]:
        steps: List[str] = []
        for line in text.splitlines():
            match = self.pattern.match(line.strip())
            if match:
                step = match.group(1).strip()
                if step:
                    steps.append(step)
        if not steps:
            raise PlanningFailedError("Failed to create a valid plan")
        return steps


class TextOutputParser:
    def parse(self, text: str) -> str:
        return text.strip()


class JSONOutputParser(Generic[T]):
    """
    Decodes a JSON document, optionally converting it with ``factory``.

    When ``factory`` is given and the document is an object, it is called with
    the object's keys as keyword arguments; otherwise with the decoded value.
    """

    def __init__(self, factory: Optional[Callable[..., T]] = None) -> None:
        self.factory = factory

    def parse(self, text: str) -> Any:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise OutputParserError(f"Invalid JSON output: {text}") from exc
        if self.factory is None:
            return data
        try:
            if isinstance(data, dict):
                return self.factory(**data)
            return self.factory(data)
        except (TypeError, ValueError) as exc:
            raise OutputParserError(f"Could not build {self.factory!r} from {data!r}") from exc
