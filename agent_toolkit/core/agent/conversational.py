"""
Conversational agent: one reply per user turn, with at most one tool call.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..primitives.actions import AgentStep
from ..primitives.errors import MemoryRequiredError
from ..primitives.memory import ContextMemory
from ..primitives.messages import ChatMessage, assistant_message, user_message
from ..primitives.tools import BaseTool
from ...llm.base import GenerationParameters, LLMClient
from .base import BaseAgent
from .parsers import ToolUseParser
from .prompts import CONVERSATIONAL_FOLLOW_UP, CONVERSATIONAL_PROMPT, NO_TOOLS, build_history_section


class ConversationalAgent(BaseAgent):
    """
    Keeps the conversation in an optional ``ContextMemory``.

    When the model answers with ``USE_TOOL: name`` / ``INPUT: text`` the tool
    runs once and a follow-up prompt turns its result into the reply.
    Without memory every turn is answered without history.
    """

    kind = "Conversational Agent"

    def __init__(
        self,
        llm: LLMClient,
        tools: Sequence[BaseTool] = (),
        *,
        memory: Optional[ContextMemory] = None,
        parser: Optional[ToolUseParser] = None,
        parameters: Optional[GenerationParameters] = None,
        verbose: bool = False,
    ) -> None:
        super().__init__(llm, tools, parameters=parameters, verbose=verbose)
        self.memory = memory
        self.parser = parser or ToolUseParser()

    def history(self) -> Tuple[ChatMessage, ...]:
        return self._require_memory().get_messages()

    def clear_history(self) -> None:
        self._require_memory().clear()

    def _execute(self, input: str, steps: List[AgentStep]) -> str:
        self._remember(user_message(input))
        context = self.memory.as_prompt_context() if self.memory is not None else ""
        prompt = CONVERSATIONAL_PROMPT.format(
            {
                "tools": self._describe_tools() or NO_TOOLS,
                "history": build_history_section(context),
                "input": input,
            }
        )
        response = self._generate(prompt)

        if self.parser.wants_tool(response):
            return self._answer_with_tool(input, response, steps)

        self._remember(assistant_message(response))
        self._trace("\n%s\n[RESPONSE]\n%s\n%s", "-" * 80, response.strip(), "-" * 80)
        return response

    def _answer_with_tool(self, input: str, response: str, steps: List[AgentStep]) -> str:
        tool_name, tool_input = self.parser.parse(response)
        try:
            tool = self._find_tool(tool_name)
            result = tool.execute(tool_input)
        except Exception:
            steps.append(AgentStep(thought=response.strip(), action=tool_name, action_input=tool_input))
            raise
        steps.append(AgentStep(thought=response.strip(), action=tool_name, action_input=tool_input, observation=result))
        self._trace(
            "\n%s\n[TOOL]\nTool: %s\nInput: %s\nResult: %s\n%s",
            "-" * 80,
            tool_name,
            tool_input,
            result.strip(),
            "-" * 80,
        )

        follow_up = CONVERSATIONAL_FOLLOW_UP.format(
            {"input": input, "tool": tool_name, "tool_input": tool_input, "result": result}
        )
        final_response = self._generate(follow_up)
        self._remember(assistant_message(final_response))
        self._trace("\n%s\n[RESPONSE]\n%s\n%s", "=" * 80, final_response.strip(), "=" * 80)
        return final_response

    def _remember(self, message: ChatMessage) -> None:
        if self.memory is not None:
            self.memory.add_message(message)

    def _require_memory(self) -> ContextMemory:
        if self.memory is None:
            raise MemoryRequiredError()
        return self.memory
