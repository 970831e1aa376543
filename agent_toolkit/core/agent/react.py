"""
ReAct loop: reason, pick an action, observe the tool result, repeat.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..primitives.actions import AgentAction, AgentStep
from ..primitives.errors import MaxIterationsExceededError
from ..primitives.tools import BaseTool
from ...llm.base import GenerationParameters, LLMClient
from .base import BaseAgent
from .parsers import ReActOutputParser
from .prompts import NO_TOOLS, REACT_FOLLOW_UP, REACT_PROMPT, REACT_STEP_TEMPLATE

NO_OBSERVATION = "No observation"


class ReActAgent(BaseAgent):
    kind = "ReAct Agent"

    def __init__(
        self,
        llm: LLMClient,
        tools: Sequence[BaseTool] = (),
        *,
        max_iterations: int = 10,
        parser: Optional[ReActOutputParser] = None,
        parameters: Optional[GenerationParameters] = None,
        verbose: bool = False,
    ) -> None:
        super().__init__(llm, tools, parameters=parameters, verbose=verbose)
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1.")
        self.max_iterations = max_iterations
        self.parser = parser or ReActOutputParser()

    def _execute(self, input: str, steps: List[AgentStep]) -> str:
        current_input = input
        self._trace(
            "\n%s\n[REACT START]\nQuestion: %s\nMax iterations: %d\n%s",
            "=" * 80,
            input,
            self.max_iterations,
            "=" * 80,
        )
        for iteration in range(1, self.max_iterations + 1):
            prompt = self.build_prompt(current_input, steps)
            response = self._generate(prompt)
            self._trace(
                "\n%s\n[ITERATION %d/%d] RAW LLM RESPONSE\n%s\n%s",
                "-" * 80,
                iteration,
                self.max_iterations,
                response.strip(),
                "-" * 80,
            )
            parsed = self.parser.parse(response)

            if self.parser.is_final_answer(parsed):
                steps.append(
                    AgentStep(
                        thought=parsed.thought,
                        action=parsed.action,
                        action_input=parsed.action_input,
                        final_answer=parsed.action_input,
                    )
                )
                self._trace(
                    "\n%s\n[ITERATION %d] FINAL ANSWER\n%s\n%s",
                    "=" * 80,
                    iteration,
                    parsed.action_input,
                    "=" * 80,
                )
                return parsed.action_input

            observation = self._execute_action(parsed, steps)
            current_input = REACT_FOLLOW_UP.format({"observation": observation, "question": input})

        raise MaxIterationsExceededError(self.max_iterations)

    def build_prompt(self, input: str, steps: Sequence[AgentStep]) -> str:
        history = "\n\n".join(
            REACT_STEP_TEMPLATE.format(
                {
                    "thought": step.thought,
                    "action": step.action,
                    "action_input": step.action_input,
                    "observation": step.observation if step.observation is not None else NO_OBSERVATION,
                }
            )
            for step in steps
        )
        return REACT_PROMPT.format(
            {"tools": self._describe_tools() or NO_TOOLS, "history": history, "input": input}
        )

    def _execute_action(self, action: AgentAction, steps: List[AgentStep]) -> str:
        self._trace(
            "\n%s\n[TOOL ACTION]\nThought: %s\nTool: %s\nInput: %s\n%s",
            "-" * 80,
            action.thought,
            action.action,
            action.action_input,
            "-" * 80,
        )
        try:
            tool = self._find_tool(action.action)
            observation = tool.execute(action.action_input)
        except Exception:
            steps.append(AgentStep(thought=action.thought, action=action.action, action_input=action.action_input))
            raise
        steps.append(
            AgentStep(
                thought=action.thought,
                action=action.action,
                action_input=action.action_input,
                observation=observation,
            )
        )
        self._trace("\n%s\n[TOOL RESULT] %s\n%s\n%s", "-" * 80, tool.name, observation.strip(), "-" * 80)
        return observation
