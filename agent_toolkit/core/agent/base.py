"""
Common interface for agents: ``run(input) -> output`` plus tools and a description.
"""

from __future__ import annotations

import logging
import time
from abc import abstractmethod
from typing import List, Optional, Sequence, TypeVar

from ..chains import Chain
from ..primitives.actions import AgentResult, AgentStep
from ..primitives.tools import BaseTool, describe_tools, find_tool
from ...llm.base import GenerationParameters, LLMClient
from .composition import MultiAgent

OutputT = TypeVar("OutputT")


class BaseAgent(Chain[str, str]):
    """
    Agent driven by an LLM and a fixed list of tools.

    Subclasses implement ``_execute`` and append every finished iteration to
    the ``steps`` list they are handed, so a failed run still exposes the
    partial trace through ``run_with_result``.
    """

    kind = "Agent"

    def __init__(
        self,
        llm: LLMClient,
        tools: Sequence[BaseTool] = (),
        *,
        parameters: Optional[GenerationParameters] = None,
        verbose: bool = False,
    ) -> None:
        self.llm = llm
        self.tools: List[BaseTool] = list(tools)
        self.parameters = parameters or GenerationParameters()
        self.verbose = verbose
        self._logger = logging.getLogger(type(self).__module__)

    @property
    def description(self) -> str:
        return f"{self.kind} with {len(self.tools)} tools"

    def run(self, input: str) -> str:
        return self._execute(input, [])

    def run_with_result(self, input: str) -> AgentResult:
        """
        Run the agent and package the outcome with its step trace.

        Failures are not raised; they come back as ``success=False`` with the
        exception in ``error`` and the steps recorded before it.
        """
        steps: List[AgentStep] = []
        started = time.perf_counter()
        try:
            output = self._execute(input, steps)
        except Exception as exc:
            self._logger.warning("%s run failed after %d step(s): %s", self.kind, len(steps), exc)
            return AgentResult(
                output="",
                steps=steps,
                iterations=len(steps),
                success=False,
                error=exc,
                execution_time=time.perf_counter() - started,
            )
        return AgentResult(
            output=output,
            steps=steps,
            iterations=len(steps),
            execution_time=time.perf_counter() - started,
        )

    def then(self, other: Chain[str, OutputT]) -> MultiAgent[str, str, OutputT]:
        return MultiAgent(self, other)

    combine = then

    @abstractmethod
    def _execute(self, input: str, steps: List[AgentStep]) -> str:
        raise NotImplementedError

    def _generate(self, prompt: str) -> str:
        return self.llm.generate(prompt, self.parameters)

    def _find_tool(self, name: str) -> BaseTool:
        return find_tool(self.tools, name)

    def _describe_tools(self) -> str:
        return describe_tools(self.tools)

    def _trace(self, message: str, *args: object) -> None:
        self._logger.log(logging.INFO if self.verbose else logging.DEBUG, message, *args)
