"""
Plan-and-Execute loop: plan once, run each step through a tool, then synthesize.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..primitives.actions import AgentStep
from ..primitives.tools import BaseTool
from ...llm.base import GenerationParameters, LLMClient
from .base import BaseAgent
from .parsers import PlanParser
from .prompts import NO_TOOLS, PLANNER_PROMPT, SYNTHESIS_PROMPT


@dataclass(frozen=True)
class PlanStep:
    index: int
    description: str


@dataclass(frozen=True)
class PlanResult:
    steps: Tuple[PlanStep, ...] = field(default_factory=tuple)

    @classmethod
    def from_descriptions(cls, descriptions: Sequence[str]) -> "PlanResult":
        return cls(steps=tuple(PlanStep(index=i, description=text) for i, text in enumerate(descriptions)))

    def describe(self) -> str:
        return "\n".join(f"{step.index + 1}. {step.description}" for step in self.steps)

    def is_empty(self) -> bool:
        return len(self.steps) == 0

    def __len__(self) -> int:
        return len(self.steps)


@dataclass(frozen=True)
class ToolRule:
    """Routes a plan step to ``tool`` when its lowercased text contains any keyword."""

    keywords: Tuple[str, ...]
    tool: str

    def matches(self, step: str) -> bool:
        lowered = step.lower()
        return any(keyword in lowered for keyword in self.keywords)


DEFAULT_TOOL_RULES: Tuple[ToolRule, ...] = (
    ToolRule(("search", "find", "look up"), "search"),
    ToolRule(("calculate", "math", "compute"), "calculator"),
    ToolRule(("weather", "temperature"), "weather"),
    ToolRule(("database", "query"), "database"),
)
DEFAULT_TOOL = "search"


def select_tool_name(
    step: str,
    rules: Sequence[ToolRule] = DEFAULT_TOOL_RULES,
    default: str = DEFAULT_TOOL,
) -> str:
    for rule in rules:
        if rule.matches(step):
            return rule.tool
    return default


def build_tool_input(step: str, previous_results: Sequence[str]) -> str:
    if not previous_results:
        return step
    return f"Step: {step}\nPrevious results: {'; '.join(previous_results)}"


def enumerate_lines(items: Sequence[str]) -> str:
    return "\n".join(f"{index}. {item}" for index, item in enumerate(items, start=1))


class PlanAndExecuteAgent(BaseAgent):
    kind = "Plan-and-Execute Agent"

    def __init__(
        self,
        llm: LLMClient,
        tools: Sequence[BaseTool] = (),
        *,
        tool_rules: Sequence[ToolRule] = DEFAULT_TOOL_RULES,  # first matching rule wins
        default_tool: str = DEFAULT_TOOL,
        parser: Optional[PlanParser] = None,
        parameters: Optional[GenerationParameters] = None,
        verbose: bool = False,
    ) -> None:
        super().__init__(llm, tools, parameters=parameters, verbose=verbose)
        self.tool_rules = tuple(tool_rules)
        self.default_tool = default_tool
        self.parser = parser or PlanParser()

    def plan(self, input: str) -> PlanResult:
        prompt = PLANNER_PROMPT.format({"tools": self._describe_tools() or NO_TOOLS, "input": input})
        response = self._generate(prompt)
        plan = PlanResult.from_descriptions(self.parser.parse(response))
        self._trace("\n%s\n[PLAN]\n%s\n%s", "=" * 80, plan.describe(), "=" * 80)
        return plan

    def _execute(self, input: str, steps: List[AgentStep]) -> str:
        plan = self.plan(input)
        results: List[str] = []
        for step in plan.steps:
            self._trace("[STEP %d/%d] %s", step.index + 1, len(plan), step.description)
            result = self.execute_step(step.description, results)
            results.append(result)
            steps.append(
                AgentStep(
                    thought=f"Executing plan step {step.index + 1}",
                    action="execute_plan_step",
                    action_input=step.description,
                    observation=result,
                )
            )
            self._trace("\n%s\n[STEP RESULT]\n%s\n%s", "-" * 80, result.strip(), "-" * 80)

        descriptions = [step.description for step in plan.steps]
        prompt = SYNTHESIS_PROMPT.format(
            {"input": input, "plan": enumerate_lines(descriptions), "results": enumerate_lines(results)}
        )
        answer = self._generate(prompt)
        self._trace("\n%s\n[FINAL ANSWER]\n%s\n%s", "=" * 80, answer.strip(), "=" * 80)
        return answer

    def execute_step(self, step: str, previous_results: Sequence[str]) -> str:
        tool_name = select_tool_name(step, self.tool_rules, self.default_tool)
        tool = self._find_tool(tool_name)
        return tool.execute(build_tool_input(step, previous_results))
