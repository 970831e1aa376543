"""
High-level configuration and builder that assemble ready-to-run agents.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from .core.agent import BaseAgent, ConversationalAgent, PlanAndExecuteAgent, ReActAgent
from .core.primitives.errors import ExecutionFailedError, ProviderNotConfiguredError
from .core.primitives.memory import ContextMemory
from .core.primitives.tools import BaseTool
from .llm import GenerationParameters, LLMClient, create_chat_completion_client

LOGGER = logging.getLogger(__name__)

ENV_MAX_ITERATIONS = "AGENT_TOOLKIT_MAX_ITERATIONS"
ENV_VERBOSE = "AGENT_TOOLKIT_VERBOSE"
ENV_PROVIDER = "AGENT_TOOLKIT_PROVIDER"
ENV_MODEL = "AGENT_TOOLKIT_MODEL"

_TRUTHY = {"1", "true", "yes", "on"}


class AgentType(str, Enum):
    REACT = "react"
    PLAN_AND_EXECUTE = "plan_and_execute"
    CONVERSATIONAL = "conversational"


@dataclass
class AgentConfig:
    llm: Optional[LLMClient] = None
    tools: List[BaseTool] = field(default_factory=list)
    max_iterations: int = 10
    verbose: bool = False
    agent_type: AgentType = AgentType.REACT
    memory: Optional[ContextMemory] = None
    parameters: GenerationParameters = field(default_factory=GenerationParameters)

    @classmethod
    def from_env(cls, llm: Optional[LLMClient] = None, **overrides) -> "AgentConfig":
        """
        Build a config from ``AGENT_TOOLKIT_*`` environment variables.

        When no client is passed and ``AGENT_TOOLKIT_PROVIDER`` is set, one is
        created through the provider registry using ``AGENT_TOOLKIT_MODEL``.
        Keyword overrides win over the environment.
        """
        config = cls(llm=llm)
        raw_iterations = os.getenv(ENV_MAX_ITERATIONS)
        if raw_iterations:
            try:
                config.max_iterations = int(raw_iterations)
            except ValueError as exc:
                raise ValueError(f"{ENV_MAX_ITERATIONS} must be an integer, got {raw_iterations!r}") from exc
        raw_verbose = os.getenv(ENV_VERBOSE)
        if raw_verbose:
            config.verbose = raw_verbose.strip().lower() in _TRUTHY
        if config.llm is None:
            provider = os.getenv(ENV_PROVIDER)
            if provider:
                model = os.getenv(ENV_MODEL)
                if not model:
                    raise ValueError(f"{ENV_MODEL} is required when {ENV_PROVIDER} is set.")
                LOGGER.info("Creating %s client for model %s from environment", provider, model)
                config.llm = create_chat_completion_client(provider, model)
        for key, value in overrides.items():
            if not hasattr(config, key):
                raise TypeError(f"Unknown AgentConfig field '{key}'")
            setattr(config, key, value)
        return config


class AgentBuilder:
    """Fluent construction of ReAct, Plan-and-Execute and Conversational agents."""

    def __init__(self, config: Optional[AgentConfig] = None) -> None:
        self.config = config or AgentConfig()

    def with_llm(self, llm: LLMClient) -> "AgentBuilder":
        self.config.llm = llm
        return self

    def with_tools(self, tools: Iterable[BaseTool]) -> "AgentBuilder":
        self.config.tools = list(tools)
        return self

    def with_tool(self, tool: BaseTool) -> "AgentBuilder":
        self.config.tools.append(tool)
        return self

    def with_max_iterations(self, max_iterations: int) -> "AgentBuilder":
        self.config.max_iterations = max_iterations
        return self

    def with_verbose(self, verbose: bool) -> "AgentBuilder":
        self.config.verbose = verbose
        return self

    def with_agent_type(self, agent_type: AgentType) -> "AgentBuilder":
        self.config.agent_type = AgentType(agent_type)
        return self

    def with_memory(self, memory: ContextMemory) -> "AgentBuilder":
        self.config.memory = memory
        return self

    def with_parameters(self, parameters: GenerationParameters) -> "AgentBuilder":
        self.config.parameters = parameters
        return self

    def build(self) -> BaseAgent:
        agent_type = self.config.agent_type
        if agent_type is AgentType.REACT:
            return self.build_react_agent()
        if agent_type is AgentType.PLAN_AND_EXECUTE:
            return self.build_plan_and_execute_agent()
        if agent_type is AgentType.CONVERSATIONAL:
            return self.build_conversational_agent()
        raise ExecutionFailedError(f"Unsupported agent type: {agent_type}")

    def build_react_agent(self) -> ReActAgent:
        return ReActAgent(
            self._require_llm(),
            self.config.tools,
            max_iterations=self.config.max_iterations,
            parameters=self.config.parameters,
            verbose=self.config.verbose,
        )

    def build_plan_and_execute_agent(self) -> PlanAndExecuteAgent:
        return PlanAndExecuteAgent(
            self._require_llm(),
            self.config.tools,
            parameters=self.config.parameters,
            verbose=self.config.verbose,
        )

    def build_conversational_agent(self) -> ConversationalAgent:
        return ConversationalAgent(
            self._require_llm(),
            self.config.tools,
            memory=self.config.memory,
            parameters=self.config.parameters,
            verbose=self.config.verbose,
        )

    @classmethod
    def react_agent(cls, llm: LLMClient, tools: Iterable[BaseTool] = ()) -> ReActAgent:
        return cls().with_llm(llm).with_tools(tools).build_react_agent()

    @classmethod
    def plan_and_execute_agent(cls, llm: LLMClient, tools: Iterable[BaseTool] = ()) -> PlanAndExecuteAgent:
        return cls().with_llm(llm).with_tools(tools).build_plan_and_execute_agent()

    @classmethod
    def conversational_agent(
        cls,
        llm: LLMClient,
        tools: Iterable[BaseTool] = (),
        memory: Optional[ContextMemory] = None,
    ) -> ConversationalAgent:
        builder = cls().with_llm(llm).with_tools(tools)
        if memory is not None:
            builder.with_memory(memory)
        return builder.build_conversational_agent()

    def _require_llm(self) -> LLMClient:
        if self.config.llm is None:
            raise ProviderNotConfiguredError()
        return self.config.llm
