"""
Sequential composition of agents and a caller-owned agent directory.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Generic, List, Optional, TypeVar

from ..chains import Chain
from ..primitives.errors import ExecutionFailedError
from ..primitives.tools import BaseTool

LOGGER = logging.getLogger(__name__)

InputT = TypeVar("InputT")
MidT = TypeVar("MidT")
OutputT = TypeVar("OutputT")
NextT = TypeVar("NextT")


class MultiAgent(Chain[InputT, OutputT], Generic[InputT, MidT, OutputT]):
    """
    Runs ``first`` to completion and hands its output verbatim to ``second``.

    A failure in either stage propagates as-is; there is no partial result.
    """

    def __init__(self, first: Chain[InputT, MidT], second: Chain[MidT, OutputT]) -> None:
        self.first = first
        self.second = second

    @property
    def tools(self) -> List[BaseTool]:
        return list(getattr(self.first, "tools", [])) + list(getattr(self.second, "tools", []))

    @property
    def description(self) -> str:
        return f"MultiAgent: {_describe(self.first)} -> {_describe(self.second)}"

    def run(self, input: InputT) -> OutputT:
        LOGGER.debug("MultiAgent: executing first agent")
        intermediate = self.first.run(input)
        LOGGER.debug("MultiAgent: executing second agent")
        return self.second.run(intermediate)

    def then(self, other: Chain[OutputT, NextT]) -> "MultiAgent[InputT, OutputT, NextT]":
        return MultiAgent(self, other)

    combine = then


def combine(first: Chain[InputT, MidT], second: Chain[MidT, OutputT]) -> MultiAgent[InputT, MidT, OutputT]:
    return MultiAgent(first, second)


def _describe(agent: Any) -> str:
    return getattr(agent, "description", type(agent).__name__)


class AgentChainBuilder:
    """Collects agents in order and folds them into nested ``MultiAgent`` pipelines."""

    def __init__(self) -> None:
        self._agents: List[Chain[Any, Any]] = []

    def add(self, agent: Chain[Any, Any]) -> "AgentChainBuilder":
        self._agents.append(agent)
        return self

    def agents(self) -> List[Chain[Any, Any]]:
        return list(self._agents)

    def build(self) -> Chain[Any, Any]:
        if not self._agents:
            raise ExecutionFailedError("Agent chain is empty")
        pipeline = self._agents[0]
        for agent in self._agents[1:]:
            pipeline = MultiAgent(pipeline, agent)
        return pipeline


class AgentRegistry:
    """
    Named agent directory owned by the caller.

    Registering an existing name replaces it; operations are serialised.
    """

    def __init__(self) -> None:
        self._agents: Dict[str, Chain[Any, Any]] = {}
        self._lock = threading.Lock()

    def register(self, agent: Chain[Any, Any], name: str) -> None:
        with self._lock:
            self._agents[name] = agent

    def get(self, name: str) -> Optional[Chain[Any, Any]]:
        with self._lock:
            return self._agents.get(name)

    def all(self) -> List[Chain[Any, Any]]:
        with self._lock:
            return list(self._agents.values())

    def names(self) -> List[str]:
        with self._lock:
            return list(self._agents.keys())

    def clear(self) -> None:
        with self._lock:
            self._agents.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._agents)
