"""
Utilities for defining, wrapping and registering tools used by the agent loops.
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from .errors import (
    RateLimitExceededError,
    ToolNotAuthenticatedError,
    ToolNotFoundError,
)

LOGGER = logging.getLogger(__name__)

ToolCallable = Callable[[str], str]


class BaseTool(ABC):
    """Minimal capability every tool exposes: a name, a description and ``execute``."""

    name: str
    description: str

    @abstractmethod
    def execute(self, tool_input: str) -> str:
        raise NotImplementedError

    def validate_input(self, tool_input: str) -> bool:
        return bool(tool_input.strip())

    @property
    def metadata(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "type": "tool"}

    def chain(self, other: "BaseTool") -> "ChainedTool":
        return ChainedTool(self, other)

    def __call__(self, tool_input: str) -> str:
        return self.execute(tool_input)


@dataclass
class Tool(BaseTool):
    """Tool backed by a plain function taking and returning text."""

    name: str
    description: str
    func: ToolCallable

    def execute(self, tool_input: str) -> str:
        return self.func(tool_input)


class ToolWrapper(BaseTool):
    """Delegates to an inner tool; subclasses add a precondition before delegating."""

    def __init__(self, inner: BaseTool) -> None:
        self.inner = inner

    @property
    def name(self) -> str:
        return self.inner.name

    @property
    def description(self) -> str:
        return self.inner.description

    def execute(self, tool_input: str) -> str:
        return self.inner.execute(tool_input)


class AuthenticatedTool(ToolWrapper):
    """
    Rejects calls until ``authenticate()`` succeeds.

    ``authenticator`` performs the credential exchange and returns whether it
    succeeded; it may raise to signal a hard failure.
    """

    def __init__(self, inner: BaseTool, authenticator: Callable[[], bool]) -> None:
        super().__init__(inner)
        self._authenticator = authenticator
        self._authenticated = False

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def authenticate(self) -> bool:
        self._authenticated = bool(self._authenticator())
        LOGGER.info("Tool '%s' authentication %s", self.name, "succeeded" if self._authenticated else "failed")
        return self._authenticated

    def execute(self, tool_input: str) -> str:
        if not self._authenticated:
            raise ToolNotAuthenticatedError(self.name)
        return super().execute(tool_input)


class RateLimitedTool(ToolWrapper):
    """Rejects calls that arrive within ``rate_limit`` seconds of the previous execution."""

    def __init__(
        self,
        inner: BaseTool,
        rate_limit: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(inner)
        if rate_limit < 0:
            raise ValueError("rate_limit must be non-negative.")
        self.rate_limit = rate_limit
        self.last_execution_time: Optional[float] = None
        self._clock = clock

    def execute(self, tool_input: str) -> str:
        now = self._clock()
        if self.last_execution_time is not None:
            elapsed = now - self.last_execution_time
            if elapsed < self.rate_limit:
                raise RateLimitExceededError(self.name, retry_after=self.rate_limit - elapsed)
        self.last_execution_time = now
        return super().execute(tool_input)


class ChainedTool(BaseTool):
    """Feeds the output of ``first`` into ``second``."""

    def __init__(self, first: BaseTool, second: BaseTool) -> None:
        self.first = first
        self.second = second

    @property
    def name(self) -> str:
        return f"chained_{self.first.name}_{self.second.name}"

    @property
    def description(self) -> str:
        return f"Chains {self.first.name} and {self.second.name} together"

    def execute(self, tool_input: str) -> str:
        return self.second.execute(self.first.execute(tool_input))


def describe_tools(tools: Iterable[BaseTool]) -> str:
    """Return a prompt-friendly catalogue, one ``- name: description`` line per tool."""
    return "\n".join(f"- {tool.name}: {tool.description}" for tool in tools)


def find_tool(tools: Sequence[BaseTool], name: str) -> BaseTool:
    for tool in tools:
        if tool.name == name:
            return tool
    raise ToolNotFoundError(name)


class ToolRegistry:
    """
    Named tool directory owned by the caller.

    Registering a name that already exists replaces the previous tool. All
    operations are serialised so the registry can be shared between threads.
    """

    def __init__(self, tools: Iterable[BaseTool] = ()) -> None:
        self._tools: Dict[str, BaseTool] = {}
        self._lock = threading.Lock()
        self.update(tools)

    def register(self, tool: BaseTool) -> None:
        with self._lock:
            if tool.name in self._tools:
                LOGGER.debug("Replacing registered tool '%s'", tool.name)
            self._tools[tool.name] = tool

    def update(self, tools: Iterable[BaseTool]) -> None:
        for tool in tools:
            self.register(tool)

    def remove(self, name: str) -> None:
        with self._lock:
            self._tools.pop(name, None)

    def get(self, name: str) -> Optional[BaseTool]:
        with self._lock:
            return self._tools.get(name)

    def all(self) -> List[BaseTool]:
        with self._lock:
            return list(self._tools.values())

    def names(self) -> List[str]:
        with self._lock:
            return list(self._tools.keys())

    def clear(self) -> None:
        with self._lock:
            self._tools.clear()

    def describe(self) -> str:
        return describe_tools(self.all())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._tools

    def __len__(self) -> int:
        with self._lock:
            return len(self._tools)
