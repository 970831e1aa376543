"""Shared fixtures: a scripted LLM client and simple tools."""

from typing import Any, List, Optional, Sequence

import pytest

from agent_toolkit.core.primitives import ChatMessage, Tool
from agent_toolkit.llm import LLMClient, LLMResponse


class ScriptedLLM(LLMClient):
    """Returns canned responses in order and records every request."""

    def __init__(self, responses: Sequence[str]) -> None:
        super().__init__("scripted-model")
        self._responses = list(responses)
        self.requests: List[List[ChatMessage]] = []
        self.kwargs: List[dict] = []

    @property
    def prompts(self) -> List[Optional[str]]:
        return [messages[-1].text_content for messages in self.requests]

    def chat(self, messages, *, temperature=None, max_output_tokens=None, **kwargs: Any) -> LLMResponse:
        self.requests.append(list(messages))
        self.kwargs.append({"temperature": temperature, "max_output_tokens": max_output_tokens, **kwargs})
        if not self._responses:
            raise AssertionError("ScriptedLLM ran out of responses")
        return LLMResponse(content=self._responses.pop(0), finish_reason="stop")


def echo_tool(name: str, prefix: str = "") -> Tool:
    return Tool(name=name, description=f"{name} tool", func=lambda text: f"{prefix or name}:{text}")


@pytest.fixture
def scripted_llm():
    return ScriptedLLM


@pytest.fixture
def make_tool():
    return echo_tool
