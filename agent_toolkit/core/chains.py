"""
Chains: units with ``run(input) -> output`` that can be sequenced.

``first.then(second)`` is only meaningful when ``first``'s output type is
``second``'s input type. The generic parameters let a type checker verify
that; nothing is checked at runtime.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, Optional, TypeVar

from .primitives.errors import ExecutionFailedError
from .primitives.memory import ContextMemory
from .primitives.messages import ChatMessage, MessageRole, assistant_message
from .primitives.prompts import PromptTemplate, PromptValue
from ..llm.base import GenerationParameters, LLMClient

LOGGER = logging.getLogger(__name__)

InputT = TypeVar("InputT")
MidT = TypeVar("MidT")
OutputT = TypeVar("OutputT")
NextT = TypeVar("NextT")


class Chain(ABC, Generic[InputT, OutputT]):
    @abstractmethod
    def run(self, input: InputT) -> OutputT:
        raise NotImplementedError

    def then(self, other: "Chain[OutputT, NextT]") -> "SequentialChain[InputT, OutputT, NextT]":
        return SequentialChain(self, other)

    combine = then


class SequentialChain(Chain[InputT, OutputT], Generic[InputT, MidT, OutputT]):
    """Runs ``first`` to completion and feeds its output verbatim to ``second``."""

    def __init__(self, first: Chain[InputT, MidT], second: Chain[MidT, OutputT]) -> None:
        self.first = first
        self.second = second

    def run(self, input: InputT) -> OutputT:
        intermediate = self.first.run(input)
        return self.second.run(intermediate)


class LLMChain(Chain[Mapping[str, Any], Any]):
    """Formats a prompt template with the input mapping and asks the provider."""

    def __init__(
        self,
        prompt_template: PromptTemplate,
        llm: LLMClient,
        *,
        parameters: Optional[GenerationParameters] = None,
        output_parser: Optional[Any] = None,
    ) -> None:
        self.prompt_template = prompt_template
        self.llm = llm
        self.parameters = parameters or GenerationParameters()
        self.output_parser = output_parser

    def prompt(self, variables: Mapping[str, Any]) -> PromptValue:
        missing = self.prompt_template.missing_variables(variables)
        if missing:
            LOGGER.debug("Prompt variables left unresolved: %s", ", ".join(missing))
        return PromptValue.from_template(self.prompt_template, variables)

    def run(self, input: Mapping[str, Any]) -> Any:
        text = self.llm.generate(self.prompt(input).text, self.parameters)
        if self.output_parser is None:
            return text
        return self.output_parser.parse(text)


class ConversationChain(Chain[str, str]):
    """Chats with the provider using the whole memory as the message list."""

    def __init__(
        self,
        llm: LLMClient,
        memory: ContextMemory,
        *,
        parameters: Optional[GenerationParameters] = None,
    ) -> None:
        self.llm = llm
        self.memory = memory
        self.parameters = parameters or GenerationParameters()

    def run(self, input: str) -> str:
        return self.send(ChatMessage(role=MessageRole.USER, content=input))

    def send(self, message: ChatMessage) -> str:
        """Send any user message, including image or mixed content."""
        self.memory.add_message(message)
        response = self.llm.chat(self.memory.get_messages(), **self.parameters.to_kwargs())
        reply = response.content
        if not reply:
            raise ExecutionFailedError("Provider returned an empty reply")
        self.memory.add_message(assistant_message(reply))
        return reply
