"""
Provider-facing interface: the agents only ever call ``generate``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from ..core.primitives.messages import ChatMessage, coerce_messages, user_message


class LLMError(RuntimeError):
    """Transport or protocol failure while talking to a provider."""


@dataclass
class LLMResponse:
    """Assistant text of one completion plus whatever the provider reported with it."""

    content: str
    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None
    raw: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class GenerationParameters:
    """Sampling options forwarded to the provider; unset values are omitted."""

    temperature: float = 0.7
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None

    def to_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"temperature": self.temperature}
        if self.max_tokens is not None:
            kwargs["max_output_tokens"] = self.max_tokens
        for name in ("top_p", "frequency_penalty", "presence_penalty"):
            value = getattr(self, name)
            if value is not None:
                kwargs[name] = value
        return kwargs


class LLMClient(ABC):
    """
    A chat model reachable through some transport.

    Subclasses implement ``chat``; ``generate`` wraps a single prompt as one
    user message and returns the reply text. ``temperature`` and
    ``max_output_tokens`` given here are defaults for calls that leave them
    unset.
    """

    def __init__(
        self,
        model: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: Optional[int] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    @abstractmethod
    def chat(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        raise NotImplementedError

    def generate(self, prompt: str, parameters: Optional[GenerationParameters] = None) -> str:
        options = parameters.to_kwargs() if parameters is not None else {}
        return self.chat([user_message(prompt)], **options).content

    def build_payload(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        """JSON body for an OpenAI-style ``/chat/completions`` request."""
        payload: Dict[str, Any] = {
            "model": self.model,
            "temperature": self.temperature if temperature is None else temperature,
        }
        limit = self.max_output_tokens if max_output_tokens is None else max_output_tokens
        if limit is not None:
            payload["max_tokens"] = limit
        payload.update(extra)
        payload["messages"] = coerce_messages(messages)
        return payload
