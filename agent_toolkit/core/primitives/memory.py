"""
Bounded in-memory storage for agent conversation state.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from ...utils.tokenizer import GPT4, ModelProfile
from .messages import ChatMessage, MessageRole

LOGGER = logging.getLogger(__name__)

IMAGE_TOKEN_ESTIMATE = 85


class ContextMemory:
    """
    Ordered conversation buffer trimmed by message count and token budget.

    After every ``add_message`` the buffer holds at most ``max_messages``
    entries and the estimated tokens of the retained messages stay within
    ``max_tokens``. Both limits drop the oldest messages first. A memory
    belongs to a single agent; use ``copy()`` to give another run its own
    snapshot.
    """

    def __init__(
        self,
        *,
        max_tokens: Optional[int] = None,
        max_messages: Optional[int] = None,
        model: ModelProfile = GPT4,
        messages: Iterable[ChatMessage] = (),
    ) -> None:
        if max_tokens is not None and max_tokens < 0:
            raise ValueError("max_tokens must be non-negative.")
        if max_messages is not None and max_messages < 0:
            raise ValueError("max_messages must be non-negative.")
        self.max_tokens = max_tokens
        self.max_messages = max_messages
        self.model = model
        self._messages: List[ChatMessage] = []
        for message in messages:
            self.add_message(message)

    def add_message(self, message: ChatMessage) -> None:
        """Append a message, then trim the buffer back within its limits."""
        self._messages.append(message)
        self._trim_if_needed()

    def get_messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def clear(self) -> None:
        self._messages.clear()

    def copy(self) -> "ContextMemory":
        clone = ContextMemory(
            max_tokens=self.max_tokens,
            max_messages=self.max_messages,
            model=self.model,
        )
        clone._messages = list(self._messages)
        return clone

    def as_prompt_context(self) -> str:
        """Render retained messages as ``role: text`` lines, skipping image-only turns."""
        lines = []
        for message in self._messages:
            text = message.text_content
            if not text:
                continue
            lines.append(f"{message.role.value}: {text}")
        return "\n".join(lines)

    def last_user_message(self) -> Optional[ChatMessage]:
        for message in reversed(self._messages):
            if message.role is MessageRole.USER:
                return message
        return None

    def estimate_tokens(self, message: ChatMessage) -> int:
        text = message.text_content
        count = len(text.split()) if text else 0
        return count + len(message.image_urls) * IMAGE_TOKEN_ESTIMATE

    def total_tokens(self) -> int:
        return sum(self.estimate_tokens(message) for message in self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def _trim_if_needed(self) -> None:
        before = len(self._messages)
        if self.max_messages is not None and len(self._messages) > self.max_messages:
            excess = len(self._messages) - self.max_messages
            del self._messages[:excess]

        if self.max_tokens is not None:
            budget = 0
            keep_from = len(self._messages)
            # newest first; stop at the first message that no longer fits
            for index in range(len(self._messages) - 1, -1, -1):
                tokens = self.estimate_tokens(self._messages[index])
                if budget + tokens > self.max_tokens:
                    break
                budget += tokens
                keep_from = index
            del self._messages[:keep_from]

        dropped = before - len(self._messages)
        if dropped:
            LOGGER.debug("Trimmed %d message(s) from context memory (%d retained)", dropped, len(self._messages))
