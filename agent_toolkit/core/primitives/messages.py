"""
Core message primitives shared across the agent pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union


class MessageRole(str, Enum):
    """Canonical chat roles accepted by the framework."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class TextPart:
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImagePart:
    """Reference to an image by URL (remote or ``data:`` base64)."""

    url: str
    detail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        image_url: Dict[str, Any] = {"url": self.url}
        if self.detail:
            image_url["detail"] = self.detail
        return {"type": "image_url", "image_url": image_url}


ContentPart = Union[TextPart, ImagePart]
MessageContent = Union[str, ImagePart, Tuple[ContentPart, ...]]


@dataclass(frozen=True)
class ChatMessage:
    """
    Minimal representation of a chat message.

    ``content`` is exactly one of: plain text, a single image, or an ordered
    tuple of text/image parts. The structure mirrors common OpenAI-compatible
    schemas and is easily serializable to JSON for prompt construction.
    """

    role: MessageRole
    content: MessageContent
    name: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if isinstance(self.content, list):
            object.__setattr__(self, "content", tuple(self.content))
        if isinstance(self.content, tuple):
            for part in self.content:
                if not isinstance(part, (TextPart, ImagePart)):
                    raise TypeError(f"Unsupported content part: {part!r}")
        elif not isinstance(self.content, (str, ImagePart)):
            raise TypeError(f"Unsupported message content: {self.content!r}")

    @property
    def parts(self) -> Tuple[ContentPart, ...]:
        if isinstance(self.content, str):
            return (TextPart(self.content),)
        if isinstance(self.content, ImagePart):
            return (self.content,)
        return self.content

    @property
    def text_content(self) -> Optional[str]:
        """Joined text of the message, or ``None`` when it carries no text."""
        if isinstance(self.content, str):
            return self.content
        texts = [part.text for part in self.parts if isinstance(part, TextPart)]
        if not texts:
            return None
        return "\n".join(texts)

    @property
    def image_urls(self) -> List[str]:
        return [part.url for part in self.parts if isinstance(part, ImagePart)]

    @property
    def has_images(self) -> bool:
        return any(isinstance(part, ImagePart) for part in self.parts)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        content: Any
        if isinstance(self.content, str):
            content = self.content
        else:
            content = [part.to_dict() for part in self.parts]
        payload: Dict[str, Any] = {"role": self.role.value, "content": content}
        if self.name:
            payload["name"] = self.name
        return payload


def system_message(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.SYSTEM, content=content)


def user_message(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.USER, content=content)


def assistant_message(
    content: str = "",
    *,
    metadata: Optional[Mapping[str, Any]] = None,
) -> ChatMessage:
    return ChatMessage(
        role=MessageRole.ASSISTANT,
        content=content,
        metadata=metadata or {},
    )


def image_message(
    role: MessageRole,
    url: str,
    *,
    detail: Optional[str] = None,
) -> ChatMessage:
    return ChatMessage(role=role, content=ImagePart(url=url, detail=detail))


def mixed_message(
    role: MessageRole,
    text: str,
    url: str,
    *,
    detail: Optional[str] = None,
) -> ChatMessage:
    return ChatMessage(role=role, content=(TextPart(text), ImagePart(url=url, detail=detail)))


def coerce_messages(messages: Sequence[ChatMessage]) -> List[Dict[str, Any]]:
    """Convert a list of message objects into dictionaries."""
    return [message.to_dict() for message in messages]
