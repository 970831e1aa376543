"""
Rough token accounting helpers based on average characters per token.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelProfile:
    """Per-model heuristic used for token estimates."""

    name: str
    characters_per_token: int

    def __post_init__(self) -> None:
        if self.characters_per_token <= 0:
            raise ValueError("characters_per_token must be positive.")

    @classmethod
    def custom(cls, characters_per_token: int) -> "ModelProfile":
        return cls(name="custom", characters_per_token=characters_per_token)


GPT3 = ModelProfile(name="gpt3", characters_per_token=4)
GPT4 = ModelProfile(name="gpt4", characters_per_token=3)
MISTRAL = ModelProfile(name="mistral", characters_per_token=3)


def estimate_token_count(text: str, model: ModelProfile = GPT4) -> int:
    return len(text) // model.characters_per_token


def truncate_to_token_limit(text: str, max_tokens: int, model: ModelProfile = GPT4) -> str:
    max_chars = max_tokens * model.characters_per_token
    return text[:max_chars]
