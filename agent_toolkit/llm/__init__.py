"""
Convenience exports for built-in LLM clients.
"""

from .base import GenerationParameters, LLMClient, LLMError, LLMResponse
from .providers import (
    EndpointSettings,
    OpenAICompatibleClient,
    ProviderSpec,
    create_chat_completion_client,
    list_providers,
    register_provider,
)

__all__ = [
    "GenerationParameters",
    "LLMClient",
    "LLMError",
    "LLMResponse",
    "EndpointSettings",
    "OpenAICompatibleClient",
    "ProviderSpec",
    "create_chat_completion_client",
    "list_providers",
    "register_provider",
]
