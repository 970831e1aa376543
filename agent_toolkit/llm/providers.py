"""
OpenAI-compatible chat client and the table of known providers.

A provider entry only says where its endpoint lives and which environment
variables configure it; ``create_chat_completion_client`` turns an entry
into a ready client.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import requests

from .base import LLMClient, LLMError, LLMResponse
from ..core.primitives.messages import ChatMessage

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EndpointSettings:
    base_url: str
    api_key: str
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderSpec:
    """
    Environment contract of one OpenAI-compatible provider.

    Explicit arguments to ``settings`` beat environment variables, which beat
    the defaults recorded here. ``header_envs`` maps an HTTP header to the
    variable holding its value; unset variables add no header.
    """

    name: str
    api_key_env: str
    default_base_url: str
    base_url_env: Optional[str] = None
    organization_env: Optional[str] = None
    header_envs: Mapping[str, str] = field(default_factory=dict)

    def settings(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        organization: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> EndpointSettings:
        key = api_key or os.getenv(self.api_key_env)
        if not key:
            raise ValueError(f"No API key for provider '{self.name}'; set {self.api_key_env} or pass api_key.")

        url = base_url or (self.base_url_env and os.getenv(self.base_url_env)) or self.default_base_url

        resolved: Dict[str, str] = {}
        org = organization or (self.organization_env and os.getenv(self.organization_env))
        if org:
            resolved["OpenAI-Organization"] = org
        for header, env_var in self.header_envs.items():
            value = os.getenv(env_var)
            if value:
                resolved[header] = value
        resolved.update(headers or {})
        return EndpointSettings(base_url=url.rstrip("/"), api_key=key, headers=resolved)


class OpenAICompatibleClient(LLMClient):
    """
    Blocking client for ``POST {base_url}/chat/completions``.

    Every transport, status or decoding problem surfaces as ``LLMError``.
    Pass ``session`` to share a connection pool or to stub the transport.
    """

    def __init__(
        self,
        model: str,
        settings: EndpointSettings,
        *,
        timeout: float = 30.0,
        temperature: float = 0.2,
        max_output_tokens: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(model, temperature=temperature, max_output_tokens=max_output_tokens)
        self.settings = settings
        self.timeout = timeout
        self.headers: Dict[str, str] = {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
            **settings.headers,
        }
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.settings.base_url}/chat/completions"

    def chat(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        payload = self.build_payload(
            messages, temperature=temperature, max_output_tokens=max_output_tokens, **kwargs
        )
        LOGGER.debug("POST %s model=%s messages=%d", self.endpoint, self.model, len(payload["messages"]))
        body = self._post(payload)
        content, finish_reason = _first_choice(body)
        return LLMResponse(content=content, finish_reason=finish_reason, usage=body.get("usage"), raw=body)

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._session.post(self.endpoint, json=payload, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise LLMError(f"LLM request failed: {exc}") from exc
        if response.status_code >= 400:
            raise LLMError(f"LLM request failed ({response.status_code}): {_error_detail(response)}")
        try:
            return response.json()
        except ValueError as exc:
            raise LLMError(f"LLM response is not valid JSON: {response.text}") from exc


def _first_choice(body: Any) -> Tuple[str, Optional[str]]:
    try:
        choice = body["choices"][0]
        message = choice["message"]
    except (KeyError, IndexError, TypeError) as exc:
        raise LLMError(f"Malformed response structure: {body}") from exc
    # content is null on some tool-call and filtered completions
    return message.get("content") or "", choice.get("finish_reason")


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.text


_PROVIDERS: Dict[str, ProviderSpec] = {
    spec.name: spec
    for spec in (
        ProviderSpec("openai", "OPENAI_API_KEY", "https://api.openai.com/v1", "OPENAI_BASE_URL", "OPENAI_ORG_ID"),
        ProviderSpec("deepseek", "DEEPSEEK_API_KEY", "https://api.deepseek.com/v1", "DEEPSEEK_BASE_URL"),
        ProviderSpec(
            "qwen",
            "QWEN_API_KEY",
            "https://dashscope.aliyuncs.com/compatible-mode/v1",
            "QWEN_BASE_URL",
            header_envs={"X-DashScope-Workspace": "QWEN_WORKSPACE"},
        ),
    )
}


def register_provider(spec: ProviderSpec) -> None:
    """Add or replace a provider entry under ``spec.name``."""
    _PROVIDERS[spec.name] = spec


def list_providers() -> Sequence[str]:
    return tuple(_PROVIDERS)


def create_chat_completion_client(
    provider: str,
    model: str,
    *,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
    organization: Optional[str] = None,
    timeout: float = 30.0,
    temperature: float = 0.2,
    max_output_tokens: Optional[int] = None,
    session: Optional[requests.Session] = None,
) -> OpenAICompatibleClient:
    spec = _PROVIDERS.get(provider)
    if spec is None:
        raise ValueError(f"Unknown provider '{provider}'. Available: {', '.join(list_providers())}")
    settings = spec.settings(api_key=api_key, base_url=base_url, organization=organization, headers=headers)
    LOGGER.debug("Using provider %s at %s", provider, settings.base_url)
    return OpenAICompatibleClient(
        model,
        settings,
        timeout=timeout,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        session=session,
    )

