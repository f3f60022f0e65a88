"""OpenAI-compatible ``/chat/completions`` providers (Groq, OpenAI)."""

from __future__ import annotations

from typing import Any, Optional, Union

import httpx

from linguachat.core.config import (
    GatewaySettings,
    GroqSettings,
    OpenAISettings,
    settings,
)
from linguachat.modules.chat.models import Message, Role
from linguachat.modules.gateway.base import ProviderGateway, language_name
from linguachat.modules.gateway.models import (
    LanguagePair,
    ProviderConfig,
    ProviderKind,
)

ChatProfile = Union[GroqSettings, OpenAISettings]


class ChatCompletionsGateway(ProviderGateway):
    """Chat and translation both go through the chat-completions endpoint."""

    def __init__(
        self,
        profile: ChatProfile,
        *,
        client: Optional[httpx.AsyncClient] = None,
        gateway_settings: Optional[GatewaySettings] = None,
    ) -> None:
        super().__init__(client=client, gateway_settings=gateway_settings)
        self.profile = profile

    @property
    def history_window(self) -> int:
        return self.profile.history_window

    @property
    def url(self) -> str:
        return f"{self.profile.base_url.rstrip('/')}/chat/completions"

    def _payload(
        self,
        messages: list[Message],
        config: ProviderConfig,
        *,
        max_tokens: int,
        temperature: float,
    ) -> dict:
        return {
            "model": config.model or self.profile.chat_model,
            "messages": [m.as_wire() for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    async def _chat(self, messages: list[Message], config: ProviderConfig) -> str:
        payload = self._payload(
            messages,
            config,
            max_tokens=self.profile.max_tokens,
            temperature=self.profile.temperature,
        )
        data = await self._post_json(self.url, payload, config)
        return self._first_choice(data)

    async def _translate(
        self, word: str, languages: LanguagePair, config: ProviderConfig
    ) -> str:
        instruction = self.gateway_settings.translation_prompt.format(
            source=language_name(languages.source),
            target=language_name(languages.target),
        )
        messages = [
            Message(role=Role.SYSTEM, content=instruction),
            Message(role=Role.USER, content=f"Translate the word: {word}"),
        ]
        payload = self._payload(
            messages,
            config,
            max_tokens=self.profile.translate_max_tokens,
            temperature=self.profile.translate_temperature,
        )
        data = await self._post_json(self.url, payload, config)
        return self._first_choice(data)

    def _first_choice(self, data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise self._malformed("has no choices[0].message.content", data)
        if not isinstance(content, str) or not content.strip():
            raise self._malformed("has an empty completion", data)
        return content.strip()


class GroqGateway(ChatCompletionsGateway):
    kind = ProviderKind.GROQ

    def __init__(
        self,
        profile: Optional[GroqSettings] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        gateway_settings: Optional[GatewaySettings] = None,
    ) -> None:
        super().__init__(
            profile or settings.groq, client=client, gateway_settings=gateway_settings
        )


class OpenAIGateway(ChatCompletionsGateway):
    kind = ProviderKind.OPENAI

    def __init__(
        self,
        profile: Optional[OpenAISettings] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        gateway_settings: Optional[GatewaySettings] = None,
    ) -> None:
        super().__init__(
            profile or settings.openai, client=client, gateway_settings=gateway_settings
        )
