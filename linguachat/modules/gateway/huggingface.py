"""Hugging Face Inference API provider.

Chat goes to a text-generation model with the history flattened into a plain
prompt; translation goes to a dedicated opus-mt model.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from linguachat.core.config import GatewaySettings, HuggingFaceSettings, settings
from linguachat.modules.chat.models import Message, Role
from linguachat.modules.gateway.base import ProviderGateway
from linguachat.modules.gateway.models import (
    LanguagePair,
    ProviderConfig,
    ProviderKind,
)

SPEAKER_LABELS = {
    Role.USER: "User",
    Role.ASSISTANT: "Assistant",
}


def format_prompt(messages: list[Message]) -> str:
    """Flatten ``[system, *turns]`` into a completion prompt ending in ``Assistant:``."""
    parts: list[str] = []
    turns = messages
    if messages and messages[0].role == Role.SYSTEM:
        parts.append(f"{messages[0].content}\n\n")
        turns = messages[1:]
    for msg in turns:
        label = SPEAKER_LABELS.get(msg.role)
        if label is None:
            continue
        parts.append(f"{label}: {msg.content}\n")
    parts.append(f"{SPEAKER_LABELS[Role.ASSISTANT]}:")
    return "".join(parts)


class HuggingFaceGateway(ProviderGateway):
    kind = ProviderKind.HUGGINGFACE

    def __init__(
        self,
        profile: Optional[HuggingFaceSettings] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        gateway_settings: Optional[GatewaySettings] = None,
    ) -> None:
        super().__init__(client=client, gateway_settings=gateway_settings)
        self.profile = profile or settings.huggingface

    @property
    def history_window(self) -> int:
        return self.profile.history_window

    def model_url(self, model: str) -> str:
        return f"{self.profile.base_url.rstrip('/')}/{model}"

    async def _chat(self, messages: list[Message], config: ProviderConfig) -> str:
        prompt = format_prompt(messages)
        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": self.profile.max_new_tokens,
                "temperature": self.profile.temperature,
                "return_full_text": False,
            },
        }
        url = self.model_url(config.model or self.profile.chat_model)
        data = await self._post_json(url, payload, config)
        text = self._first_field(data, "generated_text")
        # Some models echo the prompt despite return_full_text=False
        reply = text.replace(prompt, "").strip()
        if not reply:
            raise self._malformed("has an empty generated_text", data)
        return reply

    async def _translate(
        self, word: str, languages: LanguagePair, config: ProviderConfig
    ) -> str:
        model = self.profile.translation_model.format(
            source=languages.source, target=languages.target
        )
        data = await self._post_json(self.model_url(model), {"inputs": word}, config)
        return self._first_field(data, "translation_text")

    def _first_field(self, data: Any, field: str) -> str:
        if isinstance(data, dict) and data.get("error"):
            raise self._malformed(f"reported an error: {data['error']}", data)
        try:
            value = data[0][field]
        except (KeyError, IndexError, TypeError):
            raise self._malformed(f"has no [0].{field}", data)
        if not isinstance(value, str):
            raise self._malformed(f"has a non-text [0].{field}", data)
        return value
