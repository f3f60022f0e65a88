"""Provider-agnostic part of the gateway: prompt windowing, HTTP, error mapping.

Concrete providers only decide the payload shape and where the reply text
lives in the response body.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from linguachat.core.config import GatewaySettings, settings
from linguachat.core.logging import get_logger
from linguachat.modules.chat.history import ConversationHistory
from linguachat.modules.chat.models import Message, Role
from linguachat.modules.gateway.models import (
    DISPLAY_NAMES,
    GatewayError,
    GatewayErrorKind,
    LanguagePair,
    ProviderConfig,
    ProviderKind,
)

logger = get_logger(__name__)

LANGUAGE_NAMES = {
    "de": "German",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "it": "Italian",
    "pl": "Polish",
    "pt": "Portuguese",
    "sv": "Swedish",
    "uk": "Ukrainian",
}

# Cap on the response body kept on errors
_BODY_SNIPPET = 500


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code.lower(), code)


def _error_kind_for_status(status_code: int) -> GatewayErrorKind:
    if status_code in (401, 403):
        return GatewayErrorKind.AUTH
    if status_code == 429:
        return GatewayErrorKind.RATE_LIMITED
    return GatewayErrorKind.NETWORK


class ProviderGateway(ABC):
    kind: ProviderKind

    def __init__(
        self,
        *,
        client: Optional[httpx.AsyncClient] = None,
        gateway_settings: Optional[GatewaySettings] = None,
    ) -> None:
        self._client = client
        self.gateway_settings = gateway_settings or settings.gateway

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self.kind]

    @property
    @abstractmethod
    def history_window(self) -> int: ...

    @property
    def system_prompt(self) -> str:
        return self.gateway_settings.system_prompt

    # Public API ---------------------------------------------------------
    async def chat(
        self,
        history: ConversationHistory,
        new_user_text: str,
        config: ProviderConfig,
    ) -> str:
        """Send one chat turn and return the reply text.

        Raises GatewayError on transport failure, non-2xx status, or a body
        without the expected field.
        """
        messages = self.prompt_messages(history, new_user_text)
        return await self._chat(messages, config)

    async def translate(
        self, word: str, languages: LanguagePair, config: ProviderConfig
    ) -> str:
        """Translate a single word; falls back to the word itself on any failure."""
        try:
            translation = (await self._translate(word, languages, config)).strip()
        except Exception as e:
            logger.warning(
                "translation_failed word=%r kind=%s: %s",
                word,
                getattr(e, "kind", "unexpected"),
                e,
                extra={"provider": self.kind.value},
            )
            return word
        if not translation:
            logger.warning(
                "translation_failed word=%r: empty translation",
                word,
                extra={"provider": self.kind.value},
            )
            return word
        return translation

    def prompt_messages(
        self, history: ConversationHistory, new_user_text: str
    ) -> list[Message]:
        """Windowed prompt ending with the pending user message.

        The controller appends the user message before calling the gateway;
        when it is already the history tail it is not repeated.
        """
        k = max(1, self.history_window)
        last = history.last()
        if last is not None and last.role == Role.USER and last.content == new_user_text:
            return history.windowed_prompt(self.system_prompt, k)
        messages = history.windowed_prompt(self.system_prompt, k - 1)
        messages.append(Message(role=Role.USER, content=new_user_text))
        return messages

    # Provider hooks -----------------------------------------------------
    @abstractmethod
    async def _chat(self, messages: list[Message], config: ProviderConfig) -> str: ...

    @abstractmethod
    async def _translate(
        self, word: str, languages: LanguagePair, config: ProviderConfig
    ) -> str: ...

    # HTTP ---------------------------------------------------------------
    async def _post_json(self, url: str, payload: dict, config: ProviderConfig) -> Any:
        headers = {
            "Authorization": f"Bearer {config.credential.get_secret_value()}",
            "Content-Type": "application/json",
        }
        timeout = self.gateway_settings.timeout_seconds
        try:
            if self._client is not None:
                response = await self._client.post(
                    url, json=payload, headers=headers, timeout=timeout
                )
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise GatewayError(
                GatewayErrorKind.NETWORK,
                f"{self.display_name} API transport error: {e}",
            ) from e

        if not response.is_success:
            body = response.text[:_BODY_SNIPPET]
            kind = _error_kind_for_status(response.status_code)
            raise GatewayError(
                kind,
                f"{self.display_name} API Error: {response.status_code} - {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(
                GatewayErrorKind.MALFORMED_RESPONSE,
                f"{self.display_name} API returned invalid JSON",
                status_code=response.status_code,
                body=response.text[:_BODY_SNIPPET],
            ) from e

    def _malformed(self, detail: str, data: Any) -> GatewayError:
        return GatewayError(
            GatewayErrorKind.MALFORMED_RESPONSE,
            f"{self.display_name} API response {detail}",
            body=str(data)[:_BODY_SNIPPET],
        )
