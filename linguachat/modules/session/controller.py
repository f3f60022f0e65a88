"""Conversation state machine for one learner session.

States: idle -> recording -> processing -> speaking -> idle. Typed input may
go straight from idle (or recording) to processing. At most one turn is in
flight: capture and submission are rejected, never queued, while a reply is
being fetched or spoken. An in-flight gateway call is not cancellable; ``stop``
only ends capture or playback.

Every operation returns a ``Transition`` carrying the new state and the effect
intents for the UI. Gateway failures never escape: they become a single
``ShowError`` effect and a return to idle.
"""

from __future__ import annotations

import asyncio
import json
from typing import Callable, Optional, Union

from pydantic import SecretStr

from linguachat.core.config import settings
from linguachat.core.logging import get_logger
from linguachat.core.storage import (
    API_KEY_KEY,
    API_PROVIDER_KEY,
    FAVORITES_KEY,
    KeyValueStore,
    MemoryStore,
)
from linguachat.modules.chat.models import Message, Role
from linguachat.modules.chat.render import tokenize_reply
from linguachat.modules.gateway import (
    GatewayError,
    GatewayErrorKind,
    NotConfiguredError,
    ProviderConfig,
    ProviderGateway,
    ProviderKind,
    gateway_for,
    validate_credential,
)
from linguachat.modules.gateway.models import DISPLAY_NAMES
from linguachat.modules.session.models import (
    ClearTranscript,
    Effect,
    ErrorKind,
    Rejection,
    RenderMessage,
    Session,
    SessionState,
    ShowError,
    ShowNotice,
    SpeakText,
    StopSpeech,
    Transition,
)
from linguachat.modules.vocabulary.models import Favorite, Rejected

logger = get_logger(__name__)

GatewayFactory = Callable[[ProviderKind], ProviderGateway]

BUSY_STATES = (SessionState.PROCESSING, SessionState.SPEAKING)

GATEWAY_ERROR_TEXT = {
    GatewayErrorKind.NETWORK: "Could not reach the provider API. Check your connection and try again.",
    GatewayErrorKind.AUTH: "The provider rejected the API key. Check the key and try again.",
    GatewayErrorKind.RATE_LIMITED: "Too many requests to the provider. Wait a moment and try again.",
    GatewayErrorKind.MALFORMED_RESPONSE: "The provider returned an unexpected response. Try again.",
}


class SessionController:
    def __init__(
        self,
        session: Optional[Session] = None,
        *,
        storage: Optional[KeyValueStore] = None,
        gateway_factory: GatewayFactory = gateway_for,
    ) -> None:
        self.session = session or Session()
        self.storage = storage if storage is not None else MemoryStore()
        self._gateway_factory = gateway_factory
        self._gateway: Optional[ProviderGateway] = None
        self._restore()

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def is_configured(self) -> bool:
        return self.session.provider is not None and self._gateway is not None

    # Provider -----------------------------------------------------------
    def configure(
        self,
        kind: Union[ProviderKind, str],
        credential: str,
        model: Optional[str] = None,
    ) -> Transition:
        if self.state == SessionState.PROCESSING:
            return self._reject(Rejection.BUSY, "A reply is still being fetched")
        try:
            kind = ProviderKind(kind)
            key = validate_credential(kind, credential)
        except ValueError:
            return self._reject(Rejection.NOT_CONFIGURED, f"Unsupported provider: {kind}")
        except NotConfiguredError as e:
            return self._reject(Rejection.NOT_CONFIGURED, str(e))

        self._apply_provider(ProviderConfig(kind=kind, credential=SecretStr(key), model=model))
        self.storage.set(API_KEY_KEY, key)
        self.storage.set(API_PROVIDER_KEY, kind.value)
        logger.info("Provider configured", extra=self._log_extra())

        effects: list[Effect] = []
        greeting = settings.session.greeting
        if greeting:
            text = greeting.format(provider=DISPLAY_NAMES[kind])
            effects.append(
                RenderMessage(role=Role.ASSISTANT, content=text, tokens=tokenize_reply(text))
            )
        return self._accept(effects)

    def _apply_provider(self, config: ProviderConfig) -> None:
        self._gateway = self._gateway_factory(config.kind)
        self.session.provider = config

    # Capture ------------------------------------------------------------
    def start_capture(self) -> Transition:
        if self.state in BUSY_STATES:
            return self._reject(Rejection.BUSY, "Wait for the current reply to finish")
        if not self.is_configured:
            return self._reject(Rejection.NOT_CONFIGURED, "Configure an API provider first")
        if self.state != SessionState.IDLE:
            return self._reject(Rejection.INVALID_STATE, "Already recording")
        self._to(SessionState.RECORDING)
        return self._accept()

    def stop(self) -> Transition:
        """Stop capture or playback. A pending gateway call keeps running."""
        if self.state == SessionState.PROCESSING:
            return self._reject(
                Rejection.BUSY, "The request in progress cannot be cancelled"
            )
        if self.state == SessionState.SPEAKING:
            self._to(SessionState.IDLE)
            return self._accept([StopSpeech()])
        if self.state == SessionState.RECORDING:
            self._to(SessionState.IDLE)
        return self._accept()

    def capture_failed(self, message: str) -> Transition:
        if self.state != SessionState.RECORDING:
            return self._reject(Rejection.INVALID_STATE, "Not recording")
        logger.warning("Capture failed: %s", message, extra=self._log_extra())
        self._to(SessionState.IDLE)
        text = f"Speech recognition failed: {message}" if message else "Speech recognition failed"
        return self._accept([ShowError(kind=ErrorKind.CAPTURE, message=text)])

    async def transcribed(self, text: str) -> Transition:
        """A finished transcription; behaves like a submission from recording."""
        if self.state in BUSY_STATES:
            return self._reject(Rejection.BUSY, "Wait for the current reply to finish")
        if self.state != SessionState.RECORDING:
            return self._reject(Rejection.INVALID_STATE, "Not recording")
        if not (text or "").strip():
            return self.capture_failed("no speech was recognized")
        return await self.submit(text)

    # Turns --------------------------------------------------------------
    async def submit(self, text: str) -> Transition:
        if self.state in BUSY_STATES:
            return self._reject(Rejection.BUSY, "Wait for the current reply to finish")
        gateway, config = self._gateway, self.session.provider
        if gateway is None or config is None:
            return self._reject(Rejection.NOT_CONFIGURED, "Configure an API provider first")
        text = (text or "").strip()
        if not text:
            return self._reject(Rejection.EMPTY_INPUT, "Message is empty")
        return await self._run_turn(text, gateway, config)

    async def _run_turn(
        self, text: str, gateway: ProviderGateway, config: ProviderConfig
    ) -> Transition:
        # State flips before the first await so a concurrent submit sees it
        self._to(SessionState.PROCESSING)
        self.session.history.append(Message(role=Role.USER, content=text))
        effects: list[Effect] = [RenderMessage(role=Role.USER, content=text)]

        try:
            reply = await gateway.chat(self.session.history, text, config)
        except GatewayError as e:
            logger.warning(
                "Chat request failed kind=%s status=%s: %s",
                e.kind.value,
                e.status_code,
                e,
                extra=self._log_extra(),
            )
            effects.append(
                ShowError(kind=ErrorKind(e.kind.value), message=GATEWAY_ERROR_TEXT[e.kind])
            )
            self._to(SessionState.IDLE)
            return self._accept(effects)
        except asyncio.CancelledError:
            self._to(SessionState.IDLE)
            raise
        except Exception:
            logger.exception("Unexpected chat failure", extra=self._log_extra())
            effects.append(
                ShowError(kind=ErrorKind.INTERNAL, message="Something went wrong. Try again.")
            )
            self._to(SessionState.IDLE)
            return self._accept(effects)

        self.session.history.append(Message(role=Role.ASSISTANT, content=reply))
        effects.append(
            RenderMessage(role=Role.ASSISTANT, content=reply, tokens=tokenize_reply(reply))
        )
        self._to(SessionState.SPEAKING)
        if self.session.speech_output:
            effects.append(SpeakText(text=reply, language=self.session.languages.target))
        else:
            # No playback device: speaking ends immediately
            self._to(SessionState.IDLE)
        return self._accept(effects)

    def playback_finished(self) -> Transition:
        if self.state == SessionState.SPEAKING:
            self._to(SessionState.IDLE)
            return self._accept()
        if self.state == SessionState.IDLE:
            return self._accept()
        return self._reject(Rejection.INVALID_STATE, "Nothing is being played")

    def clear_chat(self) -> Transition:
        if self.state == SessionState.PROCESSING:
            return self._reject(Rejection.BUSY, "A reply is still being fetched")
        self.session.history.clear()
        return self._accept([ClearTranscript()])

    # Vocabulary ---------------------------------------------------------
    async def translate_word(self, word: str) -> str:
        word = (word or "").strip()
        if not word:
            raise ValueError("Word cannot be empty.")
        gateway, config = self._gateway, self.session.provider
        if gateway is None or config is None:
            raise NotConfiguredError("Configure an API provider first")
        return await gateway.translate(word, self.session.languages, config)

    def save_favorite(
        self, word: str, translation: str, context: Optional[str] = None
    ) -> tuple[Union[Favorite, Rejected], list[Effect]]:
        result = self.session.vocabulary.add(word, translation, context)
        if isinstance(result, Rejected):
            logger.info("Duplicate favorite %r", result.word, extra=self._log_extra())
            return result, [
                ShowNotice(level="warning", message=f'"{result.word}" is already in favorites')
            ]
        self._vocabulary_changed()
        return result, [
            ShowNotice(level="success", message=f'Added "{result.word}" to favorites!')
        ]

    def remove_favorite(self, fav_id: str) -> bool:
        removed = self.session.vocabulary.remove(fav_id)
        if removed:
            self._vocabulary_changed()
        return removed

    def clear_favorites(self) -> None:
        self.session.vocabulary.clear()
        self._vocabulary_changed()

    def _vocabulary_changed(self) -> None:
        self.session.deck.refresh()
        self.storage.set(
            FAVORITES_KEY,
            json.dumps(self.session.vocabulary.dump(), ensure_ascii=False),
        )

    # Internals ----------------------------------------------------------
    def _restore(self) -> None:
        raw = self.storage.get(FAVORITES_KEY)
        if raw:
            try:
                self.session.vocabulary.load(json.loads(raw))
            except (ValueError, TypeError) as e:
                logger.warning("Ignoring stored favorites: %s", e, extra=self._log_extra())
        kind = self.storage.get(API_PROVIDER_KEY)
        key = self.storage.get(API_KEY_KEY)
        if kind and key and self.session.provider is None:
            try:
                kind = ProviderKind(kind)
                key = validate_credential(kind, key)
            except (ValueError, NotConfiguredError) as e:
                logger.warning("Ignoring stored provider: %s", e, extra=self._log_extra())
            else:
                self._apply_provider(ProviderConfig(kind=kind, credential=SecretStr(key)))
        elif self.session.provider is not None:
            self._apply_provider(self.session.provider)

    def _to(self, state: SessionState) -> None:
        if state != self.session.state:
            logger.debug(
                "%s -> %s", self.session.state.value, state.value, extra=self._log_extra()
            )
        self.session.state = state
        self.session.touch()

    def _accept(self, effects: Optional[list[Effect]] = None) -> Transition:
        return Transition(accepted=True, state=self.state, effects=effects or [])

    def _reject(self, rejection: Rejection, detail: str) -> Transition:
        logger.info("Rejected (%s): %s", rejection.value, detail, extra=self._log_extra())
        return Transition(
            accepted=False, state=self.state, rejection=rejection, detail=detail
        )

    def _log_extra(self) -> dict:
        provider = self.session.provider
        return {
            "session_id": self.session.id,
            "provider": provider.kind.value if provider else "-",
            "state": self.session.state.value,
        }
