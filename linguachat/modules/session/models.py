"""Session value, conversation states and the effect intents a transition emits.

Effects describe what the UI should do (render, speak, show an error); the
controller never touches a UI toolkit itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, Field

from linguachat.core.config import settings
from linguachat.modules.chat.history import ConversationHistory
from linguachat.modules.chat.models import Role
from linguachat.modules.chat.render import ReplyToken
from linguachat.modules.gateway.models import LanguagePair, ProviderConfig
from linguachat.modules.vocabulary.deck import FlashcardDeck
from linguachat.modules.vocabulary.store import VocabularyStore


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _short_id() -> str:
    # 12-char slice from uuid4
    return uuid4().hex[:12]


def _default_languages() -> LanguagePair:
    return LanguagePair(
        source=settings.gateway.source_language,
        target=settings.gateway.target_language,
    )


class SessionState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    PROCESSING = "processing"
    SPEAKING = "speaking"


class Rejection(str, Enum):
    NOT_CONFIGURED = "not_configured"
    BUSY = "busy"
    INVALID_STATE = "invalid_state"
    EMPTY_INPUT = "empty_input"


class ErrorKind(str, Enum):
    NETWORK = "network"
    AUTH = "auth"
    RATE_LIMITED = "rate_limited"
    MALFORMED_RESPONSE = "malformed_response"
    CAPTURE = "capture"
    INTERNAL = "internal"


class RenderMessage(BaseModel):
    type: Literal["render_message"] = "render_message"
    role: Role
    content: str
    tokens: list[ReplyToken] = Field(default_factory=list)


class SpeakText(BaseModel):
    type: Literal["speak_text"] = "speak_text"
    text: str
    language: Optional[str] = None


class StopSpeech(BaseModel):
    type: Literal["stop_speech"] = "stop_speech"


class ShowError(BaseModel):
    type: Literal["show_error"] = "show_error"
    kind: ErrorKind
    message: str


class ShowNotice(BaseModel):
    type: Literal["show_notice"] = "show_notice"
    level: Literal["info", "success", "warning"] = "info"
    message: str


class ClearTranscript(BaseModel):
    type: Literal["clear_transcript"] = "clear_transcript"


Effect = Annotated[
    Union[
        RenderMessage, SpeakText, StopSpeech, ShowError, ShowNotice, ClearTranscript
    ],
    Field(discriminator="type"),
]


class Transition(BaseModel):
    """Outcome of one controller operation."""

    accepted: bool
    state: SessionState
    effects: list[Effect] = Field(default_factory=list)
    rejection: Optional[Rejection] = None
    detail: Optional[str] = None


@dataclass
class Session:
    id: str = field(default_factory=_short_id)
    provider: Optional[ProviderConfig] = None
    languages: LanguagePair = field(default_factory=_default_languages)
    history: ConversationHistory = field(default_factory=ConversationHistory)
    vocabulary: VocabularyStore = field(default_factory=VocabularyStore)
    state: SessionState = SessionState.IDLE
    speech_output: bool = field(default_factory=lambda: settings.session.speech_output)
    created_at: datetime = field(default_factory=_now_utc)
    last_activity: datetime = field(default_factory=_now_utc)
    deck: FlashcardDeck = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.deck = FlashcardDeck(self.vocabulary)

    def touch(self) -> None:
        self.last_activity = _now_utc()
