from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from linguachat.modules.chat.models import Message
from linguachat.modules.gateway.models import LanguagePair, ProviderKind
from linguachat.modules.session.models import SessionState


class CreateSessionRequest(BaseModel):
    speech_output: Optional[bool] = Field(
        default=None, description="Whether the client can play replies aloud"
    )


class SessionStateRead(BaseModel):
    id: str
    state: SessionState
    configured: bool
    provider: Optional[ProviderKind] = None
    model: Optional[str] = None
    speech_output: bool
    languages: LanguagePair
    history: list[Message] = Field(default_factory=list)
    created_at: str


class ConfigureProviderRequest(BaseModel):
    kind: ProviderKind
    api_key: str = Field(..., description="Provider credential")
    model: Optional[str] = None


class SubmitRequest(BaseModel):
    text: str


class CaptureErrorRequest(BaseModel):
    message: str = ""


class TranslateRequest(BaseModel):
    word: str


class TranslateResponse(BaseModel):
    word: str
    translation: str
