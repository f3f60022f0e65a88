"""Session module exports."""

from .models import (
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
from .controller import SessionController
from .manager import SessionManager, session_manager

__all__ = [
    "ClearTranscript",
    "Effect",
    "ErrorKind",
    "Rejection",
    "RenderMessage",
    "Session",
    "SessionState",
    "ShowError",
    "ShowNotice",
    "SpeakText",
    "StopSpeech",
    "Transition",
    "SessionController",
    "SessionManager",
    "session_manager",
]
