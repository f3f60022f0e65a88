"""Pydantic models for saved words and flashcard review."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


class Favorite(BaseModel):
    """A saved word/translation pair."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    word: str
    translation: str
    context: Optional[str] = None
    added_at: datetime = Field(default_factory=_now_utc)


class RejectReason(str, Enum):
    DUPLICATE_WORD = "duplicate_word"


class Rejected(BaseModel):
    reason: RejectReason
    word: str


class Grade(str, Enum):
    CORRECT = "correct"
    LEARNING = "learning"
    WRONG = "wrong"


class DeckMarker(str, Enum):
    EMPTY = "empty"


EMPTY = DeckMarker.EMPTY


class DeckStats(BaseModel):
    position: int = Field(..., description="1-based index of the shown card, 0 when empty")
    total: int
    correct_count: int
    flipped: bool
