from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from linguachat.apis.vocabulary.schemas import FavoriteRead
from linguachat.modules.vocabulary.models import DeckStats, Grade


class AnswerRequest(BaseModel):
    grade: Grade


class CardResponse(BaseModel):
    empty: bool
    card: Optional[FavoriteRead] = None
    stats: DeckStats
