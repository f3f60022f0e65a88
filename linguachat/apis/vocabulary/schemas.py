from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from linguachat.modules.session.models import Effect
from linguachat.modules.vocabulary.models import Favorite


class FavoriteCreate(BaseModel):
    word: str = Field(..., min_length=1)
    translation: str = Field(..., min_length=1)
    context: Optional[str] = None


class FavoriteRead(BaseModel):
    id: str
    word: str
    translation: str
    context: Optional[str] = None
    added_at: str

    @classmethod
    def from_favorite(cls, fav: Favorite) -> "FavoriteRead":
        return cls(
            id=fav.id,
            word=fav.word,
            translation=fav.translation,
            context=fav.context,
            added_at=fav.added_at.isoformat().replace("+00:00", "Z"),
        )


class FavoriteCreated(BaseModel):
    favorite: FavoriteRead
    effects: list[Effect] = Field(default_factory=list)


class FavoriteList(BaseModel):
    items: list[FavoriteRead] = Field(default_factory=list)
    total: int = 0
