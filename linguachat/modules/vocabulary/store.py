from __future__ import annotations

from typing import Iterable, Optional, Union

from pydantic import ValidationError

from linguachat.core.logging import get_logger
from linguachat.modules.vocabulary.models import (
    Favorite,
    Rejected,
    RejectReason,
)

logger = get_logger(__name__)


def _key(word: str) -> str:
    return word.strip().casefold()


class VocabularyStore:
    """Saved words, unique by case-insensitive ``word``, in insertion order.

    ``revision`` is bumped on every membership change so that views (the
    flashcard deck) can tell when they are stale.
    """

    def __init__(self) -> None:
        self._items: list[Favorite] = []
        self.revision = 0

    def add(
        self, word: str, translation: str, context: Optional[str] = None
    ) -> Union[Favorite, Rejected]:
        word = (word or "").strip()
        translation = (translation or "").strip()
        if not word:
            raise ValueError("Word cannot be empty.")
        if not translation:
            raise ValueError("Translation cannot be empty.")
        if self.find(word) is not None:
            return Rejected(reason=RejectReason.DUPLICATE_WORD, word=word)
        fav = Favorite(word=word, translation=translation, context=context or None)
        self._items.append(fav)
        self.revision += 1
        return fav

    def remove(self, fav_id: str) -> bool:
        for idx, fav in enumerate(self._items):
            if fav.id == fav_id:
                del self._items[idx]
                self.revision += 1
                return True
        return False

    def list(self, filter_substring: Optional[str] = None) -> list[Favorite]:
        needle = (filter_substring or "").strip().casefold()
        if not needle:
            return list(self._items)
        return [
            f
            for f in self._items
            if needle in f.word.casefold() or needle in f.translation.casefold()
        ]

    def clear(self) -> None:
        if self._items:
            self._items = []
            self.revision += 1

    def get(self, fav_id: str) -> Optional[Favorite]:
        return next((f for f in self._items if f.id == fav_id), None)

    def find(self, word: str) -> Optional[Favorite]:
        key = _key(word)
        return next((f for f in self._items if _key(f.word) == key), None)

    def at(self, index: int) -> Favorite:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    # Storage ------------------------------------------------------------
    def dump(self) -> list[dict]:
        return [f.model_dump(mode="json") for f in self._items]

    def load(self, items: Iterable[dict]) -> int:
        """Replace contents with previously dumped favorites; returns count kept."""
        loaded: list[Favorite] = []
        seen: set[str] = set()
        for raw in items:
            try:
                fav = Favorite.model_validate(raw)
            except ValidationError as e:
                logger.warning("Skipping unreadable favorite: %s", e)
                continue
            key = _key(fav.word)
            if not key or key in seen:
                continue
            seen.add(key)
            loaded.append(fav)
        self._items = loaded
        self.revision += 1
        return len(loaded)
