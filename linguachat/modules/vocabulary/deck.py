"""Flashcard review over a VocabularyStore.

The deck holds a permutation of store indices, a cursor into it, the number
of cards answered correctly and whether the current card is flipped. Any
operation first catches up with the store if favorites were added or removed
since the last refresh.
"""

from __future__ import annotations

import random
from typing import Optional, Union

from linguachat.modules.vocabulary.models import (
    EMPTY,
    DeckMarker,
    DeckStats,
    Favorite,
    Grade,
)
from linguachat.modules.vocabulary.store import VocabularyStore

Card = Union[Favorite, DeckMarker]


class FlashcardDeck:
    def __init__(
        self, store: VocabularyStore, *, rng: Optional[random.Random] = None
    ) -> None:
        self.store = store
        self.rng = rng or random.Random()
        self.order: list[int] = []
        self.cursor = 0
        self.correct_count = 0
        self.flipped = False
        self._seen_revision: Optional[int] = None

    def refresh(self) -> None:
        if self._seen_revision != self.store.revision:
            was_empty = not self.order
            self.order = list(range(len(self.store)))
            self._seen_revision = self.store.revision
            if was_empty or self.cursor >= len(self.order):
                self.cursor = 0
        self.flipped = False

    def _sync(self) -> None:
        if self._seen_revision != self.store.revision:
            self.refresh()

    def current_card(self) -> Card:
        self._sync()
        if not self.order:
            return EMPTY
        return self.store.at(self.order[self.cursor])

    def flip(self) -> bool:
        self._sync()
        if self.order:
            self.flipped = not self.flipped
        return self.flipped

    def answer(self, grade: Grade) -> Card:
        """Score the shown card and move on to the next one."""
        self._sync()
        if not self.order:
            return EMPTY
        if Grade(grade) == Grade.CORRECT:
            self.correct_count += 1
        return self._move(1)

    def next_card(self) -> Card:
        self._sync()
        if not self.order:
            return EMPTY
        return self._move(1)

    def previous_card(self) -> Card:
        self._sync()
        if not self.order:
            return EMPTY
        return self._move(-1)

    def shuffle(self) -> None:
        self._sync()
        n = len(self.order)
        if n < 2:
            return
        # Fisher-Yates
        for i in range(n - 1, 0, -1):
            j = self.rng.randint(0, i)
            self.order[i], self.order[j] = self.order[j], self.order[i]
        self.cursor = 0
        self.flipped = False

    def reset_progress(self) -> None:
        self.correct_count = 0
        self.cursor = 0
        self.flipped = False

    def stats(self) -> DeckStats:
        self._sync()
        total = len(self.order)
        return DeckStats(
            position=self.cursor + 1 if total else 0,
            total=total,
            correct_count=self.correct_count,
            flipped=self.flipped,
        )

    def _move(self, step: int) -> Card:
        self.cursor = (self.cursor + step) % len(self.order)
        self.flipped = False
        return self.store.at(self.order[self.cursor])
