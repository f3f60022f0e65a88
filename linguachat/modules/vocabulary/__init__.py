"""Vocabulary module exports."""

from .models import (
    EMPTY,
    DeckMarker,
    DeckStats,
    Favorite,
    Grade,
    Rejected,
    RejectReason,
)
from .store import VocabularyStore
from .deck import FlashcardDeck
from .export import favorites_to_csv

__all__ = [
    "EMPTY",
    "DeckMarker",
    "DeckStats",
    "Favorite",
    "Grade",
    "Rejected",
    "RejectReason",
    "VocabularyStore",
    "FlashcardDeck",
    "favorites_to_csv",
]
