from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from linguachat.core.config import settings
from linguachat.apis.deps import get_controller
from linguachat.apis.vocabulary.schemas import FavoriteRead
from linguachat.modules.session import SessionController
from linguachat.modules.vocabulary import FlashcardDeck, Favorite
from .schemas import AnswerRequest, CardResponse


router = APIRouter()

Controller = Annotated[SessionController, Depends(get_controller)]

PREFIX = f"/{settings.app.version}/sessions/{{session_id}}/flashcards"


def _card_response(deck: FlashcardDeck) -> CardResponse:
    card = deck.current_card()
    if not isinstance(card, Favorite):
        return CardResponse(empty=True, stats=deck.stats())
    return CardResponse(
        empty=False, card=FavoriteRead.from_favorite(card), stats=deck.stats()
    )


@router.get(f"{PREFIX}/current", response_model=CardResponse, tags=["flashcards"])
async def current_card(controller: Controller) -> CardResponse:
    return _card_response(controller.session.deck)


@router.post(f"{PREFIX}/flip", response_model=CardResponse, tags=["flashcards"])
async def flip_card(controller: Controller) -> CardResponse:
    deck = controller.session.deck
    deck.flip()
    return _card_response(deck)


@router.post(f"{PREFIX}/answer", response_model=CardResponse, tags=["flashcards"])
async def answer_card(req: AnswerRequest, controller: Controller) -> CardResponse:
    deck = controller.session.deck
    deck.answer(req.grade)
    return _card_response(deck)


@router.post(f"{PREFIX}/next", response_model=CardResponse, tags=["flashcards"])
async def next_card(controller: Controller) -> CardResponse:
    deck = controller.session.deck
    deck.next_card()
    return _card_response(deck)


@router.post(f"{PREFIX}/previous", response_model=CardResponse, tags=["flashcards"])
async def previous_card(controller: Controller) -> CardResponse:
    deck = controller.session.deck
    deck.previous_card()
    return _card_response(deck)


@router.post(f"{PREFIX}/shuffle", response_model=CardResponse, tags=["flashcards"])
async def shuffle_deck(controller: Controller) -> CardResponse:
    deck = controller.session.deck
    deck.shuffle()
    return _card_response(deck)


@router.post(f"{PREFIX}/reset", response_model=CardResponse, tags=["flashcards"])
async def reset_progress(controller: Controller) -> CardResponse:
    deck = controller.session.deck
    deck.reset_progress()
    return _card_response(deck)
