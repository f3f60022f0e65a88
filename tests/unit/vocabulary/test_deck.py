import random
from collections import Counter

from linguachat.modules.vocabulary import (
    EMPTY,
    Favorite,
    FlashcardDeck,
    Grade,
    VocabularyStore,
)


def _deck(words: list[str], seed: int = 1) -> tuple[VocabularyStore, FlashcardDeck]:
    store = VocabularyStore()
    for w in words:
        store.add(w, f"{w}-t")
    deck = FlashcardDeck(store, rng=random.Random(seed))
    deck.refresh()
    return store, deck


def test_empty_store_then_add_shows_card():
    store = VocabularyStore()
    deck = FlashcardDeck(store)

    assert deck.current_card() is EMPTY

    store.add("casa", "house")
    deck.refresh()
    card = deck.current_card()

    assert isinstance(card, Favorite)
    assert card.word == "casa"


def test_flip_toggles_and_is_noop_when_empty():
    store = VocabularyStore()
    deck = FlashcardDeck(store)

    assert deck.flip() is False

    store.add("casa", "house")
    assert deck.flip() is True
    assert deck.flip() is False


def test_answer_advances_cursor_and_counts_correct():
    _, deck = _deck(["a", "b", "c"])
    grades = [Grade.CORRECT, Grade.WRONG, Grade.LEARNING, Grade.CORRECT, Grade.CORRECT,
              Grade.WRONG, Grade.CORRECT]

    for grade in grades:
        deck.flip()
        deck.answer(grade)
        assert deck.flipped is False

    assert deck.cursor == len(grades) % 3
    assert deck.correct_count == grades.count(Grade.CORRECT)


def test_answer_on_empty_deck_returns_empty():
    store = VocabularyStore()
    deck = FlashcardDeck(store)

    assert deck.answer(Grade.CORRECT) is EMPTY
    assert deck.correct_count == 0


def test_shuffle_is_a_permutation_and_resets_cursor():
    _, deck = _deck([f"w{i}" for i in range(8)])
    deck.answer(Grade.CORRECT)
    before = list(deck.order)

    deck.shuffle()

    assert sorted(deck.order) == sorted(before)
    assert deck.cursor == 0
    assert deck.flipped is False


def test_shuffle_is_near_uniform():
    _, deck = _deck(["a", "b", "c", "d"], seed=42)
    trials = 4000
    positions = Counter()

    for _ in range(trials):
        deck.order = [0, 1, 2, 3]
        deck.shuffle()
        positions[deck.order.index(0)] += 1

    expected = trials / 4
    for pos in range(4):
        assert abs(positions[pos] - expected) < expected * 0.15


def test_shuffle_noop_for_single_card():
    _, deck = _deck(["solo"])
    deck.flip()

    deck.shuffle()

    assert deck.order == [0]
    assert deck.flipped is True


def test_reset_progress_keeps_order_and_store():
    store, deck = _deck(["a", "b", "c"])
    deck.shuffle()
    deck.answer(Grade.CORRECT)
    order = list(deck.order)

    deck.reset_progress()

    assert deck.correct_count == 0
    assert deck.cursor == 0
    assert deck.flipped is False
    assert deck.order == order
    assert len(store) == 3


def test_removing_cards_keeps_cursor_in_range():
    store, deck = _deck(["a", "b", "c"])
    deck.next_card()
    deck.next_card()
    last = deck.current_card()

    store.remove(last.id)
    card = deck.current_card()

    assert deck.cursor == 0
    assert card.word == "a"


def test_deck_becomes_empty_then_nonempty_resets_cursor():
    store, deck = _deck(["a", "b"])
    deck.next_card()

    store.clear()
    assert deck.current_card() is EMPTY

    store.add("z", "zz")
    assert deck.current_card().word == "z"
    assert deck.cursor == 0


def test_previous_and_next_wrap_around():
    _, deck = _deck(["a", "b", "c"])

    assert deck.previous_card().word == "c"
    assert deck.next_card().word == "a"
    assert deck.stats().position == 1
    assert deck.stats().total == 3
