from __future__ import annotations

import argparse
import asyncio
import os
from pathlib import Path

from linguachat.core.logging import setup_logging
from linguachat.modules.chat.models import Role
from linguachat.modules.gateway import NotConfiguredError, ProviderKind
from linguachat.modules.session.controller import SessionController
from linguachat.modules.session.models import (
    ClearTranscript,
    Effect,
    RenderMessage,
    ShowError,
    ShowNotice,
    Transition,
)
from linguachat.modules.vocabulary import Favorite, Grade, favorites_to_csv

HELP = """Commands:
  /translate WORD            look up a word
  /save WORD = TRANSLATION   add a word to favorites
  /favorites [FILTER]        list favorites
  /remove ID                 remove a favorite
  /export PATH               write favorites as CSV
  /card | /flip | /next | /prev | /shuffle | /reset
  /grade correct|learning|wrong
  /clear                     clear the conversation
  /quit"""


def _show(effects: list[Effect]) -> None:
    for effect in effects:
        if isinstance(effect, RenderMessage):
            # The user's own line is already on screen
            if effect.role == Role.ASSISTANT:
                print(f"[bot] {effect.content}")
        elif isinstance(effect, ShowError):
            print(f"[error] {effect.message}")
        elif isinstance(effect, ShowNotice):
            print(f"[{effect.level}] {effect.message}")
        elif isinstance(effect, ClearTranscript):
            print("[chat cleared]")


def _show_transition(t: Transition) -> None:
    if not t.accepted:
        print(f"[rejected] {t.detail}")
    _show(t.effects)


def _show_card(controller: SessionController) -> None:
    deck = controller.session.deck
    card = deck.current_card()
    stats = deck.stats()
    if not isinstance(card, Favorite):
        print("[cards] No favorites yet")
        return
    back = card.translation if deck.flipped else "?"
    print(f"[cards] {stats.position}/{stats.total}  {card.word} -> {back}  (correct: {stats.correct_count})")


async def _command(controller: SessionController, line: str) -> bool:
    cmd, _, arg = line[1:].partition(" ")
    arg = arg.strip()
    deck = controller.session.deck
    if cmd in ("quit", "exit"):
        return False
    if cmd == "help":
        print(HELP)
    elif cmd == "translate":
        try:
            print(f"[translate] {arg} -> {await controller.translate_word(arg)}")
        except (NotConfiguredError, ValueError) as e:
            print(f"[error] {e}")
    elif cmd == "save":
        word, _, translation = arg.partition("=")
        try:
            _, effects = controller.save_favorite(word, translation)
        except ValueError as e:
            print(f"[error] {e}")
        else:
            _show(effects)
    elif cmd == "favorites":
        for fav in controller.session.vocabulary.list(arg or None):
            print(f"  {fav.id}  {fav.word} = {fav.translation}")
    elif cmd == "remove":
        controller.remove_favorite(arg)
    elif cmd == "export":
        path = Path(arg or "favorites.csv")
        path.write_text(favorites_to_csv(controller.session.vocabulary.list()), encoding="utf-8")
        print(f"[export] {path}")
    elif cmd == "card":
        _show_card(controller)
    elif cmd == "flip":
        deck.flip()
        _show_card(controller)
    elif cmd == "next":
        deck.next_card()
        _show_card(controller)
    elif cmd == "prev":
        deck.previous_card()
        _show_card(controller)
    elif cmd == "shuffle":
        deck.shuffle()
        _show_card(controller)
    elif cmd == "reset":
        deck.reset_progress()
        _show_card(controller)
    elif cmd == "grade":
        try:
            deck.answer(Grade(arg.lower()))
        except ValueError:
            print("[error] grade must be correct, learning or wrong")
        _show_card(controller)
    elif cmd == "clear":
        _show_transition(controller.clear_chat())
    else:
        print(HELP)
    return True


async def _repl(controller: SessionController) -> None:
    while True:
        try:
            line = (await asyncio.to_thread(input, "> ")).strip()
        except EOFError:
            return
        if not line:
            continue
        if line.startswith("/"):
            if not await _command(controller, line):
                return
            continue
        _show_transition(await controller.submit(line))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="linguachat", description="Language-learning chat in the terminal"
    )
    parser.add_argument(
        "--provider",
        choices=[k.value for k in ProviderKind],
        default=os.environ.get("API_PROVIDER", ProviderKind.GROQ.value),
    )
    parser.add_argument("--api-key", default=os.environ.get("API_KEY"))
    parser.add_argument("--model", help="Override the provider's chat model")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    setup_logging(args.log_level.upper())
    controller = SessionController()
    # No audio device in a terminal
    controller.session.speech_output = False

    transition = controller.configure(args.provider, args.api_key or "", args.model)
    if not transition.accepted:
        raise SystemExit(f"Cannot start: {transition.detail}")
    _show(transition.effects)
    print("Type /help for commands.")

    asyncio.run(_repl(controller))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
