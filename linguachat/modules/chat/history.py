"""Ordered log of the messages exchanged in a session."""

from __future__ import annotations

from typing import Iterator

from linguachat.modules.chat.models import Message, Role


class ConversationHistory:
    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def windowed_prompt(self, system_prompt: str, k: int) -> list[Message]:
        """Return ``[system] + last k messages`` as a fresh list.

        The history itself is never touched; callers may mutate the result.
        """
        system = Message(role=Role.SYSTEM, content=system_prompt)
        if k <= 0:
            return [system]
        return [system, *self._messages[-k:]]

    def clear(self) -> None:
        self._messages = []

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))
