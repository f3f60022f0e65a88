"""Splits assistant replies into clickable words and plain separators.

The UI renders each ``word`` token as a control that triggers a translation
lookup; ``text`` tokens are shown verbatim.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel

# Unicode letters only: digits, underscores and punctuation are not clickable
WORD_RE = re.compile(r"[^\W\d_]+")


class ReplyToken(BaseModel):
    kind: Literal["word", "text"]
    value: str


def tokenize_reply(text: str) -> list[ReplyToken]:
    tokens: list[ReplyToken] = []
    pos = 0
    for m in WORD_RE.finditer(text):
        if m.start() > pos:
            tokens.append(ReplyToken(kind="text", value=text[pos : m.start()]))
        tokens.append(ReplyToken(kind="word", value=m.group(0)))
        pos = m.end()
    if pos < len(text):
        tokens.append(ReplyToken(kind="text", value=text[pos:]))
    return tokens


def clickable_words(text: str) -> list[str]:
    return [t.value for t in tokenize_reply(text) if t.kind == "word"]
