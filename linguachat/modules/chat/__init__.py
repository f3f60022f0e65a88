"""Chat module exports."""

from .models.chat import Message, Role
from .history import ConversationHistory
from .render import ReplyToken, tokenize_reply

__all__ = [
    "Message",
    "Role",
    "ConversationHistory",
    "ReplyToken",
    "tokenize_reply",
]
