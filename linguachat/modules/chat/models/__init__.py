from .chat import Message, Role

__all__ = [
    "Message",
    "Role",
]
