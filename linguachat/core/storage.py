"""Session-scoped key/value storage port.

The controller writes ``favorites``, ``api_key`` and ``api_provider`` here so
that a client (browser localStorage, a file, a cache) can keep them for the
lifetime of a session. Only the in-memory implementation ships with the app.
"""

from __future__ import annotations

from typing import Optional, Protocol

FAVORITES_KEY = "favorites"
API_KEY_KEY = "api_key"
API_PROVIDER_KEY = "api_provider"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store; lives as long as the session that owns it."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)
