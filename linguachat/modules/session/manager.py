"""In-memory registry of live sessions with an idle sweeper.

Sessions are kept in-process only; a session ends when it has been idle for
longer than the configured timeout or when the process exits.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

from linguachat.core.config import settings
from linguachat.core.logging import get_logger
from linguachat.core.storage import MemoryStore
from linguachat.modules.session.controller import GatewayFactory, SessionController
from linguachat.modules.gateway import gateway_for
from linguachat.modules.session.models import Session, SessionState

logger = get_logger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class SessionManager:
    def __init__(self, *, gateway_factory: GatewayFactory = gateway_for) -> None:
        self.sessions: dict[str, SessionController] = {}
        self.gateway_factory = gateway_factory
        self._cleanup_task: Optional[asyncio.Task] = None
        self._idle_seconds: int = settings.session.idle_seconds
        self._sweep_interval: int = settings.session.sweep_interval

    # Session lifecycle --------------------------------------------------
    def create(
        self,
        *,
        speech_output: Optional[bool] = None,
        storage: Optional[MemoryStore] = None,
    ) -> SessionController:
        session = Session()
        if speech_output is not None:
            session.speech_output = speech_output
        controller = SessionController(
            session,
            storage=storage or MemoryStore(),
            gateway_factory=self.gateway_factory,
        )
        self.sessions[session.id] = controller
        logger.info("Session created", extra={"session_id": session.id})
        return controller

    def get(self, session_id: str) -> Optional[SessionController]:
        controller = self.sessions.get(session_id)
        if controller:
            controller.session.touch()
        return controller

    def discard(self, session_id: str) -> bool:
        removed = self.sessions.pop(session_id, None) is not None
        if removed:
            logger.info("Session discarded", extra={"session_id": session_id})
        return removed

    # Cleanup loop -------------------------------------------------------
    def start(
        self, *, idle_seconds: Optional[int] = None, sweep_interval: Optional[int] = None
    ) -> None:
        if idle_seconds is not None:
            self._idle_seconds = max(60, int(idle_seconds))
        if sweep_interval is not None:
            self._sweep_interval = max(5, int(sweep_interval))
        if self._cleanup_task and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop(self) -> None:
        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
        self._cleanup_task = None

    def sweep(self, now: Optional[datetime] = None) -> list[str]:
        """Drop sessions idle for longer than the timeout; returns their ids."""
        now = now or _now_utc()
        expired = [
            sid
            for sid, controller in self.sessions.items()
            if controller.state != SessionState.PROCESSING
            and (now - controller.session.last_activity).total_seconds()
            > self._idle_seconds
        ]
        for sid in expired:
            self.sessions.pop(sid, None)
        if expired:
            logger.info("Swept %d idle sessions", len(expired))
        return expired

    async def _cleanup_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._sweep_interval)
                self.sweep()
        except asyncio.CancelledError:
            return


# Singleton manager used by the API layer
session_manager = SessionManager()
