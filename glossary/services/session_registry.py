"""
Session Registry

In-memory browsing sessions keyed by session ID, with a sliding TTL.
A session that expired (or was never seen) is rebuilt on next access with
its history restored from session storage.
"""

import time
from dataclasses import dataclass
from typing import Optional

from glossary.core.config import settings
from glossary.core.logging import get_logger
from glossary.infra.session_storage import StorageBackend
from glossary.services.navigation_controller import (
    GlossarySession,
    NavigationController,
)
from glossary.services.navigation_history import NavigationHistory
from glossary.services.presentation import SessionPresenter
from glossary.services.term_store import TermStore
from glossary.ws.manager import ConnectionManager

logger = get_logger(__name__)


@dataclass
class SessionEntry:
    controller: NavigationController
    expires_at: float


class SessionRegistry:
    def __init__(
        self,
        store: TermStore,
        backend: StorageBackend,
        manager: Optional[ConnectionManager] = None,
        ttl_seconds: Optional[float] = None,
    ):
        self.store = store
        self.backend = backend
        self.manager = manager
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.session_ttl_seconds
        self._items: dict[str, SessionEntry] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._items

    async def _create(self, session_id: str) -> NavigationController:
        history = NavigationHistory(self.backend.for_session(session_id))
        await history.restore()
        session = GlossarySession(
            session_id=session_id,
            store=self.store,
            history=history,
            presenter=SessionPresenter(session_id, self.manager),
        )
        logger.info(f"Started session {session_id} with {len(history)} history entries")
        return NavigationController(session)

    async def get(self, session_id: str) -> NavigationController:
        now = time.time()
        entry = self._items.get(session_id)
        if entry is not None:
            if entry.expires_at > now:
                entry.expires_at = now + self.ttl_seconds
                return entry.controller
            self.drop(session_id)

        controller = await self._create(session_id)
        # Another request may have created the session while we awaited storage
        entry = self._items.setdefault(
            session_id, SessionEntry(controller, now + self.ttl_seconds)
        )
        if entry.controller is not controller:
            controller.close()
        return entry.controller

    def drop(self, session_id: str) -> bool:
        entry = self._items.pop(session_id, None)
        if entry is None:
            return False
        entry.controller.close()
        return True

    def sweep_expired(self) -> int:
        """Delete expired sessions. Returns how many were removed."""
        now = time.time()
        expired = [k for k, v in self._items.items() if v.expires_at <= now]
        for k in expired:
            self.drop(k)
        return len(expired)

    def close(self) -> None:
        for session_id in list(self._items):
            self.drop(session_id)
