"""
Navigation History

Ordered trail of visited term IDs (a path, not a set), mirrored to
session storage after every mutation. Storage problems never escape this
module: the in-memory trail stays authoritative.
"""

import json
from typing import Optional

from glossary.core.config import settings
from glossary.core.errors import PersistenceWarning
from glossary.core.logging import get_logger
from glossary.infra.session_storage import SessionStorage
from glossary.schemas.glossary import Term
from glossary.services.term_store import TermStore

logger = get_logger(__name__)


class NavigationHistory:
    def __init__(self, storage: SessionStorage, storage_key: Optional[str] = None):
        self.storage = storage
        self.storage_key = storage_key or settings.history_storage_key
        self._trail: list[str] = []

    @property
    def trail(self) -> tuple[str, ...]:
        return tuple(self._trail)

    @property
    def tail(self) -> Optional[str]:
        return self._trail[-1] if self._trail else None

    def __len__(self) -> int:
        return len(self._trail)

    async def restore(self) -> None:
        """Load the persisted trail; anything unreadable becomes an empty trail"""
        try:
            stored = await self.storage.get_item(self.storage_key)
            if not stored:
                self._trail = []
                return
            trail = json.loads(stored)
            if not isinstance(trail, list) or not all(isinstance(i, str) for i in trail):
                raise ValueError(f"expected a list of term ids, got {type(trail).__name__}")
            self._trail = trail
        except (PersistenceWarning, ValueError, RecursionError) as e:
            logger.warning(f"Failed to load navigation history: {e}")
            self._trail = []

    async def _save(self) -> None:
        try:
            await self.storage.set_item(self.storage_key, json.dumps(self._trail))
        except PersistenceWarning as e:
            logger.warning(f"Failed to save navigation history: {e}")

    async def append(self, term_id: str) -> bool:
        """Push a term ID unless it is already the tail. Returns True if pushed."""
        if self.tail == term_id:
            return False
        self._trail.append(term_id)
        await self._save()
        return True

    async def truncate_after(self, term_id: str) -> bool:
        """Drop everything after the first occurrence of term_id (kept)"""
        try:
            index = self._trail.index(term_id)
        except ValueError:
            return False
        self._trail = self._trail[: index + 1]
        await self._save()
        return True

    async def clear(self) -> None:
        self._trail = []
        await self._save()

    def to_display_list(self, store: TermStore) -> list[Term]:
        """Terms for the breadcrumb, skipping IDs that no longer resolve"""
        terms = (store.get_by_id(term_id) for term_id in self._trail)
        return [t for t in terms if t is not None]
