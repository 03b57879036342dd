"""
Session storage

Key/value string storage scoped to one browsing session, the server-side
counterpart of a browser's sessionStorage. Backends raise
PersistenceWarning on any failure; callers decide how to degrade.
"""

import asyncio
import time
from typing import Dict, Optional, Protocol, Tuple

from redis.asyncio import Redis
from redis.exceptions import RedisError

from glossary.core.errors import PersistenceWarning


class SessionStorage(Protocol):
    async def get_item(self, key: str) -> Optional[str]: ...

    async def set_item(self, key: str, value: str) -> None: ...


class StorageBackend(Protocol):
    def for_session(self, session_id: str) -> SessionStorage: ...

    async def ping(self) -> bool: ...

    def sweep_expired(self) -> int: ...


class MemorySessionStorage:
    """Dict-backed storage; entries expire after `ttl` seconds of inactivity"""

    def __init__(self, data: Dict[str, Tuple[str, float]], session_id: str, ttl: Optional[float] = None):
        self._data = data
        self.session_id = session_id
        self.ttl = ttl

    def _key(self, key: str) -> str:
        return f"{key}:{self.session_id}"

    async def get_item(self, key: str) -> Optional[str]:
        entry = self._data.get(self._key(key))
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at and expires_at < time.monotonic():
            del self._data[self._key(key)]
            return None
        return value

    async def set_item(self, key: str, value: str) -> None:
        expires_at = time.monotonic() + self.ttl if self.ttl else 0.0
        self._data[self._key(key)] = (value, expires_at)


class MemoryStorageBackend:
    def __init__(self, ttl: Optional[float] = None):
        self.ttl = ttl
        self._data: Dict[str, Tuple[str, float]] = {}

    def __len__(self) -> int:
        return len(self._data)

    def for_session(self, session_id: str) -> MemorySessionStorage:
        return MemorySessionStorage(self._data, session_id, self.ttl)

    async def ping(self) -> bool:
        return True

    def sweep_expired(self) -> int:
        """Delete expired entries of every session. Returns how many were removed."""
        now = time.monotonic()
        expired = [k for k, (_, expires_at) in self._data.items() if expires_at and expires_at < now]
        for k in expired:
            del self._data[k]
        return len(expired)


class RedisSessionStorage:
    """Redis-backed storage; every write refreshes the session TTL"""

    def __init__(self, redis: Redis, session_id: str, ttl: int):
        self.redis = redis
        self.session_id = session_id
        self.ttl = ttl

    def _key(self, key: str) -> str:
        return f"{key}:{self.session_id}"

    async def get_item(self, key: str) -> Optional[str]:
        try:
            return await self.redis.get(self._key(key))
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            raise PersistenceWarning(f"Failed to read {key}: {e}") from e

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self.redis.set(self._key(key), value, ex=self.ttl)
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            raise PersistenceWarning(f"Failed to write {key}: {e}") from e


class RedisStorageBackend:
    def __init__(self, redis: Redis, ttl: int):
        self.redis = redis
        self.ttl = ttl

    def for_session(self, session_id: str) -> RedisSessionStorage:
        return RedisSessionStorage(self.redis, session_id, self.ttl)

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except (RedisError, OSError, asyncio.TimeoutError):
            return False

    def sweep_expired(self) -> int:
        # Redis expires keys itself
        return 0
