"""Durable session stores.

A SessionStore keeps session snapshots under string keys with a sliding
expiration: every read and every write pushes the expiry out again. Two
implementations are provided:

- InMemorySessionStore: process-local, for tests and single-process runs
- RedisSessionStore: Redis-backed, JSON values under ``dnd_session:<key>``
"""

from __future__ import annotations

import json
import time
from typing import Any, Protocol, runtime_checkable

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from dungeon_master.core.config import RedisSettings, get_settings
from dungeon_master.core.exceptions import PersistenceFailedError
from dungeon_master.core.logging import get_logger


logger = get_logger(__name__)

Snapshot = dict[str, Any]


@runtime_checkable
class SessionStore(Protocol):
    """Key-value store for session snapshots."""

    async def get(self, key: str) -> Snapshot | None:
        """Fetch a snapshot and refresh its expiry; None when absent."""
        ...

    async def put(self, key: str, snapshot: Snapshot, ttl: int) -> None:
        ...

    async def touch(self, key: str, ttl: int) -> None:
        """Push a stored snapshot's expiry out; a missing key is ignored."""
        ...

    async def delete(self, key: str) -> None:
        ...

    async def list_all(self) -> list[Snapshot]:
        ...


# =============================================================================
# In-Memory Store
# =============================================================================


class InMemorySessionStore:
    """Process-local store with sliding expiration.

    Snapshots are held as JSON text so callers never share mutable state
    with the store.
    """

    def __init__(self, *, default_ttl: int = 3600) -> None:
        self.default_ttl = default_ttl
        self._entries: dict[str, tuple[float, int, str]] = {}

    def _live(self, key: str) -> tuple[float, int, str] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[0] <= time.monotonic():
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> Snapshot | None:
        entry = self._live(key)
        if entry is None:
            return None
        _, ttl, payload = entry
        self._entries[key] = (time.monotonic() + ttl, ttl, payload)
        return json.loads(payload)

    async def put(self, key: str, snapshot: Snapshot, ttl: int | None = None) -> None:
        ttl = ttl or self.default_ttl
        self._entries[key] = (time.monotonic() + ttl, ttl, json.dumps(snapshot))

    async def touch(self, key: str, ttl: int | None = None) -> None:
        entry = self._live(key)
        if entry is not None:
            ttl = ttl or entry[1]
            self._entries[key] = (time.monotonic() + ttl, ttl, entry[2])

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def list_all(self) -> list[Snapshot]:
        snapshots = []
        for key in list(self._entries):
            entry = self._live(key)
            if entry is not None:
                snapshots.append(json.loads(entry[2]))
        return snapshots

    def __len__(self) -> int:
        return sum(1 for key in list(self._entries) if self._live(key) is not None)


# =============================================================================
# Redis Store
# =============================================================================


_transient_retry = retry(
    retry=retry_if_exception_type((RedisConnectionError, RedisTimeoutError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    reraise=True,
)


class RedisSessionStore:
    """Redis-backed store.

    Transient connection errors are retried three times with exponential
    backoff; anything still failing surfaces as PersistenceFailedError.

    Example:
        >>> store = RedisSessionStore.from_settings()
        >>> await store.put("123456789", snapshot, ttl=3600)
    """

    def __init__(
        self,
        client: Redis,
        *,
        key_prefix: str = "dnd_session:",
        default_ttl: int = 3600,
    ) -> None:
        self.client = client
        self.key_prefix = key_prefix
        self.default_ttl = default_ttl

    @classmethod
    def from_settings(cls, settings: RedisSettings | None = None) -> RedisSessionStore:
        """Build a store from Redis settings."""
        settings = settings or get_settings().redis
        password = settings.password.get_secret_value() if settings.password else None
        client = Redis(
            host=settings.host,
            port=settings.port,
            password=password,
            db=settings.db,
            decode_responses=True,
        )
        logger.info(
            "Redis session store configured",
            host=settings.host,
            port=settings.port,
            db=settings.db,
        )
        return cls(
            client,
            key_prefix=settings.key_prefix,
            default_ttl=settings.session_ttl_seconds,
        )

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    @_transient_retry
    async def _get(self, redis_key: str) -> str | None:
        raw = await self.client.get(redis_key)
        if raw is not None:
            await self.client.expire(redis_key, self.default_ttl)
        return raw

    @_transient_retry
    async def _set(self, redis_key: str, payload: str, ttl: int) -> None:
        await self.client.set(redis_key, payload, ex=ttl)

    @_transient_retry
    async def _expire(self, redis_key: str, ttl: int) -> None:
        await self.client.expire(redis_key, ttl)

    @_transient_retry
    async def _delete(self, redis_key: str) -> None:
        await self.client.delete(redis_key)

    @_transient_retry
    async def _scan(self) -> list[str]:
        return [key async for key in self.client.scan_iter(match=f"{self.key_prefix}*")]

    async def get(self, key: str) -> Snapshot | None:
        redis_key = self._key(key)
        try:
            raw = await self._get(redis_key)
        except RedisError as exc:
            raise PersistenceFailedError(
                f"Failed to read session: {exc}", key=redis_key, operation="get"
            ) from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceFailedError(
                f"Stored session is not valid JSON: {exc}", key=redis_key, operation="get"
            ) from exc

    async def put(self, key: str, snapshot: Snapshot, ttl: int | None = None) -> None:
        redis_key = self._key(key)
        try:
            await self._set(redis_key, json.dumps(snapshot), ttl or self.default_ttl)
        except RedisError as exc:
            raise PersistenceFailedError(
                f"Failed to write session: {exc}", key=redis_key, operation="put"
            ) from exc

    async def touch(self, key: str, ttl: int | None = None) -> None:
        redis_key = self._key(key)
        try:
            await self._expire(redis_key, ttl or self.default_ttl)
        except RedisError as exc:
            raise PersistenceFailedError(
                f"Failed to refresh session expiry: {exc}", key=redis_key, operation="touch"
            ) from exc

    async def delete(self, key: str) -> None:
        redis_key = self._key(key)
        try:
            await self._delete(redis_key)
        except RedisError as exc:
            raise PersistenceFailedError(
                f"Failed to delete session: {exc}", key=redis_key, operation="delete"
            ) from exc

    async def list_all(self) -> list[Snapshot]:
        """Load every stored snapshot, skipping entries that fail to decode."""
        try:
            keys = await self._scan()
        except RedisError as exc:
            raise PersistenceFailedError(
                f"Failed to list sessions: {exc}", operation="list"
            ) from exc

        snapshots: list[Snapshot] = []
        for redis_key in keys:
            key = redis_key[len(self.key_prefix):]
            try:
                snapshot = await self.get(key)
            except PersistenceFailedError as exc:
                logger.warning("Skipping unreadable session", key=redis_key, error=str(exc))
                continue
            if snapshot is not None:
                snapshots.append(snapshot)
        return snapshots

    async def close(self) -> None:
        await self.client.aclose()


__all__ = [
    "Snapshot",
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
]
