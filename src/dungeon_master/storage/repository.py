"""Session repository.

Sessions live in an in-memory cache keyed by their canonical key (the voice
channel id) and are written through to a durable SessionStore. A session can
be addressed by either its session id or its channel id; the repository keeps
an alias index from session id to channel id so both resolve to the same
cached object. After a restart the index is empty, so the first lookup that
misses the cache warms it from the durable store.

Cached sessions follow the same sliding expiry as the store: a cache hit
refreshes the stored entry's TTL, and entries idle for longer than the TTL
are evicted.

Durable writes are best-effort: a failed write is logged and the in-memory
session stays authoritative.
"""

from __future__ import annotations

import time

from redis.exceptions import RedisError

from dungeon_master.core.exceptions import PersistenceFailedError
from dungeon_master.core.logging import get_logger
from dungeon_master.models.session import Session
from dungeon_master.storage.serialization import session_from_snapshot, session_to_snapshot
from dungeon_master.storage.store import InMemorySessionStore, SessionStore


logger = get_logger(__name__)


class SessionRepository:
    """Cache plus durable store for sessions.

    Example:
        >>> repository = SessionRepository(RedisSessionStore.from_settings())
        >>> await repository.save(session)
        >>> same = await repository.get(session.session_id)
    """

    def __init__(self, store: SessionStore | None = None, *, ttl: int = 3600) -> None:
        """Initialize the repository.

        Args:
            store: Durable store; an in-memory store when omitted.
            ttl: Expiry in seconds applied on every durable write.
        """
        self.store = store if store is not None else InMemorySessionStore(default_ttl=ttl)
        self.ttl = ttl
        self._sessions: dict[str, Session] = {}
        self._aliases: dict[str, str] = {}
        self._last_access: dict[str, float] = {}
        self._warmed = False

    def _remember(self, session: Session) -> Session:
        key = session.canonical_key
        self._sessions[key] = session
        self._aliases[session.session_id] = key
        self._last_access[key] = time.monotonic()
        return session

    def _forget(self, key: str) -> Session | None:
        session = self._sessions.pop(key, None)
        self._last_access.pop(key, None)
        if session is not None:
            self._aliases.pop(session.session_id, None)
        return session

    def evict_expired(self) -> int:
        """Drop cached sessions idle for longer than the TTL.

        Returns:
            Number of sessions evicted.
        """
        cutoff = time.monotonic() - self.ttl
        stale = [key for key, seen in self._last_access.items() if seen <= cutoff]
        for key in stale:
            self._forget(key)
        if stale:
            logger.debug("Evicted idle sessions", count=len(stale))
        return len(stale)

    def resolve_key(self, identifier: str) -> str:
        """Map a session id or channel id to the canonical key."""
        return self._aliases.get(identifier, identifier)

    def cached(self, identifier: str) -> Session | None:
        self.evict_expired()
        return self._sessions.get(self.resolve_key(identifier))

    async def _refresh(self, key: str) -> None:
        self._last_access[key] = time.monotonic()
        try:
            await self.store.touch(key, self.ttl)
        except (PersistenceFailedError, RedisError) as exc:
            logger.warning("Failed to refresh session expiry", key=key, error=str(exc))

    async def get(self, identifier: str) -> Session | None:
        """Find a session by session id or channel id.

        Looks in the cache first, then the durable store. A stored snapshot
        that cannot be read is logged and treated as absent.
        """
        session = self.cached(identifier)
        if session is not None:
            await self._refresh(session.canonical_key)
            return session

        if not self._warmed:
            await self.load_all()
            session = self.cached(identifier)
            if session is not None:
                return session

        key = self.resolve_key(identifier)
        try:
            snapshot = await self.store.get(key)
            if snapshot is None:
                return None
            session = session_from_snapshot(snapshot)
        except PersistenceFailedError as exc:
            logger.warning("Failed to load session", key=key, error=str(exc))
            return None

        logger.debug("Session loaded from store", key=key, session_id=session.session_id)
        return self._remember(session)

    async def save(self, session: Session) -> Session:
        """Cache the session and write it through to the durable store."""
        self._remember(session)
        key = session.canonical_key
        try:
            await self.store.put(key, session_to_snapshot(session), self.ttl)
        except (PersistenceFailedError, RedisError) as exc:
            logger.warning(
                "Failed to persist session",
                key=key,
                session_id=session.session_id,
                error=str(exc),
            )
        return session

    async def delete(self, identifier: str) -> None:
        """Forget a session in the cache and the durable store."""
        key = self.resolve_key(identifier)
        self._forget(key)
        self._aliases.pop(identifier, None)
        try:
            await self.store.delete(key)
        except (PersistenceFailedError, RedisError) as exc:
            logger.warning("Failed to delete stored session", key=key, error=str(exc))

    def list_sessions(self) -> list[Session]:
        self.evict_expired()
        return list(self._sessions.values())

    async def load_all(self) -> int:
        """Warm the cache from the durable store.

        Returns:
            Number of sessions loaded.
        """
        try:
            snapshots = await self.store.list_all()
        except (PersistenceFailedError, RedisError) as exc:
            logger.error("Failed to load stored sessions", error=str(exc))
            return 0
        self._warmed = True

        loaded = 0
        for snapshot in snapshots:
            try:
                session = session_from_snapshot(snapshot)
            except PersistenceFailedError as exc:
                logger.warning("Skipping malformed session snapshot", error=str(exc))
                continue
            if session.is_ended or session.canonical_key in self._sessions:
                continue
            self._remember(session)
            loaded += 1

        logger.info("Sessions loaded from store", count=loaded)
        return loaded


__all__ = ["SessionRepository"]
