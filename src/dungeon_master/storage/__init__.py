"""Session persistence: snapshot codec, durable stores and the repository."""

from dungeon_master.storage.repository import SessionRepository
from dungeon_master.storage.serialization import (
    SNAPSHOT_VERSION,
    from_pairs,
    session_from_snapshot,
    session_to_snapshot,
    to_pairs,
)
from dungeon_master.storage.store import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionStore,
)


__all__ = [
    "SessionRepository",
    "SNAPSHOT_VERSION",
    "from_pairs",
    "to_pairs",
    "session_from_snapshot",
    "session_to_snapshot",
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
]
