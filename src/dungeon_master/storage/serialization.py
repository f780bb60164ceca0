"""Session snapshot codec.

A snapshot is plain JSON-compatible data. Every mapping on the session and on
each character is written as an ordered list of ``[key, value]`` pairs so
insertion order survives any store or format without ordered-map support.
Snapshots are validated back into the typed models on load.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dungeon_master.core.exceptions import PersistenceFailedError
from dungeon_master.models.session import Session


SNAPSHOT_VERSION = 1

SESSION_MAP_FIELDS = (
    "players",
    "pending_actions",
    "player_actions",
    "npc_interactions",
    "quest_progress",
    "environmental_state",
)
CHARACTER_MAP_FIELDS = ("skills", "saving_throws")


def to_pairs(mapping: dict[str, Any]) -> list[list[Any]]:
    return [[key, value] for key, value in mapping.items()]


def from_pairs(value: Any) -> dict[str, Any]:
    """Rebuild a mapping from pairs; plain dicts are accepted as-is."""
    if isinstance(value, dict):
        return dict(value)
    if not isinstance(value, list):
        raise TypeError(f"expected a list of pairs, got {type(value).__name__}")
    mapping: dict[str, Any] = {}
    for pair in value:
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise TypeError(f"malformed pair: {pair!r}")
        key, item = pair
        mapping[str(key)] = item
    return mapping


def session_to_snapshot(session: Session) -> dict[str, Any]:
    """Serialize a session into a pair-list snapshot."""
    data = session.model_dump(mode="json")
    for character in data["players"].values():
        for field_name in CHARACTER_MAP_FIELDS:
            character[field_name] = to_pairs(character[field_name])
    for field_name in SESSION_MAP_FIELDS:
        data[field_name] = to_pairs(data[field_name])
    data["snapshot_version"] = SNAPSHOT_VERSION
    return data


def session_from_snapshot(snapshot: dict[str, Any]) -> Session:
    """Deserialize and validate a snapshot.

    Raises:
        PersistenceFailedError: If the snapshot is malformed.
    """
    session_id = snapshot.get("session_id") if isinstance(snapshot, dict) else None
    try:
        data = dict(snapshot)
        data.pop("snapshot_version", None)
        for field_name in SESSION_MAP_FIELDS:
            if field_name in data:
                data[field_name] = from_pairs(data[field_name])
        players = data.get("players", {})
        for user_id, character in players.items():
            character = dict(character)
            for field_name in CHARACTER_MAP_FIELDS:
                if field_name in character:
                    character[field_name] = from_pairs(character[field_name])
            players[user_id] = character
        return Session.model_validate(data)
    except (TypeError, ValueError, PydanticValidationError) as exc:
        raise PersistenceFailedError(
            f"Malformed session snapshot: {exc}",
            key=session_id,
            operation="decode",
        ) from exc


__all__ = [
    "SNAPSHOT_VERSION",
    "SESSION_MAP_FIELDS",
    "CHARACTER_MAP_FIELDS",
    "to_pairs",
    "from_pairs",
    "session_to_snapshot",
    "session_from_snapshot",
]
