"""Tests for the session snapshot codec."""

from __future__ import annotations

import json

import pytest

from dungeon_master.core.exceptions import PersistenceFailedError
from dungeon_master.models.character import PlayerCharacter
from dungeon_master.models.enums import QuestStatus, SessionStatus
from dungeon_master.models.session import PendingAction, QuestEntry, Session
from dungeon_master.storage.serialization import (
    SNAPSHOT_VERSION,
    from_pairs,
    session_from_snapshot,
    session_to_snapshot,
    to_pairs,
)


@pytest.fixture
def session(sample_character: PlayerCharacter) -> Session:
    second = sample_character.model_copy(deep=True, update={"user_id": "user-0", "name": "Zed"})
    session = Session(
        voice_channel_id="voice-1",
        status=SessionStatus.ACTIVE,
        max_players=2,
        players={"user-1": sample_character, "user-0": second},
    )
    session.pending_actions["user-0"] = PendingAction(action_text="I hide", dice_summary="x")
    session.npc_interactions = {"Zara": ["hello"], "Abe": ["bye"]}
    session.quest_progress["Relic"] = QuestEntry(status=QuestStatus.FAILED, progress="lost")
    session.environmental_state = {"Keep": "burning", "Bridge": "out"}
    return session


class TestPairs:
    def test_to_pairs(self) -> None:
        assert to_pairs({"b": 1, "a": 2}) == [["b", 1], ["a", 2]]

    def test_from_pairs_accepts_dict(self) -> None:
        assert from_pairs({"a": 1}) == {"a": 1}

    @pytest.mark.parametrize("value", ["nope", [["only-key"]], [1, 2]])
    def test_from_pairs_rejects_malformed(self, value: object) -> None:
        with pytest.raises(TypeError):
            from_pairs(value)


class TestSnapshots:
    """Tests for snapshot encode and decode."""

    def test_snapshot_is_json_with_pair_lists(self, session: Session) -> None:
        snapshot = session_to_snapshot(session)

        json.dumps(snapshot)
        assert snapshot["snapshot_version"] == SNAPSHOT_VERSION
        assert [pair[0] for pair in snapshot["players"]] == ["user-1", "user-0"]
        assert isinstance(snapshot["players"][0][1]["skills"], list)

    def test_restores_order_and_types(self, session: Session) -> None:
        restored = session_from_snapshot(json.loads(json.dumps(session_to_snapshot(session))))

        assert list(restored.players) == ["user-1", "user-0"]
        assert list(restored.npc_interactions) == ["Zara", "Abe"]
        assert list(restored.environmental_state) == ["Keep", "Bridge"]
        assert list(restored.players["user-1"].skills) == list(session.players["user-1"].skills)
        assert restored.players["user-0"].name == "Zed"
        assert restored.pending_actions["user-0"].action_text == "I hide"
        assert restored.quest_progress["Relic"].status == QuestStatus.FAILED
        assert restored.status == SessionStatus.ACTIVE
        assert restored.session_id == session.session_id

    def test_snapshot_does_not_share_state(self, session: Session) -> None:
        snapshot = session_to_snapshot(session)
        restored = session_from_snapshot(snapshot)

        restored.players["user-1"].name = "Changed"

        assert session.players["user-1"].name == "Thorin"

    @pytest.mark.parametrize(
        "snapshot",
        [
            {"session_id": "s-1"},
            {"session_id": "s-1", "voice_channel_id": "v", "players": "bad"},
            {"session_id": "s-1", "voice_channel_id": "v", "status": "paused"},
        ],
    )
    def test_malformed_snapshot(self, snapshot: dict) -> None:
        with pytest.raises(PersistenceFailedError) as exc_info:
            session_from_snapshot(snapshot)

        assert exc_info.value.details["operation"] == "decode"
        assert exc_info.value.details["key"] == "s-1"
