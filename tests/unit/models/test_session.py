"""Tests for the session model."""

from __future__ import annotations

import re

import pytest

from dungeon_master.core.exceptions import InvalidSessionStateError
from dungeon_master.models.character import PlayerCharacter
from dungeon_master.models.enums import SessionEndReason, SessionStatus
from dungeon_master.models.session import PendingAction, Session, generate_session_id


@pytest.fixture
def session(sample_character: PlayerCharacter) -> Session:
    second = sample_character.model_copy(
        deep=True, update={"user_id": "user-2", "name": "Lyra"}
    )
    return Session(
        voice_channel_id="voice-1",
        creator_id="user-1",
        max_players=2,
        party_size=2,
        players={"user-1": sample_character, "user-2": second},
    )


class TestSessionId:
    def test_format(self) -> None:
        assert re.fullmatch(r"session_\d+_[0-9a-f]{8}", generate_session_id())

    def test_unique(self) -> None:
        assert generate_session_id() != generate_session_id()


class TestLifecycle:
    """Tests for forward-only status transitions."""

    def test_defaults(self) -> None:
        session = Session(voice_channel_id="voice-1")

        assert session.status == SessionStatus.CHARACTER_CREATION
        assert session.canonical_key == "voice-1"
        assert session.session_round == 0
        assert not session.is_ended

    def test_forward_transitions(self) -> None:
        session = Session(voice_channel_id="voice-1")

        session.transition_to(SessionStatus.ACTIVE)
        session.transition_to(SessionStatus.ENDED)

        assert session.is_ended
        assert session.end_reason == SessionEndReason.SESSION_ENDED

    def test_creation_can_end_directly(self) -> None:
        session = Session(voice_channel_id="voice-1")

        session.transition_to(SessionStatus.ENDED, reason=SessionEndReason.DM_ENDED)

        assert session.end_reason == SessionEndReason.DM_ENDED

    @pytest.mark.parametrize(
        ("start", "target"),
        [
            (SessionStatus.ACTIVE, SessionStatus.CHARACTER_CREATION),
            (SessionStatus.ACTIVE, SessionStatus.ACTIVE),
            (SessionStatus.ENDED, SessionStatus.ACTIVE),
        ],
    )
    def test_backward_transitions_rejected(
        self, start: SessionStatus, target: SessionStatus
    ) -> None:
        session = Session(voice_channel_id="voice-1", status=start)

        with pytest.raises(InvalidSessionStateError) as exc_info:
            session.transition_to(target)

        assert exc_info.value.details["current_state"] == start.value

    def test_is_full(self, session: Session) -> None:
        assert session.is_full


class TestPartyViews:
    """Tests for alive/dead/waiting views."""

    def test_waiting_on_everyone_initially(self, session: Session) -> None:
        assert [pc.name for pc in session.waiting_on()] == ["Thorin", "Lyra"]
        assert not session.all_alive_acted()

    def test_waiting_shrinks_as_actions_arrive(self, session: Session) -> None:
        session.pending_actions["user-1"] = PendingAction(action_text="I look around")

        assert [pc.name for pc in session.waiting_on()] == ["Lyra"]
        assert not session.all_alive_acted()

    def test_dead_players_are_not_waited_on(self, session: Session) -> None:
        session.players["user-2"].mark_dead()
        session.pending_actions["user-1"] = PendingAction(action_text="I look around")

        assert [pc.name for pc in session.dead_players()] == ["Lyra"]
        assert session.waiting_on() == []
        assert session.all_alive_acted()

    def test_all_dead_never_all_acted(self, session: Session) -> None:
        for pc in session.players.values():
            pc.mark_dead()

        assert session.alive_players() == []
        assert not session.all_alive_acted()

    def test_pending_action_requires_text(self) -> None:
        with pytest.raises(ValueError):
            PendingAction(action_text="")
