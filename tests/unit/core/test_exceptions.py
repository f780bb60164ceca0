"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from dungeon_master.core.exceptions import (
    USER_FACING_KINDS,
    AlreadyActedError,
    CharacterCreationClosedError,
    DungeonMasterError,
    ErrorKind,
    GenerationFailedError,
    InvalidDiceNotationError,
    InvalidSessionStateError,
    PartyFullError,
    PersistenceFailedError,
    SessionError,
    SessionNotActiveError,
    ValidationError,
)


class TestDungeonMasterError:
    """Tests for the base exception."""

    def test_message_without_details(self) -> None:
        error = DungeonMasterError("Something broke")

        assert str(error) == "Something broke"
        assert error.kind == ErrorKind.UNEXPECTED
        assert error.is_user_facing is False

    def test_message_with_details(self) -> None:
        """Test details are rendered after the message."""
        error = DungeonMasterError("Something broke", details={"key": "value"})

        assert str(error) == "Something broke [key='value']"

    def test_repr(self) -> None:
        error = DungeonMasterError("Oops", details={"a": 1})

        assert repr(error) == "DungeonMasterError(message='Oops', details={'a': 1})"


class TestErrorKinds:
    """Tests for error tagging."""

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (ValidationError("bad"), ErrorKind.VALIDATION),
            (AlreadyActedError("again"), ErrorKind.ALREADY_ACTED),
            (PartyFullError("full"), ErrorKind.PARTY_FULL),
            (CharacterCreationClosedError("closed"), ErrorKind.CHARACTER_CREATION_CLOSED),
            (SessionNotActiveError("inactive"), ErrorKind.NOT_ACTIVE),
            (InvalidDiceNotationError("1dx"), ErrorKind.INVALID_DICE_NOTATION),
            (GenerationFailedError("down"), ErrorKind.GENERATION_FAILED),
            (PersistenceFailedError("lost"), ErrorKind.PERSISTENCE_FAILED),
        ],
    )
    def test_kind(self, error: DungeonMasterError, kind: ErrorKind) -> None:
        assert error.kind == kind

    def test_user_facing_split(self) -> None:
        """Test validation outcomes are user-facing and faults are not."""
        assert AlreadyActedError("again").is_user_facing
        assert ValidationError("bad").is_user_facing
        assert not GenerationFailedError("down").is_user_facing
        assert not PersistenceFailedError("lost").is_user_facing
        assert ErrorKind.INVALID_DICE_NOTATION not in USER_FACING_KINDS


class TestSessionErrors:
    """Tests for session error context."""

    def test_session_context(self) -> None:
        error = SessionError("nope", session_id="vc-1", user_id="u-1")

        assert error.details == {"session_id": "vc-1", "user_id": "u-1"}

    def test_party_full_context(self) -> None:
        error = PartyFullError("full", max_players=4, session_id="vc-1")

        assert error.details["max_players"] == 4
        assert isinstance(error, SessionError)

    def test_state_error_context(self) -> None:
        error = InvalidSessionStateError(
            "wrong state",
            current_state="ended",
            expected_states=["active"],
        )

        assert error.details["current_state"] == "ended"
        assert error.details["expected_states"] == ["active"]

    def test_not_active_is_state_error(self) -> None:
        assert issubclass(SessionNotActiveError, InvalidSessionStateError)


class TestPersistenceFailedError:
    def test_store_context(self) -> None:
        error = PersistenceFailedError("write failed", key="dnd_session:1", operation="put")

        assert error.details == {"key": "dnd_session:1", "operation": "put"}
