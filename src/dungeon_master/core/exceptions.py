"""Custom exception hierarchy for the Dungeon Master session engine.

Every exception inherits from DungeonMasterError and carries an ErrorKind
tag, so the operation surface can turn any failure into a typed result
without leaking implementation detail to the command layer.

Example:
    >>> from dungeon_master.core.exceptions import PartyFullError
    >>> raise PartyFullError("The party is already full", max_players=4)
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Tags for errors surfaced at the operation boundary."""

    UNEXPECTED = "unexpected"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    SESSION_NOT_FOUND = "session_not_found"
    SESSION_ALREADY_EXISTS = "session_already_exists"
    CHARACTER_NOT_FOUND = "character_not_found"
    DUPLICATE_CHARACTER = "duplicate_character"
    PARTY_FULL = "party_full"
    CHARACTER_CREATION_CLOSED = "character_creation_closed"
    NOT_ACTIVE = "not_active"
    PLAYER_DEAD = "player_dead"
    ALREADY_ACTED = "already_acted"
    NO_PENDING_ACTIONS = "no_pending_actions"
    FORBIDDEN = "forbidden"
    INVALID_DICE_NOTATION = "invalid_dice_notation"
    GENERATION_FAILED = "generation_failed"
    SYNTHESIS_FAILED = "synthesis_failed"
    PERSISTENCE_FAILED = "persistence_failed"


#: Kinds that are expected, user-facing outcomes rather than system faults.
USER_FACING_KINDS: frozenset[ErrorKind] = frozenset(
    {
        ErrorKind.VALIDATION,
        ErrorKind.SESSION_NOT_FOUND,
        ErrorKind.SESSION_ALREADY_EXISTS,
        ErrorKind.CHARACTER_NOT_FOUND,
        ErrorKind.DUPLICATE_CHARACTER,
        ErrorKind.PARTY_FULL,
        ErrorKind.CHARACTER_CREATION_CLOSED,
        ErrorKind.NOT_ACTIVE,
        ErrorKind.PLAYER_DEAD,
        ErrorKind.ALREADY_ACTED,
        ErrorKind.NO_PENDING_ACTIONS,
        ErrorKind.FORBIDDEN,
    }
)


class DungeonMasterError(Exception):
    """Base exception for all Dungeon Master errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
        kind: Tag used when the error crosses the operation boundary.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    @property
    def is_user_facing(self) -> bool:
        """Whether this error is an expected, recoverable outcome."""
        return self.kind in USER_FACING_KINDS

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(DungeonMasterError):
    """Raised when application configuration is invalid or missing."""

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with the offending key.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(DungeonMasterError):
    """Raised when caller-supplied data fails validation."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Session Domain Exceptions
# =============================================================================


class SessionError(DungeonMasterError):
    """Base exception for session state machine errors."""

    def __init__(
        self,
        message: str,
        *,
        session_id: str | None = None,
        user_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize session error with session and participant context.

        Args:
            message: Human-readable error description.
            session_id: Identifier the caller used to address the session.
            user_id: Participant involved in the failed operation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if session_id:
            combined_details["session_id"] = session_id
        if user_id:
            combined_details["user_id"] = user_id
        super().__init__(message, details=combined_details)


class SessionNotFoundError(SessionError):
    """Raised when no session is registered under an identifier."""

    kind = ErrorKind.SESSION_NOT_FOUND


class SessionAlreadyExistsError(SessionError):
    """Raised when a channel already hosts a session that has not ended."""

    kind = ErrorKind.SESSION_ALREADY_EXISTS


class CharacterNotFoundError(SessionError):
    """Raised when a participant has no character in the session."""

    kind = ErrorKind.CHARACTER_NOT_FOUND


class DuplicateCharacterError(SessionError):
    """Raised when a participant tries to create a second character."""

    kind = ErrorKind.DUPLICATE_CHARACTER


class PartyFullError(SessionError):
    """Raised when every party slot is already taken."""

    kind = ErrorKind.PARTY_FULL

    def __init__(
        self,
        message: str,
        *,
        max_players: int | None = None,
        session_id: str | None = None,
        user_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize party-full error with the party limit.

        Args:
            message: Human-readable error description.
            max_players: The session's party size limit.
            session_id: Identifier the caller used to address the session.
            user_id: Participant who attempted to join.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if max_players is not None:
            combined_details["max_players"] = max_players
        super().__init__(
            message, session_id=session_id, user_id=user_id, details=combined_details
        )


class InvalidSessionStateError(SessionError):
    """Raised when an operation is attempted in the wrong lifecycle state."""

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        session_id: str | None = None,
        user_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize state error with current and expected states.

        Args:
            message: Human-readable error description.
            current_state: The session's current status.
            expected_states: Statuses in which the operation is allowed.
            session_id: Identifier the caller used to address the session.
            user_id: Participant involved in the failed operation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(
            message, session_id=session_id, user_id=user_id, details=combined_details
        )


class CharacterCreationClosedError(InvalidSessionStateError):
    """Raised when a character is submitted after the party has formed."""

    kind = ErrorKind.CHARACTER_CREATION_CLOSED


class SessionNotActiveError(InvalidSessionStateError):
    """Raised when gameplay is attempted outside the active state."""

    kind = ErrorKind.NOT_ACTIVE


class PlayerDeadError(SessionError):
    """Raised when a dead character tries to act."""

    kind = ErrorKind.PLAYER_DEAD


class AlreadyActedError(SessionError):
    """Raised when a participant submits a second action in one round."""

    kind = ErrorKind.ALREADY_ACTED


class NoPendingActionsError(SessionError):
    """Raised when a round is resolved with nothing to resolve."""

    kind = ErrorKind.NO_PENDING_ACTIONS


class ForbiddenError(SessionError):
    """Raised when a non-creator attempts a creator-only action."""

    kind = ErrorKind.FORBIDDEN


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(DungeonMasterError):
    """Base exception for dice and rules processing errors."""


class InvalidDiceNotationError(GameEngineError):
    """Raised when a dice expression cannot be parsed.

    This indicates a caller or table-data bug, so it is never recovered
    from silently.
    """

    kind = ErrorKind.INVALID_DICE_NOTATION

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice notation error with the offending expression.

        Args:
            message: Human-readable error description.
            expression: The dice expression that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# AI Collaborator Exceptions
# =============================================================================


class AIControlError(DungeonMasterError):
    """Base exception for narrative and speech collaborator failures."""

    def __init__(
        self,
        message: str,
        *,
        model: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize AI control error with model context.

        Args:
            message: Human-readable error description.
            model: The model identifier that was being used.
            provider: The provider endpoint that was called.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if model:
            combined_details["model"] = model
        if provider:
            combined_details["provider"] = provider
        super().__init__(message, details=combined_details)


class GenerationFailedError(AIControlError):
    """Raised when the narrative generator cannot produce text."""

    kind = ErrorKind.GENERATION_FAILED


class SynthesisFailedError(AIControlError):
    """Raised when speech synthesis fails."""

    kind = ErrorKind.SYNTHESIS_FAILED


# =============================================================================
# Persistence Exceptions
# =============================================================================


class PersistenceFailedError(DungeonMasterError):
    """Raised when the durable session store rejects an operation."""

    kind = ErrorKind.PERSISTENCE_FAILED

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize persistence error with store context.

        Args:
            message: Human-readable error description.
            key: Store key involved in the failure.
            operation: Store operation that failed (get, put, delete, list).
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if key:
            combined_details["key"] = key
        if operation:
            combined_details["operation"] = operation
        super().__init__(message, details=combined_details)


__all__ = [
    "ErrorKind",
    "USER_FACING_KINDS",
    "DungeonMasterError",
    "ConfigurationError",
    "ValidationError",
    "SessionError",
    "SessionNotFoundError",
    "SessionAlreadyExistsError",
    "CharacterNotFoundError",
    "DuplicateCharacterError",
    "PartyFullError",
    "InvalidSessionStateError",
    "CharacterCreationClosedError",
    "SessionNotActiveError",
    "PlayerDeadError",
    "AlreadyActedError",
    "NoPendingActionsError",
    "ForbiddenError",
    "GameEngineError",
    "InvalidDiceNotationError",
    "AIControlError",
    "GenerationFailedError",
    "SynthesisFailedError",
    "PersistenceFailedError",
]
