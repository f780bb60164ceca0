"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DungeonMasterError: Base exception for all application errors.
        ErrorKind: Tag carried by every exception class.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from dungeon_master.core.config import (
    AIProviderSettings,
    GameSettings,
    RedisSettings,
    Settings,
    SpeechSettings,
    clear_settings_cache,
    get_settings,
)
from dungeon_master.core.exceptions import (
    USER_FACING_KINDS,
    AIControlError,
    AlreadyActedError,
    CharacterCreationClosedError,
    CharacterNotFoundError,
    ConfigurationError,
    DuplicateCharacterError,
    DungeonMasterError,
    ErrorKind,
    ForbiddenError,
    GameEngineError,
    GenerationFailedError,
    InvalidDiceNotationError,
    InvalidSessionStateError,
    NoPendingActionsError,
    PartyFullError,
    PersistenceFailedError,
    PlayerDeadError,
    SessionAlreadyExistsError,
    SessionError,
    SessionNotActiveError,
    SessionNotFoundError,
    SynthesisFailedError,
    ValidationError,
)
from dungeon_master.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)


__all__ = [
    # Configuration
    "AIProviderSettings",
    "GameSettings",
    "RedisSettings",
    "Settings",
    "SpeechSettings",
    "clear_settings_cache",
    "get_settings",
    # Exceptions
    "USER_FACING_KINDS",
    "AIControlError",
    "AlreadyActedError",
    "CharacterCreationClosedError",
    "CharacterNotFoundError",
    "ConfigurationError",
    "DuplicateCharacterError",
    "DungeonMasterError",
    "ErrorKind",
    "ForbiddenError",
    "GameEngineError",
    "GenerationFailedError",
    "InvalidDiceNotationError",
    "InvalidSessionStateError",
    "NoPendingActionsError",
    "PartyFullError",
    "PersistenceFailedError",
    "PlayerDeadError",
    "SessionAlreadyExistsError",
    "SessionError",
    "SessionNotActiveError",
    "SessionNotFoundError",
    "SynthesisFailedError",
    "ValidationError",
    # Logging
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
