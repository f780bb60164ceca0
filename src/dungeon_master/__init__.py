"""Dungeon Master - round-based AI game master for voice channels.

Coordinates multiplayer tabletop sessions: which state each channel's
session is in, how the players' actions for a round are collected and
folded into one story turn, and how narrative memory is fed back into
every prompt.

- Python owns the state (sessions, character sheets, dice via d20)
- The language model only narrates
- Voice narration is best-effort

Example:
    >>> from dungeon_master import DungeonMasterService
    >>>
    >>> service = DungeonMasterService.from_settings()
    >>> await service.start("voice-1", "guild-1", "creator-1", party_size=2)
    >>> await service.add_character("voice-1", "creator-1", "alice", "Aria", "Wizard", "Elf")
    >>> await service.track_player_action("voice-1", "creator-1", "I look around the room")

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 session and character records.
    engine: Dice, character creation and action analysis.
    dm: Session state machine, story memory, generation and narration.
    storage: Snapshot codec, session stores and the repository.
"""

from __future__ import annotations

# Core
from dungeon_master.core.config import Settings, get_settings
from dungeon_master.core.exceptions import DungeonMasterError, ErrorKind
from dungeon_master.core.logging import configure_logging, get_logger

# Models
from dungeon_master.models.character import PlayerCharacter
from dungeon_master.models.session import Session

# Dungeon Master
from dungeon_master.dm.service import DungeonMasterService, OperationResult
from dungeon_master.dm.session_manager import SessionManager

# Storage
from dungeon_master.storage.repository import SessionRepository


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DungeonMasterError",
    "ErrorKind",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "PlayerCharacter",
    "Session",
    # DM
    "DungeonMasterService",
    "OperationResult",
    "SessionManager",
    # Storage
    "SessionRepository",
]
