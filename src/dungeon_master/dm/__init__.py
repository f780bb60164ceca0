"""Dungeon Master module.

This module runs the game around the language model:
- Session lifecycle and round resolution (SessionManager)
- Story memory and prompt assembly
- Narrative generation and voice narration ports with OpenAI adapters
- The tagged-result operation surface (DungeonMasterService)

Dice, character sheets and session state are owned by Python; the model
only ever narrates.
"""

from __future__ import annotations

from .generator import NarrativeGenerator, OpenAINarrativeGenerator
from .languages import SUPPORTED_LANGUAGES, Language, get_language
from .memory import StoryMemory
from .narration import Narrator, OpenAISpeechSynthesizer, SpeechSynthesizer, VoiceStyle
from .service import DungeonMasterService, OperationResult
from .session_manager import (
    ActionTracked,
    CharacterAdded,
    DeathOutcome,
    RoundResolved,
    SessionManager,
    SessionStarted,
    SessionStatusReport,
)

__all__ = [
    "NarrativeGenerator",
    "OpenAINarrativeGenerator",
    "SUPPORTED_LANGUAGES",
    "Language",
    "get_language",
    "StoryMemory",
    "Narrator",
    "OpenAISpeechSynthesizer",
    "SpeechSynthesizer",
    "VoiceStyle",
    "DungeonMasterService",
    "OperationResult",
    "ActionTracked",
    "CharacterAdded",
    "DeathOutcome",
    "RoundResolved",
    "SessionManager",
    "SessionStarted",
    "SessionStatusReport",
]
