"""Pydantic V2 models for sessions and player characters."""

from __future__ import annotations

from dungeon_master.models.character import (
    AbilityScores,
    Cantrip,
    Currency,
    DeathSaves,
    InventoryItem,
    PlayerCharacter,
    Proficiencies,
    SavingThrowEntry,
    SkillEntry,
    Spell,
    SpellSlot,
    calc_modifier,
)
from dungeon_master.models.enums import (
    Ability,
    Alignment,
    CurrencyType,
    EncounterDifficulty,
    EncounterType,
    ItemRarity,
    ItemType,
    PlayerStatus,
    QuestStatus,
    RollCategory,
    SessionEndReason,
    SessionStatus,
    Skill,
)
from dungeon_master.models.session import (
    PendingAction,
    PlayerDeathEvent,
    QuestEntry,
    Session,
    SessionEndEvent,
)


__all__ = [
    # Enums
    "Ability",
    "Alignment",
    "CurrencyType",
    "EncounterDifficulty",
    "EncounterType",
    "ItemRarity",
    "ItemType",
    "PlayerStatus",
    "QuestStatus",
    "RollCategory",
    "SessionEndReason",
    "SessionStatus",
    "Skill",
    # Character
    "AbilityScores",
    "Cantrip",
    "Currency",
    "DeathSaves",
    "InventoryItem",
    "PlayerCharacter",
    "Proficiencies",
    "SavingThrowEntry",
    "SkillEntry",
    "Spell",
    "SpellSlot",
    "calc_modifier",
    # Session
    "PendingAction",
    "PlayerDeathEvent",
    "QuestEntry",
    "Session",
    "SessionEndEvent",
]
