"""Enumeration types for the Dungeon Master session engine.

Closed vocabularies for abilities, skills, session and player status, and
the tags used by the action analyzer. All are StrEnums so that persisted
snapshots hold plain strings.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The six core abilities, in the order scores are assigned."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability (e.g., 'Strength')."""
        return self.value.capitalize()

    @property
    def abbreviation(self) -> str:
        """Get the three-letter abbreviation (e.g., 'STR')."""
        return self.name


class Skill(StrEnum):
    """The eighteen skills and their governing abilities."""

    ATHLETICS = "athletics"
    ACROBATICS = "acrobatics"
    SLEIGHT_OF_HAND = "sleight_of_hand"
    STEALTH = "stealth"
    ARCANA = "arcana"
    HISTORY = "history"
    INVESTIGATION = "investigation"
    NATURE = "nature"
    RELIGION = "religion"
    ANIMAL_HANDLING = "animal_handling"
    INSIGHT = "insight"
    MEDICINE = "medicine"
    PERCEPTION = "perception"
    SURVIVAL = "survival"
    DECEPTION = "deception"
    INTIMIDATION = "intimidation"
    PERFORMANCE = "performance"
    PERSUASION = "persuasion"

    @property
    def ability(self) -> Ability:
        """Get the ability used for checks with this skill.

        Returns:
            The Ability enum value associated with this skill.
        """
        skill_abilities: dict[Skill, Ability] = {
            Skill.ATHLETICS: Ability.STR,
            Skill.ACROBATICS: Ability.DEX,
            Skill.SLEIGHT_OF_HAND: Ability.DEX,
            Skill.STEALTH: Ability.DEX,
            Skill.ARCANA: Ability.INT,
            Skill.HISTORY: Ability.INT,
            Skill.INVESTIGATION: Ability.INT,
            Skill.NATURE: Ability.INT,
            Skill.RELIGION: Ability.INT,
            Skill.ANIMAL_HANDLING: Ability.WIS,
            Skill.INSIGHT: Ability.WIS,
            Skill.MEDICINE: Ability.WIS,
            Skill.PERCEPTION: Ability.WIS,
            Skill.SURVIVAL: Ability.WIS,
            Skill.DECEPTION: Ability.CHA,
            Skill.INTIMIDATION: Ability.CHA,
            Skill.PERFORMANCE: Ability.CHA,
            Skill.PERSUASION: Ability.CHA,
        }
        return skill_abilities[self]

    @property
    def display_name(self) -> str:
        """Get the human-readable skill name (e.g., 'Sleight Of Hand')."""
        return self.value.replace("_", " ").title()


class Alignment(StrEnum):
    """The nine character alignments. Assigned at random and purely cosmetic."""

    LAWFUL_GOOD = "Lawful Good"
    NEUTRAL_GOOD = "Neutral Good"
    CHAOTIC_GOOD = "Chaotic Good"
    LAWFUL_NEUTRAL = "Lawful Neutral"
    TRUE_NEUTRAL = "True Neutral"
    CHAOTIC_NEUTRAL = "Chaotic Neutral"
    LAWFUL_EVIL = "Lawful Evil"
    NEUTRAL_EVIL = "Neutral Evil"
    CHAOTIC_EVIL = "Chaotic Evil"


class SessionStatus(StrEnum):
    """Session lifecycle. Transitions only move forward."""

    CHARACTER_CREATION = "character_creation"
    ACTIVE = "active"
    ENDED = "ended"

    @property
    def order(self) -> int:
        """Position in the lifecycle, used to reject backward transitions."""
        return list(SessionStatus).index(self)


class SessionEndReason(StrEnum):
    """Why a session reached the ended state."""

    ALL_PLAYERS_DEAD = "all_players_dead"
    SESSION_ENDED = "session_ended"
    DM_ENDED = "dm_ended"


class PlayerStatus(StrEnum):
    """Life state of a player character."""

    ALIVE = "alive"
    DEAD = "dead"
    UNCONSCIOUS = "unconscious"


class QuestStatus(StrEnum):
    """Progress state of a tracked quest."""

    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


class ItemType(StrEnum):
    """Inventory item categories."""

    WEAPON = "weapon"
    ARMOR = "armor"
    TOOL = "tool"
    CONSUMABLE = "consumable"
    TREASURE = "treasure"
    GEAR = "gear"
    MAGIC_ITEM = "magic item"


class ItemRarity(StrEnum):
    """Inventory item rarity."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    VERY_RARE = "very rare"
    LEGENDARY = "legendary"


class CurrencyType(StrEnum):
    """The five coin denominations."""

    COPPER = "copper"
    SILVER = "silver"
    ELECTRUM = "electrum"
    GOLD = "gold"
    PLATINUM = "platinum"


class RollCategory(StrEnum):
    """Category an action was classified into by the action analyzer."""

    NONE = "none"
    ATTACK = "attack"
    SKILL_CHECK = "skill_check"
    SAVING_THROW = "saving_throw"
    DAMAGE = "damage"
    INITIATIVE = "initiative"


class EncounterType(StrEnum):
    """Kinds of encounter the DM can generate on request."""

    COMBAT = "combat"
    SOCIAL = "social"
    EXPLORATION = "exploration"
    PUZZLE = "puzzle"


class EncounterDifficulty(StrEnum):
    """Encounter difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    DEADLY = "deadly"


__all__ = [
    "Ability",
    "Skill",
    "Alignment",
    "SessionStatus",
    "SessionEndReason",
    "PlayerStatus",
    "QuestStatus",
    "ItemType",
    "ItemRarity",
    "CurrencyType",
    "RollCategory",
    "EncounterType",
    "EncounterDifficulty",
]
