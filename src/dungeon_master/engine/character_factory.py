"""Character factory.

Derives a complete level-one character sheet from class, race and background
choices. Creation never fails for an unrecognised class, race or background:
each table falls back to a default baseline. Only missing identity fields are
rejected.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from dungeon_master.core.constants import (
    CURRENCY_SPLIT,
    DEFAULT_ARMOR_CLASS,
    DEFAULT_BACKGROUND_GOLD,
    DEFAULT_HIT_POINTS,
    DEFAULT_MAX_DEX_BONUS,
    DEFAULT_PROFICIENCY_BONUS,
    DEFAULT_SPEED,
    DEFAULT_STARTING_GOLD,
    MIN_ARMOR_CLASS,
    MIN_HIT_POINTS,
)
from dungeon_master.core.exceptions import ValidationError
from dungeon_master.core.logging import get_logger
from dungeon_master.engine import character_tables as tables
from dungeon_master.engine.dice import DiceRoller, ability_modifier, get_roller
from dungeon_master.models.character import (
    AbilityScores,
    Cantrip,
    Currency,
    InventoryItem,
    PlayerCharacter,
    Proficiencies,
    SavingThrowEntry,
    SkillEntry,
    Spell,
    SpellSlot,
)
from dungeon_master.models.enums import Ability, Alignment, Skill


logger = get_logger(__name__)


@dataclass(frozen=True)
class CharacterIdentity:
    """Who is creating the character and what it is called."""

    user_id: str
    username: str
    name: str


def _canonical(value: str, choices: list[str]) -> str:
    """Match a choice case-insensitively, keeping the caller's text if unknown."""
    cleaned = value.strip()
    for choice in choices:
        if choice.lower() == cleaned.lower():
            return choice
    return cleaned


# =============================================================================
# Derived Values
# =============================================================================


def calculate_hit_points(character_class: str, stats: AbilityScores) -> int:
    base = tables.CLASS_BASE_HP.get(character_class, DEFAULT_HIT_POINTS)
    return max(MIN_HIT_POINTS, base + stats.modifier(Ability.CON))


def calculate_armor_class(character_class: str, stats: AbilityScores) -> int:
    """Base armor plus dexterity modifier, capped by the armor's dexterity limit."""
    base, max_dex = tables.CLASS_BASE_AC.get(
        character_class, (DEFAULT_ARMOR_CLASS, DEFAULT_MAX_DEX_BONUS)
    )
    return max(MIN_ARMOR_CLASS, base + min(stats.modifier(Ability.DEX), max_dex))


def proficient_skills(character_class: str, background: str) -> set[Skill]:
    """Skills granted by the class table and the background table together."""
    class_skills = tables.CLASS_SKILL_PROFICIENCIES.get(
        character_class, tables.DEFAULT_CLASS_SKILLS
    )
    background_skills = tables.BACKGROUND_SKILL_PROFICIENCIES.get(
        background, tables.DEFAULT_BACKGROUND_SKILLS
    )
    return set(class_skills) | set(background_skills)


def build_skills(
    stats: AbilityScores,
    proficient: set[Skill],
    proficiency_bonus: int = DEFAULT_PROFICIENCY_BONUS,
) -> dict[str, SkillEntry]:
    skills: dict[str, SkillEntry] = {}
    for skill in Skill:
        is_proficient = skill in proficient
        modifier = stats.modifier(skill.ability) + (proficiency_bonus if is_proficient else 0)
        skills[skill.value] = SkillEntry(proficient=is_proficient, modifier=modifier)
    return skills


def build_saving_throws(
    character_class: str,
    stats: AbilityScores,
    proficiency_bonus: int = DEFAULT_PROFICIENCY_BONUS,
) -> dict[str, SavingThrowEntry]:
    proficient = set(tables.CLASS_SAVING_THROWS.get(character_class, []))
    return {
        ability.value: SavingThrowEntry(
            proficient=ability in proficient,
            modifier=stats.modifier(ability) + (proficiency_bonus if ability in proficient else 0),
        )
        for ability in Ability
    }


def starting_currency(character_class: str, background: str) -> Currency:
    """Split starting wealth across the five denominations.

    Each share is floored, so a few coins of the total are lost.
    """
    total = tables.CLASS_BASE_GOLD.get(
        character_class, DEFAULT_STARTING_GOLD
    ) + tables.BACKGROUND_GOLD_BONUS.get(background, DEFAULT_BACKGROUND_GOLD)
    return Currency(**{coin: math.floor(total * share) for coin, share in CURRENCY_SPLIT.items()})


def starting_inventory(character_class: str, background: str) -> list[InventoryItem]:
    """Class equipment followed by background equipment, each with a fresh id."""
    entries = [
        *tables.CLASS_EQUIPMENT.get(character_class, tables.DEFAULT_CLASS_EQUIPMENT),
        *tables.BACKGROUND_EQUIPMENT.get(background, tables.DEFAULT_BACKGROUND_EQUIPMENT),
    ]
    return [InventoryItem.model_validate(entry) for entry in entries]


def starting_spell_slots(character_class: str) -> list[SpellSlot]:
    """Level-one slots for spellcasting classes.

    Half casters get an empty level-one entry; their first slots arrive at
    level two.
    """
    if character_class in tables.FULL_CASTERS:
        total = tables.FULL_CASTER_LEVEL_ONE_SLOTS
    elif character_class in tables.PACT_CASTERS:
        total = tables.PACT_CASTER_LEVEL_ONE_SLOTS
    elif character_class in tables.HALF_CASTERS:
        total = tables.HALF_CASTER_LEVEL_ONE_SLOTS
    else:
        return []
    return [SpellSlot(level=1, total=total, used=0)]


def starting_cantrips(character_class: str) -> list[Cantrip]:
    return [Cantrip.model_validate(c) for c in tables.CLASS_CANTRIPS.get(character_class, [])]


def starting_spells(character_class: str) -> list[Spell]:
    return [Spell.model_validate(s) for s in tables.CLASS_STARTING_SPELLS.get(character_class, [])]


def starting_proficiencies(character_class: str, background: str) -> Proficiencies:
    return Proficiencies(
        armor=list(tables.CLASS_ARMOR_PROFICIENCIES.get(character_class, [])),
        weapons=list(
            tables.CLASS_WEAPON_PROFICIENCIES.get(
                character_class, tables.DEFAULT_WEAPON_PROFICIENCIES
            )
        ),
        tools=[
            *tables.CLASS_TOOL_PROFICIENCIES.get(character_class, []),
            *tables.BACKGROUND_TOOL_PROFICIENCIES.get(background, []),
        ],
        saving_throws=[a.value for a in tables.CLASS_SAVING_THROWS.get(character_class, [])],
    )


# =============================================================================
# Factory
# =============================================================================


def create_character(
    identity: CharacterIdentity,
    character_class: str,
    race: str,
    background: str = "",
    description: str = "",
    *,
    level: int = 1,
    roller: DiceRoller | None = None,
) -> PlayerCharacter:
    """Create a new player character.

    Ability scores are rolled 4d6-drop-lowest and assigned in order to
    strength, dexterity, constitution, intelligence, wisdom and charisma.

    Args:
        identity: Owning participant and character name.
        character_class: Class name; unknown classes use default baselines.
        race: Race name; unknown races use default speed and languages.
        background: Background name; unknown backgrounds use defaults.
        description: Free-text appearance and personality.
        level: Narrative level, normally the party level.
        roller: Dice roller to use; the shared roller by default.

    Returns:
        The fully derived PlayerCharacter.

    Raises:
        ValidationError: If the participant id or character name is missing.
    """
    if not identity.user_id or not identity.user_id.strip():
        raise ValidationError("A participant id is required", field_name="user_id")
    if not identity.name or not identity.name.strip():
        raise ValidationError("A character name is required", field_name="name")

    roller = roller or get_roller()
    character_class = _canonical(character_class or "", tables.CLASSES)
    race = _canonical(race or "", tables.RACES)
    background = _canonical(background or "", tables.BACKGROUNDS)

    stats = AbilityScores.from_rolls(roller.generate_ability_scores())
    hit_points = calculate_hit_points(character_class, stats)

    character = PlayerCharacter(
        user_id=identity.user_id,
        username=identity.username,
        name=identity.name.strip(),
        character_class=character_class,
        race=race,
        background=background,
        description=description,
        level=level,
        stats=stats,
        hit_points=hit_points,
        max_hit_points=hit_points,
        armor_class=calculate_armor_class(character_class, stats),
        alignment=random.choice(list(Alignment)),
        skills=build_skills(stats, proficient_skills(character_class, background)),
        saving_throws=build_saving_throws(character_class, stats),
        currency=starting_currency(character_class, background),
        inventory=starting_inventory(character_class, background),
        spell_slots=starting_spell_slots(character_class),
        cantrips=starting_cantrips(character_class),
        spells=starting_spells(character_class),
        initiative=ability_modifier(stats.dexterity),
        speed=tables.RACE_SPEED.get(race, DEFAULT_SPEED),
        languages=list(tables.RACE_LANGUAGES.get(race, tables.DEFAULT_LANGUAGES)),
        features=[
            *tables.CLASS_FEATURES.get(character_class, []),
            *tables.RACE_FEATURES.get(race, []),
        ],
        proficiencies=starting_proficiencies(character_class, background),
    )

    logger.info(
        "Character created",
        user_id=identity.user_id,
        name=character.name,
        character_class=character_class,
        race=race,
        hit_points=hit_points,
        armor_class=character.armor_class,
    )
    return character


__all__ = [
    "CharacterIdentity",
    "calculate_hit_points",
    "calculate_armor_class",
    "proficient_skills",
    "build_skills",
    "build_saving_throws",
    "starting_currency",
    "starting_inventory",
    "starting_spell_slots",
    "starting_cantrips",
    "starting_spells",
    "starting_proficiencies",
    "create_character",
]
