"""Tests for character creation."""

from __future__ import annotations

import math

import pytest

from dungeon_master.core.constants import CURRENCY_SPLIT
from dungeon_master.core.exceptions import ValidationError
from dungeon_master.engine import character_tables as tables
from dungeon_master.engine.character_factory import (
    CharacterIdentity,
    calculate_armor_class,
    calculate_hit_points,
    create_character,
    proficient_skills,
    starting_currency,
    starting_spell_slots,
)
from dungeon_master.engine.dice import DiceRoller
from dungeon_master.models.character import AbilityScores
from dungeon_master.models.enums import Alignment, Skill


class FixedScoreRoller(DiceRoller):
    """Roller that hands out predetermined ability scores."""

    def __init__(self, scores: list[int]) -> None:
        super().__init__()
        self.scores = scores

    def generate_ability_scores(self) -> list[int]:
        return list(self.scores)


IDENTITY = CharacterIdentity(user_id="user-1", username="alice", name="Aria")


class TestCreateCharacter:
    """Tests for create_character."""

    @pytest.mark.parametrize("character_class", tables.CLASSES)
    def test_creation_bounds(self, character_class: str, seeded_roller: DiceRoller) -> None:
        """Test every class yields a sheet within bounds."""
        character = create_character(
            IDENTITY, character_class, "Human", "Sage", roller=seeded_roller
        )

        assert all(3 <= score <= 18 for score in character.stats.as_list())
        assert character.hit_points >= 1
        assert character.max_hit_points == character.hit_points
        assert character.armor_class >= 10
        assert len(character.skills) == 18
        assert character.alignment in set(Alignment)
        assert character.status == "alive"
        assert character.level == 1

    def test_scores_assigned_positionally(self) -> None:
        roller = FixedScoreRoller([8, 14, 12, 16, 10, 13])
        character = create_character(IDENTITY, "Wizard", "Elf", "Sage", roller=roller)

        assert character.stats.strength == 8
        assert character.stats.dexterity == 14
        assert character.stats.intelligence == 16
        assert character.stats.charisma == 13
        assert character.initiative == 2

    def test_derived_values(self) -> None:
        """Test HP, AC and currency for a known Fighter."""
        roller = FixedScoreRoller([16, 14, 15, 10, 12, 8])
        character = create_character(IDENTITY, "Fighter", "Dwarf", "Soldier", roller=roller)

        assert character.hit_points == 12  # 10 + CON +2
        assert character.armor_class == 16  # chain mail ignores DEX
        total = 125 + 10
        assert character.currency.gold == math.floor(total * CURRENCY_SPLIT["gold"])
        assert character.currency.platinum == math.floor(total * CURRENCY_SPLIT["platinum"])
        assert character.speed == tables.RACE_SPEED["Dwarf"]

    def test_class_and_background_skills_are_unioned(self) -> None:
        roller = FixedScoreRoller([10, 10, 10, 10, 10, 10])
        character = create_character(IDENTITY, "Wizard", "Elf", "Criminal", roller=roller)

        assert character.skills["arcana"].proficient
        assert character.skills["stealth"].proficient
        assert character.skills["stealth"].modifier == 2
        assert not character.skills["athletics"].proficient
        assert character.skills["athletics"].modifier == 0

    def test_inventory_ids_are_unique(self, seeded_roller: DiceRoller) -> None:
        character = create_character(IDENTITY, "Rogue", "Halfling", "Urchin", roller=seeded_roller)
        ids = [item.id for item in character.inventory]

        assert character.inventory
        assert len(ids) == len(set(ids))

    def test_class_name_matched_case_insensitively(self, seeded_roller: DiceRoller) -> None:
        character = create_character(IDENTITY, "wizard", "elf", "sage", roller=seeded_roller)

        assert character.character_class == "Wizard"
        assert character.race == "Elf"
        assert character.cantrips

    def test_unknown_class_uses_defaults(self) -> None:
        roller = FixedScoreRoller([10, 10, 10, 10, 10, 10])
        character = create_character(IDENTITY, "Gunslinger", "Human", "Astronaut", roller=roller)

        assert character.hit_points == 8
        assert character.armor_class == 12
        assert character.skills["athletics"].proficient
        assert character.skills["persuasion"].proficient
        assert character.spell_slots == []

    @pytest.mark.parametrize(
        "identity",
        [
            CharacterIdentity(user_id="", username="alice", name="Aria"),
            CharacterIdentity(user_id="user-1", username="alice", name="  "),
        ],
    )
    def test_missing_identity_rejected(self, identity: CharacterIdentity) -> None:
        with pytest.raises(ValidationError):
            create_character(identity, "Fighter", "Human")


class TestDerivations:
    """Tests for derived-value helpers."""

    def test_hit_points_floor(self) -> None:
        stats = AbilityScores(constitution=3)

        assert calculate_hit_points("Sorcerer", stats) == 2
        assert calculate_hit_points("Gunslinger", AbilityScores(constitution=1)) >= 1

    def test_armor_class_dex_cap(self) -> None:
        stats = AbilityScores(dexterity=18)

        assert calculate_armor_class("Barbarian", stats) == 15  # 13 + min(4, 2)
        assert calculate_armor_class("Rogue", stats) == 15  # 11 + 4

    def test_armor_class_floor(self) -> None:
        assert calculate_armor_class("Wizard", AbilityScores(dexterity=3)) == 10

    def test_proficient_skills(self) -> None:
        assert proficient_skills("Fighter", "Sage") == {
            Skill.ATHLETICS,
            Skill.INTIMIDATION,
            Skill.ARCANA,
            Skill.HISTORY,
        }

    def test_currency_never_negative(self) -> None:
        currency = starting_currency("Monk", "Hermit")

        assert currency.gold == math.floor(20 * 0.70)
        assert min(currency.model_dump().values()) >= 0

    @pytest.mark.parametrize(
        ("character_class", "expected"),
        [("Wizard", 2), ("Warlock", 1), ("Paladin", 0), ("Ranger", 0)],
    )
    def test_spell_slots(self, character_class: str, expected: int) -> None:
        slots = starting_spell_slots(character_class)

        assert len(slots) == 1
        assert slots[0].total == expected
        assert slots[0].available == expected

    def test_non_casters_have_no_slots(self) -> None:
        assert starting_spell_slots("Fighter") == []
