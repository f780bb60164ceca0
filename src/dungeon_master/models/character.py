"""Player character models.

A PlayerCharacter is derived once by the character factory and then mutated
in place by the session state machine. The mutation helpers on each model
keep the sheet's invariants (no negative coins, spell slot accounting)
intact no matter what deltas the caller supplies.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic import ValidationError as PydanticValidationError

from dungeon_master.core.constants import DEFAULT_PROFICIENCY_BONUS, DEFAULT_SPEED
from dungeon_master.core.exceptions import ValidationError
from dungeon_master.models.enums import (
    Ability,
    Alignment,
    CurrencyType,
    ItemRarity,
    ItemType,
    PlayerStatus,
    Skill,
)


def calc_modifier(score: int) -> int:
    """Calculate an ability modifier: floor((score - 10) / 2)."""
    return (score - 10) // 2


class SheetComponent(BaseModel):
    """Base for every character sheet component."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
        use_enum_values=True,
    )


# =============================================================================
# Abilities & Skills
# =============================================================================


class AbilityScores(SheetComponent):
    """The six ability scores."""

    strength: int = Field(default=10, ge=1, le=30)
    dexterity: int = Field(default=10, ge=1, le=30)
    constitution: int = Field(default=10, ge=1, le=30)
    intelligence: int = Field(default=10, ge=1, le=30)
    wisdom: int = Field(default=10, ge=1, le=30)
    charisma: int = Field(default=10, ge=1, le=30)

    @classmethod
    def from_rolls(cls, rolls: list[int]) -> AbilityScores:
        """Assign rolled scores positionally, strength first."""
        if len(rolls) != len(Ability):
            raise ValidationError(
                "Exactly six ability scores are required",
                field_name="stats",
                invalid_value=rolls,
            )
        return cls(**{ability.value: score for ability, score in zip(Ability, rolls)})

    def get(self, ability: Ability | str) -> int:
        return getattr(self, Ability(ability).value)

    def modifier(self, ability: Ability | str) -> int:
        """Get the modifier for an ability."""
        return calc_modifier(self.get(ability))

    def as_list(self) -> list[int]:
        return [self.get(ability) for ability in Ability]


class SkillEntry(SheetComponent):
    """Proficiency flag and total modifier for one skill."""

    proficient: bool = False
    modifier: int = 0


class SavingThrowEntry(SheetComponent):
    """Proficiency flag and total modifier for one saving throw."""

    proficient: bool = False
    modifier: int = 0


# =============================================================================
# Currency & Inventory
# =============================================================================


class Currency(SheetComponent):
    """Coin purse. No denomination is ever negative."""

    copper: int = Field(default=0, ge=0)
    silver: int = Field(default=0, ge=0)
    electrum: int = Field(default=0, ge=0)
    gold: int = Field(default=0, ge=0)
    platinum: int = Field(default=0, ge=0)

    def apply(self, deltas: dict[str, int]) -> Currency:
        """Add signed deltas to each denomination, clamping at zero.

        Args:
            deltas: Mapping of denomination name to signed change.

        Returns:
            Self, for chaining.

        Raises:
            ValidationError: If a denomination name is unknown or an amount
                is not a whole number. The purse is left untouched.
        """
        resolved: dict[str, int] = {}
        for name, amount in deltas.items():
            try:
                denomination = CurrencyType(name).value
            except ValueError as exc:
                raise ValidationError(
                    f"Unknown currency denomination: {name}",
                    field_name="currency",
                    invalid_value=name,
                ) from exc
            if isinstance(amount, bool) or not isinstance(amount, int):
                raise ValidationError(
                    f"Currency change for {denomination} must be a whole number",
                    field_name=denomination,
                    invalid_value=amount,
                )
            resolved[denomination] = resolved.get(denomination, 0) + amount

        # Nothing is touched until every entry has been checked.
        for denomination, amount in resolved.items():
            setattr(self, denomination, max(0, getattr(self, denomination) + amount))
        return self

    @computed_field
    @property
    def total_in_gold(self) -> float:
        """Purse value expressed in gold pieces."""
        return (
            self.copper / 100
            + self.silver / 10
            + self.electrum / 2
            + self.gold
            + self.platinum * 10
        )


class InventoryItem(SheetComponent):
    """One inventory entry. Every item carries its own generated id."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(..., min_length=1)
    type: ItemType = ItemType.GEAR
    quantity: int = Field(default=1, ge=1)
    weight: float = Field(default=0.0, ge=0)
    value: float = Field(default=0.0, ge=0, description="Value in gold pieces")
    rarity: ItemRarity = ItemRarity.COMMON
    description: str = ""
    properties: list[str] = Field(default_factory=list)


# =============================================================================
# Spellcasting
# =============================================================================


class SpellSlot(SheetComponent):
    """Slots for one spell level. ``available`` is always ``total - used``."""

    level: int = Field(..., ge=1, le=9)
    total: int = Field(default=0, ge=0)
    used: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_used_within_total(self) -> SpellSlot:
        if self.used > self.total:
            raise ValueError(f"used ({self.used}) exceeds total ({self.total})")
        return self

    @computed_field
    @property
    def available(self) -> int:
        return self.total - self.used

    def set_used(self, used: int) -> None:
        """Set the used count, clamped into [0, total]."""
        self.used = max(0, min(self.total, used))

    def restore(self) -> None:
        self.used = 0


class Cantrip(SheetComponent):
    """A cantrip known by the character."""

    name: str = Field(..., min_length=1)
    school: str = ""
    description: str = ""


class Spell(SheetComponent):
    """A levelled spell known or prepared by the character."""

    name: str = Field(..., min_length=1)
    level: int = Field(default=1, ge=1, le=9)
    school: str = ""
    description: str = ""


# =============================================================================
# Proficiencies & Death Saves
# =============================================================================


class Proficiencies(SheetComponent):
    """Armor, weapon, tool and saving throw proficiencies."""

    armor: list[str] = Field(default_factory=list)
    weapons: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    saving_throws: list[str] = Field(default_factory=list)


class DeathSaves(SheetComponent):
    successes: int = Field(default=0, ge=0, le=3)
    failures: int = Field(default=0, ge=0, le=3)


# =============================================================================
# Player Character
# =============================================================================


class PlayerCharacter(SheetComponent):
    """A participant's character in one session.

    Attributes:
        user_id: Platform id of the owning participant.
        username: Platform display name of the participant.
        name: Character name.
        character_class: Class name (e.g., 'Wizard').
        stats: Rolled ability scores.
        skills: All eighteen skills keyed by skill name.
        status: Alive, dead or unconscious.
    """

    user_id: str = Field(..., min_length=1)
    username: str = ""
    name: str = Field(..., min_length=1)
    character_class: str
    race: str
    background: str = ""
    description: str = ""
    level: int = Field(default=1, ge=1, le=20)

    stats: AbilityScores = Field(default_factory=AbilityScores)
    hit_points: int = Field(default=1, ge=0)
    max_hit_points: int = Field(default=1, ge=1)
    armor_class: int = Field(default=10, ge=0)
    alignment: Alignment = Alignment.TRUE_NEUTRAL
    status: PlayerStatus = PlayerStatus.ALIVE
    death_saves: DeathSaves = Field(default_factory=DeathSaves)

    skills: dict[str, SkillEntry] = Field(default_factory=dict)
    saving_throws: dict[str, SavingThrowEntry] = Field(default_factory=dict)
    currency: Currency = Field(default_factory=Currency)
    inventory: list[InventoryItem] = Field(default_factory=list)
    spell_slots: list[SpellSlot] = Field(default_factory=list)
    cantrips: list[Cantrip] = Field(default_factory=list)
    spells: list[Spell] = Field(default_factory=list)

    proficiency_bonus: int = DEFAULT_PROFICIENCY_BONUS
    experience_points: int = Field(default=0, ge=0)
    inspiration: bool = False
    exhaustion: int = Field(default=0, ge=0, le=6)
    initiative: int = 0
    speed: int = DEFAULT_SPEED
    languages: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    proficiencies: Proficiencies = Field(default_factory=Proficiencies)

    @property
    def is_alive(self) -> bool:
        return self.status != PlayerStatus.DEAD

    @property
    def summary(self) -> str:
        """One-line description used in prompts and party listings."""
        return f"{self.name}, {self.race} {self.character_class} (Level {self.level})"

    def skill_modifier(self, skill: Skill | str) -> int:
        """Get the total modifier for a skill, falling back to the raw ability."""
        skill = Skill(skill)
        entry = self.skills.get(skill.value)
        if entry is None:
            return self.stats.modifier(skill.ability)
        return entry.modifier

    def mark_dead(self) -> None:
        self.status = PlayerStatus.DEAD
        self.hit_points = 0

    # -------------------------------------------------------------------------
    # Sheet mutations
    # -------------------------------------------------------------------------

    def update_currency(self, deltas: dict[str, int]) -> Currency:
        return self.currency.apply(deltas)

    def add_inventory_item(self, item: InventoryItem | dict[str, Any]) -> InventoryItem:
        """Append an item, always stamping it with a fresh id."""
        try:
            data = item.model_dump() if isinstance(item, InventoryItem) else dict(item)
            data["id"] = str(uuid4())
            stamped = InventoryItem.model_validate(data)
        except (TypeError, ValueError, PydanticValidationError) as exc:
            raise ValidationError(
                f"Invalid inventory item: {exc}",
                field_name="inventory",
                invalid_value=item,
            ) from exc
        self.inventory.append(stamped)
        return stamped

    def remove_inventory_item(self, item_id: str) -> InventoryItem | None:
        """Remove an item by id, returning it (or None if it was not carried)."""
        for index, item in enumerate(self.inventory):
            if item.id == item_id:
                return self.inventory.pop(index)
        return None

    def get_spell_slot(self, level: int) -> SpellSlot | None:
        return next((slot for slot in self.spell_slots if slot.level == level), None)

    def update_spell_slots(self, level: int, used: int) -> SpellSlot:
        """Set used slots for a level, clamped into [0, total].

        Raises:
            ValidationError: If the character has no slots at that level.
        """
        slot = self.get_spell_slot(level)
        if slot is None:
            raise ValidationError(
                f"{self.name} has no level {level} spell slots",
                field_name="spell_slots",
                invalid_value=level,
            )
        slot.set_used(used)
        return slot

    def add_cantrip(self, cantrip: Cantrip | dict[str, Any]) -> Cantrip:
        try:
            known = cantrip if isinstance(cantrip, Cantrip) else Cantrip.model_validate(cantrip)
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid cantrip: {exc}",
                field_name="cantrips",
                invalid_value=cantrip,
            ) from exc
        if all(existing.name.lower() != known.name.lower() for existing in self.cantrips):
            self.cantrips.append(known)
        return known

    def update_skill(
        self,
        skill: Skill | str,
        *,
        proficient: bool | None = None,
        modifier: int | None = None,
    ) -> SkillEntry:
        """Update a skill's proficiency and/or modifier.

        Toggling proficiency without an explicit modifier recomputes the
        modifier from the governing ability.

        Raises:
            ValidationError: If the skill name is unknown.
        """
        try:
            skill = Skill(skill)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown skill: {skill}",
                field_name="skill",
                invalid_value=skill,
            ) from exc

        entry = self.skills.setdefault(skill.value, SkillEntry())
        if proficient is not None:
            entry.proficient = proficient
        if modifier is not None:
            entry.modifier = modifier
        elif proficient is not None:
            entry.modifier = self.stats.modifier(skill.ability) + (
                self.proficiency_bonus if proficient else 0
            )
        return entry

    def character_sheet(self) -> str:
        """Render the character sheet as plain text."""
        lines = [
            f"{self.name}",
            f"{self.race} {self.character_class}, Level {self.level} ({self.background})",
            f"Alignment: {self.alignment}  Status: {self.status}",
            f"HP {self.hit_points}/{self.max_hit_points}  AC {self.armor_class}  "
            f"Speed {self.speed}ft  Initiative {self.initiative:+d}",
            "",
            "Abilities:",
        ]
        for ability in Ability:
            score = self.stats.get(ability)
            lines.append(f"  {ability.abbreviation} {score:>2} ({calc_modifier(score):+d})")

        proficient = [
            Skill(name).display_name for name, entry in self.skills.items() if entry.proficient
        ]
        lines.append("")
        lines.append(f"Proficient skills: {', '.join(proficient) or 'None'}")
        lines.append(
            "Currency: "
            + ", ".join(
                f"{getattr(self.currency, coin.value)} {coin.value}" for coin in CurrencyType
            )
        )
        if self.inventory:
            lines.append("Inventory:")
            lines.extend(f"  - {item.name} x{item.quantity}" for item in self.inventory)
        if self.spell_slots:
            lines.append(
                "Spell slots: "
                + ", ".join(
                    f"L{slot.level} {slot.available}/{slot.total}" for slot in self.spell_slots
                )
            )
        if self.cantrips:
            lines.append(f"Cantrips: {', '.join(c.name for c in self.cantrips)}")
        if self.features:
            lines.append(f"Features: {', '.join(self.features)}")
        return "\n".join(lines)


__all__ = [
    "calc_modifier",
    "SheetComponent",
    "AbilityScores",
    "SkillEntry",
    "SavingThrowEntry",
    "Currency",
    "InventoryItem",
    "SpellSlot",
    "Cantrip",
    "Spell",
    "Proficiencies",
    "DeathSaves",
    "PlayerCharacter",
]
