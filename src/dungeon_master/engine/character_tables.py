"""Static class, race and background tables used by the character factory."""

from __future__ import annotations

from typing import Any

from dungeon_master.models.enums import Ability, ItemRarity, ItemType, Skill


# =============================================================================
# Valid Choices
# =============================================================================


CLASSES = [
    "Barbarian", "Bard", "Cleric", "Druid", "Fighter", "Monk",
    "Paladin", "Ranger", "Rogue", "Sorcerer", "Warlock", "Wizard",
]

RACES = [
    "Dragonborn", "Dwarf", "Elf", "Gnome", "Half-Elf",
    "Half-Orc", "Halfling", "Human", "Tiefling",
]

BACKGROUNDS = [
    "Acolyte", "Charlatan", "Criminal", "Entertainer", "Folk Hero",
    "Guild Artisan", "Hermit", "Noble", "Outlander", "Sage",
    "Sailor", "Soldier", "Urchin",
]


# =============================================================================
# Hit Points & Armor
# =============================================================================


CLASS_BASE_HP = {
    "Barbarian": 12, "Bard": 8, "Cleric": 8, "Druid": 8,
    "Fighter": 10, "Monk": 8, "Paladin": 10, "Ranger": 10,
    "Rogue": 8, "Sorcerer": 6, "Warlock": 8, "Wizard": 6,
}

# Starting armor: (base AC, max dexterity bonus)
CLASS_BASE_AC: dict[str, tuple[int, int]] = {
    "Barbarian": (13, 2),  # hide
    "Bard": (11, 5),  # leather
    "Cleric": (14, 2),  # scale mail
    "Druid": (11, 5),  # leather
    "Fighter": (16, 0),  # chain mail
    "Monk": (12, 5),
    "Paladin": (16, 0),  # chain mail
    "Ranger": (14, 2),  # scale mail
    "Rogue": (11, 5),  # leather
    "Sorcerer": (10, 5),
    "Warlock": (11, 5),  # leather
    "Wizard": (10, 5),
}


# =============================================================================
# Skills & Proficiencies
# =============================================================================


CLASS_SKILL_PROFICIENCIES: dict[str, list[Skill]] = {
    "Barbarian": [Skill.ATHLETICS, Skill.SURVIVAL],
    "Bard": [Skill.PERFORMANCE, Skill.PERSUASION, Skill.DECEPTION],
    "Cleric": [Skill.INSIGHT, Skill.RELIGION],
    "Druid": [Skill.NATURE, Skill.ANIMAL_HANDLING],
    "Fighter": [Skill.ATHLETICS, Skill.INTIMIDATION],
    "Monk": [Skill.ACROBATICS, Skill.STEALTH],
    "Paladin": [Skill.ATHLETICS, Skill.PERSUASION],
    "Ranger": [Skill.SURVIVAL, Skill.PERCEPTION, Skill.STEALTH],
    "Rogue": [Skill.STEALTH, Skill.SLEIGHT_OF_HAND, Skill.ACROBATICS, Skill.INVESTIGATION],
    "Sorcerer": [Skill.ARCANA, Skill.DECEPTION],
    "Warlock": [Skill.ARCANA, Skill.INTIMIDATION],
    "Wizard": [Skill.ARCANA, Skill.INVESTIGATION],
}
DEFAULT_CLASS_SKILLS = [Skill.ATHLETICS, Skill.PERCEPTION]

BACKGROUND_SKILL_PROFICIENCIES: dict[str, list[Skill]] = {
    "Acolyte": [Skill.INSIGHT, Skill.RELIGION],
    "Charlatan": [Skill.DECEPTION, Skill.SLEIGHT_OF_HAND],
    "Criminal": [Skill.DECEPTION, Skill.STEALTH],
    "Entertainer": [Skill.ACROBATICS, Skill.PERFORMANCE],
    "Folk Hero": [Skill.ANIMAL_HANDLING, Skill.SURVIVAL],
    "Guild Artisan": [Skill.INSIGHT, Skill.PERSUASION],
    "Hermit": [Skill.MEDICINE, Skill.RELIGION],
    "Noble": [Skill.HISTORY, Skill.PERSUASION],
    "Outlander": [Skill.ATHLETICS, Skill.SURVIVAL],
    "Sage": [Skill.ARCANA, Skill.HISTORY],
    "Sailor": [Skill.ATHLETICS, Skill.PERCEPTION],
    "Soldier": [Skill.ATHLETICS, Skill.INTIMIDATION],
    "Urchin": [Skill.SLEIGHT_OF_HAND, Skill.STEALTH],
}
DEFAULT_BACKGROUND_SKILLS = [Skill.INSIGHT, Skill.PERSUASION]

CLASS_SAVING_THROWS: dict[str, list[Ability]] = {
    "Barbarian": [Ability.STR, Ability.CON],
    "Bard": [Ability.DEX, Ability.CHA],
    "Cleric": [Ability.WIS, Ability.CHA],
    "Druid": [Ability.INT, Ability.WIS],
    "Fighter": [Ability.STR, Ability.CON],
    "Monk": [Ability.STR, Ability.DEX],
    "Paladin": [Ability.WIS, Ability.CHA],
    "Ranger": [Ability.STR, Ability.DEX],
    "Rogue": [Ability.DEX, Ability.INT],
    "Sorcerer": [Ability.CON, Ability.CHA],
    "Warlock": [Ability.WIS, Ability.CHA],
    "Wizard": [Ability.INT, Ability.WIS],
}

CLASS_ARMOR_PROFICIENCIES = {
    "Barbarian": ["Light armor", "Medium armor", "Shields"],
    "Bard": ["Light armor"],
    "Cleric": ["Light armor", "Medium armor", "Shields"],
    "Druid": ["Light armor", "Medium armor", "Shields"],
    "Fighter": ["All armor", "Shields"],
    "Monk": [],
    "Paladin": ["All armor", "Shields"],
    "Ranger": ["Light armor", "Medium armor", "Shields"],
    "Rogue": ["Light armor"],
    "Sorcerer": [],
    "Warlock": ["Light armor"],
    "Wizard": [],
}

CLASS_WEAPON_PROFICIENCIES = {
    "Barbarian": ["Simple weapons", "Martial weapons"],
    "Bard": ["Simple weapons", "Hand crossbows", "Longswords", "Rapiers", "Shortswords"],
    "Cleric": ["Simple weapons"],
    "Druid": ["Clubs", "Daggers", "Quarterstaffs", "Scimitars", "Sickles", "Spears"],
    "Fighter": ["Simple weapons", "Martial weapons"],
    "Monk": ["Simple weapons", "Shortswords"],
    "Paladin": ["Simple weapons", "Martial weapons"],
    "Ranger": ["Simple weapons", "Martial weapons"],
    "Rogue": ["Simple weapons", "Hand crossbows", "Longswords", "Rapiers", "Shortswords"],
    "Sorcerer": ["Daggers", "Darts", "Slings", "Quarterstaffs", "Light crossbows"],
    "Warlock": ["Simple weapons"],
    "Wizard": ["Daggers", "Darts", "Slings", "Quarterstaffs", "Light crossbows"],
}
DEFAULT_WEAPON_PROFICIENCIES = ["Simple weapons"]

CLASS_TOOL_PROFICIENCIES = {
    "Bard": ["Three musical instruments"],
    "Druid": ["Herbalism kit"],
    "Monk": ["One artisan's tool or musical instrument"],
    "Rogue": ["Thieves' tools"],
}

BACKGROUND_TOOL_PROFICIENCIES = {
    "Charlatan": ["Disguise kit", "Forgery kit"],
    "Criminal": ["Gaming set", "Thieves' tools"],
    "Entertainer": ["Disguise kit", "Musical instrument"],
    "Folk Hero": ["Artisan's tools", "Vehicles (land)"],
    "Guild Artisan": ["Artisan's tools"],
    "Hermit": ["Herbalism kit"],
    "Noble": ["Gaming set"],
    "Outlander": ["Musical instrument"],
    "Sailor": ["Navigator's tools", "Vehicles (water)"],
    "Soldier": ["Gaming set", "Vehicles (land)"],
    "Urchin": ["Disguise kit", "Thieves' tools"],
}

CLASS_FEATURES = {
    "Barbarian": ["Rage", "Unarmored Defense"],
    "Bard": ["Bardic Inspiration", "Spellcasting"],
    "Cleric": ["Divine Domain", "Spellcasting"],
    "Druid": ["Druidic", "Spellcasting"],
    "Fighter": ["Fighting Style", "Second Wind"],
    "Monk": ["Martial Arts", "Unarmored Defense"],
    "Paladin": ["Divine Sense", "Lay on Hands"],
    "Ranger": ["Favored Enemy", "Natural Explorer"],
    "Rogue": ["Expertise", "Sneak Attack", "Thieves' Cant"],
    "Sorcerer": ["Sorcerous Origin", "Spellcasting"],
    "Warlock": ["Otherworldly Patron", "Pact Magic"],
    "Wizard": ["Arcane Recovery", "Spellcasting"],
}


# =============================================================================
# Races
# =============================================================================


RACE_SPEED = {
    "Dragonborn": 30, "Dwarf": 25, "Elf": 30, "Gnome": 25, "Half-Elf": 30,
    "Half-Orc": 30, "Halfling": 25, "Human": 30, "Tiefling": 30,
}

RACE_LANGUAGES = {
    "Dragonborn": ["Common", "Draconic"],
    "Dwarf": ["Common", "Dwarvish"],
    "Elf": ["Common", "Elvish"],
    "Gnome": ["Common", "Gnomish"],
    "Half-Elf": ["Common", "Elvish"],
    "Half-Orc": ["Common", "Orc"],
    "Halfling": ["Common", "Halfling"],
    "Human": ["Common"],
    "Tiefling": ["Common", "Infernal"],
}
DEFAULT_LANGUAGES = ["Common"]

RACE_FEATURES = {
    "Dragonborn": ["Draconic Ancestry", "Breath Weapon"],
    "Dwarf": ["Darkvision", "Dwarven Resilience"],
    "Elf": ["Darkvision", "Fey Ancestry", "Trance"],
    "Gnome": ["Darkvision", "Gnome Cunning"],
    "Half-Elf": ["Darkvision", "Fey Ancestry"],
    "Half-Orc": ["Darkvision", "Relentless Endurance"],
    "Halfling": ["Lucky", "Brave"],
    "Human": [],
    "Tiefling": ["Darkvision", "Hellish Resistance"],
}


# =============================================================================
# Wealth
# =============================================================================


CLASS_BASE_GOLD = {
    "Barbarian": 50, "Bard": 125, "Cleric": 125, "Druid": 50,
    "Fighter": 125, "Monk": 15, "Paladin": 125, "Ranger": 125,
    "Rogue": 100, "Sorcerer": 75, "Warlock": 100, "Wizard": 100,
}

BACKGROUND_GOLD_BONUS = {
    "Acolyte": 15, "Charlatan": 15, "Criminal": 15, "Entertainer": 15,
    "Folk Hero": 10, "Guild Artisan": 15, "Hermit": 5, "Noble": 25,
    "Outlander": 10, "Sage": 10, "Sailor": 10, "Soldier": 10, "Urchin": 10,
}


# =============================================================================
# Equipment
# =============================================================================


def _item(
    name: str,
    item_type: ItemType,
    *,
    quantity: int = 1,
    weight: float = 0.0,
    value: float = 0.0,
    description: str = "",
    properties: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "name": name,
        "type": item_type,
        "quantity": quantity,
        "weight": weight,
        "value": value,
        "rarity": ItemRarity.COMMON,
        "description": description,
        "properties": properties or [],
    }


CLASS_EQUIPMENT: dict[str, list[dict[str, Any]]] = {
    "Barbarian": [
        _item("Greataxe", ItemType.WEAPON, weight=7, value=30,
              description="1d12 slashing", properties=["heavy", "two-handed"]),
        _item("Handaxe", ItemType.WEAPON, quantity=2, weight=2, value=5,
              description="1d6 slashing", properties=["light", "thrown"]),
        _item("Explorer's Pack", ItemType.GEAR, weight=59, value=10),
    ],
    "Bard": [
        _item("Rapier", ItemType.WEAPON, weight=2, value=25,
              description="1d8 piercing", properties=["finesse"]),
        _item("Leather Armor", ItemType.ARMOR, weight=10, value=10, description="AC 11 + Dex"),
        _item("Lute", ItemType.TOOL, weight=2, value=35),
        _item("Entertainer's Pack", ItemType.GEAR, weight=38, value=40),
    ],
    "Cleric": [
        _item("Mace", ItemType.WEAPON, weight=4, value=5, description="1d6 bludgeoning"),
        _item("Scale Mail", ItemType.ARMOR, weight=45, value=50,
              description="AC 14 + Dex (max 2)", properties=["stealth disadvantage"]),
        _item("Shield", ItemType.ARMOR, weight=6, value=10, description="+2 AC"),
        _item("Holy Symbol", ItemType.GEAR, weight=1, value=5),
        _item("Priest's Pack", ItemType.GEAR, weight=24, value=19),
    ],
    "Druid": [
        _item("Scimitar", ItemType.WEAPON, weight=3, value=25,
              description="1d6 slashing", properties=["finesse", "light"]),
        _item("Leather Armor", ItemType.ARMOR, weight=10, value=10, description="AC 11 + Dex"),
        _item("Druidic Focus", ItemType.GEAR, weight=1, value=1),
        _item("Explorer's Pack", ItemType.GEAR, weight=59, value=10),
    ],
    "Fighter": [
        _item("Longsword", ItemType.WEAPON, weight=3, value=15,
              description="1d8 slashing", properties=["versatile"]),
        _item("Chain Mail", ItemType.ARMOR, weight=55, value=75,
              description="AC 16", properties=["stealth disadvantage"]),
        _item("Shield", ItemType.ARMOR, weight=6, value=10, description="+2 AC"),
        _item("Light Crossbow", ItemType.WEAPON, weight=5, value=25,
              description="1d8 piercing", properties=["ammunition", "two-handed"]),
        _item("Dungeoneer's Pack", ItemType.GEAR, weight=61, value=12),
    ],
    "Monk": [
        _item("Shortsword", ItemType.WEAPON, weight=2, value=10,
              description="1d6 piercing", properties=["finesse", "light"]),
        _item("Dart", ItemType.WEAPON, quantity=10, weight=0.25, value=0.05,
              description="1d4 piercing", properties=["finesse", "thrown"]),
        _item("Explorer's Pack", ItemType.GEAR, weight=59, value=10),
    ],
    "Paladin": [
        _item("Longsword", ItemType.WEAPON, weight=3, value=15,
              description="1d8 slashing", properties=["versatile"]),
        _item("Chain Mail", ItemType.ARMOR, weight=55, value=75,
              description="AC 16", properties=["stealth disadvantage"]),
        _item("Shield", ItemType.ARMOR, weight=6, value=10, description="+2 AC"),
        _item("Holy Symbol", ItemType.GEAR, weight=1, value=5),
    ],
    "Ranger": [
        _item("Longbow", ItemType.WEAPON, weight=2, value=50,
              description="1d8 piercing", properties=["ammunition", "heavy", "two-handed"]),
        _item("Arrows", ItemType.CONSUMABLE, quantity=20, weight=0.05, value=0.05),
        _item("Shortsword", ItemType.WEAPON, quantity=2, weight=2, value=10,
              description="1d6 piercing", properties=["finesse", "light"]),
        _item("Scale Mail", ItemType.ARMOR, weight=45, value=50,
              description="AC 14 + Dex (max 2)"),
    ],
    "Rogue": [
        _item("Rapier", ItemType.WEAPON, weight=2, value=25,
              description="1d8 piercing", properties=["finesse"]),
        _item("Shortbow", ItemType.WEAPON, weight=2, value=25,
              description="1d6 piercing", properties=["ammunition", "two-handed"]),
        _item("Leather Armor", ItemType.ARMOR, weight=10, value=10, description="AC 11 + Dex"),
        _item("Thieves' Tools", ItemType.TOOL, weight=1, value=25),
        _item("Burglar's Pack", ItemType.GEAR, weight=44, value=16),
    ],
    "Sorcerer": [
        _item("Light Crossbow", ItemType.WEAPON, weight=5, value=25,
              description="1d8 piercing", properties=["ammunition", "two-handed"]),
        _item("Dagger", ItemType.WEAPON, quantity=2, weight=1, value=2,
              description="1d4 piercing", properties=["finesse", "light", "thrown"]),
        _item("Arcane Focus", ItemType.GEAR, weight=1, value=10),
    ],
    "Warlock": [
        _item("Light Crossbow", ItemType.WEAPON, weight=5, value=25,
              description="1d8 piercing", properties=["ammunition", "two-handed"]),
        _item("Leather Armor", ItemType.ARMOR, weight=10, value=10, description="AC 11 + Dex"),
        _item("Dagger", ItemType.WEAPON, quantity=2, weight=1, value=2,
              description="1d4 piercing", properties=["finesse", "light", "thrown"]),
        _item("Arcane Focus", ItemType.GEAR, weight=1, value=10),
    ],
    "Wizard": [
        _item("Quarterstaff", ItemType.WEAPON, weight=4, value=0.2,
              description="1d6 bludgeoning", properties=["versatile"]),
        _item("Spellbook", ItemType.GEAR, weight=3, value=50),
        _item("Component Pouch", ItemType.GEAR, weight=2, value=25),
        _item("Scholar's Pack", ItemType.GEAR, weight=10, value=40),
    ],
}
DEFAULT_CLASS_EQUIPMENT = [
    _item("Dagger", ItemType.WEAPON, weight=1, value=2,
          description="1d4 piercing", properties=["finesse", "light", "thrown"]),
    _item("Explorer's Pack", ItemType.GEAR, weight=59, value=10),
]

BACKGROUND_EQUIPMENT: dict[str, list[dict[str, Any]]] = {
    "Acolyte": [
        _item("Prayer Book", ItemType.GEAR, weight=5, value=25),
        _item("Incense", ItemType.CONSUMABLE, quantity=5),
        _item("Vestments", ItemType.GEAR, weight=4, value=1),
    ],
    "Charlatan": [
        _item("Fine Clothes", ItemType.GEAR, weight=6, value=15),
        _item("Disguise Kit", ItemType.TOOL, weight=3, value=25),
    ],
    "Criminal": [
        _item("Crowbar", ItemType.TOOL, weight=5, value=2),
        _item("Dark Common Clothes", ItemType.GEAR, weight=3, value=0.5),
    ],
    "Entertainer": [
        _item("Musical Instrument", ItemType.TOOL, weight=3, value=25),
        _item("Costume", ItemType.GEAR, weight=4, value=5),
    ],
    "Folk Hero": [
        _item("Artisan's Tools", ItemType.TOOL, weight=5, value=15),
        _item("Shovel", ItemType.TOOL, weight=5, value=2),
        _item("Iron Pot", ItemType.GEAR, weight=10, value=2),
    ],
    "Guild Artisan": [
        _item("Artisan's Tools", ItemType.TOOL, weight=5, value=15),
        _item("Letter of Introduction", ItemType.GEAR),
    ],
    "Hermit": [
        _item("Herbalism Kit", ItemType.TOOL, weight=3, value=5),
        _item("Winter Blanket", ItemType.GEAR, weight=3, value=0.5),
    ],
    "Noble": [
        _item("Fine Clothes", ItemType.GEAR, weight=6, value=15),
        _item("Signet Ring", ItemType.TREASURE, value=5),
        _item("Scroll of Pedigree", ItemType.GEAR),
    ],
    "Outlander": [
        _item("Staff", ItemType.WEAPON, weight=4, value=0.2),
        _item("Hunting Trap", ItemType.TOOL, weight=25, value=5),
        _item("Animal Trophy", ItemType.TREASURE),
    ],
    "Sage": [
        _item("Bottle of Ink", ItemType.GEAR, value=10),
        _item("Quill", ItemType.GEAR, value=0.02),
        _item("Small Knife", ItemType.TOOL, value=1),
    ],
    "Sailor": [
        _item("Belaying Pin", ItemType.WEAPON, weight=1, description="1d4 bludgeoning"),
        _item("Silk Rope (50 feet)", ItemType.GEAR, weight=5, value=10),
        _item("Lucky Charm", ItemType.TREASURE),
    ],
    "Soldier": [
        _item("Insignia of Rank", ItemType.TREASURE),
        _item("Trophy from a Fallen Enemy", ItemType.TREASURE),
        _item("Deck of Cards", ItemType.TOOL, value=0.5),
    ],
    "Urchin": [
        _item("Small Knife", ItemType.TOOL, value=1),
        _item("Map of the Home City", ItemType.GEAR),
        _item("Pet Mouse", ItemType.GEAR),
    ],
}
DEFAULT_BACKGROUND_EQUIPMENT = [
    _item("Common Clothes", ItemType.GEAR, weight=3, value=0.5),
    _item("Belt Pouch", ItemType.GEAR, weight=1, value=0.5),
]


# =============================================================================
# Spellcasting
# =============================================================================


FULL_CASTERS = {"Bard", "Cleric", "Druid", "Sorcerer", "Wizard"}
PACT_CASTERS = {"Warlock"}
HALF_CASTERS = {"Paladin", "Ranger"}

FULL_CASTER_LEVEL_ONE_SLOTS = 2
PACT_CASTER_LEVEL_ONE_SLOTS = 1
HALF_CASTER_LEVEL_ONE_SLOTS = 0

CLASS_CANTRIPS: dict[str, list[dict[str, str]]] = {
    "Bard": [
        {"name": "Vicious Mockery", "school": "Enchantment"},
        {"name": "Minor Illusion", "school": "Illusion"},
    ],
    "Cleric": [
        {"name": "Sacred Flame", "school": "Evocation"},
        {"name": "Guidance", "school": "Divination"},
        {"name": "Light", "school": "Evocation"},
    ],
    "Druid": [
        {"name": "Produce Flame", "school": "Conjuration"},
        {"name": "Druidcraft", "school": "Transmutation"},
    ],
    "Sorcerer": [
        {"name": "Fire Bolt", "school": "Evocation"},
        {"name": "Ray of Frost", "school": "Evocation"},
        {"name": "Prestidigitation", "school": "Transmutation"},
        {"name": "Mage Hand", "school": "Conjuration"},
    ],
    "Warlock": [
        {"name": "Eldritch Blast", "school": "Evocation"},
        {"name": "Minor Illusion", "school": "Illusion"},
    ],
    "Wizard": [
        {"name": "Fire Bolt", "school": "Evocation"},
        {"name": "Mage Hand", "school": "Conjuration"},
        {"name": "Light", "school": "Evocation"},
    ],
}

CLASS_STARTING_SPELLS: dict[str, list[dict[str, Any]]] = {
    "Bard": [
        {"name": "Healing Word", "level": 1, "school": "Evocation"},
        {"name": "Charm Person", "level": 1, "school": "Enchantment"},
    ],
    "Cleric": [
        {"name": "Cure Wounds", "level": 1, "school": "Evocation"},
        {"name": "Bless", "level": 1, "school": "Enchantment"},
    ],
    "Druid": [
        {"name": "Entangle", "level": 1, "school": "Conjuration"},
        {"name": "Healing Word", "level": 1, "school": "Evocation"},
    ],
    "Sorcerer": [
        {"name": "Magic Missile", "level": 1, "school": "Evocation"},
        {"name": "Shield", "level": 1, "school": "Abjuration"},
    ],
    "Warlock": [
        {"name": "Hex", "level": 1, "school": "Enchantment"},
    ],
    "Wizard": [
        {"name": "Magic Missile", "level": 1, "school": "Evocation"},
        {"name": "Shield", "level": 1, "school": "Abjuration"},
        {"name": "Sleep", "level": 1, "school": "Enchantment"},
    ],
}


__all__ = [
    "CLASSES",
    "RACES",
    "BACKGROUNDS",
    "CLASS_BASE_HP",
    "CLASS_BASE_AC",
    "CLASS_SKILL_PROFICIENCIES",
    "DEFAULT_CLASS_SKILLS",
    "BACKGROUND_SKILL_PROFICIENCIES",
    "DEFAULT_BACKGROUND_SKILLS",
    "CLASS_SAVING_THROWS",
    "CLASS_ARMOR_PROFICIENCIES",
    "CLASS_WEAPON_PROFICIENCIES",
    "DEFAULT_WEAPON_PROFICIENCIES",
    "CLASS_TOOL_PROFICIENCIES",
    "BACKGROUND_TOOL_PROFICIENCIES",
    "CLASS_FEATURES",
    "RACE_SPEED",
    "RACE_LANGUAGES",
    "DEFAULT_LANGUAGES",
    "RACE_FEATURES",
    "CLASS_BASE_GOLD",
    "BACKGROUND_GOLD_BONUS",
    "CLASS_EQUIPMENT",
    "DEFAULT_CLASS_EQUIPMENT",
    "BACKGROUND_EQUIPMENT",
    "DEFAULT_BACKGROUND_EQUIPMENT",
    "FULL_CASTERS",
    "PACT_CASTERS",
    "HALF_CASTERS",
    "FULL_CASTER_LEVEL_ONE_SLOTS",
    "PACT_CASTER_LEVEL_ONE_SLOTS",
    "HALF_CASTER_LEVEL_ONE_SLOTS",
    "CLASS_CANTRIPS",
    "CLASS_STARTING_SPELLS",
]
