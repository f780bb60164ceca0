"""Game engine module: dice, character creation and action analysis.

Submodules:
    dice: Dice rolling through the d20 library
    character_tables: Class, race and background reference data
    character_factory: Derives a full character sheet at creation
    action_analyzer: Maps free-text actions to the roll they call for

Example:
    >>> from dungeon_master.engine import ActionAnalyzer, CharacterIdentity, create_character
    >>>
    >>> hero = create_character(CharacterIdentity("42", "alice", "Aria"), "Rogue", "Halfling")
    >>> roll = ActionAnalyzer().generate_automatic_roll("I sneak past the guards", hero)
    >>> print(roll.summary())
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from dungeon_master.engine.dice import (
    DiceExpression,
    DiceRoll,
    DiceRoller,
    ability_modifier,
    get_roller,
    parse_notation,
    roll,
)

# =============================================================================
# Characters
# =============================================================================
from dungeon_master.engine.character_factory import (
    CharacterIdentity,
    calculate_armor_class,
    calculate_hit_points,
    create_character,
)

# =============================================================================
# Action Analysis
# =============================================================================
from dungeon_master.engine.action_analyzer import (
    ActionAnalysis,
    ActionAnalyzer,
    AutomaticDiceRoll,
)


__all__ = [
    # Dice
    "DiceExpression",
    "DiceRoll",
    "DiceRoller",
    "ability_modifier",
    "get_roller",
    "parse_notation",
    "roll",
    # Characters
    "CharacterIdentity",
    "calculate_armor_class",
    "calculate_hit_points",
    "create_character",
    # Action analysis
    "ActionAnalysis",
    "ActionAnalyzer",
    "AutomaticDiceRoll",
]
