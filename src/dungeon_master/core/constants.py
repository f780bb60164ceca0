"""Application-wide constants for the Dungeon Master session engine.

The story-memory bounds below decide what the narrative model "remembers"
between rounds; changing them changes prompt content.
"""

from __future__ import annotations

# =============================================================================
# Story Memory Bounds
# =============================================================================

MAX_RECENT_EVENTS = 50
"""Number of recent events retained on the session (full log lives in history)."""

MAX_IMPORTANT_EVENTS = 10
"""Important events kept on the session; oldest are dropped first."""

MAX_NPC_INTERACTIONS = 5
"""Interactions kept per NPC; oldest are dropped first."""

PROMPT_RECENT_EVENTS = 10
"""Recent events included in each generation prompt."""

PROMPT_IMPORTANT_EVENTS = 5
"""Important events included in each generation prompt."""

PROMPT_NPC_INTERACTIONS = 3
"""Interactions per NPC included in each generation prompt."""

MAX_STORY_BEAT_LENGTH = 1000
"""Characters of the last story beat included in each generation prompt."""

# =============================================================================
# Ability Scores
# =============================================================================

ABILITY_SCORE_COUNT = 6
"""Number of ability scores generated per character."""

MIN_ROLLED_ABILITY_SCORE = 3
"""Lowest possible 4d6-drop-lowest result."""

MAX_ROLLED_ABILITY_SCORE = 18
"""Highest possible 4d6-drop-lowest result."""

# =============================================================================
# Character Defaults
# =============================================================================

DEFAULT_PROFICIENCY_BONUS = 2
"""Flat proficiency bonus for starting characters."""

DEFAULT_HIT_POINTS = 8
"""Base hit points for classes missing from the class tables."""

DEFAULT_ARMOR_CLASS = 12
"""Base armor class for classes missing from the class tables."""

DEFAULT_MAX_DEX_BONUS = 2
"""Dexterity cap on armor class for classes missing from the class tables."""

MIN_ARMOR_CLASS = 10
"""Lowest armor class a freshly created character can have."""

MIN_HIT_POINTS = 1
"""Lowest hit point maximum a freshly created character can have."""

DEFAULT_SPEED = 30
"""Walking speed in feet for races missing from the race tables."""

DEFAULT_STARTING_GOLD = 50
"""Class starting wealth for classes missing from the class tables."""

DEFAULT_BACKGROUND_GOLD = 10
"""Background wealth bonus for backgrounds missing from the tables."""

CURRENCY_SPLIT = {
    "gold": 0.70,
    "silver": 0.20,
    "copper": 0.10,
    "electrum": 0.02,
    "platinum": 0.01,
}
"""Share of starting wealth placed in each denomination (floored)."""

# =============================================================================
# Action Resolution
# =============================================================================

ATTACK_DIFFICULTY_CLASS = 15
"""Default target number for attack rolls."""

SAVING_THROW_DIFFICULTY_CLASS = 13
"""Default difficulty class for saving throws."""

ACTION_DICE = "1d20"
"""Dice rolled for checks, attacks, saves and initiative."""

# =============================================================================
# Fallback Narration
# =============================================================================

FALLBACK_WELCOME = "Welcome to the adventure!"
FALLBACK_OPENING_SCENE = "The adventure begins!"
FALLBACK_STORY_CONTINUATION = "The story continues..."
FALLBACK_ENCOUNTER = "An encounter unfolds..."


__all__ = [
    "MAX_RECENT_EVENTS",
    "MAX_IMPORTANT_EVENTS",
    "MAX_NPC_INTERACTIONS",
    "PROMPT_RECENT_EVENTS",
    "PROMPT_IMPORTANT_EVENTS",
    "PROMPT_NPC_INTERACTIONS",
    "MAX_STORY_BEAT_LENGTH",
    "ABILITY_SCORE_COUNT",
    "MIN_ROLLED_ABILITY_SCORE",
    "MAX_ROLLED_ABILITY_SCORE",
    "DEFAULT_PROFICIENCY_BONUS",
    "DEFAULT_HIT_POINTS",
    "DEFAULT_ARMOR_CLASS",
    "DEFAULT_MAX_DEX_BONUS",
    "MIN_ARMOR_CLASS",
    "MIN_HIT_POINTS",
    "DEFAULT_SPEED",
    "DEFAULT_STARTING_GOLD",
    "DEFAULT_BACKGROUND_GOLD",
    "CURRENCY_SPLIT",
    "ATTACK_DIFFICULTY_CLASS",
    "SAVING_THROW_DIFFICULTY_CLASS",
    "ACTION_DICE",
    "FALLBACK_WELCOME",
    "FALLBACK_OPENING_SCENE",
    "FALLBACK_STORY_CONTINUATION",
    "FALLBACK_ENCOUNTER",
]
