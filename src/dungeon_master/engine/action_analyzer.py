"""Action analyzer.

Maps free-text player actions to the dice roll they call for, using keyword
heuristics rather than a rules engine. Categories are checked in a fixed
order and the first match wins:

1. attacks
2. the eighteen skills
3. saving throws
4. damage
5. initiative

Text that matches nothing is purely narrative and never rolls.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from dungeon_master.core.constants import (
    ACTION_DICE,
    ATTACK_DIFFICULTY_CLASS,
    SAVING_THROW_DIFFICULTY_CLASS,
)
from dungeon_master.core.logging import get_logger
from dungeon_master.engine.dice import DiceRoll, DiceRoller, get_roller, parse_notation
from dungeon_master.models.character import PlayerCharacter
from dungeon_master.models.enums import Ability, RollCategory, Skill


logger = get_logger(__name__)


# =============================================================================
# Keyword Tables
# =============================================================================


# Keywords match whole words only; inflected forms are listed explicitly.
ATTACK_KEYWORDS = (
    "attack", "attacks", "attacking", "strike", "strikes", "striking", "hit", "hits",
    "hitting", "swing", "swings", "swinging", "stab", "stabs", "stabbing", "slash",
    "slashes", "slashing", "shoot", "shoots", "shooting", "punch", "punches", "punching",
    "kick", "kicks", "kicking", "fight", "fights", "fighting", "lunge at", "charge at",
    "smite", "smites", "cleave", "cleaves", "fire at",
)

RANGED_OR_FINESSE_KEYWORDS = (
    "bow", "longbow", "shortbow", "crossbow", "arrow", "arrows", "bolt", "bolts", "shoot",
    "shoots", "shooting", "dagger", "daggers", "rapier", "dart", "darts", "sling", "throw",
    "throws", "throwing", "fire at",
)

# Ordered: a phrase is attributed to the first skill whose keywords match.
SKILL_KEYWORDS: dict[Skill, tuple[str, ...]] = {
    Skill.ATHLETICS: (
        "climb", "climbs", "climbing", "jump", "jumps", "jumping", "swim", "swims", "swimming",
        "lift", "lifts", "lifting", "push", "pushes", "pushing", "shove", "shoves", "shoving",
        "grapple", "grapples", "grappling", "break down",
    ),
    Skill.ACROBATICS: (
        "flip", "flips", "flipping", "tumble", "tumbles", "tumbling", "balance", "balancing",
        "somersault", "cartwheel", "vault", "vaults", "vaulting",
    ),
    Skill.SLEIGHT_OF_HAND: (
        "pickpocket", "pickpockets", "pickpocketing", "pick the lock", "pick a lock", "palm",
        "palms", "palming", "lift his purse",
    ),
    Skill.STEALTH: (
        "sneak", "sneaks", "sneaking", "hide", "hides", "hiding", "creep", "creeps", "creeping",
        "stealthily", "tiptoe", "tiptoes", "tiptoeing", "quietly",
    ),
    Skill.ARCANA: (
        "arcane", "magic", "magical", "spell", "spells", "rune", "runes", "enchantment",
        "enchantments", "ritual", "rituals",
    ),
    Skill.HISTORY: (
        "history", "recall", "recalls", "remember", "remembers", "legend", "legends", "ancient",
    ),
    Skill.INVESTIGATION: (
        "investigate", "investigates", "investigating", "search", "searches", "searching",
        "examine", "examines", "examining", "inspect", "inspects", "inspecting", "analyze",
        "analyzes", "analyzing", "study", "studies", "studying",
    ),
    Skill.NATURE: (
        "nature", "plant", "plants", "herb", "herbs", "terrain", "weather",
        "identify the creature",
    ),
    Skill.RELIGION: (
        "pray", "prays", "praying", "prayer", "religion", "deity", "holy", "divine", "temple",
    ),
    Skill.ANIMAL_HANDLING: (
        "calm the", "tame", "tames", "taming", "ride", "rides", "riding", "soothe", "soothes",
        "soothing", "animal", "animals", "horse", "horses",
    ),
    Skill.INSIGHT: ("read his", "read her", "sense motive", "lying", "intentions", "insight"),
    Skill.MEDICINE: (
        "heal", "heals", "healing", "bandage", "bandages", "bandaging", "stabilize",
        "stabilizes", "stabilizing", "treat", "treats", "treating", "diagnose", "diagnoses",
        "diagnosing", "tend", "tends", "tending",
    ),
    Skill.PERCEPTION: (
        "look", "looks", "looking", "listen", "listens", "listening", "spot", "spots",
        "spotting", "notice", "notices", "noticing", "watch", "watches", "watching", "peer",
        "peers", "peering", "scan", "scans", "scanning", "perceive", "perceives",
    ),
    Skill.SURVIVAL: (
        "track", "tracks", "tracking", "forage", "forages", "foraging", "hunt", "hunts",
        "hunting", "navigate", "navigates", "navigating", "follow the trail", "survive",
        "survives",
    ),
    Skill.DECEPTION: (
        "lie", "lies", "deceive", "deceives", "deceiving", "bluff", "bluffs", "bluffing",
        "trick", "tricks", "tricking", "disguise", "disguises", "pretend", "pretends",
        "pretending",
    ),
    Skill.INTIMIDATION: (
        "intimidate", "intimidates", "intimidating", "threaten", "threatens", "threatening",
        "scare", "scares", "scaring", "menace", "glare", "glares", "glaring", "frighten",
        "frightens",
    ),
    Skill.PERFORMANCE: (
        "perform", "performs", "performing", "sing", "sings", "singing", "dance", "dances",
        "dancing", "play music", "act out", "entertain", "entertains", "entertaining",
    ),
    Skill.PERSUASION: (
        "persuade", "persuades", "persuading", "convince", "convinces", "convincing",
        "negotiate", "negotiates", "negotiating", "bargain", "bargaining", "plead", "pleads",
        "pleading", "haggle", "haggles", "haggling",
    ),
}

SKILL_DIFFICULTY_CLASS: dict[Skill, int] = {
    Skill.ATHLETICS: 12,
    Skill.ACROBATICS: 12,
    Skill.SLEIGHT_OF_HAND: 14,
    Skill.STEALTH: 13,
    Skill.ARCANA: 15,
    Skill.HISTORY: 13,
    Skill.INVESTIGATION: 13,
    Skill.NATURE: 13,
    Skill.RELIGION: 13,
    Skill.ANIMAL_HANDLING: 12,
    Skill.INSIGHT: 13,
    Skill.MEDICINE: 12,
    Skill.PERCEPTION: 12,
    Skill.SURVIVAL: 12,
    Skill.DECEPTION: 14,
    Skill.INTIMIDATION: 13,
    Skill.PERFORMANCE: 12,
    Skill.PERSUASION: 13,
}

# Ordered: the first matching ability decides which save is rolled.
SAVING_THROW_KEYWORDS: dict[Ability, tuple[str, ...]] = {
    Ability.DEX: (
        "dodge", "dodges", "dodging", "evade", "evades", "evading", "duck", "ducks", "dive away",
    ),
    Ability.CON: (
        "resist the poison", "endure", "endures", "withstand", "withstands", "hold my breath",
    ),
    Ability.WIS: ("resist the charm", "shake off", "steel my mind", "resist the spell"),
    Ability.STR: ("brace", "braces", "bracing", "hold my ground", "resist being pushed"),
    Ability.INT: ("see through the illusion",),
    Ability.CHA: ("resist the possession", "banish", "banishes"),
}
GENERIC_SAVE_KEYWORDS = ("saving throw", "resist", "resists", "resisting", "save against")

# Damage dice by weapon keyword; checked in order, falling back to a d6.
DAMAGE_KEYWORDS = ("damage", "wound", "wounds", "deal", "deals", "dealing", "roll damage")
WEAPON_DAMAGE_DICE: tuple[tuple[str, str], ...] = (
    ("greataxe", "1d12"),
    ("greatsword", "2d6"),
    ("longsword", "1d8"),
    ("rapier", "1d8"),
    ("longbow", "1d8"),
    ("crossbow", "1d8"),
    ("axe", "1d6"),
    ("shortsword", "1d6"),
    ("mace", "1d6"),
    ("dagger", "1d4"),
)
DEFAULT_DAMAGE_DICE = "1d6"

INITIATIVE_KEYWORDS = ("initiative", "ready myself", "draw my weapon", "react first", "get ready")


def _compile(keywords: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternatives})\b")


_ATTACK_PATTERN = _compile(ATTACK_KEYWORDS)
_RANGED_PATTERN = _compile(RANGED_OR_FINESSE_KEYWORDS)
_SKILL_PATTERNS = {skill: _compile(words) for skill, words in SKILL_KEYWORDS.items()}
_SAVE_PATTERNS = {ability: _compile(words) for ability, words in SAVING_THROW_KEYWORDS.items()}
_GENERIC_SAVE_PATTERN = _compile(GENERIC_SAVE_KEYWORDS)
_DAMAGE_PATTERN = _compile(DAMAGE_KEYWORDS)
_INITIATIVE_PATTERN = _compile(INITIATIVE_KEYWORDS)


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class ActionAnalysis:
    """What roll, if any, an action calls for."""

    requires_roll: bool
    category: RollCategory = RollCategory.NONE
    attack_roll: bool = False
    skill_check: str | None = None
    saving_throw: str | None = None
    ability: Ability | None = None
    modifier: int = 0
    difficulty_class: int | None = None
    dice_type: str = ACTION_DICE

    @classmethod
    def no_roll(cls) -> ActionAnalysis:
        return cls(requires_roll=False)


@dataclass(frozen=True)
class AutomaticDiceRoll:
    """A roll made on a player's behalf when their action called for one."""

    action: str
    dice_type: str
    modifier: int
    difficulty_class: int | None
    success: bool
    critical_success: bool
    critical_failure: bool
    roll: DiceRoll
    category: RollCategory = RollCategory.NONE
    label: str = ""

    def summary(self) -> str:
        """Human-readable result stored alongside the pending action."""
        parts = [f"{self.label or self.category}: {self.roll}"]
        if self.difficulty_class is not None:
            outcome = "success" if self.success else "failure"
            parts.append(f"vs DC {self.difficulty_class} ({outcome})")
        if self.critical_success:
            parts.append("natural 20!")
        elif self.critical_failure:
            parts.append("natural 1!")
        return " ".join(parts)


# =============================================================================
# Analyzer
# =============================================================================


class ActionAnalyzer:
    """Heuristic mapper from action text to a required roll.

    Example:
        >>> analyzer = ActionAnalyzer()
        >>> analysis = analyzer.analyze("I sneak past the guards", character)
        >>> analysis.skill_check
        'Stealth'
    """

    def __init__(self, roller: DiceRoller | None = None) -> None:
        self._roller = roller

    @property
    def roller(self) -> DiceRoller:
        return self._roller or get_roller()

    def analyze(self, action_text: str, character: PlayerCharacter) -> ActionAnalysis:
        """Classify an action.

        Args:
            action_text: Free text submitted by the player.
            character: The acting character, for modifiers.

        Returns:
            The analysis; ``requires_roll`` is False when nothing matched.
        """
        if not isinstance(action_text, str) or not action_text.strip():
            return ActionAnalysis.no_roll()
        text = action_text.lower()

        if _ATTACK_PATTERN.search(text):
            ability = Ability.DEX if _RANGED_PATTERN.search(text) else Ability.STR
            return ActionAnalysis(
                requires_roll=True,
                category=RollCategory.ATTACK,
                attack_roll=True,
                ability=ability,
                modifier=character.stats.modifier(ability),
                difficulty_class=ATTACK_DIFFICULTY_CLASS,
            )

        for skill, pattern in _SKILL_PATTERNS.items():
            if pattern.search(text):
                return ActionAnalysis(
                    requires_roll=True,
                    category=RollCategory.SKILL_CHECK,
                    skill_check=skill.display_name,
                    ability=skill.ability,
                    modifier=character.skill_modifier(skill),
                    difficulty_class=SKILL_DIFFICULTY_CLASS[skill],
                )

        save_ability = self._match_saving_throw(text)
        if save_ability is not None:
            entry = character.saving_throws.get(save_ability.value)
            modifier = entry.modifier if entry else character.stats.modifier(save_ability)
            return ActionAnalysis(
                requires_roll=True,
                category=RollCategory.SAVING_THROW,
                saving_throw=save_ability.full_name,
                ability=save_ability,
                modifier=modifier,
                difficulty_class=SAVING_THROW_DIFFICULTY_CLASS,
            )

        if _DAMAGE_PATTERN.search(text):
            dice = next(
                (d for weapon, d in WEAPON_DAMAGE_DICE if weapon in text), DEFAULT_DAMAGE_DICE
            )
            return ActionAnalysis(
                requires_roll=True,
                category=RollCategory.DAMAGE,
                ability=Ability.STR,
                modifier=character.stats.modifier(Ability.STR),
                dice_type=dice,
            )

        if _INITIATIVE_PATTERN.search(text):
            return ActionAnalysis(
                requires_roll=True,
                category=RollCategory.INITIATIVE,
                ability=Ability.DEX,
                modifier=character.initiative,
            )

        return ActionAnalysis.no_roll()

    @staticmethod
    def _match_saving_throw(text: str) -> Ability | None:
        for ability, pattern in _SAVE_PATTERNS.items():
            if pattern.search(text):
                return ability
        if _GENERIC_SAVE_PATTERN.search(text):
            return Ability.CON
        return None

    def generate_automatic_roll(
        self,
        action_text: str,
        character: PlayerCharacter,
    ) -> AutomaticDiceRoll | None:
        """Analyze an action and roll for it if needed.

        Critical flags come from individual d20 faces, not the total.

        Returns:
            The roll, or None for purely narrative actions.
        """
        analysis = self.analyze(action_text, character)
        if not analysis.requires_roll:
            return None

        parsed = parse_notation(analysis.dice_type)
        notation = parsed.to_d20()
        modifier = analysis.modifier + parsed.modifier
        if modifier:
            notation = f"{parsed.count}d{parsed.sides}{modifier:+d}"
        roll = self.roller.roll_notation(notation)

        success = (
            roll.total >= analysis.difficulty_class
            if analysis.difficulty_class is not None
            else True
        )
        result = AutomaticDiceRoll(
            action=action_text,
            dice_type=analysis.dice_type,
            modifier=modifier,
            difficulty_class=analysis.difficulty_class,
            success=success,
            critical_success=roll.natural_twenty,
            critical_failure=roll.natural_one,
            roll=roll,
            category=analysis.category,
            label=self._label(analysis),
        )
        logger.info(
            "Automatic roll",
            category=str(analysis.category),
            label=result.label,
            total=roll.total,
            difficulty_class=analysis.difficulty_class,
            success=success,
        )
        return result

    @staticmethod
    def _label(analysis: ActionAnalysis) -> str:
        if analysis.attack_roll:
            return "Attack roll"
        if analysis.skill_check:
            return f"{analysis.skill_check} check"
        if analysis.saving_throw:
            return f"{analysis.saving_throw} saving throw"
        if analysis.category == RollCategory.DAMAGE:
            return "Damage roll"
        if analysis.category == RollCategory.INITIATIVE:
            return "Initiative"
        return str(analysis.category)


__all__ = [
    "ATTACK_KEYWORDS",
    "SKILL_KEYWORDS",
    "SKILL_DIFFICULTY_CLASS",
    "SAVING_THROW_KEYWORDS",
    "ActionAnalysis",
    "AutomaticDiceRoll",
    "ActionAnalyzer",
]
