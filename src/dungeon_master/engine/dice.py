"""Dice rolling mechanics.

Every random number in the engine comes from the d20 library through this
module: plain ``NdM+K`` notation, advantage and disadvantage, and ability
score generation (4d6 drop lowest). Results are immutable value objects.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Any

import d20

from dungeon_master.core.constants import ABILITY_SCORE_COUNT
from dungeon_master.core.exceptions import InvalidDiceNotationError
from dungeon_master.core.logging import get_logger


logger = get_logger(__name__)

NOTATION_PATTERN = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$")


@dataclass(frozen=True)
class DiceExpression:
    """A parsed ``NdM+K`` expression."""

    count: int
    sides: int
    modifier: int = 0

    def to_d20(self) -> str:
        """Render as a d20 library expression."""
        expression = f"{self.count}d{self.sides}"
        if self.modifier:
            expression += f"{self.modifier:+d}"
        return expression


@dataclass(frozen=True)
class DiceRoll:
    """Result of a roll.

    Attributes:
        rolls: Every individual die face drawn, including dropped ones.
        modifier: Static modifier added to the kept dice.
        total: Final result.
        notation: The notation as supplied by the caller, for display.
        sides: Die size, so callers can inspect d20 faces.
    """

    rolls: tuple[int, ...]
    modifier: int
    total: int
    notation: str
    sides: int = 20
    kept: tuple[int, ...] = field(default=())

    @property
    def natural_twenty(self) -> bool:
        return self.sides == 20 and 20 in self.rolls

    @property
    def natural_one(self) -> bool:
        return self.sides == 20 and 1 in self.rolls

    def __str__(self) -> str:
        faces = ", ".join(str(r) for r in self.rolls)
        if self.modifier:
            return f"{self.notation}: [{faces}] {self.modifier:+d} = {self.total}"
        return f"{self.notation}: [{faces}] = {self.total}"


def parse_notation(notation: str) -> DiceExpression:
    """Parse ``NdM``, ``NdM+K`` or ``NdM-K`` notation.

    Matching is case-insensitive and ignores whitespace.

    Args:
        notation: The dice notation (e.g., '2d6+3').

    Returns:
        The parsed DiceExpression.

    Raises:
        InvalidDiceNotationError: If the notation is malformed or uses zero
            dice or zero-sided dice.
    """
    if not isinstance(notation, str):
        raise InvalidDiceNotationError("Dice notation must be a string", expression=notation)

    cleaned = re.sub(r"\s+", "", notation).lower()
    match = NOTATION_PATTERN.match(cleaned)
    if match is None:
        raise InvalidDiceNotationError(
            f"Invalid dice notation: {notation!r}",
            expression=notation,
        )

    count, sides = int(match.group(1)), int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0
    if count < 1 or sides < 1:
        raise InvalidDiceNotationError(
            "Dice notation needs at least one die with at least one side",
            expression=notation,
        )
    return DiceExpression(count=count, sides=sides, modifier=modifier)


def _dice_faces(node: Any) -> tuple[list[int], list[int]]:
    """Collect (all faces, kept faces) from a d20 expression tree."""
    faces: list[int] = []
    kept: list[int] = []

    def traverse(current: Any) -> None:
        if isinstance(current, d20.Dice):
            for die in current.values:
                faces.append(die.number)
                if die.kept:
                    kept.append(die.number)
        elif hasattr(current, "children"):
            for child in current.children:
                traverse(child)

    traverse(node)
    return faces, kept


class DiceRoller:
    """Dice roller backed by the d20 library.

    Example:
        >>> roller = DiceRoller()
        >>> result = roller.roll_notation("2d6+3")
        >>> 5 <= result.total <= 15
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)

    def _roll(self, expression: str, *, notation: str, sides: int, modifier: int) -> DiceRoll:
        result = d20.roll(expression)
        faces, kept = _dice_faces(result.expr)
        roll = DiceRoll(
            rolls=tuple(faces),
            modifier=modifier,
            total=result.total,
            notation=notation,
            sides=sides,
            kept=tuple(kept),
        )
        logger.debug("Dice rolled", notation=notation, rolls=faces, total=roll.total)
        return roll

    def roll_dice(self, count: int, sides: int) -> int:
        """Roll ``count`` dice with ``sides`` faces and return the sum.

        Raises:
            InvalidDiceNotationError: If count or sides is below one.
        """
        if count < 1 or sides < 1:
            raise InvalidDiceNotationError(
                "Cannot roll fewer than one die or dice with fewer than one side",
                expression=f"{count}d{sides}",
            )
        notation = f"{count}d{sides}"
        return self._roll(notation, notation=notation, sides=sides, modifier=0).total

    def roll_notation(self, notation: str) -> DiceRoll:
        """Roll an ``NdM+K`` expression.

        Args:
            notation: Dice notation; echoed verbatim on the result.

        Returns:
            DiceRoll with one face per die.

        Raises:
            InvalidDiceNotationError: If the notation is malformed.
        """
        parsed = parse_notation(notation)
        return self._roll(
            parsed.to_d20(),
            notation=notation,
            sides=parsed.sides,
            modifier=parsed.modifier,
        )

    def roll_d20(self, modifier: int = 0) -> DiceRoll:
        notation = DiceExpression(1, 20, modifier).to_d20()
        return self._roll(notation, notation=notation, sides=20, modifier=modifier)

    def roll_with_advantage(self, modifier: int = 0) -> DiceRoll:
        """Roll two d20, keep the higher, add the modifier.

        ``rolls`` holds both raw draws.
        """
        expression = "2d20kh1" + (f"{modifier:+d}" if modifier else "")
        return self._roll(expression, notation=expression, sides=20, modifier=modifier)

    def roll_with_disadvantage(self, modifier: int = 0) -> DiceRoll:
        """Roll two d20, keep the lower, add the modifier.

        ``rolls`` holds both raw draws.
        """
        expression = "2d20kl1" + (f"{modifier:+d}" if modifier else "")
        return self._roll(expression, notation=expression, sides=20, modifier=modifier)

    def generate_ability_scores(self) -> list[int]:
        """Generate six scores, each 4d6 with the lowest die dropped.

        Returns:
            Scores in strength, dexterity, constitution, intelligence,
            wisdom, charisma order.
        """
        scores = [d20.roll("4d6kh3").total for _ in range(ABILITY_SCORE_COUNT)]
        logger.debug("Ability scores generated", scores=scores)
        return scores


def ability_modifier(score: int) -> int:
    """Ability modifier: floor((score - 10) / 2). Negative below 10."""
    return (score - 10) // 2


_default_roller: DiceRoller | None = None


def get_roller() -> DiceRoller:
    """Get the shared default roller."""
    global _default_roller
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller


def roll(notation: str) -> DiceRoll:
    """Roll notation with the shared default roller."""
    return get_roller().roll_notation(notation)


__all__ = [
    "NOTATION_PATTERN",
    "DiceExpression",
    "DiceRoll",
    "DiceRoller",
    "parse_notation",
    "ability_modifier",
    "get_roller",
    "roll",
]
