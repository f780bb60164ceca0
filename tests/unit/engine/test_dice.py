"""Tests for dice rolling mechanics."""

from __future__ import annotations

import pytest

from dungeon_master.core.exceptions import InvalidDiceNotationError
from dungeon_master.engine.dice import (
    DiceExpression,
    DiceRoll,
    DiceRoller,
    ability_modifier,
    get_roller,
    parse_notation,
    roll,
)


class TestParseNotation:
    """Tests for dice notation parsing."""

    def test_simple(self) -> None:
        assert parse_notation("1d20") == DiceExpression(count=1, sides=20, modifier=0)

    def test_modifier(self) -> None:
        assert parse_notation("2d6+3") == DiceExpression(count=2, sides=6, modifier=3)
        assert parse_notation("1d8-1") == DiceExpression(count=1, sides=8, modifier=-1)

    def test_case_and_whitespace_ignored(self) -> None:
        """Test notation is lower-cased and stripped of whitespace."""
        assert parse_notation(" 2D6 + 3 ") == DiceExpression(count=2, sides=6, modifier=3)

    @pytest.mark.parametrize("notation", ["", "d20", "2d", "abc", "2d6+", "1d20x", "2d6*2"])
    def test_invalid(self, notation: str) -> None:
        with pytest.raises(InvalidDiceNotationError):
            parse_notation(notation)

    @pytest.mark.parametrize("notation", ["0d6", "2d0"])
    def test_zero_dice_or_sides(self, notation: str) -> None:
        with pytest.raises(InvalidDiceNotationError):
            parse_notation(notation)

    def test_to_d20(self) -> None:
        assert DiceExpression(2, 6, 3).to_d20() == "2d6+3"
        assert DiceExpression(1, 20, -2).to_d20() == "1d20-2"
        assert DiceExpression(1, 4).to_d20() == "1d4"


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_roll_notation_bounds(self, seeded_roller: DiceRoller) -> None:
        """Test 2d6+3 always lands in [5, 15]."""
        for _ in range(200):
            result = seeded_roller.roll_notation("2d6+3")

            assert 5 <= result.total <= 15
            assert len(result.rolls) == 2
            assert all(1 <= face <= 6 for face in result.rolls)
            assert result.total == sum(result.rolls) + 3

    def test_notation_echoed_verbatim(self, seeded_roller: DiceRoller) -> None:
        result = seeded_roller.roll_notation("2D6 + 3")

        assert result.notation == "2D6 + 3"
        assert result.modifier == 3
        assert result.sides == 6

    def test_bogus_notation_rejected(self, seeded_roller: DiceRoller) -> None:
        with pytest.raises(InvalidDiceNotationError):
            seeded_roller.roll_notation("roll a d20")

    def test_roll_dice(self, seeded_roller: DiceRoller) -> None:
        for _ in range(100):
            assert 3 <= seeded_roller.roll_dice(3, 6) <= 18

    def test_roll_dice_rejects_zero(self, seeded_roller: DiceRoller) -> None:
        with pytest.raises(InvalidDiceNotationError):
            seeded_roller.roll_dice(0, 6)

    def test_roll_d20(self, seeded_roller: DiceRoller) -> None:
        result = seeded_roller.roll_d20(5)

        assert 6 <= result.total <= 25
        assert len(result.rolls) == 1

    def test_advantage_keeps_higher(self, seeded_roller: DiceRoller) -> None:
        """Test advantage keeps the higher of two raw draws."""
        for _ in range(50):
            result = seeded_roller.roll_with_advantage(2)

            assert len(result.rolls) == 2
            assert result.total == max(result.rolls) + 2

    def test_disadvantage_keeps_lower(self, seeded_roller: DiceRoller) -> None:
        for _ in range(50):
            result = seeded_roller.roll_with_disadvantage()

            assert len(result.rolls) == 2
            assert result.total == min(result.rolls)

    def test_seeded_rolls_repeat(self) -> None:
        """Test the same seed gives the same sequence."""
        first = [DiceRoller(seed=7).roll_notation("4d6").total for _ in range(1)]
        second = [DiceRoller(seed=7).roll_notation("4d6").total for _ in range(1)]

        assert first == second

    def test_ability_scores(self, seeded_roller: DiceRoller) -> None:
        """Test six scores, each within 4d6-drop-lowest bounds."""
        for _ in range(20):
            scores = seeded_roller.generate_ability_scores()

            assert len(scores) == 6
            assert all(3 <= score <= 18 for score in scores)


class TestDiceRoll:
    """Tests for the DiceRoll result type."""

    def test_natural_twenty_only_on_d20(self) -> None:
        d20 = DiceRoll(rolls=(20,), modifier=0, total=20, notation="1d20", sides=20)
        d8 = DiceRoll(rolls=(8,), modifier=0, total=8, notation="1d8", sides=8)

        assert d20.natural_twenty
        assert not d20.natural_one
        assert not d8.natural_twenty

    def test_natural_one(self) -> None:
        result = DiceRoll(rolls=(1,), modifier=4, total=5, notation="1d20+4")

        assert result.natural_one

    def test_str(self) -> None:
        result = DiceRoll(rolls=(3, 4), modifier=3, total=10, notation="2d6+3", sides=6)

        assert str(result) == "2d6+3: [3, 4] +3 = 10"

    def test_frozen(self) -> None:
        result = DiceRoll(rolls=(3,), modifier=0, total=3, notation="1d6", sides=6)

        with pytest.raises(AttributeError):
            result.total = 6  # type: ignore[misc]


class TestModuleHelpers:
    @pytest.mark.parametrize(
        ("score", "modifier"),
        [(1, -5), (8, -1), (9, -1), (10, 0), (11, 0), (12, 1), (15, 2), (18, 4), (20, 5)],
    )
    def test_ability_modifier(self, score: int, modifier: int) -> None:
        assert ability_modifier(score) == modifier

    def test_shared_roller(self) -> None:
        assert get_roller() is get_roller()

    def test_roll_shortcut(self) -> None:
        assert 1 <= roll("1d4").total <= 4
