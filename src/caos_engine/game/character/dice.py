"""Attribute dice pools and the canonical roll-formula text.

Rules:
- An attribute of 0 always rolls two d20 and keeps the lowest ("-2d20"),
  whatever dice modifiers apply.
- Otherwise the pool is one d20 per attribute point plus dice modifiers, and
  the highest die is kept.
- A flat total is appended as "+k"/"-k" only when it is nonzero.
"""

from dataclasses import dataclass

# Dice rolled when keeping the lowest result
TAKE_LOWEST_DICE = 2


@dataclass(frozen=True)
class DicePool:
    """Number of d20 to roll and which die to keep."""

    dice_count: int
    take_lowest: bool


@dataclass(frozen=True)
class RollFormula:
    """Everything a dice roller needs to roll a check, plus its display text."""

    dice_count: int
    take_lowest: bool
    numeric_total: int
    formula: str


def resolve_dice_pool(attribute_value: int, dice_delta: int = 0) -> DicePool:
    """Convert an attribute value and dice delta into a dice pool.

    ``take_lowest`` depends only on the raw attribute. While it is active the
    dice delta is ignored and the pool is two dice. Otherwise the pool never
    drops below a single die.

    Args:
        attribute_value: Raw value of the key attribute
        dice_delta: Sum of dice-affecting modifiers

    Returns:
        The resolved DicePool

    Examples:
        >>> resolve_dice_pool(0, 3)
        DicePool(dice_count=2, take_lowest=True)
        >>> resolve_dice_pool(2, 1)
        DicePool(dice_count=3, take_lowest=False)
    """
    if attribute_value == 0:
        return DicePool(dice_count=TAKE_LOWEST_DICE, take_lowest=True)

    dice_count = max(attribute_value, 0) + dice_delta
    return DicePool(dice_count=max(dice_count, 1), take_lowest=False)


def format_numeric_suffix(numeric_total: int) -> str:
    if numeric_total > 0:
        return f"+{numeric_total}"
    if numeric_total < 0:
        return str(numeric_total)
    return ""


def format_roll_formula(dice_count: int, take_lowest: bool, numeric_total: int = 0) -> str:
    """Render a roll as its canonical display string.

    Examples:
        >>> format_roll_formula(2, True, 0)
        '-2d20'
        >>> format_roll_formula(1, False, 3)
        '1d20+3'
        >>> format_roll_formula(3, False, -2)
        '3d20 (maior)-2'
    """
    if take_lowest:
        dice = f"-{TAKE_LOWEST_DICE}d20"
    elif dice_count == 1:
        dice = "1d20"
    else:
        dice = f"{dice_count}d20 (maior)"

    return dice + format_numeric_suffix(numeric_total)


def build_roll_formula(pool: DicePool, numeric_total: int = 0) -> RollFormula:
    """Combine a dice pool and a flat total into a RollFormula."""
    return RollFormula(
        dice_count=pool.dice_count,
        take_lowest=pool.take_lowest,
        numeric_total=numeric_total,
        formula=format_roll_formula(pool.dice_count, pool.take_lowest, numeric_total),
    )
