"""Signed modifiers and their aggregation into dice and flat deltas."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ModifierType(StrEnum):
    """Kind of modifier, always derived from the sign of its value."""

    BONUS = "bonus"
    PENALIDADE = "penalidade"


class Modifier(BaseModel):
    """
    A named signed adjustment.

    Attributes:
        name: Label shown to the player (e.g., "Sentido Aguçado")
        value: Signed amount
        affects_dice: True when the value changes the number of d20 rolled,
            False when it is a flat addend applied after rolling
        type: BONUS for positive values, PENALIDADE otherwise

    A ``type`` supplied by the caller is ignored; it is recomputed from ``value``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(default="", description="Modifier label")
    value: int = Field(default=0, description="Signed amount")
    affects_dice: bool = Field(default=False, description="Changes dice count instead of total")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def type(self) -> ModifierType:
        return ModifierType.BONUS if self.value > 0 else ModifierType.PENALIDADE


@dataclass(frozen=True)
class ModifierTotals:
    """Result of aggregating a modifier list."""

    dice_delta: int
    numeric_delta: int


def make_modifier(name: str, value: int, affects_dice: bool = False) -> Modifier:
    """Build a modifier; its type follows from the sign of ``value``."""
    return Modifier(name=name, value=value, affects_dice=affects_dice)


def sum_values(modifiers: Iterable[Modifier]) -> int:
    """Sum modifier values regardless of whether they affect dice."""
    return sum(mod.value for mod in modifiers)


def aggregate(modifiers: Iterable[Modifier]) -> ModifierTotals:
    """Reduce modifiers into a dice-count delta and a flat numeric delta.

    Args:
        modifiers: Any iterable of modifiers; order does not matter

    Returns:
        ModifierTotals with the dice-affecting and flat sums

    Examples:
        >>> aggregate([make_modifier("a", 2), make_modifier("b", -1, affects_dice=True)])
        ModifierTotals(dice_delta=-1, numeric_delta=2)
    """
    dice_delta = 0
    numeric_delta = 0
    for mod in modifiers:
        if mod.affects_dice:
            dice_delta += mod.value
        else:
            numeric_delta += mod.value
    return ModifierTotals(dice_delta=dice_delta, numeric_delta=numeric_delta)
