"""Proficiency tiers, signature-ability bonus and craft multipliers.

Proficiency ranks a skill's training from Leigo to Mestre. The rank ordinal is
the multiplier shown on the sheet; how that ordinal turns into a numeric bonus
is chosen through a pluggable strategy.
"""

from collections.abc import Callable
from enum import IntEnum

import structlog

from caos_engine.config import get_settings

from .errors import InvalidProficiencyError

logger = structlog.get_logger(__name__)


class ProficiencyLevel(IntEnum):
    """Skill training tiers; the value is the scaling multiplier."""

    LEIGO = 0
    ADEPTO = 1
    VERSADO = 2
    MESTRE = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


# Display names by tier
PROFICIENCY_LABELS = {level: level.label for level in ProficiencyLevel}

# (ordinal, attribute value) -> numeric bonus
ProficiencyBonusStrategy = Callable[[int, int], int]


def parse_proficiency(level: "ProficiencyLevel | str | int") -> ProficiencyLevel:
    """Convert a tier name, ordinal or enum member into a ProficiencyLevel.

    Args:
        level: "adepto", "Adepto", 1 or ProficiencyLevel.ADEPTO

    Raises:
        InvalidProficiencyError: If the value is not one of the four tiers
    """
    if isinstance(level, ProficiencyLevel):
        return level
    if isinstance(level, str):
        try:
            return ProficiencyLevel[level.upper()]
        except KeyError:
            raise InvalidProficiencyError(f"Unknown proficiency: {level!r}") from None
    if isinstance(level, int) and not isinstance(level, bool):
        try:
            return ProficiencyLevel(level)
        except ValueError:
            raise InvalidProficiencyError(f"Proficiency ordinal out of range: {level}") from None
    raise InvalidProficiencyError(f"Unsupported proficiency value: {level!r}")


def proficiency_ordinal(level: "ProficiencyLevel | str | int") -> int:
    """Return the 0-3 ordinal for a proficiency tier."""
    return int(parse_proficiency(level))


def no_proficiency_bonus(ordinal: int, attribute_value: int) -> int:
    """Proficiency adds nothing to the flat total."""
    return 0


def attribute_times_ordinal(ordinal: int, attribute_value: int) -> int:
    """Proficiency adds key attribute × tier ordinal.

    Examples:
        >>> attribute_times_ordinal(2, 2)
        4
        >>> attribute_times_ordinal(0, 3)
        0
    """
    return attribute_value * ordinal


PROFICIENCY_STRATEGIES: dict[str, ProficiencyBonusStrategy] = {
    "none": no_proficiency_bonus,
    "attribute_times_ordinal": attribute_times_ordinal,
}


def get_proficiency_strategy(name: str | None = None) -> ProficiencyBonusStrategy:
    """Look up a proficiency bonus strategy by name.

    Args:
        name: Strategy name; defaults to the configured ``proficiency_strategy``

    Returns:
        The strategy function. Unknown names fall back to ``no_proficiency_bonus``.
    """
    name = name or get_settings().proficiency_strategy
    strategy = PROFICIENCY_STRATEGIES.get(name)
    if strategy is None:
        logger.warning("unknown_proficiency_strategy", strategy=name)
        return no_proficiency_bonus
    return strategy


def signature_bonus(level: int, is_combat_skill: bool) -> int:
    """Calculate the Signature Ability bonus.

    Combat skills get a third of the character level (at least 1); every other
    skill gets the full level. The "only one signature skill" rule is enforced
    by the character-mutation boundary, not here.

    Examples:
        >>> signature_bonus(9, False)
        9
        >>> signature_bonus(9, True)
        3
        >>> signature_bonus(1, True)
        1
    """
    if is_combat_skill:
        return max(level // 3, 1)
    return level


def is_use_available(
    required: "ProficiencyLevel | str | int | None", current: "ProficiencyLevel | str | int"
) -> bool:
    """Check whether a default skill use is unlocked at the current tier."""
    if required is None:
        return True
    return parse_proficiency(current) >= parse_proficiency(required)


def craft_multiplier(level: int) -> int:
    """Multiplier applied to a craft's key attribute.

    Level 0 is x0, levels 1-2 x1, levels 3-4 x2 and level 5 x3.
    """
    if level <= 0:
        return 0
    if level <= 2:
        return 1
    if level <= 4:
        return 2
    return 3
