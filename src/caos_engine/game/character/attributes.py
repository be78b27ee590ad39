"""Character attributes and attribute-derived stats for the Caos engine.

This module provides the six core attributes of Tabuleiro do Caos, an
enum-keyed lookup over them, and the stats that follow directly from a single
attribute (carrying capacity, dying rounds, languages, proficiency slots).
"""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from caos_engine.config import get_settings

from .errors import InvalidAttributeError


class AttributeName(StrEnum):
    """Core character attributes."""

    AGILIDADE = "agilidade"
    CORPO = "corpo"
    INFLUENCIA = "influencia"
    MENTE = "mente"
    ESSENCIA = "essencia"
    INSTINTO = "instinto"


# Constant attribute names for easy import
ATTRIBUTE_NAMES = [attr.value for attr in AttributeName]


class EncumbranceState(StrEnum):
    """Load states relative to carrying capacity."""

    NORMAL = "normal"
    SOBRECARREGADO = "sobrecarregado"
    IMOBILIZADO = "imobilizado"


def parse_attribute(name: "AttributeName | str") -> AttributeName:
    """Convert a raw attribute name into an AttributeName.

    Args:
        name: Attribute enum member or its string value

    Returns:
        The matching AttributeName

    Raises:
        InvalidAttributeError: If the name is not one of the six attributes
    """
    try:
        return AttributeName(name)
    except ValueError:
        raise InvalidAttributeError(f"Unknown attribute: {name!r}") from None


class AttributeSet(BaseModel):
    """The six attribute values of a character."""

    model_config = ConfigDict(frozen=True)

    agilidade: int = Field(default=1, description="Agility")
    corpo: int = Field(default=1, description="Body")
    influencia: int = Field(default=1, description="Influence")
    mente: int = Field(default=1, description="Mind")
    essencia: int = Field(default=1, description="Essence")
    instinto: int = Field(default=1, description="Instinct")

    def get(self, name: "AttributeName | str") -> int:
        """Look up an attribute value by name.

        Raises:
            InvalidAttributeError: If the name is not one of the six attributes
        """
        return getattr(self, parse_attribute(name).value)

    def is_special(self, name: "AttributeName | str") -> bool:
        """Check whether an attribute exceeds the normal display cap."""
        return self.get(name) > get_settings().attribute_display_cap

    def as_dict(self) -> dict[str, int]:
        """Return the attributes as a plain name -> value mapping."""
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}


@dataclass(frozen=True)
class DerivedStats:
    """Container for attribute-derived character statistics."""

    carry_capacity: int  # In Espaço units
    max_push: int
    max_lift: int
    max_dying_rounds: int
    additional_languages: int
    skill_proficiency_slots: int
    encumbrance: EncumbranceState


def carry_capacity(corpo: int, other_bonuses: int = 0) -> int:
    """Calculate carrying capacity.

    Examples:
        >>> carry_capacity(1)
        10
        >>> carry_capacity(3)
        20
    """
    return 5 + corpo * 5 + other_bonuses


def max_dying_rounds(corpo: int, other_bonuses: int = 0) -> int:
    """Rounds a character can stay in the dying state: 2 + Corpo."""
    return 2 + corpo + other_bonuses


def max_push(capacity: int) -> int:
    return capacity * 2


def max_lift(capacity: int) -> int:
    """Half the carrying capacity, rounded down."""
    return capacity // 2


def additional_languages(mente: int) -> int:
    """Languages known beyond Comum: Mente - 1, never negative."""
    return max(mente - 1, 0)


def skill_proficiency_slots(mente: int) -> int:
    """Number of skills a character may be proficient in: 3 + Mente."""
    return 3 + mente


def encumbrance_state(current_load: int, capacity: int) -> EncumbranceState:
    """Determine the load state for a carried weight.

    Args:
        current_load: Weight carried
        capacity: Carrying capacity

    Returns:
        NORMAL up to capacity, SOBRECARREGADO up to twice capacity,
        IMOBILIZADO beyond that
    """
    if current_load > capacity * 2:
        return EncumbranceState.IMOBILIZADO
    if current_load > capacity:
        return EncumbranceState.SOBRECARREGADO
    return EncumbranceState.NORMAL


def calculate_derived_stats(
    attributes: AttributeSet, current_load: int = 0, capacity_bonus: int = 0
) -> DerivedStats:
    """Calculate all attribute-derived stats for a character.

    Args:
        attributes: The character's attributes
        current_load: Weight currently carried
        capacity_bonus: Extra carrying capacity from abilities or equipment

    Returns:
        DerivedStats with every calculated value
    """
    capacity = carry_capacity(attributes.corpo, capacity_bonus)

    return DerivedStats(
        carry_capacity=capacity,
        max_push=max_push(capacity),
        max_lift=max_lift(capacity),
        max_dying_rounds=max_dying_rounds(attributes.corpo),
        additional_languages=additional_languages(attributes.mente),
        skill_proficiency_slots=skill_proficiency_slots(attributes.mente),
        encumbrance=encumbrance_state(current_load, capacity),
    )
