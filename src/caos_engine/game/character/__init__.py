"""Character-related calculations: attributes, modifiers, dice pools and skill uses."""

from .attributes import ATTRIBUTE_NAMES, AttributeName, AttributeSet, calculate_derived_stats
from .dice import format_roll_formula, resolve_dice_pool
from .modifiers import Modifier, aggregate, make_modifier
from .proficiency import ProficiencyLevel, proficiency_ordinal, signature_bonus
from .uses import CustomUse, DefaultUse, GeneralUse, resolve_use, skill_check

__all__ = [
    "ATTRIBUTE_NAMES",
    "AttributeName",
    "AttributeSet",
    "CustomUse",
    "DefaultUse",
    "GeneralUse",
    "Modifier",
    "ProficiencyLevel",
    "aggregate",
    "calculate_derived_stats",
    "format_roll_formula",
    "make_modifier",
    "proficiency_ordinal",
    "resolve_dice_pool",
    "resolve_use",
    "signature_bonus",
    "skill_check",
]
