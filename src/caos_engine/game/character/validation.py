"""Character-mutation boundary.

Rules that span several entities are checked here, where character edits are
applied, rather than in the calculators:

- at most one skill is the Signature Ability
- at most one armor is equipped
"""

import structlog

from .errors import CharacterValidationError
from .models import Character

logger = structlog.get_logger(__name__)


def validate_character(character: Character) -> None:
    """Check the cross-entity rules of a snapshot.

    Raises:
        CharacterValidationError: If more than one skill is signature or more
            than one armor is equipped
    """
    signatures = sorted(name for name, skill in character.skills.items() if skill.is_signature)
    if len(signatures) > 1:
        raise CharacterValidationError(
            f"Only one signature skill allowed, found: {', '.join(signatures)}"
        )

    equipped = [armor.name for armor in character.armors if armor.equipped]
    if len(equipped) > 1:
        raise CharacterValidationError(
            f"Only one armor may be equipped, found: {', '.join(equipped)}"
        )


def set_signature_skill(character: Character, skill_name: str | None) -> Character:
    """Make one skill the Signature Ability and clear the flag on every other.

    Args:
        character: Current snapshot
        skill_name: New signature skill, or None to clear it

    Returns:
        A new snapshot

    Raises:
        CharacterValidationError: If the skill is not on the character
    """
    if skill_name is not None and skill_name not in character.skills:
        raise CharacterValidationError(f"Character has no skill '{skill_name}'")

    skills = {
        name: skill.model_copy(update={"is_signature": name == skill_name})
        for name, skill in character.skills.items()
    }
    logger.info("signature_skill_changed", character=character.name, skill=skill_name)
    return character.model_copy(update={"skills": skills})


def equip_armor(character: Character, armor_name: str | None) -> Character:
    """Equip one armor and unequip the rest.

    Args:
        character: Current snapshot
        armor_name: Armor to equip, or None to unequip everything

    Returns:
        A new snapshot

    Raises:
        CharacterValidationError: If the armor is not owned
    """
    if armor_name is not None and all(armor.name != armor_name for armor in character.armors):
        raise CharacterValidationError(f"Character has no armor '{armor_name}'")

    armors = [
        armor.model_copy(update={"equipped": armor.name == armor_name})
        for armor in character.armors
    ]
    logger.info("armor_equipped", character=character.name, armor=armor_name)
    return character.model_copy(update={"armors": armors})
