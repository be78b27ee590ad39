"""Spell difficulty, attack bonus, learning chance and PP cost."""

from caos_engine.game.character.errors import InvalidSpellCircleError
from caos_engine.game.character.models import Character, SpellcastingAbility
from caos_engine.game.character.proficiency import ProficiencyBonusStrategy
from caos_engine.game.systems.resources import spellcasting_modifier

# Base difficulty (ND) of every spell
SPELL_BASE_DC = 12

SPELL_LEARNING_MIN_CHANCE = 1
SPELL_LEARNING_MAX_CHANCE = 99

# Learning chance modifier by spell circle
SPELL_LEARNING_CIRCLE_MODIFIER: dict[int, int] = {
    1: 30,
    2: 10,
    3: 0,
    4: -10,
    5: -20,
    6: -30,
    7: -50,
    8: -70,
}


def spell_dc(essencia: int, skill_modifier: int, dc_bonus: int = 0) -> int:
    """Spell difficulty: 12 + Essência + casting skill modifier + bonus.

    Examples:
        >>> spell_dc(3, 6)
        21
    """
    return SPELL_BASE_DC + essencia + skill_modifier + dc_bonus


def spell_attack_bonus(essencia: int, skill_modifier: int, attack_bonus: int = 0) -> int:
    """Spell attack bonus: Essência + casting skill modifier + bonus."""
    return essencia + skill_modifier + attack_bonus


def spell_learning_chance(
    mente: int,
    skill_modifier: int,
    circle: int,
    is_first_spell: bool = False,
    known_spells_modifier: int = 0,
    matrix_modifier: int = 0,
    other_modifiers: int = 0,
) -> int:
    """
    Percent chance to learn a spell, clamped to 1-99.

    Base is Mente × 5 plus the casting skill modifier and the circle modifier.
    A character's first spell gets no first-circle bonus.

    Args:
        mente: Mente attribute value
        skill_modifier: Casting skill modifier
        circle: Spell circle (1-8)
        is_first_spell: Whether the character knows no spells yet
        known_spells_modifier: Modifier for the number of spells known
        matrix_modifier: Modifier for a mastered matrix
        other_modifiers: Anything else

    Returns:
        The learning chance in percent

    Raises:
        InvalidSpellCircleError: If the circle is not 1-8
    """
    if circle not in SPELL_LEARNING_CIRCLE_MODIFIER:
        raise InvalidSpellCircleError(f"Spell circle must be between 1 and 8, got {circle}")

    circle_modifier = SPELL_LEARNING_CIRCLE_MODIFIER[circle]
    if circle == 1 and is_first_spell:
        circle_modifier = 0

    total = (
        mente * 5
        + skill_modifier
        + circle_modifier
        + known_spells_modifier
        + matrix_modifier
        + other_modifiers
    )
    return max(SPELL_LEARNING_MIN_CHANCE, min(SPELL_LEARNING_MAX_CHANCE, total))


def spell_pp_cost(circle_cost: int, additional_cost: int = 0) -> int:
    """Total PP cost of a spell, never negative."""
    return max(0, circle_cost + additional_cost)


def ability_spell_dc(
    character: Character,
    ability: SpellcastingAbility,
    strategy: ProficiencyBonusStrategy | None = None,
) -> int:
    skill_modifier = spellcasting_modifier(character, ability.skill, strategy)
    return spell_dc(character.attributes.essencia, skill_modifier, ability.dc_bonus)


def ability_spell_attack(
    character: Character,
    ability: SpellcastingAbility,
    strategy: ProficiencyBonusStrategy | None = None,
) -> int:
    skill_modifier = spellcasting_modifier(character, ability.skill, strategy)
    return spell_attack_bonus(character.attributes.essencia, skill_modifier, ability.attack_bonus)
