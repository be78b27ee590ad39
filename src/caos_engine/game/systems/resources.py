"""Resource formulas for the Caos engine.

Defense, Power Points (PP), PP spendable per round, the spellcasting casting
pool and craft check pools. Every function takes a snapshot and returns fresh
values; nothing here mutates its input.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from caos_engine.config import get_settings
from caos_engine.game.character.catalog import CRAFT_SKILL, is_combat_skill
from caos_engine.game.character.dice import (
    TAKE_LOWEST_DICE,
    DicePool,
    RollFormula,
    build_roll_formula,
)
from caos_engine.game.character.models import (
    Archetype,
    ArchetypeName,
    ArchetypeResourceBreakdown,
    Armor,
    Character,
    Craft,
    Defense,
    PowerPoints,
    SpellcastingAbility,
)
from caos_engine.game.character.modifiers import Modifier, sum_values
from caos_engine.game.character.proficiency import (
    ProficiencyBonusStrategy,
    craft_multiplier,
    signature_bonus,
)
from caos_engine.game.character.uses import CustomUse, GeneralUse, skill_check

logger = structlog.get_logger(__name__)

# Custom use whose modifiers drive the spellcasting modifier
CAST_SPELL_USE = "Conjurar Feitiço"

ARCHETYPE_LABELS: dict[ArchetypeName, str] = {
    ArchetypeName.ACADEMICO: "Acadêmico",
    ArchetypeName.ACOLITO: "Acólito",
    ArchetypeName.COMBATENTE: "Combatente",
    ArchetypeName.FEITICEIRO: "Feiticeiro",
    ArchetypeName.LADINO: "Ladino",
    ArchetypeName.NATURAL: "Natural",
}

# Base PP gained per archetype level, before Essência
ARCHETYPE_PP_PER_LEVEL: dict[ArchetypeName, int] = {
    ArchetypeName.FEITICEIRO: 5,
    ArchetypeName.ACADEMICO: 4,
    ArchetypeName.ACOLITO: 3,
    ArchetypeName.NATURAL: 3,
    ArchetypeName.LADINO: 2,
    ArchetypeName.COMBATENTE: 1,
}


@dataclass(frozen=True)
class CastingPool:
    """Dice pool for a spellcasting test and its parts."""

    pool_contribution: int
    attribute_value: int
    skill_modifier: int
    casting_bonus: int

    @property
    def breakdown(self) -> str:
        """Display breakdown, e.g. '3d (atributo) +2d (habilidade) +1d (bônus)'."""
        parts = [
            f"{self.attribute_value}d (atributo)",
            f"{self.skill_modifier:+d}d (habilidade)",
        ]
        if self.casting_bonus != 0:
            parts.append(f"{self.casting_bonus:+d}d (bônus)")
        return " ".join(parts)


@dataclass(frozen=True)
class CraftCheck:
    """Check for one craft rolled through the Ofício skill."""

    craft_name: str
    attribute_value: int
    multiplier: int
    base_modifier: int
    signature_bonus: int
    numeric_modifier: int
    total_modifier: int
    roll: RollFormula

    @property
    def formula(self) -> str:
        return self.roll.formula


# --- Defense -----------------------------------------------------------------


def effective_agility(agilidade: int, max_agility_bonus: int | None) -> int:
    """Agility added to Defense, capped by the armor's maximum when one is set."""
    if max_agility_bonus is None:
        return agilidade
    return min(agilidade, max_agility_bonus)


def defense_total(agilidade: int, defense: Defense, base: int | None = None) -> int:
    """Calculate the Defense total.

    Formula: 15 + effective agility + armor + shield + other bonuses

    Examples:
        agilidade 3, armor 4 (max agility 2), shield 1, other +2 -> 15+2+4+1+2 = 24
    """
    base = get_settings().defense_base if base is None else base
    return (
        base
        + effective_agility(agilidade, defense.max_agility_bonus)
        + defense.armor_bonus
        + defense.shield_bonus
        + sum_values(defense.other_bonuses)
    )


def defense_from_armors(
    armors: Iterable[Armor],
    shield_bonus: int = 0,
    other_bonuses: Iterable[Modifier] = (),
) -> Defense:
    """Build Defense inputs from the single equipped armor.

    With no equipped armor the armor bonus is 0 and agility is not capped.
    """
    armor = next((armor for armor in armors if armor.equipped), None)
    return Defense(
        armor_bonus=armor.defense_bonus if armor else 0,
        shield_bonus=shield_bonus,
        max_agility_bonus=armor.max_agility_bonus if armor else None,
        other_bonuses=list(other_bonuses),
    )


def character_defense(character: Character) -> int:
    """Defense total for a character, with armor taken from the equipped armor."""
    defense = defense_from_armors(
        character.armors, character.defense.shield_bonus, character.defense.other_bonuses
    )
    return defense_total(character.attributes.agilidade, defense)


# --- Power Points --------------------------------------------------------------


def archetype_pp_breakdown(
    archetypes: Iterable[Archetype], essencia: int
) -> list[ArchetypeResourceBreakdown]:
    """PP contributed by each archetype: level × (base per level + Essência).

    Archetypes without levels are left out.
    """
    breakdown = []
    for archetype in archetypes:
        if archetype.level <= 0:
            continue
        base_per_level = ARCHETYPE_PP_PER_LEVEL.get(archetype.name, 0)
        breakdown.append(
            ArchetypeResourceBreakdown(
                name=archetype.name,
                label=ARCHETYPE_LABELS[archetype.name],
                level=archetype.level,
                base_per_level=base_per_level,
                attribute_bonus=essencia,
                total=archetype.level * (base_per_level + essencia),
            )
        )
    return breakdown


def power_points_max(
    breakdown: Iterable[ArchetypeResourceBreakdown],
    max_modifiers: Iterable[Modifier] = (),
    base: int | None = None,
) -> int:
    """Maximum PP: level-1 base + archetype totals + max modifiers."""
    base = get_settings().pp_base if base is None else base
    return base + sum(entry.total for entry in breakdown) + sum_values(max_modifiers)


def character_pp_max(character: Character) -> int:
    breakdown = archetype_pp_breakdown(character.archetypes, character.attributes.essencia)
    return power_points_max(breakdown, character.power_points.max_modifiers)


def pp_per_round(level: int, essencia: int, modifiers: Iterable[Modifier] = ()) -> int:
    """PP a character may spend in one round: level + Essência + modifiers.

    Examples:
        >>> pp_per_round(5, 2)
        7
    """
    return level + essencia + sum_values(modifiers)


def apply_pp_delta(pp: PowerPoints, delta: int) -> PowerPoints:
    """Spend (negative delta) or recover (positive delta) Power Points.

    Spending drains temporary PP first, then current PP, never below 0.
    Recovery only raises current PP and is capped at the maximum.
    """
    if delta == 0:
        return pp

    if delta < 0:
        remaining = -delta
        temporary = pp.temporary
        current = pp.current

        if temporary > 0:
            spent = min(temporary, remaining)
            temporary -= spent
            remaining -= spent
        if remaining > 0:
            current = max(0, current - remaining)

        return pp.model_copy(update={"current": current, "temporary": temporary})

    return pp.model_copy(update={"current": min(pp.current + delta, pp.max)})


# --- Spellcasting ----------------------------------------------------------------


def spellcasting_modifier(
    character: Character, skill_name: str, strategy: ProficiencyBonusStrategy | None = None
) -> int:
    """Flat modifier of a casting skill.

    Uses the skill's "Conjurar Feitiço" custom use when it has one (its
    modifiers plus its bonus), otherwise the skill's general modifiers. A skill
    the character does not have contributes 0.
    """
    skill = character.get_skill(skill_name)
    if skill is None:
        return 0

    cast_use = next((use for use in skill.custom_uses if use.name == CAST_SPELL_USE), None)
    use = CustomUse(cast_use) if cast_use else GeneralUse()
    check = skill_check(character, skill_name, use, overloaded=False, strategy=strategy)
    return check.total_modifier


def casting_pool(
    character: Character,
    ability: SpellcastingAbility,
    strategy: ProficiencyBonusStrategy | None = None,
) -> CastingPool:
    """Casting pool: attribute + casting skill modifier + casting bonus, floored at 0."""
    attribute_value = character.attributes.get(ability.attribute)
    skill_modifier = spellcasting_modifier(character, ability.skill, strategy)
    total = attribute_value + skill_modifier + ability.casting_bonus

    return CastingPool(
        pool_contribution=max(0, total),
        attribute_value=attribute_value,
        skill_modifier=skill_modifier,
        casting_bonus=ability.casting_bonus,
    )


# --- Crafts ------------------------------------------------------------------------


def craft_check(character: Character, craft: Craft) -> CraftCheck:
    """Compute a craft check.

    One base die adjusted by the craft's dice modifier. The flat bonus is the
    key attribute × craft multiplier, plus the signature bonus when Ofício is
    the signature skill, plus the craft's numeric modifier. The lowest of two
    dice is kept when the pool drops below one die or the attribute is 0.
    """
    attribute_value = character.attributes.get(craft.attribute_key)
    multiplier = craft_multiplier(craft.level)
    base_modifier = attribute_value * multiplier

    oficio = character.get_skill(CRAFT_SKILL)
    signature = (
        signature_bonus(character.level, is_combat_skill(CRAFT_SKILL))
        if oficio is not None and oficio.is_signature
        else 0
    )

    dice_count = 1 + craft.dice_modifier
    take_lowest = dice_count < 1 or attribute_value == 0
    pool = DicePool(
        dice_count=TAKE_LOWEST_DICE if take_lowest else dice_count, take_lowest=take_lowest
    )
    total = base_modifier + signature + craft.numeric_modifier

    logger.debug(
        "craft_check_resolved",
        craft=craft.name,
        dice_count=pool.dice_count,
        take_lowest=take_lowest,
        total=total,
    )

    return CraftCheck(
        craft_name=craft.name,
        attribute_value=attribute_value,
        multiplier=multiplier,
        base_modifier=base_modifier,
        signature_bonus=signature,
        numeric_modifier=craft.numeric_modifier,
        total_modifier=total,
        roll=build_roll_formula(pool, total),
    )
