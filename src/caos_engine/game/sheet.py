"""Character sheet summary: every derived value the presentation layer shows.

This is the integration boundary between the engine and its callers. Engine
errors raised while resolving one skill are logged and reported in the
summary instead of escaping to the end user.
"""

from dataclasses import dataclass, field

import structlog

from caos_engine.game.character.attributes import DerivedStats, calculate_derived_stats
from caos_engine.game.character.errors import CharacterValidationError, EngineError
from caos_engine.game.character.models import ArchetypeResourceBreakdown, Character
from caos_engine.game.character.proficiency import ProficiencyBonusStrategy
from caos_engine.game.character.uses import SkillCheck, all_use_checks, sense_checks
from caos_engine.game.character.validation import validate_character
from caos_engine.game.systems.resources import (
    CastingPool,
    CraftCheck,
    archetype_pp_breakdown,
    casting_pool,
    character_defense,
    craft_check,
    power_points_max,
    pp_per_round,
)
from caos_engine.game.systems.spells import ability_spell_attack, ability_spell_dc

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SpellcastingSummary:
    skill: str
    pool: CastingPool
    spell_dc: int
    spell_attack: int


@dataclass
class SheetSummary:
    """All computed values for one character snapshot."""

    derived: DerivedStats
    defense: int
    pp_max: int
    pp_breakdown: list[ArchetypeResourceBreakdown]
    pp_per_round: int
    skills: dict[str, list[SkillCheck]] = field(default_factory=dict)
    senses: list[SkillCheck] = field(default_factory=list)
    spellcasting: list[SpellcastingSummary] = field(default_factory=list)
    crafts: list[CraftCheck] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def build_sheet(
    character: Character, strategy: ProficiencyBonusStrategy | None = None
) -> SheetSummary:
    """Compute every derived value of a character.

    Args:
        character: Character snapshot
        strategy: Proficiency bonus strategy; the configured one when None

    Returns:
        SheetSummary; ``errors`` lists anything that could not be resolved
    """
    errors: list[str] = []

    try:
        validate_character(character)
    except CharacterValidationError as e:
        logger.warning("character_rules_violated", character=character.name, error=str(e))
        errors.append(str(e))

    essencia = character.attributes.essencia
    breakdown = archetype_pp_breakdown(character.archetypes, essencia)

    summary = SheetSummary(
        derived=calculate_derived_stats(character.attributes, character.load),
        defense=character_defense(character),
        pp_max=power_points_max(breakdown, character.power_points.max_modifiers),
        pp_breakdown=breakdown,
        pp_per_round=pp_per_round(character.level, essencia, character.pp_limit_modifiers),
        errors=errors,
    )

    for skill_name in sorted(character.skills):
        try:
            summary.skills[skill_name] = all_use_checks(character, skill_name, strategy)
        except EngineError as e:
            logger.error(
                "skill_resolution_failed",
                character=character.name,
                skill=skill_name,
                error=str(e),
                exc_info=True,
            )
            errors.append(f"{skill_name}: {e}")

    try:
        summary.senses = sense_checks(character, strategy)
    except EngineError as e:
        logger.error("sense_resolution_failed", character=character.name, error=str(e))
        errors.append(f"senses: {e}")

    for ability in character.spellcasting_abilities:
        summary.spellcasting.append(
            SpellcastingSummary(
                skill=ability.skill,
                pool=casting_pool(character, ability, strategy),
                spell_dc=ability_spell_dc(character, ability, strategy),
                spell_attack=ability_spell_attack(character, ability, strategy),
            )
        )

    summary.crafts = [craft_check(character, craft) for craft in character.crafts]

    logger.debug(
        "sheet_built",
        character=character.name,
        skills=len(summary.skills),
        errors=len(errors),
    )
    return summary
