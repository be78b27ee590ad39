"""Skill-use resolution for the Caos engine.

A skill is rolled through one of its uses: the general use, a system default
use from the catalog, or a use the player created. Every use resolves to one
key attribute and one merged modifier list, which then feed the dice pool and
the "Modificador Total".

Key attribute precedence (highest wins):
    1. the custom use's own attribute
    2. the skill's attribute override for that default use
    3. the skill's key attribute

Modifiers are additive: skill modifiers, then the use's modifiers, then
contextual bonuses (keen senses, craft modifiers, load penalty).
"""

from collections.abc import Iterable
from dataclasses import dataclass

from caos_engine.config import get_settings

from .attributes import AttributeName, EncumbranceState, carry_capacity, encumbrance_state
from .catalog import (
    CRAFT_SKILL,
    PERCEPTION_SKILL,
    default_skill,
    find_default_use,
    get_default_uses,
    has_load_penalty,
    is_combat_skill,
)
from .dice import RollFormula, build_roll_formula, resolve_dice_pool
from .models import Character, Craft, KeenSense, SenseType, Skill, SkillUse
from .modifiers import Modifier, aggregate, make_modifier
from .proficiency import (
    ProficiencyBonusStrategy,
    get_proficiency_strategy,
    is_use_available,
    signature_bonus,
)

# Perception uses that benefit from a keen sense
PERCEPTION_USE_TO_SENSE: dict[str, SenseType] = {
    "Farejar": SenseType.OLFATO,
    "Observar": SenseType.VISAO,
    "Ouvir": SenseType.AUDICAO,
}

SENSE_TO_PERCEPTION_USE = {sense: use for use, sense in PERCEPTION_USE_TO_SENSE.items()}


@dataclass(frozen=True)
class GeneralUse:
    """Rolling the skill itself."""

    @property
    def name(self) -> None:
        return None


@dataclass(frozen=True)
class DefaultUse:
    """A system default use, referenced by name."""

    name: str


@dataclass(frozen=True)
class CustomUse:
    """A player-created use."""

    use: SkillUse

    @property
    def name(self) -> str:
        return self.use.name


UseSpec = GeneralUse | DefaultUse | CustomUse


@dataclass(frozen=True)
class ResolvedUse:
    """Effective key attribute and merged modifiers for one use."""

    key_attribute: AttributeName
    modifiers: tuple[Modifier, ...]


@dataclass(frozen=True)
class SkillCheck:
    """Fully computed check for one use of a skill."""

    skill_name: str
    use_name: str | None
    key_attribute: AttributeName
    attribute_value: int
    modifiers: tuple[Modifier, ...]
    dice_delta: int
    numeric_delta: int
    signature_bonus: int
    proficiency_bonus: int
    total_modifier: int
    roll: RollFormula
    available: bool = True

    @property
    def formula(self) -> str:
        return self.roll.formula


def keen_sense_bonus(keen_senses: Iterable[KeenSense] | None, sense_type: SenseType) -> int:
    """Bonus of the first keen sense of the given type, or 0."""
    for sense in keen_senses or ():
        if sense.type == sense_type:
            return sense.bonus
    return 0


def use_bonus_modifier(use: SkillUse) -> Modifier | None:
    """Express a custom use's flat bonus as a numeric modifier."""
    if use.bonus == 0:
        return None
    return make_modifier(f"Uso: {use.name}", use.bonus)


def craft_modifiers(craft: Craft) -> list[Modifier]:
    """Dice and numeric modifiers a craft contributes to an Ofício roll."""
    modifiers = []
    if craft.dice_modifier != 0:
        modifiers.append(make_modifier("Modificador de Dados", craft.dice_modifier, True))
    if craft.numeric_modifier != 0:
        modifiers.append(make_modifier("Modificador Numérico", craft.numeric_modifier))
    return modifiers


def resolve_key_attribute(skill: Skill, use: UseSpec) -> AttributeName:
    if isinstance(use, CustomUse):
        return use.use.key_attribute
    if isinstance(use, DefaultUse) and use.name in skill.default_use_attribute_overrides:
        return skill.default_use_attribute_overrides[use.name]
    return skill.key_attribute


def resolve_use(
    skill: Skill,
    use: UseSpec | None = None,
    keen_senses: Iterable[KeenSense] | None = None,
    craft: Craft | None = None,
    overloaded: bool = False,
) -> ResolvedUse:
    """Resolve the key attribute and modifier list for one use of a skill.

    Args:
        skill: The character's skill configuration
        use: Which use is rolled; None means the general use
        keen_senses: Character keen senses, applied to Farejar/Observar/Ouvir
        craft: Craft being rolled when the skill is Ofício
        overloaded: Whether the character is over carrying capacity

    Returns:
        ResolvedUse with the effective attribute and merged modifiers
    """
    use = use or GeneralUse()
    modifiers = list(skill.modifiers)

    if isinstance(use, CustomUse):
        modifiers.extend(use.use.modifiers)
        bonus = use_bonus_modifier(use.use)
        if bonus is not None:
            modifiers.append(bonus)
    elif isinstance(use, DefaultUse):
        modifiers.extend(skill.default_use_modifier_overrides.get(use.name, []))

    if skill.name == PERCEPTION_SKILL and use.name in PERCEPTION_USE_TO_SENSE:
        bonus_value = keen_sense_bonus(keen_senses, PERCEPTION_USE_TO_SENSE[use.name])
        if bonus_value:
            modifiers.append(make_modifier("Sentido Aguçado", bonus_value))

    if craft is not None and skill.name == CRAFT_SKILL:
        modifiers.extend(craft_modifiers(craft))

    if overloaded and has_load_penalty(skill.name):
        modifiers.append(make_modifier("Sobrecarregado", get_settings().load_penalty))

    return ResolvedUse(
        key_attribute=resolve_key_attribute(skill, use),
        modifiers=tuple(modifiers),
    )


def is_overloaded(character: Character) -> bool:
    capacity = carry_capacity(character.attributes.corpo)
    return encumbrance_state(character.load, capacity) != EncumbranceState.NORMAL


def is_use_rollable(skill: Skill, use: UseSpec) -> bool:
    """Default uses need the required proficiency; other uses are always rollable."""
    if not isinstance(use, DefaultUse):
        return True
    default = find_default_use(skill.name, use.name)
    if default is None:
        return True
    return is_use_available(default.required_proficiency, skill.proficiency_level)


def skill_check(
    character: Character,
    skill_name: str,
    use: UseSpec | None = None,
    craft: Craft | None = None,
    overloaded: bool | None = None,
    strategy: ProficiencyBonusStrategy | None = None,
) -> SkillCheck:
    """Compute the full check for one use of a character's skill.

    The flat total is the numeric modifier sum plus the signature bonus (when
    the skill is the signature skill) plus the proficiency strategy's bonus.
    Dice modifiers only change the dice count. A default use locked by
    proficiency still resolves and is reported with ``available=False``.

    Args:
        character: Character snapshot
        skill_name: Skill key; a skill missing from the snapshot resolves as untrained
        use: Use to roll; None for the general use
        craft: Craft rolled through Ofício
        overloaded: Override for the load state; derived from the snapshot when None
        strategy: Proficiency bonus strategy; the configured one when None

    Returns:
        SkillCheck with the roll formula and its breakdown
    """
    use = use or GeneralUse()
    skill = character.get_skill(skill_name) or default_skill(skill_name)
    if overloaded is None:
        overloaded = is_overloaded(character)
    strategy = strategy or get_proficiency_strategy()

    resolved = resolve_use(skill, use, character.keen_senses, craft, overloaded)
    attribute_value = character.attributes.get(resolved.key_attribute)
    totals = aggregate(resolved.modifiers)

    signature = (
        signature_bonus(character.level, is_combat_skill(skill.name)) if skill.is_signature else 0
    )
    proficiency = strategy(int(skill.proficiency_level), attribute_value)
    total = totals.numeric_delta + signature + proficiency

    pool = resolve_dice_pool(attribute_value, totals.dice_delta)

    return SkillCheck(
        skill_name=skill.name,
        use_name=use.name,
        key_attribute=resolved.key_attribute,
        attribute_value=attribute_value,
        modifiers=resolved.modifiers,
        dice_delta=totals.dice_delta,
        numeric_delta=totals.numeric_delta,
        signature_bonus=signature,
        proficiency_bonus=proficiency,
        total_modifier=total,
        roll=build_roll_formula(pool, total),
        available=is_use_rollable(skill, use),
    )


def all_use_checks(
    character: Character, skill_name: str, strategy: ProficiencyBonusStrategy | None = None
) -> list[SkillCheck]:
    """Checks for the general use, every default use and every custom use of a skill."""
    skill = character.get_skill(skill_name) or default_skill(skill_name)
    overloaded = is_overloaded(character)

    uses: list[UseSpec] = [GeneralUse()]
    uses.extend(DefaultUse(default.name) for default in get_default_uses(skill_name))
    uses.extend(CustomUse(custom) for custom in skill.custom_uses)

    return [
        skill_check(character, skill_name, use, overloaded=overloaded, strategy=strategy)
        for use in uses
    ]


def sense_checks(
    character: Character, strategy: ProficiencyBonusStrategy | None = None
) -> list[SkillCheck]:
    """Perception checks for the three keen-sense uses."""
    return [
        skill_check(character, PERCEPTION_SKILL, DefaultUse(use_name), strategy=strategy)
        for use_name in PERCEPTION_USE_TO_SENSE
    ]
