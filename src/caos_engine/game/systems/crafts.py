"""Keep a character's crafts in step with the custom uses of the Ofício skill."""

from collections.abc import Iterable

from caos_engine.game.character.catalog import CRAFT_SKILL
from caos_engine.game.character.models import Craft, Skill, SkillUse
from caos_engine.game.character.modifiers import aggregate
from caos_engine.game.character.uses import craft_modifiers


def craft_to_skill_use(craft: Craft) -> SkillUse:
    """Convert a craft into an Ofício custom use.

    The craft level is not carried over; it only scales the craft check.
    """
    return SkillUse(
        id=craft.id,
        name=craft.name,
        skill_name=CRAFT_SKILL,
        key_attribute=craft.attribute_key,
        bonus=0,
        modifiers=craft_modifiers(craft),
        description=craft.description,
    )


def skill_use_to_craft(use: SkillUse, existing: Craft | None = None) -> Craft:
    """Convert an Ofício custom use back into a craft, keeping the existing level."""
    totals = aggregate(use.modifiers)
    return Craft(
        id=use.id,
        name=use.name,
        level=existing.level if existing else 1,
        attribute_key=use.key_attribute,
        dice_modifier=totals.dice_delta,
        numeric_modifier=totals.numeric_delta,
        description=use.description,
    )


def sync_crafts_to_oficio(crafts: Iterable[Craft], oficio: Skill) -> Skill:
    """Return the Ofício skill with one custom use per craft."""
    return oficio.model_copy(update={"custom_uses": [craft_to_skill_use(c) for c in crafts]})


def sync_oficio_to_crafts(oficio: Skill, existing: Iterable[Craft]) -> list[Craft]:
    """Rebuild crafts from the Ofício custom uses, preserving craft levels by id."""
    by_id = {craft.id: craft for craft in existing}
    return [skill_use_to_craft(use, by_id.get(use.id)) for use in oficio.custom_uses]
