"""
Character snapshot models for the Caos engine.

The presentation and persistence layers hand the engine a Character snapshot
built from these models; the engine only reads them and never writes back.
"""

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .attributes import AttributeName, AttributeSet
from .modifiers import Modifier
from .proficiency import ProficiencyLevel, parse_proficiency

# Accepts "adepto", "Adepto", 1 or ProficiencyLevel.ADEPTO
Proficiency = Annotated[ProficiencyLevel, BeforeValidator(parse_proficiency)]


class SenseType(StrEnum):
    """Senses that can be keen."""

    VISAO = "visao"
    OLFATO = "olfato"
    AUDICAO = "audicao"


class ArchetypeName(StrEnum):
    """Class-like templates a character levels in."""

    ACADEMICO = "academico"
    ACOLITO = "acolito"
    COMBATENTE = "combatente"
    FEITICEIRO = "feiticeiro"
    LADINO = "ladino"
    NATURAL = "natural"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class DefaultSkillUse(FrozenModel):
    """A system-provided use of a skill, loaded from the skills catalog."""

    name: str = Field(..., description="Use name (e.g., 'Conjurar Feitiço')")
    required_proficiency: Proficiency | None = Field(
        default=None, description="Minimum tier; None means available to Leigo"
    )
    description: str = Field(default="", description="Short rules text")
    alternate_attribute: AttributeName | None = Field(
        default=None, description="Attribute that may replace the key attribute"
    )


class SkillUse(FrozenModel):
    """A player-created use of a skill."""

    id: str = Field(..., description="Unique use identifier")
    name: str = Field(..., description="Use name")
    skill_name: str = Field(..., description="Skill this use belongs to")
    key_attribute: AttributeName = Field(..., description="Attribute rolled for this use")
    bonus: int = Field(default=0, description="Flat bonus added to the total")
    modifiers: list[Modifier] = Field(default_factory=list)
    description: str = Field(default="")


class Skill(FrozenModel):
    """A character's configuration of one skill."""

    name: str = Field(..., description="Skill key (e.g., 'percepcao')")
    key_attribute: AttributeName = Field(..., description="Default attribute rolled")
    proficiency_level: Proficiency = Field(default=ProficiencyLevel.LEIGO)
    modifiers: list[Modifier] = Field(default_factory=list)
    custom_uses: list[SkillUse] = Field(default_factory=list)
    default_use_attribute_overrides: dict[str, AttributeName] = Field(default_factory=dict)
    default_use_modifier_overrides: dict[str, list[Modifier]] = Field(default_factory=dict)
    is_signature: bool = Field(default=False)


class Craft(FrozenModel):
    """A trade the character practices through the Ofício skill."""

    id: str = Field(..., description="Unique craft identifier")
    name: str = Field(..., description="Craft name (e.g., 'Ferraria')")
    level: int = Field(default=1, ge=0, le=5, description="Craft level 0-5")
    attribute_key: AttributeName = Field(default=AttributeName.MENTE)
    dice_modifier: int = Field(default=0, description="Dice added to or removed from the pool")
    numeric_modifier: int = Field(default=0, description="Flat modifier")
    description: str = Field(default="")


class KeenSense(FrozenModel):
    """A sharpened sense granted by lineage."""

    type: SenseType
    bonus: int = Field(default=0, description="Bonus to the matching Perception use")
    description: str = Field(default="")


class Armor(FrozenModel):
    """Armor the character owns; at most one is equipped."""

    name: str
    defense_bonus: int = Field(default=0)
    max_agility_bonus: int | None = Field(
        default=None, description="Caps the agility added to Defense"
    )
    equipped: bool = Field(default=False)


class Defense(FrozenModel):
    """Inputs of the Defense total."""

    armor_bonus: int = Field(default=0)
    shield_bonus: int = Field(default=0)
    max_agility_bonus: int | None = Field(default=None)
    other_bonuses: list[Modifier] = Field(default_factory=list)


class PowerPoints(FrozenModel):
    """Power Point (PP) pool."""

    current: int = Field(default=0)
    temporary: int = Field(default=0)
    max: int = Field(default=0)
    max_modifiers: list[Modifier] = Field(default_factory=list)


class SpellPoints(FrozenModel):
    current: int = Field(default=0)
    max: int = Field(default=0)


class SpellcastingAbility(FrozenModel):
    """A registered way of casting spells."""

    skill: str = Field(..., description="Casting skill (arcano, natureza, religiao, ...)")
    attribute: AttributeName = Field(default=AttributeName.ESSENCIA)
    casting_bonus: int = Field(default=0, description="Extra dice on casting tests")
    dc_bonus: int = Field(default=0)
    attack_bonus: int = Field(default=0)


class Archetype(FrozenModel):
    name: ArchetypeName
    level: int = Field(default=0, ge=0)


class ArchetypeResourceBreakdown(FrozenModel):
    """Per-archetype contribution to a level-scaled resource."""

    name: ArchetypeName
    label: str
    level: int
    base_per_level: int
    attribute_bonus: int
    total: int


class Character(FrozenModel):
    """Complete character snapshot consumed by the engine."""

    name: str = Field(default="")
    level: int = Field(default=1, ge=1)
    attributes: AttributeSet = Field(default_factory=AttributeSet)
    skills: dict[str, Skill] = Field(default_factory=dict)
    crafts: list[Craft] = Field(default_factory=list)
    keen_senses: list[KeenSense] = Field(default_factory=list)
    archetypes: list[Archetype] = Field(default_factory=list)
    armors: list[Armor] = Field(default_factory=list)
    defense: Defense = Field(default_factory=Defense)
    power_points: PowerPoints = Field(default_factory=PowerPoints)
    pp_limit_modifiers: list[Modifier] = Field(default_factory=list)
    spellcasting_abilities: list[SpellcastingAbility] = Field(default_factory=list)
    spell_points: SpellPoints = Field(default_factory=SpellPoints)
    load: int = Field(default=0, description="Weight currently carried")

    def get_skill(self, name: str) -> Skill | None:
        return self.skills.get(name)

    @property
    def active_armor(self) -> Armor | None:
        """The equipped armor, if any."""
        return next((armor for armor in self.armors if armor.equipped), None)
