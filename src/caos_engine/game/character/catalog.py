"""Skills catalog for the Caos engine.

Loads skill metadata and system default uses from ``data/skills.yaml``. The
catalog is immutable and keyed by skill name.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import Field, ValidationError

from caos_engine.config import get_settings

from .attributes import AttributeName
from .errors import CatalogLoadError
from .models import DefaultSkillUse, FrozenModel, Proficiency, Skill
from .proficiency import is_use_available

logger = structlog.get_logger(__name__)

# Skill whose custom uses mirror the character's crafts
CRAFT_SKILL = "oficio"
PERCEPTION_SKILL = "percepcao"


class SkillDefinition(FrozenModel):
    """Static metadata for one skill."""

    name: str = Field(..., description="Skill key")
    label: str = Field(..., description="Display name")
    key_attribute: AttributeName | None = Field(
        default=None, description="Default attribute; None when chosen per use"
    )
    combat: bool = Field(default=False, description="Combat skills get a reduced signature bonus")
    load_penalty: bool = Field(default=False, description="Penalized while overloaded")
    requires_instrument: bool = Field(default=False)
    requires_proficiency: bool = Field(default=False)
    uses: list[DefaultSkillUse] = Field(default_factory=list)


def load_yaml_file(file_path: Path) -> dict[str, dict[str, Any]]:
    """
    Load the raw skills mapping from a YAML file.

    Raises:
        CatalogLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except OSError as e:
        raise CatalogLoadError(f"Cannot read {file_path}: {e}") from e

    if not data or "skills" not in data:
        raise CatalogLoadError(f"Missing 'skills' key in {file_path}")

    skills = data["skills"]
    if not isinstance(skills, dict):
        raise CatalogLoadError(f"'skills' must be a mapping in {file_path}")

    return skills


@lru_cache
def load_skill_catalog(path: Path | None = None) -> dict[str, SkillDefinition]:
    """Load and validate the skills catalog.

    Args:
        path: Catalog file; defaults to the configured catalog path

    Returns:
        Mapping of skill name to SkillDefinition

    Raises:
        CatalogLoadError: If the file is missing, malformed, or a skill fails validation
    """
    path = path or get_settings().catalog_path
    raw_skills = load_yaml_file(path)

    catalog: dict[str, SkillDefinition] = {}
    for name, skill_data in raw_skills.items():
        try:
            catalog[name] = SkillDefinition(name=name, **(skill_data or {}))
        except (ValidationError, TypeError) as e:
            raise CatalogLoadError(f"Invalid skill '{name}' in {path}: {e}") from e

    logger.debug("skill_catalog_loaded", path=str(path), skills=len(catalog))
    return catalog


def get_skill_definition(skill_name: str) -> SkillDefinition | None:
    return load_skill_catalog().get(skill_name)


def get_all_skills() -> list[str]:
    """Get sorted list of all skill names."""
    return sorted(load_skill_catalog())


def is_combat_skill(skill_name: str) -> bool:
    """Combat skills get a reduced signature bonus. Unknown skills are not combat skills."""
    definition = get_skill_definition(skill_name)
    return definition.combat if definition else False


def has_load_penalty(skill_name: str) -> bool:
    definition = get_skill_definition(skill_name)
    return definition.load_penalty if definition else False


def get_default_uses(skill_name: str) -> list[DefaultSkillUse]:
    definition = get_skill_definition(skill_name)
    return list(definition.uses) if definition else []


def find_default_use(skill_name: str, use_name: str) -> DefaultSkillUse | None:
    """Find a system default use of a skill by name."""
    return next((use for use in get_default_uses(skill_name) if use.name == use_name), None)


def get_available_default_uses(skill_name: str, proficiency: Proficiency) -> list[DefaultSkillUse]:
    """Default uses unlocked at the given proficiency tier."""
    return [
        use
        for use in get_default_uses(skill_name)
        if is_use_available(use.required_proficiency, proficiency)
    ]


def default_skill(skill_name: str) -> Skill:
    """Build an untrained skill for a name missing from a character snapshot.

    Skills whose key attribute is chosen per use fall back to Mente.
    """
    definition = get_skill_definition(skill_name)
    key_attribute = definition.key_attribute if definition else None
    return Skill(name=skill_name, key_attribute=key_attribute or AttributeName.MENTE)
