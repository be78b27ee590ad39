"""Shared fixtures for all tests."""

import pytest

from caos_engine.config import get_settings
from caos_engine.game.character.attributes import AttributeSet
from caos_engine.game.character.catalog import load_skill_catalog
from caos_engine.game.character.models import Character, Skill


@pytest.fixture(autouse=True)
def reset_caches():
    """Clear cached settings and catalog so environment overrides apply per test."""
    get_settings.cache_clear()
    load_skill_catalog.cache_clear()
    yield
    get_settings.cache_clear()
    load_skill_catalog.cache_clear()


@pytest.fixture
def attributes():
    """A spread of attribute values used across tests."""
    return AttributeSet(agilidade=3, corpo=2, influencia=1, mente=2, essencia=3, instinto=2)


@pytest.fixture
def character(attributes):
    """A level 5 character with a handful of configured skills."""
    return Character(
        name="Iara",
        level=5,
        attributes=attributes,
        skills={
            "percepcao": Skill(name="percepcao", key_attribute="instinto"),
            "acrobacia": Skill(
                name="acrobacia", key_attribute="agilidade", proficiency_level="adepto"
            ),
            "arcano": Skill(name="arcano", key_attribute="essencia", proficiency_level="versado"),
        },
    )
