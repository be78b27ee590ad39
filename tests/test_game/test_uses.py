"""Tests for skill-use resolution and skill checks."""

from caos_engine.game.character.attributes import AttributeName, AttributeSet
from caos_engine.game.character.models import Character, Craft, KeenSense, Skill, SkillUse
from caos_engine.game.character.modifiers import make_modifier
from caos_engine.game.character.proficiency import attribute_times_ordinal
from caos_engine.game.character.uses import (
    CustomUse,
    DefaultUse,
    GeneralUse,
    all_use_checks,
    is_overloaded,
    resolve_use,
    sense_checks,
    skill_check,
)


def make_custom_use(**overrides):
    data = {
        "id": "uso-1",
        "name": "Pirueta",
        "skill_name": "acrobacia",
        "key_attribute": "essencia",
    }
    data.update(overrides)
    return SkillUse(**data)


class TestResolveKeyAttribute:
    """Tests for key attribute precedence."""

    def setup_method(self):
        self.skill = Skill(
            name="acrobacia",
            key_attribute="agilidade",
            default_use_attribute_overrides={"Equilibrar": "corpo"},
        )

    def test_general_use_uses_skill_attribute(self):
        """The general use rolls the skill's key attribute."""
        assert resolve_use(self.skill).key_attribute == AttributeName.AGILIDADE

    def test_default_use_override(self):
        """A default-use override replaces the skill attribute."""
        resolved = resolve_use(self.skill, DefaultUse("Equilibrar"))
        assert resolved.key_attribute == AttributeName.CORPO

    def test_default_use_without_override(self):
        """Default uses without overrides fall back to the skill attribute."""
        resolved = resolve_use(self.skill, DefaultUse("Atravessar Inimigo"))
        assert resolved.key_attribute == AttributeName.AGILIDADE

    def test_custom_use_wins(self):
        """A custom use's own attribute beats every override."""
        resolved = resolve_use(self.skill, CustomUse(make_custom_use(name="Equilibrar")))
        assert resolved.key_attribute == AttributeName.ESSENCIA


class TestResolveModifiers:
    """Tests for modifier merging."""

    def test_skill_and_override_modifiers_merge(self):
        """Default-use modifiers are added to the skill modifiers."""
        skill = Skill(
            name="acrobacia",
            key_attribute="agilidade",
            modifiers=[make_modifier("Treino", 1)],
            default_use_modifier_overrides={"Equilibrar": [make_modifier("Botas", 2)]},
        )
        resolved = resolve_use(skill, DefaultUse("Equilibrar"))
        assert [mod.name for mod in resolved.modifiers] == ["Treino", "Botas"]

    def test_custom_use_bonus_becomes_modifier(self):
        """A custom use's flat bonus is added as a numeric modifier."""
        skill = Skill(name="acrobacia", key_attribute="agilidade")
        resolved = resolve_use(skill, CustomUse(make_custom_use(bonus=2)))
        assert resolved.modifiers[-1].name == "Uso: Pirueta"
        assert resolved.modifiers[-1].value == 2

    def test_keen_sense_applies_to_matching_use(self):
        """Keen smell boosts Farejar but not Observar."""
        skill = Skill(name="percepcao", key_attribute="instinto")
        senses = [KeenSense(type="olfato", bonus=2)]

        farejar = resolve_use(skill, DefaultUse("Farejar"), keen_senses=senses)
        observar = resolve_use(skill, DefaultUse("Observar"), keen_senses=senses)

        assert [mod.name for mod in farejar.modifiers] == ["Sentido Aguçado"]
        assert observar.modifiers == ()

    def test_load_penalty_only_for_flagged_skills(self):
        """Overloaded characters are penalized only on load-sensitive skills."""
        acrobacia = resolve_use(Skill(name="acrobacia", key_attribute="agilidade"), overloaded=True)
        percepcao = resolve_use(Skill(name="percepcao", key_attribute="instinto"), overloaded=True)

        assert acrobacia.modifiers[-1].name == "Sobrecarregado"
        assert acrobacia.modifiers[-1].value == -5
        assert percepcao.modifiers == ()

    def test_craft_modifiers_on_oficio(self):
        """A craft's modifiers apply when rolling Ofício."""
        skill = Skill(name="oficio", key_attribute="mente")
        craft = Craft(id="c1", name="Ferraria", dice_modifier=1, numeric_modifier=-1)
        resolved = resolve_use(skill, craft=craft)
        assert [(mod.value, mod.affects_dice) for mod in resolved.modifiers] == [
            (1, True),
            (-1, False),
        ]


class TestSkillCheck:
    """Tests for full skill checks."""

    def test_general_check(self, character):
        """Instinto 2 rolls two dice keeping the highest."""
        check = skill_check(character, "percepcao")
        assert check.use_name is None
        assert check.total_modifier == 0
        assert check.formula == "2d20 (maior)"

    def test_keen_sense_check(self, character):
        """Keen senses show up in the perception formula."""
        character = character.model_copy(
            update={"keen_senses": [KeenSense(type="olfato", bonus=2)]}
        )
        assert skill_check(character, "percepcao", DefaultUse("Farejar")).formula == (
            "2d20 (maior)+2"
        )

    def test_signature_non_combat(self, character):
        """A non-combat signature skill adds the full level."""
        skills = dict(character.skills)
        skills["percepcao"] = skills["percepcao"].model_copy(update={"is_signature": True})
        character = character.model_copy(update={"skills": skills})

        check = skill_check(character, "percepcao")
        assert check.signature_bonus == 5
        assert check.formula == "2d20 (maior)+5"

    def test_signature_combat(self, character):
        """A combat signature skill adds a third of the level."""
        skills = dict(character.skills)
        skills["arcano"] = skills["arcano"].model_copy(update={"is_signature": True})
        character = character.model_copy(update={"skills": skills})

        assert skill_check(character, "arcano").signature_bonus == 1

    def test_missing_skill_resolves_untrained(self, character):
        """A skill the character lacks rolls its catalog attribute."""
        check = skill_check(character, "furtividade")
        assert check.key_attribute == AttributeName.AGILIDADE
        assert check.formula == "3d20 (maior)"

    def test_locked_use_is_reported(self, character):
        """A use above the skill's tier resolves but is marked unavailable."""
        check = skill_check(character, "percepcao", DefaultUse("Ler Lábios"))
        assert check.available is False
        assert check.formula == "2d20 (maior)"

    def test_unlocked_use_is_available(self, character):
        """A use at the skill's tier is available."""
        assert skill_check(character, "acrobacia", DefaultUse("Saltar de Pé")).available

    def test_attribute_zero_ignores_dice_modifiers(self):
        """Attribute 0 keeps the lowest of two dice despite dice bonuses."""
        character = Character(
            attributes=AttributeSet(instinto=0),
            skills={
                "percepcao": Skill(
                    name="percepcao",
                    key_attribute="instinto",
                    modifiers=[make_modifier("Luneta", 3, affects_dice=True)],
                )
            },
        )
        check = skill_check(character, "percepcao")
        assert check.dice_delta == 3
        assert check.roll.take_lowest is True
        assert check.formula == "-2d20"

    def test_dice_modifiers_change_count(self, character):
        """Dice modifiers change the pool, not the flat total."""
        skills = dict(character.skills)
        skills["percepcao"] = skills["percepcao"].model_copy(
            update={"modifiers": [make_modifier("Luneta", 1, affects_dice=True)]}
        )
        character = character.model_copy(update={"skills": skills})

        check = skill_check(character, "percepcao")
        assert check.roll.dice_count == 3
        assert check.total_modifier == 0

    def test_overloaded_from_snapshot(self, character):
        """Load above capacity applies the penalty automatically."""
        heavy = character.model_copy(update={"load": 16})
        assert is_overloaded(heavy)
        assert skill_check(heavy, "acrobacia").formula == "3d20 (maior)-5"

    def test_proficiency_strategy(self, character):
        """The alternative strategy adds attribute × tier ordinal."""
        check = skill_check(character, "arcano", strategy=attribute_times_ordinal)
        assert check.proficiency_bonus == 6
        assert check.formula == "3d20 (maior)+6"

    def test_default_strategy_adds_nothing(self, character):
        """With the default strategy proficiency does not change the total."""
        assert skill_check(character, "arcano").proficiency_bonus == 0


class TestUseListings:
    """Tests for checks across every use of a skill."""

    def test_all_use_checks(self, character):
        """General, default and custom uses are all listed."""
        skills = dict(character.skills)
        skills["percepcao"] = skills["percepcao"].model_copy(
            update={
                "custom_uses": [
                    make_custom_use(name="Vigiar", skill_name="percepcao", key_attribute="mente")
                ]
            }
        )
        character = character.model_copy(update={"skills": skills})

        checks = all_use_checks(character, "percepcao")
        names = [check.use_name for check in checks]
        assert names == [None, "Farejar", "Observar", "Ouvir", "Ler Lábios", "Vigiar"]
        assert checks[-1].key_attribute == AttributeName.MENTE

    def test_sense_checks(self, character):
        """One check per keen-sense use."""
        checks = sense_checks(character)
        assert [check.use_name for check in checks] == ["Farejar", "Observar", "Ouvir"]

    def test_general_use_name(self):
        """The general use has no name."""
        assert GeneralUse().name is None
