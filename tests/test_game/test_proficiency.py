"""Tests for proficiency tiers, strategies and signature bonuses."""

import pytest

from caos_engine.game.character.errors import InvalidProficiencyError
from caos_engine.game.character.proficiency import (
    PROFICIENCY_LABELS,
    ProficiencyLevel,
    attribute_times_ordinal,
    craft_multiplier,
    get_proficiency_strategy,
    is_use_available,
    no_proficiency_bonus,
    parse_proficiency,
    proficiency_ordinal,
    signature_bonus,
)


class TestParseProficiency:
    """Tests for accepting tier names, ordinals and members."""

    def test_names_any_case(self):
        """Tier names are matched regardless of case."""
        assert parse_proficiency("adepto") == ProficiencyLevel.ADEPTO
        assert parse_proficiency("Versado") == ProficiencyLevel.VERSADO
        assert parse_proficiency("MESTRE") == ProficiencyLevel.MESTRE

    def test_ordinals(self):
        """Integers 0-3 map to tiers."""
        assert parse_proficiency(0) == ProficiencyLevel.LEIGO
        assert parse_proficiency(3) == ProficiencyLevel.MESTRE

    def test_member_passthrough(self):
        """Enum members are returned unchanged."""
        assert parse_proficiency(ProficiencyLevel.ADEPTO) is ProficiencyLevel.ADEPTO

    def test_unknown_name_rejected(self):
        """An unknown tier name raises InvalidProficiencyError."""
        with pytest.raises(InvalidProficiencyError):
            parse_proficiency("especialista")

    def test_out_of_range_rejected(self):
        """Ordinals outside 0-3 raise InvalidProficiencyError."""
        with pytest.raises(InvalidProficiencyError):
            parse_proficiency(4)
        with pytest.raises(InvalidProficiencyError):
            parse_proficiency(-1)

    def test_is_value_error(self):
        """InvalidProficiencyError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_proficiency(None)

    def test_ordinals_and_labels(self):
        """Ordinals are 0-3 and labels are capitalized tier names."""
        assert [proficiency_ordinal(level) for level in ProficiencyLevel] == [0, 1, 2, 3]
        assert PROFICIENCY_LABELS[ProficiencyLevel.LEIGO] == "Leigo"


class TestProficiencyStrategies:
    """Tests for the pluggable proficiency bonus."""

    def test_default_strategy_adds_nothing(self):
        """The default strategy contributes zero."""
        strategy = get_proficiency_strategy()
        assert strategy is no_proficiency_bonus
        assert strategy(3, 4) == 0

    def test_attribute_times_ordinal(self):
        """The alternative strategy multiplies attribute by ordinal."""
        assert attribute_times_ordinal(2, 2) == 4
        assert attribute_times_ordinal(0, 5) == 0

    def test_lookup_by_name(self):
        """Strategies are looked up by name."""
        assert get_proficiency_strategy("attribute_times_ordinal") is attribute_times_ordinal

    def test_configured_strategy(self, monkeypatch):
        """The configured strategy is used when no name is given."""
        monkeypatch.setenv("CAOS_PROFICIENCY_STRATEGY", "attribute_times_ordinal")
        assert get_proficiency_strategy() is attribute_times_ordinal

    def test_unknown_strategy_falls_back(self):
        """An unknown strategy name falls back to no bonus."""
        assert get_proficiency_strategy("quadratic") is no_proficiency_bonus


class TestSignatureBonus:
    """Tests for the Signature Ability bonus."""

    def test_non_combat_gets_level(self):
        """Non-combat skills add the full character level."""
        assert signature_bonus(9, False) == 9

    def test_combat_gets_third(self):
        """Combat skills add a third of the level."""
        assert signature_bonus(9, True) == 3
        assert signature_bonus(10, True) == 3

    def test_combat_minimum_one(self):
        """Combat skills add at least 1."""
        assert signature_bonus(1, True) == 1
        assert signature_bonus(2, True) == 1


class TestUseAvailability:
    """Tests for proficiency-gated default uses."""

    def test_no_requirement(self):
        """Uses without a requirement are always available."""
        assert is_use_available(None, ProficiencyLevel.LEIGO)

    def test_requirement_met(self):
        """A tier at or above the requirement unlocks the use."""
        assert is_use_available("adepto", "adepto")
        assert is_use_available("adepto", "mestre")

    def test_requirement_not_met(self):
        """A lower tier leaves the use locked."""
        assert not is_use_available("versado", "adepto")


class TestCraftMultiplier:
    """Tests for the craft level multiplier."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [(0, 0), (1, 1), (2, 1), (3, 2), (4, 2), (5, 3)],
    )
    def test_multiplier_by_level(self, level, expected):
        """Levels 0-5 map to x0, x1, x1, x2, x2, x3."""
        assert craft_multiplier(level) == expected
