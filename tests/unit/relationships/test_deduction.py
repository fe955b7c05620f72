"""Tests for transitive kinship deduction over the rule table."""

from __future__ import annotations

import itertools

import pytest

from kinship.relationships.deduction import Deduction, deduce_relationship
from kinship.relationships.rules import DEDUCTION_RULES, RULES_VERSION, iter_rules
from kinship.relationships.vocabulary import RelationshipLabel as R


class TestDeductionTotality:
    """Every pair of tags yields a well-formed pair or None, never an error."""

    def test_all_canonical_pairs(self):
        for first, second in itertools.product(R, R):
            result = deduce_relationship(first, second)
            if result is None:
                continue
            assert isinstance(result, Deduction)
            assert isinstance(result.relation_to_candidate, R)
            assert isinstance(result.candidate_relation_to_me, R)

    def test_all_canonical_string_pairs(self):
        for first, second in itertools.product(R, R):
            by_enum = deduce_relationship(first, second)
            by_value = deduce_relationship(first.value, second.value)
            assert by_enum == by_value

    @pytest.mark.parametrize(
        ("first", "second"),
        [(None, None), ("", "filho"), ("pai", 3), ("???", "!!!"), (object(), "pai")],
    )
    def test_garbage_input_returns_none(self, first, second):
        assert deduce_relationship(first, second) is None

    def test_other_never_matches(self):
        for label in R:
            assert deduce_relationship(R.OTHER, label) is None
            assert deduce_relationship(label, R.OTHER) is None


class TestDeductionSpotChecks:
    def test_fathers_son_is_brother(self):
        result = deduce_relationship("pai", "filho")
        assert result == Deduction(R.IRMAO, R.IRMAO)

    def test_sisters_daughter_is_niece(self):
        result = deduce_relationship("irma", "filha")
        assert result == Deduction(R.SOBRINHA, R.TIA)

    def test_spouses_father_is_father_in_law(self):
        assert deduce_relationship("conjuge", "pai") == Deduction(R.SOGRO, R.GENRO)
        assert deduce_relationship("conjuge", "mae") == Deduction(R.SOGRA, R.GENRO)

    def test_uncles_son_is_cousin(self):
        assert deduce_relationship("tio", "filho") == Deduction(R.PRIMO, R.PRIMO)

    def test_synonyms_are_normalized_first(self):
        assert deduce_relationship("Father", "Son") == deduce_relationship("pai", "filho")
        assert deduce_relationship("Irmã", "filha") == Deduction(R.SOBRINHA, R.TIA)

    def test_table_gaps_stay_gaps(self):
        """Cousin of a cousin and sibling-in-law chains are not guessed."""
        assert deduce_relationship("primo", "primo") is None
        assert deduce_relationship("cunhado", "irmao") is None

    def test_unconfident_compositions_return_other(self):
        result = deduce_relationship("irmao", "conjuge")
        assert result == Deduction(R.OTHER, R.OTHER)

    def test_to_dict_uses_stored_values(self):
        assert deduce_relationship("pai", "pai").to_dict() == {
            "relation_to_candidate": "avo",
            "candidate_relation_to_me": "neto",
        }


class TestRuleTable:
    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEDUCTION_RULES[R.PAI] = {}  # type: ignore[index]

    def test_rules_are_keyed_consistently(self):
        for rule in iter_rules():
            assert DEDUCTION_RULES[rule.my_relation_to_pivot][rule.pivot_relation_to_candidate] is rule

    def test_version_is_set(self):
        assert RULES_VERSION
