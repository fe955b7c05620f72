"""Static one-hop kinship composition table.

Keys read left to right: the pivot is my <first>, the candidate is the
pivot's <second>. The rule gives what the candidate is to me and what I am
to the candidate. Only high-confidence compositions are listed; anything
missing (cousin of a cousin, sibling-in-law chains...) deliberately yields
no deduction.

Reverse labels carry the product's gendered defaults where the gender of
"me" is unknown (e.g. "irmao" back from a sister).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .vocabulary import RelationshipLabel as R

RULES_VERSION = "2"


@dataclass(frozen=True)
class DeductionRule:
    """One entry of the composition table."""

    my_relation_to_pivot: R
    pivot_relation_to_candidate: R
    relation_to_candidate: R
    candidate_relation_to_me: R


_RULE_ROWS: tuple[tuple[R, R, R, R], ...] = (
    # my father's ...
    (R.PAI, R.FILHO, R.IRMAO, R.IRMAO),
    (R.PAI, R.FILHA, R.IRMA, R.IRMAO),
    (R.PAI, R.CONJUGE, R.MAE, R.FILHO),
    (R.PAI, R.IRMAO, R.TIO, R.SOBRINHO),
    (R.PAI, R.IRMA, R.TIA, R.SOBRINHO),
    (R.PAI, R.PAI, R.AVO, R.NETO),
    (R.PAI, R.MAE, R.AVA, R.NETO),
    # my mother's ...
    (R.MAE, R.FILHO, R.IRMAO, R.IRMAO),
    (R.MAE, R.FILHA, R.IRMA, R.IRMAO),
    (R.MAE, R.CONJUGE, R.PAI, R.FILHO),
    (R.MAE, R.IRMAO, R.TIO, R.SOBRINHO),
    (R.MAE, R.IRMA, R.TIA, R.SOBRINHO),
    (R.MAE, R.PAI, R.AVO, R.NETO),
    (R.MAE, R.MAE, R.AVA, R.NETO),
    # my son's ...
    (R.FILHO, R.FILHO, R.NETO, R.AVO),
    (R.FILHO, R.FILHA, R.NETA, R.AVO),
    (R.FILHO, R.CONJUGE, R.OTHER, R.OTHER),
    (R.FILHO, R.PAI, R.CONJUGE, R.CONJUGE),
    (R.FILHO, R.MAE, R.CONJUGE, R.CONJUGE),
    # my daughter's ...
    (R.FILHA, R.FILHO, R.NETO, R.AVA),
    (R.FILHA, R.FILHA, R.NETA, R.AVA),
    (R.FILHA, R.CONJUGE, R.OTHER, R.OTHER),
    (R.FILHA, R.PAI, R.CONJUGE, R.CONJUGE),
    (R.FILHA, R.MAE, R.CONJUGE, R.CONJUGE),
    # my brother's ...
    (R.IRMAO, R.FILHO, R.SOBRINHO, R.TIO),
    (R.IRMAO, R.FILHA, R.SOBRINHA, R.TIO),
    (R.IRMAO, R.CONJUGE, R.OTHER, R.OTHER),
    (R.IRMAO, R.PAI, R.PAI, R.FILHO),
    (R.IRMAO, R.MAE, R.MAE, R.FILHO),
    # my sister's ...
    (R.IRMA, R.FILHO, R.SOBRINHO, R.TIA),
    (R.IRMA, R.FILHA, R.SOBRINHA, R.TIA),
    (R.IRMA, R.CONJUGE, R.OTHER, R.OTHER),
    (R.IRMA, R.PAI, R.PAI, R.FILHA),
    (R.IRMA, R.MAE, R.MAE, R.FILHA),
    # my uncle's ...
    (R.TIO, R.FILHO, R.PRIMO, R.PRIMO),
    (R.TIO, R.FILHA, R.PRIMA, R.PRIMO),
    (R.TIO, R.CONJUGE, R.TIA, R.SOBRINHO),
    (R.TIO, R.IRMAO, R.PAI, R.SOBRINHO),
    (R.TIO, R.IRMA, R.MAE, R.SOBRINHO),
    # my aunt's ...
    (R.TIA, R.FILHO, R.PRIMO, R.PRIMO),
    (R.TIA, R.FILHA, R.PRIMA, R.PRIMO),
    (R.TIA, R.CONJUGE, R.TIO, R.SOBRINHA),
    (R.TIA, R.IRMAO, R.PAI, R.SOBRINHA),
    (R.TIA, R.IRMA, R.MAE, R.SOBRINHA),
    # my spouse's ...
    (R.CONJUGE, R.FILHO, R.FILHO, R.MAE),
    (R.CONJUGE, R.FILHA, R.FILHA, R.MAE),
    (R.CONJUGE, R.PAI, R.SOGRO, R.GENRO),
    (R.CONJUGE, R.MAE, R.SOGRA, R.GENRO),
    (R.CONJUGE, R.IRMAO, R.OTHER, R.OTHER),
    (R.CONJUGE, R.IRMA, R.OTHER, R.OTHER),
    # my nephew's / niece's ...
    (R.SOBRINHO, R.PAI, R.IRMAO, R.FILHO),
    (R.SOBRINHO, R.MAE, R.IRMA, R.FILHO),
    (R.SOBRINHA, R.PAI, R.IRMAO, R.FILHA),
    (R.SOBRINHA, R.MAE, R.IRMA, R.FILHA),
    # my cousin's ...
    (R.PRIMO, R.PAI, R.TIO, R.SOBRINHO),
    (R.PRIMO, R.MAE, R.TIA, R.SOBRINHO),
    (R.PRIMA, R.PAI, R.TIO, R.SOBRINHA),
    (R.PRIMA, R.MAE, R.TIA, R.SOBRINHA),
)


def _build_table(rows: tuple[tuple[R, R, R, R], ...]) -> Mapping[R, Mapping[R, DeductionRule]]:
    table: dict[R, dict[R, DeductionRule]] = {}
    for first, second, to_candidate, to_me in rows:
        if second in table.setdefault(first, {}):
            raise ValueError(f"Duplicate deduction rule for ({first.value}, {second.value})")
        table[first][second] = DeductionRule(first, second, to_candidate, to_me)
    return MappingProxyType({key: MappingProxyType(inner) for key, inner in table.items()})


DEDUCTION_RULES: Mapping[R, Mapping[R, DeductionRule]] = _build_table(_RULE_ROWS)


def iter_rules() -> list[DeductionRule]:
    """All rules in table order."""
    return [rule for inner in DEDUCTION_RULES.values() for rule in inner.values()]
