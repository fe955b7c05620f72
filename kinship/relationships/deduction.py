"""Transitive kinship deduction over the static rule table."""

from __future__ import annotations

from dataclasses import dataclass

from .rules import DEDUCTION_RULES
from .vocabulary import RelationshipLabel, normalize_relationship


@dataclass(frozen=True)
class Deduction:
    """Relationship pair deduced between me and a candidate.

    Attributes:
        relation_to_candidate: what the candidate is to me
        candidate_relation_to_me: what I am to the candidate
    """

    relation_to_candidate: RelationshipLabel
    candidate_relation_to_me: RelationshipLabel

    def to_dict(self) -> dict[str, str]:
        return {
            "relation_to_candidate": self.relation_to_candidate.value,
            "candidate_relation_to_me": self.candidate_relation_to_me.value,
        }


def deduce_relationship(my_relation_to_pivot: object, pivot_relation_to_candidate: object) -> Deduction | None:
    """Deduce my relationship to a candidate reached through a pivot.

    Args:
        my_relation_to_pivot: what the pivot is to me ("pai" = my father)
        pivot_relation_to_candidate: what the candidate is to the pivot
            ("filho" = the pivot's son)

    Returns:
        The deduced pair, or None when the table has no confident rule.
        Never raises: unknown tags normalize to OTHER, which matches nothing.
    """
    first = normalize_relationship(my_relation_to_pivot)
    second = normalize_relationship(pivot_relation_to_candidate)
    if first is RelationshipLabel.OTHER or second is RelationshipLabel.OTHER:
        return None

    rule = DEDUCTION_RULES.get(first, {}).get(second)
    if rule is None:
        return None
    return Deduction(rule.relation_to_candidate, rule.candidate_relation_to_me)
