"""Kinship suggestion sweep over a user's family neighborhood.

Two passes, both pure over a ConnectionGraph snapshot:

- Degree 1: two of my relatives who are not connected to each other. With
  me as the pivot, deduce what one is to the other and suggest they connect.
- Degree 2: relatives of my relatives. With my relative as the pivot,
  deduce what their relative is to me.

Pairs are deduplicated with an order-independent key, so a candidate
reachable through several pivots is suggested once (through the pivot with
the lowest id). Candidates with a pending or accepted connection to the
recipient are skipped."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..graph.connection_graph import ConnectionGraph
from ..models import KinshipSuggestion, pair_key
from .deduction import Deduction, deduce_relationship
from .vocabulary import RelationshipLabel, display_label, normalize_relationship

logger = logging.getLogger(__name__)


def _name(person_id: str, names: Mapping[str, str]) -> str:
    return names.get(person_id) or person_id


def _direct_reason(
    recipient: str,
    candidate: str,
    recipient_to_me: RelationshipLabel,
    candidate_to_me: RelationshipLabel,
    deduction: Deduction,
    names: Mapping[str, str],
) -> str:
    return (
        f"{_name(recipient, names)} é seu/sua {display_label(recipient_to_me)} e "
        f"{_name(candidate, names)} é seu/sua {display_label(candidate_to_me)}. Logo, "
        f"{_name(candidate, names)} deveria ser {display_label(deduction.relation_to_candidate)} "
        f"de {_name(recipient, names)}"
    )


def _second_degree_reason(
    pivot: str,
    candidate: str,
    pivot_to_me: RelationshipLabel,
    candidate_to_pivot: RelationshipLabel,
    names: Mapping[str, str],
) -> str:
    return (
        f"{_name(pivot, names)} é seu/sua {display_label(pivot_to_me)} e "
        f"{_name(candidate, names)} é {display_label(candidate_to_pivot)} de {_name(pivot, names)}"
    )


def _find_direct(
    graph: ConnectionGraph,
    user_id: str,
    relatives: list[str],
    processed: set[tuple[str, str]],
    names: Mapping[str, str],
) -> list[KinshipSuggestion]:
    suggestions: list[KinshipSuggestion] = []
    for i, first in enumerate(relatives):
        for second in relatives[i + 1 :]:
            key = pair_key(first, second)
            if key in processed or graph.has_connection(first, second):
                continue

            # Try both orientations: second as candidate for first, then the reverse
            for recipient, candidate in ((first, second), (second, first)):
                me_to_recipient = graph.relation_of(user_id, recipient)
                candidate_to_me = graph.relation_of(candidate, user_id)
                deduction = deduce_relationship(me_to_recipient, candidate_to_me)
                if deduction is None:
                    continue

                processed.add(key)
                recipient_to_me = graph.relation_of(recipient, user_id)
                suggestions.append(
                    KinshipSuggestion(
                        person_id=candidate,
                        recipient_id=recipient,
                        through_id=user_id,
                        suggested_relationship=deduction.relation_to_candidate,
                        reverse_relationship=deduction.candidate_relation_to_me,
                        degree=1,
                        reason=_direct_reason(
                            recipient, candidate, recipient_to_me, candidate_to_me, deduction, names
                        ),
                    )
                )
                logger.debug(
                    f"Direct suggestion: {candidate} should be {deduction.relation_to_candidate.value} "
                    f"of {recipient}"
                )
                break
    return suggestions


def _find_second_degree(
    graph: ConnectionGraph,
    user_id: str,
    relatives: list[str],
    processed: set[tuple[str, str]],
    names: Mapping[str, str],
) -> list[KinshipSuggestion]:
    suggestions: list[KinshipSuggestion] = []
    for pivot in relatives:
        pivot_to_me = graph.relation_of(pivot, user_id)
        for candidate in graph.family_neighbors(pivot):
            if candidate == user_id:
                continue
            key = pair_key(user_id, candidate)
            if key in processed or graph.has_connection(user_id, candidate):
                continue

            candidate_to_pivot = graph.relation_of(candidate, pivot)
            deduction = deduce_relationship(pivot_to_me, candidate_to_pivot)
            if deduction is None:
                continue

            processed.add(key)
            suggestions.append(
                KinshipSuggestion(
                    person_id=candidate,
                    recipient_id=user_id,
                    through_id=pivot,
                    suggested_relationship=deduction.relation_to_candidate,
                    reverse_relationship=deduction.candidate_relation_to_me,
                    degree=2,
                    reason=_second_degree_reason(pivot, candidate, pivot_to_me, candidate_to_pivot, names),
                )
            )
            logger.debug(f"Second degree suggestion: {candidate} is {deduction.relation_to_candidate.value}")
    return suggestions


def find_kinship_suggestions(
    graph: ConnectionGraph,
    user_id: str,
    names: Mapping[str, str] | None = None,
) -> list[KinshipSuggestion]:
    """Deduce missing family connections around user_id.

    Args:
        graph: Snapshot holding the user's accepted and pending connections
            and those of their relatives
        user_id: The requesting user
        names: Optional id -> display name map used in reasons

    Returns:
        Degree 1 suggestions followed by degree 2 suggestions, each in
        ascending id order of the people involved.
    """
    if user_id not in graph:
        return []

    names = names or {}
    relatives = graph.family_neighbors(user_id)
    processed: set[tuple[str, str]] = set()

    direct = _find_direct(graph, user_id, relatives, processed, names)
    second = _find_second_degree(graph, user_id, relatives, processed, names)

    logger.info(
        f"Kinship suggestions for {user_id}: {len(direct)} direct, {len(second)} second degree "
        f"from {len(relatives)} relatives"
    )
    return direct + second


def filter_suggestions(
    suggestions: Iterable[KinshipSuggestion],
    relationship: object | None = None,
    degree: int | None = None,
) -> list[KinshipSuggestion]:
    """Narrow suggestions by suggested relationship and/or degree."""
    wanted = normalize_relationship(relationship) if relationship is not None else None
    return [
        s
        for s in suggestions
        if (wanted is None or s.suggested_relationship is wanted) and (degree is None or s.degree == degree)
    ]
