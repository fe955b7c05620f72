"""
Kinship Router - Relationship deduction and family suggestion endpoints.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Query

from kinship.errors import GraphUnavailableError
from kinship.graph import ConnectionGraph
from kinship.models import KinshipSuggestion, validate_person_id
from kinship.relationships import (
    RULES_VERSION,
    deduce_relationship,
    display_label,
    validate_relationship,
)
from kinship.relationships.suggestions import filter_suggestions, find_kinship_suggestions

from ..dependencies import get_connection_repository, get_profile_repository
from ..schemas import (
    DeductionRequest,
    DeductionResponse,
    KinshipSuggestionItem,
    KinshipSuggestionsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["kinship"])

# Degree 2 suggestions need the connections of the user's relatives
SUGGESTION_NEIGHBORHOOD_DEPTH = 2


@router.post("/api/kinship/deduce")
async def deduce(request: DeductionRequest) -> DeductionResponse | None:
    """Deduce what a candidate is to me from two known relationships.

    Returns null when no confident rule exists. Labels outside the
    vocabulary are rejected with 422.
    """
    first = validate_relationship(request.my_relation_to_pivot)
    second = validate_relationship(request.pivot_relation_to_candidate)

    deduction = deduce_relationship(first, second)
    if deduction is None:
        logger.debug(f"No deduction rule for ({first.value}, {second.value})")
        return None

    return DeductionResponse(
        relation_to_candidate=deduction.relation_to_candidate.value,
        candidate_relation_to_me=deduction.candidate_relation_to_me.value,
        relation_to_candidate_label=display_label(deduction.relation_to_candidate),
        candidate_relation_to_me_label=display_label(deduction.candidate_relation_to_me),
        rules_version=RULES_VERSION,
    )


@router.get("/api/users/{user_id}/kinship-suggestions")
async def get_kinship_suggestions(
    user_id: Annotated[str, Path(description="User to suggest family connections for")],
    relationship: Annotated[str | None, Query(description="Only suggestions of this relationship")] = None,
    degree: Annotated[int | None, Query(ge=1, le=2, description="1: between relatives, 2: through a relative")] = None,
) -> KinshipSuggestionsResponse:
    """Family connections deduced from the user's existing family graph."""
    user_id = validate_person_id(user_id)
    wanted = validate_relationship(relationship) if relationship else None

    connections = await get_connection_repository().fetch_neighborhood(user_id, SUGGESTION_NEIGHBORHOOD_DEPTH)
    graph = ConnectionGraph.from_connections(connections)

    suggestions = filter_suggestions(find_kinship_suggestions(graph, user_id), wanted, degree)

    involved = {pid for s in suggestions for pid in (s.person_id, s.recipient_id, s.through_id)}
    profiles = {}
    if involved:
        try:
            profiles = await get_profile_repository().get_many(involved)
        except GraphUnavailableError as e:
            logger.warning(f"Serving kinship suggestions without profile data: {e}")

    if profiles:
        # Recompute so reasons read with names instead of ids
        names = {pid: p.full_name for pid, p in profiles.items() if p.full_name}
        suggestions = filter_suggestions(find_kinship_suggestions(graph, user_id, names), wanted, degree)

    items = [_suggestion_item(s, profiles) for s in suggestions]
    return KinshipSuggestionsResponse(user_id=user_id, suggestions=items, total=len(items))


def _suggestion_item(suggestion: KinshipSuggestion, profiles: dict) -> KinshipSuggestionItem:
    profile = profiles.get(suggestion.person_id)
    return KinshipSuggestionItem(
        person_id=suggestion.person_id,
        recipient_id=suggestion.recipient_id,
        through_id=suggestion.through_id,
        suggested_relationship=suggestion.suggested_relationship.value,
        suggested_relationship_label=display_label(suggestion.suggested_relationship),
        reverse_relationship=suggestion.reverse_relationship.value,
        degree=suggestion.degree,
        reason=suggestion.reason,
        full_name=profile.full_name if profile else None,
        avatar_url=profile.avatar_url if profile else None,
    )
