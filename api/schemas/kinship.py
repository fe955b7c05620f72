"""
Pydantic schemas for kinship deduction and suggestion endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class DeductionRequest(BaseModel):
    """Two known relationships through a pivot person.

    my_relation_to_pivot: what the pivot is to me ("pai")
    pivot_relation_to_candidate: what the candidate is to the pivot ("filho")
    """

    my_relation_to_pivot: str
    pivot_relation_to_candidate: str


class DeductionResponse(BaseModel):
    relation_to_candidate: str
    candidate_relation_to_me: str
    relation_to_candidate_label: str
    candidate_relation_to_me_label: str
    rules_version: str


class KinshipSuggestionItem(BaseModel):
    """A family connection deduced from existing ones"""

    person_id: str
    recipient_id: str
    through_id: str
    suggested_relationship: str
    suggested_relationship_label: str
    reverse_relationship: str
    degree: int
    reason: str
    full_name: str | None = None
    avatar_url: str | None = None


class KinshipSuggestionsResponse(BaseModel):
    user_id: str
    suggestions: list[KinshipSuggestionItem]
    total: int
