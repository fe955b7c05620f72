"""
Pydantic schemas for mission path, suggestion and tracking endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from kinship.models import MAX_DEGREES


class PathRequest(BaseModel):
    """Path and next-hop request for a mission step"""

    user_id: str
    target_id: str
    current_degree: int = Field(default=0, ge=0, le=MAX_DEGREES)
    max_depth: int | None = Field(default=None, ge=1, le=MAX_DEGREES)
    exclude_ids: list[str] = []


class SuggestionItem(BaseModel):
    """Ranked next-hop candidate, hydrated with profile data when available"""

    person_id: str
    connection_strength: float = 0.0
    common_connections: int = 0
    full_name: str | None = None
    avatar_url: str | None = None


class PathResponse(BaseModel):
    """Shortest remaining path plus ranked suggestions"""

    frontier_id: str
    suggestions: list[SuggestionItem]
    shortest_path: list[str]
    path_exists: bool
    min_degrees: int | None = None
    outcome: Literal["found", "unreachable", "node_absent"]


class SuggestionRequest(BaseModel):
    """Next hops from an arbitrary frontier"""

    frontier_id: str
    exclude_ids: list[str] = []
    limit: int = Field(default=3, ge=1, le=20)
    target_id: str | None = None  # strength is measured against this person when set


class SuggestionResponse(BaseModel):
    frontier_id: str
    suggestions: list[SuggestionItem]


class StartMissionRequest(BaseModel):
    user_id: str
    target_id: str


class MissionActionRequest(BaseModel):
    person_id: str
    action_type: Literal["connection", "message", "invite"] = "connection"
    metadata: dict[str, Any] = {}


class PathStepItem(BaseModel):
    id: str
    action: str | None = None
    name: str | None = None
    avatar_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class MissionResponse(BaseModel):
    """Mission state after a transition, with the refreshed plan while active"""

    id: str | None
    user_id: str
    target_id: str
    current_degree: int
    status: Literal["active", "completed", "abandoned"]
    path: list[PathStepItem]
    created_at: datetime | None = None
    completed_at: datetime | None = None
    plan: PathResponse | None = None
