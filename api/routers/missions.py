"""
Missions Router - Six degrees mission endpoints.

This router handles:
- Shortest path and next-hop suggestions for a mission step
- Suggestions from an arbitrary frontier
- Mission start, action recording and abandonment
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Path

from kinship.errors import GraphUnavailableError
from kinship.graph import ConnectionGraph, annotate_connection_strength, rank_suggestions
from kinship.missions import (
    MissionPlan,
    abandon_mission,
    plan_for_mission,
    plan_mission_step,
    record_action,
    start_mission,
)
from kinship.models import Mission, MissionActionType, PathStep, Person, Suggestion, validate_person_id

from ..dependencies import get_connection_repository, get_mission_repository, get_profile_repository
from ..schemas import (
    MissionActionRequest,
    MissionResponse,
    PathRequest,
    PathResponse,
    PathStepItem,
    StartMissionRequest,
    SuggestionItem,
    SuggestionRequest,
    SuggestionResponse,
)
from ..settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/missions", tags=["missions"])


# ========================================
# Helpers
# ========================================


async def _load_graph(source_id: str, target_id: str | None, depth: int) -> ConnectionGraph:
    """Neighborhood of source within depth hops, plus what strength derivation needs.

    Strength counts connections a candidate shares with the target, so the
    target's connections and every candidate's own connections are fetched
    even when they sit beyond the neighborhood bound.
    """
    repo = get_connection_repository()
    connections = await repo.fetch_neighborhood(source_id, depth)
    if not target_id:
        return ConnectionGraph.from_connections(connections)

    candidates = ConnectionGraph.from_connections(connections).neighbors(source_id)
    connections.extend(await repo.fetch_for_people({target_id, *candidates}))

    graph = ConnectionGraph.from_connections(connections)
    annotate_connection_strength(graph, target_id)
    return graph


async def _load_profiles(person_ids: list[str]) -> dict[str, Person]:
    """Profile enrichment is best effort; engines never depend on it."""
    if not person_ids:
        return {}
    try:
        return await get_profile_repository().get_many(person_ids)
    except GraphUnavailableError as e:
        logger.warning(f"Serving suggestions without profile data: {e}")
        return {}


def _hydrate_step(step: PathStep, profiles: dict[str, Person]) -> None:
    person = profiles.get(step.person_id)
    if person is None:
        return
    step.name, step.avatar_url = person.full_name, person.avatar_url
    step.latitude, step.longitude = person.latitude, person.longitude


def _suggestion_items(suggestions: list[Suggestion], profiles: dict[str, Person]) -> list[SuggestionItem]:
    items = []
    for suggestion in suggestions:
        profile = profiles.get(suggestion.person_id)
        items.append(
            SuggestionItem(
                person_id=suggestion.person_id,
                connection_strength=suggestion.connection_strength,
                common_connections=suggestion.common_connections,
                full_name=profile.full_name if profile else None,
                avatar_url=profile.avatar_url if profile else None,
            )
        )
    return items


async def _path_response(plan: MissionPlan) -> PathResponse:
    profiles = await _load_profiles([s.person_id for s in plan.suggestions])
    return PathResponse(
        frontier_id=plan.frontier_id,
        suggestions=_suggestion_items(plan.suggestions, profiles),
        shortest_path=plan.shortest_path,
        path_exists=plan.path_exists,
        min_degrees=plan.min_degrees,
        outcome=plan.outcome.value,
    )


def _mission_response(mission: Mission, plan: PathResponse | None = None) -> MissionResponse:
    return MissionResponse(
        id=mission.id,
        user_id=mission.user_id,
        target_id=mission.target_id,
        current_degree=mission.current_degree,
        status=mission.status.value,
        path=[PathStepItem(**step.to_dict()) for step in mission.path],
        created_at=mission.created_at,
        completed_at=mission.completed_at,
        plan=plan,
    )


async def _refresh_plan(mission: Mission) -> PathResponse | None:
    """Plan the next step of an active mission and store its suggestions."""
    if mission.status.is_terminal:
        return None

    settings = get_settings()
    remaining = max(settings.mission_max_depth - mission.current_degree, 1)
    graph = await _load_graph(mission.frontier_id, mission.target_id, remaining)
    plan = plan_for_mission(graph, mission, settings.mission_max_depth, settings.suggestion_limit)
    if mission.id:
        await get_mission_repository().save_suggestions(mission.id, mission.current_degree, plan.suggestions)
    return await _path_response(plan)


# ========================================
# Path and Suggestion Endpoints
# ========================================


@router.post("/path")
async def calculate_mission_path(request: PathRequest) -> PathResponse:
    """Shortest path from user to target plus ranked next hops.

    Suggestions are the user's connections, ranked by connection strength
    toward the target. A missing path is a normal response with
    path_exists false and an outcome explaining why.
    """
    user_id = validate_person_id(request.user_id)
    target_id = validate_person_id(request.target_id)
    exclude_ids = [validate_person_id(pid) for pid in request.exclude_ids]

    settings = get_settings()
    max_depth = request.max_depth or settings.mission_max_depth

    logger.info(f"Calculating path from {user_id} to {target_id} at degree {request.current_degree}")

    graph = await _load_graph(user_id, target_id, max_depth)
    plan = plan_mission_step(
        graph,
        user_id,
        target_id,
        exclude_ids=exclude_ids,
        max_depth=max_depth,
        limit=settings.suggestion_limit,
    )
    return await _path_response(plan)


@router.post("/suggestions")
async def get_next_hop_suggestions(request: SuggestionRequest) -> SuggestionResponse:
    """Rank the frontier's connections as next hops."""
    frontier_id = validate_person_id(request.frontier_id)
    target_id = validate_person_id(request.target_id) if request.target_id else None
    exclude_ids = [validate_person_id(pid) for pid in request.exclude_ids]

    graph = await _load_graph(frontier_id, target_id, depth=1)
    suggestions = rank_suggestions(graph, frontier_id, exclude_ids, request.limit)
    profiles = await _load_profiles([s.person_id for s in suggestions])
    return SuggestionResponse(frontier_id=frontier_id, suggestions=_suggestion_items(suggestions, profiles))


# ========================================
# Mission Tracking Endpoints
# ========================================


@router.post("", status_code=201)
async def create_mission(request: StartMissionRequest) -> MissionResponse:
    """Start a mission and return it with the first planning step."""
    mission = start_mission(request.user_id, request.target_id)

    _hydrate_step(mission.path[0], await _load_profiles([mission.user_id]))

    mission = await get_mission_repository().create(mission)
    return _mission_response(mission, await _refresh_plan(mission))


@router.get("/{mission_id}")
async def get_mission(
    mission_id: Annotated[str, Path(description="Mission record ID")],
) -> MissionResponse:
    mission = await get_mission_repository().get(validate_person_id(mission_id))
    return _mission_response(mission)


@router.post("/{mission_id}/actions")
async def record_mission_action(
    mission_id: Annotated[str, Path(description="Mission record ID")],
    request: MissionActionRequest,
) -> MissionResponse:
    """Record an action; connections advance the mission and refresh suggestions."""
    repo = get_mission_repository()
    mission = await repo.get(validate_person_id(mission_id))

    action = record_action(mission, request.person_id, request.action_type, metadata=request.metadata)

    if action.action_type is MissionActionType.CONNECTION:
        _hydrate_step(mission.path[-1], await _load_profiles([action.person_id]))

    await repo.add_action(action)
    await repo.save(mission)

    plan = None
    if action.action_type is MissionActionType.CONNECTION:
        plan = await _refresh_plan(mission)
    return _mission_response(mission, plan)


@router.post("/{mission_id}/abandon")
async def abandon(
    mission_id: Annotated[str, Path(description="Mission record ID")],
) -> MissionResponse:
    repo = get_mission_repository()
    mission = await repo.get(validate_person_id(mission_id))
    abandon_mission(mission)
    await repo.save(mission)
    return _mission_response(mission)
