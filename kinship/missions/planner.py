"""One planning step of a six degrees mission: remaining path plus next hops."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..graph.connection_graph import ConnectionGraph
from ..graph.paths import PathOutcome, search_path
from ..graph.ranking import DEFAULT_SUGGESTION_LIMIT, rank_candidates, rank_suggestions
from ..models import MAX_DEGREES, Mission, Suggestion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissionPlan:
    """Result of planning from a mission's frontier.

    shortest_path runs from the frontier to the target; min_degrees is its
    hop count, i.e. the degrees still to go.
    """

    frontier_id: str
    outcome: PathOutcome
    shortest_path: list[str] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)

    @property
    def path_exists(self) -> bool:
        return self.outcome is PathOutcome.FOUND

    @property
    def min_degrees(self) -> int | None:
        return len(self.shortest_path) - 1 if self.shortest_path else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "frontier_id": self.frontier_id,
            "suggestions": [s.to_dict() for s in self.suggestions],
            "shortest_path": list(self.shortest_path),
            "path_exists": self.path_exists,
            "min_degrees": self.min_degrees,
            "outcome": self.outcome.value,
        }


def plan_mission_step(
    graph: ConnectionGraph,
    user_id: str,
    target_id: str,
    path_ids: Sequence[str] | None = None,
    exclude_ids: Iterable[str] = (),
    max_depth: int = MAX_DEGREES,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> MissionPlan:
    """Plan the next hop of a mission.

    Args:
        graph: Connection graph snapshot (strength metadata already set)
        user_id: Mission owner
        target_id: Person the mission tries to reach
        path_ids: People reached so far, starting with the user; the last
            one is the frontier. Defaults to [user_id].
        exclude_ids: Extra people never to suggest (already actioned)
        max_depth: Total hop budget of the mission
        limit: Maximum number of suggestions

    Returns:
        MissionPlan with the remaining shortest path and ranked next hops.
        The target is always offered first when it is a neighbor of the
        frontier. Once the hop budget is spent there are no next hops.
    """
    path_ids = list(path_ids) if path_ids else [user_id]
    frontier = path_ids[-1]
    hops_taken = len(path_ids) - 1
    remaining = max(max_depth - hops_taken, 0)

    result = search_path(graph, frontier, target_id, remaining)

    ranked: list[Suggestion] = []
    # With no hop left every next hop would exceed the degree cap
    if remaining > 0:
        excluded = {user_id, target_id, *path_ids, *exclude_ids}
        ranked = rank_suggestions(graph, frontier, excluded, limit)

        if frontier != target_id and target_id in graph.neighbors(frontier):
            strength, common = graph.candidate_metrics(frontier, target_id)
            direct = Suggestion(target_id, strength, common)
            ranked = [direct] + rank_candidates(ranked, limit=max(limit - 1, 0))
            ranked = ranked[: max(limit, 0)]

    logger.info(
        f"Mission plan {user_id} -> {target_id} from {frontier}: {result.outcome.value}, "
        f"{result.degrees if result.found else 'no'} degrees to go, {len(ranked)} suggestions"
    )
    return MissionPlan(
        frontier_id=frontier,
        outcome=result.outcome,
        shortest_path=result.path or [],
        suggestions=ranked,
    )


def plan_for_mission(
    graph: ConnectionGraph,
    mission: Mission,
    max_depth: int = MAX_DEGREES,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> MissionPlan:
    """plan_mission_step for a tracked mission, excluding everyone already actioned"""
    return plan_mission_step(
        graph,
        mission.user_id,
        mission.target_id,
        path_ids=mission.path_ids,
        exclude_ids=mission.actioned_ids,
        max_depth=max_depth,
        limit=limit,
    )
