"""Next-hop suggestion ranking for six degrees missions."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models import Suggestion
from .connection_graph import ConnectionGraph

logger = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 3


def suggestion_sort_key(suggestion: Suggestion) -> tuple[float, int, str]:
    """Strength descending, then common connections descending, then id."""
    return (-suggestion.connection_strength, -suggestion.common_connections, suggestion.person_id)


def rank_candidates(
    candidates: Iterable[Suggestion],
    exclude_ids: Iterable[str] = (),
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[Suggestion]:
    """Order already-scored candidates and truncate to limit."""
    excluded = set(exclude_ids)
    kept = [c for c in candidates if c.person_id not in excluded]
    return sorted(kept, key=suggestion_sort_key)[: max(limit, 0)]


def rank_suggestions(
    graph: ConnectionGraph,
    frontier_id: str,
    exclude_ids: Iterable[str] = (),
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[Suggestion]:
    """Rank the frontier's neighbors as next hops.

    Strength and common-connection counts are opaque store metadata read
    from the graph; this only filters, sorts and truncates.

    Args:
        graph: Connection graph snapshot
        frontier_id: Person whose connections are candidates
        exclude_ids: People never to suggest (user, target, already actioned)
        limit: Maximum number of suggestions

    Returns:
        Suggestions in rank order; [] when the frontier is not in the graph.
    """
    if frontier_id not in graph:
        return []

    excluded = set(exclude_ids) | {frontier_id}
    candidates = []
    for neighbor in graph.neighbors(frontier_id):
        if neighbor in excluded:
            continue
        strength, common = graph.candidate_metrics(frontier_id, neighbor)
        candidates.append(Suggestion(neighbor, strength, common))

    ranked = rank_candidates(candidates, limit=limit)
    logger.debug(f"Ranked {len(candidates)} candidates from {frontier_id}, returning {len(ranked)}")
    return ranked
