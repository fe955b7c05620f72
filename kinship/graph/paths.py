"""Bounded shortest-path search over the connection graph.

Breadth-first search with neighbors expanded in ascending id order: the
first path reaching the target is a minimum-hop path, and among several
minimum-hop paths the one found first in that order is returned. The order
only depends on ids, so results are reproducible across requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import networkx as nx

from ..models import MAX_DEGREES
from .connection_graph import ConnectionGraph

logger = logging.getLogger(__name__)


class PathOutcome(Enum):
    """Why a search produced (or did not produce) a path"""

    FOUND = "found"
    UNREACHABLE = "unreachable"  # both present, no path within max_depth
    NODE_ABSENT = "node_absent"  # source or target has no accepted connections


@dataclass(frozen=True)
class PathSearchResult:
    outcome: PathOutcome
    path: list[str] | None
    max_depth: int

    @property
    def found(self) -> bool:
        return self.outcome is PathOutcome.FOUND

    @property
    def degrees(self) -> int | None:
        """Hop count of the path, None when no path was found"""
        return len(self.path) - 1 if self.path is not None else None


def search_path(
    graph: ConnectionGraph,
    source_id: str,
    target_id: str,
    max_depth: int = MAX_DEGREES,
) -> PathSearchResult:
    """Find a minimum-hop path from source to target within max_depth hops.

    Args:
        graph: Connection graph snapshot
        source_id: Starting person
        target_id: Person to reach
        max_depth: Maximum number of hops (negative values behave as 0)

    Returns:
        PathSearchResult; a person searching for themselves gets the
        zero-hop path [source_id].
    """
    max_depth = max(max_depth, 0)
    g = graph.graph

    if source_id not in g or target_id not in g:
        missing = [pid for pid in (source_id, target_id) if pid not in g]
        logger.debug(f"Path search {source_id} -> {target_id}: not in graph {missing}")
        return PathSearchResult(PathOutcome.NODE_ABSENT, None, max_depth)

    if source_id == target_id:
        return PathSearchResult(PathOutcome.FOUND, [source_id], max_depth)

    parents: dict[str, str] = {}
    for node, predecessor in nx.bfs_predecessors(g, source_id, depth_limit=max_depth, sort_neighbors=sorted):
        parents[node] = predecessor
        if node == target_id:
            break
    else:
        logger.debug(
            f"Path search {source_id} -> {target_id}: unreachable within {max_depth} hops "
            f"({len(parents)} people visited)"
        )
        return PathSearchResult(PathOutcome.UNREACHABLE, None, max_depth)

    path = [target_id]
    while path[-1] != source_id:
        path.append(parents[path[-1]])
    path.reverse()

    logger.debug(f"Path search {source_id} -> {target_id}: {len(path) - 1} hops")
    return PathSearchResult(PathOutcome.FOUND, path, max_depth)


def find_shortest_path(
    graph: ConnectionGraph,
    source_id: str,
    target_id: str,
    max_depth: int = MAX_DEGREES,
) -> list[str] | None:
    """Shortest path as a list of ids, or None when absent or out of bound."""
    return search_path(graph, source_id, target_id, max_depth).path
