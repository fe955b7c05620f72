"""Provider-side connection strength derivation.

The ranking engine treats strength as opaque. When the store did not
supply it, the graph provider fills it the way the mission edge function
always has: count the candidate's accepted connections shared with the
mission target, and add one so direct connections never score zero."""

from __future__ import annotations

import logging

from .connection_graph import NODE_COMMON, NODE_STRENGTH, ConnectionGraph

logger = logging.getLogger(__name__)


def common_connections(graph: ConnectionGraph, person_id: str, other_id: str) -> int:
    """Number of accepted connections shared by two people."""
    if person_id not in graph or other_id not in graph:
        return 0
    return len(set(graph.graph.neighbors(person_id)) & set(graph.graph.neighbors(other_id)))


def annotate_connection_strength(graph: ConnectionGraph, target_id: str, overwrite: bool = False) -> int:
    """Write per-person strength toward target_id onto graph nodes.

    Args:
        graph: Graph to annotate in place
        target_id: Mission target the strength is measured against
        overwrite: Replace values already present on nodes

    Returns:
        Number of nodes annotated
    """
    target_neighbors = set(graph.graph.neighbors(target_id)) if target_id in graph else set()
    annotated = 0

    for node, data in graph.graph.nodes(data=True):
        if not overwrite and NODE_STRENGTH in data:
            continue
        common = len(set(graph.graph.neighbors(node)) & target_neighbors)
        data[NODE_COMMON] = common
        data[NODE_STRENGTH] = float(common + 1)
        annotated += 1

    logger.debug(f"Annotated {annotated} people with strength toward {target_id}")
    return annotated
