"""
Connection graph, bounded path search and next-hop ranking
"""

from .connection_graph import ConnectionGraph
from .paths import PathOutcome, PathSearchResult, find_shortest_path, search_path
from .ranking import DEFAULT_SUGGESTION_LIMIT, rank_candidates, rank_suggestions
from .strength import annotate_connection_strength, common_connections

__all__ = [
    "DEFAULT_SUGGESTION_LIMIT",
    "ConnectionGraph",
    "PathOutcome",
    "PathSearchResult",
    "annotate_connection_strength",
    "common_connections",
    "find_shortest_path",
    "rank_candidates",
    "rank_suggestions",
    "search_path",
]
