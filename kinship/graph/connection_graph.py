"""In-memory connection graph rebuilt per request from connection records.

Wraps an undirected NetworkX graph whose nodes are person ids and whose
edges are accepted connections. Pending connections are not edges but are
remembered so suggestion sweeps can skip pairs that already have a request
in flight."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import networkx as nx

from ..models import Connection, ConnectionStatus, ConnectionType, pair_key
from ..relationships.vocabulary import RelationshipLabel, inverse_relationship

logger = logging.getLogger(__name__)

# Node attributes written by annotate_connection_strength
NODE_STRENGTH = "connection_strength"
NODE_COMMON = "common_connections"


class ConnectionGraph:
    """Undirected accepted-connection graph with relationship labels.

    Edge attributes:
        connection_type: ConnectionType of the connection
        relations: {person_id: label} where label is what person_id is to
            the other end of the edge
        connection_strength / common_connections: store-supplied metadata,
            present only when the record carried them
    """

    def __init__(self, graph: nx.Graph | None = None, pending_pairs: set[tuple[str, str]] | None = None):
        self.graph = graph if graph is not None else nx.Graph()
        self.pending_pairs: set[tuple[str, str]] = pending_pairs or set()

    @classmethod
    def from_connections(cls, connections: Iterable[Connection]) -> ConnectionGraph:
        """Build a graph from connection records of any status."""
        connection_graph = cls()
        skipped = 0
        for connection in connections:
            if not connection_graph.add_connection(connection):
                skipped += 1

        logger.debug(
            f"Built connection graph: {connection_graph.graph.number_of_nodes()} nodes, "
            f"{connection_graph.graph.number_of_edges()} edges, "
            f"{len(connection_graph.pending_pairs)} pending pairs, {skipped} records skipped"
        )
        return connection_graph

    def add_connection(self, connection: Connection) -> bool:
        """Add one record; returns False when it does not enter the graph."""
        requester, receiver = connection.requester_id, connection.receiver_id
        if not requester or not receiver or requester == receiver:
            logger.warning(f"Ignoring self or incomplete connection {connection.id or (requester, receiver)}")
            return False

        if connection.status is ConnectionStatus.PENDING:
            self.pending_pairs.add(connection.pair_key)
            return False
        if connection.status is not ConnectionStatus.ACCEPTED:
            return False

        requester_label = connection.relationship_from_requester
        receiver_label = connection.relationship_from_receiver
        # Tolerate one-sided records: derive the missing side from the other
        if receiver_label is RelationshipLabel.OTHER:
            receiver_label = inverse_relationship(requester_label)
        if requester_label is RelationshipLabel.OTHER:
            requester_label = inverse_relationship(receiver_label)

        if self.graph.has_edge(requester, receiver):
            self._merge_edge(requester, receiver, connection, requester_label, receiver_label)
            return True

        attrs: dict[str, Any] = {
            "connection_type": connection.connection_type,
            "relations": {requester: requester_label, receiver: receiver_label},
        }
        if connection.connection_strength is not None:
            attrs["connection_strength"] = connection.connection_strength
        if connection.common_connections is not None:
            attrs["common_connections"] = connection.common_connections
        self.graph.add_edge(requester, receiver, **attrs)
        return True

    def _merge_edge(
        self,
        requester: str,
        receiver: str,
        connection: Connection,
        requester_label: RelationshipLabel,
        receiver_label: RelationshipLabel,
    ) -> None:
        """Duplicate records for one pair: fill gaps, never overwrite"""
        edge_data = self.graph[requester][receiver]
        relations = edge_data["relations"]
        if relations.get(requester, RelationshipLabel.OTHER) is RelationshipLabel.OTHER:
            relations[requester] = requester_label
        if relations.get(receiver, RelationshipLabel.OTHER) is RelationshipLabel.OTHER:
            relations[receiver] = receiver_label
        if connection.connection_type is ConnectionType.FAMILY:
            edge_data["connection_type"] = ConnectionType.FAMILY
        if "connection_strength" not in edge_data and connection.connection_strength is not None:
            edge_data["connection_strength"] = connection.connection_strength
        if "common_connections" not in edge_data and connection.common_connections is not None:
            edge_data["common_connections"] = connection.common_connections

    def __contains__(self, person_id: object) -> bool:
        return person_id in self.graph

    def __len__(self) -> int:
        return int(self.graph.number_of_nodes())

    def neighbors(self, person_id: str) -> list[str]:
        """Accepted neighbors in ascending id order; [] for unknown ids."""
        if person_id not in self.graph:
            return []
        return sorted(self.graph.neighbors(person_id))

    def family_neighbors(self, person_id: str) -> list[str]:
        return [
            other
            for other in self.neighbors(person_id)
            if self.graph[person_id][other]["connection_type"] is ConnectionType.FAMILY
        ]

    def relation_of(self, person_id: str, to_id: str) -> RelationshipLabel:
        """What person_id is to to_id, OTHER when unknown or not connected."""
        if not self.graph.has_edge(person_id, to_id):
            return RelationshipLabel.OTHER
        relations: dict[str, RelationshipLabel] = self.graph[person_id][to_id]["relations"]
        return relations.get(person_id, RelationshipLabel.OTHER)

    def has_connection(self, a: str, b: str, include_pending: bool = True) -> bool:
        if self.graph.has_edge(a, b):
            return True
        return include_pending and pair_key(a, b) in self.pending_pairs

    def set_candidate_metrics(self, person_id: str, connection_strength: float, common_connections: int) -> None:
        """Record per-person ranking metadata (relative to a mission target)."""
        if person_id not in self.graph:
            return
        self.graph.nodes[person_id][NODE_STRENGTH] = connection_strength
        self.graph.nodes[person_id][NODE_COMMON] = common_connections

    def candidate_metrics(self, frontier_id: str, candidate_id: str) -> tuple[float, int]:
        """Ranking metadata for a next hop: edge values first, then node values."""
        edge_data = self.graph.get_edge_data(frontier_id, candidate_id, default={})
        node_data = self.graph.nodes[candidate_id] if candidate_id in self.graph else {}

        strength = edge_data.get("connection_strength", node_data.get(NODE_STRENGTH, 0.0))
        common = edge_data.get("common_connections", node_data.get(NODE_COMMON, 0))
        return float(strength or 0.0), int(common or 0)

    def stats(self) -> dict[str, Any]:
        node_count = self.graph.number_of_nodes()
        return {
            "node_count": node_count,
            "edge_count": self.graph.number_of_edges(),
            "pending_pairs": len(self.pending_pairs),
            "components": nx.number_connected_components(self.graph) if node_count else 0,
        }
