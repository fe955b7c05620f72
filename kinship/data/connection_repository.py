"""Data access for the connections collection.

Materializes the neighborhood the engines need in a bounded number of
queries: one layer per hop, each layer batched into OR filters.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..graph.connection_graph import ConnectionGraph
from ..models import Connection, ConnectionStatus
from .base import call_pocketbase, chunked

if TYPE_CHECKING:
    from pocketbase import PocketBase

logger = logging.getLogger(__name__)

COLLECTION = "connections"


def connection_from_record(record: Any) -> Connection | None:
    """Map a PocketBase record onto a Connection; None for unusable records."""
    try:
        return Connection(
            requester_id=getattr(record, "requester_id", "") or "",
            receiver_id=getattr(record, "receiver_id", "") or "",
            connection_type=getattr(record, "connection_type", None) or "family",
            status=getattr(record, "status", None) or "pending",
            relationship_from_requester=getattr(record, "relationship_from_requester", None),
            relationship_from_receiver=getattr(record, "relationship_from_receiver", None),
            connection_strength=getattr(record, "connection_strength", None),
            common_connections=getattr(record, "common_connections", None),
            id=getattr(record, "id", None),
        )
    except ValueError as e:
        logger.warning(f"Skipping connection record {getattr(record, 'id', '?')}: {e}")
        return None


class ConnectionRepository:
    """Data access layer for connections - enables mocking in tests."""

    # Ids per OR filter; keeps filter strings well under URL limits
    CHUNK_SIZE = 25

    def __init__(self, pb: PocketBase, chunk_size: int | None = None, timeout: float | None = None) -> None:
        self.pb = pb
        self.chunk_size = chunk_size or self.CHUNK_SIZE
        self.timeout = timeout

    async def _get_full_list(self, filter_str: str) -> list[Any]:
        records = await call_pocketbase(
            self.pb.collection(COLLECTION).get_full_list,
            query_params={"filter": filter_str},
            timeout=self.timeout,
            description=f"Fetching {COLLECTION}",
        )
        return list(records or [])

    async def fetch_for_people(self, person_ids: set[str] | list[str]) -> list[Connection]:
        """Non-rejected connections touching any of the given people."""
        if not person_ids:
            return []

        connections: list[Connection] = []
        for batch in chunked(sorted(set(person_ids)), self.chunk_size):
            people = " || ".join(f'requester_id = "{pid}" || receiver_id = "{pid}"' for pid in batch)
            filter_str = f'({people}) && status != "rejected"'
            logger.debug(f"Connection filter for {len(batch)} people")
            for record in await self._get_full_list(filter_str):
                connection = connection_from_record(record)
                if connection is not None:
                    connections.append(connection)
        return connections

    async def fetch_neighborhood(self, user_id: str, depth: int) -> list[Connection]:
        """Connections within depth hops of user_id.

        Layer k fetches the connections of everyone first reached at hop k,
        so every accepted edge on a path of at most depth hops from the user
        is included, plus pending connections touching the visited people.
        """
        visited = {user_id}
        frontier = {user_id}
        seen: dict[Any, Connection] = {}

        for layer in range(max(depth, 0)):
            if not frontier:
                break
            next_frontier: set[str] = set()
            for connection in await self.fetch_for_people(frontier):
                key = connection.id or (connection.pair_key, connection.status)
                seen.setdefault(key, connection)
                if connection.status is not ConnectionStatus.ACCEPTED:
                    continue
                for person in (connection.requester_id, connection.receiver_id):
                    if person and person not in visited:
                        visited.add(person)
                        next_frontier.add(person)
            logger.debug(f"Neighborhood of {user_id}: layer {layer + 1} reached {len(next_frontier)} new people")
            frontier = next_frontier

        logger.info(f"Fetched {len(seen)} connections within {depth} hops of {user_id} ({len(visited)} people)")
        return list(seen.values())

    async def fetch_accepted(self) -> list[Connection]:
        """Every accepted connection in the store."""
        records = await self._get_full_list('status = "accepted"')
        connections = [c for c in (connection_from_record(r) for r in records) if c is not None]
        logger.info(f"Fetched {len(connections)} accepted connections")
        return connections

    async def build_graph(self, user_id: str, depth: int) -> ConnectionGraph:
        return ConnectionGraph.from_connections(await self.fetch_neighborhood(user_id, depth))
