"""Read-only profile lookups used to hydrate suggestions and mission paths."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..models import Person
from .base import call_pocketbase, chunked

if TYPE_CHECKING:
    from pocketbase import PocketBase

logger = logging.getLogger(__name__)


def person_from_record(record: Any) -> Person:
    def _float(name: str) -> float | None:
        value = getattr(record, name, None)
        return float(value) if value not in (None, "") else None

    return Person(
        id=getattr(record, "id", ""),
        full_name=getattr(record, "full_name", "") or "",
        avatar_url=getattr(record, "avatar_url", None) or None,
        latitude=_float("latitude"),
        longitude=_float("longitude"),
    )


class ProfileRepository:
    CHUNK_SIZE = 25

    def __init__(self, pb: PocketBase, chunk_size: int | None = None, timeout: float | None = None) -> None:
        self.pb = pb
        self.chunk_size = chunk_size or self.CHUNK_SIZE
        self.timeout = timeout

    async def get_many(self, person_ids: list[str] | set[str]) -> dict[str, Person]:
        """Profiles keyed by id; ids without a profile are simply missing."""
        people: dict[str, Person] = {}
        for batch in chunked(sorted(set(person_ids)), self.chunk_size):
            id_filter = " || ".join(f'id = "{pid}"' for pid in batch)
            records = await call_pocketbase(
                self.pb.collection("profiles").get_full_list,
                query_params={"filter": id_filter},
                timeout=self.timeout,
                description="Fetching profiles",
            )
            for record in records or []:
                person = person_from_record(record)
                people[person.id] = person

        logger.debug(f"Hydrated {len(people)} of {len(set(person_ids))} profiles")
        return people
