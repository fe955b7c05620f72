"""Persistence for missions, their suggestions and recorded actions.

Collections:
    missions: user_id, target_id, current_degree, status, path (JSON), completed_at
    mission_suggestions: mission_id, suggested_user_id, degree, connection_strength, common_connections
    mission_actions: mission_id, target_user_id, action_type, degree, metadata (JSON)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..errors import GraphUnavailableError, MissionNotFoundError
from ..models import (
    Mission,
    MissionAction,
    MissionActionType,
    MissionStatus,
    PathStep,
    Suggestion,
)
from .base import call_pocketbase

if TYPE_CHECKING:
    from pocketbase import PocketBase

logger = logging.getLogger(__name__)


def _parse_datetime(value: Any) -> datetime | None:
    """PocketBase dates come back as datetimes or "2026-01-06 14:05:52.123Z" strings"""
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace(" ", "T").replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable timestamp from PocketBase: {value!r}")
        return None


def _format_datetime(value: datetime | None) -> str:
    return value.isoformat() if value else ""


def mission_from_record(record: Any, actioned_ids: set[str] | None = None) -> Mission:
    raw_path = getattr(record, "path", None) or []
    return Mission(
        id=getattr(record, "id", None),
        user_id=getattr(record, "user_id", ""),
        target_id=getattr(record, "target_id", ""),
        current_degree=int(getattr(record, "current_degree", 0) or 0),
        status=MissionStatus(getattr(record, "status", None) or "active"),
        path=[PathStep.from_dict(step) for step in raw_path if isinstance(step, dict)],
        actioned_ids=set(actioned_ids or ()),
        created_at=_parse_datetime(getattr(record, "created", None) or getattr(record, "created_at", None)),
        completed_at=_parse_datetime(getattr(record, "completed_at", None)),
    )


def _load_mission(record: Any, actioned_ids: set[str] | None = None) -> Mission:
    """mission_from_record for stored data; an unreadable record means the store is unusable"""
    try:
        return mission_from_record(record, actioned_ids)
    except ValueError as e:
        record_id = getattr(record, "id", "?")
        logger.error(f"Malformed mission record {record_id}: {e}")
        raise GraphUnavailableError(f"Mission record {record_id} is malformed") from e


def action_from_record(record: Any) -> MissionAction:
    return MissionAction(
        id=getattr(record, "id", None),
        mission_id=getattr(record, "mission_id", None),
        person_id=getattr(record, "target_user_id", ""),
        action_type=MissionActionType(getattr(record, "action_type", "connection")),
        degree=int(getattr(record, "degree", 0) or 0),
        metadata=getattr(record, "metadata", None) or {},
        created_at=_parse_datetime(getattr(record, "created", None)),
    )


class MissionRepository:
    """Data access layer for missions - enables mocking in tests."""

    def __init__(self, pb: PocketBase, timeout: float | None = None) -> None:
        self.pb = pb
        self.timeout = timeout

    async def _call(self, collection: str, method: str, *args: Any, **kwargs: Any) -> Any:
        func = getattr(self.pb.collection(collection), method)
        return await call_pocketbase(
            func, *args, timeout=self.timeout, description=f"{method} on {collection}", **kwargs
        )

    async def get(self, mission_id: str) -> Mission:
        """Load a mission with the ids of everyone already actioned.

        Raises:
            MissionNotFoundError: no mission with this id
        """
        record = await call_pocketbase(
            self.pb.collection("missions").get_one,
            mission_id,
            timeout=self.timeout,
            description="get_one on missions",
            allow_missing=True,
        )
        if record is None:
            raise MissionNotFoundError(f"Mission {mission_id} not found")

        actions = await self.list_actions(mission_id)
        return _load_mission(record, {a.person_id for a in actions})

    async def get_active(self, user_id: str) -> Mission | None:
        """The user's most recent active mission, if any."""
        records = await self._call(
            "missions",
            "get_full_list",
            query_params={"filter": f'user_id = "{user_id}" && status = "active"', "sort": "-created"},
        )
        if not records:
            return None
        mission = _load_mission(records[0])
        if mission.id:
            mission.actioned_ids = {a.person_id for a in await self.list_actions(mission.id)}
        return mission

    async def create(self, mission: Mission) -> Mission:
        record = await self._call("missions", "create", self._mission_payload(mission))
        mission.id = getattr(record, "id", None)
        logger.info(f"Persisted mission {mission.id} for {mission.user_id}")
        return mission

    async def save(self, mission: Mission) -> Mission:
        """Write degree, status, path and completion time back to the store."""
        if not mission.id:
            return await self.create(mission)
        await self._call("missions", "update", mission.id, self._mission_payload(mission))
        return mission

    def _mission_payload(self, mission: Mission) -> dict[str, Any]:
        return {
            "user_id": mission.user_id,
            "target_id": mission.target_id,
            "current_degree": mission.current_degree,
            "status": mission.status.value,
            "path": [step.to_dict() for step in mission.path],
            "completed_at": _format_datetime(mission.completed_at),
        }

    async def add_action(self, action: MissionAction) -> MissionAction:
        record = await self._call(
            "mission_actions",
            "create",
            {
                "mission_id": action.mission_id,
                "target_user_id": action.person_id,
                "action_type": action.action_type.value,
                "degree": action.degree,
                "metadata": action.metadata,
            },
        )
        action.id = getattr(record, "id", None)
        return action

    async def list_actions(self, mission_id: str) -> list[MissionAction]:
        records = await self._call(
            "mission_actions",
            "get_full_list",
            query_params={"filter": f'mission_id = "{mission_id}"', "sort": "created"},
        )
        actions = []
        for record in records or []:
            try:
                actions.append(action_from_record(record))
            except ValueError as e:
                logger.warning(f"Skipping mission action {getattr(record, 'id', '?')}: {e}")
        return actions

    async def save_suggestions(self, mission_id: str, degree: int, suggestions: list[Suggestion]) -> int:
        """Store the ranked suggestions shown at a degree; returns how many were written."""
        for suggestion in suggestions:
            await self._call(
                "mission_suggestions",
                "create",
                {
                    "mission_id": mission_id,
                    "suggested_user_id": suggestion.person_id,
                    "degree": degree,
                    "connection_strength": suggestion.connection_strength,
                    "common_connections": suggestion.common_connections,
                },
            )
        logger.debug(f"Stored {len(suggestions)} suggestions for mission {mission_id} at degree {degree}")
        return len(suggestions)
