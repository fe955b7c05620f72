"""Tests for MissionRepository - mission persistence over PocketBase."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from kinship.data import MissionRepository
from kinship.errors import GraphUnavailableError, MissionNotFoundError
from kinship.missions import record_action, start_mission
from kinship.models import MissionActionType, MissionStatus, Suggestion


def _collections() -> tuple[MagicMock, dict[str, MagicMock]]:
    """Mock pb with a separate mock per collection name."""
    collections: dict[str, MagicMock] = {}

    def collection(name: str) -> MagicMock:
        return collections.setdefault(name, MagicMock())

    mock_pb = MagicMock()
    mock_pb.collection.side_effect = collection
    return mock_pb, collections


def _mission_record(**overrides):
    fields = {
        "id": "m1",
        "user_id": "u",
        "target_id": "t",
        "current_degree": 1,
        "status": "active",
        "path": [{"id": "u", "action": None}, {"id": "a", "action": "connection", "name": "Ana"}],
        "created": "2026-01-06 14:05:52.123Z",
        "completed_at": "",
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestGetMission:
    @pytest.mark.asyncio
    async def test_loads_mission_and_actioned_ids(self):
        mock_pb, collections = _collections()
        collections["missions"] = MagicMock()
        collections["missions"].get_one.return_value = _mission_record()
        collections["mission_actions"] = MagicMock()
        collections["mission_actions"].get_full_list.return_value = [
            SimpleNamespace(id="x1", mission_id="m1", target_user_id="a", action_type="connection", degree=0),
            SimpleNamespace(id="x2", mission_id="m1", target_user_id="b", action_type="message", degree=1),
        ]
        repo = MissionRepository(mock_pb)

        mission = await repo.get("m1")

        assert mission.id == "m1"
        assert mission.status is MissionStatus.ACTIVE
        assert mission.path_ids == ["u", "a"]
        assert mission.path[1].name == "Ana"
        assert mission.actioned_ids == {"a", "b"}
        assert mission.created_at is not None
        assert mission.completed_at is None

    @pytest.mark.asyncio
    async def test_missing_mission_raises_not_found(self):
        mock_pb, collections = _collections()
        collections["missions"] = MagicMock()
        collections["missions"].get_one.side_effect = ClientResponseError("missing", status=404)
        repo = MissionRepository(mock_pb)

        with pytest.raises(MissionNotFoundError):
            await repo.get("nope")

    @pytest.mark.asyncio
    async def test_server_error_raises_unavailable(self):
        mock_pb, collections = _collections()
        collections["missions"] = MagicMock()
        collections["missions"].get_one.side_effect = ClientResponseError("down", status=500)
        repo = MissionRepository(mock_pb)

        with pytest.raises(GraphUnavailableError):
            await repo.get("m1")

    @pytest.mark.asyncio
    async def test_unknown_stored_status_raises_unavailable(self):
        mock_pb, collections = _collections()
        collections["missions"] = MagicMock()
        collections["missions"].get_one.return_value = _mission_record(status="paused")
        collections["mission_actions"] = MagicMock()
        collections["mission_actions"].get_full_list.return_value = []
        repo = MissionRepository(mock_pb)

        with pytest.raises(GraphUnavailableError, match="m1"):
            await repo.get("m1")

    @pytest.mark.asyncio
    async def test_unknown_action_type_is_skipped(self):
        mock_pb, collections = _collections()
        collections["missions"] = MagicMock()
        collections["missions"].get_one.return_value = _mission_record()
        collections["mission_actions"] = MagicMock()
        collections["mission_actions"].get_full_list.return_value = [
            SimpleNamespace(id="x1", mission_id="m1", target_user_id="a", action_type="connection", degree=0),
            SimpleNamespace(id="x2", mission_id="m1", target_user_id="b", action_type="poke", degree=1),
        ]
        repo = MissionRepository(mock_pb)

        mission = await repo.get("m1")

        assert mission.actioned_ids == {"a"}


class TestSaveMission:
    @pytest.mark.asyncio
    async def test_create_sets_id(self):
        mock_pb, collections = _collections()
        collections["missions"] = MagicMock()
        collections["missions"].create.return_value = SimpleNamespace(id="new-id")
        repo = MissionRepository(mock_pb)

        mission = await repo.create(start_mission("u", "t"))

        assert mission.id == "new-id"
        payload = collections["missions"].create.call_args.args[0]
        assert payload["status"] == "active"
        assert payload["current_degree"] == 0
        assert payload["path"][0]["id"] == "u"

    @pytest.mark.asyncio
    async def test_save_updates_existing(self):
        mock_pb, collections = _collections()
        repo = MissionRepository(mock_pb)
        mission = start_mission("u", "t")
        mission.id = "m1"
        record_action(mission, "t")

        await repo.save(mission)

        record_id, payload = collections["missions"].update.call_args.args
        assert record_id == "m1"
        assert payload["status"] == "completed"
        assert payload["completed_at"]


class TestActionsAndSuggestions:
    @pytest.mark.asyncio
    async def test_add_action(self):
        mock_pb, collections = _collections()
        collections["mission_actions"] = MagicMock()
        collections["mission_actions"].create.return_value = SimpleNamespace(id="act1")
        repo = MissionRepository(mock_pb)
        mission = start_mission("u", "t")
        mission.id = "m1"

        action = await repo.add_action(record_action(mission, "a", MissionActionType.INVITE))

        assert action.id == "act1"
        payload = collections["mission_actions"].create.call_args.args[0]
        assert payload == {
            "mission_id": "m1",
            "target_user_id": "a",
            "action_type": "invite",
            "degree": 0,
            "metadata": {},
        }

    @pytest.mark.asyncio
    async def test_save_suggestions(self):
        mock_pb, collections = _collections()
        repo = MissionRepository(mock_pb)

        written = await repo.save_suggestions("m1", 2, [Suggestion("a", 3.0, 2), Suggestion("b", 1.0, 0)])

        assert written == 2
        first = collections["mission_suggestions"].create.call_args_list[0].args[0]
        assert first == {
            "mission_id": "m1",
            "suggested_user_id": "a",
            "degree": 2,
            "connection_strength": 3.0,
            "common_connections": 2,
        }

    @pytest.mark.asyncio
    async def test_get_active_returns_none_without_missions(self):
        mock_pb, collections = _collections()
        collections["missions"] = MagicMock()
        collections["missions"].get_full_list.return_value = []
        repo = MissionRepository(mock_pb)

        assert await repo.get_active("u") is None
