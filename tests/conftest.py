"""
Root test configuration and fixtures for the kinship project.

This conftest.py provides common fixtures for all test categories:
- a mock PocketBase client (applied automatically so no test reaches a server)
- connection builders and small family graphs used across engine tests

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kinship.graph import ConnectionGraph  # noqa: E402
from kinship.models import Connection, ConnectionStatus, ConnectionType  # noqa: E402


def create_mock_pocketbase():
    """Create a mock PocketBase instance with the collection calls the repositories use."""
    mock_pb = Mock()

    mock_collection = Mock()
    mock_collection.auth_with_password = Mock(return_value=True)
    mock_collection.get_full_list = Mock(return_value=[])
    mock_collection.get_one = Mock()
    mock_collection.create = Mock(return_value=Mock(id="mock-id"))
    mock_collection.update = Mock()

    # Every collection name returns the same mock
    mock_pb.collection = Mock(return_value=mock_collection)

    mock_pb.auth_store = Mock()
    mock_pb.auth_store.base_token = "mock-token"

    return mock_pb


@pytest.fixture
def mock_pocketbase():
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def mock_all_external_services():
    """Automatically mock PocketBase to prevent real connections.

    Set SKIP_MOCKING=true for integration runs against a live server.
    """
    if os.environ.get("SKIP_MOCKING") == "true":
        yield {}
        return

    mock_pb = create_mock_pocketbase()

    with patch("pocketbase.PocketBase") as mock_pb_class:
        mock_pb_class.return_value = mock_pb
        yield {"pocketbase": mock_pb}


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Settings are cached per process; tests patching env vars need a fresh read."""
    from api.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Connection and Graph Builders
# =============================================================================


def family(
    requester: str,
    receiver: str,
    requester_is: str = "outro",
    receiver_is: str = "outro",
    status: str = "accepted",
    **kwargs,
) -> Connection:
    """Family connection where requester_is names what the requester is to the receiver."""
    return Connection(
        requester_id=requester,
        receiver_id=receiver,
        connection_type=ConnectionType.FAMILY,
        status=ConnectionStatus(status),
        relationship_from_requester=requester_is,
        relationship_from_receiver=receiver_is,
        **kwargs,
    )


def friend(requester: str, receiver: str, status: str = "accepted", **kwargs) -> Connection:
    return Connection(
        requester_id=requester,
        receiver_id=receiver,
        connection_type=ConnectionType.FRIEND,
        status=ConnectionStatus(status),
        relationship_from_requester="amigo",
        relationship_from_receiver="amigo",
        **kwargs,
    )


def chain_graph(*ids: str) -> ConnectionGraph:
    """Accepted friend connections along ids in order: a-b, b-c, ..."""
    return ConnectionGraph.from_connections(friend(a, b) for a, b in zip(ids, ids[1:]))


@pytest.fixture
def family_graph() -> ConnectionGraph:
    """A user with a father, a sister and an uncle reachable through the father.

    me -- pai (father) -- tio (father's brother)
    me -- irma (sister)
    pai -- avo (father's father)
    """
    return ConnectionGraph.from_connections(
        [
            family("pai", "me", "pai", "filho"),
            family("me", "irma", "irmao", "irma"),
            family("pai", "tio", "irmao", "irmao"),
            family("avo", "pai", "pai", "filho"),
        ]
    )
