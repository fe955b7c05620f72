"""Tests for the kinship router: deduction and family suggestions."""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import AsyncMock, Mock, patch

import pytest
from conftest import family
from fastapi import FastAPI
from fastapi.testclient import TestClient

from kinship.errors import GraphUnavailableError
from kinship.models import Person

FAMILY = [
    family("pai", "me", "pai", "filho"),
    family("me", "irma", "irmao", "irma"),
    family("pai", "tio", "irmao", "irmao"),
    family("avo", "pai", "pai", "filho"),
]


@pytest.fixture
def mock_repos() -> dict[str, Mock]:
    connection_repo = Mock()
    connection_repo.fetch_neighborhood = AsyncMock(return_value=list(FAMILY))

    profile_repo = Mock()
    profile_repo.get_many = AsyncMock(
        return_value={"pai": Person("pai", "Carlos"), "tio": Person("tio", "Rui", "https://img/rui.png")}
    )
    return {"connections": connection_repo, "profiles": profile_repo}


@pytest.fixture
def client(mock_repos: dict[str, Mock]) -> Generator[TestClient, None, None]:
    with (
        patch("api.routers.kinship.get_connection_repository", return_value=mock_repos["connections"]),
        patch("api.routers.kinship.get_profile_repository", return_value=mock_repos["profiles"]),
    ):
        from api.errors import register_exception_handlers
        from api.routers.kinship import router

        app = FastAPI()
        register_exception_handlers(app)
        app.include_router(router)

        yield TestClient(app)


class TestDeduceEndpoint:
    def test_known_rule(self, client: TestClient) -> None:
        response = client.post(
            "/api/kinship/deduce",
            json={"my_relation_to_pivot": "irma", "pivot_relation_to_candidate": "filha"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["relation_to_candidate"] == "sobrinha"
        assert data["candidate_relation_to_me"] == "tia"
        assert data["relation_to_candidate_label"] == "Sobrinha"

    def test_synonyms_accepted(self, client: TestClient) -> None:
        response = client.post(
            "/api/kinship/deduce",
            json={"my_relation_to_pivot": "Father", "pivot_relation_to_candidate": "Son"},
        )

        assert response.json()["relation_to_candidate"] == "irmao"

    def test_no_rule_is_null(self, client: TestClient) -> None:
        response = client.post(
            "/api/kinship/deduce",
            json={"my_relation_to_pivot": "primo", "pivot_relation_to_candidate": "primo"},
        )

        assert response.status_code == 200
        assert response.json() is None

    def test_unknown_label_is_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/kinship/deduce",
            json={"my_relation_to_pivot": "pai", "pivot_relation_to_candidate": "xyz"},
        )

        assert response.status_code == 422
        assert response.json()["value"] == "xyz"


class TestKinshipSuggestionsEndpoint:
    def test_lists_suggestions_with_profiles(self, client: TestClient) -> None:
        response = client.get("/api/users/me/kinship-suggestions")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        tio = next(s for s in data["suggestions"] if s["person_id"] == "tio")
        assert tio["suggested_relationship"] == "tio"
        assert tio["suggested_relationship_label"] == "Tio"
        assert tio["reverse_relationship"] == "sobrinho"
        assert tio["degree"] == 2
        assert tio["full_name"] == "Rui"
        assert tio["reason"] == "Carlos é seu/sua Pai e Rui é Irmão de Carlos"

    def test_filter_by_degree(self, client: TestClient) -> None:
        response = client.get("/api/users/me/kinship-suggestions", params={"degree": 1})

        assert [s["person_id"] for s in response.json()["suggestions"]] == ["pai"]

    def test_filter_by_relationship(self, client: TestClient) -> None:
        response = client.get("/api/users/me/kinship-suggestions", params={"relationship": "avô"})

        assert [s["person_id"] for s in response.json()["suggestions"]] == ["avo"]

    def test_unknown_relationship_filter_rejected(self, client: TestClient) -> None:
        response = client.get("/api/users/me/kinship-suggestions", params={"relationship": "xyz"})

        assert response.status_code == 422

    def test_degree_out_of_range_rejected(self, client: TestClient) -> None:
        response = client.get("/api/users/me/kinship-suggestions", params={"degree": 3})

        assert response.status_code == 422

    def test_store_failure_is_503(self, client: TestClient, mock_repos: dict[str, Mock]) -> None:
        mock_repos["connections"].fetch_neighborhood.side_effect = GraphUnavailableError("down")

        response = client.get("/api/users/me/kinship-suggestions")

        assert response.status_code == 503

    def test_no_family_is_empty(self, client: TestClient, mock_repos: dict[str, Mock]) -> None:
        mock_repos["connections"].fetch_neighborhood.return_value = []

        response = client.get("/api/users/me/kinship-suggestions")

        assert response.json() == {"user_id": "me", "suggestions": [], "total": 0}
