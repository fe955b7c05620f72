"""Tests for building the connection graph from connection records."""

from __future__ import annotations

from conftest import family, friend

from kinship.graph import ConnectionGraph
from kinship.models import Connection, ConnectionType
from kinship.relationships.vocabulary import RelationshipLabel as R


class TestFromConnections:
    def test_only_accepted_connections_become_edges(self):
        graph = ConnectionGraph.from_connections(
            [
                friend("a", "b"),
                friend("a", "c", status="pending"),
                friend("a", "d", status="rejected"),
            ]
        )

        assert graph.neighbors("a") == ["b"]
        assert "d" not in graph

    def test_pending_pairs_are_remembered(self):
        graph = ConnectionGraph.from_connections([friend("c", "a", status="pending")])

        assert graph.has_connection("a", "c")
        assert not graph.has_connection("a", "c", include_pending=False)

    def test_self_connections_are_ignored(self):
        graph = ConnectionGraph.from_connections([friend("a", "a"), friend("a", "b")])

        assert graph.neighbors("a") == ["b"]

    def test_edges_are_undirected(self):
        graph = ConnectionGraph.from_connections([friend("b", "a")])

        assert graph.neighbors("a") == ["b"]
        assert graph.neighbors("b") == ["a"]

    def test_neighbors_sorted_and_unknown_empty(self):
        graph = ConnectionGraph.from_connections([friend("m", "z"), friend("m", "a"), friend("m", "k")])

        assert graph.neighbors("m") == ["a", "k", "z"]
        assert graph.neighbors("nobody") == []

    def test_raw_strings_are_normalized(self):
        record = Connection("pai", "me", "family", "accepted", "Father", "filho")

        graph = ConnectionGraph.from_connections([record])

        assert graph.relation_of("pai", "me") is R.PAI
        assert graph.relation_of("me", "pai") is R.FILHO


class TestRelationLabels:
    def test_relation_of_reads_each_side(self, family_graph):
        assert family_graph.relation_of("pai", "me") is R.PAI
        assert family_graph.relation_of("me", "pai") is R.FILHO
        assert family_graph.relation_of("tio", "pai") is R.IRMAO

    def test_missing_side_filled_from_inverse(self):
        graph = ConnectionGraph.from_connections([family("vo", "neta", "ava", "outro")])

        assert graph.relation_of("neta", "vo") is R.NETA

    def test_not_connected_is_other(self, family_graph):
        assert family_graph.relation_of("irma", "tio") is R.OTHER

    def test_duplicate_records_fill_gaps_without_overwriting(self):
        graph = ConnectionGraph.from_connections(
            [
                family("a", "b", "ancestral", "outro"),
                family("b", "a", "neto", "avo"),
            ]
        )

        assert graph.relation_of("a", "b") is R.ANCESTRAL
        assert graph.relation_of("b", "a") is R.NETO

    def test_family_wins_over_friend_for_duplicates(self):
        graph = ConnectionGraph.from_connections([friend("a", "b"), family("a", "b", "primo", "primo")])

        assert graph.family_neighbors("a") == ["b"]
        assert graph.graph["a"]["b"]["connection_type"] is ConnectionType.FAMILY

    def test_family_neighbors_skip_friends(self):
        graph = ConnectionGraph.from_connections([friend("me", "pal"), family("me", "sis", "irmao", "irma")])

        assert graph.family_neighbors("me") == ["sis"]


class TestCandidateMetrics:
    def test_edge_metadata_wins_over_node_metadata(self):
        graph = ConnectionGraph.from_connections([friend("f", "c", connection_strength=7.0, common_connections=2)])
        graph.set_candidate_metrics("c", 1.0, 9)

        assert graph.candidate_metrics("f", "c") == (7.0, 2)

    def test_node_metadata_used_when_edge_has_none(self):
        graph = ConnectionGraph.from_connections([friend("f", "c")])
        graph.set_candidate_metrics("c", 4.0, 3)

        assert graph.candidate_metrics("f", "c") == (4.0, 3)

    def test_missing_metadata_defaults_to_zero(self):
        graph = ConnectionGraph.from_connections([friend("f", "c")])

        assert graph.candidate_metrics("f", "c") == (0.0, 0)

    def test_stats(self, family_graph):
        stats = family_graph.stats()

        assert stats["node_count"] == 5
        assert stats["edge_count"] == 4
        assert stats["components"] == 1
