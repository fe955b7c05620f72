"""Tests for bounded shortest-path search."""

from __future__ import annotations

from conftest import chain_graph, friend

from kinship.graph import ConnectionGraph, PathOutcome, find_shortest_path, search_path


class TestFindShortestPath:
    def test_linear_chain(self):
        graph = chain_graph("A", "B", "C", "D")

        assert find_shortest_path(graph, "A", "D") == ["A", "B", "C", "D"]

    def test_bound_excludes_longer_paths(self):
        graph = chain_graph("A", "B", "C", "D")

        assert find_shortest_path(graph, "A", "D", max_depth=2) is None
        assert find_shortest_path(graph, "A", "D", max_depth=3) == ["A", "B", "C", "D"]

    def test_prefers_shortcut(self):
        graph = ConnectionGraph.from_connections(
            [friend("A", "B"), friend("B", "C"), friend("C", "D"), friend("A", "E"), friend("E", "D")]
        )

        assert find_shortest_path(graph, "A", "D") == ["A", "E", "D"]

    def test_traverses_edges_in_both_directions(self):
        graph = ConnectionGraph.from_connections([friend("B", "A"), friend("C", "B")])

        assert find_shortest_path(graph, "A", "C") == ["A", "B", "C"]

    def test_self_path_is_single_node(self):
        graph = chain_graph("A", "B")

        assert find_shortest_path(graph, "A", "A") == ["A"]

    def test_absent_node_returns_none(self):
        graph = chain_graph("A", "B")

        assert find_shortest_path(graph, "A", "Z") is None
        assert find_shortest_path(graph, "Z", "A") is None

    def test_default_bound_is_six_hops(self):
        graph = chain_graph("n0", "n1", "n2", "n3", "n4", "n5", "n6", "n7")

        assert find_shortest_path(graph, "n0", "n6") is not None
        assert find_shortest_path(graph, "n0", "n7") is None

    def test_ties_broken_by_id_order(self):
        graph = ConnectionGraph.from_connections(
            [friend("A", "M"), friend("M", "D"), friend("A", "C"), friend("C", "D")]
        )

        assert find_shortest_path(graph, "A", "D") == ["A", "C", "D"]


class TestSearchPath:
    def test_found_outcome_and_degrees(self):
        result = search_path(chain_graph("A", "B", "C"), "A", "C")

        assert result.outcome is PathOutcome.FOUND
        assert result.found
        assert result.degrees == 2

    def test_unreachable_beyond_bound(self):
        result = search_path(chain_graph("A", "B", "C", "D"), "A", "D", max_depth=2)

        assert result.outcome is PathOutcome.UNREACHABLE
        assert result.path is None
        assert result.degrees is None

    def test_unreachable_disconnected(self):
        graph = ConnectionGraph.from_connections([friend("A", "B"), friend("C", "D")])

        assert search_path(graph, "A", "D").outcome is PathOutcome.UNREACHABLE

    def test_node_absent(self):
        assert search_path(chain_graph("A", "B"), "A", "Q").outcome is PathOutcome.NODE_ABSENT

    def test_pending_connections_are_not_traversed(self):
        graph = ConnectionGraph.from_connections([friend("A", "B"), friend("B", "C", status="pending")])

        assert search_path(graph, "A", "C").outcome is PathOutcome.NODE_ABSENT

    def test_zero_depth(self):
        graph = chain_graph("A", "B")

        assert search_path(graph, "A", "B", max_depth=0).outcome is PathOutcome.UNREACHABLE
        assert search_path(graph, "A", "A", max_depth=0).path == ["A"]
