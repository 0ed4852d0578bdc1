"""Tests for graph routing and invariant helpers."""

from roomquest.graph import RoomGraph, graph_problems, is_connected, reachable_from, shortest_path


def test_shortest_path_over_named_rooms():
    adjacency = {
        "Attic": ["Kitchen", "Garden"],
        "Kitchen": ["Attic", "Stairs"],
        "Garden": ["Attic"],
        "Stairs": ["Kitchen"],
    }

    assert shortest_path(adjacency, "Attic", "Stairs") == ["Attic", "Kitchen", "Stairs"]
    assert shortest_path(adjacency, "Garden", "Garden") == ["Garden"]
    assert shortest_path(adjacency, "Garden", "Basement") is None


def test_reachable_from_stops_at_component_boundary():
    adjacency = {0: [1], 1: [0], 2: [3], 3: [2]}
    assert reachable_from(adjacency, 0) == {0, 1}


def test_graph_problems_reports_low_degree_and_disconnection():
    graph = RoomGraph(size=4)
    graph.connect(0, 1)
    graph.connect(2, 3)

    problems = graph_problems(graph, min_connections=1, max_connections=3)
    assert problems == ["graph is not connected"]
    assert is_connected(graph) is False

    problems = graph_problems(graph)
    assert any("slot 0 has 1 connections" in problem for problem in problems)


def test_graph_problems_detects_one_way_edge():
    graph = RoomGraph(size=3)
    graph.adjacency[0].add(1)

    problems = graph_problems(graph, min_connections=0, max_connections=2)
    assert "edge 0->1 has no reverse edge" in problems
