"""
Unit tests for shortest_paths and the Graph wrapper.
"""

import math

import pytest

from graph import INFINITY, Graph, NegativeWeightError, shortest_paths


SAMPLE = {
    "A": {"B": 7, "C": 9, "F": 14},
    "B": {"C": 10, "D": 15},
    "C": {"D": 11, "F": 2},
    "D": {"E": 6},
    "E": {"F": 8},
    "F": {"E": 9},
}


def test_sample_graph_distances():
    distances, predecessors = shortest_paths(SAMPLE, "A")

    assert distances == {"A": 0, "B": 7, "C": 9, "D": 20, "E": 20, "F": 11}
    assert predecessors == {"B": "A", "C": "A", "D": "C", "E": "F", "F": "C"}


def test_start_has_zero_distance_and_no_predecessor():
    for start in SAMPLE:
        distances, predecessors = shortest_paths(SAMPLE, start)
        assert distances[start] == 0
        assert start not in predecessors


def test_relaxation_fixed_point_holds_for_every_edge():
    distances, _ = shortest_paths(SAMPLE, "B")

    for u, neighbors in SAMPLE.items():
        if math.isinf(distances[u]):
            continue
        for v, w in neighbors.items():
            assert distances[v] <= distances[u] + w


def test_unreachable_nodes_keep_infinity():
    distances, predecessors = shortest_paths(SAMPLE, "D")

    assert distances["D"] == 0
    assert distances["E"] == 6
    assert distances["F"] == 14
    for node in ("A", "B", "C"):
        assert distances[node] == INFINITY
        assert node not in predecessors


def test_start_without_edges_reaches_nothing():
    graph = dict(SAMPLE, G={})
    distances, predecessors = shortest_paths(graph, "G")

    assert distances["G"] == 0
    assert all(distances[node] == INFINITY for node in SAMPLE)
    assert predecessors == {}


def test_unknown_start_is_isolated():
    distances, predecessors = shortest_paths(SAMPLE, "Z")

    assert distances["Z"] == 0
    assert all(distances[node] == INFINITY for node in SAMPLE)
    assert predecessors == {}


def test_target_only_nodes_are_discovered_lazily():
    graph = {"A": {"B": 1}, "B": {"C": 2}}
    distances, predecessors = shortest_paths(graph, "A")

    assert distances == {"A": 0, "B": 1, "C": 3}
    assert predecessors["C"] == "B"


def test_undiscovered_target_only_node_is_absent():
    graph = {"A": {"B": 1}, "X": {"Y": 4}}
    distances, _ = shortest_paths(graph, "A")

    assert distances["X"] == INFINITY
    assert "Y" not in distances


def test_stale_entries_do_not_override_better_distances():
    # C is first reached at cost 10 and later improved to 3 via B.
    graph = {"A": {"C": 10, "B": 1}, "B": {"C": 2}, "C": {"D": 1}}
    distances, predecessors = shortest_paths(graph, "A")

    assert distances["C"] == 3
    assert distances["D"] == 4
    assert predecessors["C"] == "B"


def test_zero_weight_edges():
    graph = {"A": {"B": 0}, "B": {"C": 0}, "C": {}}
    distances, _ = shortest_paths(graph, "A")

    assert distances == {"A": 0, "B": 0, "C": 0}


def test_input_graph_is_not_mutated():
    graph = {"A": {"B": 1}, "B": {"C": 2}}
    snapshot = {node: dict(neighbors) for node, neighbors in graph.items()}

    shortest_paths(graph, "A")

    assert graph == snapshot


def test_repeated_runs_agree():
    first, _ = shortest_paths(SAMPLE, "A")
    second, _ = shortest_paths(SAMPLE, "A")

    assert first == second
    assert first is not second


def test_graph_registers_edge_endpoints():
    g = Graph(["A"], [("A", "B", 1), ("B", "C", 2)])

    assert g.nodes == ["A", "B", "C"]
    assert g.neighbors("A") == {"B": 1}
    assert g.neighbors("C") == {}
    assert g.neighbors("unknown") == {}


def test_graph_is_directed():
    g = Graph(["A", "B"], [("A", "B", 5)])

    assert g.shortest_path("A", "B") == (5, ["A", "B"])
    assert g.shortest_path("B", "A") == (INFINITY, [])


def test_parallel_edges_keep_cheapest_cost():
    g = Graph([], [("A", "B", 5), ("A", "B", 3), ("A", "B", 4)])

    assert g.neighbors("A") == {"B": 3}


def test_negative_weight_rejected():
    with pytest.raises(NegativeWeightError):
        Graph(["A", "B"], [("A", "B", -1)])


def test_negative_weight_error_is_value_error():
    assert issubclass(NegativeWeightError, ValueError)


def test_from_adjacency_round_trips_mapping():
    g = Graph.from_adjacency(SAMPLE)

    assert g.adjacency() == SAMPLE
    assert g.dijkstra("A")[0] == shortest_paths(SAMPLE, "A")[0]


def test_adjacency_returns_copy():
    g = Graph.from_adjacency(SAMPLE)

    copy = g.adjacency()
    copy["A"].clear()

    assert g.neighbors("A") == {"B": 7, "C": 9, "F": 14}


def test_shortest_path_sample():
    g = Graph.from_adjacency(SAMPLE)

    assert g.shortest_path("A", "D") == (20, ["A", "C", "D"])
    assert g.shortest_path("A", "E") == (20, ["A", "C", "F", "E"])
    assert g.shortest_path("A", "A") == (0, ["A"])


def test_path_cost_matches_distances():
    g = Graph.from_adjacency(SAMPLE)
    distances, _ = g.dijkstra("A")

    for node in SAMPLE:
        cost, path = g.shortest_path("A", node)
        assert g.path_cost(path) == distances[node] == cost


def test_path_cost_rejects_missing_edge():
    g = Graph.from_adjacency(SAMPLE)

    with pytest.raises(ValueError):
        g.path_cost(["A", "E"])


def test_path_cost_of_trivial_paths():
    g = Graph.from_adjacency(SAMPLE)

    assert g.path_cost([]) == 0
    assert g.path_cost(["A"]) == 0


def test_neighbors_returns_copy():
    g = Graph([], [("A", "B", 1)])

    out = g.neighbors("A")
    out["C"] = 5
    out.clear()

    # internal structure must remain intact
    assert g.neighbors("A") == {"B": 1}
    assert g.shortest_path("A", "B") == (1, ["A", "B"])
