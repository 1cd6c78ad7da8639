from __future__ import annotations

import logging
import math
from heapq import heappop, heappush
from typing import Dict, Iterable, List, Mapping, Tuple


logger = logging.getLogger(__name__)

INFINITY = math.inf

Adjacency = Mapping[str, Mapping[str, int]]
Distances = Dict[str, float]
Predecessors = Dict[str, str]


class NegativeWeightError(ValueError):
    """Raised when a graph is built with an edge of negative cost."""


def shortest_paths(graph: Adjacency, start: str) -> Tuple[Distances, Predecessors]:
    """Compute single-source shortest paths using Dijkstra.

    distances[v] stores the best-known distance from start to v, and
    predecessors[v] remembers the previous node along the shortest path.
    Every top-level key of ``graph`` gets an entry (INFINITY when
    unreachable); nodes that only appear as edge targets are added the first
    time they are relaxed. Edge weights must be non-negative.
    """
    distances: Distances = {node: INFINITY for node in graph}
    predecessors: Predecessors = {}
    distances[start] = 0

    queue: List[Tuple[float, str]] = [(0, start)]
    settled = 0

    while queue:
        distance_u, u = heappop(queue)
        if distance_u > distances[u]:
            continue
        settled += 1

        # Nodes without an adjacency entry have no outgoing edges.
        for v, cost in graph.get(u, {}).items():
            candidate = distance_u + cost
            if candidate < distances.get(v, INFINITY):
                distances[v] = candidate
                predecessors[v] = u
                heappush(queue, (candidate, v))

    logger.debug(
        "Dijkstra from %s settled %d of %d known nodes", start, settled, len(distances)
    )
    return distances, predecessors


class Graph:
    """Simple directed weighted graph with Dijkstra support."""

    def __init__(self, nodes: Iterable[str], edges: Iterable[Tuple[str, str, int]]) -> None:
        self.nodes: List[str] = list(dict.fromkeys(nodes))
        self._adjacency: Dict[str, Dict[str, int]] = {node: {} for node in self.nodes}

        for origin, target, cost in edges:
            self._add_edge(origin, target, cost)

    @classmethod
    def from_adjacency(cls, adjacency: Adjacency) -> "Graph":
        edges = [
            (origin, target, cost)
            for origin, neighbors in adjacency.items()
            for target, cost in neighbors.items()
        ]
        return cls(adjacency.keys(), edges)

    def _add_node(self, node: str) -> None:
        if node not in self._adjacency:
            self.nodes.append(node)
            self._adjacency[node] = {}

    def _add_edge(self, origin: str, target: str, cost: int) -> None:
        if cost < 0:
            raise NegativeWeightError(
                f"Edge {origin}->{target} has negative cost {cost}."
            )
        self._add_node(origin)
        self._add_node(target)
        # Parallel edges collapse to the cheapest one.
        existing = self._adjacency[origin].get(target)
        if existing is None or cost < existing:
            self._adjacency[origin][target] = cost

    def neighbors(self, node: str) -> Dict[str, int]:
        return dict(self._adjacency.get(node, {}))

    def edges(self) -> List[Tuple[str, str, int]]:
        return [
            (origin, target, cost)
            for origin, neighbors in self._adjacency.items()
            for target, cost in neighbors.items()
        ]

    def adjacency(self) -> Dict[str, Dict[str, int]]:
        """Return a copy of the graph in node -> neighbor -> cost form."""
        return {node: dict(neighbors) for node, neighbors in self._adjacency.items()}

    def dijkstra(self, source: str) -> Tuple[Distances, Predecessors]:
        return shortest_paths(self._adjacency, source)

    def shortest_path(self, source: str, target: str) -> Tuple[float, List[str]]:
        """Recover both length and explicit path between source and target.

        An unreachable target yields ``(INFINITY, [])``.
        """
        # routing imports this module at load time.
        from routing import reconstruct_path

        distances, predecessors = self.dijkstra(source)
        path = reconstruct_path(predecessors, source, target)
        if not path:
            return INFINITY, []
        return distances[target], path

    def path_cost(self, path: List[str]) -> float:
        """Return the total cost of walking along the given node sequence."""
        if len(path) < 2:
            return 0

        total_cost = 0
        for u, v in zip(path[:-1], path[1:]):
            edge_cost = self.neighbors(u).get(v)
            if edge_cost is None:
                raise ValueError(f"Edge {u}->{v} not present in graph.")
            total_cost += edge_cost
        return total_cost
