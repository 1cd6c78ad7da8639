from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from graph import INFINITY, Distances, Graph, Predecessors


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutePlan:
    start: str
    target: str
    path: List[str] = field(default_factory=list)
    cost: float = INFINITY

    @property
    def reachable(self) -> bool:
        return bool(self.path)


def reconstruct_path(
    predecessors: Mapping[str, str], start: str, target: str
) -> List[str]:
    """Walk the predecessor relation back from target to start.

    Returns the nodes in start -> target order, or an empty list when the
    walk runs out of predecessors before reaching start.
    """
    path: List[str] = []
    node = target
    while node != start:
        if node not in predecessors:
            return []
        path.append(node)
        node = predecessors[node]

    path.append(start)
    path.reverse()
    return path


def format_distance(distance: float) -> str:
    if distance == INFINITY:
        return "Unreachable"
    return str(distance)


def _build_plan(
    graph: Graph,
    distances: Dict[str, float],
    predecessors: Predecessors,
    start: str,
    target: str,
) -> RoutePlan:
    path = reconstruct_path(predecessors, start, target)
    if not path:
        return RoutePlan(start=start, target=target)

    cost = distances[target]
    walked = graph.path_cost(path)
    if walked != cost:
        raise RuntimeError(
            "Route cost mismatch: "
            f"distance to {target} is {cost} but walking {path} costs {walked}."
        )
    return RoutePlan(start=start, target=target, path=path, cost=cost)


def plan_route(graph: Graph, start: str, target: str) -> RoutePlan:
    distances, predecessors = graph.dijkstra(start)
    return _build_plan(graph, distances, predecessors, start, target)


def plan_routes(
    graph: Graph,
    start: str,
    targets: Optional[Iterable[str]] = None,
    paths: Optional[Tuple[Distances, Predecessors]] = None,
) -> List[RoutePlan]:
    """Plan routes from start to each target using a single Dijkstra run.

    Without explicit targets every other known node is planned, in name order.
    ``paths`` takes an existing ``graph.dijkstra(start)`` result so callers
    that already hold the distances do not search twice.
    """
    distances, predecessors = paths if paths is not None else graph.dijkstra(start)
    if targets is None:
        targets = sorted(node for node in distances if node != start)

    plans = [
        _build_plan(graph, distances, predecessors, start, target)
        for target in targets
    ]
    logger.debug(
        "Planned %d routes from %s, %d reachable",
        len(plans),
        start,
        sum(plan.reachable for plan in plans),
    )
    return plans


def primary_plan(plans: Sequence[RoutePlan], start: str) -> RoutePlan:
    """Pick the plan worth drawing: the first reachable one, else the first one.

    With no plans at all the start node's trivial route is returned.
    """
    for plan in plans:
        if plan.reachable:
            return plan
    if plans:
        return plans[0]
    return RoutePlan(start=start, target=start, path=[start], cost=0)
