from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from graph import Graph
from routing import RoutePlan, format_distance, plan_routes, primary_plan


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        config = yaml.safe_load(handle)
    if not isinstance(config, dict):
        raise ValueError(f"{path} does not contain a configuration mapping.")
    return config


def build_graph(graph_config: Dict) -> Graph:
    if not isinstance(graph_config, dict) or "edges" not in graph_config:
        raise ValueError("Configuration needs a 'graph' section with 'edges'.")

    edges = []
    for entry in graph_config["edges"] or []:
        if not isinstance(entry, (list, tuple)) or len(entry) != 3:
            raise ValueError(f"Edge {entry!r} must be [origin, target, cost].")
        origin, target, cost = entry
        if isinstance(cost, bool) or not isinstance(cost, int):
            raise ValueError(f"Edge {origin}->{target} cost must be an integer.")
        edges.append((str(origin), str(target), cost))

    nodes = [str(node) for node in graph_config.get("nodes") or []]
    return Graph(nodes, edges)


def print_distances(start: str, distances: Dict[str, float]) -> None:
    print(f"Shortest distances from {start}:")
    for node in sorted(distances):
        print(f"  Node {node}: {format_distance(distances[node])}")
    print()


def print_plans(plans: List[RoutePlan]) -> None:
    for plan in plans:
        if plan.reachable:
            print(f"Shortest path to {plan.target} (distance: {plan.cost}):")
            print(f"  {' -> '.join(plan.path)}")
        else:
            print(f"Node {plan.target} is unreachable from {plan.start}.")


def load_instance(
    parser: argparse.ArgumentParser, path: Path
) -> Tuple[Dict, Graph]:
    """Load a config and its graph, turning config errors into usage errors."""
    try:
        config = load_config(path)
        graph = build_graph(config.get("graph"))
    except (OSError, yaml.YAMLError, ValueError) as exc:
        parser.error(str(exc))
    return config, graph


def routing_endpoints(
    parser: argparse.ArgumentParser,
    config: Dict,
    start: Optional[str] = None,
    target: Optional[str] = None,
) -> Tuple[str, Optional[str]]:
    """Resolve start/target from command-line overrides or the routing section."""
    routing_config = config.get("routing") or {}
    if not isinstance(routing_config, dict):
        parser.error("The 'routing' section must be a mapping.")
    start = start or routing_config.get("start_node")
    if start is None:
        parser.error("No start node given (use --start or routing.start_node).")
    target = target or routing_config.get("target_node")
    return str(start), None if target is None else str(target)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Compute shortest paths from a start node in a weighted directed graph."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("sample_graph.yaml"),
        help="Path to the YAML graph configuration.",
    )
    parser.add_argument("--start", help="Start node (overrides routing.start_node).")
    parser.add_argument("--target", help="Target node (overrides routing.target_node).")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Emit debug logging from the path finder.",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Draw the graph and the route with matplotlib.",
    )
    parser.add_argument(
        "--figure-out",
        type=Path,
        help="Save the visualisation to this path instead of showing it.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config, graph = load_instance(parser, args.config)
    start, target = routing_endpoints(parser, config, args.start, args.target)

    print(f"--- Running Dijkstra's algorithm from node {start} ---")
    print()
    distances, predecessors = graph.dijkstra(start)
    print_distances(start, distances)

    targets = None if target is None else [target]
    plans = plan_routes(graph, start, targets, paths=(distances, predecessors))
    print_plans(plans)

    if args.visualize:
        from visualize import build_networkx_graph, compute_layout, draw_static_figure

        # Unreachable targets are still drawn, with their distance labels.
        graph_nx = build_networkx_graph(graph)
        draw_static_figure(
            graph_nx=graph_nx,
            layout=compute_layout(graph_nx),
            plan=primary_plan(plans, start),
            distances=distances,
            output=args.figure_out,
            show=args.figure_out is None,
        )


if __name__ == "__main__":
    main()
