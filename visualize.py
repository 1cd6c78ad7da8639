from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib import animation
import networkx as nx

from graph import INFINITY, Graph
from main import load_instance, routing_endpoints
from routing import RoutePlan, format_distance, plan_routes, primary_plan


def build_networkx_graph(graph: Graph) -> nx.DiGraph:
    g = nx.DiGraph()
    g.add_nodes_from(graph.nodes)
    for origin, target, cost in graph.edges():
        g.add_edge(origin, target, cost=cost)
    return g


def compute_layout(graph: nx.DiGraph) -> Dict[str, Tuple[float, float]]:
    return nx.spring_layout(graph, seed=42)


def node_labels(distances: Dict[str, float]) -> Dict[str, str]:
    return {node: f"{node}\n{format_distance(value)}" for node, value in distances.items()}


def route_edges(path: Sequence[str]) -> List[Tuple[str, str]]:
    return list(zip(path[:-1], path[1:]))


def draw_static_figure(
    graph_nx: nx.DiGraph,
    layout: Dict[str, Tuple[float, float]],
    plan: RoutePlan,
    distances: Dict[str, float],
    output: Path | None,
    show: bool,
) -> None:
    fig, ax = plt.subplots(figsize=(10, 8))

    nx.draw_networkx_edges(
        graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0, arrows=True
    )

    path_edges = route_edges(plan.path)
    if path_edges:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=path_edges,
            edge_color="#d62728",
            width=2.5,
            arrows=True,
            ax=ax,
        )

    node_colors = [
        "#1f77b4" if node in plan.path else "#c7c7c7" for node in graph_nx.nodes
    ]
    nx.draw_networkx_nodes(graph_nx, layout, node_color=node_colors, node_size=700, ax=ax)

    labels = node_labels({node: distances.get(node, INFINITY) for node in graph_nx.nodes})
    nx.draw_networkx_labels(graph_nx, layout, labels=labels, font_size=9, ax=ax)

    edge_labels = {(u, v): data["cost"] for u, v, data in graph_nx.edges(data=True)}
    nx.draw_networkx_edge_labels(graph_nx, layout, edge_labels=edge_labels, font_size=8, ax=ax)

    reachable = sum(1 for value in distances.values() if value != INFINITY)
    summary_lines = [
        f"Start: {plan.start}",
        f"Target: {plan.target}",
        f"Distance: {format_distance(plan.cost)}",
        f"Route: {' -> '.join(plan.path) if plan.path else 'none'}",
        f"Reachable nodes: {reachable}/{len(distances)}",
    ]
    ax.text(
        1.02,
        0.5,
        "\n".join(summary_lines),
        transform=ax.transAxes,
        va="center",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title(f"Shortest Path {plan.start} -> {plan.target}")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def animate_route(
    graph_nx: nx.DiGraph,
    layout: Dict[str, Tuple[float, float]],
    plan: RoutePlan,
    output: Path | None,
    show: bool,
) -> animation.FuncAnimation | None:
    path = plan.path
    if not path:
        return None

    fig, ax = plt.subplots(figsize=(10, 8))

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)
    nx.draw_networkx_nodes(graph_nx, layout, node_color="#c7c7c7", node_size=500, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, font_size=9, ax=ax)

    path_line, = ax.plot([], [], color="#d62728", linewidth=2.0, zorder=2)
    current_edge_line, = ax.plot([], [], color="#ff7f0e", linewidth=3.0, zorder=3)
    walker = ax.scatter([], [], s=160, c="#1f77b4", zorder=4)
    status_text = ax.text(
        0.02,
        0.98,
        "",
        transform=ax.transAxes,
        va="top",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title(f"Shortest Path {plan.start} -> {plan.target} - Step Through")

    # Cumulative cost at each step along the path.
    running_costs = [0]
    for u, v in route_edges(path):
        running_costs.append(running_costs[-1] + graph_nx.edges[u, v]["cost"])

    def init():
        path_line.set_data([], [])
        current_edge_line.set_data([], [])
        walker.set_offsets([[float("nan"), float("nan")]])
        status_text.set_text("")
        return path_line, current_edge_line, walker, status_text

    def update(frame: int):
        node = path[frame]
        x, y = layout[node]
        prefix = path[: frame + 1]
        path_line.set_data([layout[n][0] for n in prefix], [layout[n][1] for n in prefix])
        walker.set_offsets([[x, y]])

        if frame > 0:
            x_prev, y_prev = layout[path[frame - 1]]
            current_edge_line.set_data([x_prev, x], [y_prev, y])
        else:
            current_edge_line.set_data([], [])

        status_text.set_text(
            "\n".join(
                [
                    f"Step {frame + 1}/{len(path)}",
                    f"At node: {node}",
                    f"Cost so far: {running_costs[frame]}/{plan.cost}",
                ]
            )
        )
        return path_line, current_edge_line, walker, status_text

    anim = animation.FuncAnimation(
        fig,
        update,
        frames=len(path),
        init_func=init,
        interval=800,
        blit=False,
    )

    if output:
        output_path = Path(output)
        suffix = output_path.suffix.lower()
        if suffix == ".gif":
            anim.save(output_path, writer=animation.PillowWriter(fps=1))
        elif suffix in {".mp4", ".m4v"}:
            anim.save(output_path, writer=animation.FFMpegWriter(fps=1))
        else:
            anim.save(output_path)

    if show:
        plt.show()
    else:
        plt.close(fig)
    return anim


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Visualise the shortest path between two nodes of a weighted directed graph."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("sample_graph.yaml"),
        help="Path to the YAML graph configuration.",
    )
    parser.add_argument("--start", help="Start node (overrides routing.start_node).")
    parser.add_argument(
        "--target",
        help="Target node (overrides routing.target_node). "
        "Without one, the first reachable node in name order is drawn.",
    )
    parser.add_argument(
        "--static-out",
        type=Path,
        help="Optional path to save a static PNG of the graph and route.",
    )
    parser.add_argument(
        "--animation-out",
        type=Path,
        help="Optional path to save an animation (GIF/MP4) of the route.",
    )
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display figures interactively.",
    )
    args = parser.parse_args(argv)

    config, graph = load_instance(parser, args.config)
    start, target = routing_endpoints(parser, config, args.start, args.target)

    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx)
    distances, predecessors = graph.dijkstra(start)
    targets = None if target is None else [target]
    plan = primary_plan(
        plan_routes(graph, start, targets, paths=(distances, predecessors)), start
    )

    show = not args.no_show

    draw_static_figure(
        graph_nx=graph_nx,
        layout=layout,
        plan=plan,
        distances=distances,
        output=args.static_out,
        show=show,
    )

    animate_route(
        graph_nx=graph_nx,
        layout=layout,
        plan=plan,
        output=args.animation_out,
        show=show,
    )


if __name__ == "__main__":
    main()
