from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib import animation
import networkx as nx

from dijkstra import ShortestPathEngine
from errors import GraphError
from graph import Graph
from loader import load_graph


def build_networkx_graph(graph: Graph) -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(sorted(graph.vertex_labels()))
    for edge in graph.edges():
        g.add_edge(edge.one, edge.two, weight=edge.weight)
    return g


def compute_layout(graph: nx.Graph) -> Dict[str, Tuple[float, float]]:
    return nx.spring_layout(graph, seed=42)


def distance_labels(engine: ShortestPathEngine) -> Dict[str, str]:
    labels: Dict[str, str] = {}
    for label, distance in engine.distances().items():
        shown = "∞" if distance is None else str(distance)
        labels[label] = f"{label}\n{shown}"
    return labels


def route_edges(path: Sequence[str]) -> List[Tuple[str, str]]:
    return list(zip(path[:-1], path[1:]))


def draw_static_figure(
    graph_nx: nx.Graph,
    layout: Dict[str, Tuple[float, float]],
    engine: ShortestPathEngine,
    path: Sequence[str],
    output: Path | None,
    show: bool,
) -> None:
    fig, ax = plt.subplots(figsize=(10, 8))

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)

    tree_edges = engine.shortest_path_tree()
    if tree_edges:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=tree_edges,
            edge_color="#9ecae1",
            width=2.0,
            ax=ax,
        )

    path_edges = route_edges(path)
    if path_edges:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=path_edges,
            edge_color="#d62728",
            width=2.5,
            ax=ax,
        )

    node_colors = [
        "#1f77b4" if node == engine.source else "#ff7f0e" if node in path else "#c7e9c0"
        for node in graph_nx.nodes
    ]
    nx.draw_networkx_nodes(graph_nx, layout, node_color=node_colors, node_size=700, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, labels=distance_labels(engine), font_size=9, ax=ax)

    edge_labels = {(u, v): data["weight"] for u, v, data in graph_nx.edges(data=True)}
    nx.draw_networkx_edge_labels(graph_nx, layout, edge_labels=edge_labels, font_size=8, ax=ax)

    summary_lines = [f"Source: {engine.source}"]
    if path:
        summary_lines.append(f"Target: {path[-1]}")
        summary_lines.append(f"Distance: {engine.distance_to(path[-1])}")
        summary_lines.append(f"Path: {' -> '.join(path)}")
    summary_lines.append(
        f"Reachable: {len(engine.reachable_labels())}/{graph_nx.number_of_nodes()} vertices"
    )
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
    ax.set_title("Shortest-Path Tree")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def settle_order(engine: ShortestPathEngine) -> List[str]:
    """Reachable vertices in the order Dijkstra settles them (by distance)."""
    distances = engine.distances()
    return sorted(engine.reachable_labels(), key=lambda label: (distances[label], label))


WRITERS = {
    ".gif": lambda: animation.PillowWriter(fps=2),
    ".mp4": lambda: animation.FFMpegWriter(fps=2),
    ".m4v": lambda: animation.FFMpegWriter(fps=2),
}


def animate_path(
    graph_nx: nx.Graph,
    layout: Dict[str, Tuple[float, float]],
    engine: ShortestPathEngine,
    path: Sequence[str],
    output: Path | None,
    show: bool,
) -> None:
    """Grow the shortest-path tree vertex by vertex, then trace ``path`` on it."""
    order = settle_order(engine)
    tree_parent = {label: parent for parent, label in engine.shortest_path_tree()}
    frames = len(order) + (1 if path else 0)

    fig, ax = plt.subplots(figsize=(10, 8))
    ax.set_axis_off()
    ax.set_title(f"Shortest-path tree from {engine.source}")

    def draw(frame: int) -> None:
        ax.clear()
        ax.set_axis_off()
        settled = order[: frame + 1]
        grown = [(tree_parent[label], label) for label in settled if label in tree_parent]
        nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)
        if grown:
            nx.draw_networkx_edges(
                graph_nx, layout, edgelist=grown, edge_color="#9ecae1", width=2.0, ax=ax
            )
        nx.draw_networkx_nodes(
            graph_nx,
            layout,
            node_color=["#ff7f0e" if node in settled else "#e5e5e5" for node in graph_nx.nodes],
            node_size=600,
            ax=ax,
        )
        nx.draw_networkx_labels(graph_nx, layout, labels=distance_labels(engine), font_size=9, ax=ax)

        if frame >= len(order):
            path_edges = route_edges(path)
            if path_edges:
                nx.draw_networkx_edges(
                    graph_nx, layout, edgelist=path_edges, edge_color="#d62728", width=3.0, ax=ax
                )
            caption = f"Path {' -> '.join(path)} (distance {engine.distance_to(path[-1])})"
        else:
            latest = settled[-1]
            caption = f"Settled {latest} at distance {engine.distance_to(latest)}"
        ax.set_title(caption)

    anim = animation.FuncAnimation(fig, draw, frames=frames, interval=700, repeat=False)

    if output:
        output_path = Path(output)
        writer = WRITERS.get(output_path.suffix.lower())
        anim.save(output_path, writer=writer() if writer else None)

    if show:
        plt.show()
    else:
        plt.close(fig)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Visualise the shortest-path tree and the path to a target vertex."
    )
    parser.add_argument("graph", type=Path, help="Graph file (two-line text or YAML).")
    parser.add_argument("--source", help="Source vertex label.")
    parser.add_argument("--target", help="Target vertex label.")
    parser.add_argument(
        "--static-out",
        type=Path,
        help="Optional path to save a static PNG of the graph and path.",
    )
    parser.add_argument(
        "--animation-out",
        type=Path,
        help="Optional path to save an animation (GIF/MP4) of the tree growing.",
    )
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display figures interactively.",
    )
    args = parser.parse_args(argv)

    try:
        instance = load_graph(args.graph)
    except FileNotFoundError:
        parser.error(f"graph file not found: {args.graph}")
    except GraphError as exc:
        parser.error(str(exc))

    source = args.source or instance.source or "u"
    target = args.target or instance.target or "v"
    if target not in instance.graph:
        parser.error(f"target vertex {target!r} is not part of the graph")
    try:
        engine = ShortestPathEngine(instance.graph, source)
    except GraphError as exc:
        parser.error(str(exc))
    path = engine.path_to(target) if engine.is_reachable(target) else []

    graph_nx = build_networkx_graph(instance.graph)
    layout = compute_layout(graph_nx)
    show = not args.no_show

    draw_static_figure(
        graph_nx=graph_nx,
        layout=layout,
        engine=engine,
        path=path,
        output=args.static_out,
        show=show,
    )

    animate_path(
        graph_nx=graph_nx,
        layout=layout,
        engine=engine,
        path=path,
        output=args.animation_out,
        show=show,
    )


if __name__ == "__main__":
    main()
