from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dijkstra import ShortestPathEngine
from errors import GraphError
from loader import load_graph


DEFAULT_SOURCE = "u"
DEFAULT_TARGET = "v"


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    if debug:
        log_level = logging.DEBUG
    elif verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    if not debug:
        logging.getLogger("matplotlib").setLevel(logging.WARNING)


def format_path(path: List[str]) -> str:
    return "[" + ", ".join(path) + "]"


def print_distance_table(engine: ShortestPathEngine) -> None:
    print(f"=== Distances from {engine.source} ===")
    for label in sorted(engine.distances()):
        if engine.is_reachable(label):
            print(f"  {label}: {engine.distance_to(label)}  {format_path(engine.path_to(label))}")
        else:
            print(f"  {label}: no path")
    print()


def prompt_for_path() -> Optional[Path]:
    print("Input file path:")
    answer = input().strip()
    return Path(answer) if answer else None


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compute the shortest path between two vertices of a weighted undirected graph."
    )
    parser.add_argument(
        "graph",
        type=Path,
        nargs="?",
        help="Graph file: two-line pairs/weights text or a YAML instance. Prompted for when omitted.",
    )
    parser.add_argument("--source", help=f"Source vertex label (default: instance or '{DEFAULT_SOURCE}').")
    parser.add_argument("--target", help=f"Target vertex label (default: instance or '{DEFAULT_TARGET}').")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Also print the distance and path to every vertex.",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Show the shortest-path tree and the path in a matplotlib window.",
    )
    parser.add_argument(
        "--static-out",
        type=Path,
        help="Save the visualisation to this image file instead of showing it.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress messages.")
    parser.add_argument("--debug", action="store_true", help="Log debug messages.")
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, verbose=args.verbose)

    graph_path = args.graph if args.graph is not None else prompt_for_path()
    if graph_path is None:
        parser.error("no graph file given")
    try:
        instance = load_graph(graph_path)
    except FileNotFoundError:
        parser.error(f"graph file not found: {graph_path}")
    except GraphError as exc:
        parser.error(str(exc))

    source = args.source or instance.source or DEFAULT_SOURCE
    target = args.target or instance.target or DEFAULT_TARGET
    if target not in instance.graph:
        parser.error(f"target vertex {target!r} is not part of the graph")

    try:
        engine = ShortestPathEngine(instance.graph, source)
    except GraphError as exc:
        parser.error(str(exc))

    print("Beginning analysis\n")
    if args.all:
        print_distance_table(engine)

    exit_code = 0
    path: List[str] = []
    if engine.is_reachable(target):
        path = engine.path_to(target)
        print(engine.distance_to(target))
        print(format_path(path))
    else:
        print(f"No path between {source} and {target}.")
        exit_code = 1
    print("\nDone")

    if args.visualize or args.static_out:
        from visualize import build_networkx_graph, compute_layout, draw_static_figure

        graph_nx = build_networkx_graph(instance.graph)
        draw_static_figure(
            graph_nx=graph_nx,
            layout=compute_layout(graph_nx),
            engine=engine,
            path=path,
            output=args.static_out,
            show=args.visualize,
        )
        if args.static_out:
            print(f"Visualisation stored at: {args.static_out}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
