from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from errors import ParseError, UnknownVertexError
from graph import Graph, Vertex


logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass(frozen=True)
class GraphInstance:
    graph: Graph
    source: Optional[str] = None
    target: Optional[str] = None


def parse_pairs(line: str) -> List[Tuple[str, str]]:
    """Read ``ux, uy, xy`` style vertex pairs; every label is one character."""
    compact = re.sub(r"[,\s]", "", line)
    if len(compact) % 2:
        raise ParseError(f"Vertex pair line has an unpaired label: {line.strip()!r}")
    return [(compact[i], compact[i + 1]) for i in range(0, len(compact), 2)]


def parse_weights(line: str) -> List[int]:
    weights: List[int] = []
    for token in line.split(","):
        token = re.sub(r"\s", "", token)
        try:
            weights.append(int(token))
        except ValueError as exc:
            raise ParseError(f"Weight line has a non-integer entry: {token!r}") from exc
    return weights


def build_graph(pairs: List[Tuple[str, str]], weights: List[int]) -> Graph:
    if len(pairs) != len(weights):
        raise ParseError(f"Found {len(pairs)} vertex pairs but {len(weights)} weights.")

    graph = Graph()
    labels: Dict[str, None] = {}
    for a, b in pairs:
        labels.setdefault(a)
        labels.setdefault(b)
    for label in labels:
        graph.add_vertex(Vertex(label), overwrite=True)

    for (a, b), weight in zip(pairs, weights):
        _add_edge(graph, a, b, weight)
    return graph


def _add_edge(graph: Graph, origin: str, target: str, cost) -> None:
    try:
        added = graph.add_edge(origin, target, cost)
    except (UnknownVertexError, TypeError, ValueError, OverflowError) as exc:
        raise ParseError(f"Edge {origin}-{target} ({cost!r}) is invalid: {exc}") from exc
    if not added:
        logger.warning("Skipping edge %s-%s (%s): self-loop or duplicate", origin, target, cost)


def parse_text(text: str) -> GraphInstance:
    """Parse the two-line format: vertex pairs first, their weights second."""
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise ParseError("Expected a line of vertex pairs followed by a line of weights.")
    graph = build_graph(parse_pairs(lines[0]), parse_weights(lines[1]))
    return GraphInstance(graph=graph)


def parse_config(config: Dict) -> GraphInstance:
    try:
        graph_config = config["graph"]
        nodes = graph_config["nodes"] or []
        edges = graph_config["edges"] or []
    except (KeyError, TypeError) as exc:
        raise ParseError("YAML instance needs a 'graph' block with 'nodes' and 'edges'.") from exc
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise ParseError("YAML 'nodes' and 'edges' must be lists.")

    graph = Graph()
    for node in nodes:
        if not graph.add_vertex(Vertex(str(node))):
            raise ParseError(f"Vertex {node} listed twice.")
    for entry in edges:
        try:
            origin, target, cost = entry
        except (TypeError, ValueError) as exc:
            raise ParseError(f"Edge entry {entry!r} is not [origin, target, weight].") from exc
        _add_edge(graph, str(origin), str(target), cost)

    routing = config.get("routing") or {}
    if not isinstance(routing, dict):
        raise ParseError("YAML 'routing' block must be a mapping.")
    return GraphInstance(
        graph=graph,
        source=_label_or_none(routing.get("start_node")),
        target=_label_or_none(routing.get("end_node")),
    )


def _label_or_none(value) -> Optional[str]:
    return None if value is None else str(value)


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def load_graph(path: Path) -> GraphInstance:
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            instance = parse_config(load_config(path))
        else:
            instance = parse_text(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except yaml.YAMLError as exc:
        raise ParseError(f"{path} is not valid YAML: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path} is not UTF-8 text.") from exc
    except OSError as exc:
        raise ParseError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    logger.info(
        "Loaded %s: %d vertices, %d edges",
        path,
        instance.graph.vertex_count,
        instance.graph.edge_count,
    )
    return instance
