from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from errors import UnknownVertexError


logger = logging.getLogger(__name__)

EdgeKey = Tuple[str, str]


def edge_key(a: str, b: str) -> EdgeKey:
    """Canonical identity of the undirected edge a-b (smaller label first)."""
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class Edge:
    one: str
    two: str
    weight: int = field(compare=False)

    @classmethod
    def between(cls, a: str, b: str, weight: int) -> Edge:
        one, two = edge_key(a, b)
        return cls(one, two, weight)

    @property
    def key(self) -> EdgeKey:
        return (self.one, self.two)

    def other(self, label: str) -> Optional[str]:
        if label == self.one:
            return self.two
        if label == self.two:
            return self.one
        return None


class Vertex:
    """A labelled node holding the keys of its incident edges."""

    def __init__(self, label: str) -> None:
        self._label = label
        self.neighborhood: List[EdgeKey] = []

    @property
    def label(self) -> str:
        return self._label

    def add_neighbor(self, key: EdgeKey) -> None:
        if key in self.neighborhood:
            return
        self.neighborhood.append(key)

    def contains_neighbor(self, key: EdgeKey) -> bool:
        return key in self.neighborhood

    def remove_neighbor(self, key: EdgeKey) -> None:
        if key in self.neighborhood:
            self.neighborhood.remove(key)

    def neighbor_count(self) -> int:
        return len(self.neighborhood)

    def __repr__(self) -> str:
        return f"Vertex({self._label!r})"

    def __str__(self) -> str:
        return self._label


class Graph:
    """Undirected weighted graph without self-loops or parallel edges.

    Vertices are indexed by label and edges by their canonical pair. A vertex
    only stores the keys of its incident edges and an edge only stores the
    labels of its endpoints, so the graph is the single owner of both.
    """

    def __init__(
        self,
        vertices: Iterable[str] = (),
        edges: Iterable[Tuple[str, str, int]] = (),
    ) -> None:
        self._vertices: Dict[str, Vertex] = {}
        self._edges: Dict[EdgeKey, Edge] = {}

        for label in vertices:
            if not self.add_vertex(Vertex(label)):
                raise ValueError(f"Vertex {label} listed twice.")
        for a, b, weight in edges:
            if not self.add_edge(a, b, weight):
                raise ValueError(f"Edge {a}-{b} is a self-loop or a duplicate.")

    # -----------------
    # VERTEX OPERATIONS
    # -----------------

    def add_vertex(self, vertex: Union[Vertex, str], overwrite: bool = False) -> bool:
        if isinstance(vertex, str):
            vertex = Vertex(vertex)

        current = self._vertices.get(vertex.label)
        if current is not None:
            if not overwrite:
                logger.debug("Vertex %s already registered, not replacing it", vertex.label)
                return False
            # Drain one edge at a time so both endpoints stay in sync.
            while current.neighbor_count() > 0:
                self.remove_edge(current.neighborhood[0])
            logger.debug("Replacing vertex %s", vertex.label)

        # Edges only enter a neighborhood through add_edge.
        vertex.neighborhood.clear()
        self._vertices[vertex.label] = vertex
        return True

    def get_vertex(self, label: str) -> Optional[Vertex]:
        return self._vertices.get(label)

    def vertex_labels(self) -> Set[str]:
        return set(self._vertices)

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    def __contains__(self, label: object) -> bool:
        return label in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    # -----------------
    # EDGE OPERATIONS
    # -----------------

    def add_edge(self, a: Union[Vertex, str], b: Union[Vertex, str], weight: int) -> bool:
        one = self._require(a)
        two = self._require(b)
        if one is two:
            logger.debug("Rejecting self-loop on %s", one.label)
            return False

        if isinstance(weight, bool) or weight < 0 or not float(weight).is_integer():
            raise ValueError(
                f"Edge {one.label}-{two.label} needs a non-negative integer weight, got {weight!r}."
            )

        edge = Edge.between(one.label, two.label, int(weight))
        if edge.key in self._edges:
            logger.debug("Rejecting duplicate edge %s-%s", edge.one, edge.two)
            return False
        if one.contains_neighbor(edge.key) or two.contains_neighbor(edge.key):
            logger.debug("Rejecting edge %s-%s already held by an endpoint", edge.one, edge.two)
            return False

        self._edges[edge.key] = edge
        one.add_neighbor(edge.key)
        two.add_neighbor(edge.key)
        return True

    def remove_edge(self, edge: Union[Edge, EdgeKey]) -> Optional[Edge]:
        key = edge.key if isinstance(edge, Edge) else edge_key(*edge)
        removed = self._edges.pop(key, None)
        if removed is None:
            return None

        for label in key:
            vertex = self._vertices.get(label)
            if vertex is not None:
                vertex.remove_neighbor(key)
        return removed

    def get_edge(self, a: str, b: str) -> Optional[Edge]:
        return self._edges.get(edge_key(a, b))

    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def incident_edges(self, label: str) -> List[Edge]:
        vertex = self._require(label)
        return [self._edges[key] for key in vertex.neighborhood]

    def neighbors(self, label: str) -> List[Tuple[str, int]]:
        return [(edge.other(label), edge.weight) for edge in self.incident_edges(label)]

    def path_cost(self, path: Sequence[str]) -> int:
        """Return the total weight of walking along the given label sequence."""
        total = 0
        for u, v in zip(path[:-1], path[1:]):
            edge = self.get_edge(u, v)
            if edge is None:
                raise ValueError(f"Edge {u}-{v} not present in graph.")
            total += edge.weight
        return total

    def _require(self, vertex: Union[Vertex, str]) -> Vertex:
        label = vertex.label if isinstance(vertex, Vertex) else vertex
        registered = self._vertices.get(label)
        if registered is None:
            raise UnknownVertexError(label)
        return registered
