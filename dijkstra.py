from __future__ import annotations

import logging
from heapq import heappop, heappush
from typing import Dict, List, Optional, Set, Tuple

from errors import InvalidSourceError, NoPathError, UnknownVertexError
from graph import Graph


logger = logging.getLogger(__name__)


class ShortestPathEngine:
    """Single-source shortest paths over a :class:`Graph`.

    The whole shortest-path tree is computed when the engine is built; all
    queries afterwards only read the resulting tables. A distance of ``None``
    means the vertex cannot be reached from the source.

    The graph must not be mutated while the engine is in use.
    """

    def __init__(self, graph: Graph, source: str) -> None:
        if source not in graph:
            raise InvalidSourceError(f"The graph must contain the initial vertex {source!r}.")

        self._graph = graph
        self._source = source
        self._distances: Dict[str, Optional[int]] = {label: None for label in graph.vertex_labels()}
        self._predecessors: Dict[str, Optional[str]] = {label: None for label in graph.vertex_labels()}
        self._frontier: List[Tuple[int, str]] = []
        self._finalized: Set[str] = set()

        self._distances[source] = 0
        self._finalized.add(source)
        # The source has no predecessor edge to relax through, so its
        # neighbours are seeded directly.
        for edge in graph.incident_edges(source):
            other = edge.other(source)
            self._predecessors[other] = source
            self._distances[other] = edge.weight
            heappush(self._frontier, (edge.weight, other))

        self._process_graph()
        logger.debug(
            "Shortest-path tree from %s covers %d of %d vertices",
            source,
            len(self._finalized),
            len(self._distances),
        )

    def _process_graph(self) -> None:
        while self._frontier:
            distance_next, next_label = heappop(self._frontier)
            # Entries superseded by a later decrease are skipped here.
            if next_label in self._finalized or distance_next > self._distances[next_label]:
                continue

            for edge in self._graph.incident_edges(next_label):
                other = edge.other(next_label)
                if other in self._finalized:
                    continue

                current = self._distances[other]
                candidate = distance_next + edge.weight
                if current is None or candidate < current:
                    self._predecessors[other] = next_label
                    self._distances[other] = candidate
                    heappush(self._frontier, (candidate, other))

            self._finalized.add(next_label)

    @property
    def source(self) -> str:
        return self._source

    def distance_to(self, label: str) -> Optional[int]:
        self._check_known(label)
        return self._distances[label]

    def is_reachable(self, label: str) -> bool:
        return self.distance_to(label) is not None

    def predecessor_of(self, label: str) -> Optional[str]:
        self._check_known(label)
        return self._predecessors[label]

    def path_to(self, label: str) -> List[str]:
        """Labels from the source to ``label``, both inclusive."""
        if not self.is_reachable(label):
            raise NoPathError(f"No path between {self._source} and {label}.")

        path: List[str] = [label]
        while path[-1] != self._source:
            path.append(self._predecessors[path[-1]])
        path.reverse()
        return path

    def distances(self) -> Dict[str, Optional[int]]:
        return dict(self._distances)

    def reachable_labels(self) -> List[str]:
        return sorted(label for label, distance in self._distances.items() if distance is not None)

    def shortest_path_tree(self) -> List[Tuple[str, str]]:
        """Tree edges as ``(predecessor, vertex)`` pairs."""
        return sorted(
            (predecessor, label)
            for label, predecessor in self._predecessors.items()
            if predecessor is not None
        )

    def _check_known(self, label: str) -> None:
        if label not in self._distances:
            raise UnknownVertexError(label)
