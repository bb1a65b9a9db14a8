"""Exceptions raised by the graph, the shortest-path engine and the loaders."""


class GraphError(Exception):
    """Base class for every error raised by this project."""


class UnknownVertexError(GraphError, KeyError):
    """A label was used that is not registered in the graph."""

    def __init__(self, label: str) -> None:
        super().__init__(label)
        self.label = label

    def __str__(self) -> str:
        return f"Vertex '{self.label}' is not part of the graph."


class InvalidSourceError(GraphError, ValueError):
    """The shortest-path source is not a vertex of the graph."""


class NoPathError(GraphError, ValueError):
    """The target cannot be reached from the source."""


class ParseError(GraphError, ValueError):
    """An input file could not be turned into a graph."""
