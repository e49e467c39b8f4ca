"""
Directed graph storage

Vertices are numbered 0..V-1. Parallel edges and self-loops are kept as given;
traversals de-duplicate them through their own visited arrays.
"""

import logging
import re
from typing import Iterable, List, Protocol, TextIO, Tuple

logger = logging.getLogger(__name__)

_SEPARATOR = re.compile(r'[\s,]+')


class GraphLike(Protocol):
    def num_vertices(self) -> int:
        """Number of vertices in the graph"""
        ...

    def neighbors(self, v: int) -> Iterable[int]:
        """Vertices reachable from v over a single edge"""
        ...


class Digraph:
    """
    Adjacency-list directed graph over vertices 0..V-1
    """

    def __init__(self, num_vertices: int):
        if num_vertices < 0:
            raise ValueError("Number of vertices must be non-negative")
        self._V = num_vertices
        self._E = 0
        self._adj: List[List[int]] = [[] for _ in range(num_vertices)]

    @classmethod
    def copy_of(cls, graph: GraphLike) -> "Digraph":
        """
        Build an independent copy of any graph exposing num_vertices() and neighbors()

        Args:
            graph: Source graph; it is enumerated once and never referenced again

        Returns:
            A new Digraph with the same vertices and edges
        """
        copy = cls(graph.num_vertices())
        for v in range(copy._V):
            for w in graph.neighbors(v):
                copy.add_edge(v, w)
        return copy

    @classmethod
    def from_edges(cls, num_vertices: int, edges: Iterable[Tuple[int, int]]) -> "Digraph":
        graph = cls(num_vertices)
        for v, w in edges:
            graph.add_edge(v, w)
        return graph

    @classmethod
    def read(cls, stream: TextIO) -> "Digraph":
        """
        Read a graph in the text fixture format

        The first line holds the vertex count, the second the edge count, and
        each following line one edge as "tail head" (whitespace or comma
        separated). Blank lines are skipped.

        Args:
            stream: Open text stream

        Returns:
            The parsed Digraph

        Raises:
            ValueError: If the stream is truncated or a line is malformed
        """
        lines = ((number, line.strip()) for number, line in enumerate(stream, 1))
        lines = ((number, line) for number, line in lines if line)

        def next_int(label):
            try:
                number, line = next(lines)
            except StopIteration:
                raise ValueError(f"Unexpected end of input while reading {label}")
            try:
                return int(line)
            except ValueError:
                raise ValueError(f"Line {number}: expected {label}, got {line!r}")

        graph = cls(next_int("vertex count"))
        num_edges = next_int("edge count")
        if num_edges < 0:
            raise ValueError("Number of edges must be non-negative")

        for i in range(num_edges):
            try:
                number, line = next(lines)
            except StopIteration:
                raise ValueError(f"Expected {num_edges} edges, found {i}")
            fields = _SEPARATOR.split(line)
            if len(fields) != 2:
                raise ValueError(f"Line {number}: expected 'tail head', got {line!r}")
            try:
                v, w = int(fields[0]), int(fields[1])
                graph.add_edge(v, w)
            except (ValueError, IndexError) as e:
                raise ValueError(f"Line {number}: {e}")

        logger.debug(f"Read digraph with {graph.num_vertices()} vertices and {graph.num_edges()} edges")
        return graph

    def num_vertices(self) -> int:
        return self._V

    def num_edges(self) -> int:
        return self._E

    def _validate_vertex(self, v: int):
        if v < 0 or v >= self._V:
            raise IndexError(f"vertex {v} is not between 0 and {self._V - 1}")

    def add_edge(self, v: int, w: int):
        """Add the directed edge v → w"""
        self._validate_vertex(v)
        self._validate_vertex(w)
        self._adj[v].append(w)
        self._E += 1

    def neighbors(self, v: int) -> Tuple[int, ...]:
        """Vertices adjacent from v, as an immutable snapshot"""
        self._validate_vertex(v)
        return tuple(self._adj[v])

    def __repr__(self):
        return f"Digraph(V={self._V}, E={self._E})"
