"""
Multi-source breadth-first search over directed edges
"""

from collections import deque
from typing import Iterable, List, Optional, Union

from ancestry.digraph import GraphLike

UNREACHABLE = -1


class BreadthFirstDirectedPaths:
    """
    Shortest directed distances from a set of sources to every vertex

    All sources start at distance 0. A vertex keeps the distance at which it
    is first discovered, which is the shortest one for unweighted edges. Each
    instance owns its own arrays; build a new one per source set.
    """

    def __init__(self, graph: GraphLike, sources: Union[int, Iterable[int]]):
        self._V = graph.num_vertices()
        self._dist = [UNREACHABLE] * self._V
        self._parent: List[Optional[int]] = [None] * self._V

        if isinstance(sources, int):
            sources = (sources,)

        queue = deque()
        for s in sources:
            self._validate_vertex(s)
            if self._dist[s] == UNREACHABLE:
                self._dist[s] = 0
                queue.append(s)

        while queue:
            current = queue.popleft()
            for neighbor in graph.neighbors(current):
                if self._dist[neighbor] == UNREACHABLE:
                    self._dist[neighbor] = self._dist[current] + 1
                    self._parent[neighbor] = current
                    queue.append(neighbor)

    def _validate_vertex(self, v: int):
        if v < 0 or v >= self._V:
            raise IndexError(f"vertex {v} is not between 0 and {self._V - 1}")

    def has_path_to(self, v: int) -> bool:
        self._validate_vertex(v)
        return self._dist[v] != UNREACHABLE

    def dist_to(self, v: int) -> int:
        """Number of edges on a shortest path to v, or -1 if v is unreachable"""
        self._validate_vertex(v)
        return self._dist[v]

    def path_to(self, v: int) -> Optional[List[int]]:
        """
        Reconstruct a shortest path to v

        Args:
            v: Target vertex

        Returns:
            Vertices from the nearest source to v (inclusive), or None if unreachable
        """
        if not self.has_path_to(v):
            return None

        path = []
        current = v
        while current is not None:
            path.append(current)
            current = self._parent[current]
        path.reverse()
        return path
