"""
Shortest ancestral path queries over a fixed directed graph

An ancestral path between v and w is a directed path from v to some vertex x
together with a directed path from w to the same x. The shortest one is found
by running one breadth-first search from each side and scanning every vertex
for the smallest sum of the two distances. Results are memoised for the life
of the engine since the graph cannot change after construction.
"""

import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple, Union

from ancestry import config
from ancestry.bfs import BreadthFirstDirectedPaths
from ancestry.cache import SAPCache
from ancestry.digraph import Digraph, GraphLike
from ancestry.utils import normalize_vertices

logger = logging.getLogger(__name__)

NO_ANCESTOR = None
NO_PATH = -1

Vertices = Union[int, Iterable[int]]
QueryKey = Tuple[Tuple[int, ...], Tuple[int, ...]]

_DEFAULT = object()


class SAPResult(NamedTuple):
    """Common ancestor and ancestral path length of one query"""
    ancestor: Optional[int]
    length: int

    @property
    def found(self) -> bool:
        return self.ancestor is not NO_ANCESTOR


class SAP:
    """
    Shortest ancestral path engine

    The graph need not be a DAG. Cycles only enlarge the set of reachable
    vertices; every traversal still visits each vertex at most once.
    """

    def __init__(self, graph: GraphLike, cache_size=_DEFAULT):
        """
        Initialize the engine with a private copy of graph

        Args:
            graph: Any object exposing num_vertices() and neighbors(v)
            cache_size: Maximum number of memoised keys, None for no limit
                (defaults to config.CACHE_MAX_SIZE, where 0 means no limit)
        """
        self._graph = Digraph.copy_of(graph)

        if cache_size is _DEFAULT:
            cache_size = config.CACHE_MAX_SIZE or None
        self._cache = SAPCache(max_size=cache_size)

        logger.info(
            f"SAP engine ready: {self._graph.num_vertices()} vertices, "
            f"{self._graph.num_edges()} edges"
        )

    @property
    def vertex_count(self) -> int:
        return self._graph.num_vertices()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def length(self, v: Vertices, w: Vertices) -> int:
        """
        Length of a shortest ancestral path between v and w

        v and w are single vertices or non-empty collections of vertices; for
        collections the minimum over every pair is returned.

        Returns:
            The path length, or NO_PATH (-1) if no common ancestor exists
        """
        return self.query(v, w).length

    def ancestor(self, v: Vertices, w: Vertices) -> Optional[int]:
        """
        Common ancestor on a shortest ancestral path between v and w

        Ties are broken in favour of the lowest vertex id.

        Returns:
            The ancestor, or NO_ANCESTOR (None) if no common ancestor exists
        """
        return self.query(v, w).ancestor

    def query(self, v: Vertices, w: Vertices) -> SAPResult:
        """
        Resolve a query, serving it from the cache when possible

        Raises:
            IndexError: If a vertex is outside 0..V-1
            ValueError: If either side is an empty collection
            TypeError: If a vertex is not an integer
        """
        return self._resolve(*self._validate(v, w))

    def _resolve(self, v_side: Tuple[int, ...], w_side: Tuple[int, ...]) -> SAPResult:
        # (v, w) and (w, v) share one entry and one lock
        key: QueryKey = min((v_side, w_side), (w_side, v_side))
        return self._cache.get_or_compute(key, lambda: self._find_sap(v_side, w_side))

    def path(self, v: Vertices, w: Vertices) -> Optional[List[int]]:
        """
        Vertices along a shortest ancestral path

        The path runs from a vertex of v up to the ancestor and back down to
        a vertex of w. It is rebuilt from fresh searches and not cached.

        Returns:
            List of vertex ids, or None if no common ancestor exists
        """
        v_side, w_side = self._validate(v, w)
        result = self._resolve(v_side, w_side)
        if not result.found:
            return None

        bfs_v = BreadthFirstDirectedPaths(self._graph, v_side)
        bfs_w = BreadthFirstDirectedPaths(self._graph, w_side)
        up = bfs_v.path_to(result.ancestor)
        down = bfs_w.path_to(result.ancestor)
        return up + down[-2::-1]

    def cache_stats(self) -> dict:
        return self._cache.get_stats()

    def clear_cache(self):
        self._cache.clear()

    def _validate(self, v: Vertices, w: Vertices) -> QueryKey:
        """
        Check both sides of a query and return their canonical forms

        Scalars become singletons. Both sides are checked for emptiness before
        any bounds check, so an empty collection is always reported as such.
        """
        v_items = self._collect("v", v)
        w_items = self._collect("w", w)

        for name, items in (("v", v_items), ("w", w_items)):
            for vertex in items:
                if isinstance(vertex, bool) or not isinstance(vertex, int):
                    raise TypeError(f"{name} must contain vertex ids, got {vertex!r}")
                self._check_bounds(f"{name}[{vertex}]" if len(items) > 1 else name, vertex)

        return normalize_vertices(v_items), normalize_vertices(w_items)

    @staticmethod
    def _collect(name: str, vertices: Vertices) -> List[int]:
        if isinstance(vertices, bool):
            raise TypeError(f"{name} must be a vertex id, not bool")
        if isinstance(vertices, int):
            return [vertices]

        items = list(vertices)
        if not items:
            raise ValueError(f"{name} must contain one or more values")
        return items

    def _check_bounds(self, name: str, vertex: int):
        if vertex < 0 or vertex >= self._graph.num_vertices():
            raise IndexError(f"{name} must be >= 0 and < {self._graph.num_vertices()}")

    def _find_sap(self, v_side: Tuple[int, ...], w_side: Tuple[int, ...]) -> SAPResult:
        """Run both searches and scan every vertex for the smallest distance sum"""
        bfs_v = BreadthFirstDirectedPaths(self._graph, v_side)
        bfs_w = BreadthFirstDirectedPaths(self._graph, w_side)

        ancestor = NO_ANCESTOR
        length = NO_PATH

        for x in range(self._graph.num_vertices()):
            if bfs_v.has_path_to(x) and bfs_w.has_path_to(x):
                candidate = bfs_v.dist_to(x) + bfs_w.dist_to(x)
                if ancestor is NO_ANCESTOR or candidate < length:
                    ancestor = x
                    length = candidate

        logger.debug(f"SAP {v_side} ~ {w_side}: ancestor={ancestor}, length={length}")
        return SAPResult(ancestor, length)
