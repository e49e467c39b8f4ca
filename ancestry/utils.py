"""
Utility functions for the application
"""
from typing import Iterable, Tuple


def normalize_vertices(vertices: Iterable[int]) -> Tuple[int, ...]:
    """
    Normalize one side of a query for consistent cache keys

    Args:
        vertices: Vertex ids in any order, possibly repeated

    Returns:
        Sorted tuple of distinct vertex ids
    """
    return tuple(sorted(set(vertices)))
