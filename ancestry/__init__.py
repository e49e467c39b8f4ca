"""
Shortest Ancestral Path engine

This package answers repeated shortest ancestral path queries over a fixed
directed graph using two breadth-first searches per query and a memo shared
across queries.
"""

from ancestry.digraph import Digraph
from ancestry.sap import SAP, SAPResult, NO_ANCESTOR, NO_PATH

__version__ = "1.0.0"

__all__ = ["Digraph", "SAP", "SAPResult", "NO_ANCESTOR", "NO_PATH"]
