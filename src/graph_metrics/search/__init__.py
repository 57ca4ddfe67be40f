"""
Graph search engines.

This package provides:
- engine: BFS and Dijkstra sharing one skeleton, parameterized by SearchHooks
- depth_first: explicit-stack DFS and Strahler numbering
"""

from .depth_first import (
    DepthFirstSearch,
    StrahlerSearch,
    strahler_number,
    strahler_numbers,
)
from .engine import (
    BreadthFirstSearch,
    DijkstraSearch,
    GraphSearch,
    SearchHooks,
)

__all__ = [
    # Engines
    "GraphSearch",
    "SearchHooks",
    "BreadthFirstSearch",
    "DijkstraSearch",
    # Depth-first
    "DepthFirstSearch",
    "StrahlerSearch",
    "strahler_number",
    "strahler_numbers",
]
