"""
Graph model shared by all searches and analyzers.

This package provides:
- base: tolerance constant, exceptions and result TypedDicts
- vertices: per-vertex search state, edges and path-length aggregates
- graphs: NetworkX-backed keyed graphs and their read-only views
"""

from .base import (
    TOLERANCE,
    UNVISITED_HOPS,
    UNVISITED_WEIGHT,
    EdgeId,
    VertexId,
    # Exceptions
    ConfigError,
    EmptyPathLengthData,
    GraphMetricsError,
    GraphStructureError,
    GraphTooLarge,
    SearchStateError,
    VertexNotFound,
    # Result TypedDicts
    AccessibilityResult,
    CentralityResult,
)
from .graphs import (
    GraphView,
    KeyedGraph,
    TraversalGraph,
    as_reversed,
    as_undirected,
    as_unweighted,
)
from .vertices import (
    AccessibilityVertex,
    CentralityVertex,
    DFSVertex,
    Edge,
    PathLengthData,
    StrahlerVertex,
    Vertex,
)

__all__ = [
    # Constants
    "TOLERANCE",
    "UNVISITED_HOPS",
    "UNVISITED_WEIGHT",
    "VertexId",
    "EdgeId",
    # Exceptions
    "GraphMetricsError",
    "VertexNotFound",
    "GraphStructureError",
    "SearchStateError",
    "EmptyPathLengthData",
    "GraphTooLarge",
    "ConfigError",
    # Result TypedDicts
    "CentralityResult",
    "AccessibilityResult",
    # Vertex and edge state
    "Vertex",
    "CentralityVertex",
    "AccessibilityVertex",
    "DFSVertex",
    "StrahlerVertex",
    "Edge",
    "PathLengthData",
    # Graphs and views
    "GraphView",
    "KeyedGraph",
    "TraversalGraph",
    "as_undirected",
    "as_reversed",
    "as_unweighted",
]
