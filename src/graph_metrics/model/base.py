"""
Shared constants, exceptions and result types.

This module provides the foundation for the search engines and analyzers:
- The floating-point tolerance used to detect equal shortest paths
- The exception hierarchy for precondition violations
- TypedDict definitions for analyzer return types
"""

from typing import TypedDict

# Type alias for vertex and edge IDs
VertexId = int
EdgeId = int


# === NUMERIC CONSTANTS ===
TOLERANCE = 1e-9  # Two path lengths closer than this are equal
UNVISITED_HOPS = -1  # BFS distance of a vertex not reached yet
UNVISITED_WEIGHT = float("inf")  # Dijkstra distance of a vertex not reached yet


# === TYPED RESULT DICTIONARIES ===


class CentralityResult(TypedDict):
    """Result type for GraphAnalyzer.compute_all()."""

    betweenness: dict[VertexId, float]
    """Map of vertex_id to (possibly normalized) betweenness."""

    closeness: dict[VertexId, float]
    """Map of vertex_id to closeness over reachable vertices."""

    edge_betweenness: dict[EdgeId, float]
    """Map of edge_id to betweenness (empty when disabled)."""

    vertex_count: int
    """Number of vertices used as a source."""

    normalized: bool
    """True if betweenness values were min-max normalized."""


class AccessibilityResult(TypedDict):
    """Result type for AccessibilityAnalyzer.compute()."""

    closest_destination: dict[VertexId, VertexId]
    """Map of vertex_id to the id of its closest destination (-1 if none)."""

    distance: dict[VertexId, float]
    """Map of vertex_id to the distance to that destination (inf if none)."""


# === EXCEPTIONS ===


class GraphMetricsError(Exception):
    """Base class for all errors raised by graph_metrics."""

    pass


class VertexNotFound(GraphMetricsError, LookupError):
    """Raised when a vertex id is not contained in the graph."""

    pass


class GraphStructureError(GraphMetricsError):
    """Raised when a graph is built or viewed inconsistently."""

    pass


class SearchStateError(GraphMetricsError):
    """Raised when a search is used out of order or its invariants break."""

    pass


class EmptyPathLengthData(GraphMetricsError):
    """Raised when an average is requested from an empty PathLengthData."""

    pass


class GraphTooLarge(GraphMetricsError):
    """Raised when a graph exceeds the configured analyzer size limit."""

    pass


class ConfigError(GraphMetricsError):
    """Raised when analyzer configuration values are invalid."""

    pass
