"""
Vertex, edge and path-length state mutated by the search engines.

Vertex objects are created once per graph by a vertex factory and then
reused by every traversal. Each class separates two kinds of fields:
- per-run search fields, cleared by reset() before every traversal
- accumulated fields (betweenness, closeness, closest destination),
  which only their dedicated reset methods clear
"""

from dataclasses import dataclass, field

from .base import (
    UNVISITED_HOPS,
    UNVISITED_WEIGHT,
    EdgeId,
    EmptyPathLengthData,
    VertexId,
)


@dataclass(eq=False)
class Vertex:
    """Search state of one vertex: distance and shortest-path predecessors."""

    id: VertexId
    distance: float = UNVISITED_HOPS
    predecessors: set[VertexId] = field(default_factory=set)
    predecessor_edges: set[EdgeId] = field(default_factory=set)

    def reset(self, unvisited: float = UNVISITED_HOPS) -> None:
        """Clear every per-run field; `unvisited` is the engine's sentinel."""
        self.distance = unvisited
        self.clear_predecessors()

    def mark_source(self) -> None:
        """Make this vertex the root of the current run."""
        self.distance = 0
        self.clear_predecessors()

    def clear_predecessors(self) -> None:
        self.predecessors.clear()
        self.predecessor_edges.clear()

    def add_predecessor(self, vertex_id: VertexId, edge_id: EdgeId | None = None) -> None:
        self.predecessors.add(vertex_id)
        if edge_id is not None:
            self.predecessor_edges.add(edge_id)


@dataclass(eq=False)
class CentralityVertex(Vertex):
    """Vertex carrying Brandes accumulators and centrality scores."""

    # Per-run
    sp_count: int = 0  # Number of shortest paths from the current source
    dependency: float = 0.0  # Dependency of the current source on this vertex

    # Accumulated over all sources
    betweenness: float = 0.0
    closeness: float = 0.0

    def reset(self, unvisited: float = UNVISITED_HOPS) -> None:
        super().reset(unvisited)
        self.sp_count = 0
        self.dependency = 0.0

    def mark_source(self) -> None:
        super().mark_source()
        self.sp_count = 1
        self.dependency = 0.0

    def reset_centrality(self) -> None:
        """Clear the scores accumulated by a previous analysis."""
        self.betweenness = 0.0
        self.closeness = 0.0


@dataclass(eq=False)
class AccessibilityVertex(Vertex):
    """Vertex remembering its closest member of a destination set."""

    closest_destination_id: VertexId = -1
    distance_to_closest_destination: float = UNVISITED_WEIGHT

    def reset_accessibility(self) -> None:
        self.closest_destination_id = -1
        self.distance_to_closest_destination = UNVISITED_WEIGHT


@dataclass(eq=False)
class DFSVertex(Vertex):
    """Vertex with depth-first discovery and finishing times."""

    discovery_time: int = -1
    finishing_time: int = -1

    def reset(self, unvisited: float = UNVISITED_HOPS) -> None:
        super().reset(unvisited)
        self.discovery_time = -1
        self.finishing_time = -1

    @property
    def is_discovered(self) -> bool:
        return self.discovery_time >= 0


@dataclass(eq=False)
class StrahlerVertex(DFSVertex):
    """DFS vertex with a Strahler stream order (meaningful on trees only)."""

    strahler_number: int = -1

    def reset(self, unvisited: float = UNVISITED_HOPS) -> None:
        super().reset(unvisited)
        self.strahler_number = -1


@dataclass(eq=False)
class Edge:
    """
    A weighted edge between two vertex ids.

    Edges of derived graphs (traversal graphs) point back to the edge of
    the graph they were built from through `base_graph_edge`.
    """

    id: EdgeId
    source: VertexId
    target: VertexId
    weight: float = 1.0
    base_graph_edge: "Edge | None" = None

    # Centrality
    dependency: float = 0.0
    betweenness: float = 0.0

    def opposite(self, vertex_id: VertexId) -> VertexId:
        """Return the endpoint that is not `vertex_id`."""
        return self.target if vertex_id == self.source else self.source

    def reset_centrality(self) -> None:
        self.dependency = 0.0
        self.betweenness = 0.0


@dataclass
class PathLengthData:
    """Aggregate of the shortest path lengths found from one source."""

    count: int = 0
    total_length: float = 0.0
    max_length: float = 0.0

    def add(self, length: float) -> None:
        self.count += 1
        self.total_length += length
        if length > self.max_length:
            self.max_length = length

    @property
    def average_length(self) -> float:
        """
        Mean of the accumulated lengths.

        Raises:
            EmptyPathLengthData: If no length was accumulated
        """
        if self.count == 0:
            raise EmptyPathLengthData(
                "No shortest path lengths accumulated in this instance."
            )
        return self.total_length / self.count

    def clear(self) -> None:
        self.count = 0
        self.total_length = 0.0
        self.max_length = 0.0
