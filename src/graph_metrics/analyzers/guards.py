"""
Precondition checks run by the analyzers before any search.

Every check raises instead of returning, so an analyzer that was
constructed successfully can run to completion.
"""

from ..model.base import GraphStructureError, GraphTooLarge
from ..model.graphs import GraphView
from ..model.vertices import Vertex
from .config import AnalyzerConfig


def check_size(graph: GraphView, config: AnalyzerConfig) -> None:
    """
    Refuse graphs larger than `config.max_vertices`.

    Raises:
        GraphTooLarge: If the graph has more vertices than allowed
    """
    if config.max_vertices is not None and graph.vertex_count > config.max_vertices:
        raise GraphTooLarge(
            f"Graph has {graph.vertex_count:,} vertices, "
            f"exceeds limit {config.max_vertices:,}"
        )


def check_vertex_type(graph: GraphView, vertex_type: type[Vertex], analysis: str) -> None:
    """
    Require every vertex of `graph` to be a `vertex_type`.

    Raises:
        GraphStructureError: On the first vertex of another type
    """
    for vertex in graph.vertices():
        if not isinstance(vertex, vertex_type):
            raise GraphStructureError(
                f"{analysis} requires {vertex_type.__name__} vertices, "
                f"vertex {vertex.id} is a {type(vertex).__name__}."
            )


def check_positive_weights(graph: GraphView, analysis: str) -> None:
    """
    Require strictly positive edge weights as seen through `graph`.

    Zero-weight edges let a vertex tie with one already settled, after its
    shortest paths have been counted.

    Raises:
        GraphStructureError: On the first edge whose weight is not positive
    """
    for edge in graph.edges():
        weight = graph.edge_weight(edge)
        if weight <= 0:
            raise GraphStructureError(
                f"{analysis} requires positive edge weights, "
                f"edge {edge.id} has weight {weight}."
            )
