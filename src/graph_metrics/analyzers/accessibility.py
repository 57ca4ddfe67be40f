"""
Nearest-destination accessibility.

For every vertex, finds the closest member of a destination set and the
distance to it. One Dijkstra run is made per destination over the
edge-reversed graph (directed graphs only), so distances *from* a
destination in the reversed graph are distances *to* it in the original.
"""

import logging
from collections.abc import Iterable

from ..model.base import AccessibilityResult, VertexId, VertexNotFound
from ..model.graphs import GraphView, as_reversed
from ..model.vertices import AccessibilityVertex, Edge
from ..search.engine import DijkstraSearch, SearchHooks
from .config import AnalyzerConfig
from .guards import check_size, check_vertex_type

logger = logging.getLogger(__name__)


class AccessibilityAnalyzer:
    """
    Assigns each vertex its closest destination.

    The graph's vertices must be AccessibilityVertex objects and the graph
    must fit within `config.max_vertices`. When two destinations are
    equally close the choice between them is unspecified.

    Example:
        >>> g = KeyedGraph.from_edges(edges, vertex_factory=AccessibilityVertex)
        >>> result = AccessibilityAnalyzer(g, destinations=[4, 5]).compute()
        >>> result["closest_destination"][1], result["distance"][1]
        (4, 5.0)
    """

    def __init__(
        self,
        graph: GraphView,
        destinations: Iterable[AccessibilityVertex | VertexId],
        config: AnalyzerConfig | None = None,
    ):
        self.graph = graph
        self.config = config or AnalyzerConfig()

        check_size(graph, self.config)
        check_vertex_type(graph, AccessibilityVertex, "Accessibility analysis")

        destination_ids = [
            d.id if isinstance(d, AccessibilityVertex) else d for d in destinations
        ]
        self.destinations: list[AccessibilityVertex] = []
        for destination_id in dict.fromkeys(destination_ids):
            if destination_id not in graph:
                raise VertexNotFound(
                    f"Destination {destination_id} is not contained in the graph."
                )
            self.destinations.append(graph.get_vertex(destination_id))

        # Distances from a destination in the reversed graph are distances to it
        self.search_graph = as_reversed(graph) if graph.directed else graph
        self.search = DijkstraSearch(
            self.search_graph,
            SearchHooks(on_distance_update=self._update_closest),
            self.config.tolerance,
        )
        self._destination: AccessibilityVertex | None = None

    def compute(self) -> AccessibilityResult:
        """
        Find the closest destination of every vertex.

        Returns:
            AccessibilityResult; unreachable vertices map to -1 and inf
        """
        for vertex in self.graph.vertices():
            vertex.reset_accessibility()

        for destination in self.destinations:
            destination.closest_destination_id = destination.id
            destination.distance_to_closest_destination = 0.0
            self._destination = destination
            self.search.calculate(destination)
            logger.debug("Accessibility run from destination %s.", destination.id)

        vertices = self.graph.vertices()
        return {
            "closest_destination": {
                vertex.id: vertex.closest_destination_id for vertex in vertices
            },
            "distance": {
                vertex.id: vertex.distance_to_closest_destination for vertex in vertices
            },
        }

    def _update_closest(
        self, u: AccessibilityVertex, v: AccessibilityVertex, edge: Edge
    ) -> None:
        if v.distance < v.distance_to_closest_destination - self.search.tolerance:
            v.distance_to_closest_destination = v.distance
            v.closest_destination_id = self._destination.id


def closest_destinations(
    graph: GraphView,
    destinations: Iterable[VertexId],
    config: AnalyzerConfig | None = None,
) -> AccessibilityResult:
    """Shortcut for AccessibilityAnalyzer(graph, destinations, config).compute()."""
    return AccessibilityAnalyzer(graph, destinations, config).compute()
