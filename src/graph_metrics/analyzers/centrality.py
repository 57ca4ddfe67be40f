"""
Betweenness and closeness centrality (Brandes' algorithm).

Each vertex in turn is the source of a forward pass (BFS when unweighted,
Dijkstra when weighted) that counts shortest paths, stacks vertices in
non-decreasing distance order and collects path lengths. A backward pass
then pops the stack and accumulates dependencies:

    dependency(v) += sp_count(v) / sp_count(w) * (1 + dependency(w))

for every predecessor v of w. Each vertex other than the source adds its
dependency to its betweenness. Closeness of the source is the inverse of
its average distance to the vertices it reaches.

Edge betweenness is accumulated along the predecessor edges of the same
backward pass, onto the edges of the base graph.
"""

import logging
import time
from collections import defaultdict

from ..model.base import (
    TOLERANCE,
    CentralityResult,
    SearchStateError,
    VertexId,
)
from ..model.graphs import GraphView, TraversalGraph
from ..model.vertices import CentralityVertex, Edge, PathLengthData
from ..search.engine import BreadthFirstSearch, DijkstraSearch, SearchHooks
from .config import AnalyzerConfig
from .guards import check_positive_weights, check_size, check_vertex_type

logger = logging.getLogger(__name__)


class CentralitySearch:
    """
    Forward pass of Brandes' algorithm from one source.

    After calculate(s), `stack` holds the reached vertices in non-decreasing
    distance from s and `paths` the lengths of their shortest paths.
    """

    def __init__(self, graph: GraphView, weighted: bool, tolerance: float = TOLERANCE):
        self.graph = graph
        self.weighted = weighted
        self.stack: list[CentralityVertex] = []
        self.paths = PathLengthData()

        if weighted:
            check_positive_weights(graph, "Weighted centrality")
            hooks = SearchHooks(
                on_init=self._start,
                on_distance_update=self._forget_paths,
                on_shortest_path=self._count_paths,
                on_pre_relax=self._push_settled,
            )
            self.search = DijkstraSearch(graph, hooks, tolerance)
        else:
            hooks = SearchHooks(
                on_init=self._start,
                on_dequeue=self.stack.append,
                on_distance_update=self._record_length,
                on_shortest_path=self._count_paths,
            )
            self.search = BreadthFirstSearch(graph, hooks)

    @property
    def current_start(self) -> CentralityVertex | None:
        return self.search.current_start

    def calculate(self, start: CentralityVertex | VertexId) -> None:
        self.search.calculate(start)

    def reconstruct_traversal_graph(self, radius: float | None = None) -> TraversalGraph:
        return self.search.reconstruct_traversal_graph(radius)

    def _start(self, start: CentralityVertex) -> None:
        self.stack.clear()
        self.paths.clear()

    def _record_length(self, u: CentralityVertex, v: CentralityVertex, edge: Edge) -> None:
        self.paths.add(v.distance)

    def _forget_paths(self, u: CentralityVertex, v: CentralityVertex, edge: Edge) -> None:
        # A strictly shorter distance invalidates every path counted so far
        v.clear_predecessors()
        v.sp_count = 0

    def _count_paths(self, u: CentralityVertex, v: CentralityVertex, edge: Edge) -> None:
        v.sp_count += u.sp_count

    def _push_settled(self, u: CentralityVertex) -> bool:
        if self.stack and u.distance < self.stack[-1].distance:
            raise SearchStateError(
                f"Cannot push vertex {u.id} to the stack: distance {u.distance} "
                f"is below {self.stack[-1].distance}."
            )
        self.stack.append(u)
        if u is not self.current_start:
            self.paths.add(u.distance)
        return False


class GraphAnalyzer:
    """
    Computes betweenness and closeness of every vertex of a graph.

    The graph's vertices must be CentralityVertex objects. Results are both
    written onto the vertices (and edges) and returned by compute_all().

    Example:
        >>> g = KeyedGraph(vertex_factory=CentralityVertex)
        >>> for source, target, weight in edges:
        ...     g.add_edge(source, target, weight)
        >>> result = WeightedGraphAnalyzer(g).compute_all()
        >>> result["closeness"][1]
        0.13793103448275862
    """

    weighted: bool = False

    def __init__(self, graph: GraphView, config: AnalyzerConfig | None = None):
        self.graph = graph
        self.config = config or AnalyzerConfig()

        check_size(graph, self.config)
        check_vertex_type(graph, CentralityVertex, "Centrality analysis")

        self.search = CentralitySearch(graph, self.weighted, self.config.tolerance)

    def compute_all(self) -> CentralityResult:
        """
        Run every vertex as a source and collect the scores.

        Scores accumulated by earlier analyses are cleared first.

        Returns:
            CentralityResult with betweenness, closeness and edge betweenness
        """
        start_time = time.perf_counter()
        self.reset()

        vertices = self.graph.vertices()
        for index, vertex in enumerate(vertices, start=1):
            self.compute_for(vertex)
            logger.debug(
                "Centrality contribution from vertex %s (%d/%d).",
                vertex.id,
                index,
                len(vertices),
            )

        normalized = self.normalize() if self.config.normalize else False
        logger.info(
            "(%d ms) %s centrality analysis of %d vertices.",
            (time.perf_counter() - start_time) * 1000,
            "Weighted" if self.weighted else "Unweighted",
            len(vertices),
        )
        return self.result(normalized)

    def reset(self) -> None:
        """Clear accumulated betweenness and closeness on vertices and edges."""
        for vertex in self.graph.vertices():
            vertex.reset_centrality()
        for edge in self.graph.edges():
            edge.reset_centrality()

    def compute_for(self, source: CentralityVertex | VertexId) -> None:
        """Add the contribution of shortest paths from `source` to all scores."""
        self.search.calculate(source)
        source = self.search.current_start
        source.closeness = closeness(self.search.paths)
        self._accumulate_dependencies(source)

    def _accumulate_dependencies(self, source: CentralityVertex) -> None:
        """
        Pop the stack and propagate dependencies back towards `source`.

        sp_count is summed per predecessor edge, so parallel edges count as
        separate shortest paths, while vertex dependency is shared once per
        distinct predecessor vertex. On multigraphs the shares of a vertex
        therefore sum to less than one: in 1 -> 2 => 3 (two parallel edges)
        vertex 2 scores 0.5, not 1. The undirected Cormen reference values
        depend on this convention; it is not a path-counting rule.
        """
        get_vertex = self.graph.get_vertex
        get_edge = self.graph.get_edge
        with_edges = self.config.edge_betweenness

        # Dependency carried by the traversal edges leaving each vertex
        outgoing_dependency: dict[VertexId, float] = defaultdict(float)

        stack = self.search.stack
        while stack:
            w = stack.pop()
            for predecessor_id in w.predecessors:
                v = get_vertex(predecessor_id)
                v.dependency += v.sp_count / w.sp_count * (1 + w.dependency)

            if with_edges:
                for edge_id in w.predecessor_edges:
                    edge = get_edge(edge_id)
                    v = get_vertex(edge.opposite(w.id))
                    edge.dependency = (
                        v.sp_count / w.sp_count * (1 + outgoing_dependency[w.id])
                    )
                    edge.betweenness += edge.dependency
                    outgoing_dependency[v.id] += edge.dependency

            if w is not source:
                w.betweenness += w.dependency

    def normalize(self) -> bool:
        """
        Min-max normalize vertex (and edge) betweenness to [0, 1].

        Values are left untouched when they are all equal.

        Returns:
            True if vertex betweenness was normalized
        """
        start_time = time.perf_counter()
        normalized = _min_max_normalize(self.graph.vertices(), "vertex")
        if self.config.edge_betweenness:
            _min_max_normalize(self.graph.edges(), "edge")
        logger.info(
            "(%d ms) Betweenness normalization.",
            (time.perf_counter() - start_time) * 1000,
        )
        return normalized

    def result(self, normalized: bool = False) -> CentralityResult:
        vertices = self.graph.vertices()
        edge_betweenness = (
            {edge.id: edge.betweenness for edge in self.graph.edges()}
            if self.config.edge_betweenness
            else {}
        )
        return {
            "betweenness": {vertex.id: vertex.betweenness for vertex in vertices},
            "closeness": {vertex.id: vertex.closeness for vertex in vertices},
            "edge_betweenness": edge_betweenness,
            "vertex_count": len(vertices),
            "normalized": normalized,
        }


class UnweightedGraphAnalyzer(GraphAnalyzer):
    """Centrality over hop counts; edge weights are ignored."""

    weighted = False


class WeightedGraphAnalyzer(GraphAnalyzer):
    """
    Centrality over weighted shortest paths.

    Edge weights must be strictly positive; zero and negative weights raise
    GraphStructureError when the analyzer is built.
    """

    weighted = True


def closeness(paths: PathLengthData) -> float:
    """Inverse average path length; 0.0 when nothing was reached."""
    if paths.count == 0:
        return 0.0
    average = paths.average_length
    return 1.0 / average if average > 0.0 else 0.0


def analyze(
    graph: GraphView,
    weighted: bool | None = None,
    config: AnalyzerConfig | None = None,
) -> CentralityResult:
    """
    Compute centrality of every vertex of `graph`.

    Args:
        graph: Graph or view whose vertices are CentralityVertex objects
        weighted: Use Dijkstra (True) or BFS (False); defaults to graph.weighted
        config: Analyzer configuration

    Returns:
        CentralityResult
    """
    if weighted is None:
        weighted = graph.weighted
    analyzer_class = WeightedGraphAnalyzer if weighted else UnweightedGraphAnalyzer
    return analyzer_class(graph, config).compute_all()


def _min_max_normalize(items: list, kind: str) -> bool:
    if not items:
        return False
    values = [item.betweenness for item in items]
    low, high = min(values), max(values)
    if high - low == 0.0:
        logger.warning("All %s betweenness values are equal (%s).", kind, low)
        return False
    for item in items:
        item.betweenness = (item.betweenness - low) / (high - low)
    return True
