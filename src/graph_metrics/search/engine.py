"""
Breadth-first and Dijkstra search engines with injectable hooks.

Both engines mutate the vertex objects of the searched graph in place:
distance, predecessors and predecessor edges. Specialised searches
(centrality, accessibility) pass a SearchHooks instead of subclassing,
so one concrete engine serves every variant.

Equal shortest paths under Dijkstra are detected with TOLERANCE: a
candidate distance `alt` improves `v` when `alt < d(v) - TOLERANCE` and
is an alternative shortest path when `|alt - d(v)| < TOLERANCE`.
"""

import heapq
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from itertools import count

from ..model.base import (
    TOLERANCE,
    UNVISITED_HOPS,
    UNVISITED_WEIGHT,
    GraphStructureError,
    SearchStateError,
    VertexId,
)
from ..model.graphs import GraphView, TraversalGraph
from ..model.vertices import Edge, Vertex


def _noop(*args) -> None:
    return None


@dataclass
class SearchHooks:
    """
    Callbacks invoked by a search engine at fixed points of a traversal.

    Every hook defaults to a no-op.
    """

    # Called once all vertices are reset and the start vertex is marked
    on_init: Callable[[Vertex], None] = _noop

    # BFS: called with each vertex leaving the queue
    on_dequeue: Callable[[Vertex], None] = _noop

    # Called as (u, v, edge) when v gets a strictly shorter distance through u
    on_distance_update: Callable[[Vertex, Vertex, Edge], None] = _noop

    # Called as (u, v, edge) when edge lies on a shortest path to v
    on_shortest_path: Callable[[Vertex, Vertex, Edge], None] = _noop

    # Dijkstra: called with each settled vertex before relaxation;
    # a truthy return value stops the search
    on_pre_relax: Callable[[Vertex], bool | None] = _noop

    # DFS: called as (vertex, children) once a vertex is finished
    on_finish: Callable[[Vertex, list[Vertex]], None] = _noop


class GraphSearch:
    """
    Shared skeleton of the graph searches.

    Not usable on its own: subclasses must implement calculate(). The
    start vertex of the latest run is kept so the run can be turned into a
    TraversalGraph afterwards.
    """

    unvisited: float = UNVISITED_HOPS

    def __init__(self, graph: GraphView, hooks: SearchHooks | None = None):
        self.graph = graph
        self.hooks = hooks or SearchHooks()
        self.current_start: Vertex | None = None

    def calculate(self, start: Vertex | VertexId) -> None:
        raise NotImplementedError

    def init(self, start: Vertex) -> None:
        """Reset every vertex, then mark `start` as the source."""
        for vertex in self.graph.vertices():
            vertex.reset(self.unvisited)
        start.mark_source()
        self.current_start = start
        self.hooks.on_init(start)

    def resolve(self, vertex: Vertex | VertexId) -> Vertex:
        """
        Return the graph's vertex object for a vertex or vertex id.

        Raises:
            VertexNotFound: If the vertex is not in the searched graph
        """
        if isinstance(vertex, Vertex):
            vertex = vertex.id
        return self.graph.get_vertex(vertex)

    def distances(self) -> dict[VertexId, float]:
        """Distances of the vertices reached by the latest run."""
        return {
            vertex.id: vertex.distance
            for vertex in self.graph.vertices()
            if 0 <= vertex.distance < UNVISITED_WEIGHT
        }

    def predecessors(self) -> dict[VertexId, set[VertexId]]:
        """Predecessor sets recorded by the latest run, keyed by vertex id."""
        return {vertex.id: set(vertex.predecessors) for vertex in self.graph.vertices()}

    def reconstruct_traversal_graph(self, radius: float | None = None) -> TraversalGraph:
        """
        Build the graph of predecessor edges recorded by the latest run.

        Args:
            radius: If given, only vertices at distance <= radius are kept

        Returns:
            TraversalGraph rooted at the latest start vertex, with one edge
            per recorded predecessor edge

        Raises:
            SearchStateError: If calculate() has not been called yet
        """
        if self.current_start is None:
            raise SearchStateError(
                "You must call calculate before reconstructing the traversal graph."
            )

        traversal_graph = TraversalGraph(self.graph, self.current_start.id)
        for vertex in self.graph.vertices():
            if radius is not None and not 0 <= vertex.distance <= radius:
                continue
            for edge_id in sorted(vertex.predecessor_edges):
                edge = self.graph.get_edge(edge_id)
                traversal_graph.add_edge(
                    edge.opposite(vertex.id),
                    vertex.id,
                    weight=self.graph.edge_weight(edge),
                    base_graph_edge=edge,
                )
        return traversal_graph


class BreadthFirstSearch(GraphSearch):
    """
    Hop-count search; every vertex one hop further than a neighbor on a
    shortest path records that neighbor as a predecessor.
    """

    unvisited = UNVISITED_HOPS

    def calculate(self, start: Vertex | VertexId) -> None:
        start = self.resolve(start)
        self.init(start)
        hooks = self.hooks

        queue = deque([start])
        while queue:
            current = queue.popleft()
            hooks.on_dequeue(current)

            for edge, neighbor in self.graph.outgoing_edges(current):
                # First time found
                if neighbor.distance < 0:
                    neighbor.distance = current.distance + 1
                    queue.append(neighbor)
                    hooks.on_distance_update(current, neighbor, edge)

                # Shortest path through current
                if neighbor.distance == current.distance + 1:
                    neighbor.add_predecessor(current.id, edge.id)
                    hooks.on_shortest_path(current, neighbor, edge)


class DijkstraSearch(GraphSearch):
    """
    Weighted shortest-path search over non-negative edge weights.

    Predecessor sets accumulate every relaxation that improved or tied the
    distance of a vertex; hooks that need exact shortest-path predecessors
    clear them in on_distance_update.
    """

    unvisited = UNVISITED_WEIGHT

    def __init__(
        self,
        graph: GraphView,
        hooks: SearchHooks | None = None,
        tolerance: float = TOLERANCE,
    ):
        super().__init__(graph, hooks)
        self.tolerance = tolerance

    def calculate(
        self,
        start: Vertex | VertexId,
        radius: float | None = None,
        target: Vertex | VertexId | None = None,
    ) -> None:
        """
        Compute shortest paths from `start`.

        Args:
            start: Source vertex or vertex id
            radius: Stop once the closest unsettled vertex is farther than this
            target: Stop once this vertex is settled (one-to-one query)

        Raises:
            VertexNotFound: If `start` or `target` is not in the graph
            GraphStructureError: If a negative edge weight is relaxed
        """
        start = self.resolve(start)
        if target is not None:
            target = self.resolve(target)
        self.init(start)
        hooks = self.hooks
        tolerance = self.tolerance

        # Entries are (distance, insertion order, vertex); superseded entries are skipped
        order = count()
        queue = [(0.0, next(order), start)]
        settled: set[VertexId] = set()

        while queue:
            distance, _, u = heapq.heappop(queue)
            if u.id in settled or distance > u.distance:
                continue
            if radius is not None and u.distance > radius:
                break
            settled.add(u.id)

            if hooks.on_pre_relax(u) or u is target:
                break

            for edge, v in self.graph.outgoing_edges(u):
                if v is u:
                    continue
                weight = self.graph.edge_weight(edge)
                if weight < 0:
                    raise GraphStructureError(
                        f"Edge {edge.id} has negative weight {weight}."
                    )
                alt = u.distance + weight

                if alt < v.distance - tolerance:
                    v.distance = alt
                    heapq.heappush(queue, (alt, next(order), v))
                    hooks.on_distance_update(u, v, edge)

                if abs(alt - v.distance) < tolerance:
                    v.add_predecessor(u.id, edge.id)
                    hooks.on_shortest_path(u, v, edge)

    def shortest_distance(
        self, start: Vertex | VertexId, target: Vertex | VertexId
    ) -> float:
        """
        Distance from `start` to `target`, stopping as soon as it is known.

        Returns:
            The distance, or inf if `target` is unreachable
        """
        self.calculate(start, target=target)
        return self.resolve(target).distance
