"""
Keyed graphs and read-only views backed by NetworkX.

A KeyedGraph owns the vertex and edge objects and stores them in a
NetworkX multigraph (MultiDiGraph when directed, MultiGraph otherwise):
- each node carries its Vertex under the "vertex" attribute
- each edge is keyed by its integer id and carries the Edge under "edge"
  plus its weight under "weight"

Views (undirected, edge-reversed, unweighted) wrap NetworkX graph views of
the same store, so vertex and edge state is shared and nothing is copied.
All search engines only use the traversal interface of GraphView.
"""

from collections.abc import Callable, Iterable, Iterator
from itertools import count

import networkx as nx

from .base import EdgeId, GraphStructureError, VertexId, VertexNotFound
from .vertices import Edge, Vertex

VertexFactory = Callable[[VertexId], Vertex]


class GraphView:
    """
    Read-only traversal interface over a NetworkX multigraph.

    Directed views expose out-edges; undirected views expose every
    incident edge. Unweighted views report a weight of 1.0 for every edge.
    """

    def __init__(
        self,
        base: "KeyedGraph",
        nx_graph: nx.MultiGraph,
        weighted: bool = True,
        reverse: bool = False,
    ):
        self.base = base
        self.nx = nx_graph
        self.weighted = weighted
        self.reverse = reverse  # Edges are traversed target -> source

    @property
    def directed(self) -> bool:
        return self.nx.is_directed()

    @property
    def root(self) -> VertexId | None:
        return self.base.root

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self.nx

    def __len__(self) -> int:
        return self.nx.number_of_nodes()

    @property
    def vertex_count(self) -> int:
        return self.nx.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return len(self.base.edges())

    def get_vertex(self, vertex_id: VertexId) -> Vertex:
        """
        Look up a vertex by id.

        Raises:
            VertexNotFound: If no vertex has this id
        """
        try:
            return self.nx.nodes[vertex_id]["vertex"]
        except KeyError:
            raise VertexNotFound(
                f"Vertex {vertex_id} is not contained in the graph."
            ) from None

    def get_edge(self, edge_id: EdgeId) -> Edge:
        return self.base.get_edge(edge_id)

    def vertices(self) -> list[Vertex]:
        """All vertices in insertion order."""
        return [vertex for _, vertex in self.nx.nodes(data="vertex")]

    def edges(self) -> list[Edge]:
        """Edges of the base graph; every view shares them."""
        return self.base.edges()

    def outgoing_edges(self, vertex: Vertex) -> Iterator[tuple[Edge, Vertex]]:
        """Yield (edge, opposite vertex) for every edge leaving `vertex`."""
        if self.directed:
            incident = self.nx.out_edges(vertex.id, keys=True, data="edge")
        else:
            incident = self.nx.edges(vertex.id, keys=True, data="edge")
        nodes = self.nx.nodes
        for _, neighbor_id, _, edge in incident:
            yield edge, nodes[neighbor_id]["vertex"]

    def successors(self, vertex: Vertex) -> list[Vertex]:
        """Opposite endpoints of the outgoing edges (repeated for parallel edges)."""
        return [neighbor for _, neighbor in self.outgoing_edges(vertex)]

    def outdegree(self, vertex: Vertex) -> int:
        if self.directed:
            return self.nx.out_degree(vertex.id)
        return self.nx.degree(vertex.id)

    def edge_weight(self, edge: Edge) -> float:
        return edge.weight if self.weighted else 1.0

    def edge_endpoints(self, edge: Edge) -> tuple[VertexId, VertexId]:
        """(source, target) of `edge` as oriented in this view."""
        if self.reverse:
            return edge.target, edge.source
        return edge.source, edge.target

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        weight = "weighted" if self.weighted else "unweighted"
        return (
            f"<{type(self).__name__} {kind} {weight} "
            f"|V|={self.vertex_count} |E|={self.edge_count}>"
        )


class KeyedGraph(GraphView):
    """
    Mutable graph of integer-keyed vertices and weighted multi-edges.

    Vertex objects are built by `vertex_factory`, called with the vertex id,
    so analyzers choose the state their search needs.

    Example:
        >>> g = KeyedGraph(vertex_factory=CentralityVertex)
        >>> e = g.add_edge(1, 2, weight=10.0)
        >>> g.get_vertex(2).distance
        -1
    """

    def __init__(
        self,
        directed: bool = True,
        weighted: bool = True,
        vertex_factory: VertexFactory = Vertex,
    ):
        super().__init__(self, nx.MultiDiGraph() if directed else nx.MultiGraph(), weighted)
        self.vertex_factory = vertex_factory
        self._edges: dict[EdgeId, Edge] = {}
        self._edge_ids = count()
        self._root: VertexId | None = None

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple],
        directed: bool = True,
        weighted: bool = True,
        vertex_factory: VertexFactory = Vertex,
    ) -> "KeyedGraph":
        """
        Build a graph from (source, target) or (source, target, weight) tuples.

        Edge ids are assigned in iteration order starting at 0.
        """
        graph = cls(directed=directed, weighted=weighted, vertex_factory=vertex_factory)
        for source, target, *rest in edges:
            graph.add_edge(source, target, weight=rest[0] if rest else 1.0)
        return graph

    @property
    def root(self) -> VertexId | None:
        return self._root

    def set_root(self, vertex_id: VertexId) -> None:
        self.get_vertex(vertex_id)
        self._root = vertex_id

    def add_vertex(self, vertex_id: VertexId) -> Vertex:
        """
        Create the vertex `vertex_id`.

        Raises:
            GraphStructureError: If the vertex has already been added
        """
        if vertex_id in self.nx:
            raise GraphStructureError(f"Vertex {vertex_id} has already been added.")
        vertex = self.vertex_factory(vertex_id)
        self.nx.add_node(vertex_id, vertex=vertex)
        return vertex

    def add_edge(
        self,
        source: VertexId,
        target: VertexId,
        weight: float = 1.0,
        edge_id: EdgeId | None = None,
        base_graph_edge: Edge | None = None,
    ) -> Edge:
        """
        Add an edge, creating missing endpoints.

        Args:
            source: Source vertex id
            target: Target vertex id
            weight: Edge weight (ignored by unweighted views)
            edge_id: Explicit id; auto-numbered when None
            base_graph_edge: Edge of another graph this edge was derived from

        Returns:
            The new Edge

        Raises:
            GraphStructureError: If `edge_id` is already used
        """
        if edge_id is None:
            edge_id = next(self._edge_ids)
            while edge_id in self._edges:
                edge_id = next(self._edge_ids)
        elif edge_id in self._edges:
            raise GraphStructureError(f"Edge id {edge_id} is already used.")

        for vertex_id in (source, target):
            if vertex_id not in self.nx:
                self.add_vertex(vertex_id)

        edge = Edge(edge_id, source, target, float(weight), base_graph_edge)
        self._edges[edge_id] = edge
        self.nx.add_edge(source, target, key=edge_id, edge=edge, weight=edge.weight)
        return edge

    def get_edge(self, edge_id: EdgeId) -> Edge:
        try:
            return self._edges[edge_id]
        except KeyError:
            raise GraphStructureError(f"Edge {edge_id} is not contained in the graph.") from None

    def edges(self) -> list[Edge]:
        return list(self._edges.values())


class TraversalGraph(KeyedGraph):
    """
    Directed multigraph of the shortest paths (or DFS tree) of one run.

    Shares vertex objects with the searched graph; every edge points back
    to the searched edge through `base_graph_edge`.
    """

    def __init__(self, searched: GraphView, root: VertexId):
        super().__init__(
            directed=True,
            weighted=searched.weighted,
            vertex_factory=searched.get_vertex,
        )
        self.add_vertex(root)
        self.set_root(root)

    def edge_pairs(self) -> list[tuple[VertexId, VertexId]]:
        """(source, target) id pairs, one per edge including parallel ones."""
        return [(edge.source, edge.target) for edge in self._edges.values()]


def as_undirected(graph: GraphView) -> GraphView:
    """Undirected view of `graph`; directed graphs expose both edge directions."""
    if not graph.directed:
        return graph
    return GraphView(graph.base, graph.nx.to_undirected(as_view=True), graph.weighted)


def as_reversed(graph: GraphView) -> GraphView:
    """
    Edge-reversed view of a directed graph.

    Reversing a reversed view yields a view with the original orientation.

    Raises:
        GraphStructureError: If `graph` is undirected
    """
    if not graph.directed:
        raise GraphStructureError("Only directed graphs can be edge-reversed.")
    return GraphView(
        graph.base, nx.reverse_view(graph.nx), graph.weighted, not graph.reverse
    )


def as_unweighted(graph: GraphView) -> GraphView:
    """View of `graph` where every edge weighs 1.0."""
    return GraphView(graph.base, graph.nx, weighted=False, reverse=graph.reverse)

