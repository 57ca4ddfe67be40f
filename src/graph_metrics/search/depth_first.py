"""
Depth-first search and Strahler stream ordering.

The visit runs on an explicit stack of (vertex, pending edges, children)
frames instead of recursion, so deep trees do not hit the interpreter's
recursion limit. Discovery and finishing times follow the usual DFS clock:
it ticks once when a vertex is discovered and once when it is finished.
"""

import heapq
import logging

from ..model.base import VertexId
from ..model.graphs import GraphView
from ..model.vertices import DFSVertex, StrahlerVertex
from .engine import GraphSearch, SearchHooks

logger = logging.getLogger(__name__)


class DepthFirstSearch(GraphSearch):
    """
    Depth-first search recording discovery/finishing times and the DFS
    forest as predecessor edges.
    """

    def __init__(self, graph: GraphView, hooks: SearchHooks | None = None):
        super().__init__(graph, hooks)
        self.time = 0

    def calculate(self, start: DFSVertex | VertexId | None = None) -> None:
        """
        Run a DFS from `start`, or from every undiscovered vertex in vertex
        order when `start` is None.

        All DFS state and the clock are reset first.
        """
        vertices = self.graph.vertices()
        for vertex in vertices:
            vertex.reset()
        self.time = 0
        self.current_start = None

        if start is not None:
            start = self.resolve(start)
            self.current_start = start
            self._visit(start)
            return

        for vertex in vertices:
            if not vertex.is_discovered:
                if self.current_start is None:
                    self.current_start = vertex
                self._visit(vertex)

    def _discover(self, vertex: DFSVertex) -> None:
        self.time += 1
        vertex.discovery_time = self.time

    def _visit(self, root: DFSVertex) -> None:
        self._discover(root)
        stack = [(root, self.graph.outgoing_edges(root), [])]

        while stack:
            vertex, pending, children = stack[-1]
            for edge, neighbor in pending:
                if not neighbor.is_discovered:
                    neighbor.add_predecessor(vertex.id, edge.id)
                    children.append(neighbor)
                    self._discover(neighbor)
                    stack.append((neighbor, self.graph.outgoing_edges(neighbor), []))
                    break
            else:
                stack.pop()
                self.time += 1
                vertex.finishing_time = self.time
                self.hooks.on_finish(vertex, children)


class StrahlerSearch(DepthFirstSearch):
    """
    Computes Strahler numbers of a rooted tree in DFS post-order.

    Leaves get 1; a vertex with one child takes the child's number; otherwise
    the number is max + 1 when the two largest child numbers tie, else max.
    On graphs that are not trees the numbers are meaningless.

    Example:
        >>> tree = KeyedGraph(directed=False, vertex_factory=StrahlerVertex)
        >>> for edge in [(1, 2), (1, 3)]:
        ...     tree.add_edge(*edge)
        >>> tree.set_root(1)
        >>> StrahlerSearch(tree).calculate()
        >>> tree.get_vertex(1).strahler_number
        2
    """

    def __init__(self, graph: GraphView):
        super().__init__(graph, SearchHooks(on_finish=self._assign))

    def calculate(self, start: StrahlerVertex | VertexId | None = None) -> None:
        """Number the tree from `start`, defaulting to the graph's root."""
        if self.graph.edge_count != self.graph.vertex_count - 1:
            logger.warning(
                "Strahler numbers on a graph that is not a tree "
                "(%d vertices, %d edges) are meaningless.",
                self.graph.vertex_count,
                self.graph.edge_count,
            )
        if start is None:
            start = self.graph.root
        super().calculate(start)

    def _assign(self, vertex: StrahlerVertex, children: list[StrahlerVertex]) -> None:
        vertex.strahler_number = strahler_number(vertex, children)


def strahler_number(vertex: StrahlerVertex, children: list[StrahlerVertex]) -> int:
    """Strahler number of a finished vertex given its finished DFS children."""
    if vertex.finishing_time == vertex.discovery_time + 1:
        return 1
    if len(children) == 1:
        return children[0].strahler_number
    largest, second = heapq.nlargest(2, (child.strahler_number for child in children))
    return largest + 1 if largest == second else largest


def strahler_numbers(tree: GraphView, root: VertexId | None = None) -> dict[VertexId, int]:
    """
    Strahler numbers of every vertex reachable from `root`.

    Args:
        tree: Tree whose vertices are StrahlerVertex objects
        root: Root vertex id; defaults to the tree's root, or every
              undiscovered vertex when neither is set

    Returns:
        Map of vertex_id to Strahler number (-1 for unreached vertices)
    """
    StrahlerSearch(tree).calculate(root)
    return {vertex.id: vertex.strahler_number for vertex in tree.vertices()}
