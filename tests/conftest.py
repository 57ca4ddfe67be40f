"""
Shared fixtures: the Cormen example graph and a 20-vertex Strahler tree.

The Cormen graph (Introduction to Algorithms, Dijkstra chapter):

    1 -> 2 (10)   1 -> 4 (5)   5 -> 1 (7)   2 -> 4 (2)   4 -> 2 (3)
    2 -> 3 (1)    4 -> 3 (9)   3 -> 5 (4)   5 -> 3 (6)   4 -> 5 (2)

Edge ids follow this order, so edge 0 is 1 -> 2 and edge 9 is 4 -> 5.
"""

import pytest

from graph_metrics.model import KeyedGraph, StrahlerVertex, Vertex

CORMEN_EDGES = [
    (1, 2, 10.0),
    (1, 4, 5.0),
    (5, 1, 7.0),
    (2, 4, 2.0),
    (4, 2, 3.0),
    (2, 3, 1.0),
    (4, 3, 9.0),
    (3, 5, 4.0),
    (5, 3, 6.0),
    (4, 5, 2.0),
]

STRAHLER_EDGES = [
    (1, 2), (1, 3), (3, 4), (3, 12), (4, 5), (4, 8), (5, 6), (5, 7),
    (8, 9), (8, 10), (8, 11), (12, 13), (13, 14), (13, 16), (14, 15),
    (16, 17), (16, 18), (18, 19), (18, 20),
]

STRAHLER_NUMBERS = {
    **{v: 1 for v in (2, 6, 7, 9, 10, 11, 14, 15, 17, 19, 20)},
    **{v: 2 for v in (5, 8, 12, 13, 16, 18)},
    **{v: 3 for v in (1, 3, 4)},
}


@pytest.fixture
def cormen_factory():
    """Build the Cormen graph with a chosen vertex type and directedness."""

    def build(vertex_factory=Vertex, directed=True, weighted=True):
        return KeyedGraph.from_edges(
            CORMEN_EDGES,
            directed=directed,
            weighted=weighted,
            vertex_factory=vertex_factory,
        )

    return build


@pytest.fixture
def cormen(cormen_factory):
    """Directed, weighted Cormen graph of plain search vertices."""
    return cormen_factory()


@pytest.fixture
def strahler_tree():
    """Undirected 20-vertex tree rooted at 1."""
    tree = KeyedGraph.from_edges(
        STRAHLER_EDGES, directed=False, vertex_factory=StrahlerVertex
    )
    tree.set_root(1)
    return tree


@pytest.fixture
def strahler_edges():
    """Parent -> child edges of the Strahler tree."""
    return list(STRAHLER_EDGES)


@pytest.fixture
def expected_strahler():
    """Reference Strahler numbers of the tree rooted at 1."""
    return dict(STRAHLER_NUMBERS)
