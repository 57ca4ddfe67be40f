"""
Tests for depth-first search and Strahler numbering.
"""

import logging

import pytest

from graph_metrics.model import DFSVertex, KeyedGraph, StrahlerVertex
from graph_metrics.search import (
    DepthFirstSearch,
    SearchHooks,
    StrahlerSearch,
    strahler_number,
    strahler_numbers,
)


def times(graph):
    return {v.id: (v.discovery_time, v.finishing_time) for v in graph.vertices()}


def finished(vertex_id, number=-1, leaf=False):
    """A StrahlerVertex as left by the DFS once it is finished."""
    vertex = StrahlerVertex(vertex_id, discovery_time=1, finishing_time=2 if leaf else 9)
    vertex.strahler_number = number
    return vertex


class TestDepthFirstSearch:
    """Tests for DepthFirstSearch."""

    def test_path_times(self):
        """The clock ticks on every discovery and every finish."""
        g = KeyedGraph.from_edges([(1, 2), (2, 3)], directed=False, vertex_factory=DFSVertex)
        DepthFirstSearch(g).calculate(1)
        assert times(g) == {1: (1, 6), 2: (2, 5), 3: (3, 4)}

    def test_cormen_tree(self, cormen_factory):
        """DFS of the directed Cormen graph follows edges in insertion order."""
        g = cormen_factory(vertex_factory=DFSVertex)
        search = DepthFirstSearch(g)
        search.calculate(1)

        assert times(g) == {1: (1, 10), 2: (2, 9), 4: (3, 8), 3: (4, 7), 5: (5, 6)}
        tree = search.reconstruct_traversal_graph()
        assert sorted(tree.edge_pairs()) == [(1, 2), (2, 4), (3, 5), (4, 3)]
        assert tree.root == 1

    def test_whole_graph(self):
        """Without a start vertex every component is visited."""
        g = KeyedGraph.from_edges([(1, 2)], vertex_factory=DFSVertex)
        g.add_vertex(3)
        search = DepthFirstSearch(g)
        search.calculate()

        assert times(g) == {1: (1, 4), 2: (2, 3), 3: (5, 6)}
        assert search.current_start.id == 1

    def test_single_start_leaves_other_components(self):
        """A run from one vertex only discovers what it reaches."""
        g = KeyedGraph.from_edges([(1, 2)], vertex_factory=DFSVertex)
        g.add_vertex(3)
        DepthFirstSearch(g).calculate(2)
        assert times(g) == {1: (-1, -1), 2: (1, 2), 3: (-1, -1)}

    def test_state_reset_between_runs(self):
        """A new run restarts the clock and forgets the previous tree."""
        g = KeyedGraph.from_edges([(1, 2), (2, 3)], vertex_factory=DFSVertex)
        search = DepthFirstSearch(g)
        search.calculate(1)
        search.calculate(2)

        assert times(g) == {1: (-1, -1), 2: (1, 4), 3: (2, 3)}
        assert g.get_vertex(2).predecessors == set()

    def test_deep_path(self):
        """Long paths do not hit the recursion limit."""
        n = 5000
        g = KeyedGraph.from_edges(
            [(i, i + 1) for i in range(1, n)], vertex_factory=DFSVertex
        )
        DepthFirstSearch(g).calculate(1)

        assert g.get_vertex(n).discovery_time == n
        assert g.get_vertex(n).finishing_time == n + 1
        assert g.get_vertex(1).finishing_time == 2 * n

    def test_finish_hook_sees_children(self):
        """on_finish receives the DFS children of each vertex."""
        seen = {}
        hooks = SearchHooks(
            on_finish=lambda v, children: seen.update({v.id: [c.id for c in children]})
        )
        g = KeyedGraph.from_edges([(1, 2), (1, 3), (3, 4)], vertex_factory=DFSVertex)
        DepthFirstSearch(g, hooks).calculate(1)
        assert seen == {1: [2, 3], 2: [], 3: [4], 4: []}


class TestStrahlerSearch:
    """Strahler numbers of the 20-vertex tree."""

    def test_undirected_tree(self, strahler_tree, expected_strahler):
        """Numbers computed from the root match the reference tree."""
        StrahlerSearch(strahler_tree).calculate()
        assert {v.id: v.strahler_number for v in strahler_tree.vertices()} == expected_strahler

    def test_directed_tree(self, strahler_edges, expected_strahler):
        """Edges directed away from the root give the same numbers."""
        tree = KeyedGraph.from_edges(strahler_edges, vertex_factory=StrahlerVertex)
        assert strahler_numbers(tree, root=1) == expected_strahler

    def test_helper_uses_tree_root(self, strahler_tree, expected_strahler):
        """strahler_numbers defaults to the tree's root."""
        assert strahler_numbers(strahler_tree) == expected_strahler

    def test_rerooting(self, strahler_tree):
        """The numbering depends on the chosen root."""
        numbers = strahler_numbers(strahler_tree, root=2)
        assert numbers[2] == 3
        assert numbers[1] == 3

    def test_single_vertex(self):
        """A lone root is a leaf."""
        tree = KeyedGraph(directed=False, vertex_factory=StrahlerVertex)
        tree.add_vertex(1)
        tree.set_root(1)
        assert strahler_numbers(tree) == {1: 1}

    def test_non_tree_warning(self, cormen_factory, caplog):
        """Graphs that are not trees are numbered with a warning."""
        g = cormen_factory(vertex_factory=StrahlerVertex)
        with caplog.at_level(logging.WARNING, logger="graph_metrics.search.depth_first"):
            StrahlerSearch(g).calculate(1)
        assert "not a tree" in caplog.text

    def test_tree_has_no_warning(self, strahler_tree, caplog):
        """Trees are numbered silently."""
        with caplog.at_level(logging.WARNING, logger="graph_metrics.search.depth_first"):
            StrahlerSearch(strahler_tree).calculate()
        assert caplog.text == ""


class TestStrahlerNumber:
    """Tests for the per-vertex Strahler rule."""

    def test_leaf(self):
        """Vertices finished right after discovery are leaves."""
        assert strahler_number(finished(1, leaf=True), []) == 1

    def test_single_child(self):
        """One child passes its number up."""
        assert strahler_number(finished(1), [finished(2, 3)]) == 3

    def test_equal_children(self):
        """Two children of equal order raise the order by one."""
        assert strahler_number(finished(1), [finished(2, 2), finished(3, 2)]) == 3

    def test_unequal_children(self):
        """Otherwise the largest child order wins."""
        assert strahler_number(finished(1), [finished(2, 1), finished(3, 3)]) == 3

    @pytest.mark.parametrize(
        "orders, expected",
        [([1, 1, 1], 2), ([2, 2, 1], 3), ([3, 2, 2], 3), ([1, 2, 4, 4], 5)],
    )
    def test_many_children(self, orders, expected):
        """Only the two largest child orders matter."""
        children = [finished(i + 2, order) for i, order in enumerate(orders)]
        assert strahler_number(finished(1), children) == expected
