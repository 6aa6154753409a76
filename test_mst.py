"""
Tests for the MST engine
"""

import pytest

from graph_errors import InvalidArgumentError
from graph_tools import create_random_graph, from_edge_list, verify_mst
from mst import (
    ALGORITHMS,
    DisjointSet,
    SpanningTree,
    container_order_prim,
    kruskal_mst,
    local_minimum_edges,
    minimum_spanning_tree,
    prim_mst,
)
from weighted_graph import Graph


def undirected(edges):
    return {(frozenset((u, v)), w) for u, v, w in edges}


FIXTURE_TREE = undirected([(1, 2, 1), (3, 4, 1), (2, 3, 2)])


class TestDisjointSet:
    def test_union_and_find(self):
        sets = DisjointSet([1, 2, 3, 4])
        assert len(sets) == 4
        assert sets.union(1, 2)
        assert sets.union(3, 4)
        assert not sets.union(2, 1)
        assert sets.connected(1, 2)
        assert not sets.connected(1, 3)
        assert len(sets) == 2

        sets.union(2, 4)
        assert sets.find(1) == sets.find(3)
        assert len(sets) == 1

    def test_add_is_idempotent(self):
        sets = DisjointSet()
        sets.add("a")
        sets.add("a")
        assert len(sets) == 1
        assert "a" in sets


class TestPrim:
    def test_fixture(self, fixture):
        tree = prim_mst(fixture)
        assert tree.total_weight == 4
        assert len(tree) == 3
        assert undirected(tree.edges) == FIXTURE_TREE
        assert tree.is_spanning(fixture)

    def test_fixture_acceptance_order(self, fixture):
        assert prim_mst(fixture).edges == [(1, 2, 1), (2, 3, 2), (3, 4, 1)]

    @pytest.mark.parametrize("start", [1, 2, 3, 4])
    def test_start_vertex_does_not_change_weight(self, fixture, start):
        tree = prim_mst(fixture, start=start)
        assert tree.total_weight == 4
        assert tree.edges[0][0] == start

    def test_unknown_start(self, fixture):
        with pytest.raises(InvalidArgumentError):
            prim_mst(fixture, start=99)

    def test_disconnected_graph_gives_forest(self):
        g = from_edge_list(5, [(0, 1, 3), (2, 3, 1), (3, 4, 2), (2, 4, 5)])
        tree = prim_mst(g)
        assert len(tree) == 3
        assert tree.total_weight == 6
        assert not tree.is_spanning(g)

    def test_ties_take_first_seen(self):
        g = from_edge_list(3, [(0, 1, 1), (0, 2, 1), (1, 2, 1)])
        assert prim_mst(g).edges == [(0, 1, 1), (0, 2, 1)]

    def test_empty_and_single_vertex(self):
        assert prim_mst(Graph()).edges == []
        g = Graph()
        g.add_vertex(1)
        tree = prim_mst(g)
        assert tree.edges == []
        assert tree.is_spanning(g)


class TestKruskal:
    def test_fixture(self, fixture):
        tree = kruskal_mst(fixture)
        assert tree.total_weight == 4
        assert undirected(tree.edges) == FIXTURE_TREE
        assert tree.is_spanning(fixture)

    def test_sorted_acceptance(self, fixture):
        weights = [w for _, _, w in kruskal_mst(fixture)]
        assert weights == sorted(weights)

    def test_cycle_rejected(self):
        g = from_edge_list(3, [(0, 1, 1), (1, 2, 1), (0, 2, 1)])
        tree = kruskal_mst(g)
        # (1,2) closes the cycle once (0,1) and (0,2) are in
        assert tree.edges == [(0, 1, 1), (0, 2, 1)]

    def test_parallel_edges_take_lightest(self):
        g = from_edge_list(2, [(0, 1, 7), (0, 1, 2)])
        assert kruskal_mst(g).edges == [(0, 1, 2)]

    def test_self_loop_ignored(self):
        g = from_edge_list(2, [(0, 0, 0), (0, 1, 5)])
        assert kruskal_mst(g).edges == [(0, 1, 5)]


@pytest.mark.parametrize("algorithm", ["prim", "kruskal"])
class TestExactAlgorithms:
    @pytest.mark.parametrize(
        "nodes,prob,seed",
        [(5, 0.5, 42), (6, 0.4, 100), (7, 0.6, 200), (10, 0.8, 400), (20, 0.3, 500)],
    )
    def test_matches_networkx(self, algorithm, nodes, prob, seed):
        g = create_random_graph(nodes, prob, seed)
        tree = minimum_spanning_tree(g, algorithm)
        check = verify_mst(g, tree)

        assert len(tree) == nodes - 1
        assert tree.is_spanning(g)
        assert check["is_correct"]
        assert tree.total_weight == check["networkx_weight"]

    def test_output_graph(self, fixture, algorithm):
        out = Graph(2)
        tree = minimum_spanning_tree(fixture, algorithm, output=out)

        assert [v.id for v in out] == [1, 2, 3, 4]
        assert out.edge_count == 2 * len(tree)
        assert undirected(out.undirected_edges()) == FIXTURE_TREE
        for u, v, w in tree:
            assert out.find_edge(v, u).weight == w

    def test_output_must_differ(self, fixture, algorithm):
        with pytest.raises(InvalidArgumentError):
            minimum_spanning_tree(fixture, algorithm, output=fixture)

    def test_invalid_graph(self, algorithm):
        with pytest.raises(InvalidArgumentError):
            minimum_spanning_tree(None, algorithm)

    def test_destroyed_graph(self, fixture, algorithm):
        fixture.destroy()
        with pytest.raises(InvalidArgumentError):
            minimum_spanning_tree(fixture, algorithm)


class TestContainerOrderPrim:
    """Single pass routine: not an MST, expectations follow its own rules"""

    def test_fixture(self, fixture):
        tree = container_order_prim(fixture)
        # 1 takes (1,2) and marks 2; 2 is skipped; 3 takes (3,4) and marks 4
        assert tree.edges == [(1, 2, 1), (3, 4, 1)]
        assert [v.visited for v in fixture] == [False, True, False, True]
        assert not tree.is_spanning(fixture)

    def test_skipped_vertex_does_not_reuse_previous_choice(self):
        g = Graph()
        for vertex_id in (1, 2, 3):
            g.add_vertex(vertex_id)
        g.add_undirected_edge(1, 2, 1)
        g.add_edges(3, [])

        tree = container_order_prim(g)

        assert tree.edges == [(1, 2, 1)]
        assert [v.id for v in g if v.visited] == [2]

    def test_only_edge_targets_are_marked(self, fixture):
        tree = container_order_prim(fixture)
        marked = {v.id for v in fixture if v.visited}
        assert marked == {v for _, v, _ in tree.edges}

    def test_ties_keep_first_edge(self):
        g = from_edge_list(3, [(0, 1, 2), (0, 2, 2)])
        assert container_order_prim(g).edges[0] == (0, 1, 2)

    def test_rerun_clears_marks(self, fixture):
        assert container_order_prim(fixture).edges == container_order_prim(fixture).edges


class TestLocalMinimumEdges:
    """Per vertex lightest edge heuristic, not an MST"""

    def test_fixture(self, fixture):
        tree = local_minimum_edges(fixture)
        assert tree.edges == [(1, 2, 1), (2, 1, 1), (3, 4, 1), (4, 3, 1)]
        assert tree.total_weight == 4
        assert not tree.is_spanning(fixture)

    def test_can_miss_connecting_edge(self):
        g = from_edge_list(4, [(0, 1, 1), (2, 3, 1), (1, 2, 9)])
        pairs = {frozenset((u, v)) for u, v, _ in local_minimum_edges(g)}
        assert frozenset((1, 2)) not in pairs


class TestDispatch:
    def test_registry(self):
        assert set(ALGORITHMS) == {"prim", "kruskal", "container-prim", "local-minimum"}

    def test_unknown_algorithm(self, fixture):
        with pytest.raises(InvalidArgumentError):
            minimum_spanning_tree(fixture, "boruvka")

    def test_prim_start_passed_through(self, fixture):
        tree = minimum_spanning_tree(fixture, "prim", start=4)
        assert tree.edges[0][0] == 4


class TestSpanningTree:
    def test_to_dict(self):
        tree = SpanningTree("kruskal", [(1, 2, 3), (2, 3, 4)])
        assert tree.to_dict() == {
            "algorithm": "kruskal",
            "mst_edges": [[1, 2, 3], [2, 3, 4]],
            "total_weight": 7,
            "num_edges": 2,
        }
        assert tree.vertex_ids() == {1, 2, 3}

    def test_cycle_is_not_spanning(self, fixture):
        tree = SpanningTree("manual", [(1, 2, 1), (2, 3, 2), (1, 3, 3)])
        assert not tree.is_spanning(fixture)

    def test_unknown_vertex_is_not_spanning(self, fixture):
        tree = SpanningTree("manual", [(1, 2, 1), (2, 3, 2), (3, 9, 1)])
        assert not tree.is_spanning(fixture)
