"""
Minimum spanning tree algorithms over a weighted_graph.Graph

prim_mst and kruskal_mst are exact. container_order_prim and
local_minimum_edges keep the behaviour of the older single-pass routines
and are NOT guaranteed to return a minimum spanning tree.
"""

import heapq
import logging
from itertools import count

from graph_errors import InvalidArgumentError
from weighted_graph import Graph, require_graph

logger = logging.getLogger(__name__)


class SpanningTree:
    """Edges accepted by an MST run, as (u, v, weight) vertex id triples"""

    def __init__(self, algorithm, edges=None):
        self.algorithm = algorithm
        self.edges = list(edges or [])

    @property
    def total_weight(self):
        return sum(w for _, _, w in self.edges)

    def add(self, u, v, weight):
        self.edges.append((u, v, weight))

    def vertex_ids(self):
        ids = set()
        for u, v, _ in self.edges:
            ids.add(u)
            ids.add(v)
        return ids

    def is_spanning(self, graph):
        """True when the edges form one tree reaching every vertex of graph"""
        require_graph(graph, "is_spanning")
        ids = [vertex.id for vertex in graph.vertices]
        if len(self.edges) != max(len(ids) - 1, 0):
            return False

        components = DisjointSet(ids)
        for u, v, _ in self.edges:
            if u not in components or v not in components:
                return False
            if not components.union(u, v):
                return False
        return len(components) <= 1

    def to_dict(self):
        return {
            "algorithm": self.algorithm,
            "mst_edges": [list(edge) for edge in self.edges],
            "total_weight": self.total_weight,
            "num_edges": len(self.edges),
        }

    def __iter__(self):
        return iter(self.edges)

    def __len__(self):
        return len(self.edges)

    def __repr__(self):
        return (
            f"SpanningTree({self.algorithm}, edges={len(self.edges)}, "
            f"weight={self.total_weight})"
        )


class DisjointSet:
    """Union-find over hashable items, path halving and union by size"""

    def __init__(self, items=()):
        self.parent = {}
        self.size = {}
        self._sets = 0
        for item in items:
            self.add(item)

    def add(self, item):
        if item not in self.parent:
            self.parent[item] = item
            self.size[item] = 1
            self._sets += 1

    def find(self, item):
        parent = self.parent
        while parent[item] != item:
            parent[item] = parent[parent[item]]
            item = parent[item]
        return item

    def union(self, a, b):
        """Merge the sets of a and b; False if already in the same set"""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        if self.size[root_a] < self.size[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        self.size[root_a] += self.size[root_b]
        self._sets -= 1
        return True

    def connected(self, a, b):
        return self.find(a) == self.find(b)

    def __contains__(self, item):
        return item in self.parent

    def __len__(self):
        return self._sets


def _write_output(graph, tree, output):
    """Copy the vertices of graph and both directions of each tree edge"""
    if output is None:
        return
    require_graph(output, "mst output")
    if output is graph:
        raise InvalidArgumentError("mst output: output graph must differ from input")

    for vertex in graph.vertices:
        if output.find_vertex(vertex.id) is None:
            output.add_vertex(vertex.id)
    for u, v, w in tree.edges:
        output.add_undirected_edge(u, v, w)


def prim_mst(graph, start=None, output=None):
    """
    Prim's algorithm with a binary heap frontier.

    start is the id of the first vertex to absorb (default: first inserted).
    Unreached vertices restart the search in insertion order, so a
    disconnected graph yields a minimum spanning forest. Equal weights are
    taken in the order they entered the frontier.
    """
    require_graph(graph, "prim_mst")
    tree = SpanningTree("prim")
    if not graph.vertices:
        _write_output(graph, tree, output)
        return tree

    if start is None:
        roots = list(graph.vertices)
    else:
        first = graph.find_vertex(start)
        if first is None:
            raise InvalidArgumentError(f"prim_mst: start vertex {start} not found")
        roots = [first] + [v for v in graph.vertices if v is not first]

    in_tree = [False] * len(graph.vertices)
    sequence = count()

    for root in roots:
        if in_tree[root.index]:
            continue
        if tree.edges:
            logger.debug("prim_mst: vertex %s unreached, starting new tree", root.id)

        in_tree[root.index] = True
        frontier = []
        for edge in root.adjacency:
            heapq.heappush(frontier, (edge.weight, next(sequence), edge))

        while frontier:
            weight, _, edge = heapq.heappop(frontier)
            if in_tree[edge.target]:
                continue

            adjacent = graph.vertices[edge.target]
            in_tree[adjacent.index] = True
            tree.add(graph.vertices[edge.source].id, adjacent.id, weight)
            logger.debug(
                "prim_mst: accepted %s -- %s [%s]",
                graph.vertices[edge.source].id,
                adjacent.id,
                weight,
            )

            for next_edge in adjacent.adjacency:
                if not in_tree[next_edge.target]:
                    heapq.heappush(
                        frontier, (next_edge.weight, next(sequence), next_edge)
                    )

    logger.info(
        "prim_mst: %d edges, total weight %d", len(tree.edges), tree.total_weight
    )
    _write_output(graph, tree, output)
    return tree


def kruskal_mst(graph, output=None):
    """
    Kruskal's algorithm: sort every undirected edge by weight and accept an
    edge iff its endpoints are still in different components.
    """
    require_graph(graph, "kruskal_mst")
    tree = SpanningTree("kruskal")
    needed = max(len(graph.vertices) - 1, 0)

    components = DisjointSet(vertex.id for vertex in graph.vertices)
    # sorted() is stable, ties keep vertex then edge insertion order
    candidates = sorted(graph.undirected_edges(), key=lambda edge: edge[2])

    for u, v, w in candidates:
        if len(tree.edges) == needed:
            break
        if not components.union(u, v):
            logger.debug("kruskal_mst: rejected %s -- %s [%s], cycle", u, v, w)
            continue
        tree.add(u, v, w)
        logger.debug("kruskal_mst: accepted %s -- %s [%s]", u, v, w)

    logger.info(
        "kruskal_mst: %d edges, total weight %d", len(tree.edges), tree.total_weight
    )
    _write_output(graph, tree, output)
    return tree


def container_order_prim(graph, output=None):
    """
    Single pass over vertices in insertion order.

    Each vertex not yet marked visited contributes its lightest outgoing edge
    (first seen wins on ties) and marks that edge's target visited. The
    candidate edge is reset for every vertex, so a skipped vertex never
    reports or marks the choice of an earlier one. Not an MST in general.
    """
    require_graph(graph, "container_order_prim")
    graph.reset_marks()
    tree = SpanningTree("container-prim")

    for vertex in graph.vertices:
        if vertex.visited:
            logger.debug("container_order_prim: vertex %s already visited", vertex.id)
            continue

        best = None
        for edge in vertex.adjacency:
            if best is None or edge.weight < best.weight:
                best = edge

        if best is None:
            continue

        adjacent = graph.vertices[best.target]
        adjacent.visited = True
        tree.add(vertex.id, adjacent.id, best.weight)
        logger.debug("container_order_prim: vertex %s marked", adjacent.id)

    _write_output(graph, tree, output)
    return tree


def local_minimum_edges(graph, output=None):
    """
    Lightest outgoing edge of every vertex, with no global sort and no cycle
    check. Both directions of one edge can appear. Not an MST.
    """
    require_graph(graph, "local_minimum_edges")
    tree = SpanningTree("local-minimum")

    for vertex in graph.vertices:
        best = None
        for edge in vertex.adjacency:
            logger.debug(
                "local_minimum_edges: %s -- %s [%s]",
                vertex.id,
                graph.vertices[edge.target].id,
                edge.weight,
            )
            if best is None or edge.weight < best.weight:
                best = edge
        if best is not None:
            tree.add(vertex.id, graph.vertices[best.target].id, best.weight)

    _write_output(graph, tree, output)
    return tree


ALGORITHMS = {
    "prim": prim_mst,
    "kruskal": kruskal_mst,
    "container-prim": container_order_prim,
    "local-minimum": local_minimum_edges,
}


def minimum_spanning_tree(graph, algorithm="kruskal", **kwargs):
    """Run the named algorithm from ALGORITHMS"""
    try:
        run = ALGORITHMS[algorithm]
    except KeyError:
        raise InvalidArgumentError(
            f"unknown algorithm {algorithm!r}, choose from {sorted(ALGORITHMS)}"
        ) from None
    if not isinstance(graph, Graph):
        raise InvalidArgumentError(f"{algorithm}: invalid graph {graph!r}")
    return run(graph, **kwargs)
