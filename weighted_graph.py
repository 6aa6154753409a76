"""
Weighted undirected graph stored as adjacency lists
Vertices live in an arena owned by the graph and edges refer to them by index
"""

import logging
from enum import Enum

from graph_errors import (
    AllocationFailureError,
    DuplicateVertexError,
    InvalidArgumentError,
    UnresolvedTargetError,
)

logger = logging.getLogger(__name__)


class EdgeStatus(Enum):
    PENDING = "PENDING"
    EXPORTED = "EXPORTED"


class Edge:
    __slots__ = ("graph", "source", "target", "weight", "status")

    def __init__(self, graph, source, target, weight):
        self.graph = graph
        self.source = source  # arena index of the owning vertex
        self.target = target  # arena index of the adjacent vertex
        self.weight = weight
        self.status = EdgeStatus.PENDING

    @property
    def exported(self):
        return self.status == EdgeStatus.EXPORTED

    @exported.setter
    def exported(self, value):
        self.status = EdgeStatus.EXPORTED if value else EdgeStatus.PENDING

    @property
    def source_vertex(self):
        return self.graph.vertex_at(self.source)

    @property
    def target_vertex(self):
        return self.graph.vertex_at(self.target)

    def as_tuple(self):
        """Return (source id, target id, weight)"""
        return (self.source_vertex.id, self.target_vertex.id, self.weight)

    def __repr__(self):
        u, v, w = self.as_tuple()
        return f"Edge({u} -> {v}, weight={w})"


class Vertex:
    __slots__ = ("id", "index", "adjacency", "visited")

    def __init__(self, vertex_id, index):
        self.id = vertex_id
        self.index = index
        self.adjacency = []
        self.visited = False

    @property
    def degree(self):
        return len(self.adjacency)

    def __repr__(self):
        return f"Vertex({self.id}, degree={self.degree})"


class Graph:
    def __init__(self, graph_id=0):
        self.id = graph_id
        self.vertices = []
        self._index = {}  # vertex id -> arena index
        self._destroyed = False

    # -----------------
    # VERTEX OPERATIONS
    # -----------------

    def add_vertex(self, vertex_id):
        """Add a vertex with a unique integer id and return it"""
        self._check_alive("add_vertex")
        if isinstance(vertex_id, bool) or not isinstance(vertex_id, int):
            raise InvalidArgumentError(
                f"add_vertex: vertex id must be an integer, got {vertex_id!r}"
            )
        if self.find_vertex(vertex_id) is not None:
            raise DuplicateVertexError(vertex_id)

        try:
            vertex = Vertex(vertex_id, len(self.vertices))
        except MemoryError as exc:
            raise AllocationFailureError(
                f"add_vertex: no storage for vertex {vertex_id}"
            ) from exc

        self.vertices.append(vertex)
        self._index[vertex_id] = vertex.index
        logger.debug("graph %s: added vertex %s", self.id, vertex_id)
        return vertex

    def find_vertex(self, vertex_id):
        """Return the vertex with this id, or None"""
        self._check_alive("find_vertex")
        try:
            index = self._index.get(vertex_id)
        except TypeError:
            # unhashable ids match no vertex
            return None
        if index is None:
            return None
        return self.vertices[index]

    def vertex_at(self, index):
        self._check_alive("vertex_at")
        return self.vertices[index]

    # -----------------
    # EDGE OPERATIONS
    # -----------------

    def add_edges(self, source, pairs):
        """
        Attach edges from source to each (target_id, weight) pair, in order.

        The whole batch is resolved before anything is appended, so an
        unknown target leaves the adjacency list of source untouched.
        """
        self._check_alive("add_edges")
        vertex = self._resolve(source, "add_edges")

        try:
            pairs = list(pairs)
        except TypeError as exc:
            raise InvalidArgumentError(
                f"add_edges: pairs must be a sequence, got {pairs!r}"
            ) from exc

        resolved = []
        for pair in pairs:
            try:
                target_id, weight = pair
            except (TypeError, ValueError) as exc:
                raise InvalidArgumentError(
                    f"add_edges: expected (target_id, weight), got {pair!r}"
                ) from exc
            if isinstance(target_id, bool) or not isinstance(target_id, int):
                raise InvalidArgumentError(
                    f"add_edges: target id must be an integer, got {target_id!r}"
                )
            if isinstance(weight, bool) or not isinstance(weight, int):
                raise InvalidArgumentError(
                    f"add_edges: weight must be an integer, got {weight!r}"
                )
            target = self.find_vertex(target_id)
            if target is None:
                raise UnresolvedTargetError(vertex.id, target_id)
            resolved.append((target, weight))

        added = []
        for target, weight in resolved:
            try:
                edge = Edge(self, vertex.index, target.index, weight)
            except MemoryError as exc:
                raise AllocationFailureError(
                    f"add_edges: no storage for edge {vertex.id} -> {target.id}"
                ) from exc
            vertex.adjacency.append(edge)
            added.append(edge)
            logger.debug(
                "graph %s: edge %s -> %s weight %s", self.id, vertex.id, target.id, weight
            )
        return added

    def add_undirected_edge(self, u, v, weight):
        """Add (u, v, weight) and its reciprocal (v, u, weight)"""
        self._check_alive("add_undirected_edge")
        first = self._resolve(u, "add_undirected_edge")
        second = self._resolve(v, "add_undirected_edge")
        forward = self.add_edges(first, [(second.id, weight)])
        backward = self.add_edges(second, [(first.id, weight)])
        return forward + backward

    def find_edge(self, source, target):
        """First edge of source whose target is target, or None"""
        self._check_alive("find_edge")
        source = self._resolve(source, "find_edge")
        target = self._resolve(target, "find_edge")
        for edge in source.adjacency:
            if edge.target == target.index:
                return edge
        return None

    def neighbours(self, vertex):
        vertex = self._resolve(vertex, "neighbours")
        return [self.vertices[edge.target] for edge in vertex.adjacency]

    def edges(self):
        """Every directed edge, vertex insertion order then edge order"""
        self._check_alive("edges")
        for vertex in self.vertices:
            for edge in vertex.adjacency:
                yield edge

    def undirected_edges(self):
        """(u, v, w) once per undirected pair, first direction seen wins"""
        self._check_alive("undirected_edges")
        unmatched = {}  # (source, target) -> directions still waiting for a reciprocal
        triples = []
        for edge in self.edges():
            reverse = (edge.target, edge.source)
            if unmatched.get(reverse, 0) > 0:
                unmatched[reverse] -= 1
                continue
            key = (edge.source, edge.target)
            unmatched[key] = unmatched.get(key, 0) + 1
            triples.append(edge.as_tuple())
        return triples

    # -----------------
    # GRAPH OPERATIONS
    # -----------------

    @property
    def vertex_count(self):
        self._check_alive("vertex_count")
        return len(self.vertices)

    @property
    def edge_count(self):
        self._check_alive("edge_count")
        return sum(vertex.degree for vertex in self.vertices)

    @property
    def destroyed(self):
        return self._destroyed

    def reset_marks(self):
        """Clear visited flags on vertices and export marks on edges"""
        self._check_alive("reset_marks")
        for vertex in self.vertices:
            vertex.visited = False
        self.clear_export_marks()

    def clear_export_marks(self):
        """Set every edge back to PENDING; visited flags are kept"""
        self._check_alive("clear_export_marks")
        for edge in self.edges():
            edge.status = EdgeStatus.PENDING

    def destroy(self):
        """Release every edge and vertex; the graph is unusable afterwards"""
        self._check_alive("destroy")
        for vertex in self.vertices:
            for edge in vertex.adjacency:
                edge.graph = None
            vertex.adjacency.clear()
        self.vertices.clear()
        self._index.clear()
        self._destroyed = True
        logger.debug("graph %s: destroyed", self.id)

    def __iter__(self):
        self._check_alive("__iter__")
        return iter(self.vertices)

    def __contains__(self, vertex_id):
        return self.find_vertex(vertex_id) is not None

    def __repr__(self):
        if self._destroyed:
            return f"Graph({self.id}, destroyed)"
        return f"Graph({self.id}, vertices={self.vertex_count}, edges={self.edge_count})"

    def _check_alive(self, operation):
        if self._destroyed:
            raise InvalidArgumentError(f"{operation}: graph {self.id} was destroyed")

    def _resolve(self, vertex, operation):
        """Accept a Vertex of this graph or a vertex id"""
        if isinstance(vertex, Vertex):
            if (
                vertex.index >= len(self.vertices)
                or self.vertices[vertex.index] is not vertex
            ):
                raise InvalidArgumentError(
                    f"{operation}: vertex {vertex.id} does not belong to graph {self.id}"
                )
            return vertex
        if vertex is None:
            raise InvalidArgumentError(f"{operation}: vertex is None")
        found = self.find_vertex(vertex)
        if found is None:
            raise InvalidArgumentError(
                f"{operation}: vertex {vertex} not found in graph {self.id}"
            )
        return found


def create(graph_id=0):
    """Return an empty graph"""
    return Graph(graph_id)


def require_graph(graph, operation):
    """Raise InvalidArgumentError unless graph is a live Graph"""
    if not isinstance(graph, Graph):
        raise InvalidArgumentError(f"{operation}: invalid graph {graph!r}")
    if graph.destroyed:
        raise InvalidArgumentError(f"{operation}: graph {graph.id} was destroyed")
    return graph
