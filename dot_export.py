"""
Export a weighted graph as a Graphviz undirected edge list
"""

import logging

from graph_errors import ResourceUnavailableError
from weighted_graph import EdgeStatus, require_graph

logger = logging.getLogger(__name__)


def _pending_reciprocal(adjacent, vertex):
    """First edge of adjacent back to vertex that is not exported yet"""
    for edge in adjacent.adjacency:
        if edge.target == vertex.index and edge.status == EdgeStatus.PENDING:
            return edge
    return None


def iter_dot_lines(graph):
    """
    Yield the lines of the dot document for graph.

    Each undirected pair is emitted once: an edge is marked exported together
    with the first reciprocal edge on its target that is still pending, so a
    pair added twice gives two lines. An edge without a reciprocal is still
    emitted. Vertex visited flags are left alone.
    """
    require_graph(graph, "export_dot")
    graph.clear_export_marks()

    yield "graph {"
    for vertex in graph.vertices:
        for edge in vertex.adjacency:
            if edge.status == EdgeStatus.EXPORTED:
                continue

            edge.status = EdgeStatus.EXPORTED
            adjacent = graph.vertices[edge.target]

            reciprocal = _pending_reciprocal(adjacent, vertex)
            if reciprocal is not None:
                reciprocal.status = EdgeStatus.EXPORTED
            else:
                logger.debug(
                    "edge %s -> %s has no reciprocal", vertex.id, adjacent.id
                )

            yield f"\t{vertex.id} -- {adjacent.id} [label = {edge.weight}];"
    yield "}"


def render_dot(graph):
    """Return the dot document as a string"""
    return "\n".join(iter_dot_lines(graph)) + "\n"


def export_dot(graph, path):
    """Write graph to path in dot format"""
    require_graph(graph, "export_dot")
    if path is None:
        raise ResourceUnavailableError(path, "no path given")

    text = render_dot(graph)
    try:
        with open(path, "w") as f:
            f.write(text)
    except OSError as exc:
        raise ResourceUnavailableError(path, exc.strerror or str(exc)) from exc

    logger.info("graph %s exported to %s", graph.id, path)
    return path
