"""
Helpers around the graph model: networkx conversion, random test graphs,
MST verification against networkx and matplotlib plots
"""

import logging
import random

import matplotlib.pyplot as plt
import networkx as nx

from weighted_graph import Graph, require_graph

logger = logging.getLogger(__name__)

# Four vertices, MST weight 4: (1,2,1), (3,4,1), (2,3,2)
FIXTURE_EDGES = [(1, 2, 1), (2, 3, 2), (3, 4, 1), (1, 4, 4), (1, 3, 3)]


def fixture_graph(graph_id=0):
    """Small connected graph with a known minimum spanning tree"""
    graph = Graph(graph_id)
    for vertex_id in (1, 2, 3, 4):
        graph.add_vertex(vertex_id)
    for u, v, w in FIXTURE_EDGES:
        graph.add_undirected_edge(u, v, w)
    return graph


def from_edge_list(num_nodes, edges, graph_id=0):
    """Graph with vertices 0..num_nodes-1 and both directions of each (u, v, w)"""
    graph = Graph(graph_id)
    for vertex_id in range(num_nodes):
        graph.add_vertex(vertex_id)
    for u, v, w in edges:
        graph.add_undirected_edge(u, v, w)
    return graph


def create_random_graph(num_nodes=8, edge_probability=0.4, seed=42, graph_id=0):
    """Create a random connected graph with integer weights in [1, 10]"""
    rng = random.Random(seed)

    # Generate random graph using Erdos-Renyi model
    G = nx.erdos_renyi_graph(num_nodes, edge_probability, seed=seed)

    # Ensure the graph is connected
    attempts = 0
    while num_nodes > 0 and not nx.is_connected(G) and attempts < 100:
        G = nx.erdos_renyi_graph(
            num_nodes, edge_probability, seed=rng.randint(0, 10000)
        )
        attempts += 1

    if num_nodes > 0 and not nx.is_connected(G):
        # Force connectivity by linking consecutive components
        components = [sorted(c) for c in nx.connected_components(G)]
        for i in range(len(components) - 1):
            G.add_edge(components[i][0], components[i + 1][0])

    edges = []
    for u, v in sorted(G.edges()):
        edges.append((u, v, rng.randint(1, 10)))

    logger.debug(
        "random graph: %d nodes, %d edges, seed %s", num_nodes, len(edges), seed
    )
    return from_edge_list(num_nodes, edges, graph_id)


def to_networkx(graph):
    """Undirected networkx copy; a parallel pair keeps its lightest weight"""
    require_graph(graph, "to_networkx")
    G = nx.Graph()
    for vertex in graph.vertices:
        G.add_node(vertex.id)
    for u, v, w in graph.undirected_edges():
        if G.has_edge(u, v) and G[u][v]["weight"] <= w:
            continue
        G.add_edge(u, v, weight=w)
    return G


def from_networkx(G, graph_id=0, default_weight=1):
    """Graph from an undirected networkx graph with integer node labels"""
    graph = Graph(graph_id)
    for node in G.nodes():
        graph.add_vertex(node)
    for u, v, data in G.edges(data=True):
        graph.add_undirected_edge(u, v, int(data.get("weight", default_weight)))
    return graph


def verify_mst(graph, tree):
    """Compare an MST result with networkx.minimum_spanning_tree"""
    G = to_networkx(graph)
    nx_mst = nx.minimum_spanning_tree(G, weight="weight")
    nx_weight = sum(data["weight"] for _, _, data in nx_mst.edges(data=True))

    connected = G.number_of_nodes() > 0 and nx.is_connected(G)
    spanning = tree.is_spanning(graph) if connected else None
    is_correct = tree.total_weight == nx_weight and spanning is not False
    if not is_correct:
        logger.warning(
            "%s result weight %s differs from networkx weight %s",
            tree.algorithm,
            tree.total_weight,
            nx_weight,
        )

    return {
        "algorithm": tree.algorithm,
        "mst_weight": tree.total_weight,
        "networkx_weight": nx_weight,
        "edges_found": len(tree.edges),
        "edges_expected": nx_mst.number_of_edges(),
        "is_spanning": spanning,
        "is_correct": is_correct,
    }


def visualize(graph, tree, save_path="mst.png"):
    """Draw the graph and the tree side by side and save the figure"""
    G = to_networkx(graph)
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))

    pos = nx.spring_layout(G, seed=42)

    ax1.set_title("Original Graph", fontsize=14, fontweight="bold")
    nx.draw(
        G,
        pos,
        ax=ax1,
        with_labels=True,
        node_color="lightblue",
        node_size=700,
        font_size=12,
        font_weight="bold",
    )
    edge_labels = nx.get_edge_attributes(G, "weight")
    nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=ax1)

    ax2.set_title(
        f"MST ({tree.algorithm}, weight={tree.total_weight})",
        fontsize=14,
        fontweight="bold",
    )
    mst_graph = nx.Graph()
    mst_graph.add_nodes_from(G.nodes())
    for u, v, w in tree.edges:
        mst_graph.add_edge(u, v, weight=w)

    nx.draw(
        mst_graph,
        pos,
        ax=ax2,
        with_labels=True,
        node_color="lightgreen",
        node_size=700,
        font_size=12,
        font_weight="bold",
        edge_color="red",
        width=3,
    )
    if tree.edges:
        mst_labels = nx.get_edge_attributes(mst_graph, "weight")
        nx.draw_networkx_edge_labels(mst_graph, pos, mst_labels, ax=ax2)

    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("visualization saved to %s", save_path)
    return mst_graph
