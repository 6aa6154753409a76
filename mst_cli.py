"""
Command line driver: build a graph, compute its minimum spanning tree,
export both as dot files and save the results
"""

import json
import logging
import os
import sys

from dot_export import export_dot
from graph_errors import GraphError, ResourceUnavailableError
from graph_tools import create_random_graph, fixture_graph, verify_mst, visualize
from mst import ALGORITHMS, minimum_spanning_tree
from weighted_graph import Graph

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level="WARNING"):
    """Configure the root logger once for the whole process"""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), None)
        if not isinstance(level, int):
            raise ValueError("invalid log level")
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Compute the minimum spanning tree of a weighted graph"
    )
    parser.add_argument(
        "--algorithm",
        choices=sorted(ALGORITHMS),
        default="kruskal",
        help="MST algorithm (default: kruskal)",
    )
    parser.add_argument(
        "--fixture",
        action="store_true",
        help="Use the built-in 4 vertex graph instead of a random one",
    )
    parser.add_argument(
        "--nodes", type=int, default=8, help="Number of nodes (default: 8)"
    )
    parser.add_argument(
        "--edge-prob", type=float, default=0.4, help="Edge probability (default: 0.4)"
    )
    parser.add_argument(
        "--seed", type=int, default=42, help="Random seed (default: 42)"
    )
    parser.add_argument(
        "--start",
        type=int,
        default=None,
        help="Start vertex for prim (default: first vertex)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="mst_output",
        help="Output directory (default: mst_output)",
    )
    parser.add_argument(
        "--no-plot", action="store_true", help="Skip the matplotlib figure"
    )
    parser.add_argument(
        "--no-verify", action="store_true", help="Skip the networkx cross-check"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG"
    )
    return parser


def print_graph_summary(graph):
    """Print summary of the graph"""
    print("\n" + "=" * 70)
    print("Graph Summary")
    print("=" * 70)
    print(f"Number of vertices: {graph.vertex_count}")
    print(f"Number of edges: {len(graph.undirected_edges())}")

    print("\nEdge list (with weights):")
    for u, v, w in graph.undirected_edges():
        print(f"  ({u}, {v}): weight = {w}")


def print_results(graph, tree):
    """Print MST results"""
    print("\n" + "=" * 70)
    print(f"MST Results ({tree.algorithm})")
    print("=" * 70)

    for u, v, w in tree.edges:
        print(f"  ({u}, {v}): weight = {w}")

    print(f"\nTotal MST weight: {tree.total_weight}")
    print(f"Number of edges: {len(tree.edges)}")
    print(f"Expected edges: {max(graph.vertex_count - 1, 0)}")

    if tree.is_spanning(graph):
        print("Spanning tree complete!")
    else:
        print("WARNING: edges do not form a spanning tree!")


def run(args):
    if args.fixture:
        graph = fixture_graph()
    else:
        graph = create_random_graph(args.nodes, args.edge_prob, args.seed)

    print_graph_summary(graph)

    options = {}
    if args.start is not None:
        if args.algorithm != "prim":
            logger.warning("--start only applies to prim, ignored")
        else:
            options["start"] = args.start

    tree_graph = Graph(graph.id + 1)
    tree = minimum_spanning_tree(
        graph, args.algorithm, output=tree_graph, **options
    )
    print_results(graph, tree)

    results = tree.to_dict()
    results["num_vertices"] = graph.vertex_count
    if not args.no_verify:
        check = verify_mst(graph, tree)
        print(f"NetworkX MST weight: {check['networkx_weight']}")
        print(f"Status: {'✓ CORRECT' if check['is_correct'] else '✗ INCORRECT'}")
        results["verification"] = check

    try:
        os.makedirs(args.output_dir, exist_ok=True)
    except OSError as exc:
        raise ResourceUnavailableError(args.output_dir, exc.strerror) from exc

    export_dot(graph, os.path.join(args.output_dir, "graph.dot"))
    export_dot(tree_graph, os.path.join(args.output_dir, "mst.dot"))

    output_file = os.path.join(args.output_dir, "mst_result.json")
    try:
        with open(output_file, "w") as f:
            json.dump(results, f, indent=2)
    except OSError as exc:
        raise ResourceUnavailableError(output_file, exc.strerror) from exc
    print(f"\nResults saved to: {output_file}")

    if not args.no_plot:
        output_image = os.path.join(args.output_dir, "mst_result.png")
        try:
            visualize(graph, tree, output_image)
        except OSError as exc:
            raise ResourceUnavailableError(output_image, exc.strerror) from exc
        print(f"Visualization saved to: {output_image}")

    print("=" * 70)

    tree_graph.destroy()
    graph.destroy()
    return results


def main(argv=None):
    """Entry point; returns the process exit status"""
    args = build_parser().parse_args(argv)
    try:
        configure_logging("DEBUG" if args.verbose else args.log_level)
    except ValueError:
        print(f"error: invalid log level {args.log_level!r}", file=sys.stderr)
        return 2

    try:
        run(args)
    except GraphError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
