import matplotlib

matplotlib.use("Agg")

import pytest

from graph_tools import fixture_graph
from weighted_graph import Graph


@pytest.fixture
def graph():
    g = Graph(1)
    for vertex_id in (1, 2, 3):
        g.add_vertex(vertex_id)
    return g


@pytest.fixture
def fixture():
    """Four vertex graph whose minimum spanning tree weighs 4"""
    return fixture_graph()
