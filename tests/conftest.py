"""Pytest configuration and fixtures."""

import matplotlib

matplotlib.use("Agg")

import networkx as nx
import pytest


@pytest.fixture
def empty_graph():
    return nx.Graph()


@pytest.fixture
def single_vertex():
    graph = nx.Graph()
    graph.add_node("a")
    return graph


@pytest.fixture
def single_edge():
    graph = nx.Graph()
    graph.add_edge("a", "b")
    return graph


@pytest.fixture
def four_cycle():
    """4-cycle a-b-c-d-a."""
    graph = nx.Graph()
    graph.add_edges_from([("a", "b"), ("b", "c"), ("c", "d"), ("d", "a")])
    return graph


@pytest.fixture
def triangle_with_isolated():
    """Isolated vertex x next to the triangle p-q-r."""
    graph = nx.Graph()
    graph.add_node("x")
    graph.add_edges_from([("p", "q"), ("q", "r"), ("r", "p")])
    return graph


@pytest.fixture
def path_graph():
    return nx.path_graph(7)


@pytest.fixture
def star_graph():
    """Centre 0 with leaves 1..5."""
    return nx.star_graph(5)


@pytest.fixture
def random_graphs():
    """A handful of reproducible sparse and dense graphs."""
    return [nx.gnp_random_graph(n, p, seed=seed) for n, p, seed in [(6, 0.3, 1), (9, 0.4, 2), (12, 0.2, 3), (8, 0.8, 4)]]
