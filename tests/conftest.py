# pyright: basic
from __future__ import annotations

import networkx as nx
import pytest

from netbrandes.tools import mock


@pytest.fixture
def primal_graph() -> nx.Graph:
    """
    Prepare an undirected street-like graph for testing.

    Returns
    -------
    nx.Graph
        An undirected `NetworkX` `Graph` with `length` edge attributes for `pytest` tests.

    """
    return mock.mock_graph()


@pytest.fixture
def directed_graph() -> nx.DiGraph:
    """
    Prepare a directed street-like graph for testing.

    Returns
    -------
    nx.DiGraph
        A `NetworkX` `DiGraph` with `length` edge attributes and a one-way loop for `pytest` tests.

    """
    return mock.mock_graph(directed=True)


@pytest.fixture
def diamond_graph() -> nx.Graph:
    r"""
    Generate a diamond shaped `NetworkX` `Graph` for testing or experimentation purposes.

    For manual checks of path counts and predecessors.

    Returns
    -------
    nx.Graph
        A `NetworkX` `Graph` with `length` edge attributes.

    Notes
    -----
    ```python
    #     3
    #    / \
    #   /   \
    #  /     \
    # 1-------2
    #  \     /
    #   \   /
    #    \ /
    #     0
    # all edges 100m
    ```

    """
    G_diamond = nx.Graph()
    G_diamond.add_nodes_from(["0", "1", "2", "3"])
    G_diamond.add_edges_from(
        [
            ("0", "1", {"length": 100}),
            ("0", "2", {"length": 100}),
            ("1", "2", {"length": 100}),
            ("1", "3", {"length": 100}),
            ("2", "3", {"length": 100}),
        ]
    )
    return G_diamond


@pytest.fixture
def path_graph() -> nx.Graph:
    """Undirected path A-B-C-D."""
    return mock.mock_path_graph(("A", "B", "C", "D"))


@pytest.fixture
def box_graph() -> nx.Graph:
    """A square with one side weighted heavily so that weighted and unweighted shortest paths differ."""
    G_box = nx.Graph()
    G_box.add_edges_from(
        [
            ("0", "1", {"length": 10}),
            ("1", "2", {"length": 10}),
            ("2", "3", {"length": 10}),
            ("3", "0", {"length": 100}),
        ]
    )
    return G_box
