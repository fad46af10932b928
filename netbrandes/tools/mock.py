"""
A collection of functions for the generation of mock graphs.

This module is intended for project development and writing code tests, but may otherwise be useful for demonstration
and utility purposes.
"""
from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable

import networkx as nx
import numpy as np

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# type hack until networkx supports type-hinting
NxGraph = Any

# node index, x, y
_MOCK_NODES: list[tuple[int, int, int]] = [
    (0, 700700, 5719700), (1, 700610, 5719780), (2, 700460, 5719700), (3, 700520, 5719820),
    (4, 700620, 5719905), (5, 700260, 5719700), (6, 700320, 5719850), (7, 700420, 5719880),
    (8, 700460, 5719980), (9, 700580, 5720030), (10, 700100, 5719810), (11, 700280, 5719980),
    (12, 700400, 5720030), (13, 700460, 5720130), (14, 700190, 5720050), (15, 700350, 5720200),
    (16, 700800, 5719750), (17, 700800, 5719920), (18, 700900, 5719820), (19, 700910, 5719690),
    (20, 700905, 5720080), (21, 701000, 5719870), (22, 701040, 5719660), (23, 701050, 5719760),
    (24, 701000, 5719980), (25, 701130, 5719950), (26, 701130, 5719805), (27, 701170, 5719700),
    (28, 701100, 5720200), (29, 701240, 5719990), (30, 701300, 5719760), (31, 700690, 5719590),
    (32, 700570, 5719530), (33, 700820, 5719500), (34, 700700, 5719480), (35, 700490, 5719440),
    (36, 700580, 5719360), (37, 700690, 5719370), (38, 700920, 5719330), (39, 700780, 5719300),
    (40, 700680, 5719200), (41, 700560, 5719280), (42, 700450, 5719300), (43, 700440, 5719150),
    (44, 700650, 5719080), (45, 700930, 5719110),
    # cul-de-sacs
    (46, 701015, 5719535), (47, 701100, 5719480), (48, 700917, 5719517),
    # isolated node
    (49, 700400, 5719550),
    # isolated edge
    (50, 700700, 5720100), (51, 700700, 5719900),
    # disconnected looping component
    (52, 700400, 5719650), (53, 700500, 5719550), (54, 700400, 5719450), (55, 700300, 5719550),
    # alternate route
    (56, 701300, 5719110),
]

_MOCK_EDGES: list[tuple[int, int]] = [
    (0, 1), (0, 16), (0, 31), (1, 2), (1, 4), (2, 3), (2, 5), (3, 4), (3, 7), (4, 9), (5, 6), (5, 10),
    (6, 7), (6, 11), (7, 8), (8, 9), (8, 12), (9, 13), (10, 14), (10, 43), (11, 12), (11, 14), (12, 13),
    (13, 15), (14, 15), (15, 28), (16, 17), (16, 19), (17, 18), (17, 20), (18, 19), (18, 21), (19, 22),
    (20, 24), (20, 28), (21, 23), (21, 24), (22, 23), (22, 27), (23, 26), (24, 25), (25, 26), (25, 29),
    (26, 27), (27, 30), (28, 29), (29, 30), (30, 45), (31, 32), (31, 33), (32, 34), (32, 35), (33, 34),
    (33, 38), (34, 37), (35, 36), (35, 42), (36, 37), (36, 41), (37, 39), (38, 39), (38, 45), (39, 40),
    (40, 41), (40, 44), (41, 42), (42, 43), (43, 44), (44, 45),
    # cul-de-sacs
    (22, 46), (46, 47), (46, 48),
    # isolated edge
    (50, 51),
    # disconnected looping component
    (52, 53), (53, 54), (54, 55), (55, 52),
    # alternate route
    (45, 56), (30, 56),
]


def mock_graph(directed: bool = False) -> NxGraph:
    """
    Generate a `NetworkX` street-like graph for testing or experimentation purposes.

    The graph includes cul-de-sacs, an isolated node, an isolated edge, and a disconnected looping component.

    Parameters
    ----------
    directed: bool
        If set to `True`, a `DiGraph` is returned with edges in both directions, except for the edges of the
        disconnected looping component, which run one way. By default False.

    Returns
    -------
    Graph | DiGraph
        A `NetworkX` graph with `x` and `y` node attributes and `length` edge attributes in metres.

    """
    nx_graph: NxGraph = nx.DiGraph() if directed else nx.Graph()
    for nd_key, x, y in _MOCK_NODES:
        nx_graph.add_node(nd_key, x=x, y=y)
    for start_nd_key, end_nd_key in _MOCK_EDGES:
        start_data = nx_graph.nodes[start_nd_key]
        end_data = nx_graph.nodes[end_nd_key]
        length = float(np.hypot(start_data["x"] - end_data["x"], start_data["y"] - end_data["y"]))
        nx_graph.add_edge(start_nd_key, end_nd_key, length=length)
        # one-way loop
        if directed and start_nd_key < 52:
            nx_graph.add_edge(end_nd_key, start_nd_key, length=length)

    return nx_graph


def mock_star_graph(leaves_n: int, directed: bool = False) -> NxGraph:
    """
    Generate a star graph with a centre node keyed `"centre"` and leaves keyed `0..leaves_n - 1`.

    Directed star graphs have edges running in both directions between the centre and each leaf.
    """
    if leaves_n < 0:
        raise ValueError("The number of leaves cannot be negative.")
    nx_graph: NxGraph = nx.DiGraph() if directed else nx.Graph()
    nx_graph.add_node("centre")
    for leaf_idx in range(leaves_n):
        nx_graph.add_edge("centre", leaf_idx)
        if directed:
            nx_graph.add_edge(leaf_idx, "centre")

    return nx_graph


def mock_path_graph(labels: Iterable[Hashable] = ("A", "B", "C", "D"), directed: bool = False) -> NxGraph:
    """Generate a path graph visiting the labels in order."""
    nx_graph: NxGraph = nx.DiGraph() if directed else nx.Graph()
    nx.add_path(nx_graph, list(labels))

    return nx_graph


def mock_tree_graph(nodes_n: int, random_seed: int = 0) -> NxGraph:
    """
    Generate a random undirected tree.

    Each node `i > 0` is attached to a parent drawn uniformly from the nodes `0..i - 1`.
    """
    rng = np.random.default_rng(seed=random_seed)
    nx_graph: NxGraph = nx.Graph()
    nx_graph.add_nodes_from(range(nodes_n))
    for nd_key in range(1, nodes_n):
        nx_graph.add_edge(int(rng.integers(0, nd_key)), nd_key)

    return nx_graph
