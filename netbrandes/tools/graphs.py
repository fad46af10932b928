"""
Convenience functions for converting `networkX` graphs to `netbrandes` data structures, and for writing computed
values back.

Note that the `netbrandes` network data structures can be created and manipulated directly, if so desired.

"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Hashable, Mapping, Optional, Union

import networkx as nx
import numpy as np
import numpy.typing as npt
from tqdm import tqdm

from netbrandes import config, structures
from netbrandes.errors import InvalidGraphError, MissingWeightError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# define types
# type hack until networkx supports type-hinting
NxGraph = Any
NodeKey = Hashable
EdgeKey = tuple[NodeKey, NodeKey]
EdgeData = dict[str, Any]
EdgeWeightGetter = Callable[[NodeKey, NodeKey, EdgeData], float]
EdgeWeight = Union[str, EdgeWeightGetter, None]


def check_nx_graph(nx_graph: NxGraph) -> None:
    """
    Check that a graph is a `networkX` `Graph` or `DiGraph`.

    Multigraphs are rejected because edges must be addressable by their start and end nodes.

    Raises
    ------
    InvalidGraphError
        If the graph is not a usable `networkX` graph.

    """
    if not isinstance(nx_graph, nx.Graph):
        raise InvalidGraphError(
            f"Expected a networkX Graph or DiGraph but encountered {type(nx_graph).__name__}."
        )
    if nx_graph.is_multigraph():
        raise InvalidGraphError(
            "Multigraphs are not supported because edges must be unique for each pair of nodes. "
            "Consider converting to a networkX Graph or DiGraph."
        )


def _resolve_weight(start_nd_key: NodeKey, end_nd_key: NodeKey, edge_data: EdgeData, edge_weight: EdgeWeight) -> float:
    """Resolve the weight for an edge from an attribute key or getter function."""
    if edge_weight is None:
        return 1.0
    if callable(edge_weight):
        weight = float(edge_weight(start_nd_key, end_nd_key, edge_data))
    else:
        if edge_weight not in edge_data:
            raise MissingWeightError(start_nd_key, end_nd_key, edge_weight)
        weight = float(edge_data[edge_weight])
    if not np.isfinite(weight) or weight < 0:
        raise ValueError(
            f"Weight {weight} for edge {start_nd_key}-{end_nd_key} must be finite and greater than or equal to zero."
        )
    return weight


def network_structure_from_nx(nx_graph: NxGraph, edge_weight: EdgeWeight = None) -> structures.NetworkStructure:
    """
    Transpose a `networkX` `Graph` or `DiGraph` into a `NetworkStructure` for use by `netbrandes`.

    Parameters
    ----------
    nx_graph: Graph | DiGraph
        A `networkX` `Graph` (undirected) or `DiGraph` (directed).
    edge_weight: str | Callable | None
        The edge attribute from which to read weights, or a function called with `(start, end, edge_data)`
        returning the weight. All weights are set to 1 if not provided.

    Returns
    -------
    network_structure: structures.NetworkStructure
        A [`structures.NetworkStructure`](/structures#networkstructure) instance. Node indices follow the graph's
        node iteration order and edge indices follow its edge iteration order.

    """
    check_nx_graph(nx_graph)
    if not config.QUIET_MODE:
        logger.info("Preparing node and edge arrays from networkX graph.")
    nodes_n: int = nx_graph.number_of_nodes()
    edges_n: int = nx_graph.number_of_edges()
    network_structure = structures.NetworkStructure(nodes_n, edges_n, directed=nx_graph.is_directed())
    node_idxs: dict[NodeKey, int] = {}
    nd_key: NodeKey
    for node_idx, nd_key in enumerate(tqdm(nx_graph.nodes(), disable=config.QUIET_MODE)):
        node_idxs[nd_key] = node_idx
        network_structure.set_node(node_idx, nd_key)
    start_nd_key: NodeKey
    end_nd_key: NodeKey
    edge_data: EdgeData
    for start_nd_key, end_nd_key, edge_data in tqdm(  # type: ignore
        nx_graph.edges(data=True), disable=config.QUIET_MODE
    ):
        weight = _resolve_weight(start_nd_key, end_nd_key, edge_data, edge_weight)
        network_structure.set_edge(
            node_idxs[start_nd_key],
            node_idxs[end_nd_key],
            weight,
            edge_key=(start_nd_key, end_nd_key),
        )
    network_structure.validate()

    return network_structure


def collect_node_values(
    network_structure: structures.NetworkStructure, values: npt.NDArray[np.float64]
) -> Mapping[NodeKey, float]:
    """Map node keys to values, in node index order, as a read-only mapping."""
    if len(values) != network_structure.nodes_n:
        raise ValueError(f"Expected {network_structure.nodes_n} node values but encountered {len(values)}.")
    return MappingProxyType({nd_key: float(val) for nd_key, val in zip(network_structure.node_keys, values)})


def collect_edge_values(
    network_structure: structures.NetworkStructure, values: npt.NDArray[np.float64]
) -> Mapping[EdgeKey, float]:
    """Map `(start, end)` edge keys to values, in edge index order, as a read-only mapping."""
    if len(values) != network_structure.edges_n:
        raise ValueError(f"Expected {network_structure.edges_n} edge values but encountered {len(values)}.")
    return MappingProxyType({edge_key: float(val) for edge_key, val in zip(network_structure.edge_keys, values)})


def nx_assign_node_values(
    nx_graph: NxGraph,
    network_structure: structures.NetworkStructure,
    attr_key: str,
    values: npt.NDArray[np.float64],
) -> None:
    """
    Write node values to the `networkX` graph's node attributes, in place.

    Parameters
    ----------
    nx_graph: Graph | DiGraph
        The `networkX` graph from which the `network_structure` was prepared.
    network_structure: structures.NetworkStructure
        The network structure whose node indices correspond to `values`.
    attr_key: str
        The node attribute to which values are written.
    values: ndarray[float]
        One value per node index.

    """
    node_values = collect_node_values(network_structure, values)
    if not config.QUIET_MODE:
        logger.info(f'Assigning node values to the "{attr_key}" attribute.')
    for nd_key, val in tqdm(node_values.items(), disable=config.QUIET_MODE):
        nx_graph.nodes[nd_key][attr_key] = val


def nx_assign_edge_values(
    nx_graph: NxGraph,
    network_structure: structures.NetworkStructure,
    attr_key: str,
    values: npt.NDArray[np.float64],
) -> None:
    """
    Write edge values to the `networkX` graph's edge attributes, in place.

    Parameters
    ----------
    nx_graph: Graph | DiGraph
        The `networkX` graph from which the `network_structure` was prepared.
    network_structure: structures.NetworkStructure
        The network structure whose edge indices correspond to `values`.
    attr_key: str
        The edge attribute to which values are written.
    values: ndarray[float]
        One value per edge index.

    """
    edge_values = collect_edge_values(network_structure, values)
    if not config.QUIET_MODE:
        logger.info(f'Assigning edge values to the "{attr_key}" attribute.')
    for (start_nd_key, end_nd_key), val in tqdm(edge_values.items(), disable=config.QUIET_MODE):
        nx_graph.edges[start_nd_key, end_nd_key][attr_key] = val


def nx_from_network_structure(
    network_structure: structures.NetworkStructure, weight_key: Optional[str] = "weight"
) -> NxGraph:
    """
    Rebuild a `networkX` `Graph` or `DiGraph` from a `NetworkStructure`.

    Parameters
    ----------
    network_structure: structures.NetworkStructure
        The network structure to convert.
    weight_key: str | None
        The edge attribute to which edge weights are written. Weights are omitted if `None`.

    Returns
    -------
    nx_graph: Graph | DiGraph
        A `DiGraph` if the network structure is directed, else a `Graph`, keyed by the original node keys.

    """
    network_structure.validate()
    if not config.QUIET_MODE:
        logger.info("Populating node and edge data to a networkX graph.")
    nx_graph: NxGraph = nx.DiGraph() if network_structure.directed else nx.Graph()
    nx_graph.add_nodes_from(network_structure.node_keys)
    for edge_idx in tqdm(range(network_structure.edges_n), disable=config.QUIET_MODE):
        start_nd_key = network_structure.node_keys[network_structure.edges.start[edge_idx]]
        end_nd_key = network_structure.node_keys[network_structure.edges.end[edge_idx]]
        if weight_key is None:
            nx_graph.add_edge(start_nd_key, end_nd_key)
        else:
            nx_graph.add_edge(start_nd_key, end_nd_key, **{weight_key: float(network_structure.edges.weight[edge_idx])})

    return nx_graph
