r"""
Betweenness centrality for nodes and edges of `networkX` graphs, computed with Brandes' algorithm.

Betweenness measures how often a node or an edge lies on the shortest paths between other pairs of nodes:

$$
C_{B}(v) = \sum_{s\neq{v}\neq{t}}\frac{\sigma_{st}(v)}{\sigma_{st}}
$$

where $\sigma_{st}$ is the number of shortest paths from $s$ to $t$ and $\sigma_{st}(v)$ the number of those passing
through $v$. Edge betweenness is the same sum taken over the shortest paths traversing an edge.

Two entry points are provided:

- [`betweenness_centrality`](#betweenness-centrality) for nodes;
- [`edge_betweenness_centrality`](#edge-betweenness-centrality) for edges.

Each returns a read-only mapping of values and has an `.assign` variant which writes the values to the graph's node
or edge attributes instead.

:::note
Shortest paths are counted by number of hops unless `edge_weight` is provided, in which case the edge weights are
summed. Weighted paths of exactly equal length are treated as ties. Edges with zero weight can produce ties between
nodes settled at the same distance: these are only credited in the order in which the nodes are settled.
:::

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping, Optional, Union

import numpy as np
import numpy.typing as npt
from numba_progress import ProgressBar

from netbrandes import config, structures
from netbrandes.algos import centrality
from netbrandes.tools import graphs

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class PathHeuristic(Enum):
    """Which shortest-path traversal is used to count paths."""

    UNWEIGHTED = "unweighted (breadth-first)"
    WEIGHTED = "weighted (dijkstra)"

    @classmethod
    def from_edge_weight(cls, edge_weight: graphs.EdgeWeight) -> PathHeuristic:
        """Select the traversal: weighted if an edge weight attribute or getter is given."""
        if edge_weight is None:
            return cls.UNWEIGHTED
        return cls.WEIGHTED


@dataclass(frozen=True)
class BetweennessOptions:
    """
    Options for betweenness centrality.

    Parameters
    ----------
    node_centrality_attribute: str
        The node attribute written to by `betweenness_centrality.assign`.
    edge_centrality_attribute: str
        The edge attribute written to by `edge_betweenness_centrality.assign`.
    edge_weight: str | Callable | None
        The edge attribute holding edge weights, or a function called with `(start, end, edge_data)` returning the
        weight. Shortest paths are counted by number of hops if `None`.
    normalized: bool
        Whether to normalise values by the number of node pairs.

    """

    node_centrality_attribute: str = "node_betweenness_centrality"
    edge_centrality_attribute: str = "edge_betweenness_centrality"
    edge_weight: graphs.EdgeWeight = None
    normalized: bool = True

    def __post_init__(self):
        for attr_name in ("node_centrality_attribute", "edge_centrality_attribute"):
            attr_key = getattr(self, attr_name)
            if not isinstance(attr_key, str) or not attr_key:
                raise ValueError(f"Please provide a non-empty string for {attr_name}.")
        if self.edge_weight is not None:
            if isinstance(self.edge_weight, str):
                if not self.edge_weight:
                    raise ValueError("Please provide a non-empty edge weight attribute name.")
            elif not callable(self.edge_weight):
                raise TypeError("The edge weight should be an attribute name or a function returning the weight.")
        if not isinstance(self.normalized, (bool, np.bool_)):
            raise TypeError(f"Expected a boolean for normalized but encountered {self.normalized}.")

    @property
    def heuristic(self) -> PathHeuristic:
        """The shortest-path traversal implied by the edge weight."""
        return PathHeuristic.from_edge_weight(self.edge_weight)


OptionsType = Union[BetweennessOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsType = None, **kwargs: Any) -> BetweennessOptions:
    """
    Resolve options from a `BetweennessOptions` instance, a mapping, or keyword arguments, but not a mix of these.

    Unspecified options take their defaults.
    """
    if options is not None and kwargs:
        raise ValueError("Please provide either an options instance or keyword options, but not both.")
    if isinstance(options, BetweennessOptions):
        return options
    if options is None:
        options = kwargs
    if not isinstance(options, Mapping):
        raise TypeError(f"Expected BetweennessOptions or a mapping of options but encountered {type(options)}.")
    known_keys = [field.name for field in fields(BetweennessOptions)]
    for key in options:
        if key not in known_keys:
            raise ValueError(f'Unknown betweenness option: {key}. Must be one of {", ".join(known_keys)}.')
    return BetweennessOptions(**options)


def _progress_bar(network_structure: structures.NetworkStructure) -> Optional[ProgressBar]:
    if config.QUIET_MODE:
        return None
    return ProgressBar(update_interval=0.25, notebook=False, total=network_structure.nodes_n)


def node_betweenness_from_structure(
    network_structure: structures.NetworkStructure,
    heuristic: PathHeuristic = PathHeuristic.UNWEIGHTED,
    normalized: bool = True,
) -> npt.NDArray[np.float64]:
    """
    Compute node betweenness directly from a `NetworkStructure`.

    Parameters
    ----------
    network_structure: structures.NetworkStructure
        A [`structures.NetworkStructure`](/structures#networkstructure). Best generated with the
        [`graphs.network_structure_from_nx`](/tools/graphs#network-structure-from-nx) method.
    heuristic: PathHeuristic
        Whether to count shortest paths by hops or by summed edge weights.
    normalized: bool
        Whether to normalise by the $(n-1)(n-2)$ ordered node pairs excluding each node.

    Returns
    -------
    ndarray[float]
        Betweenness per node index.

    """
    network_structure.validate()
    arc_offsets, arc_targets, arc_edges, pred_offsets = network_structure.arc_map()
    if not config.QUIET_MODE:
        logger.info(f"Computing node betweenness centrality using {heuristic.value} shortest paths.")
    progress_proxy = _progress_bar(network_structure)
    raw_centralities = centrality.node_betweenness(
        arc_offsets,
        arc_targets,
        arc_edges,
        network_structure.edges.weight,
        pred_offsets,
        weighted=heuristic is PathHeuristic.WEIGHTED,
        progress_proxy=progress_proxy,
    )
    if progress_proxy is not None:
        progress_proxy.close()
    scale = centrality.node_rescale_factor(network_structure.nodes_n, normalized, network_structure.directed)

    return centrality.rescale(raw_centralities, scale)


def edge_betweenness_from_structure(
    network_structure: structures.NetworkStructure,
    heuristic: PathHeuristic = PathHeuristic.UNWEIGHTED,
    normalized: bool = True,
) -> npt.NDArray[np.float64]:
    """
    Compute edge betweenness directly from a `NetworkStructure`.

    Parameters
    ----------
    network_structure: structures.NetworkStructure
        A [`structures.NetworkStructure`](/structures#networkstructure).
    heuristic: PathHeuristic
        Whether to count shortest paths by hops or by summed edge weights.
    normalized: bool
        Whether to normalise by the $n(n-1)$ ordered node pairs.

    Returns
    -------
    ndarray[float]
        Betweenness per edge index.

    """
    network_structure.validate()
    arc_offsets, arc_targets, arc_edges, pred_offsets = network_structure.arc_map()
    if not config.QUIET_MODE:
        logger.info(f"Computing edge betweenness centrality using {heuristic.value} shortest paths.")
    progress_proxy = _progress_bar(network_structure)
    raw_centralities = centrality.edge_betweenness(
        arc_offsets,
        arc_targets,
        arc_edges,
        network_structure.edges.weight,
        pred_offsets,
        weighted=heuristic is PathHeuristic.WEIGHTED,
        progress_proxy=progress_proxy,
    )
    if progress_proxy is not None:
        progress_proxy.close()
    scale = centrality.edge_rescale_factor(network_structure.nodes_n, normalized, network_structure.directed)

    return centrality.rescale(raw_centralities, scale)


def _node_betweenness(
    assign: bool, nx_graph: graphs.NxGraph, options: OptionsType, kwargs: dict[str, Any]
) -> Optional[Mapping[graphs.NodeKey, float]]:
    graphs.check_nx_graph(nx_graph)
    opts = resolve_options(options, **kwargs)
    network_structure = graphs.network_structure_from_nx(nx_graph, edge_weight=opts.edge_weight)
    centralities = node_betweenness_from_structure(network_structure, opts.heuristic, opts.normalized)
    if assign:
        graphs.nx_assign_node_values(nx_graph, network_structure, opts.node_centrality_attribute, centralities)
        return None
    return graphs.collect_node_values(network_structure, centralities)


def _edge_betweenness(
    assign: bool, nx_graph: graphs.NxGraph, options: OptionsType, kwargs: dict[str, Any]
) -> Optional[Mapping[graphs.EdgeKey, float]]:
    graphs.check_nx_graph(nx_graph)
    opts = resolve_options(options, **kwargs)
    network_structure = graphs.network_structure_from_nx(nx_graph, edge_weight=opts.edge_weight)
    centralities = edge_betweenness_from_structure(network_structure, opts.heuristic, opts.normalized)
    if assign:
        graphs.nx_assign_edge_values(nx_graph, network_structure, opts.edge_centrality_attribute, centralities)
        return None
    return graphs.collect_edge_values(network_structure, centralities)


def betweenness_centrality(
    nx_graph: graphs.NxGraph, options: OptionsType = None, **kwargs: Any
) -> Mapping[graphs.NodeKey, float]:
    r"""
    Compute node betweenness centrality.

    Parameters
    ----------
    nx_graph: Graph | DiGraph
        A `networkX` `Graph` (undirected) or `DiGraph` (directed).
    options: BetweennessOptions | dict
        Options, see [`BetweennessOptions`](#betweennessoptions). Alternatively, pass the options as keyword
        arguments.

    Returns
    -------
    Mapping
        A read-only mapping from node keys to betweenness centrality.

    Examples
    --------
    ```python
    import networkx as nx
    from netbrandes.metrics import betweenness

    G = nx.path_graph(["A", "B", "C", "D"])
    betweenness.betweenness_centrality(G, normalized=False)
    # {'A': 0.0, 'B': 2.0, 'C': 2.0, 'D': 0.0}
    # write to node attributes instead
    betweenness.betweenness_centrality.assign(G, node_centrality_attribute="betw")
    G.nodes["B"]["betw"]
    # 0.6666666666666666
    ```

    | normalized | directed | scale |
    | ---------- | -------- | ----- |
    | True       | either   | $$\frac{1}{(n-1)(n-2)}$$, none if $n \leq 2$ |
    | False      | False    | $$\frac{1}{2}$$ |
    | False      | True     | none |

    """
    return _node_betweenness(False, nx_graph, options, kwargs)  # type: ignore


def assign_betweenness_centrality(nx_graph: graphs.NxGraph, options: OptionsType = None, **kwargs: Any) -> None:
    """
    Compute node betweenness centrality and write it to the `node_centrality_attribute` of each node, in place.

    Takes the same parameters as [`betweenness_centrality`](#betweenness-centrality).
    """
    _node_betweenness(True, nx_graph, options, kwargs)


def edge_betweenness_centrality(
    nx_graph: graphs.NxGraph, options: OptionsType = None, **kwargs: Any
) -> Mapping[graphs.EdgeKey, float]:
    r"""
    Compute edge betweenness centrality.

    Parameters
    ----------
    nx_graph: Graph | DiGraph
        A `networkX` `Graph` (undirected) or `DiGraph` (directed).
    options: BetweennessOptions | dict
        Options, see [`BetweennessOptions`](#betweennessoptions). Alternatively, pass the options as keyword
        arguments.

    Returns
    -------
    Mapping
        A read-only mapping from `(start, end)` edge keys, as enumerated by `nx_graph.edges()`, to betweenness
        centrality. Every edge is present, including those on no shortest path.

    Notes
    -----
    | normalized | directed | scale |
    | ---------- | -------- | ----- |
    | True       | either   | $$\frac{1}{n(n-1)}$$, none if $n \leq 1$ |
    | False      | False    | $$\frac{1}{2}$$ |
    | False      | True     | none |

    """
    return _edge_betweenness(False, nx_graph, options, kwargs)  # type: ignore


def assign_edge_betweenness_centrality(nx_graph: graphs.NxGraph, options: OptionsType = None, **kwargs: Any) -> None:
    """
    Compute edge betweenness centrality and write it to the `edge_centrality_attribute` of each edge, in place.

    Takes the same parameters as [`edge_betweenness_centrality`](#edge-betweenness-centrality).
    """
    _edge_betweenness(True, nx_graph, options, kwargs)


betweenness_centrality.assign = assign_betweenness_centrality  # type: ignore
edge_betweenness_centrality.assign = assign_edge_betweenness_centrality  # type: ignore
