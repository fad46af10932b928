from __future__ import annotations

from typing import Optional

import numpy as np
import numpy.typing as npt
from numba import njit  # type: ignore

from netbrandes import config
from netbrandes.algos import brandes


@njit(cache=True, fastmath=config.FASTMATH, nogil=True)
def node_betweenness(
    arc_offsets: npt.NDArray[np.int64],
    arc_targets: npt.NDArray[np.int64],
    arc_edges: npt.NDArray[np.int64],
    edge_weights: npt.NDArray[np.float64],
    pred_offsets: npt.NDArray[np.int64],
    weighted: bool = False,
    progress_proxy=None,  # type: ignore
) -> npt.NDArray[np.float64]:
    """
    Unscaled node betweenness summed over every source node.

    Returns the raw dependency sums: each ordered source / target pair contributes once, so undirected pairs are
    counted from both ends.
    """
    nodes_n = len(arc_offsets) - 1
    # scratch dependencies - only entries reached from the current source are reset
    delta: npt.NDArray[np.float64] = np.zeros(nodes_n, dtype=np.float64)
    centralities: npt.NDArray[np.float64] = np.zeros(nodes_n, dtype=np.float64)
    for src_idx in range(nodes_n):
        # the progress bar is the only object reached from within the kernel
        if progress_proxy is not None:
            progress_proxy.update(1)
        stack, stack_n, pred_nodes, _pred_edges, pred_counts, sigma = brandes.indexed_brandes(
            arc_offsets,
            arc_targets,
            arc_edges,
            edge_weights,
            pred_offsets,
            src_idx,
            weighted,
        )
        for stack_idx in range(stack_n):
            delta[stack[stack_idx]] = 0.0
        # pop from the end: descendants before ancestors
        while stack_n > 0:
            stack_n -= 1
            to_idx = stack[stack_n]
            coefficient = (1.0 + delta[to_idx]) / sigma[to_idx]
            pred_start = pred_offsets[to_idx]
            for slot in range(pred_start, pred_start + pred_counts[to_idx]):
                pred_idx = pred_nodes[slot]
                delta[pred_idx] += sigma[pred_idx] * coefficient
            if to_idx != src_idx:
                centralities[to_idx] += delta[to_idx]

    return centralities


@njit(cache=True, fastmath=config.FASTMATH, nogil=True)
def edge_betweenness(
    arc_offsets: npt.NDArray[np.int64],
    arc_targets: npt.NDArray[np.int64],
    arc_edges: npt.NDArray[np.int64],
    edge_weights: npt.NDArray[np.float64],
    pred_offsets: npt.NDArray[np.int64],
    weighted: bool = False,
    progress_proxy=None,  # type: ignore
) -> npt.NDArray[np.float64]:
    """
    Unscaled edge betweenness summed over every source node.

    Each dependency is credited to the edge traversed from the predecessor to its successor. Edges not on any
    shortest path remain at zero.
    """
    nodes_n = len(arc_offsets) - 1
    edges_n = len(edge_weights)
    delta: npt.NDArray[np.float64] = np.zeros(nodes_n, dtype=np.float64)
    edge_centralities: npt.NDArray[np.float64] = np.zeros(edges_n, dtype=np.float64)
    for src_idx in range(nodes_n):
        if progress_proxy is not None:
            progress_proxy.update(1)
        stack, stack_n, pred_nodes, pred_edges, pred_counts, sigma = brandes.indexed_brandes(
            arc_offsets,
            arc_targets,
            arc_edges,
            edge_weights,
            pred_offsets,
            src_idx,
            weighted,
        )
        for stack_idx in range(stack_n):
            delta[stack[stack_idx]] = 0.0
        while stack_n > 0:
            stack_n -= 1
            to_idx = stack[stack_n]
            coefficient = (1.0 + delta[to_idx]) / sigma[to_idx]
            pred_start = pred_offsets[to_idx]
            for slot in range(pred_start, pred_start + pred_counts[to_idx]):
                pred_idx = pred_nodes[slot]
                contribution = sigma[pred_idx] * coefficient
                # the traversal recorded which edge (in whichever stored orientation) carried the arc
                edge_centralities[pred_edges[slot]] += contribution
                delta[pred_idx] += contribution

    return edge_centralities


def node_rescale_factor(nodes_n: int, normalized: bool, directed: bool) -> Optional[float]:
    """
    Scale factor for raw node betweenness sums, or `None` where the sums are left as they are.

    Normalised values are divided by the $(n-1)(n-2)$ ordered pairs excluding the node itself. Raw values for
    undirected networks are halved because each pair is counted from both ends.
    """
    if normalized:
        if nodes_n <= 2:
            return None
        return 1 / ((nodes_n - 1) * (nodes_n - 2))
    if not directed:
        return 0.5
    return None


def edge_rescale_factor(nodes_n: int, normalized: bool, directed: bool) -> Optional[float]:
    """
    Scale factor for raw edge betweenness sums, or `None` where the sums are left as they are.

    Normalised values are divided by the $n(n-1)$ ordered pairs.
    """
    if normalized:
        if nodes_n <= 1:
            return None
        return 1 / (nodes_n * (nodes_n - 1))
    if not directed:
        return 0.5
    return None


def rescale(values: npt.NDArray[np.float64], scale: Optional[float]) -> npt.NDArray[np.float64]:
    """Apply a scale factor, if any, to every entry."""
    if scale is None:
        return values
    return values * scale
