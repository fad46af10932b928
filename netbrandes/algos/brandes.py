"""
Indexed shortest-path traversals for Brandes-style accumulation.

Both traversals take the arc map prepared by `NetworkStructure.arc_map` and return, for a single source node index:

- `stack`: node indices in the order in which they were settled, of which the first `stack_n` entries are populated.
Popping from the end of the stack visits descendants before their ancestors on the shortest-path DAG.
- `pred_nodes` and `pred_edges`: the predecessor node indices and the indices of the edges leading from them. The
records for node `w` start at `pred_offsets[w]` and span `pred_counts[w]` entries.
- `sigma`: the number of distinct shortest paths from the source to each node, with `sigma[src_idx] = 1`.

"""

from __future__ import annotations

import heapq

import numpy as np
import numpy.typing as npt
from numba import njit  # type: ignore

from netbrandes import config

BrandesResult = tuple[
    npt.NDArray[np.int64],
    int,
    npt.NDArray[np.int64],
    npt.NDArray[np.int64],
    npt.NDArray[np.int64],
    npt.NDArray[np.float64],
]


@njit(cache=True, fastmath=config.FASTMATH, nogil=True)
def unweighted_brandes(
    arc_offsets: npt.NDArray[np.int64],
    arc_targets: npt.NDArray[np.int64],
    arc_edges: npt.NDArray[np.int64],
    pred_offsets: npt.NDArray[np.int64],
    src_idx: int,
) -> BrandesResult:
    """
    Breadth-first traversal counting shortest paths by number of hops.
    """
    nodes_n = len(arc_offsets) - 1
    # in a breadth-first search the settled order is the queue order, so the stack doubles as the queue
    stack: npt.NDArray[np.int64] = np.empty(nodes_n, dtype=np.int64)
    hops: npt.NDArray[np.int64] = np.full(nodes_n, -1, dtype=np.int64)
    sigma: npt.NDArray[np.float64] = np.zeros(nodes_n, dtype=np.float64)
    pred_nodes: npt.NDArray[np.int64] = np.empty(pred_offsets[-1], dtype=np.int64)
    pred_edges: npt.NDArray[np.int64] = np.empty(pred_offsets[-1], dtype=np.int64)
    pred_counts: npt.NDArray[np.int64] = np.zeros(nodes_n, dtype=np.int64)
    sigma[src_idx] = 1.0
    hops[src_idx] = 0
    stack[0] = src_idx
    stack_n = 1
    head = 0
    while head < stack_n:
        nd_idx = stack[head]
        head += 1
        for arc_idx in range(arc_offsets[nd_idx], arc_offsets[nd_idx + 1]):
            nb_nd_idx = arc_targets[arc_idx]
            # don't follow self-loops
            if nb_nd_idx == nd_idx:
                continue
            # first discovery
            if hops[nb_nd_idx] < 0:
                hops[nb_nd_idx] = hops[nd_idx] + 1
                stack[stack_n] = nb_nd_idx
                stack_n += 1
            # shortest path via the current node
            if hops[nb_nd_idx] == hops[nd_idx] + 1:
                sigma[nb_nd_idx] += sigma[nd_idx]
                slot = pred_offsets[nb_nd_idx] + pred_counts[nb_nd_idx]
                pred_nodes[slot] = nd_idx
                pred_edges[slot] = arc_edges[arc_idx]
                pred_counts[nb_nd_idx] += 1

    return stack, stack_n, pred_nodes, pred_edges, pred_counts, sigma


@njit(cache=True, fastmath=config.FASTMATH, nogil=True)
def dijkstra_brandes(
    arc_offsets: npt.NDArray[np.int64],
    arc_targets: npt.NDArray[np.int64],
    arc_edges: npt.NDArray[np.int64],
    edge_weights: npt.NDArray[np.float64],
    pred_offsets: npt.NDArray[np.int64],
    src_idx: int,
) -> BrandesResult:
    """
    Dijkstra traversal counting shortest paths by summed edge weights.

    Equal-length paths are detected by exact comparison of the summed weights. Zero-weight edges between nodes at
    the same distance are only recorded when the upstream node settles first.
    """
    nodes_n = len(arc_offsets) - 1
    stack: npt.NDArray[np.int64] = np.empty(nodes_n, dtype=np.int64)
    seen_dist: npt.NDArray[np.float64] = np.full(nodes_n, np.inf, dtype=np.float64)
    settled: npt.NDArray[np.bool_] = np.full(nodes_n, False, dtype=np.bool_)
    sigma: npt.NDArray[np.float64] = np.zeros(nodes_n, dtype=np.float64)
    pred_nodes: npt.NDArray[np.int64] = np.empty(pred_offsets[-1], dtype=np.int64)
    pred_edges: npt.NDArray[np.int64] = np.empty(pred_offsets[-1], dtype=np.int64)
    pred_counts: npt.NDArray[np.int64] = np.zeros(nodes_n, dtype=np.int64)
    sigma[src_idx] = 1.0
    seen_dist[src_idx] = 0.0
    stack_n = 0
    # entries are (distance, insertion count, node index) - the count breaks ties in insertion order
    push_count = 0
    heap = [(0.0, push_count, src_idx)]
    while len(heap):
        dist, _push_count, nd_idx = heapq.heappop(heap)
        # stale entry for a node already settled via a shorter distance
        if settled[nd_idx]:
            continue
        settled[nd_idx] = True
        stack[stack_n] = nd_idx
        stack_n += 1
        for arc_idx in range(arc_offsets[nd_idx], arc_offsets[nd_idx + 1]):
            nb_nd_idx = arc_targets[arc_idx]
            if nb_nd_idx == nd_idx or settled[nb_nd_idx]:
                continue
            edge_idx = arc_edges[arc_idx]
            nb_dist = dist + edge_weights[edge_idx]
            if nb_dist < seen_dist[nb_nd_idx]:
                # shorter route: discard previously recorded predecessors
                seen_dist[nb_nd_idx] = nb_dist
                push_count += 1
                heapq.heappush(heap, (nb_dist, push_count, nb_nd_idx))
                sigma[nb_nd_idx] = sigma[nd_idx]
                slot = pred_offsets[nb_nd_idx]
                pred_nodes[slot] = nd_idx
                pred_edges[slot] = edge_idx
                pred_counts[nb_nd_idx] = 1
            elif nb_dist == seen_dist[nb_nd_idx]:
                sigma[nb_nd_idx] += sigma[nd_idx]
                slot = pred_offsets[nb_nd_idx] + pred_counts[nb_nd_idx]
                pred_nodes[slot] = nd_idx
                pred_edges[slot] = edge_idx
                pred_counts[nb_nd_idx] += 1

    return stack, stack_n, pred_nodes, pred_edges, pred_counts, sigma


@njit(cache=True, fastmath=config.FASTMATH, nogil=True)
def indexed_brandes(
    arc_offsets: npt.NDArray[np.int64],
    arc_targets: npt.NDArray[np.int64],
    arc_edges: npt.NDArray[np.int64],
    edge_weights: npt.NDArray[np.float64],
    pred_offsets: npt.NDArray[np.int64],
    src_idx: int,
    weighted: bool = False,
) -> BrandesResult:
    """
    Run the weighted or unweighted traversal from the source node index.
    """
    if weighted:
        return dijkstra_brandes(arc_offsets, arc_targets, arc_edges, edge_weights, pred_offsets, src_idx)
    return unweighted_brandes(arc_offsets, arc_targets, arc_edges, pred_offsets, src_idx)
