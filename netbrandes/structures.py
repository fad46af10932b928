from __future__ import annotations

from typing import Any, Hashable, Optional

import numpy as np
import numpy.typing as npt
from numba.core import types
from numba.experimental import jitclass  # type: ignore

edge_map_spec: list[tuple[str, Any]] = [
    ("count", types.int64),
    ("start", types.int64[:]),
    ("end", types.int64[:]),
    ("weight", types.float64[:]),
]


@jitclass(edge_map_spec)
class EdgeMap:
    """Edge Map for network."""

    count: int
    start: npt.NDArray[np.int64]
    end: npt.NDArray[np.int64]
    weight: npt.NDArray[np.float64]

    def __init__(self, edges_n: int):
        """Instance EdgeMap."""
        self.count = edges_n
        self.start = np.full(edges_n, -1, dtype=np.int64)
        self.end = np.full(edges_n, -1, dtype=np.int64)
        self.weight = np.full(edges_n, np.nan, dtype=np.float64)


class NetworkStructure:
    """
    Indexed network with dense node indices, an edge map, and an arc (adjacency) map for traversals.

    Nodes are addressed by their index `0..nodes_n - 1` and edges by their index `0..edges_n - 1`. The original
    identifiers are retained in `node_keys` and `edge_keys` so that results can be projected back onto the source
    graph. Undirected edges are stored once, in either orientation, and are traversable in both directions.

    """

    node_keys: list[Hashable]
    edge_keys: list[Hashable]
    edges: EdgeMap
    directed: bool
    next_edge_idx: int

    def __init__(self, nodes_n: int, edges_n: int, directed: bool = False):
        """Instance Network."""
        self.nodes_n = nodes_n
        self.node_keys = [None] * nodes_n
        self.edge_keys = [None] * edges_n
        self.edges = EdgeMap(edges_n)
        self.directed = directed
        self.next_edge_idx = 0
        self._edge_lookup: Optional[dict[tuple[int, int], int]] = None
        self._arc_map: Optional[tuple[npt.NDArray[np.int64], ...]] = None

    @property
    def edges_n(self) -> int:
        """Number of edges."""
        return self.edges.count

    def set_node(self, node_idx: int, node_key: Hashable) -> None:
        """Add a node to the network."""
        self.node_keys[node_idx] = node_key

    def set_edge(self, start: int, end: int, weight: float = 1.0, edge_key: Optional[Hashable] = None) -> int:
        """Add an edge to the network and return its index."""
        if self.next_edge_idx >= self.edges.count:
            raise ValueError(f"Edge map is full: the network was instanced with {self.edges.count} edges.")
        edge_idx = self.next_edge_idx
        self.edges.start[edge_idx] = start
        self.edges.end[edge_idx] = end
        self.edges.weight[edge_idx] = weight
        self.edge_keys[edge_idx] = (start, end) if edge_key is None else edge_key
        self.next_edge_idx += 1
        # derived maps are stale
        self._edge_lookup = None
        self._arc_map = None
        return edge_idx

    def _build_edge_lookup(self) -> dict[tuple[int, int], int]:
        lookup: dict[tuple[int, int], int] = {}
        for edge_idx in range(self.next_edge_idx):
            start = int(self.edges.start[edge_idx])
            end = int(self.edges.end[edge_idx])
            orientations = [(start, end)]
            if not self.directed and start != end:
                orientations.append((end, start))
            for pair in orientations:
                if pair in lookup:
                    raise ValueError(
                        f"Duplicate edge encountered between node indices {pair[0]} and {pair[1]}. "
                        "Only a single edge is permitted between each pair of nodes "
                        "(in each direction for directed networks)."
                    )
                lookup[pair] = edge_idx
        return lookup

    def edge_idx(self, start: int, end: int) -> int:
        """
        Find the index of the edge spanning the start and end node indices.

        For undirected networks the edge is found regardless of the orientation in which it was stored. Returns -1
        where no such edge exists.

        """
        if self._edge_lookup is None:
            self._edge_lookup = self._build_edge_lookup()
        return self._edge_lookup.get((start, end), -1)

    def validate(self) -> None:
        """Check the integrity of the network."""
        if len(self.node_keys) != self.nodes_n:
            raise ValueError("Mismatched node count and node keys.")
        if self.next_edge_idx != self.edges.count:
            raise ValueError(
                f"Expected {self.edges.count} edges but only {self.next_edge_idx} have been set on the edge map."
            )
        if not len(self.edges.start) == len(self.edges.end) == len(self.edges.weight) == self.edges.count:
            raise ValueError("Mismatched edge map array lengths.")
        if self.edges.count:
            if self.edges.start.min() < 0 or self.edges.start.max() >= self.nodes_n:
                raise ValueError("Missing or invalid start node index encountered.")
            if self.edges.end.min() < 0 or self.edges.end.max() >= self.nodes_n:
                raise ValueError("Missing or invalid end node index encountered.")
            if not np.all(np.isfinite(self.edges.weight)) or not np.all(self.edges.weight >= 0):
                raise ValueError(
                    "Invalid edge weight encountered. Should be finite number greater than or equal to zero."
                )
        # raises on duplicate edges, including both orientations of an undirected edge
        self._edge_lookup = self._build_edge_lookup()

    def arc_map(
        self,
    ) -> tuple[npt.NDArray[np.int64], npt.NDArray[np.int64], npt.NDArray[np.int64], npt.NDArray[np.int64]]:
        """
        Prepare the traversal arrays.

        Returns
        -------
        arc_offsets: ndarray[int]
            Per-node offsets into the arc arrays, of length `nodes_n + 1`. The out arcs for node `i` occupy
            `arc_offsets[i]` to `arc_offsets[i + 1]`.
        arc_targets: ndarray[int]
            The node index each arc leads to.
        arc_edges: ndarray[int]
            The index of the edge each arc traverses.
        pred_offsets: ndarray[int]
            Per-node offsets, of length `nodes_n + 1`, sized by each node's count of in arcs. Used for laying out
            predecessor records during traversals.

        """
        if self._arc_map is not None:
            return self._arc_map  # type: ignore
        edges_n = self.edges.count
        edge_idxs = np.arange(edges_n, dtype=np.int64)
        if self.directed:
            arc_sources = self.edges.start
            arc_targets = self.edges.end
            arc_edges = edge_idxs
        else:
            # each undirected edge can be walked in either direction
            arc_sources = np.concatenate((self.edges.start, self.edges.end))
            arc_targets = np.concatenate((self.edges.end, self.edges.start))
            arc_edges = np.concatenate((edge_idxs, edge_idxs))
        # stable sort keeps each node's arcs in edge order
        order = np.argsort(arc_sources, kind="stable")
        arc_offsets = np.zeros(self.nodes_n + 1, dtype=np.int64)
        arc_offsets[1:] = np.cumsum(np.bincount(arc_sources, minlength=self.nodes_n))
        pred_offsets = np.zeros(self.nodes_n + 1, dtype=np.int64)
        pred_offsets[1:] = np.cumsum(np.bincount(arc_targets, minlength=self.nodes_n))
        self._arc_map = (
            arc_offsets,
            arc_targets[order].astype(np.int64),
            arc_edges[order].astype(np.int64),
            pred_offsets,
        )
        return self._arc_map
