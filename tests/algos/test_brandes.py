# pyright: basic
from __future__ import annotations

import networkx as nx
import numpy as np

from netbrandes import structures
from netbrandes.algos import brandes
from netbrandes.tools import graphs


def _run(network_structure: structures.NetworkStructure, src_idx: int, weighted: bool):
    arc_offsets, arc_targets, arc_edges, pred_offsets = network_structure.arc_map()
    if weighted:
        return brandes.dijkstra_brandes(
            arc_offsets, arc_targets, arc_edges, network_structure.edges.weight, pred_offsets, src_idx
        )
    return brandes.unweighted_brandes(arc_offsets, arc_targets, arc_edges, pred_offsets, src_idx)


def _preds(pred_nodes, pred_edges, pred_counts, pred_offsets, nd_idx: int) -> dict[int, int]:
    """Map of predecessor node index to the edge index leading from it."""
    start = pred_offsets[nd_idx]
    return {
        int(pred_nodes[slot]): int(pred_edges[slot]) for slot in range(start, start + pred_counts[nd_idx])
    }


def test_unweighted_brandes_diamond(diamond_graph):
    network_structure = graphs.network_structure_from_nx(diamond_graph)
    pred_offsets = network_structure.arc_map()[3]
    node_keys = network_structure.node_keys
    src_idx = node_keys.index("0")
    stack, stack_n, pred_nodes, pred_edges, pred_counts, sigma = _run(network_structure, src_idx, False)
    assert stack_n == 4
    assert stack[0] == src_idx
    # "3" is two hops away via either "1" or "2"
    assert stack[3] == node_keys.index("3")
    assert sigma.tolist() == [1.0, 1.0, 1.0, 2.0]
    assert pred_counts[src_idx] == 0
    preds = _preds(pred_nodes, pred_edges, pred_counts, pred_offsets, node_keys.index("3"))
    assert set(preds) == {node_keys.index("1"), node_keys.index("2")}
    for pred_idx, edge_idx in preds.items():
        assert edge_idx == network_structure.edge_idx(pred_idx, node_keys.index("3"))
    # the edge between "1" and "2" is not on any shortest path from "0"
    preds = _preds(pred_nodes, pred_edges, pred_counts, pred_offsets, node_keys.index("2"))
    assert set(preds) == {src_idx}


def test_unweighted_brandes(primal_graph, directed_graph):
    for nx_graph in [primal_graph, directed_graph]:
        network_structure = graphs.network_structure_from_nx(nx_graph)
        pred_offsets = network_structure.arc_map()[3]
        node_keys = network_structure.node_keys
        for src_idx in range(network_structure.nodes_n):
            stack, stack_n, pred_nodes, pred_edges, pred_counts, sigma = _run(network_structure, src_idx, False)
            nx_hops = nx.single_source_shortest_path_length(nx_graph, node_keys[src_idx])
            # the stack contains exactly the reachable nodes, in non-decreasing distance order
            settled = [int(nd_idx) for nd_idx in stack[:stack_n]]
            assert {node_keys[nd_idx] for nd_idx in settled} == set(nx_hops)
            hops = [nx_hops[node_keys[nd_idx]] for nd_idx in settled]
            assert hops == sorted(hops)
            assert sigma[src_idx] == 1
            positions = {nd_idx: pos for pos, nd_idx in enumerate(settled)}
            for nd_idx in settled:
                if nd_idx == src_idx:
                    continue
                preds = _preds(pred_nodes, pred_edges, pred_counts, pred_offsets, nd_idx)
                # predecessors are exactly the neighbours one hop closer
                if nx_graph.is_directed():
                    candidates = nx_graph.predecessors(node_keys[nd_idx])
                else:
                    candidates = nx_graph.neighbors(node_keys[nd_idx])
                expected = {
                    node_keys.index(pred_key)
                    for pred_key in candidates
                    if pred_key in nx_hops and nx_hops[pred_key] == nx_hops[node_keys[nd_idx]] - 1
                }
                assert set(preds) == expected
                # predecessors settle first, so are popped later
                for pred_idx, edge_idx in preds.items():
                    assert positions[pred_idx] < positions[nd_idx]
                    assert edge_idx == network_structure.edge_idx(pred_idx, nd_idx)
                # path counts sum over predecessors
                assert sigma[nd_idx] >= 1
                assert sigma[nd_idx] == sum(sigma[pred_idx] for pred_idx in preds)


def test_dijkstra_brandes(primal_graph, directed_graph):
    for nx_graph in [primal_graph, directed_graph]:
        network_structure = graphs.network_structure_from_nx(nx_graph, edge_weight="length")
        pred_offsets = network_structure.arc_map()[3]
        node_keys = network_structure.node_keys
        for src_idx in range(network_structure.nodes_n):
            stack, stack_n, pred_nodes, pred_edges, pred_counts, sigma = _run(network_structure, src_idx, True)
            nx_dist = nx.single_source_dijkstra_path_length(nx_graph, node_keys[src_idx], weight="length")
            settled = [int(nd_idx) for nd_idx in stack[:stack_n]]
            assert {node_keys[nd_idx] for nd_idx in settled} == set(nx_dist)
            # settled order is by distance
            dists = [nx_dist[node_keys[nd_idx]] for nd_idx in settled]
            assert dists == sorted(dists)
            assert sigma[src_idx] == 1
            positions = {nd_idx: pos for pos, nd_idx in enumerate(settled)}
            for nd_idx in settled:
                if nd_idx == src_idx:
                    continue
                preds = _preds(pred_nodes, pred_edges, pred_counts, pred_offsets, nd_idx)
                assert len(preds) > 0
                for pred_idx, edge_idx in preds.items():
                    pred_key = node_keys[pred_idx]
                    edge_length = nx_graph[pred_key][node_keys[nd_idx]]["length"]
                    # predecessors lie on a shortest path
                    assert nx_dist[pred_key] + edge_length == nx_dist[node_keys[nd_idx]]
                    assert positions[pred_idx] < positions[nd_idx]
                    assert edge_idx == network_structure.edge_idx(pred_idx, nd_idx)
                assert sigma[nd_idx] == sum(sigma[pred_idx] for pred_idx in preds)


def test_dijkstra_brandes_box(box_graph):
    # the long side is skipped in favour of the three short sides
    network_structure = graphs.network_structure_from_nx(box_graph, edge_weight="length")
    pred_offsets = network_structure.arc_map()[3]
    node_keys = network_structure.node_keys
    src_idx = node_keys.index("0")
    stack, stack_n, pred_nodes, pred_edges, pred_counts, sigma = _run(network_structure, src_idx, True)
    assert [node_keys[nd_idx] for nd_idx in stack[:stack_n]] == ["0", "1", "2", "3"]
    preds = _preds(pred_nodes, pred_edges, pred_counts, pred_offsets, node_keys.index("3"))
    assert set(preds) == {node_keys.index("2")}
    assert np.all(sigma == 1)
    # whereas by hops "3" is adjacent
    stack, stack_n, pred_nodes, pred_edges, pred_counts, sigma = _run(network_structure, src_idx, False)
    preds = _preds(pred_nodes, pred_edges, pred_counts, pred_offsets, node_keys.index("3"))
    assert set(preds) == {src_idx}
    # "2" is reached two ways by hops
    assert sigma[node_keys.index("2")] == 2


def test_brandes_self_loops_and_isolation():
    nx_graph = nx.Graph()
    nx_graph.add_edges_from([("a", "a"), ("a", "b"), ("b", "c")])
    nx_graph.add_node("isolated")
    network_structure = graphs.network_structure_from_nx(nx_graph)
    node_keys = network_structure.node_keys
    for weighted in [False, True]:
        stack, stack_n, _pred_nodes, _pred_edges, pred_counts, sigma = _run(
            network_structure, node_keys.index("a"), weighted
        )
        assert stack_n == 3
        # the self-loop contributes no predecessor
        assert pred_counts[node_keys.index("a")] == 0
        assert sigma[node_keys.index("isolated")] == 0
        stack, stack_n, _pred_nodes, _pred_edges, pred_counts, sigma = _run(
            network_structure, node_keys.index("isolated"), weighted
        )
        assert stack_n == 1
        assert stack[0] == node_keys.index("isolated")


def test_indexed_brandes(primal_graph):
    # with unit weights the weighted traversal counts the same paths as the unweighted traversal
    network_structure = graphs.network_structure_from_nx(primal_graph)
    arc_offsets, arc_targets, arc_edges, pred_offsets = network_structure.arc_map()
    for src_idx in range(network_structure.nodes_n):
        unweighted = brandes.indexed_brandes(
            arc_offsets, arc_targets, arc_edges, network_structure.edges.weight, pred_offsets, src_idx, False
        )
        weighted = brandes.indexed_brandes(
            arc_offsets, arc_targets, arc_edges, network_structure.edges.weight, pred_offsets, src_idx, True
        )
        assert unweighted[1] == weighted[1]
        assert set(unweighted[0][: unweighted[1]].tolist()) == set(weighted[0][: weighted[1]].tolist())
        assert np.array_equal(unweighted[4], weighted[4])
        assert np.array_equal(unweighted[5], weighted[5])
