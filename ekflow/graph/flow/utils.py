from typing import Dict, Iterable, List, Set, Tuple
from collections import deque

import numpy as np

from ..base import AugmentingPath, EdgeFlow

FlowDict = Dict[int, Dict[int, int]]


def flows_to_dict(edge_flows: Iterable[EdgeFlow]) -> FlowDict:
    """Convert ``(u, v, flow)`` triples into a nested ``{u: {v: flow}}`` dict."""
    flow_dict: FlowDict = {}
    for u, v, flow in edge_flows:
        if flow > 0:
            flow_dict.setdefault(u, {})[v] = flow
    return flow_dict


def find_flow_path(flow_dict: FlowDict, source: int, sink: int) -> Tuple[int, ...]:
    """
    Shortest source-to-sink path over edges that still carry flow.

    Successors are visited in ascending vertex order. Returns an empty tuple
    when the sink cannot be reached or ``source == sink``.
    """
    pred = {source: None}
    queue = deque([source])
    while queue and sink not in pred:
        v = queue.popleft()
        for w in sorted(flow_dict.get(v, {})):
            if flow_dict[v][w] > 0 and w not in pred:
                pred[w] = v
                queue.append(w)

    if source == sink or sink not in pred:
        return ()
    vertices = [sink]
    while vertices[-1] != source:
        vertices.append(pred[vertices[-1]])
    return tuple(reversed(vertices))


def drain_path(flow_dict: FlowDict, path: AugmentingPath) -> None:
    """Take ``path.flow`` off every edge of ``path``, dropping emptied entries."""
    for u, v in path.edges:
        flow_dict[u][v] -= path.flow
        if flow_dict[u][v] == 0:
            del flow_dict[u][v]
            if not flow_dict[u]:
                del flow_dict[u]


def verify_flow_conservation(flow_dict: FlowDict, source: int, sink: int) -> bool:
    """Verify flow conservation at intermediate nodes."""
    nodes = set(flow_dict)
    for flows in flow_dict.values():
        nodes.update(flows)

    for node in nodes:
        if node not in (source, sink):
            in_flow = sum(flows.get(node, 0) for flows in flow_dict.values())
            out_flow = sum(flow_dict.get(node, {}).values())
            if in_flow != out_flow:
                return False
    return True


def calculate_flow_metrics(paths: List[AugmentingPath],
                           edge_flows: Dict[Tuple[int, int], int]) -> Dict[str, float]:
    """Calculate flow metrics."""
    if not paths:
        return {
            'total_flow': 0,
            'num_paths': 0,
            'average_path_flow': 0,
            'max_path_flow': 0,
            'min_path_flow': 0,
            'unique_edges': 0,
            'average_edge_flow': 0,
        }

    flows = [path.flow for path in paths]
    total_flow = sum(flows)

    metrics = {
        'total_flow': total_flow,
        'num_paths': len(paths),
        'average_path_flow': total_flow / len(paths),
        'max_path_flow': max(flows),
        'min_path_flow': min(flows),
        'unique_edges': len(edge_flows),
        'average_edge_flow': sum(edge_flows.values()) / len(edge_flows) if edge_flows else 0,
    }

    # Path length statistics, counted in edges
    path_lengths = [len(path) for path in paths]
    metrics.update({
        'average_path_length': sum(path_lengths) / len(path_lengths),
        'max_path_length': max(path_lengths),
        'min_path_length': min(path_lengths),
    })

    return metrics


def residual_from_flows(capacity: np.ndarray, edge_flows: Iterable[EdgeFlow]) -> np.ndarray:
    """Rebuild the residual matrix implied by a capacity matrix and its edge flows."""
    residual = np.array(capacity, dtype=np.int64, copy=True)
    for u, v, flow in edge_flows:
        residual[u, v] -= flow
        residual[v, u] += flow
    return residual


def minimum_cut(capacity: np.ndarray, edge_flows: Iterable[EdgeFlow],
                source: int) -> Tuple[Set[int], List[Tuple[int, int, int]]]:
    """
    Find the minimum cut certified by a maximum flow.

    Returns:
        Tuple of (source side vertices, cut edges as ``(u, v, capacity)``).
        The cut edges are the original edges leaving the source side; after a
        maximum flow their capacities sum to the flow value.
    """
    residual = residual_from_flows(capacity, edge_flows)
    reachable = {source}
    queue = deque([source])
    while queue:
        v = queue.popleft()
        for w in np.flatnonzero(residual[v] > 0):
            w = int(w)
            if w not in reachable:
                reachable.add(w)
                queue.append(w)

    cut_edges = [
        (int(u), int(v), int(capacity[u, v]))
        for u, v in zip(*np.nonzero(capacity))
        if u in reachable and v not in reachable
    ]
    return reachable, cut_edges
