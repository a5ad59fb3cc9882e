from typing import Dict, List, Tuple

from ..base import AugmentingPath
from .utils import FlowDict, drain_path, find_flow_path


def decompose_flow(flow_dict: FlowDict, source: int,
                   sink: int) -> Tuple[List[AugmentingPath], Dict[Tuple[int, int], int]]:
    """
    Split a source-to-sink flow into paths, shortest first.

    Each path carries the smallest flow left on its edges, so every round
    empties at least one edge. Circulations that never reach the sink are
    not part of any path and are left out.

    Returns:
        Tuple of (paths, flow the paths put on each ``(u, v)`` edge).
    """
    remaining = {u: dict(flows) for u, flows in flow_dict.items() if flows}
    paths: List[AugmentingPath] = []
    edge_flows: Dict[Tuple[int, int], int] = {}

    vertices = find_flow_path(remaining, source, sink)
    while vertices:
        edges = list(zip(vertices[:-1], vertices[1:]))
        path = AugmentingPath(vertices, min(remaining[u][v] for u, v in edges))
        for edge in edges:
            edge_flows[edge] = edge_flows.get(edge, 0) + path.flow
        drain_path(remaining, path)
        paths.append(path)
        vertices = find_flow_path(remaining, source, sink)

    return paths, edge_flows


__all__ = ['decompose_flow']
