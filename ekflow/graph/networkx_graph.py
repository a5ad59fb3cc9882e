import networkx as nx
from networkx.algorithms.flow import edmonds_karp
import time
from typing import List, Optional, Tuple
import logging

import numpy as np

from .base import AugmentingPath, BaseFlowNetwork, EdgeFlow
from .flow.decomposition import decompose_flow
from .flow.utils import verify_flow_conservation
from ..errors import MisusedSequencing

# Configure logging for the module
logger = logging.getLogger(__name__)


class NetworkXFlowNetwork(BaseFlowNetwork):
    """Reference flow network backed by ``networkx.DiGraph``.

    The maximum flow comes from networkx's own Edmonds-Karp implementation.
    networkx does not expose the augmentation sequence, so
    :attr:`augmenting_paths` is a decomposition of the final flow into
    source-to-sink paths: the same total, though not necessarily the same
    paths the matrix engine discovers.
    """

    def __init__(self, vertex_count: int, name: Optional[str] = None):
        super().__init__(vertex_count, name)
        self.g_nx = nx.DiGraph()
        self.g_nx.add_nodes_from(range(self.vertex_count))
        self._paths: Optional[List[AugmentingPath]] = None
        self._flow_dict = {}

    def add_edge(self, source: int, destination: int, capacity: int) -> None:
        source = self._check_vertex(source)
        destination = self._check_vertex(destination)
        capacity = self._check_capacity(source, destination, capacity)
        if self._paths is not None:
            raise MisusedSequencing(
                f"Cannot add edge {source}->{destination} to {self.name!r} after flow has been computed; "
                "call reset() first"
            )

        if capacity > 0:
            self.g_nx.add_edge(source, destination, capacity=capacity)
        elif self.g_nx.has_edge(source, destination):
            self.g_nx.remove_edge(source, destination)

    def compute_max_flow(self) -> int:
        """Compute maximum flow between source and sink with networkx Edmonds-Karp."""
        if self._paths is not None:
            return self.max_flow

        if self.source == self.sink or self.g_nx.in_degree(self.sink) == 0:
            logger.info(f"{self.name}: sink has no incoming edges, no flow is possible")
            self._paths = []
            self._flow_dict = {}
            return 0

        start = time.time()
        flow_value, flow_dict = nx.maximum_flow(
            self.g_nx, self.source, self.sink, flow_func=edmonds_karp
        )
        logger.debug(f"{self.name}: solver time {time.time() - start:.6f}s")

        # Convert values to integers and remove zero flows
        self._flow_dict = {
            u: {v: int(f) for v, f in flows.items() if f > 0}
            for u, flows in flow_dict.items()
        }
        self._flow_dict = {u: flows for u, flows in self._flow_dict.items() if flows}
        if not verify_flow_conservation(self._flow_dict, self.source, self.sink):
            logger.warning(f"{self.name}: networkx flow violates conservation")

        self._paths, _ = decompose_flow(self._flow_dict, self.source, self.sink)
        flow_value = int(flow_value)
        logger.info(f"{self.name}: max flow {flow_value} decomposed into {len(self._paths)} paths")
        return flow_value

    @property
    def augmenting_paths(self) -> List[AugmentingPath]:
        return list(self._paths or [])

    def final_flows(self) -> List[EdgeFlow]:
        return [
            EdgeFlow(u, v, self._flow_dict[u][v])
            for u in sorted(self._flow_dict)
            for v in sorted(self._flow_dict[u])
        ]

    def reset(self) -> None:
        self._paths = None
        self._flow_dict = {}

    def capacity_matrix(self) -> np.ndarray:
        matrix = nx.to_numpy_array(
            self.g_nx, nodelist=list(range(self.vertex_count)), weight='capacity', dtype=np.int64
        )
        matrix.setflags(write=False)
        return matrix

    def num_edges(self) -> int:
        return self.g_nx.number_of_edges()

    def has_edge(self, u: int, v: int) -> bool:
        return self.g_nx.has_edge(self._check_vertex(u), self._check_vertex(v))

    def get_edge_capacity(self, u: int, v: int) -> int:
        if self.has_edge(u, v):
            return self.g_nx[u][v]['capacity']
        return 0

    def get_edges(self) -> List[Tuple[int, int, int]]:
        return sorted((u, v, d['capacity']) for u, v, d in self.g_nx.edges(data=True))
