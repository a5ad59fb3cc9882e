from abc import abstractmethod
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from ..errors import InvalidCapacity, InvalidVertexCount, InvalidVertexIndex

# Largest edge capacity; an antiparallel pair still sums within int64
MAX_CAPACITY = int(np.iinfo(np.int64).max // 2)


@dataclass(frozen=True, eq=False)
class AugmentingPath:
    """A source-to-sink path in the residual graph and the flow it carries."""
    vertices: Tuple[int, ...]
    flow: int

    @property
    def edges(self) -> List[Tuple[int, int]]:
        return list(zip(self.vertices[:-1], self.vertices[1:]))

    def __len__(self) -> int:
        return len(self.vertices) - 1


class EdgeFlow(NamedTuple):
    source: int
    destination: int
    flow: int


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


class BaseFlowNetwork:
    """Abstract base class defining the interface for all flow network implementations.

    Vertices are the integers ``0 .. vertex_count - 1``. Vertex ``0`` is the
    source and vertex ``vertex_count - 1`` is the sink.
    """

    def __init__(self, vertex_count: int, name: Optional[str] = None):
        if not _is_integer(vertex_count) or vertex_count <= 0:
            raise InvalidVertexCount(vertex_count)
        self.vertex_count = int(vertex_count)
        self.name = name if name is not None else f"graph-{self.vertex_count}"

    @property
    def source(self) -> int:
        return 0

    @property
    def sink(self) -> int:
        return self.vertex_count - 1

    def _check_vertex(self, index) -> int:
        if not _is_integer(index) or not 0 <= index < self.vertex_count:
            raise InvalidVertexIndex(index, self.vertex_count)
        return int(index)

    def _check_capacity(self, source: int, destination: int, capacity) -> int:
        if not _is_integer(capacity) or not 0 <= capacity <= MAX_CAPACITY:
            raise InvalidCapacity(source, destination, capacity)
        return int(capacity)

    def num_vertices(self) -> int:
        """Return the total number of vertices in the network."""
        return self.vertex_count

    @abstractmethod
    def num_edges(self) -> int:
        """Return the number of ordered pairs with positive capacity."""
        pass

    @abstractmethod
    def add_edge(self, source: int, destination: int, capacity: int) -> None:
        """Set the capacity of ``source -> destination``. Last write wins."""
        pass

    @abstractmethod
    def has_edge(self, u: int, v: int) -> bool:
        """Check if an edge with positive capacity exists from u to v."""
        pass

    @abstractmethod
    def get_edge_capacity(self, u: int, v: int) -> int:
        """Get the original capacity of edge u -> v (0 when absent)."""
        pass

    @abstractmethod
    def get_edges(self) -> List[Tuple[int, int, int]]:
        """Return list of all ``(u, v, capacity)`` edges in row-major order."""
        pass

    @abstractmethod
    def capacity_matrix(self) -> np.ndarray:
        """Return a read-only ``vertex_count x vertex_count`` capacity matrix."""
        pass

    @abstractmethod
    def compute_max_flow(self) -> int:
        """Compute the maximum flow from source to sink."""
        pass

    @property
    @abstractmethod
    def augmenting_paths(self) -> List[AugmentingPath]:
        """Augmenting paths found so far, in discovery order."""
        pass

    @abstractmethod
    def final_flows(self) -> List[EdgeFlow]:
        """Flow carried on every edge with positive flow."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Discard all flow, keeping the capacities."""
        pass

    def get_node_outflow_capacity(self, vertex: int) -> int:
        """Total capacity of edges leaving ``vertex``."""
        vertex = self._check_vertex(vertex)
        return sum(cap for u, _, cap in self.get_edges() if u == vertex)

    def get_node_inflow_capacity(self, vertex: int) -> int:
        """Total capacity of edges entering ``vertex``."""
        vertex = self._check_vertex(vertex)
        return sum(cap for _, v, cap in self.get_edges() if v == vertex)

    def flow_dict(self) -> Dict[int, Dict[int, int]]:
        """Final flows as a nested ``{u: {v: flow}}`` dictionary."""
        flows: Dict[int, Dict[int, int]] = {}
        for u, v, flow in self.final_flows():
            flows.setdefault(u, {})[v] = flow
        return flows

    @property
    def max_flow(self) -> int:
        return sum(path.flow for path in self.augmenting_paths)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, vertices={self.vertex_count}, edges={self.num_edges()})"


class GraphCreator:
    @staticmethod
    def create_network(graph_type: str, vertex_count: int, name: Optional[str] = None) -> BaseFlowNetwork:
        """Factory method to create appropriate flow network implementation."""
        if graph_type == 'matrix':
            from .matrix_graph import FlowNetwork
            return FlowNetwork(vertex_count, name)
        elif graph_type == 'networkx':
            from .networkx_graph import NetworkXFlowNetwork
            return NetworkXFlowNetwork(vertex_count, name)
        else:
            raise ValueError(f"Unsupported graph type: {graph_type}")
