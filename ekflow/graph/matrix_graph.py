from collections import deque
from typing import List, Optional, Tuple
import logging

import numpy as np

from .base import AugmentingPath, BaseFlowNetwork, EdgeFlow
from ..errors import MisusedSequencing

# Configure logging for the module
logger = logging.getLogger(__name__)


class FlowNetwork(BaseFlowNetwork):
    """Edmonds-Karp maximum flow over a dense capacity matrix.

    ``capacity[i, j]`` holds the original capacity of edge ``i -> j`` and is
    only changed by :meth:`add_edge`. ``residual[i, j]`` starts equal to it and
    is only changed by :meth:`apply_augmenting_path`, which keeps
    ``residual[i, j] + residual[j, i] == capacity[i, j] + capacity[j, i]``.
    """

    def __init__(self, vertex_count: int, name: Optional[str] = None):
        super().__init__(vertex_count, name)
        shape = (self.vertex_count, self.vertex_count)
        self.capacity = np.zeros(shape, dtype=np.int64)
        self.residual = np.zeros(shape, dtype=np.int64)
        self._paths: List[AugmentingPath] = []
        # Path returned by the most recent search, until it is applied
        self._pending_path: Optional[AugmentingPath] = None

    def add_edge(self, source: int, destination: int, capacity: int) -> None:
        source = self._check_vertex(source)
        destination = self._check_vertex(destination)
        capacity = self._check_capacity(source, destination, capacity)
        if self._paths or self._pending_path is not None:
            raise MisusedSequencing(
                f"Cannot add edge {source}->{destination} to {self.name!r} once augmentation has started; "
                "call reset() first"
            )

        self.capacity[source, destination] = capacity
        self.residual[source, destination] = capacity
        logger.debug(f"{self.name}: edge {source}->{destination} capacity {capacity}")

    def find_augmenting_path(self, source: Optional[int] = None,
                             sink: Optional[int] = None) -> Optional[AugmentingPath]:
        """
        Breadth-first search for a shortest source-to-sink path in the residual graph.

        The search stops as soon as the sink is discovered. Neighbours are
        scanned in ascending vertex order, so the result is deterministic.

        Args:
            source: Start vertex (defaults to vertex 0)
            sink: Target vertex (defaults to the last vertex)

        Returns:
            The path with its bottleneck capacity, or None when the sink is
            unreachable.
        """
        source = self.source if source is None else self._check_vertex(source)
        sink = self.sink if sink is None else self._check_vertex(sink)
        self._pending_path = None

        visited = np.zeros(self.vertex_count, dtype=bool)
        pred = np.full(self.vertex_count, -1, dtype=np.int64)
        queue = deque([source])
        visited[source] = True

        while queue:
            v = queue.popleft()
            for w in np.flatnonzero((self.residual[v] > 0) & ~visited):
                w = int(w)
                visited[w] = True
                pred[w] = v
                if w == sink:
                    path = self._trace_path(pred, source, sink)
                    self._pending_path = path
                    return path
                queue.append(w)

        return None

    def _trace_path(self, pred: np.ndarray, source: int, sink: int) -> AugmentingPath:
        """Rebuild the path ending at sink by walking the predecessor array."""
        vertices = [sink]
        bottleneck = None
        current = sink
        while current != source:
            previous = int(pred[current])
            edge_residual = int(self.residual[previous, current])
            if bottleneck is None or edge_residual < bottleneck:
                bottleneck = edge_residual
            vertices.append(previous)
            current = previous
        vertices.reverse()
        return AugmentingPath(tuple(vertices), bottleneck)

    def apply_augmenting_path(self, path: AugmentingPath) -> int:
        """
        Push the bottleneck flow along a path returned by the last search.

        Forward residual capacity on every edge of the path is reduced by the
        bottleneck and the reverse residual capacity grows by the same amount.

        Returns:
            The flow pushed along the path.

        Raises:
            MisusedSequencing: if ``path`` is not the result of the immediately
                preceding successful :meth:`find_augmenting_path` call.
        """
        if path is None or path is not self._pending_path:
            raise MisusedSequencing(
                "apply_augmenting_path() requires the path returned by the immediately "
                "preceding successful find_augmenting_path() call"
            )
        self._pending_path = None

        edges = path.edges
        bottleneck = min(int(self.residual[u, v]) for u, v in edges)
        for u, v in edges:
            self.residual[u, v] -= bottleneck
            self.residual[v, u] += bottleneck

        self._paths.append(AugmentingPath(path.vertices, bottleneck))
        logger.debug(f"{self.name}: path {' '.join(map(str, path.vertices))} carries {bottleneck}")
        return bottleneck

    def augment(self) -> Optional[AugmentingPath]:
        """Find one augmenting path from source to sink and push flow along it."""
        path = self.find_augmenting_path()
        if path is None:
            return None
        self.apply_augmenting_path(path)
        return self._paths[-1]

    def compute_max_flow(self) -> int:
        """
        Augment along shortest paths until the sink is unreachable.

        Calling this again on an exhausted network performs no further
        augmentation and returns the same total.
        """
        iterations = 0
        while self.augment() is not None:
            iterations += 1

        total = self.max_flow
        logger.info(f"{self.name}: max flow {total} after {len(self._paths)} augmenting paths "
                    f"({iterations} in this run)")
        return total

    @property
    def augmenting_paths(self) -> List[AugmentingPath]:
        return list(self._paths)

    def final_flows(self) -> List[EdgeFlow]:
        """
        Net flow on every edge with positive capacity, in row-major order.

        For an edge ``v -> w`` without a reverse edge this is exactly
        ``residual[w, v]``. Edges carrying no flow are omitted.
        """
        flows = []
        for v, w in zip(*np.nonzero(self.capacity)):
            net = int(self.capacity[v, w] - self.residual[v, w])
            if net > 0:
                flows.append(EdgeFlow(int(v), int(w), net))
        return flows

    def reset(self) -> None:
        self.residual = self.capacity.copy()
        self._paths = []
        self._pending_path = None

    def residual_is_consistent(self) -> bool:
        """Check ``residual + residual.T == capacity + capacity.T`` and non-negativity."""
        return bool(
            np.array_equal(self.residual + self.residual.T, self.capacity + self.capacity.T)
            and (self.residual >= 0).all()
        )

    def capacity_matrix(self) -> np.ndarray:
        matrix = self.capacity.copy()
        matrix.setflags(write=False)
        return matrix

    def residual_matrix(self) -> np.ndarray:
        matrix = self.residual.copy()
        matrix.setflags(write=False)
        return matrix

    def num_edges(self) -> int:
        return int(np.count_nonzero(self.capacity))

    def has_edge(self, u: int, v: int) -> bool:
        return self.get_edge_capacity(u, v) > 0

    def get_edge_capacity(self, u: int, v: int) -> int:
        return int(self.capacity[self._check_vertex(u), self._check_vertex(v)])

    def get_edges(self) -> List[Tuple[int, int, int]]:
        return [(int(u), int(v), int(self.capacity[u, v])) for u, v in zip(*np.nonzero(self.capacity))]
