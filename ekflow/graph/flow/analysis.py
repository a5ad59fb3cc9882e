from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple
import logging

import numpy as np

from ..base import AugmentingPath, BaseFlowNetwork, EdgeFlow
from .utils import calculate_flow_metrics, flows_to_dict, minimum_cut, verify_flow_conservation

# Configure logging for the module
logger = logging.getLogger(__name__)


@dataclass
class FlowResult:
    """Everything a reporter needs about one max-flow computation."""
    name: str
    source: int
    sink: int
    max_flow: int
    augmenting_paths: List[AugmentingPath]
    final_flows: List[EdgeFlow]
    capacity: np.ndarray
    metrics: Dict[str, float] = field(default_factory=dict)
    cut_source_side: Set[int] = field(default_factory=set)
    cut_edges: List[Tuple[int, int, int]] = field(default_factory=list)
    conserved: bool = True

    @property
    def cut_capacity(self) -> int:
        return sum(cap for _, _, cap in self.cut_edges)


class NetworkFlowAnalysis:
    """Handle flow analysis for all flow network implementations."""

    def __init__(self, network: BaseFlowNetwork):
        self.network = network
        self.logger = logging.getLogger(__name__)

    def analyze_flow(self) -> FlowResult:
        """
        Compute the maximum flow and gather everything derived from it.

        Returns:
            FlowResult containing:
            - Flow value
            - Augmenting paths in discovery order
            - Final per-edge flows
            - Flow metrics
            - Minimum cut
        """
        network = self.network
        self.logger.info(f"Computing flow from {network.source} to {network.sink} on {network.name}")

        flow_value = network.compute_max_flow()
        paths = network.augmenting_paths
        final_flows = network.final_flows()
        flow_dict = flows_to_dict(final_flows)

        conserved = verify_flow_conservation(flow_dict, network.source, network.sink)
        if not conserved:
            self.logger.warning(f"{network.name}: final flows violate flow conservation")

        edge_flows = {(u, v): flow for u, v, flow in final_flows}
        metrics = calculate_flow_metrics(paths, edge_flows)

        capacity = network.capacity_matrix()
        source_side, cut_edges = minimum_cut(capacity, final_flows, network.source)
        cut_capacity = sum(cap for _, _, cap in cut_edges)
        if cut_capacity != flow_value:
            self.logger.warning(
                f"{network.name}: cut capacity {cut_capacity} differs from flow value {flow_value}"
            )

        return FlowResult(
            name=network.name,
            source=network.source,
            sink=network.sink,
            max_flow=flow_value,
            augmenting_paths=paths,
            final_flows=final_flows,
            capacity=capacity,
            metrics=metrics,
            cut_source_side=source_side,
            cut_edges=cut_edges,
            conserved=conserved,
        )
