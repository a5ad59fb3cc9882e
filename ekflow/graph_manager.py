from pathlib import Path
from typing import Optional, Union
import logging
import os

from .data_ingestion import GraphSpec, load_graph
from .graph.flow import FlowResult, NetworkFlowAnalysis
from .visualization import Visualization

logger = logging.getLogger(__name__)


class GraphManager:
    def __init__(self, data_source: Union[GraphSpec, str, Path], graph_type: str = 'matrix',
                 vertex_count: Optional[int] = None):
        """
        Build a flow network from a parsed graph or a graph file.

        Args:
            data_source: Either:
                - GraphSpec: an already parsed graph
                - str / Path: a text graph description or a ``.csv`` edge list
            graph_type: Flow network implementation ('matrix' or 'networkx')
            vertex_count: Vertex count for CSV edge lists (inferred when omitted)
        """
        self.graph_spec = self._initialize_data_source(data_source, vertex_count)
        self.graph_type = graph_type
        self.network = self.graph_spec.build(graph_type)
        self.flow_analysis = NetworkFlowAnalysis(self.network)
        self.visualization = Visualization()
        self.result: Optional[FlowResult] = None

    def _initialize_data_source(self, data_source, vertex_count: Optional[int]) -> GraphSpec:
        if isinstance(data_source, GraphSpec):
            return data_source
        if isinstance(data_source, (str, Path)):
            return load_graph(data_source, vertex_count)
        raise ValueError(f"Invalid data source: {data_source!r}")

    @classmethod
    def from_edges(cls, vertex_count: int, edges, name: str = '<edges>', graph_type: str = 'matrix'):
        """Build a manager from an in-memory ``(source, destination, capacity)`` sequence."""
        return cls(GraphSpec(name, vertex_count, [tuple(edge) for edge in edges]), graph_type)

    def analyze_flow(self) -> FlowResult:
        """Compute the maximum flow once and cache the result."""
        if self.result is None:
            self.result = self.flow_analysis.analyze_flow()
        return self.result

    def report(self) -> str:
        return self.visualization.format_report(self.analyze_flow())

    def write_results(self, output_dir: str, execution_time: Optional[float] = None) -> str:
        filename = self.visualization.write_results(self.analyze_flow(), output_dir, execution_time)
        logger.info(f"Results written to {filename}")
        return filename

    def visualize_flow(self, output_dir: str) -> str:
        """Save a plot of the network and its flows."""
        stem = os.path.splitext(os.path.basename(self.graph_spec.name))[0]
        filename = self.visualization.plot_flow_network(
            self.analyze_flow(), os.path.join(output_dir, f"{stem}_flow.png")
        )
        logger.info(f"Visualization saved to {filename}")
        return filename

    def get_graph_info(self) -> str:
        """Short description of the loaded network."""
        network = self.network
        return (
            f"Graph: {network.name}\n"
            f"Vertices: {network.num_vertices()} (source {network.source}, sink {network.sink})\n"
            f"Edges: {network.num_edges()}\n"
            f"Source out-capacity: {network.get_node_outflow_capacity(network.source)}\n"
            f"Sink in-capacity: {network.get_node_inflow_capacity(network.sink)}"
        )
