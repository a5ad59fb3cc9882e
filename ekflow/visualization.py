# ekflow/visualization.py
import networkx as nx
import numpy as np
import matplotlib.pyplot as plt
from datetime import datetime
from typing import Iterable, List, Optional
import os

from .graph import AugmentingPath, EdgeFlow
from .graph.flow import FlowResult


class Visualization:
    """Render flow networks and max-flow results as text reports and plots."""

    @staticmethod
    def format_capacity_matrix(name: str, capacity: np.ndarray) -> str:
        """Capacity matrix with a header line and five-character columns."""
        lines = [f"\nThe Graph {name} "]
        for row in capacity:
            lines.append("".join(f"{int(cell):5d}" for cell in row))
        return "\n".join(lines) + "\n"

    @staticmethod
    def format_path(path: AugmentingPath) -> str:
        vertices = " ".join(str(v) for v in path.vertices)
        return f"Path {vertices} (flow {path.flow})"

    @staticmethod
    def format_final_flow(edge_flow: EdgeFlow) -> str:
        return f"Flow {edge_flow.source}->{edge_flow.destination} ({edge_flow.flow})"

    def format_paths(self, paths: Iterable[AugmentingPath]) -> List[str]:
        return [self.format_path(path) for path in paths]

    def format_final_flows(self, flows: Iterable[EdgeFlow]) -> List[str]:
        return [self.format_final_flow(flow) for flow in flows]

    def format_report(self, result: FlowResult) -> str:
        """Full text report: capacities, paths in discovery order, total and final flows."""
        lines = [self.format_capacity_matrix(result.name, result.capacity)]
        lines.append("Paths found in order")
        lines.extend(self.format_paths(result.augmenting_paths))
        lines.append(f"\nTotal flow: {result.max_flow}")
        lines.append("\nFinal paths and flows")
        lines.extend(self.format_final_flows(result.final_flows))
        return "\n".join(lines) + "\n"

    def write_results(self, result: FlowResult, output_dir: str, execution_time: Optional[float] = None) -> str:
        """Write analysis results to a timestamped file and return its name."""
        self.ensure_output_directory(output_dir)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        stem = os.path.splitext(os.path.basename(result.name))[0]
        filename = os.path.join(output_dir, f"flow_results_{stem}_{timestamp}.txt")

        with open(filename, 'w') as f:
            f.write("Flow Computation Results\n")
            f.write("=" * 50 + "\n\n")

            f.write(f"Graph: {result.name}\n")
            f.write(f"Total Flow: {result.max_flow:,}\n")
            if execution_time is not None:
                f.write(f"Computation Time: {execution_time:.6f}s\n")
            f.write(f"Number of Augmenting Paths: {len(result.augmenting_paths)}\n")
            f.write(f"Number of Edges Carrying Flow: {len(result.final_flows)}\n")
            f.write(f"Minimum Cut Capacity: {result.cut_capacity:,}\n\n")

            f.write("Metrics:\n")
            f.write("-" * 50 + "\n")
            for key, value in result.metrics.items():
                f.write(f"{key}: {value}\n")
            f.write("-" * 50 + "\n\n")

            f.write(self.format_report(result))

            f.write("\nMinimum cut edges:\n")
            for u, v, cap in result.cut_edges:
                f.write(f"Cut {u}->{v} ({cap})\n")

        return filename

    def plot_flow_network(self, result: FlowResult, filename: str) -> str:
        """Draw the network with ``flow/capacity`` edge labels, highlighting edges that carry flow."""
        self.ensure_output_directory(os.path.dirname(filename) or ".")
        flows = {(f.source, f.destination): f.flow for f in result.final_flows}

        G = nx.DiGraph()
        G.add_nodes_from(range(len(result.capacity)))
        for u, v in zip(*np.nonzero(result.capacity)):
            u, v = int(u), int(v)
            G.add_edge(u, v, capacity=int(result.capacity[u, v]), flow=flows.get((u, v), 0))

        pos = nx.shell_layout(G)
        fig, ax = plt.subplots(figsize=(10, 8))
        node_colors = [
            'lightgreen' if node == result.source else 'salmon' if node == result.sink else 'lightblue'
            for node in G.nodes()
        ]
        edge_colors = ['red' if d['flow'] > 0 else 'lightgray' for _, _, d in G.edges(data=True)]
        nx.draw_networkx_nodes(G, pos, node_color=node_colors, node_size=600, ax=ax)
        nx.draw_networkx_labels(G, pos, font_size=10, ax=ax)
        nx.draw_networkx_edges(G, pos, edge_color=edge_colors, arrows=True,
                               connectionstyle='arc3,rad=0.1', ax=ax)
        edge_labels = {(u, v): f"{d['flow']}/{d['capacity']}" for u, v, d in G.edges(data=True)}
        nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=8, ax=ax)

        ax.set_title(f"{result.name}: max flow {result.max_flow}")
        ax.axis('off')
        fig.savefig(filename, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return filename

    @staticmethod
    def ensure_output_directory(directory: str):
        os.makedirs(directory, exist_ok=True)
