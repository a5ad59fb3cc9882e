from .graph_manager import GraphManager
from .data_ingestion import GraphSpec, load_graph, parse_graph_text
from .graph import FlowNetwork, NetworkXFlowNetwork, GraphCreator
from .visualization import Visualization

__all__ = [
    'GraphManager',
    'GraphSpec',
    'load_graph',
    'parse_graph_text',
    'FlowNetwork',
    'NetworkXFlowNetwork',
    'GraphCreator',
    'Visualization'
]
