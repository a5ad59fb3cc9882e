from .base import MAX_CAPACITY, AugmentingPath, BaseFlowNetwork, EdgeFlow, GraphCreator
from .matrix_graph import FlowNetwork
from .networkx_graph import NetworkXFlowNetwork
from .flow.analysis import FlowResult, NetworkFlowAnalysis

__all__ = [
    'MAX_CAPACITY',
    'AugmentingPath',
    'BaseFlowNetwork',
    'EdgeFlow',
    'GraphCreator',
    'FlowNetwork',
    'NetworkXFlowNetwork',
    'FlowResult',
    'NetworkFlowAnalysis'
]
