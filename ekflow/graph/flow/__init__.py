from .analysis import FlowResult, NetworkFlowAnalysis
from .decomposition import decompose_flow
from .utils import (
    calculate_flow_metrics,
    drain_path,
    find_flow_path,
    flows_to_dict,
    minimum_cut,
    residual_from_flows,
    verify_flow_conservation,
)

__all__ = [
    'FlowResult',
    'NetworkFlowAnalysis',
    'decompose_flow',
    'find_flow_path',
    'drain_path',
    'verify_flow_conservation',
    'calculate_flow_metrics',
    'flows_to_dict',
    'minimum_cut',
    'residual_from_flows',
]
