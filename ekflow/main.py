from typing import List, Optional
import argparse
import logging
import time
from pathlib import Path

from .config import GRAPH_TYPES, LOG_LEVELS, configure_logging, load_config
from .errors import FlowNetworkError
from .graph_manager import GraphManager

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / 'data'
DEFAULT_GRAPHS = [DATA_DIR / f"match{i}.txt" for i in range(4)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ekflow',
        description="Compute the maximum flow from vertex 0 to the last vertex with Edmonds-Karp."
    )
    parser.add_argument('graphs', nargs='*', help="Graph files (text description or .csv edge list)")
    parser.add_argument('--backend', choices=GRAPH_TYPES, help="Flow network implementation")
    parser.add_argument('--vertex-count', type=int, help="Vertex count for CSV edge lists")
    parser.add_argument('--output-dir', help="Write a result file per graph into this directory")
    parser.add_argument('--plot', action='store_true', help="Also save a plot per graph (needs --output-dir)")
    parser.add_argument('--log-level', choices=LOG_LEVELS, help="Logging level")
    return parser


def run_analysis(path: str, graph_type: str, vertex_count: Optional[int] = None,
                 output_dir: Optional[str] = None, plot: bool = False) -> GraphManager:
    """Load one graph, compute its max flow and print the report."""
    start_time = time.time()
    graph_manager = GraphManager(path, graph_type, vertex_count)
    logger.info(graph_manager.get_graph_info())
    result = graph_manager.analyze_flow()
    execution_time = time.time() - start_time

    print(graph_manager.report())
    logger.info(f"{result.name}: flow value {result.max_flow} in {execution_time:.4f} seconds")

    if output_dir:
        graph_manager.write_results(output_dir, execution_time)
        if plot:
            graph_manager.visualize_flow(output_dir)
    return graph_manager


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config()
    except ValueError as e:
        configure_logging('INFO')
        logger.error(f"Invalid configuration: {e}")
        return 1

    configure_logging(args.log_level or config.log_level)
    graph_type = args.backend or config.graph_type
    output_dir = args.output_dir or config.output_dir
    plot = args.plot or config.plot
    graphs = args.graphs or [str(path) for path in DEFAULT_GRAPHS]

    for path in graphs:
        try:
            run_analysis(path, graph_type, args.vertex_count, output_dir, plot)
        except (FlowNetworkError, OSError) as e:
            logger.error(f"Error analysing {path}: {e}")
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
