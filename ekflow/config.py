from dataclasses import dataclass
from typing import Mapping, Optional
import logging
import os

from dotenv import load_dotenv

GRAPH_TYPES = ('matrix', 'networkx')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass
class FlowConfig:
    graph_type: str = 'matrix'
    log_level: str = 'INFO'
    output_dir: Optional[str] = None
    plot: bool = False


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def load_config(env: Optional[Mapping[str, str]] = None) -> FlowConfig:
    """
    Load configuration from environment variables.

    Variables from a ``.env`` file are loaded first when ``env`` is not given.
    Recognised variables: ``EKFLOW_BACKEND``, ``EKFLOW_LOG_LEVEL``,
    ``EKFLOW_OUTPUT_DIR`` and ``EKFLOW_PLOT``.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    graph_type = env.get('EKFLOW_BACKEND', 'matrix').strip().lower()
    if graph_type not in GRAPH_TYPES:
        raise ValueError(f"EKFLOW_BACKEND must be one of {', '.join(GRAPH_TYPES)}, got {graph_type!r}")

    log_level = env.get('EKFLOW_LOG_LEVEL', 'INFO').strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"EKFLOW_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    output_dir = env.get('EKFLOW_OUTPUT_DIR') or None
    plot = _parse_bool(env.get('EKFLOW_PLOT', 'false'))

    return FlowConfig(graph_type=graph_type, log_level=log_level, output_dir=output_dir, plot=plot)


def configure_logging(level: str = 'INFO'):
    """Configure root logging the same way for every entry point."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logging.getLogger().setLevel(level)
