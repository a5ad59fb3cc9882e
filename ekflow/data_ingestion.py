import pandas as pd
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union
import logging

from .errors import FlowNetworkError, GraphFormatError
from .graph import BaseFlowNetwork, GraphCreator

logger = logging.getLogger(__name__)

EDGE_COLUMNS = ['source', 'destination', 'capacity']


@dataclass
class GraphSpec:
    """A parsed graph description: vertex count plus ``(source, destination, capacity)`` triples."""
    name: str
    vertex_count: int
    edges: List[Tuple[int, int, int]] = field(default_factory=list)

    def build(self, graph_type: str = 'matrix') -> BaseFlowNetwork:
        """
        Create a flow network and add every edge to it.

        Any invalid vertex index or capacity aborts assembly: the error is
        raised to the caller and no partially built network is returned.
        """
        network = GraphCreator.create_network(graph_type, self.vertex_count, self.name)
        for position, (source, destination, capacity) in enumerate(self.edges, start=1):
            try:
                network.add_edge(source, destination, capacity)
            except FlowNetworkError:
                logger.error(f"{self.name}: rejecting edge #{position} {source}->{destination} ({capacity})")
                raise
        logger.info(f"Built {network!r} using the {graph_type} backend")
        return network


def _tokens(text: str) -> Iterator[Tuple[str, int]]:
    for line_number, line in enumerate(text.splitlines(), start=1):
        for token in line.split():
            yield token, line_number


def _parse_int(token: str, line: int, name: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise GraphFormatError(f"expected an integer {what}, found {token!r}", name, line) from None


def parse_graph_text(text: str, name: str = '<string>') -> GraphSpec:
    """
    Parse a whitespace separated graph description.

    The first integer is the vertex count; every following group of three
    integers is one ``source destination capacity`` edge.

    Raises:
        GraphFormatError: on a missing or non-positive vertex count, a
            non-integer token, or a trailing incomplete edge.
    """
    tokens = _tokens(text)
    first = next(tokens, None)
    if first is None:
        raise GraphFormatError("missing vertex count", name)
    vertex_count = _parse_int(first[0], first[1], name, 'vertex count')
    if vertex_count <= 0:
        raise GraphFormatError(f"vertex count must be positive, got {vertex_count}", name, first[1])

    edges = []
    pending: List[int] = []
    start_line = first[1]
    for token, line in tokens:
        if not pending:
            start_line = line
        pending.append(_parse_int(token, line, name, EDGE_COLUMNS[len(pending)]))
        if len(pending) == 3:
            edges.append(tuple(pending))
            pending = []

    if pending:
        raise GraphFormatError(
            f"truncated edge: expected source, destination and capacity, found {len(pending)} value(s)",
            name, start_line
        )

    logger.debug(f"Parsed {name}: {vertex_count} vertices, {len(edges)} edges")
    return GraphSpec(name, vertex_count, edges)


def load_graph_file(path: Union[str, Path]) -> GraphSpec:
    """Read and parse a graph description file."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise GraphFormatError(f"not a text file: {e}", path.name) from e
    return parse_graph_text(text, path.name)



def load_edge_csv(path: Union[str, Path], vertex_count: Optional[int] = None) -> GraphSpec:
    """
    Read an edge list CSV with ``source,destination,capacity`` columns.

    When ``vertex_count`` is omitted it is one more than the largest vertex
    index mentioned.
    """
    path = Path(path)
    try:
        df_edges = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise GraphFormatError(f"error reading CSV file: {e}", path.name) from e

    missing = [column for column in EDGE_COLUMNS if column not in df_edges.columns]
    if missing:
        raise GraphFormatError(f"missing columns: {', '.join(missing)}", path.name)

    df_edges = df_edges[EDGE_COLUMNS]
    if df_edges.isna().any().any():
        row = int(df_edges.isna().any(axis=1).to_numpy().argmax())
        raise GraphFormatError("truncated edge: empty field", path.name, row + 2)
    for column in EDGE_COLUMNS:
        if not pd.api.types.is_integer_dtype(df_edges[column]):
            raise GraphFormatError(f"column {column!r} must contain integers", path.name)

    edges = [(int(u), int(v), int(c)) for u, v, c in df_edges.itertuples(index=False)]
    if vertex_count is None:
        if not edges:
            raise GraphFormatError("cannot infer vertex count from an empty edge list", path.name)
        vertex_count = int(max(df_edges['source'].max(), df_edges['destination'].max())) + 1

    return GraphSpec(path.name, vertex_count, edges)


def load_graph(path: Union[str, Path], vertex_count: Optional[int] = None) -> GraphSpec:
    """Load a graph from either a text description or a ``.csv`` edge list."""
    if Path(path).suffix.lower() == '.csv':
        return load_edge_csv(path, vertex_count)
    return load_graph_file(path)
