from typing import Optional


class FlowNetworkError(Exception):
    """Base class for every error raised by ekflow."""


class InvalidVertexIndex(FlowNetworkError, IndexError):
    """A vertex index falls outside ``[0, vertex_count)``."""

    def __init__(self, index, vertex_count: int):
        self.index = index
        self.vertex_count = vertex_count
        super().__init__(
            f"Vertex index {index!r} is out of range for a network with {vertex_count} vertices "
            f"(valid range is 0..{vertex_count - 1})"
        )


class InvalidVertexCount(FlowNetworkError, ValueError):
    """A network was requested with a non-positive vertex count."""

    def __init__(self, vertex_count):
        self.vertex_count = vertex_count
        super().__init__(f"Vertex count must be a positive integer, got {vertex_count!r}")


class InvalidCapacity(FlowNetworkError, ValueError):
    """An edge capacity is negative, too large or not an integer."""

    def __init__(self, source: int, destination: int, capacity):
        self.source = source
        self.destination = destination
        self.capacity = capacity
        super().__init__(
            f"Capacity of edge {source}->{destination} must be an integer from 0 to 2**62 - 1, got {capacity!r}"
        )


class MisusedSequencing(FlowNetworkError, RuntimeError):
    """An operation was called out of order, e.g. applying a stale augmenting path."""


class GraphFormatError(FlowNetworkError, ValueError):
    """A graph description could not be parsed."""

    def __init__(self, message: str, source_name: Optional[str] = None, line: Optional[int] = None):
        self.source_name = source_name
        self.line = line
        location = ""
        if source_name is not None:
            location = f"{source_name}"
            if line is not None:
                location += f":{line}"
            location += ": "
        super().__init__(f"{location}{message}")
