"""
Map Service Errors

Error taxonomy shared by the graph store, the path engine and the HTTP layer.
Every error carries an ErrorKind so the transport can map it to a status code
without inspecting messages.
"""

from enum import Enum
from typing import Literal


class ErrorKind(str, Enum):
    """Kinds of failure a map operation can report"""
    MAP_NOT_SET = "MapNotSet"
    INVALID_GRAPH = "InvalidGraph"
    NODE_NOT_FOUND = "NodeNotFound"
    NO_PATH_EXISTS = "NoPathExists"
    UNEXPECTED_FAILURE = "UnexpectedFailure"


class MapServiceError(Exception):
    """Base class for all map service errors."""

    kind: ErrorKind = ErrorKind.UNEXPECTED_FAILURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MapNotSetError(MapServiceError):
    """Raised when an operation needs a stored map and none has been set."""

    kind = ErrorKind.MAP_NOT_SET

    def __init__(self, message: str = "Map has not been set. Please call SetMap first."):
        super().__init__(message)


class InvalidGraphError(MapServiceError):
    """Raised when a submitted graph fails structural checks."""

    kind = ErrorKind.INVALID_GRAPH


class NodeNotFoundError(MapServiceError):
    """Raised when a requested node id is not part of the stored map."""

    kind = ErrorKind.NODE_NOT_FOUND

    def __init__(self, node_id: str, role: Literal["from", "to"]):
        super().__init__(f"Node '{node_id}' does not exist in the graph")
        self.node_id = node_id
        self.role = role


class NoPathExistsError(MapServiceError):
    """Raised when both nodes exist but no edges connect them."""

    kind = ErrorKind.NO_PATH_EXISTS

    def __init__(self, from_id: str, to_id: str):
        super().__init__(f"No path exists between {from_id} and {to_id}")
        self.from_id = from_id
        self.to_id = to_id


class UnexpectedFailureError(MapServiceError):
    """Wraps any internal fault so callers only see the generic form."""

    kind = ErrorKind.UNEXPECTED_FAILURE

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
