"""
Nearest-point error taxonomy

Errors are carried as values on query results; the classes are still
exceptions so callers can ``unwrap()`` and raise them.
"""

from typing import Optional


class NearestPointError(Exception):
    """Base class for all nearest-point query errors"""


class MissingNodeReference(NearestPointError):
    """A way references a node id that is not in the document"""

    def __init__(self, way_id: int, node_id: Optional[int]):
        self.way_id = way_id
        self.node_id = node_id
        super().__init__(f"Way {way_id} references missing node {node_id}")


class EmptyWay(MissingNodeReference):
    """A way without any node reference"""

    def __init__(self, way_id: int):
        super().__init__(way_id, None)
        self.args = (f"Way {way_id} has no node references",)


class ComputationError(NearestPointError):
    """A distance could not be compared (NaN)"""


class NoWays(NearestPointError):
    """The document has no way to measure against"""


class NoPosition(NearestPointError):
    """No query position was given"""
