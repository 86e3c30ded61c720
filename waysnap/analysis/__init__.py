"""
Nearest point analysis for waysnap
"""

from ..errors import (
    NearestPointError,
    MissingNodeReference,
    EmptyWay,
    ComputationError,
    NoWays,
    NoPosition,
)
from .nearest_point import (
    NearestPoint,
    WayDistance,
    NearestWayResult,
    nearest_point_on_way,
    nearest_points,
    nearest_way,
    rank_nearest,
)

__all__ = [
    "NearestPointError",
    "MissingNodeReference",
    "EmptyWay",
    "ComputationError",
    "NoWays",
    "NoPosition",
    "NearestPoint",
    "WayDistance",
    "NearestWayResult",
    "nearest_point_on_way",
    "nearest_points",
    "nearest_way",
    "rank_nearest",
]
