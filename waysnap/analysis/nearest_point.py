"""
Nearest point search over all ways of a document

For a query position every way is scanned segment by segment; the
projection of the position onto each segment is clamped to the segment
and the closest one wins. No spatial index, one pass over all segments.

Per-way failures are returned as values so a single broken way never
hides the results of the others.
"""

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple
from loguru import logger

from . import geo_math
from ..errors import (
    ComputationError, MissingNodeReference, NearestPointError, NoPosition, NoWays
)
from ..collectors.osm.models import Coordinate, OSMDocument, OSMWay


@dataclass(frozen=True)
class NearestPoint:
    """Closest point of a way to the query position"""
    distance_m: float
    point: Coordinate
    way: OSMWay
    segment_index: Optional[int] = None  # None for single-node ways
    along_track_m: float = 0.0
    cross_track_m: Optional[float] = None  # signed, positive right of the segment


@dataclass(frozen=True)
class WayDistance:
    """Outcome of the nearest point computation for one way"""
    way: OSMWay
    nearest: Optional[NearestPoint] = None
    error: Optional[NearestPointError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> NearestPoint:
        if self.error is not None:
            raise self.error
        return self.nearest


@dataclass(frozen=True)
class NearestWayResult:
    """Outcome of a nearest way query over a whole document"""
    nearest: Optional[NearestPoint] = None
    error: Optional[NearestPointError] = None
    failures: List[WayDistance] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def way(self) -> Optional[OSMWay]:
        return self.nearest.way if self.nearest else None

    def unwrap(self) -> NearestPoint:
        if self.error is not None:
            raise self.error
        return self.nearest


def _checked(distance_m: float, way: OSMWay) -> float:
    if math.isnan(distance_m):
        raise ComputationError(f"Distance to way {way.id} is not a number")
    return distance_m


def nearest_point_on_segment(
    line1: Coordinate,
    line2: Coordinate,
    position: Coordinate
) -> Tuple[float, Coordinate, float]:
    """
    Closest point of the segment line1-line2 to position

    Returns:
        Tuple of (distance_m, point, along_track_m)
    """
    length = geo_math.distance(line1, line2)
    along = geo_math.along_track_distance(line1, line2, position)

    if along < 0:
        point = line1
    elif along > length:
        point = line2
    else:
        point = geo_math.destination(line1, geo_math.bearing(line1, line2), along)

    return geo_math.distance(position, point), point, along


def nearest_point_on_way(
    document: OSMDocument,
    way: OSMWay,
    position: Coordinate
) -> NearestPoint:
    """
    Find the point of a way closest to position

    Args:
        document: Document used to resolve the way's node references
        way: Way to measure
        position: Query position

    Returns:
        NearestPoint of the way; ties keep the earliest segment

    Raises:
        MissingNodeReference: If a node reference does not resolve (EmptyWay for no nodes)
        ComputationError: If a distance comes out as NaN
    """
    coords = document.resolve(way)

    if len(coords) == 1:
        only = coords[0]
        return NearestPoint(
            distance_m=_checked(geo_math.distance(position, only), way),
            point=only,
            way=way,
        )

    best: Optional[NearestPoint] = None
    for i, (line1, line2) in enumerate(zip(coords[:-1], coords[1:])):
        distance_m, point, along = nearest_point_on_segment(line1, line2, position)
        _checked(distance_m, way)
        if best is None or distance_m < best.distance_m:
            best = NearestPoint(
                distance_m=distance_m,
                point=point,
                way=way,
                segment_index=i,
                along_track_m=along,
            )

    i = best.segment_index
    return replace(best, cross_track_m=geo_math.cross_track_distance(coords[i], coords[i + 1], position))


def nearest_points(
    document: OSMDocument,
    position: Optional[Coordinate]
) -> List[WayDistance]:
    """
    Nearest point of every way in document order

    Args:
        document: Document to scan
        position: Query position; None gives an empty list

    Returns:
        One WayDistance per way, carrying either the nearest point or the error
    """
    if position is None:
        logger.debug("No query position set, skipping nearest point scan")
        return []

    results: List[WayDistance] = []
    for way in document.ways:
        try:
            results.append(WayDistance(way=way, nearest=nearest_point_on_way(document, way, position)))
        except (MissingNodeReference, ComputationError) as e:
            logger.warning(f"Skipping way {way.id}: {e}")
            results.append(WayDistance(way=way, error=e))

    return results


def rank_nearest(per_way: Sequence[WayDistance]) -> NearestWayResult:
    """
    Pick the closest way out of per-way results from nearest_points

    Ties keep the entry that comes first. Failed entries are left out of the
    ranking and listed in ``failures``.
    """
    if not per_way:
        return NearestWayResult(error=NoWays("Document has no ways"))

    failures = [entry for entry in per_way if not entry.ok]

    best: Optional[NearestPoint] = None
    try:
        for entry in per_way:
            if not entry.ok:
                continue
            distance_m = _checked(entry.nearest.distance_m, entry.way)
            if best is None or distance_m < best.distance_m:
                best = entry.nearest
    except ComputationError as e:
        return NearestWayResult(error=e, failures=failures)

    if best is None:
        return NearestWayResult(
            error=NoWays(f"None of the {len(per_way)} ways produced a distance"),
            failures=failures,
        )

    logger.debug(f"Nearest way {best.way.id} at {best.distance_m:.2f}m "
                 f"({len(per_way)} ways scanned, {len(failures)} failed)")
    return NearestWayResult(nearest=best, failures=failures)


def nearest_way(
    document: OSMDocument,
    position: Optional[Coordinate]
) -> NearestWayResult:
    """
    The way closest to position

    Ties keep the way that comes first in the document. Ways that failed are
    left out of the ranking and listed in ``failures``.

    Args:
        document: Document to scan
        position: Query position

    Returns:
        NearestWayResult; ``error`` is NoPosition, NoWays or ComputationError on failure
    """
    if position is None:
        return NearestWayResult(error=NoPosition("No query position set"))

    return rank_nearest(nearest_points(document, position))
