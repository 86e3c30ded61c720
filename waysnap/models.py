"""
Pydantic models for the nearest way report
"""

from typing import List, Optional, Literal
from pydantic import BaseModel, Field


# ============================================================
# GeoJSON Types
# ============================================================

class GeoJSONPoint(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float]  # [longitude, latitude]


# ============================================================
# Report Models
# ============================================================

class WayTag(BaseModel):
    key: str
    value: str


class WayReport(BaseModel):
    way_id: int
    name: Optional[str] = None
    tags: List[WayTag] = Field(default_factory=list)
    node_count: int
    distance_m: Optional[float] = None  # None when no position or on error
    nearest_point: Optional[GeoJSONPoint] = None
    segment_index: Optional[int] = None
    cross_track_m: Optional[float] = None  # signed offset from the nearest segment's great circle
    error: Optional[str] = None


class NearestWaySummary(BaseModel):
    way_id: int
    name: Optional[str] = None
    distance_m: float
    nearest_point: GeoJSONPoint


class NetworkReport(BaseModel):
    """Everything the presentation layer needs for one query"""
    position: Optional[GeoJSONPoint] = None
    bbox: Optional[List[float]] = None  # [left, bottom, right, top]
    source: str
    node_count: int
    way_count: int
    ways: List[WayReport] = Field(default_factory=list)
    nearest_way: Optional[NearestWaySummary] = None
    nearest_way_error: Optional[str] = None
    failed_way_ids: List[int] = Field(default_factory=list)
    generated_at: str
