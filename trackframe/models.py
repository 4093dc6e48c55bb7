from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Sequence, Tuple

from shapely.geometry import LineString

LatLng = Tuple[float, float]


@dataclass(frozen=True)
class LocationPoint:
    lat: float
    lng: float
    timestamp: datetime
    accuracy: Optional[float] = None
    activity: Optional[str] = None

    @property
    def as_latlng(self) -> LatLng:
        return (self.lat, self.lng)

    @property
    def as_lnglat(self) -> LatLng:
        return (self.lng, self.lat)


@dataclass(frozen=True)
class Segment:
    """A continuous run of points drawn as one connected path."""

    coordinates: Sequence[LatLng]
    color: str
    day_key: Optional[str] = None

    @property
    def as_linestring(self) -> LineString:
        return LineString([(lng, lat) for lat, lng in self.coordinates])


@dataclass(frozen=True)
class Gap:
    """An inferred, untracked hop from the end of one segment to the start of the next."""

    start: LatLng
    end: LatLng
    day_key: Optional[str] = None


@dataclass(frozen=True)
class DayBucket:
    date_key: str
    points: Sequence[LocationPoint]
    color_index: int

    @property
    def first_point(self) -> LocationPoint:
        return self.points[0]

    @property
    def last_point(self) -> LocationPoint:
        return self.points[-1]


@dataclass(frozen=True)
class DaySummary:
    date: str
    start_time: datetime
    end_time: datetime
    point_count: int


@dataclass(frozen=True)
class DayMarker:
    position: LatLng
    color: str
    day_index: int
    summary: DaySummary


class LineStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"


@dataclass(frozen=True)
class Polyline:
    coordinates: Sequence[LatLng]
    color: str
    style: LineStyle = LineStyle.SOLID


@dataclass(frozen=True)
class Bounds:
    south: float
    west: float
    north: float
    east: float

    @property
    def center(self) -> LatLng:
        return ((self.south + self.north) / 2.0, (self.west + self.east) / 2.0)

    def contains(self, lat: float, lng: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lng <= self.east


class ViewportKind(str, Enum):
    CENTER = "center"
    FIT = "fit"
    PAN = "pan"


@dataclass(frozen=True)
class ViewportRequest:
    kind: ViewportKind
    point: Optional[LatLng] = None
    zoom: Optional[int] = None
    bounds: Optional[Bounds] = None
    padding: Optional[int] = None
    max_zoom: Optional[int] = None
    duration_s: float = 0.0


class ViewMode(str, Enum):
    SINGLE_DAY = "single"
    MULTI_DAY = "multi"


@dataclass(frozen=True)
class NavigationState:
    is_manually_navigating: bool = False
    last_selected_point: Optional[LatLng] = None
    source_key: Optional[tuple] = None


@dataclass(frozen=True)
class EmptyState:
    selected_date: Optional[date]


@dataclass(frozen=True)
class Frame:
    mode: ViewMode
    points: Sequence[LocationPoint] = field(default_factory=tuple)
    polylines: Sequence[Polyline] = field(default_factory=tuple)
    segments: Sequence[Segment] = field(default_factory=tuple)
    gaps: Sequence[Gap] = field(default_factory=tuple)
    markers: Sequence[DayMarker] = field(default_factory=tuple)
    buckets: Sequence[DayBucket] = field(default_factory=tuple)
    viewport: Optional[ViewportRequest] = None
    navigation: NavigationState = field(default_factory=NavigationState)
    empty_state: Optional[EmptyState] = None
    error: Optional[str] = None
