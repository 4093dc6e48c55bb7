"""Track segmentation.

Collapsed points are joined into continuous segments. Where a segment ends
and the next one begins, a gap connector records the untracked hop between
them. Whether a pair of consecutive points starts a new segment is decided by
an injectable policy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .constants import SPLIT_GAP_KM, SPLIT_GAP_MINUTES, TRACK_COLOR
from .models import Gap, LatLng, LocationPoint, Segment
from .preprocess import consecutive_distances_m
from .time_utils import elapsed_minutes

log = logging.getLogger(__name__)


class SegmentPolicy(Protocol):
    name: str

    def is_break(self, previous: LocationPoint, current: LocationPoint, distance_m: float) -> bool:
        ...


@dataclass(frozen=True)
class ConnectAll:
    """Join every consecutive pair; never produces gaps."""

    name = "connect_all"

    def is_break(self, previous: LocationPoint, current: LocationPoint, distance_m: float) -> bool:
        return False


@dataclass(frozen=True)
class SplitOnTimeOrDistance:
    """Start a new segment when a hop is too long in time or in space."""

    max_gap_minutes: float = SPLIT_GAP_MINUTES
    max_gap_km: float = SPLIT_GAP_KM

    name = "split_on_time_or_distance"

    def is_break(self, previous: LocationPoint, current: LocationPoint, distance_m: float) -> bool:
        if elapsed_minutes(previous.timestamp, current.timestamp) > self.max_gap_minutes:
            return True
        return distance_m / 1000.0 > self.max_gap_km


@dataclass(frozen=True)
class SegmentBuild:
    segments: Sequence[Segment] = field(default_factory=tuple)
    gaps: Sequence[Gap] = field(default_factory=tuple)


def build_segments(
    points: Sequence[LocationPoint],
    policy: Optional[SegmentPolicy] = None,
    color: str = TRACK_COLOR,
    day_key: Optional[str] = None,
) -> SegmentBuild:
    if len(points) < 2:
        return SegmentBuild()

    policy = policy or ConnectAll()
    distances = consecutive_distances_m(points)

    segments_coords: List[List[LatLng]] = []
    gaps: List[Gap] = []
    current_segment: List[LatLng] = [points[0].as_latlng]

    for index in range(1, len(points)):
        previous = points[index - 1]
        current = points[index]
        coords = current.as_latlng
        if len(current_segment) > 1 and policy.is_break(previous, current, float(distances[index - 1])):
            segments_coords.append(current_segment)
            gaps.append(Gap(start=current_segment[-1], end=coords, day_key=day_key))
            current_segment = [coords]
        else:
            current_segment.append(coords)

    if len(current_segment) > 1:
        segments_coords.append(current_segment)

    segments = [
        Segment(coordinates=tuple(segment), color=color, day_key=day_key) for segment in segments_coords
    ]
    log.debug(
        "Built %d segments and %d gaps from %d points (%s)",
        len(segments),
        len(gaps),
        len(points),
        policy.name,
    )
    return SegmentBuild(segments=tuple(segments), gaps=tuple(gaps))
