from __future__ import annotations

from collections import defaultdict
from datetime import tzinfo
from typing import Dict, List, Optional, Sequence

from .constants import DAY_PALETTE
from .models import DayBucket, DayMarker, DaySummary, LocationPoint
from .time_utils import local_date_key


def palette_color(index: int, palette: Sequence[str] = DAY_PALETTE) -> str:
    return palette[index % len(palette)]


def group_by_local_day(
    points: Sequence[LocationPoint],
    tz: Optional[tzinfo] = None,
) -> List[DayBucket]:
    """Bucket points by local calendar day, oldest day first.

    Buckets keep the chronological order of their points and are numbered in
    date order, which fixes their palette colors.
    """
    daily_groups: Dict[str, List[LocationPoint]] = defaultdict(list)
    for point in points:
        daily_groups[local_date_key(point.timestamp, tz)].append(point)

    return [
        DayBucket(
            date_key=date_key,
            points=tuple(sorted(daily_groups[date_key], key=lambda point: point.timestamp)),
            color_index=index,
        )
        for index, date_key in enumerate(sorted(daily_groups))
    ]


def summarize_bucket(bucket: DayBucket) -> DaySummary:
    return DaySummary(
        date=bucket.date_key,
        start_time=bucket.first_point.timestamp,
        end_time=bucket.last_point.timestamp,
        point_count=len(bucket.points),
    )


def build_day_markers(
    buckets: Sequence[DayBucket],
    palette: Sequence[str] = DAY_PALETTE,
) -> List[DayMarker]:
    return [
        DayMarker(
            position=bucket.first_point.as_latlng,
            color=palette_color(bucket.color_index, palette),
            day_index=bucket.color_index,
            summary=summarize_bucket(bucket),
        )
        for bucket in buckets
        if bucket.points
    ]
