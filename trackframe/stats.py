from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .models import Frame, LatLng, LocationPoint, ViewMode
from .preprocess import consecutive_distances_m, haversine_vectorized
from .time_utils import isoformat_local


def implied_speeds_kmh(points: Sequence[LocationPoint]) -> List[float]:
    """Speed implied by each consecutive hop; zero where no time elapsed."""
    if len(points) < 2:
        return []
    distances_km = consecutive_distances_m(points) / 1000.0
    hours = np.array(
        [(b.timestamp - a.timestamp).total_seconds() / 3600.0 for a, b in zip(points[:-1], points[1:])]
    )
    speeds = np.divide(distances_km, hours, out=np.zeros_like(distances_km), where=hours > 0)
    return [float(speed) for speed in speeds]


def path_length_km(coordinates: Sequence[LatLng]) -> float:
    if len(coordinates) < 2:
        return 0.0
    coords_array = np.array(coordinates, dtype=float)
    distances = haversine_vectorized(
        coords_array[:-1, 0],
        coords_array[:-1, 1],
        coords_array[1:, 0],
        coords_array[1:, 1],
    )
    return float(distances.sum() / 1000.0)


@dataclass(frozen=True)
class FrameSummary:
    mode: ViewMode
    point_count: int
    segment_count: int
    gap_count: int
    day_count: int
    distance_km: float
    max_speed_kmh: float


def summarize_frame(frame: Frame) -> FrameSummary:
    speeds = implied_speeds_kmh(frame.points)
    return FrameSummary(
        mode=frame.mode,
        point_count=len(frame.points),
        segment_count=len(frame.segments),
        gap_count=len(frame.gaps),
        day_count=len(frame.buckets),
        distance_km=sum(path_length_km(segment.coordinates) for segment in frame.segments),
        max_speed_kmh=max(speeds) if speeds else 0.0,
    )


def print_summary(frame: Frame) -> None:
    summary = summarize_frame(frame)
    print("\nFrame Summary")
    print("-------------")
    print(f"Mode: {summary.mode.value}")
    print(f"Points after collapsing: {summary.point_count}")
    print(f"Segments: {summary.segment_count}, gaps: {summary.gap_count}")
    print(f"Tracked distance: {summary.distance_km:.1f} km (max implied speed {summary.max_speed_kmh:.0f} km/h)")
    if frame.markers:
        print(f"\nDays: {summary.day_count}")
        for marker in frame.markers:
            day = marker.summary
            print(
                f"  - {day.date} {marker.color}: {day.point_count} point(s) from "
                f"{isoformat_local(day.start_time)} to {isoformat_local(day.end_time)}"
            )
    if frame.empty_state is not None:
        selected = frame.empty_state.selected_date
        print(f"\nNo locations for {selected.isoformat() if selected else 'the selected day'}")
    if frame.error:
        print(f"\nViewport unavailable: {frame.error}")
