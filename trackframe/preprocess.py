from __future__ import annotations

import logging
import math
from datetime import date, tzinfo
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .constants import (
    DEFAULT_MAX_ACCURACY_M,
    EARTH_RADIUS_M,
    METERS_PER_DEGREE,
    REDUNDANT_DISTANCE_M,
    REDUNDANT_ELAPSED_MIN,
)
from .models import LocationPoint
from .time_utils import elapsed_minutes, local_date, within_date_range

log = logging.getLogger(__name__)


def normalize_points(
    points: Iterable[LocationPoint],
    max_accuracy_m: Optional[float] = DEFAULT_MAX_ACCURACY_M,
) -> List[LocationPoint]:
    """Return a new list of points sorted by timestamp.

    Points without an accuracy value are trusted. Points whose accuracy is worse
    than ``max_accuracy_m`` are dropped; pass ``None`` to keep everything.
    """
    kept = [
        point
        for point in points
        if max_accuracy_m is None or point.accuracy is None or point.accuracy <= max_accuracy_m
    ]
    return sorted(kept, key=lambda point: point.timestamp)


def filter_single_day(
    points: Sequence[LocationPoint],
    selected_date: Optional[date],
    tz: Optional[tzinfo] = None,
) -> List[LocationPoint]:
    if selected_date is None:
        return list(points)
    return [point for point in points if local_date(point.timestamp, tz) == selected_date]


def filter_date_range(
    points: Sequence[LocationPoint],
    date_range: Optional[Tuple[date, date]],
    tz: Optional[tzinfo] = None,
) -> List[LocationPoint]:
    return [point for point in points if within_date_range(local_date(point.timestamp, tz), date_range)]


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def distance_m(point_a: LocationPoint, point_b: LocationPoint) -> float:
    return haversine_m(point_a.lat, point_a.lng, point_b.lat, point_b.lng)


def haversine_vectorized(
    lat1: np.ndarray,
    lng1: np.ndarray,
    lat2: np.ndarray,
    lng2: np.ndarray,
) -> np.ndarray:
    """Pairwise haversine distances in meters."""
    lat1_rad = np.radians(lat1)
    lng1_rad = np.radians(lng1)
    lat2_rad = np.radians(lat2)
    lng2_rad = np.radians(lng2)

    dlat = lat2_rad - lat1_rad
    dlng = lng2_rad - lng1_rad
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlng / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def consecutive_distances_m(points: Sequence[LocationPoint]) -> np.ndarray:
    if len(points) < 2:
        return np.zeros(0)
    coords = np.array([point.as_latlng for point in points])
    return haversine_vectorized(coords[:-1, 0], coords[:-1, 1], coords[1:, 0], coords[1:, 1])


def planar_distance_m(reference: LocationPoint, candidate: LocationPoint) -> float:
    # longitude delta scaled by the candidate's latitude
    lat_diff = candidate.lat - reference.lat
    lng_diff = (candidate.lng - reference.lng) * math.cos(math.radians(candidate.lat))
    return math.hypot(lat_diff, lng_diff) * METERS_PER_DEGREE


def is_redundant(
    reference: LocationPoint,
    candidate: LocationPoint,
    min_distance_m: float = REDUNDANT_DISTANCE_M,
    min_elapsed_min: float = REDUNDANT_ELAPSED_MIN,
) -> bool:
    return (
        planar_distance_m(reference, candidate) < min_distance_m
        and elapsed_minutes(reference.timestamp, candidate.timestamp) < min_elapsed_min
    )


def collapse_redundant(
    points: Sequence[LocationPoint],
    min_distance_m: float = REDUNDANT_DISTANCE_M,
    min_elapsed_min: float = REDUNDANT_ELAPSED_MIN,
) -> List[LocationPoint]:
    """Drop points that are both close to and recent relative to the last kept point.

    The comparison is always against the last accepted point, never the raw
    predecessor, which makes the pass idempotent.
    """
    collapsed: List[LocationPoint] = []
    for point in points:
        if collapsed and is_redundant(collapsed[-1], point, min_distance_m, min_elapsed_min):
            continue
        collapsed.append(point)

    if len(collapsed) != len(points):
        log.debug("Collapsed %d points to %d", len(points), len(collapsed))
    return collapsed
