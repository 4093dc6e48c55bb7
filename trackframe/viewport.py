"""Camera framing for the map view.

The calculator only produces :class:`ViewportRequest` values. Applying one to
an actual map goes through the three-command :class:`MapRenderer` interface.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Protocol, Sequence

from shapely.geometry import MultiPoint

from .constants import (
    FIT_PADDING_PX,
    FRAME_ANIMATION_S,
    MULTI_DAY_MAX_ZOOM,
    PAN_ANIMATION_S,
    POINT_ZOOM,
    SINGLE_DAY_MAX_ZOOM,
)
from .models import Bounds, LatLng, LocationPoint, ViewMode, ViewportKind, ViewportRequest

log = logging.getLogger(__name__)


class InvalidCoordinatesError(ValueError):
    """A computed center or bounding box lies outside valid lat/lng ranges."""


class MapRenderer(Protocol):
    def set_center_and_zoom(self, point: LatLng, zoom: int, duration_s: float) -> None:
        ...

    def fit_to_bounds(self, bounds: Bounds, padding: int, max_zoom: int, duration_s: float) -> None:
        ...

    def pan_to_point(self, point: LatLng, duration_s: float) -> None:
        ...


def is_valid_coordinate(lat: float, lng: float) -> bool:
    if math.isnan(lat) or math.isnan(lng):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def validate_point(point: LatLng) -> LatLng:
    lat, lng = point
    if not is_valid_coordinate(lat, lng):
        raise InvalidCoordinatesError(f"Invalid map coordinates: ({lat}, {lng})")
    return point


def validate_bounds(bounds: Bounds) -> Bounds:
    validate_point((bounds.south, bounds.west))
    validate_point((bounds.north, bounds.east))
    return bounds


def compute_bounds(points: Sequence[LocationPoint]) -> Bounds:
    """Smallest axis-aligned rectangle holding every point."""
    if not points:
        raise ValueError("Cannot compute bounds of an empty point set")
    min_lng, min_lat, max_lng, max_lat = MultiPoint([point.as_lnglat for point in points]).bounds
    return Bounds(south=min_lat, west=min_lng, north=max_lat, east=max_lng)


def max_zoom_for_mode(mode: ViewMode) -> int:
    return MULTI_DAY_MAX_ZOOM if mode is ViewMode.MULTI_DAY else SINGLE_DAY_MAX_ZOOM


def compute_viewport(
    points: Sequence[LocationPoint],
    mode: ViewMode,
    point_zoom: int = POINT_ZOOM,
    padding: int = FIT_PADDING_PX,
    max_zoom: Optional[int] = None,
) -> Optional[ViewportRequest]:
    """Frame ``points`` for ``mode``.

    Returns ``None`` for an empty set so the caller keeps its current framing.
    Raises :class:`InvalidCoordinatesError` rather than framing bad geometry.
    """
    if not points:
        return None

    if len(points) == 1:
        return ViewportRequest(
            kind=ViewportKind.CENTER,
            point=validate_point(points[0].as_latlng),
            zoom=point_zoom,
            duration_s=FRAME_ANIMATION_S,
        )

    return ViewportRequest(
        kind=ViewportKind.FIT,
        bounds=validate_bounds(compute_bounds(points)),
        padding=padding,
        max_zoom=max_zoom if max_zoom is not None else max_zoom_for_mode(mode),
        duration_s=FRAME_ANIMATION_S,
    )


def pan_to(point: LatLng) -> ViewportRequest:
    return ViewportRequest(kind=ViewportKind.PAN, point=validate_point(point), duration_s=PAN_ANIMATION_S)


def dispatch_viewport(request: Optional[ViewportRequest], renderer: MapRenderer) -> bool:
    """Send ``request`` to ``renderer``; returns whether a command was issued."""
    if request is None:
        return False
    if request.kind is ViewportKind.CENTER:
        renderer.set_center_and_zoom(request.point, request.zoom, request.duration_s)
    elif request.kind is ViewportKind.FIT:
        renderer.fit_to_bounds(request.bounds, request.padding, request.max_zoom, request.duration_s)
    elif request.kind is ViewportKind.PAN:
        renderer.pan_to_point(request.point, request.duration_s)
    else:
        raise ValueError(f"Unknown viewport kind {request.kind!r}")
    log.debug("Dispatched %s viewport", request.kind.value)
    return True
