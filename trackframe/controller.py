"""Single-day / multi-day frame derivation.

``compute_frame`` is the whole pipeline as a pure function of its inputs plus
the previous navigation state. ``MapViewController`` wraps it for one live map
view: it keeps the navigation state between calls, skips recomputation when
the inputs have not changed and forwards camera commands to a renderer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import List, Optional, Sequence, Tuple, Union

from .constants import (
    DAY_PALETTE,
    DEFAULT_MAX_ACCURACY_M,
    FIT_PADDING_PX,
    GAP_COLOR,
    MULTI_DAY_MAX_ZOOM,
    POINT_ZOOM,
    REDUNDANT_DISTANCE_M,
    REDUNDANT_ELAPSED_MIN,
    SINGLE_DAY_MAX_ZOOM,
    TRACK_COLOR,
)
from .days import build_day_markers, group_by_local_day, palette_color
from .models import (
    EmptyState,
    Frame,
    Gap,
    LatLng,
    LineStyle,
    LocationPoint,
    NavigationState,
    Polyline,
    Segment,
    ViewMode,
    ViewportRequest,
)
from .navigation import is_new_selection, release_selection, select_point, sync_source
from .preprocess import collapse_redundant, filter_date_range, filter_single_day, normalize_points
from .segments import ConnectAll, SegmentPolicy, build_segments
from .time_utils import local_date, local_date_key
from .viewport import InvalidCoordinatesError, MapRenderer, compute_viewport, dispatch_viewport, pan_to

log = logging.getLogger(__name__)

DateLike = Union[date, datetime]
SelectedPoint = Union[LatLng, LocationPoint]


@dataclass(frozen=True)
class FrameConfig:
    max_accuracy_m: Optional[float] = DEFAULT_MAX_ACCURACY_M
    redundant_distance_m: float = REDUNDANT_DISTANCE_M
    redundant_elapsed_min: float = REDUNDANT_ELAPSED_MIN
    policy: SegmentPolicy = field(default_factory=ConnectAll)
    point_zoom: int = POINT_ZOOM
    padding: int = FIT_PADDING_PX
    single_day_max_zoom: int = SINGLE_DAY_MAX_ZOOM
    multi_day_max_zoom: int = MULTI_DAY_MAX_ZOOM
    palette: Sequence[str] = DAY_PALETTE
    tz: Optional[tzinfo] = None

    def max_zoom(self, mode: ViewMode) -> int:
        return self.multi_day_max_zoom if mode is ViewMode.MULTI_DAY else self.single_day_max_zoom


def resolve_mode(date_range: Optional[Tuple[DateLike, DateLike]]) -> ViewMode:
    return ViewMode.SINGLE_DAY if date_range is None else ViewMode.MULTI_DAY


def _as_date(value: Optional[DateLike], tz: Optional[tzinfo]) -> Optional[date]:
    if isinstance(value, datetime):
        return local_date(value, tz)
    return value


def _as_latlng(point: Optional[SelectedPoint]) -> Optional[LatLng]:
    if point is None:
        return None
    if isinstance(point, LocationPoint):
        return point.as_latlng
    lat, lng = point
    return (float(lat), float(lng))


def source_key(
    mode: ViewMode,
    selected_date: Optional[date],
    date_range: Optional[Tuple[date, date]],
    points: Sequence[LocationPoint],
) -> tuple:
    """Identity of the point set a frame is derived from.

    The selected date only filters points in single-day mode, so it is left out
    of the key for multi-day frames.
    """
    if mode is ViewMode.MULTI_DAY:
        selected_date = None
    return (mode.value, selected_date, date_range, len(points), hash(tuple(points)))


def _polylines(segments: Sequence[Segment], gaps: Sequence[Gap]) -> List[Polyline]:
    polylines = [Polyline(coordinates=segment.coordinates, color=segment.color) for segment in segments]
    polylines.extend(
        Polyline(coordinates=(gap.start, gap.end), color=GAP_COLOR, style=LineStyle.DASHED) for gap in gaps
    )
    return polylines


def compute_frame(
    points: Sequence[LocationPoint],
    *,
    selected_date: Optional[DateLike] = None,
    date_range: Optional[Tuple[DateLike, DateLike]] = None,
    selected_point: Optional[SelectedPoint] = None,
    navigation: Optional[NavigationState] = None,
    config: Optional[FrameConfig] = None,
) -> Frame:
    config = config or FrameConfig()
    mode = resolve_mode(date_range)
    day = _as_date(selected_date, config.tz)
    day_range = None
    if date_range is not None:
        day_range = (_as_date(date_range[0], config.tz), _as_date(date_range[1], config.tz))

    normalized = normalize_points(points, config.max_accuracy_m)
    if mode is ViewMode.SINGLE_DAY:
        relevant = filter_single_day(normalized, day, config.tz)
    else:
        relevant = filter_date_range(normalized, day_range, config.tz)
    collapsed = collapse_redundant(relevant, config.redundant_distance_m, config.redundant_elapsed_min)

    state = sync_source(navigation, source_key(mode, day, day_range, relevant))

    segments: List[Segment] = []
    gaps: List[Gap] = []
    buckets = []
    markers = []
    empty_state = None

    if mode is ViewMode.SINGLE_DAY:
        build = build_segments(
            collapsed,
            config.policy,
            color=TRACK_COLOR,
            day_key=local_date_key(day) if day else None,
        )
        segments.extend(build.segments)
        gaps.extend(build.gaps)
        framing_points: Sequence[LocationPoint] = relevant
        if not relevant:
            empty_state = EmptyState(selected_date=day)
    else:
        buckets = group_by_local_day(collapsed, config.tz)
        for bucket in buckets:
            build = build_segments(
                bucket.points,
                config.policy,
                color=palette_color(bucket.color_index, config.palette),
                day_key=bucket.date_key,
            )
            segments.extend(build.segments)
            gaps.extend(build.gaps)
        markers = build_day_markers(buckets, config.palette)
        framing_points = [point for bucket in buckets for point in bucket.points]

    log.debug(
        "%s frame: %d input, %d relevant, %d collapsed, %d segments, %d gaps, %d days",
        mode.value,
        len(points),
        len(relevant),
        len(collapsed),
        len(segments),
        len(gaps),
        len(buckets),
    )

    viewport: Optional[ViewportRequest] = None
    error: Optional[str] = None
    selected = _as_latlng(selected_point)
    if selected is None:
        state = release_selection(state)
    try:
        if is_new_selection(state, selected):
            viewport = pan_to(selected)
            state = select_point(state, selected)
        elif not state.is_manually_navigating:
            viewport = compute_viewport(
                framing_points,
                mode,
                point_zoom=config.point_zoom,
                padding=config.padding,
                max_zoom=config.max_zoom(mode),
            )
    except InvalidCoordinatesError as exc:
        log.warning("Refusing to frame view: %s", exc)
        viewport = None
        error = str(exc)

    return Frame(
        mode=mode,
        points=tuple(collapsed),
        polylines=tuple(_polylines(segments, gaps)),
        segments=tuple(segments),
        gaps=tuple(gaps),
        markers=tuple(markers),
        buckets=tuple(buckets),
        viewport=viewport,
        navigation=state,
        empty_state=empty_state,
        error=error,
    )


class MapViewController:
    """Keeps one map view in step with its inputs.

    Frames are memoized on the identity of the point sequence and the other
    inputs. Camera commands are only sent to the renderer when the point set
    or mode changed, or when a new point was selected, so re-renders with the
    same data never undo a manual pan or zoom.
    """

    def __init__(self, renderer: Optional[MapRenderer] = None, config: Optional[FrameConfig] = None):
        self.renderer = renderer
        self.config = config or FrameConfig()
        self.navigation: Optional[NavigationState] = None
        self.frame: Optional[Frame] = None
        self._points: Optional[Sequence[LocationPoint]] = None
        self._inputs: Optional[tuple] = None

    def update(
        self,
        points: Sequence[LocationPoint],
        *,
        selected_date: Optional[DateLike] = None,
        date_range: Optional[Tuple[DateLike, DateLike]] = None,
        selected_point: Optional[SelectedPoint] = None,
    ) -> Frame:
        inputs = (selected_date, date_range, _as_latlng(selected_point))
        if self.frame is not None and points is self._points and inputs == self._inputs:
            return self.frame

        previous = self.navigation
        frame = compute_frame(
            points,
            selected_date=selected_date,
            date_range=date_range,
            selected_point=selected_point,
            navigation=previous,
            config=self.config,
        )
        self._points = points
        self._inputs = inputs
        self.frame = frame
        self.navigation = frame.navigation

        if self.renderer is not None and self._should_dispatch(previous, frame.navigation):
            dispatch_viewport(frame.viewport, self.renderer)
        return frame

    @staticmethod
    def _should_dispatch(previous: Optional[NavigationState], current: NavigationState) -> bool:
        if previous is None or previous.source_key != current.source_key:
            return True
        return (
            current.is_manually_navigating
            and current.last_selected_point is not None
            and current.last_selected_point != previous.last_selected_point
        )

    def reset(self) -> None:
        self.navigation = None
        self.frame = None
        self._points = None
        self._inputs = None
