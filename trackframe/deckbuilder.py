from __future__ import annotations

from typing import List, Optional, Sequence

from .constants import GAP_DASH_PATTERN
from .models import DayMarker, Frame, LineStyle, Polyline, ViewportKind, ViewportRequest


def build_polyline_payload(polylines: Sequence[Polyline]) -> List[dict]:
    paths: List[dict] = []
    for index, polyline in enumerate(polylines):
        if len(polyline.coordinates) < 2:
            continue
        entry = {
            "id": index,
            "coordinates": [[lat, lng] for lat, lng in polyline.coordinates],
            "color": polyline.color,
            "style": polyline.style.value,
        }
        if polyline.style is LineStyle.DASHED:
            entry["dashArray"] = GAP_DASH_PATTERN
        paths.append(entry)
    return paths


def build_marker_payload(markers: Sequence[DayMarker]) -> List[dict]:
    return [
        {
            "position": list(marker.position),
            "color": marker.color,
            "dayIndex": marker.day_index,
            "summary": {
                "date": marker.summary.date,
                "startTime": marker.summary.start_time.isoformat(),
                "endTime": marker.summary.end_time.isoformat(),
                "pointCount": marker.summary.point_count,
            },
        }
        for marker in markers
    ]


def build_viewport_payload(request: Optional[ViewportRequest]) -> Optional[dict]:
    if request is None:
        return None
    payload: dict = {"kind": request.kind.value, "duration": request.duration_s}
    if request.kind is ViewportKind.FIT:
        bounds = request.bounds
        payload.update(
            {
                "bounds": [[bounds.south, bounds.west], [bounds.north, bounds.east]],
                "padding": request.padding,
                "maxZoom": request.max_zoom,
            }
        )
    else:
        payload["point"] = list(request.point)
        if request.zoom is not None:
            payload["zoom"] = request.zoom
    return payload


def build_frame_payload(frame: Frame) -> dict:
    empty_state = None
    if frame.empty_state is not None:
        selected = frame.empty_state.selected_date
        empty_state = {"selectedDate": selected.isoformat() if selected else None}
    return {
        "mode": frame.mode.value,
        "polylines": build_polyline_payload(frame.polylines),
        "markers": build_marker_payload(frame.markers),
        "viewport": build_viewport_payload(frame.viewport),
        "emptyState": empty_state,
        "error": frame.error,
        "navigation": {
            "isManuallyNavigating": frame.navigation.is_manually_navigating,
            "lastSelectedPoint": (
                list(frame.navigation.last_selected_point) if frame.navigation.last_selected_point else None
            ),
        },
    }
