"""
Unit tests for trackframe.viewport

Tests camera framing, coordinate validation and command dispatch to a
renderer.
"""

import pytest

from trackframe.constants import MULTI_DAY_MAX_ZOOM, SINGLE_DAY_MAX_ZOOM
from trackframe.models import Bounds, ViewMode, ViewportKind, ViewportRequest
from trackframe.viewport import (
    InvalidCoordinatesError,
    compute_bounds,
    compute_viewport,
    dispatch_viewport,
    is_valid_coordinate,
    pan_to,
)


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def set_center_and_zoom(self, point, zoom, duration_s):
        self.calls.append(("center", point, zoom))

    def fit_to_bounds(self, bounds, padding, max_zoom, duration_s):
        self.calls.append(("fit", bounds, padding, max_zoom))

    def pan_to_point(self, point, duration_s):
        self.calls.append(("pan", point))


class TestComputeViewport:
    """Tests for compute_viewport."""

    def test_empty_keeps_current_view(self):
        assert compute_viewport([], ViewMode.SINGLE_DAY) is None

    def test_single_point_is_centered(self, make_point):
        request = compute_viewport([make_point(10.0, 20.0)], ViewMode.SINGLE_DAY)
        assert request.kind is ViewportKind.CENTER
        assert request.point == (10.0, 20.0)
        assert request.zoom == 16

    def test_two_points_fit_bounds(self, make_point):
        points = [make_point(0.0, 0.0), make_point(1.0, 1.0, seconds=60)]
        request = compute_viewport(points, ViewMode.SINGLE_DAY)
        assert request.kind is ViewportKind.FIT
        assert request.bounds.contains(0.0, 0.0)
        assert request.bounds.contains(1.0, 1.0)
        assert request.max_zoom <= SINGLE_DAY_MAX_ZOOM
        assert request.padding == 20

    def test_multi_day_uses_lower_max_zoom(self, make_point):
        points = [make_point(0.0, 0.0), make_point(0.0001, 0.0001, seconds=60)]
        request = compute_viewport(points, ViewMode.MULTI_DAY)
        assert request.max_zoom == MULTI_DAY_MAX_ZOOM

    def test_does_not_mutate_points(self, make_point):
        points = [make_point(1.0, 1.0, seconds=60), make_point(0.0, 0.0)]
        snapshot = list(points)
        compute_viewport(points, ViewMode.SINGLE_DAY)
        assert points == snapshot

    def test_out_of_range_center_rejected(self, make_point):
        with pytest.raises(InvalidCoordinatesError):
            compute_viewport([make_point(95.0, 0.0)], ViewMode.SINGLE_DAY)

    def test_out_of_range_bounds_rejected(self, make_point):
        points = [make_point(0.0, 0.0), make_point(10.0, 200.0, seconds=60)]
        with pytest.raises(InvalidCoordinatesError):
            compute_viewport(points, ViewMode.SINGLE_DAY)

    def test_nan_rejected(self, make_point):
        with pytest.raises(InvalidCoordinatesError):
            compute_viewport([make_point(float("nan"), 0.0)], ViewMode.SINGLE_DAY)


class TestBounds:
    """Tests for compute_bounds and coordinate checks."""

    def test_minimal_rectangle(self, make_point):
        points = [make_point(1.0, -3.0), make_point(-2.0, 4.0), make_point(0.5, 0.5)]
        assert compute_bounds(points) == Bounds(south=-2.0, west=-3.0, north=1.0, east=4.0)

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            compute_bounds([])

    def test_center(self):
        assert Bounds(south=0.0, west=0.0, north=2.0, east=4.0).center == (1.0, 2.0)

    @pytest.mark.parametrize(
        "lat,lng,valid",
        [(90.0, 180.0, True), (-90.0, -180.0, True), (90.1, 0.0, False), (0.0, -180.5, False)],
    )
    def test_is_valid_coordinate(self, lat, lng, valid):
        assert is_valid_coordinate(lat, lng) is valid


class TestDispatch:
    """Tests for dispatch_viewport."""

    def test_center(self):
        renderer = RecordingRenderer()
        request = ViewportRequest(kind=ViewportKind.CENTER, point=(1.0, 2.0), zoom=16)
        assert dispatch_viewport(request, renderer) is True
        assert renderer.calls == [("center", (1.0, 2.0), 16)]

    def test_fit(self, make_point):
        renderer = RecordingRenderer()
        request = compute_viewport([make_point(0.0, 0.0), make_point(1.0, 1.0, seconds=60)], ViewMode.SINGLE_DAY)
        dispatch_viewport(request, renderer)
        assert renderer.calls == [("fit", request.bounds, 20, 17)]

    def test_pan(self):
        renderer = RecordingRenderer()
        dispatch_viewport(pan_to((3.0, 4.0)), renderer)
        assert renderer.calls == [("pan", (3.0, 4.0))]

    def test_none_is_a_no_op(self):
        renderer = RecordingRenderer()
        assert dispatch_viewport(None, renderer) is False
        assert renderer.calls == []
