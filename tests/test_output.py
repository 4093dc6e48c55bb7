"""
Unit tests for trackframe.deckbuilder and trackframe.stats
"""

import json
from datetime import date

import pytest

from trackframe.constants import GAP_DASH_PATTERN
from trackframe.controller import FrameConfig, compute_frame
from trackframe.deckbuilder import build_frame_payload, build_viewport_payload
from trackframe.segments import SplitOnTimeOrDistance
from trackframe.stats import implied_speeds_kmh, path_length_km, summarize_frame


class TestFramePayload:
    """Tests for build_frame_payload."""

    def test_multi_day_payload_is_json_ready(self, two_day_points):
        frame = compute_frame(two_day_points, date_range=(date(2024, 1, 15), date(2024, 1, 16)))
        payload = json.loads(json.dumps(build_frame_payload(frame)))
        assert payload["mode"] == "multi"
        assert len(payload["polylines"]) == 2
        assert payload["markers"][1]["dayIndex"] == 1
        assert payload["markers"][0]["summary"]["pointCount"] == 2
        assert payload["markers"][0]["summary"]["date"] == "2024-01-15"
        assert payload["viewport"]["kind"] == "fit"
        assert payload["viewport"]["maxZoom"] == 15
        assert payload["emptyState"] is None

    def test_dashed_gaps_carry_dash_pattern(self, make_point):
        points = [
            make_point(0.000, 0.0, seconds=0),
            make_point(0.001, 0.0, seconds=60),
            make_point(0.002, 0.0, seconds=3600),
            make_point(0.003, 0.0, seconds=3660),
        ]
        frame = compute_frame(points, config=FrameConfig(policy=SplitOnTimeOrDistance()))
        dashed = [entry for entry in build_frame_payload(frame)["polylines"] if entry["style"] == "dashed"]
        assert dashed[0]["dashArray"] == GAP_DASH_PATTERN

    def test_empty_state_payload(self, walking_track):
        frame = compute_frame(walking_track, selected_date=date(2024, 5, 1))
        payload = build_frame_payload(frame)
        assert payload["emptyState"] == {"selectedDate": "2024-05-01"}
        assert payload["viewport"] is None

    def test_center_viewport_payload(self, make_point):
        frame = compute_frame([make_point(10.0, 20.0)])
        assert build_viewport_payload(frame.viewport) == {
            "kind": "center",
            "duration": 0.8,
            "point": [10.0, 20.0],
            "zoom": 16,
        }


class TestStats:
    """Tests for diagnostic statistics."""

    def test_implied_speed(self, make_point):
        points = [make_point(0.0, 0.0, seconds=0), make_point(0.009, 0.0, seconds=60)]
        assert implied_speeds_kmh(points) == [pytest.approx(60.05, rel=1e-2)]

    def test_zero_elapsed_speed_is_zero(self, make_point):
        points = [make_point(0.0, 0.0, seconds=0), make_point(1.0, 0.0, seconds=0)]
        assert implied_speeds_kmh(points) == [0.0]

    def test_short_inputs(self, make_point):
        assert implied_speeds_kmh([make_point(0.0, 0.0)]) == []
        assert path_length_km([(0.0, 0.0)]) == 0.0

    def test_summary(self, walking_track):
        summary = summarize_frame(compute_frame(walking_track))
        assert summary.segment_count == 1
        assert summary.point_count == 10
        assert summary.distance_km == pytest.approx(1.0, rel=1e-2)
        assert summary.max_speed_kmh == pytest.approx(6.67, rel=1e-2)
