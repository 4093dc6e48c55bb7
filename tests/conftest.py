"""
Shared fixtures for trackframe tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

from trackframe.models import LocationPoint

BASE_TIME = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


def point_at(lat, lng, seconds=0, accuracy=None, activity=None, start=BASE_TIME):
    return LocationPoint(
        lat=lat,
        lng=lng,
        timestamp=start + timedelta(seconds=seconds),
        accuracy=accuracy,
        activity=activity,
    )


@pytest.fixture
def make_point():
    """Factory building a LocationPoint offset in seconds from BASE_TIME."""
    return point_at


@pytest.fixture
def walking_track():
    """Ten points heading north, one minute and ~111 m apart."""
    return [point_at(0.001 * index, 0.0, seconds=60 * index) for index in range(10)]


@pytest.fixture
def two_day_points():
    day_two = datetime(2024, 1, 16, 9, 0, tzinfo=timezone.utc)
    return [
        point_at(48.85, 2.35, seconds=0),
        point_at(48.86, 2.36, seconds=3600),
        point_at(51.50, -0.12, seconds=0, start=day_two),
        point_at(51.51, -0.10, seconds=3600, start=day_two),
    ]
