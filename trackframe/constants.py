from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Sequence

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_OUTPUT_PATH = (BASE_DIR / "trackframe_frame.json").resolve()

EARTH_RADIUS_M = 6_371_000.0
METERS_PER_DEGREE = 111_000.0

DEFAULT_MAX_ACCURACY_M = 200.0

REDUNDANT_DISTANCE_M = 20.0
REDUNDANT_ELAPSED_MIN = 2.0

SPLIT_GAP_MINUTES = 30.0
SPLIT_GAP_KM = 5.0

POINT_ZOOM = 16
SINGLE_DAY_MAX_ZOOM = 17
MULTI_DAY_MAX_ZOOM = 15
FIT_PADDING_PX = 20
FRAME_ANIMATION_S = 0.8
PAN_ANIMATION_S = 1.0

TRACK_COLOR = "#3b82f6"
GAP_COLOR = "#6b7280"
GAP_DASH_PATTERN = "8,12"

DAY_PALETTE: Sequence[str] = (
    "#ef4444",
    "#3b82f6",
    "#22c55e",
    "#f97316",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#eab308",
    "#6366f1",
    "#84cc16",
)

LOCAL_TZ = datetime.now().astimezone().tzinfo
