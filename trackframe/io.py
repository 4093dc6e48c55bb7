from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

from .models import LocationPoint
from .time_utils import parse_timestamp


def load_payload(path: Path) -> Iterable[dict]:
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if isinstance(payload, dict) and "locations" in payload:
        yield from payload["locations"]
        return
    if isinstance(payload, list):
        yield from payload
        return
    raise ValueError(f"Unrecognised location payload structure in {path}")


def parse_point(entry: dict) -> LocationPoint:
    if "latitudeE7" in entry and "longitudeE7" in entry:
        lat = entry["latitudeE7"] / 1e7
        lng = entry["longitudeE7"] / 1e7
    else:
        lat = float(entry["lat"])
        lng = float(entry["lng"])
    raw_ts = entry.get("timestamp") or entry.get("timestampMs")
    if raw_ts is None:
        raise ValueError(f"Location entry without timestamp: {entry!r}")
    accuracy = entry.get("accuracy")
    activity = entry.get("activity")
    return LocationPoint(
        lat=lat,
        lng=lng,
        timestamp=parse_timestamp(raw_ts),
        accuracy=float(accuracy) if accuracy is not None else None,
        activity=activity if isinstance(activity, str) else None,
    )


def load_points(path: Path) -> List[LocationPoint]:
    return [parse_point(entry) for entry in load_payload(path)]


def resolve_input_path(candidate: Path) -> Path:
    expanded = candidate.expanduser()
    if expanded.exists():
        return expanded
    raise SystemExit(f"Input file not found: {expanded}")
