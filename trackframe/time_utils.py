from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Tuple, Union

from .constants import LOCAL_TZ


def parse_timestamp(raw: Union[str, int, float]) -> datetime:
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(raw / 1000).astimezone()
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).astimezone()
    except ValueError:
        return datetime.fromtimestamp(int(raw) / 1000).astimezone()


def parse_date_string(date_str: str) -> date:
    cleaned = date_str.strip()
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date format '{date_str}'. Use YYYYMMDD or YYYY-MM-DD.")


def local_date(ts: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of ``ts`` as seen on the wall clock.

    With ``tz`` unset the timestamp's own offset is used, so a sample taken at
    23:58 local time stays on that day whatever its UTC equivalent is.
    """
    if tz is not None and ts.tzinfo is not None:
        ts = ts.astimezone(tz)
    return ts.date()


def local_date_key(ts: Union[datetime, date], tz: Optional[tzinfo] = None) -> str:
    if isinstance(ts, datetime):
        ts = local_date(ts, tz)
    return ts.strftime("%Y-%m-%d")


def within_date_range(day: date, date_range: Optional[Tuple[date, date]]) -> bool:
    if date_range is None:
        return True
    start, end = date_range
    return start <= day <= end


def elapsed_minutes(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 60.0


def isoformat_local(dt: datetime) -> str:
    return dt.astimezone(LOCAL_TZ).strftime("%Y-%m-%d %H:%M")
