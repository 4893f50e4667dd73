# calgrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_day_span(s: str) -> Tuple[dt.timedelta, dt.timedelta]:
    """Parse "07:00-19:00" into (begin_of_day, end_of_day)."""
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("day span must be like 07:00-19:00")
    sh, sm = parse_hhmm(parts[0])
    eh, em = parse_hhmm(parts[1])
    begin = dt.timedelta(hours=sh, minutes=sm)
    end = dt.timedelta(hours=eh, minutes=em)
    if end <= begin:
        raise ValueError("day span end must be after begin")
    return begin, end


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def parse_iso_datetime(s: str) -> dt.datetime:
    """Parse an ISO-8601 local timestamp ("2026-10-14T09:30" or with seconds)."""
    ss = str(s).strip()
    if not ss:
        raise ValueError("empty timestamp")
    return dt.datetime.fromisoformat(ss)


def parse_pair(s: str) -> Tuple[float, float]:
    """Parse "W,H" / "X,Y" into two floats."""
    parts = [p.strip() for p in str(s).split(",")]
    if len(parts) != 2:
        raise ValueError(f"expected two comma-separated numbers, got {s!r}")
    return float(parts[0]), float(parts[1])
