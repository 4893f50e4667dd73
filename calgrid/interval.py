# calgrid/interval.py
from __future__ import annotations

import datetime as dt
import logging
from typing import Tuple

from .model import AppointmentLike

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0
HOURS_PER_DAY = 24


def _seconds_since_midnight(t: dt.datetime) -> float:
    return t.hour * 3600 + t.minute * 60 + t.second + t.microsecond / 1_000_000


def fraction_of_day(item: AppointmentLike) -> Tuple[float, float]:
    """
    Return (begin, length) of an item as fractions of a 24h day.

    Malformed items (end <= begin) get length 0 instead of raising: one bad
    record must not take down the layout of the whole day.
    """
    begin = _seconds_since_midnight(item.begin) / SECONDS_PER_DAY
    # Wall-clock span, consistent with the wall-clock begin above.
    span_s = (item.end.replace(tzinfo=None) - item.begin.replace(tzinfo=None)).total_seconds()
    if span_s <= 0:
        logger.debug("clamping non-positive interval to zero length: begin=%s end=%s", item.begin, item.end)
        return begin, 0.0
    return begin, span_s / SECONDS_PER_DAY


def fraction_begin(item: AppointmentLike) -> float:
    return fraction_of_day(item)[0]


def fraction_end(item: AppointmentLike) -> float:
    begin, length = fraction_of_day(item)
    return begin + length


def is_in_day(item: AppointmentLike, day: dt.date) -> bool:
    """True when the item lies entirely within `day` (no overnight spans)."""
    return item.begin.date() == day and item.end.date() == day


def is_in_range(item: AppointmentLike, start_date: dt.date, days: int) -> bool:
    """True when the item begins inside [start_date, start_date + days)."""
    d = item.begin.date()
    return start_date <= d < start_date + dt.timedelta(days=int(days))
