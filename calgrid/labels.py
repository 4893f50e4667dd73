# calgrid/labels.py
from __future__ import annotations

import datetime as dt
from typing import List

from .interval import HOURS_PER_DAY
from .model import CalendarView
from .window import visible_dates


def day_header_text(d: dt.date) -> str:
    # Locale-abbreviated weekday + day of month, e.g. "Wed 14".
    return f"{d.strftime('%a')} {d.day}"


def day_header_texts(view: CalendarView) -> List[str]:
    return [day_header_text(d) for d in visible_dates(view)]


def hour_texts(fmt: str = "%H:%M") -> List[str]:
    return [dt.time(hour=h).strftime(fmt) for h in range(HOURS_PER_DAY)]
