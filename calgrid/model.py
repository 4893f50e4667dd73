# calgrid/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Optional, Protocol, Tuple


class DisplayMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    WORK_WEEK = "workweek"


class DisplayPosition(str, Enum):
    """Where the anchor date sits in a multi-day Day view."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Weekday(IntEnum):
    # Sunday-based numbering; the week-start arithmetic depends on it.
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, d: dt.date) -> "Weekday":
        return cls((d.weekday() + 1) % 7)


class AppointmentLike(Protocol):
    begin: dt.datetime
    end: dt.datetime
    lane: int


@dataclass(frozen=True)
class Appointment:
    begin: dt.datetime
    end: dt.datetime
    lane: int = 0          # pre-assigned overlap lane, 0 = base lane

    uid: str = ""
    text: str = ""


@dataclass(frozen=True)
class Group:
    start_index: int
    count: int
    begin: float           # fraction-begin of the first member
    end: float             # max fraction-end over members
    lane_count: int

    @property
    def length(self) -> float:
        return self.end - self.begin

    @property
    def stop_index(self) -> int:
        return self.start_index + self.count


@dataclass(frozen=True)
class LayoutCell:
    begin: float
    length: float
    content: Any = None    # Appointment-like, GroupLayout (day rows) or None (gap filler)

    @property
    def is_empty(self) -> bool:
        return self.content is None


@dataclass(frozen=True)
class GroupLayout:
    group: Group
    lanes: Tuple[Tuple[LayoutCell, ...], ...]


@dataclass(frozen=True)
class DayLayout:
    date: dt.date
    rows: Tuple[LayoutCell, ...]


@dataclass(frozen=True)
class DateWindow:
    first_visible_date: dt.date
    day_count: int

    def visible_dates(self) -> Tuple[dt.date, ...]:
        return tuple(self.first_visible_date + dt.timedelta(days=i) for i in range(self.day_count))

    def contains(self, d: dt.date) -> bool:
        return self.first_visible_date <= d < self.first_visible_date + dt.timedelta(days=self.day_count)


@dataclass(frozen=True)
class WeekLayout:
    window: DateWindow
    days: Tuple[DayLayout, ...]


@dataclass(frozen=True)
class CalendarView:
    mode: DisplayMode = DisplayMode.WEEK
    anchor_date: Optional[dt.date] = None
    day_count: int = 1     # only meaningful in Day mode
    alignment: DisplayPosition = DisplayPosition.LEFT
    first_day_of_week: Weekday = Weekday.SUNDAY


@dataclass(frozen=True)
class Viewport:
    offset_x: float
    offset_y: float
    width: float
    height: float
    content_width: float
    content_height: float

    def contains(self, x: float, y: float) -> bool:
        return (
            self.offset_x <= x < self.offset_x + self.width
            and self.offset_y <= y < self.offset_y + self.height
        )


Offset = Tuple[float, float]


@dataclass(frozen=True)
class ScrollResult:
    view: CalendarView
    offset: Optional[Offset] = None    # None = no scroll needed
    target: Optional[Offset] = field(default=None, compare=False)

    @property
    def is_noop(self) -> bool:
        return self.offset is None


__all__ = [
    "Appointment",
    "AppointmentLike",
    "CalendarView",
    "DateWindow",
    "DayLayout",
    "DisplayMode",
    "DisplayPosition",
    "Group",
    "GroupLayout",
    "LayoutCell",
    "Offset",
    "ScrollResult",
    "Viewport",
    "WeekLayout",
    "Weekday",
]
