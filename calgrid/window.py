# calgrid/window.py
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import replace
from typing import Tuple

from .model import CalendarView, DateWindow, DisplayMode, DisplayPosition, Weekday

logger = logging.getLogger(__name__)

MAX_DAYS = 10


class CalendarConfigError(ValueError):
    """Raised for invalid view configuration (mode, day count, anchor)."""


def _require_anchor(view: CalendarView) -> dt.date:
    if view.anchor_date is None:
        raise CalendarConfigError("anchor_date is not set")
    return view.anchor_date


def _week_start(anchor: dt.date, first_day_of_week: Weekday) -> dt.date:
    # Signed subtraction on Sunday-based numbers, applied as-is. For a first
    # day after Sunday and an anchor before it this lands in the next week.
    offset = int(first_day_of_week) - int(Weekday.of(anchor))
    if offset > 0:
        logger.debug("week start offset %+d moves forward from anchor %s", offset, anchor.isoformat())
    return anchor + dt.timedelta(days=offset)


def first_visible_date(view: CalendarView) -> dt.date:
    """
    First date shown for `view`.

    Week/WorkWeek: the first day of the (work) week containing the anchor.
    Day: the date that puts the anchor at `view.alignment`.
    """
    anchor = _require_anchor(view)
    mode = view.mode

    if mode == DisplayMode.WEEK:
        if Weekday.of(anchor) == view.first_day_of_week:
            return anchor
        return _week_start(anchor, view.first_day_of_week)

    if mode == DisplayMode.WORK_WEEK:
        if Weekday.of(anchor) == view.first_day_of_week:
            return anchor
        start = _week_start(anchor, view.first_day_of_week)
        # Fixed Monday-Friday convention.
        if Weekday.of(start) == Weekday.SUNDAY:
            return start + dt.timedelta(days=1)
        return start

    if mode != DisplayMode.DAY:
        raise CalendarConfigError(f"Unsupported display mode: {mode!r}")

    days = int(view.day_count)
    if days == 1:
        return anchor
    if days > MAX_DAYS:
        raise CalendarConfigError(f"Days cannot be greater than {MAX_DAYS} (got {days})")

    if view.alignment == DisplayPosition.CENTER:
        # Truncating division: even counts put the anchor left of center.
        return anchor + dt.timedelta(days=-(days // 2) + 1)
    if view.alignment == DisplayPosition.RIGHT:
        return anchor + dt.timedelta(days=-days + 1)
    return anchor


def days_to_show(view: CalendarView) -> int:
    if view.mode == DisplayMode.DAY:
        return int(view.day_count)
    if view.mode == DisplayMode.WORK_WEEK:
        return 5
    if view.mode == DisplayMode.WEEK:
        return 7
    raise CalendarConfigError(f"Unsupported display mode: {view.mode!r}")


def days_to_move(view: CalendarView) -> int:
    """Days the anchor moves for one previous/next step (a full week in week modes)."""
    if view.mode == DisplayMode.DAY:
        return int(view.day_count)
    if view.mode in (DisplayMode.WEEK, DisplayMode.WORK_WEEK):
        return 7
    raise CalendarConfigError(f"Unsupported display mode: {view.mode!r}")


def date_window(view: CalendarView) -> DateWindow:
    return DateWindow(first_visible_date=first_visible_date(view), day_count=days_to_show(view))


def visible_dates(view: CalendarView) -> Tuple[dt.date, ...]:
    return date_window(view).visible_dates()


def is_date_visible(view: CalendarView, d: dt.date) -> bool:
    return date_window(view).contains(d)


def step_view(view: CalendarView, steps: int = 1) -> CalendarView:
    """Return `view` with its anchor moved `steps` pages (negative = back)."""
    anchor = _require_anchor(view)
    return replace(view, anchor_date=anchor + dt.timedelta(days=int(steps) * days_to_move(view)))
