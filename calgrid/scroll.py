# calgrid/scroll.py
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from .interval import HOURS_PER_DAY, fraction_begin
from .model import AppointmentLike, CalendarView, Offset, ScrollResult, Viewport
from .util.floats import is_zero
from .window import days_to_show, first_visible_date, is_date_visible

logger = logging.getLogger(__name__)


def scroll_target(view: CalendarView, item: AppointmentLike, content_width: float, content_height: float) -> Offset:
    """Point (x, y) of the item's begin inside the scrollable content."""
    day_offset = (item.begin.date() - first_visible_date(view)).days
    x = day_offset / days_to_show(view) * content_width
    y = fraction_begin(item) * content_height
    return x, y


def scroll_into_view(view: CalendarView, item: AppointmentLike, viewport: Viewport) -> ScrollResult:
    """
    Decide how to bring `item` into view.

    Returns the (possibly re-anchored) view and the offset to scroll to, or
    offset=None when the item's begin is already inside the viewport.
    """
    x, y = scroll_target(view, item, viewport.content_width, viewport.content_height)
    if viewport.contains(x, y):
        return ScrollResult(view=view, offset=None, target=(x, y))

    item_date = item.begin.date()
    if not is_date_visible(view, item_date):
        logger.debug("re-anchoring view on %s to reveal item", item_date.isoformat())
        view = replace(view, anchor_date=item_date)
        x, y = scroll_target(view, item, viewport.content_width, viewport.content_height)

    return ScrollResult(view=view, offset=(x, y), target=(x, y))


def day_span_extent(
    viewport_height: float,
    begin_of_day: dt.timedelta,
    end_of_day: dt.timedelta,
    current_offset_y: float,
    *,
    force: bool = False,
) -> Optional[Tuple[float, Optional[float]]]:
    """
    Size the scrollable content so [begin_of_day, end_of_day) fills the viewport.

    Returns (content_height, offset_y). offset_y is None when no scroll should
    be issued. Returns None for a negative viewport height.
    """
    if viewport_height < 0:
        return None

    begin_h = begin_of_day.total_seconds() / 3600.0
    end_h = end_of_day.total_seconds() / 3600.0
    if begin_h < 0.0 or end_h >= HOURS_PER_DAY or end_of_day <= begin_of_day:
        return viewport_height, None

    hour_height = viewport_height / (end_h - begin_h)
    content_height = hour_height * HOURS_PER_DAY
    if force or is_zero(current_offset_y):
        return content_height, begin_h * hour_height
    return content_height, current_offset_y


def smooth_x_offset(offset: Offset, last: Optional[Offset], threshold: float) -> Tuple[Offset, Offset]:
    """
    Suppress small horizontal scroll jitter.

    Returns (offset_to_apply, new_last). The caller threads `new_last` into the
    next call; pass last=None for the first one.
    """
    if last is None:
        return offset, offset
    x, y = offset
    if abs(x - last[0]) <= threshold:
        snapped = (last[0], y)
        return snapped, snapped
    return offset, offset


def select_next(order: Sequence[int], selected: int, step: int) -> Optional[int]:
    """
    Move the selection `step` places through `order` (displayed item indices),
    wrapping at both ends. An unknown selection counts as position -1.
    """
    if not order:
        return None
    try:
        pos = list(order).index(selected)
    except ValueError:
        pos = -1
    pos += int(step)
    if pos < 0:
        pos = len(order) - 1
    elif pos >= len(order):
        pos = 0
    return order[pos]
