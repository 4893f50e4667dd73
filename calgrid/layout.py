# calgrid/layout.py
from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .grouping import iter_groups, lane_items
from .interval import fraction_begin, fraction_of_day, is_in_day, is_in_range
from .model import AppointmentLike, CalendarView, DayLayout, Group, GroupLayout, LayoutCell, WeekLayout
from .util.floats import is_greater_than, is_less_than, is_zero
from .window import date_window

logger = logging.getLogger(__name__)


def _gap_cell(previous_end: Optional[float], begin: float) -> Optional[LayoutCell]:
    start = previous_end if previous_end is not None else 0.0
    gap = begin - start
    if is_greater_than(gap, 0.0):
        return LayoutCell(begin=start, length=gap)
    return None


def _tail_cell(previous_end: Optional[float]) -> Optional[LayoutCell]:
    if previous_end is None:
        return LayoutCell(begin=0.0, length=1.0)
    if is_less_than(previous_end, 1.0):
        return LayoutCell(begin=previous_end, length=1.0 - previous_end)
    return None


def lane_layout(items: Sequence[AppointmentLike], group: Group, lane: int) -> Tuple[LayoutCell, ...]:
    """
    Cells of one lane of `group`, in group-local coordinates (0..1 = group extent).

    Gaps between members and the tail are filled with empty cells, so a
    non-empty lane always sums to 1.0. A lane without members yields ().
    """
    members = lane_items(items, group.start_index, group.count, lane)
    if not members:
        return ()

    group_length = group.length
    degenerate = is_zero(group_length)

    cells: List[LayoutCell] = []
    previous_end: Optional[float] = None
    for item in members:
        b, length = fraction_of_day(item)
        if degenerate:
            # Only zero-length members: nothing to scale against.
            local_begin, local_length = 0.0, 0.0
        else:
            local_begin = (b - group.begin) / group_length
            local_length = length / group_length

        gap = _gap_cell(previous_end, local_begin)
        if gap is not None:
            cells.append(gap)
        cells.append(LayoutCell(begin=local_begin, length=local_length, content=item))
        previous_end = local_begin + local_length

    tail = _tail_cell(previous_end)
    if tail is not None:
        cells.append(tail)
    return tuple(cells)


def group_layout(items: Sequence[AppointmentLike], group: Group) -> GroupLayout:
    return GroupLayout(
        group=group,
        lanes=tuple(lane_layout(items, group, lane) for lane in range(group.lane_count)),
    )


def day_items(items: Iterable[AppointmentLike], day: dt.date) -> List[AppointmentLike]:
    """Items laid out on `day`, sorted by wall-clock begin fraction (stable)."""
    out: List[AppointmentLike] = []
    for it in items:
        if is_in_day(it, day):
            out.append(it)
        elif it.begin.date() == day:
            logger.debug("ignoring overnight item in day layout: begin=%s end=%s", it.begin, it.end)
    out.sort(key=fraction_begin)
    return out


def day_layout(items: Iterable[AppointmentLike], day: dt.date) -> DayLayout:
    """
    Rows of one day: an empty row for every gap and one row per group, sized by
    the group's extent. Rows sum to 1.0.
    """
    todays = day_items(items, day)

    rows: List[LayoutCell] = []
    previous_end: Optional[float] = None
    for g in iter_groups(todays):
        gap = _gap_cell(previous_end, g.begin)
        if gap is not None:
            rows.append(gap)
        rows.append(LayoutCell(begin=g.begin, length=g.length, content=group_layout(todays, g)))
        previous_end = g.end

    tail = _tail_cell(previous_end)
    if tail is not None:
        rows.append(tail)
    return DayLayout(date=day, rows=tuple(rows))


def week_layout(items: Iterable[AppointmentLike], view: CalendarView) -> WeekLayout:
    """Full layout pass over every visible date of `view`."""
    window = date_window(view)
    visible = [it for it in items if is_in_range(it, window.first_visible_date, window.day_count)]
    logger.debug(
        "week layout: first=%s days=%d visible_items=%d",
        window.first_visible_date.isoformat(),
        window.day_count,
        len(visible),
    )
    return WeekLayout(
        window=window,
        days=tuple(day_layout(visible, d) for d in window.visible_dates()),
    )
