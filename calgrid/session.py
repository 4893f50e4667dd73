# calgrid/session.py
from __future__ import annotations

import datetime as dt
import logging
import threading
from dataclasses import replace
from typing import Iterator, List, Optional, Sequence

from .layout import week_layout
from .model import (
    AppointmentLike,
    CalendarView,
    DisplayMode,
    DisplayPosition,
    GroupLayout,
    ScrollResult,
    Viewport,
    WeekLayout,
    Weekday,
)
from .scroll import scroll_into_view, select_next
from .window import MAX_DAYS, CalendarConfigError, date_window, step_view

logger = logging.getLogger(__name__)


def iter_displayed_items(week: WeekLayout) -> Iterator[AppointmentLike]:
    """Items in display order: day by day, group by group, lane by lane."""
    for day in week.days:
        for row in day.rows:
            if not isinstance(row.content, GroupLayout):
                continue
            for lane in row.content.lanes:
                for cell in lane:
                    if cell.content is not None:
                        yield cell.content


class CalendarSession:
    """
    Holds the inputs the UI layer edits and republishes the whole week layout
    whenever one of them changes.

    Every recompute carries a generation token; only the newest token may
    publish, so a slow stale pass never replaces a newer layout and readers
    see either the previous or the new week, never a mix.
    """

    def __init__(self, view: CalendarView, items: Sequence[AppointmentLike] = ()) -> None:
        self._lock = threading.Lock()
        self._view = view
        self._items: List[AppointmentLike] = list(items)
        self._generation = 0
        self._current: Optional[WeekLayout] = None
        self.selected_index = -1

    # --- inputs -----------------------------------------------------------

    @property
    def view(self) -> CalendarView:
        return self._view

    @property
    def items(self) -> List[AppointmentLike]:
        return list(self._items)

    def set_items(self, items: Sequence[AppointmentLike]) -> Optional[WeekLayout]:
        self._items = list(items)
        return self.recompute()

    def set_view(self, view: CalendarView) -> Optional[WeekLayout]:
        if view.anchor_date is not None:
            date_window(view)  # raises CalendarConfigError before anything changes
        self._view = view
        return self.recompute()

    def set_mode(self, mode: DisplayMode) -> Optional[WeekLayout]:
        return self.set_view(replace(self._view, mode=mode))

    def set_anchor_date(self, anchor: dt.date) -> Optional[WeekLayout]:
        return self.set_view(replace(self._view, anchor_date=anchor))

    def set_alignment(self, alignment: DisplayPosition) -> Optional[WeekLayout]:
        return self.set_view(replace(self._view, alignment=alignment))

    def set_first_day_of_week(self, first_day: Weekday) -> Optional[WeekLayout]:
        return self.set_view(replace(self._view, first_day_of_week=first_day))

    def set_day_count(self, days: int) -> Optional[WeekLayout]:
        """Values below 1 are ignored; values above MAX_DAYS fail in Day mode."""
        days = int(days)
        if days < 1:
            logger.debug("ignoring day count %d", days)
            return self._current
        if self._view.mode == DisplayMode.DAY and days > MAX_DAYS:
            raise CalendarConfigError(f"Days must be between 1 and {MAX_DAYS}. Value: {days}")
        return self.set_view(replace(self._view, day_count=days))

    def step(self, steps: int = 1) -> Optional[WeekLayout]:
        return self.set_view(step_view(self._view, steps))

    # --- recompute / publish ----------------------------------------------

    def begin_recompute(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def publish(self, token: int, layout: WeekLayout) -> bool:
        """Install `layout` if `token` is still the newest; return whether it was."""
        with self._lock:
            if token != self._generation:
                logger.debug("dropping stale layout (token=%d latest=%d)", token, self._generation)
                return False
            self._current = layout
            return True

    def recompute(self) -> Optional[WeekLayout]:
        if self._view.anchor_date is None:
            return None
        token = self.begin_recompute()
        view, items = self._view, list(self._items)
        layout = week_layout(items, view)
        self.publish(token, layout)
        return self.current()

    def current(self) -> Optional[WeekLayout]:
        with self._lock:
            return self._current

    # --- selection --------------------------------------------------------

    def displayed_order(self) -> List[int]:
        week = self.current()
        if week is None:
            return []
        ids = {id(it): i for i, it in enumerate(self._items)}
        return [ids[id(it)] for it in iter_displayed_items(week) if id(it) in ids]

    def select_next(self, step: int = 1) -> int:
        nxt = select_next(self.displayed_order(), self.selected_index, step)
        if nxt is not None:
            self.selected_index = nxt
        return self.selected_index

    # --- navigation -------------------------------------------------------

    def scroll_into_view(self, index: int, viewport: Viewport) -> Optional[ScrollResult]:
        """Resolve the scroll for item `index`; re-anchors the session when needed."""
        if index < 0 or index >= len(self._items):
            return None
        res = scroll_into_view(self._view, self._items[index], viewport)
        if res.view != self._view:
            self.set_view(res.view)
        return res
