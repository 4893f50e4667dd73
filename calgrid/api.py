"""calgrid.api

Stable *library* entrypoint for calgrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from calgrid.export import dumps_json, week_layout_to_dict
from calgrid.grouping import build_group, group_end, iter_groups, lane_count, lane_items, resolve_group
from calgrid.interval import fraction_begin, fraction_end, fraction_of_day, is_in_day, is_in_range
from calgrid.labels import day_header_texts, hour_texts
from calgrid.layout import day_layout, group_layout, lane_layout, week_layout
from calgrid.model import (
    Appointment,
    CalendarView,
    DateWindow,
    DayLayout,
    DisplayMode,
    DisplayPosition,
    Group,
    GroupLayout,
    LayoutCell,
    ScrollResult,
    Viewport,
    WeekLayout,
    Weekday,
)
from calgrid.scroll import day_span_extent, scroll_into_view, scroll_target, select_next, smooth_x_offset
from calgrid.session import CalendarSession, iter_displayed_items
from calgrid.validate import ItemsValidationError, load_items, load_items_from_json, validate_items_doc
from calgrid.window import (
    CalendarConfigError,
    date_window,
    days_to_move,
    days_to_show,
    first_visible_date,
    is_date_visible,
    step_view,
    visible_dates,
)


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
_PUBLIC_EXPORTS = (
    "Appointment",
    "CalendarConfigError",
    "CalendarSession",
    "CalendarView",
    "DateWindow",
    "DayLayout",
    "DisplayMode",
    "DisplayPosition",
    "Group",
    "GroupLayout",
    "ItemsValidationError",
    "LayoutCell",
    "ScrollResult",
    "Viewport",
    "WeekLayout",
    "Weekday",
    "build_group",
    "date_window",
    "day_header_texts",
    "day_layout",
    "day_span_extent",
    "days_to_move",
    "days_to_show",
    "dumps_json",
    "first_visible_date",
    "fraction_begin",
    "fraction_end",
    "fraction_of_day",
    "group_end",
    "group_layout",
    "hour_texts",
    "is_date_visible",
    "is_in_day",
    "is_in_range",
    "iter_displayed_items",
    "iter_groups",
    "lane_count",
    "lane_items",
    "lane_layout",
    "load_items",
    "load_items_from_json",
    "resolve_group",
    "scroll_into_view",
    "scroll_target",
    "select_next",
    "smooth_x_offset",
    "step_view",
    "validate_items_doc",
    "visible_dates",
    "week_layout",
    "week_layout_to_dict",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
