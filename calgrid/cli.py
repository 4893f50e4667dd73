from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .export import dumps_json, scroll_result_to_dict, week_layout_to_dict
from .labels import day_header_texts
from .layout import week_layout
from .model import CalendarView, DisplayMode, DisplayPosition, ScrollResult, Viewport, Weekday
from .scroll import day_span_extent, scroll_into_view
from .util.console import eprint, setup_logging
from .util.timeparse import parse_date_yyyy_mm_dd, parse_day_span, parse_pair
from .validate import ItemsValidationError, load_items_from_json
from .window import CalendarConfigError

logger = logging.getLogger(__name__)

_MODES = {m.value: m for m in DisplayMode}
_ALIGNS = {a.value: a for a in DisplayPosition}
_WEEKDAYS = {w.name.lower(): w for w in Weekday}


def _choice(value: str, table: Dict[str, Any], flag: str) -> Any:
    key = str(value).strip().lower()
    if key not in table:
        raise SystemExit(f"Invalid {flag} value: {value!r} (expected one of: {', '.join(sorted(table))})")
    return table[key]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Lay out appointments on a day/week calendar grid and emit the layout as JSON."
    )
    ap.add_argument("--items", required=True, help="Items JSON file: {\"items\": [{uid, text, begin, end, lane}]}")
    ap.add_argument("--anchor", required=True, help="Anchor (selected) date YYYY-MM-DD")
    ap.add_argument(
        "--mode",
        default=os.getenv("CALGRID_MODE", "week"),
        help="day | week | workweek (default: env CALGRID_MODE or 'week')",
    )
    ap.add_argument("--days", type=int, default=1, help="Days to show in day mode, 1..10 (default: 1)")
    ap.add_argument(
        "--align",
        default=os.getenv("CALGRID_ALIGN", "left"),
        help="Anchor position in day mode: left | center | right (default: env CALGRID_ALIGN or 'left')",
    )
    ap.add_argument(
        "--first-day",
        default=os.getenv("CALGRID_FIRST_DAY", "sunday"),
        help="First day of the week (default: env CALGRID_FIRST_DAY or 'sunday')",
    )
    ap.add_argument("--scroll-to", default=None, help="Resolve a scroll instruction for the item with this uid")
    ap.add_argument("--viewport", default="800,600", help="Viewport size W,H for --scroll-to (default: 800,600)")
    ap.add_argument("--offset", default="0,0", help="Current scroll offset X,Y for --scroll-to (default: 0,0)")
    ap.add_argument("--content", default=None, help="Content size W,H for --scroll-to (default: derived)")
    ap.add_argument("--day-span", default=None, help="Visible hours, e.g. 07:00-19:00 (sizes the content height and the initial Y offset)")
    ap.add_argument("--out", default=None, help="Output JSON path (default: stdout)")
    ap.add_argument("--indent", action="store_true", help="Pretty-print JSON output")
    ap.add_argument("--log-level", default=os.getenv("CALGRID_LOG_LEVEL", "WARNING"), help="Logging level (default: WARNING)")
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        setup_logging(args.log_level)
    except ValueError as e:
        raise SystemExit(str(e))

    try:
        anchor = parse_date_yyyy_mm_dd(args.anchor)
    except ValueError as e:
        raise SystemExit(f"Invalid --anchor value: {e}")

    if args.days < 1:
        raise SystemExit(f"Invalid --days value: {args.days} (must be at least 1)")

    view = CalendarView(
        mode=_choice(args.mode, _MODES, "--mode"),
        anchor_date=anchor,
        day_count=int(args.days),
        alignment=_choice(args.align, _ALIGNS, "--align"),
        first_day_of_week=_choice(args.first_day, _WEEKDAYS, "--first-day"),
    )

    try:
        items = load_items_from_json(Path(args.items))
    except ItemsValidationError as e:
        raise SystemExit(str(e))
    except (OSError, ValueError) as e:
        raise SystemExit(f"Failed to load items: {e}")

    data: Dict[str, Any] = {}
    extent = _day_span(args)
    if extent is not None:
        data["day_span"] = {"content_height": extent[0], "offset_y": extent[1]}

    try:
        if args.scroll_to:
            res = _resolve_scroll(args, view, items, extent)
            data["scroll"] = scroll_result_to_dict(res)
            view = res.view
        week = week_layout(items, view)
    except CalendarConfigError as e:
        raise SystemExit(f"Invalid calendar configuration: {e}")

    data.update(week_layout_to_dict(week))
    data["headers"] = day_header_texts(view)
    text = dumps_json(data, indent=bool(args.indent))

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        logger.info("wrote %s", out_path)
        print(str(out_path))
    else:
        sys.stdout.write(text + "\n")
    return 0


def _day_span(args: argparse.Namespace) -> Optional[Tuple[float, Optional[float]]]:
    if not args.day_span:
        return None
    try:
        _, vh = parse_pair(args.viewport)
        _, oy = parse_pair(args.offset)
        begin, end = parse_day_span(args.day_span)
    except ValueError as e:
        raise SystemExit(f"Invalid --day-span geometry: {e}")
    return day_span_extent(vh, begin, end, oy)


def _resolve_scroll(
    args: argparse.Namespace,
    view: CalendarView,
    items: list,
    extent: Optional[Tuple[float, Optional[float]]],
) -> ScrollResult:
    matches = [it for it in items if it.uid == args.scroll_to]
    if not matches:
        raise SystemExit(f"--scroll-to: no item with uid {args.scroll_to!r}")

    try:
        vw, vh = parse_pair(args.viewport)
        ox, oy = parse_pair(args.offset)
        cw, ch = parse_pair(args.content) if args.content else (vw, vh)
    except ValueError as e:
        raise SystemExit(f"Invalid viewport geometry: {e}")

    if extent is not None:
        if not args.content:
            ch = extent[0]
        if extent[1] is not None:
            oy = extent[1]

    res = scroll_into_view(view, matches[0], Viewport(ox, oy, vw, vh, cw, ch))
    if res.is_noop:
        eprint(f"[calgrid] item {args.scroll_to} already visible")
    return res


if __name__ == "__main__":
    raise SystemExit(main())
