# calgrid/export.py
from __future__ import annotations

import json
from typing import Any, Dict, List

from .model import DayLayout, GroupLayout, LayoutCell, ScrollResult, WeekLayout

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore


def _item_to_dict(item: Any) -> Dict[str, Any]:
    return {
        "uid": getattr(item, "uid", ""),
        "text": getattr(item, "text", ""),
        "begin": item.begin.isoformat(),
        "end": item.end.isoformat(),
        "lane": int(item.lane),
    }


def _cell_to_dict(cell: LayoutCell) -> Dict[str, Any]:
    out: Dict[str, Any] = {"begin": cell.begin, "length": cell.length}
    if cell.content is None:
        out["kind"] = "empty"
    elif isinstance(cell.content, GroupLayout):
        out["kind"] = "group"
        out["group"] = group_layout_to_dict(cell.content)
    else:
        out["kind"] = "item"
        out["item"] = _item_to_dict(cell.content)
    return out


def group_layout_to_dict(gl: GroupLayout) -> Dict[str, Any]:
    g = gl.group
    return {
        "start_index": g.start_index,
        "count": g.count,
        "begin": g.begin,
        "end": g.end,
        "lane_count": g.lane_count,
        "lanes": [[_cell_to_dict(c) for c in lane] for lane in gl.lanes],
    }


def day_layout_to_dict(day: DayLayout) -> Dict[str, Any]:
    return {
        "date": day.date.isoformat(),
        "rows": [_cell_to_dict(c) for c in day.rows],
    }


def week_layout_to_dict(week: WeekLayout) -> Dict[str, Any]:
    dates: List[str] = [d.isoformat() for d in week.window.visible_dates()]
    return {
        "first_visible_date": week.window.first_visible_date.isoformat(),
        "day_count": week.window.day_count,
        "visible_dates": dates,
        "days": [day_layout_to_dict(d) for d in week.days],
    }


def scroll_result_to_dict(res: ScrollResult) -> Dict[str, Any]:
    return {
        "anchor_date": res.view.anchor_date.isoformat() if res.view.anchor_date else None,
        "noop": res.is_noop,
        "offset": list(res.offset) if res.offset is not None else None,
    }


def dumps_json(data: Dict[str, Any], *, indent: bool = False) -> str:
    if orjson is not None:
        opt = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(data, option=opt).decode("utf-8")
    if indent:
        return json.dumps(data, ensure_ascii=False, indent=2)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
