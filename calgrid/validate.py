"""Items document validation and loading (library-facing)."""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from calgrid.model import Appointment
from calgrid.util.timeparse import parse_iso_datetime


class ItemsValidationError(ValueError):
    """Raised when an items document fails validation."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _check_time(v: Any, label: str, errs: List[str]) -> Optional[dt.datetime]:
    if not isinstance(v, str) or not v.strip():
        errs.append(f"{label} must be non-empty ISO-8601 string")
        return None
    try:
        return parse_iso_datetime(v)
    except ValueError:
        errs.append(f"{label} is not a valid ISO-8601 timestamp: {v!r}")
        return None


def _is_aware(t: dt.datetime) -> bool:
    return t.tzinfo is not None and t.utcoffset() is not None


def validate_items_doc(doc: Any) -> List[str]:
    """Return a list of problems; empty means the document is usable.

    Intervals with end <= begin are NOT errors: the layout pass clamps them.
    Timestamps may be naive or carry a UTC offset, but not both in one document.
    """
    errs: List[str] = []
    if not isinstance(doc, dict):
        return ["items document must be an object"]

    items = doc.get("items")
    _require(isinstance(items, list), "items must be list", errs)
    if not isinstance(items, list):
        return errs

    doc_aware: Optional[bool] = None
    for i, it in enumerate(items):
        if not isinstance(it, dict):
            errs.append(f"items[{i}] must be object")
            continue
        begin = _check_time(it.get("begin"), f"items[{i}].begin", errs)
        end = _check_time(it.get("end"), f"items[{i}].end", errs)

        if begin is not None and end is not None:
            aware = _is_aware(begin)
            if aware != _is_aware(end):
                errs.append(f"items[{i}] mixes naive and offset-aware timestamps")
            elif doc_aware is None:
                doc_aware = aware
            elif aware != doc_aware:
                errs.append(
                    f"items[{i}] is {'offset-aware' if aware else 'naive'} but earlier items are "
                    f"{'offset-aware' if doc_aware else 'naive'}"
                )

        lane = it.get("lane", 0)
        _require(
            isinstance(lane, int) and not isinstance(lane, bool) and lane >= 0,
            f"items[{i}].lane must be non-negative int",
            errs,
        )
        for k in ("uid", "text"):
            v = it.get(k)
            if v is not None:
                _require(isinstance(v, str), f"items[{i}].{k} must be string", errs)

    return errs


def assert_valid_items_doc(doc: Any) -> None:
    errs = validate_items_doc(doc)
    if errs:
        msg = "Items document validation failed:\n" + "\n".join(f"- {e}" for e in errs)
        raise ItemsValidationError(msg)


def load_items(doc: Dict[str, Any]) -> List[Appointment]:
    """Validate `doc` and build Appointment values (document order kept)."""
    assert_valid_items_doc(doc)
    out: List[Appointment] = []
    for i, it in enumerate(doc["items"]):
        out.append(
            Appointment(
                begin=parse_iso_datetime(it["begin"]),
                end=parse_iso_datetime(it["end"]),
                lane=int(it.get("lane", 0)),
                uid=str(it.get("uid") or f"item-{i}"),
                text=str(it.get("text") or ""),
            )
        )
    return out


def load_items_from_json(path: Union[str, Path]) -> List[Appointment]:
    p = Path(path)
    doc = json.loads(p.read_text(encoding="utf-8"))
    return load_items(doc)
