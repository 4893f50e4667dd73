# calgrid/grouping.py
from __future__ import annotations

from typing import Iterator, List, Sequence

from .interval import fraction_of_day
from .model import AppointmentLike, Group
from .util.floats import is_greater_than


def resolve_group(items: Sequence[AppointmentLike], begin_index: int) -> int:
    """
    Return the member count of the group starting at `begin_index`.

    `items` must be one day's items sorted ascending by begin. The group grows
    while items overlap its accumulated extent; a base-lane item (lane 0) that
    begins strictly after that extent starts the next group. Non-base-lane
    items always join, since their lane was assigned against this cluster.
    """
    if begin_index < 0 or begin_index >= len(items):
        raise IndexError(f"begin_index out of range: {begin_index} (items={len(items)})")

    b0, l0 = fraction_of_day(items[begin_index])
    end = b0 + l0
    count = 1
    for i in range(begin_index + 1, len(items)):
        b, length = fraction_of_day(items[i])
        # Compare against the extent accumulated before item i.
        if int(items[i].lane) == 0 and is_greater_than(b, end):
            break
        if b + length > end:
            end = b + length
        count += 1
    return count


def group_end(items: Sequence[AppointmentLike], start_index: int, count: int) -> float:
    """Max fraction-end over the group's members."""
    end = None
    for i in range(start_index, start_index + count):
        b, length = fraction_of_day(items[i])
        if end is None or b + length > end:
            end = b + length
    if end is None:
        raise ValueError("group must contain at least one item")
    return end


def lane_count(items: Sequence[AppointmentLike], start_index: int, count: int) -> int:
    top = 0
    for i in range(start_index, start_index + count):
        if int(items[i].lane) > top:
            top = int(items[i].lane)
    return top + 1


def lane_items(items: Sequence[AppointmentLike], start_index: int, count: int, lane: int) -> List[AppointmentLike]:
    """Members of one lane, in begin order."""
    return [items[i] for i in range(start_index, start_index + count) if int(items[i].lane) == lane]


def build_group(items: Sequence[AppointmentLike], start_index: int) -> Group:
    count = resolve_group(items, start_index)
    return Group(
        start_index=start_index,
        count=count,
        begin=fraction_of_day(items[start_index])[0],
        end=group_end(items, start_index, count),
        lane_count=lane_count(items, start_index, count),
    )


def iter_groups(items: Sequence[AppointmentLike]) -> Iterator[Group]:
    """Yield the groups partitioning `items` (contiguous, in order)."""
    i = 0
    while i < len(items):
        g = build_group(items, i)
        yield g
        i = g.stop_index
