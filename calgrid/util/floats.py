# calgrid/util/floats.py
from __future__ import annotations

# Tolerance for fraction-of-day comparisons. 1e-9 of a day is ~86 microseconds,
# far below any displayable duration but above the drift of a few rescalings.
EPSILON = 1e-9


def is_zero(value: float, eps: float = EPSILON) -> bool:
    return abs(value) < eps


def is_equal(value: float, other: float, eps: float = EPSILON) -> bool:
    return is_zero(value - other, eps)


def is_greater_than(value: float, other: float, eps: float = EPSILON) -> bool:
    return (value - other) > eps


def is_greater_or_equal(value: float, other: float, eps: float = EPSILON) -> bool:
    return is_greater_than(value, other, eps) or is_equal(value, other, eps)


def is_less_than(value: float, other: float, eps: float = EPSILON) -> bool:
    return (value - other) < -eps


def is_less_or_equal(value: float, other: float, eps: float = EPSILON) -> bool:
    return is_less_than(value, other, eps) or is_equal(value, other, eps)
