"""
Purpose: Fixed semantic colour tables for markers and duty-status cells.
What it does:
Keeps each table as an ordered tuple of (predicate, colour) pairs so the
match order is an explicit, testable contract. The first matching entry wins;
anything unmatched gets the table's default colour.

Rule: No layout or rendering here, just the lookup.
"""

from __future__ import annotations

from typing import Any, Callable, Tuple

from .models import DutyStatus, SegmentType

Predicate = Callable[[Any], bool]
ColorTable = Tuple[Tuple[Predicate, str], ...]

NEUTRAL = "#6b7280"       # gray-500
MISSING = "#d1d5db"       # gray-300


def is_value(expected: str) -> Predicate:
    """Matches an enum member or its raw string value."""
    def matches(value: Any) -> bool:
        return getattr(value, "value", value) == expected
    return matches


MARKER_COLORS: ColorTable = (
    (is_value(SegmentType.DRIVING.value), "#ef4444"),        # red-500
    (is_value(SegmentType.FUEL.value), "#eab308"),           # yellow-500
    (is_value(SegmentType.PICKUP.value), "#22c55e"),         # green-500
    (is_value(SegmentType.DROPOFF.value), "#16a34a"),        # green-600
    (is_value(SegmentType.SLEEPER_BERTH.value), "#3b82f6"),  # blue-500
    (is_value(SegmentType.REST_BREAK.value), "#a855f7"),     # purple-500
)

DUTY_STATUS_COLORS: ColorTable = (
    (is_value(DutyStatus.DRIVING.value), "#ef4444"),
    (is_value(DutyStatus.ON_DUTY_NOT_DRIVING.value), "#eab308"),
    (is_value(DutyStatus.SLEEPER_BERTH.value), "#3b82f6"),
    (is_value(DutyStatus.OFF_DUTY.value), NEUTRAL),
)


def lookup_color(table: ColorTable, value: Any, default: str) -> str:
    for predicate, color in table:
        if predicate(value):
            return color
    return default


def marker_color(segment_type: Any) -> str:
    return lookup_color(MARKER_COLORS, segment_type, NEUTRAL)


def duty_status_color(status: Any) -> str:
    return lookup_color(DUTY_STATUS_COLORS, status, MISSING)
