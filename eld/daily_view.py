"""
Purpose: Everything needed to show one ELD day.
What it does:
Bundles the hour grid with the backend's authoritative totals and the
detailed entry list (formatted times). Totals are copied, never recomputed
from the grid, because the grid over-claims boundary hours.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from trips.models import DailyLog, DutyStatus, LogEntry
from trips.palette import duty_status_color
from .grid import DutyGrid, build_grid, format_hour

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryRow:
    label: str
    start: str
    end: str
    location: str
    color: str

    @property
    def text(self) -> str:
        return f"{self.start} - {self.end} at {self.location}"

    @classmethod
    def for_entry(cls, entry: LogEntry) -> EntryRow:
        return cls(
            label=entry.display_name,
            start=format_hour(entry.start_hour),
            end=format_hour(entry.end_hour),
            location=entry.location,
            color=duty_status_color(entry.duty_status),
        )


@dataclass(frozen=True)
class DailyGridView:
    day_number: int
    date_label: str
    total_miles: float
    totals: Dict[DutyStatus, float]
    grid: DutyGrid
    entry_rows: Tuple[EntryRow, ...]

    @property
    def title(self) -> str:
        return f"Day {self.day_number} - {self.date_label}"


def _out_of_range(entry: LogEntry) -> bool:
    return not (0 <= entry.start_hour < entry.end_hour <= 24)


def build_daily_view(daily_log: DailyLog) -> DailyGridView:
    entries = daily_log.entries or ()

    # not enforced, only reported: the producing backend owns day splitting
    for entry in entries:
        if _out_of_range(entry):
            logger.debug("Day %s entry outside [0, 24]: %s-%s",
                         daily_log.day_number, entry.start_hour, entry.end_hour)

    return DailyGridView(
        day_number=daily_log.day_number,
        date_label=daily_log.date_label,
        total_miles=daily_log.total_miles,
        totals=daily_log.totals(),
        grid=build_grid(entries),
        entry_rows=tuple(EntryRow.for_entry(e) for e in entries),
    )


def build_daily_views(daily_logs: Optional[Sequence[DailyLog]]) -> Tuple[DailyGridView, ...]:
    return tuple(build_daily_view(log) for log in daily_logs or [])
