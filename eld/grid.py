"""
Purpose: Turn a day's duty-status intervals into the fixed ELD hour grid.
What it does:
For every (status, hour) pair, scan the entries in the order given and take
the FIRST one with that status whose interval touches the hour:

    floor(start_hour) <= hour < ceil(end_hour)

Consequences (intentional, this is a display approximation):
- overlapping same-status entries fill a cell once, with the first entry's tooltip
- boundary hours are over-claimed: a 2-minute sliver marks the whole hour

Daily totals are NOT derived from this grid; the backend's per-category sums
are the source of truth (see eld.daily_view).

Rule: Pure fold, no state kept between calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from trips.models import DutyStatus, LogEntry
from trips.palette import duty_status_color

# Row order of the paper/ELD log sheet
DEFAULT_STATUSES: Tuple[DutyStatus, ...] = (
    DutyStatus.OFF_DUTY,
    DutyStatus.SLEEPER_BERTH,
    DutyStatus.DRIVING,
    DutyStatus.ON_DUTY_NOT_DRIVING,
)

STATUS_LABELS = {
    DutyStatus.OFF_DUTY: "Off Duty",
    DutyStatus.SLEEPER_BERTH: "Sleeper Berth",
    DutyStatus.DRIVING: "Driving",
    DutyStatus.ON_DUTY_NOT_DRIVING: "On Duty (Not Driving)",
}

DEFAULT_HOURS: Tuple[int, ...] = tuple(range(24))

EMPTY_COLOR = "#ffffff"


def format_hour(hour: float) -> str:
    """Fractional hour -> "HH:MM" (5.5 -> "05:30", 24 -> "24:00")."""
    total_minutes = int(round(hour * 60))
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def _status_value(status) -> str:
    return getattr(status, "value", status)


def status_label(status) -> str:
    try:
        return STATUS_LABELS[DutyStatus(_status_value(status))]
    except ValueError:
        return str(_status_value(status)).replace("_", " ")


def covers_hour(entry: LogEntry, hour: int) -> bool:
    return math.floor(entry.start_hour) <= hour < math.ceil(entry.end_hour)


@dataclass(frozen=True)
class GridTooltip:
    location: str
    start: str
    end: str

    @property
    def text(self) -> str:
        return f"{self.location} ({self.start} - {self.end})"

    @classmethod
    def for_entry(cls, entry: LogEntry) -> GridTooltip:
        return cls(
            location=entry.location,
            start=format_hour(entry.start_hour),
            end=format_hour(entry.end_hour),
        )


@dataclass(frozen=True)
class GridCell:
    status: DutyStatus | str
    hour: int
    entry: Optional[LogEntry] = None

    @property
    def occupied(self) -> bool:
        return self.entry is not None

    @property
    def tooltip(self) -> Optional[GridTooltip]:
        if self.entry is None:
            return None
        return GridTooltip.for_entry(self.entry)

    @property
    def color(self) -> str:
        if self.entry is None:
            return EMPTY_COLOR
        return duty_status_color(self.entry.duty_status)


@dataclass(frozen=True)
class DutyGrid:
    """Dense status x hour grid; rows follow `statuses`, columns follow `hours`."""
    statuses: Tuple[DutyStatus | str, ...]
    hours: Tuple[int, ...]
    rows: Tuple[Tuple[GridCell, ...], ...]

    def row(self, status) -> Tuple[GridCell, ...]:
        wanted = _status_value(status)
        for row_status, row in zip(self.statuses, self.rows):
            if _status_value(row_status) == wanted:
                return row
        raise KeyError(f"Status not in grid: {wanted}")

    def cell(self, status, hour: int) -> GridCell:
        row = self.row(status)
        try:
            return row[self.hours.index(hour)]
        except ValueError:
            raise KeyError(f"Hour not in grid: {hour}") from None

    def occupied_hours(self, status) -> Tuple[int, ...]:
        return tuple(c.hour for c in self.row(status) if c.occupied)

    def iter_cells(self) -> Iterable[GridCell]:
        for row in self.rows:
            yield from row


def first_covering_entry(entries: Sequence[LogEntry], status, hour: int) -> Optional[LogEntry]:
    wanted = _status_value(status)
    for entry in entries:
        if entry.status_value == wanted and covers_hour(entry, hour):
            return entry
    return None


def build_grid(
    entries: Optional[Sequence[LogEntry]],
    statuses: Sequence[DutyStatus | str] = DEFAULT_STATUSES,
    hours: Iterable[int] = DEFAULT_HOURS,
) -> DutyGrid:
    """
    Build the status x hour occupancy grid for one day.
    `entries=None` is treated as an empty day.
    """
    entries = list(entries or [])
    hours = tuple(hours)
    statuses = tuple(statuses)

    rows = tuple(
        tuple(
            GridCell(status=status, hour=hour, entry=first_covering_entry(entries, status, hour))
            for hour in hours
        )
        for status in statuses
    )
    return DutyGrid(statuses=statuses, hours=hours, rows=rows)
