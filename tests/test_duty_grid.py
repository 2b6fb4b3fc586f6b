import pytest

from eld.grid import DEFAULT_STATUSES, build_grid, format_hour
from trips.models import DutyStatus, LogEntry
from trips.palette import duty_status_color


def entry(status, start, end, location=""):
    return LogEntry(duty_status=DutyStatus(status), start_hour=start, end_hour=end, location=location)


def test_driving_interval_marks_whole_hours_it_touches():
    grid = build_grid([entry("driving", 2, 5.5)])

    assert grid.occupied_hours(DutyStatus.DRIVING) == (2, 3, 4, 5)
    assert not grid.cell(DutyStatus.DRIVING, 6).occupied
    for status in (DutyStatus.OFF_DUTY, DutyStatus.SLEEPER_BERTH, DutyStatus.ON_DUTY_NOT_DRIVING):
        assert grid.occupied_hours(status) == ()


def test_grid_is_dense_four_by_twenty_four():
    grid = build_grid([])
    assert grid.statuses == DEFAULT_STATUSES
    assert len(grid.rows) == 4
    assert all(len(row) == 24 for row in grid.rows)
    assert sum(1 for _ in grid.iter_cells()) == 96


def test_overlapping_same_status_entries_fill_cell_once_with_first_tooltip():
    first = entry("on_duty_not_driving", 8, 9.5, "Chicago, IL")
    second = entry("on_duty_not_driving", 9, 11, "Gary, IN")
    grid = build_grid([first, second])

    shared = grid.cell("on_duty_not_driving", 9)
    assert shared.occupied
    assert shared.entry is first
    assert shared.tooltip.location == "Chicago, IL"
    assert grid.cell("on_duty_not_driving", 10).entry is second
    assert grid.occupied_hours(DutyStatus.ON_DUTY_NOT_DRIVING) == (8, 9, 10)


def test_short_sliver_over_claims_boundary_hour():
    grid = build_grid([entry("off_duty", 7.0, 7.0 + 2 / 60)])
    assert grid.occupied_hours(DutyStatus.OFF_DUTY) == (7,)


def test_tooltip_payload_formats_times():
    grid = build_grid([entry("sleeper_berth", 21.25, 24, "Omaha, NE")])

    tooltip = grid.cell(DutyStatus.SLEEPER_BERTH, 23).tooltip
    assert tooltip.location == "Omaha, NE"
    assert tooltip.start == "21:15"
    assert tooltip.end == "24:00"
    assert tooltip.text == "Omaha, NE (21:15 - 24:00)"


def test_unoccupied_cell_has_no_tooltip():
    cell = build_grid([]).cell(DutyStatus.DRIVING, 0)
    assert not cell.occupied
    assert cell.tooltip is None
    assert cell.color == "#ffffff"


def test_cell_color_follows_status_table():
    grid = build_grid([entry("driving", 0, 1)])
    assert grid.cell(DutyStatus.DRIVING, 0).color == duty_status_color(DutyStatus.DRIVING) == "#ef4444"


def test_custom_statuses_and_hours():
    grid = build_grid([entry("driving", 2, 5.5)], statuses=[DutyStatus.DRIVING], hours=range(4, 8))
    assert grid.hours == (4, 5, 6, 7)
    assert grid.occupied_hours("driving") == (4, 5)
    with pytest.raises(KeyError):
        grid.cell(DutyStatus.OFF_DUTY, 4)
    with pytest.raises(KeyError):
        grid.cell(DutyStatus.DRIVING, 0)


def test_unknown_status_entries_do_not_fill_standard_rows():
    odd = LogEntry(duty_status="yard_move", start_hour=1, end_hour=3)
    grid = build_grid([odd])
    assert not any(cell.occupied for cell in grid.iter_cells())


def test_none_entries_is_an_empty_day():
    assert not any(cell.occupied for cell in build_grid(None).iter_cells())


@pytest.mark.parametrize("hour, expected", [
    (0, "00:00"),
    (5.5, "05:30"),
    (7.999, "08:00"),
    (13.25, "13:15"),
    (24, "24:00"),
])
def test_format_hour(hour, expected):
    assert format_hour(hour) == expected
