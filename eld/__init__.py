#Expose the ELD grid pieces:
#Grid builder (status x hour occupancy)
#Daily view (grid + backend totals + entry rows)
#DataFrame export

from .grid import DEFAULT_HOURS, DEFAULT_STATUSES, DutyGrid, GridCell, GridTooltip, build_grid, format_hour
from .daily_view import DailyGridView, EntryRow, build_daily_view, build_daily_views
from .export import grid_to_dataframe, grid_tooltips_dataframe

__all__ = [
    "DEFAULT_HOURS",
    "DEFAULT_STATUSES",
    "DutyGrid",
    "GridCell",
    "GridTooltip",
    "build_grid",
    "format_hour",
    "DailyGridView",
    "EntryRow",
    "build_daily_view",
    "build_daily_views",
    "grid_to_dataframe",
    "grid_tooltips_dataframe",
]
