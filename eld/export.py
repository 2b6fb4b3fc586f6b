"""
Tabular views of a DutyGrid (pandas), for notebooks, reports and snapshot tests.
"""

from __future__ import annotations

import pandas as pd

from .grid import DutyGrid, status_label


def grid_to_dataframe(grid: DutyGrid) -> pd.DataFrame:
    """Rows = duty status labels, columns = hours, values = occupied (bool)."""
    data = [[cell.occupied for cell in row] for row in grid.rows]
    return pd.DataFrame(
        data,
        index=[status_label(s) for s in grid.statuses],
        columns=list(grid.hours),
    )


def grid_tooltips_dataframe(grid: DutyGrid) -> pd.DataFrame:
    """One row per occupied cell: status, hour, location, start, end."""
    records = [
        {
            "status": status_label(cell.status),
            "hour": cell.hour,
            "location": cell.tooltip.location,
            "start": cell.tooltip.start,
            "end": cell.tooltip.end,
        }
        for cell in grid.iter_cells()
        if cell.occupied
    ]
    return pd.DataFrame(records, columns=["status", "hour", "location", "start", "end"])
