"""Read-outs of a faceted plot's grid layout."""

from __future__ import annotations

import pandas as pd

from facet_core.config import DEFAULT_GROUP_COLUMN
from facet_core.plot.facet import subplot_of
from facet_core.plot.plot import Plot

LAYOUT_COLUMNS = [DEFAULT_GROUP_COLUMN, "x", "y", "col_labels", "row_labels", "rows"]


def layout_frame(plot: Plot) -> pd.DataFrame:
    """Describe where each group of plot lands in the facet grid.

    Args:
        plot: Plot whose data has been faceted (or not; unfaceted groups all
            sit in the root subplot at (0, 0)).

    Returns:
        DataFrame with one row per group, in grouping order:
        - group: diagnostic group path
        - x, y: grid position of the group's subplot
        - col_labels, row_labels: facet labels of the subplot's vertical and
          horizontal bands, outermost first
        - rows: number of data rows in the group

    """
    records = []
    for gid, t in plot.data().items():
        sub = subplot_of(gid)
        records.append(
            {
                DEFAULT_GROUP_COLUMN: str(gid),
                "x": sub.x,
                "y": sub.y,
                "col_labels": sub.v_band.labels() if sub.v_band is not None else [],
                "row_labels": sub.h_band.labels() if sub.h_band is not None else [],
                "rows": len(t),
            }
        )
    return pd.DataFrame(records, columns=LAYOUT_COLUMNS)


def grid_size(plot: Plot) -> tuple[int, int]:
    """Return (ncols, nrows) of the facet grid covering plot's groups."""
    df = layout_frame(plot)
    if df.empty:
        return 0, 0
    return int(df["x"].max()) + 1, int(df["y"].max()) + 1
