"""Plot state: grouped data plus per-group axis scales.

Scales are attached to GroupIDs. A group uses the scale attached to itself
or to its nearest ancestor, so a scale set at the root is shared by every
group until a facet attaches clones further down the tree.
"""

from __future__ import annotations

import logging
from typing import Protocol

import pandas as pd

from facet_core.plot.scale import LinearScale, Scale
from facet_core.table import ROOT_GROUP_ID, Grouping, GroupID, Table, as_grouping

logger = logging.getLogger(__name__)


class PlotOp(Protocol):
    """Anything that can be added to a Plot, such as a facet."""

    def apply(self, plot: Plot) -> None: ...


class Plot:
    """A plot under construction.

    Args:
        data: Initial data as a Grouping, Table or DataFrame. Defaults to an
            empty table.

    Example:
        >>> from facet_core.plot import FacetX, Plot
        >>> df = pd.DataFrame({"site": ["a", "b"], "v": [1.0, 2.0]})
        >>> p = Plot(df).add(FacetX(col="site"))
        >>> len(p.data())
        2

    """

    def __init__(self, data: Grouping | Table | pd.DataFrame | None = None) -> None:
        self._data = as_grouping(Table() if data is None else data)
        self._scales: dict[str, dict[GroupID, Scale]] = {}

    def data(self) -> Grouping:
        return self._data

    def set_data(self, data: Grouping | Table | pd.DataFrame) -> None:
        self._data = as_grouping(data)

    def add(self, *ops: PlotOp) -> Plot:
        """Apply each op to the plot in order and return the plot."""
        for op in ops:
            op.apply(self)
        return self

    def get_scale(self, axis: str, gid: GroupID) -> Scale:
        """Return the scale for axis that applies to group gid.

        If no scale is attached to gid or any ancestor, a default LinearScale
        is attached to the root and returned.
        """
        scales = self._scales.setdefault(axis, {})
        for g in gid.ancestors():
            if g in scales:
                return scales[g]
        if ROOT_GROUP_ID not in scales:
            logger.debug(f"Creating default {axis} scale")
            scales[ROOT_GROUP_ID] = LinearScale()
        return scales[ROOT_GROUP_ID]

    def set_scale_at(self, axis: str, scale: Scale, gid: GroupID) -> None:
        """Attach scale for axis to gid and, implicitly, its descendants."""
        self._scales.setdefault(axis, {})[gid] = scale

    def scales(self, axis: str) -> list[Scale]:
        """Return the distinct scales used by the current groups, in group order."""
        seen: dict[int, Scale] = {}
        for gid in self._data:
            s = self.get_scale(axis, gid)
            seen.setdefault(id(s), s)
        return list(seen.values())

    def train_scales(self, axis: str, col: str) -> None:
        """Expand each group's axis scale to cover that group's values of col."""
        for gid, t in self._data.items():
            self.get_scale(axis, gid).expand(t.column(col))

    def __repr__(self) -> str:
        return f"Plot({self._data!r})"
