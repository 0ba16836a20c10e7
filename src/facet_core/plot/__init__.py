"""Plots, axis scales and faceted layout.

Example:
    >>> import pandas as pd
    >>> from facet_core.plot import FacetX, FacetY, Plot, grid_size
    >>>
    >>> df = pd.DataFrame(
    ...     {"site": ["a", "a", "b", "b"], "year": [1, 2, 1, 2], "v": [1.0, 2.0, 3.0, 4.0]}
    ... )
    >>> p = Plot(df).add(FacetX(col="site"), FacetY(col="year", split_y_scales=True))
    >>> grid_size(p)
    (2, 2)

"""

from facet_core.plot.facet import (
    ROOT_SUBPLOT,
    Band,
    FacetCommon,
    FacetX,
    FacetY,
    Subplot,
    subplot_of,
)
from facet_core.plot.layout import grid_size, layout_frame
from facet_core.plot.plot import Plot, PlotOp
from facet_core.plot.scale import LinearScale, Scale

__all__ = [
    "ROOT_SUBPLOT",
    "Band",
    "FacetCommon",
    "FacetX",
    "FacetY",
    "LinearScale",
    "Plot",
    "PlotOp",
    "Scale",
    "Subplot",
    "grid_size",
    "layout_frame",
    "subplot_of",
]
