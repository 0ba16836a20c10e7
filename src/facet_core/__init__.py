"""facet_core - hierarchical grouping of columnar tables and faceted plot layout.

This package provides two layers:

- **Tables and groupings**: columnar tables with constant columns, an
  identity tree of groups, and operations that split and merge groupings
- **Faceting**: subdividing a plot into a grid of subplots by data value,
  with per-band control over axis scale sharing

Module Structure:
    facet_core.table: Table, GroupID, Grouping, group_by, ungroup, flatten
    facet_core.plot: Plot, scales, FacetX/FacetY and layout read-outs
    facet_core.config: Constants and defaults
    facet_core.exceptions: Exception hierarchy

Quick Start:
    >>> import pandas as pd
    >>> from facet_core.table import group_by, flatten
    >>> from facet_core.plot import FacetX, Plot, layout_frame
    >>>
    >>> df = pd.DataFrame({"g": [1, 1, 2, 2], "v": [10, 20, 30, 40]})
    >>> grouped = group_by(df, "g")
    >>> len(grouped)
    2
    >>> len(flatten(grouped))
    4
    >>> p = Plot(df).add(FacetX(col="g"))
    >>> layout_frame(p)["x"].tolist()
    [0, 1]
"""

__version__ = "0.1.0"

from facet_core.exceptions import (
    ColumnTypeError,
    ConfigError,
    FacetCoreError,
    GroupingError,
    GroupKeyError,
    MissingColumnError,
    SchemaError,
)

__all__ = [
    "ColumnTypeError",
    "ConfigError",
    "FacetCoreError",
    "GroupKeyError",
    "GroupingError",
    "MissingColumnError",
    "SchemaError",
    "__version__",
]
