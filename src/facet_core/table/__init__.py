"""Columnar tables and hierarchical grouping.

Example:
    >>> from facet_core.table import ROOT_GROUP_ID, Table, group_by, ungroup
    >>>
    >>> t = Table.from_dict({"g": [1, 1, 2, 2], "v": [10, 20, 30, 40]})
    >>> grouped = group_by(t, "g")
    >>> [str(gid) for gid in grouped.tables()]
    ['/1', '/2']
    >>> len(ungroup(grouped).table(ROOT_GROUP_ID))
    4

"""

from facet_core.table.group import concat_rows, flatten, group_by, ungroup
from facet_core.table.grouping import (
    ROOT_GROUP_ID,
    Grouping,
    GroupingBuilder,
    GroupID,
    as_grouping,
)
from facet_core.table.table import Table, TableBuilder

__all__ = [
    "ROOT_GROUP_ID",
    "GroupID",
    "Grouping",
    "GroupingBuilder",
    "Table",
    "TableBuilder",
    "as_grouping",
    "concat_rows",
    "flatten",
    "group_by",
    "ungroup",
]
