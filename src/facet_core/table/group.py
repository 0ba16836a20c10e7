"""Regrouping operations over groupings of tables.

group_by splits every group by column value, ungroup merges one level of
splitting back together, and flatten collapses a grouping to one table.
Rows are filtered, never reordered: within any output group, rows keep the
relative order they had in the input.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from facet_core.exceptions import GroupingError, GroupKeyError, MissingColumnError
from facet_core.table import generic
from facet_core.table.grouping import (
    ROOT_GROUP_ID,
    Grouping,
    GroupingBuilder,
    GroupID,
    as_grouping,
)
from facet_core.table.table import Table, TableBuilder

logger = logging.getLogger(__name__)


def _split_object_rows(seq: np.ndarray, name: str) -> list[tuple[object, np.ndarray]]:
    # Keys carry the dynamic type, and each group keeps its first original value.
    firsts: dict[object, object] = {}
    rows: dict[object, list[int]] = {}
    for i, x in enumerate(seq):
        try:
            key = generic.object_key(x)
            if key not in rows:
                firsts[key] = x
                rows[key] = []
        except TypeError as e:
            raise GroupKeyError(
                f"Column '{name}' contains values that cannot be group keys: {e}"
            ) from e
        rows[key].append(i)
    return [(firsts[key], np.asarray(idx, dtype=np.intp)) for key, idx in rows.items()]


def _split_rows(seq: np.ndarray, name: str) -> list[tuple[object, np.ndarray]]:
    """Partition row indices of seq by value, in first-occurrence order.

    Object columns are scanned directly so that values of different types
    stay apart and group values are the original objects. Native columns are
    factorized, with all NaNs in one group.

    Returns:
        List of (value, row indices) pairs. Row indices are ascending.

    """
    if seq.dtype == object:
        return _split_object_rows(seq, name)

    codes, uniques = pd.factorize(seq, sort=False, use_na_sentinel=False)

    # A stable sort of the codes lists each group's rows in original order.
    order = np.argsort(codes, kind="stable")
    bounds = np.cumsum(np.bincount(codes, minlength=len(uniques)))[:-1]
    return list(zip(uniques, np.split(order, bounds)))


def _subtable(t: Table, col: str, value: object, rows: np.ndarray) -> Table:
    b = TableBuilder(nrows=len(rows))
    for name in t.columns():
        if name == col:
            # Promote the group-by column to a constant of the same dtype.
            b.add_const(name, value, t.column_dtype(name))
            continue
        cv, ok = t.const(name)
        if ok:
            b.add_const(name, cv, t.column_dtype(name))
            continue
        b.add(name, generic.multi_index(t.column(name), rows))
    return b.done()


def group_by(g: Grouping | Table | pd.DataFrame, *cols: str) -> Grouping:
    """Sub-divide all groups so each group's rows share values for cols.

    Each group is split by the first column, then the result is split by the
    next, and so on. Sub-groups are emitted in order of each value's first
    appearance, and grouped-by columns become constant columns.

    In object columns values are keyed by type as well as value, so 1, True
    and 1.0 form three groups. Missing values get their own group: all NaNs
    share one, and None is kept apart from NaN.

    Args:
        g: Grouping, Table or DataFrame to split.
        *cols: Column names to group by. With none, g is returned as is.

    Returns:
        New Grouping whose group ids extend the input group ids with the
        grouped-by values as labels.

    Raises:
        MissingColumnError: If a table lacks one of cols.
        GroupKeyError: If a column holds unhashable values.

    Example:
        >>> t = Table.from_dict({"g": [1, 1, 2, 2], "v": [10, 20, 30, 40]})
        >>> [str(gid) for gid in group_by(t, "g").tables()]
        ['/1', '/2']

    """
    g = as_grouping(g)
    if not cols:
        return g

    col = cols[0]
    out = GroupingBuilder()
    for gid, t in g.items():
        cv, ok = t.const(col)
        if ok:
            # Grouping by a constant is trivial.
            out.add(gid.extend(cv), t)
            continue

        if col not in t:
            raise MissingColumnError(
                f"Cannot group by '{col}': group {gid} has columns {t.columns()}"
            )
        for value, rows in _split_rows(t.must_column(col), col):
            out.add(gid.extend(value), _subtable(t, col, value, rows))

    result = out.done()
    logger.debug(f"Grouped {len(g)} group(s) by '{col}' into {len(result)} group(s)")
    return group_by(result, *cols[1:])


def ungroup(g: Grouping | Table | pd.DataFrame) -> Grouping:
    """Undo the most recent group_by.

    Adjacent groups that share a parent are concatenated into one group
    identified by that parent.

    Raises:
        GroupingError: If groups sharing a parent are not adjacent, which
            happens when a grouping was reordered after group_by.

    """
    g = as_grouping(g)
    groups = g.tables()
    if not groups or (len(groups) == 1 and groups[0] is ROOT_GROUP_ID):
        return g

    out = GroupingBuilder()
    flushed: set[GroupID] = set()
    run_gid = groups[0].parent
    run_tabs: list[Table] = []
    for gid in groups:
        if gid.parent is not run_gid:
            # Flush the run.
            out.add(run_gid, concat_rows(*run_tabs))
            flushed.add(run_gid)

            run_gid = gid.parent
            if run_gid in flushed:
                raise GroupingError(
                    f"Groups under {run_gid} are not contiguous; cannot ungroup"
                )
            run_tabs = []
        run_tabs.append(g.table(gid))
    # Flush the last run.
    out.add(run_gid, concat_rows(*run_tabs))

    result = out.done()
    logger.debug(f"Ungrouped {len(groups)} group(s) into {len(result)} group(s)")
    return result


def flatten(g: Grouping | Table | pd.DataFrame) -> Table:
    """Concatenate all groups of g into a single Table.

    This is equivalent to repeatedly ungrouping g. A single group's table is
    returned as is, not copied.
    """
    g = as_grouping(g)
    groups = g.tables()
    if not groups:
        return Table()
    if len(groups) == 1:
        return g.table(groups[0])
    return concat_rows(*(g.table(gid) for gid in groups))


def concat_rows(*tabs: Table) -> Table:
    """Concatenate the rows of tabs into a single Table.

    All tables must have the same columns in the same order; the first
    table's column list is used. Constant columns are materialized.
    """
    if not tabs:
        return Table()
    if len(tabs) == 1:
        return tabs[0]

    out = TableBuilder(nrows=sum(len(t) for t in tabs))
    for col in tabs[0].columns():
        out.add(col, generic.concat(*(t.column(col) for t in tabs)))
    return out.done()
