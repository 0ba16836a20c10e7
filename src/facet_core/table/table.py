"""Columnar tables with constant columns.

A Table is an immutable, ordered collection of named columns. Each column
is either a sequence of per-row values or a constant: a single value that
logically repeats for every row. Grouping promotes the grouped-by column to
a constant in each group, so constants are first-class here.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

import numpy as np
import pandas as pd

from facet_core.exceptions import MissingColumnError, SchemaError
from facet_core.table import generic


class Table:
    """Immutable columnar table.

    Build tables with TableBuilder, Table.from_dict or Table.from_dataframe.
    Table() with no arguments is the empty table.

    Example:
        >>> t = Table.from_dict({"g": [1, 1, 2], "v": [10, 20, 30]})
        >>> t.columns()
        ['g', 'v']
        >>> len(t)
        3

    """

    __slots__ = ("_names", "_seqs", "_consts", "_const_dtypes", "_nrows")

    def __init__(self) -> None:
        self._names: list[str] = []
        self._seqs: dict[str, np.ndarray] = {}
        self._consts: dict[str, Any] = {}
        self._const_dtypes: dict[str, np.dtype | None] = {}
        self._nrows = 0

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        consts: Mapping[str, Any] | None = None,
    ) -> Table:
        """Create a Table from a mapping of column name to row values.

        Args:
            data: Column name -> sequence of row values, in column order.
            consts: Optional column name -> constant value, appended after data.

        Returns:
            Table instance.

        """
        b = TableBuilder()
        for name, seq in data.items():
            b.add(name, seq)
        for name, value in (consts or {}).items():
            b.add_const(name, value)
        return b.done()

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        consts: Mapping[str, Any] | None = None,
    ) -> Table:
        """Create a Table from a pandas DataFrame.

        The DataFrame index is discarded; rows keep their positional order.

        Args:
            df: Source DataFrame. Column labels are converted to str.
            consts: Optional constant columns to append.

        Returns:
            Table instance.

        """
        b = TableBuilder(nrows=len(df))
        for name in df.columns:
            b.add(str(name), df[name])
        for name, value in (consts or {}).items():
            b.add_const(name, value)
        return b.done()

    def to_dataframe(self) -> pd.DataFrame:
        """Return the table as a DataFrame, materializing constant columns."""
        return pd.DataFrame(
            {name: self.column(name) for name in self._names},
            index=pd.RangeIndex(self._nrows),
            columns=list(self._names),
        )

    def columns(self) -> list[str]:
        """Return column names in table order."""
        return list(self._names)

    def column(self, name: str) -> np.ndarray:
        """Return the row values of a column.

        Constant columns are materialized to the table's row count.

        Raises:
            MissingColumnError: If the column does not exist.

        """
        if name in self._seqs:
            return self._seqs[name]
        if name in self._consts:
            return generic.repeat(self._consts[name], self._nrows, self._const_dtypes[name])
        raise MissingColumnError(f"Unknown column '{name}'. Available: {self._names}")

    def must_column(self, name: str) -> np.ndarray:
        """Return the row values of a non-constant column.

        Raises:
            MissingColumnError: If the column is absent or constant.

        """
        if name not in self._seqs:
            if name in self._consts:
                raise MissingColumnError(f"Column '{name}' is constant")
            raise MissingColumnError(f"Unknown column '{name}'. Available: {self._names}")
        return self._seqs[name]

    def const(self, name: str) -> tuple[Any, bool]:
        """Return (value, True) if name is a constant column, else (None, False)."""
        if name in self._consts:
            return self._consts[name], True
        return None, False

    def is_const(self, name: str) -> bool:
        return name in self._consts

    def column_dtype(self, name: str) -> np.dtype | None:
        """Return the dtype of a column.

        For a constant column this is the dtype of the column it was promoted
        from, or None if it was created directly as a constant.

        Raises:
            MissingColumnError: If the column does not exist.

        """
        if name in self._seqs:
            return self._seqs[name].dtype
        if name in self._consts:
            return self._const_dtypes[name]
        raise MissingColumnError(f"Unknown column '{name}'. Available: {self._names}")

    def __contains__(self, name: object) -> bool:
        return name in self._seqs or name in self._consts

    def __len__(self) -> int:
        return self._nrows

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self) -> str:
        parts = []
        for name in self._names:
            if name in self._consts:
                parts.append(f"{name}=const {self._consts[name]!r}")
            else:
                parts.append(f"{name}={self._seqs[name].tolist()!r}")
        return f"Table({', '.join(parts)})"


class TableBuilder:
    """Incrementally assemble a Table.

    Args:
        nrows: Optional row count. When given, every added sequence must have
            this length, and a table made only of constant columns still
            reports this many rows.

    Example:
        >>> b = TableBuilder()
        >>> b.add("v", [1, 2, 3])
        >>> b.add_const("g", "a")
        >>> b.done()
        Table(v=[1, 2, 3], g=const 'a')

    """

    def __init__(self, nrows: int | None = None) -> None:
        self._table = Table()
        self._nrows = nrows

    def _check_name(self, name: str) -> None:
        if name in self._table:
            raise SchemaError(f"Duplicate column '{name}'")

    def add(self, name: str, seq: Any) -> None:
        """Add a column of row values."""
        self._check_name(name)
        col = generic.as_column(seq)
        if self._nrows is None:
            self._nrows = len(col)
        elif len(col) != self._nrows:
            raise SchemaError(
                f"Column '{name}' has {len(col)} rows, expected {self._nrows}"
            )
        self._table._names.append(name)
        self._table._seqs[name] = col

    def add_const(self, name: str, value: Any, dtype: np.dtype | None = None) -> None:
        """Add a constant column.

        Args:
            name: Column name.
            value: The constant value.
            dtype: dtype to materialize the column with, usually that of the
                column value was taken from. None infers it from value.

        """
        self._check_name(name)
        self._table._names.append(name)
        self._table._consts[name] = value
        self._table._const_dtypes[name] = dtype

    def done(self) -> Table:
        """Return the built Table. The builder must not be used afterwards."""
        t = self._table
        t._nrows = self._nrows or 0
        self._table = Table()
        return t
