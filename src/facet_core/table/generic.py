"""Type-erased column operations.

Columns are one-dimensional numpy arrays. Homogeneous scalar data keeps a
native dtype; anything else (tuples, mixed types, arbitrary objects) is
boxed in an ``object`` array. The helpers here gather, concatenate and
order such columns without caring about their element type.
"""

from __future__ import annotations

import datetime
import numbers
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd

from facet_core.exceptions import ColumnTypeError, SchemaError

# infer_dtype results that numpy can hold natively without boxing
_NATIVE_KINDS = {
    "integer",
    "floating",
    "mixed-integer-float",
    "boolean",
    "string",
    "bytes",
    "datetime64",
    "timedelta64",
}

# numpy dtype kinds with a total order: bool, signed, unsigned, float,
# datetime, timedelta, str, bytes
_ORDERED_KINDS = set("biufMmUS")

_TEXT_KINDS = {"U", "S"}


def as_column(values: Any) -> np.ndarray:
    """Convert a sequence of row values to a column array.

    Args:
        values: A list, tuple, pandas Series, numpy array, or other iterable.

    Returns:
        One-dimensional numpy array. Values that numpy cannot store natively
        are kept as Python objects.

    Raises:
        SchemaError: If values is a multi-dimensional array.

    """
    if isinstance(values, pd.Series):
        values = values.to_numpy()
    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise SchemaError(f"Columns must be one-dimensional, got shape {values.shape}")
        return values

    values = list(values)
    if pd.api.types.infer_dtype(values, skipna=False) in _NATIVE_KINDS:
        return np.asarray(values)
    return pd.Series(values, dtype=object).to_numpy()


def repeat(value: Any, n: int, dtype: np.dtype | None = None) -> np.ndarray:
    """Return a column holding value n times.

    Args:
        value: Value to repeat.
        n: Row count.
        dtype: dtype of the column the value came from. When None, the dtype
            is inferred from value alone.

    """
    if dtype is None:
        return as_column([value] * n)
    if dtype == object:
        return pd.Series([value] * n, dtype=object).to_numpy()
    return np.full(n, value, dtype=dtype)


class _NAKey:
    """Single key standing in for every missing value."""

    def __repr__(self) -> str:
        return "NA"


NA = _NAKey()


def is_na(value: Any) -> bool:
    """Report whether value is a missing scalar (None, NaN, NaT or pd.NA)."""
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def na_key(value: Any) -> Any:
    """Return value, or NA if value is missing, so all missing values compare equal."""
    return NA if is_na(value) else value


def object_key(value: Any) -> Any:
    """Return the group key of a value in an object column.

    Keys combine the dynamic type with the value, so 1, True and 1.0 are
    three different keys. Float NaNs share one key.
    """
    if isinstance(value, (float, np.floating)) and value != value:
        return (type(value), NA)
    return (type(value), value)


def multi_index(seq: np.ndarray, indices: Sequence[int]) -> np.ndarray:
    """Gather seq at indices, preserving the order of indices."""
    return seq[np.asarray(indices, dtype=np.intp)]


def _dtypes(seqs: Sequence[np.ndarray]) -> str:
    return ", ".join(str(s.dtype) for s in seqs)


def concat(*seqs: np.ndarray) -> np.ndarray:
    """Concatenate column sequences end to end.

    Raises:
        ColumnTypeError: If the sequences' element types cannot be combined.

    """
    if not seqs:
        return np.empty(0, dtype=object)
    kinds = {s.dtype.kind for s in seqs}
    if kinds & _TEXT_KINDS and kinds - _TEXT_KINDS - {"O"}:
        raise ColumnTypeError(f"Cannot concatenate text and non-text columns: {_dtypes(seqs)}")
    try:
        return np.concatenate(seqs)
    except TypeError as e:
        raise ColumnTypeError(f"Cannot concatenate columns of types {_dtypes(seqs)}") from e


def can_order(kind: str) -> bool:
    """Report whether a numpy dtype kind has a natural ascending order."""
    return kind in _ORDERED_KINDS


def _order_family(value: Any) -> str | None:
    if isinstance(value, (bool, np.bool_)):
        return "number"
    if isinstance(value, numbers.Real):
        return "number"
    if isinstance(value, str):
        return "str"
    if isinstance(value, bytes):
        return "bytes"
    if isinstance(value, (datetime.datetime, np.datetime64)):
        return "datetime"
    if isinstance(value, datetime.date):
        return "date"
    if isinstance(value, (datetime.timedelta, np.timedelta64)):
        return "timedelta"
    return None


def can_order_values(values: Iterable[Any]) -> bool:
    """Report whether values are all of one mutually orderable kind.

    Numbers (including booleans), strings, bytes, dates, datetimes and
    timedeltas are orderable among themselves. Anything else, or a mix of
    kinds, is not.
    """
    if isinstance(values, np.ndarray) and values.dtype != object:
        return can_order(values.dtype.kind)
    families = {_order_family(v) for v in values}
    return len(families) == 1 and None not in families


def sort(values: list[Any]) -> None:
    """Sort values in place in ascending order."""
    values.sort()
