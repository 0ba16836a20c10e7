"""Group identities and groupings of tables.

GroupIDs form an append-only tree rooted at ROOT_GROUP_ID. Each GroupID is
distinguished by identity, not by its label: extending the same parent twice
with the same label yields two different groups. A Grouping is an ordered
collection of (GroupID, Table) pairs.
"""

from __future__ import annotations

from typing import Any, Iterator

import pandas as pd

from facet_core.config import DEFAULT_GROUP_COLUMN
from facet_core.exceptions import GroupingError
from facet_core.table.table import Table


class GroupID:
    """A node in the group identity tree.

    Equality and hashing are by identity. The label is diagnostic metadata;
    callers may store semantic information in it, but it is never a key.
    """

    __slots__ = ("_parent", "_label")

    def __init__(self, parent: GroupID | None = None, label: Any = None) -> None:
        # Only the root is built without a parent; use extend() for the rest.
        self._parent = self if parent is None else parent
        self._label = label

    def extend(self, label: Any) -> GroupID:
        """Return a new child of this GroupID.

        The result is distinct from every existing GroupID, even if label
        duplicates the label of an existing sibling.
        """
        return GroupID(self, label)

    @property
    def parent(self) -> GroupID:
        """The parent GroupID. The root is its own parent."""
        return self._parent

    @property
    def label(self) -> Any:
        return self._label

    def is_root(self) -> bool:
        return self._parent is self

    def ancestors(self) -> Iterator[GroupID]:
        """Yield this GroupID and each ancestor up to, excluding, the root."""
        g = self
        while not g.is_root():
            yield g
            g = g._parent

    def __str__(self) -> str:
        """Return the path "/l1/l2/l3", or "/" for the root.

        Purely diagnostic: distinct GroupIDs may render identically.
        """
        if self.is_root():
            return "/"
        parts = [f"/{g._label}" for g in self.ancestors()]
        return "".join(reversed(parts))

    def __repr__(self) -> str:
        return f"GroupID({self})"


ROOT_GROUP_ID = GroupID()


class Grouping:
    """Ordered, read-only collection of (GroupID, Table) pairs.

    Iteration order is insertion order. It need not follow tree topology.
    """

    __slots__ = ("_tables",)

    def __init__(self) -> None:
        self._tables: dict[GroupID, Table] = {}

    def tables(self) -> list[GroupID]:
        """Return the group ids in iteration order."""
        return list(self._tables)

    def table(self, gid: GroupID) -> Table:
        """Return the table for gid.

        Raises:
            GroupingError: If gid is not part of this grouping.

        """
        try:
            return self._tables[gid]
        except KeyError:
            raise GroupingError(f"Group {gid} is not in this grouping") from None

    def items(self) -> Iterator[tuple[GroupID, Table]]:
        return iter(self._tables.items())

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[GroupID]:
        return iter(self._tables)

    def __contains__(self, gid: object) -> bool:
        return gid in self._tables

    def __repr__(self) -> str:
        return f"Grouping({', '.join(str(g) for g in self._tables)})"

    def to_dataframe(self, group_column: str = DEFAULT_GROUP_COLUMN) -> pd.DataFrame:
        """Flatten all groups into one DataFrame with a group path column.

        Args:
            group_column: Name of the column holding each row's group path.

        Returns:
            DataFrame with group_column first, then the first group's columns.

        """
        frames = []
        for gid, t in self._tables.items():
            df = t.to_dataframe()
            df.insert(0, group_column, str(gid))
            frames.append(df)
        if not frames:
            return pd.DataFrame(columns=[group_column])
        return pd.concat(frames, ignore_index=True)


class GroupingBuilder:
    """Incrementally assemble a Grouping, preserving insertion order."""

    def __init__(self) -> None:
        self._grouping = Grouping()

    def add(self, gid: GroupID, table: Table) -> None:
        """Add a group.

        Raises:
            GroupingError: If gid was already added.

        """
        if gid in self._grouping._tables:
            raise GroupingError(f"Duplicate group {gid}")
        self._grouping._tables[gid] = table

    def done(self) -> Grouping:
        """Return the built Grouping. The builder must not be used afterwards."""
        g = self._grouping
        self._grouping = Grouping()
        return g


def as_grouping(data: Grouping | Table | pd.DataFrame) -> Grouping:
    """Coerce data to a Grouping.

    A Table or DataFrame becomes a single group identified by ROOT_GROUP_ID.
    """
    if isinstance(data, Grouping):
        return data
    if isinstance(data, pd.DataFrame):
        data = Table.from_dataframe(data)
    if not isinstance(data, Table):
        raise TypeError(f"Expected Grouping, Table or DataFrame, got {type(data).__name__}")
    b = GroupingBuilder()
    b.add(ROOT_GROUP_ID, data)
    return b.done()
