"""Domain-specific exceptions for facet_core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from FacetCoreError for easy catching.
"""


class FacetCoreError(Exception):
    """Base exception for all facet_core errors.

    Users can catch this exception to handle any grouping or faceting error.
    """

    pass


class ConfigError(FacetCoreError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - A facet is configured without a column name
    - A labeler is not callable
    """

    pass


class SchemaError(FacetCoreError):
    """Raised when a table's columns do not match what an operation needs.

    This exception is raised when:
    - A column name is added twice to the same table
    - Non-constant columns have different lengths
    - A column is not one-dimensional
    """

    pass


class MissingColumnError(SchemaError):
    """Raised when a named column is absent from a table."""

    pass


class ColumnTypeError(FacetCoreError):
    """Raised when column sequences of incompatible types are combined."""

    pass


class GroupKeyError(FacetCoreError):
    """Raised when a value cannot be used as a group key.

    Group keys must be hashable so that equal values land in the same group.
    """

    pass


class GroupingError(FacetCoreError):
    """Raised when a grouping is malformed.

    This exception is raised when:
    - The same GroupID is added to a grouping twice
    - Groups sharing a parent are not contiguous when ungrouping
    """

    pass
