"""Configuration constants and defaults for facet_core."""

from __future__ import annotations

from typing import Any

# Position axes a facet can split scales along
AXES = ("x", "y")

# Column holding the group path when a grouping is flattened to a DataFrame
DEFAULT_GROUP_COLUMN = "group"


def default_labeler(value: Any) -> str:
    """Render a facet value as its label text."""
    return str(value)
