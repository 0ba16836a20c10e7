"""Axis scales.

Scales are shared between subplots by reference. A facet that splits scales
clones them, so each clone must be independent of the original.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Scale(ABC):
    """Abstract base class for axis scales."""

    @abstractmethod
    def clone(self) -> Scale:
        """Return an independent copy sharing no mutable state with self."""
        pass

    @abstractmethod
    def expand(self, data: np.ndarray) -> None:
        """Widen the scale's domain to cover data."""
        pass


class LinearScale(Scale):
    """Continuous scale over a numeric domain.

    Attributes:
        domain: (low, high) covering all data seen so far, or None before any
            data has been added.

    """

    def __init__(self) -> None:
        self.domain: tuple[float, float] | None = None

    def clone(self) -> LinearScale:
        s = LinearScale()
        s.domain = self.domain
        return s

    def expand(self, data: np.ndarray) -> None:
        values = np.asarray(data, dtype=float)
        if values.size == 0 or np.isnan(values).all():
            return
        lo, hi = float(np.nanmin(values)), float(np.nanmax(values))
        if self.domain is not None:
            lo, hi = min(lo, self.domain[0]), max(hi, self.domain[1])
        self.domain = (lo, hi)

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain})"
