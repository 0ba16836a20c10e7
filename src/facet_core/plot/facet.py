"""Faceting: subdividing a plot into a grid of subplots by data value.

Faceting is a grouping operation. Each distinct value of the facet column
becomes a separate subplot, and facets compose: if an earlier facet already
divided the plot into subplots, a further facet subdivides each of them.

Subplots and bands are recorded in the group tree itself. After a facet, each
group's GroupID carries a Subplot label, and the Subplot points at the bands
(columns and rows of the grid) it belongs to. Bands are the unit of scale
sharing: when a facet splits scales, every subplot in a new band shares one
cloned scale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from facet_core.config import AXES, default_labeler
from facet_core.exceptions import ConfigError, GroupKeyError
from facet_core.plot.plot import Plot
from facet_core.plot.scale import Scale
from facet_core.table import GroupID, GroupingBuilder, generic, group_by

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Band:
    """A row or column strip of subplots.

    A vertical band is a column of subplots labeled on top; a horizontal band
    is a row of subplots labeled on the right. Bands nest: each facet splits
    the bands it touches into child bands.
    """

    parent: Band | None
    label: str

    def labels(self) -> list[str]:
        """Return the labels from the outermost band to this one."""
        out = []
        b: Band | None = self
        while b is not None:
            out.append(b.label)
            b = b.parent
        return out[::-1]

    def __repr__(self) -> str:
        return f"Band({'/'.join(self.labels())})"


@dataclass(frozen=True, eq=False, repr=False)
class Subplot:
    """One cell of the facet grid.

    Attributes:
        parent: Subplot this one was split from, or None for the root.
        x: Column position; 0 is the leftmost column.
        y: Row position; 0 is the top row.
        v_band: Innermost vertical band (grid column) containing this subplot.
        h_band: Innermost horizontal band (grid row) containing this subplot.

    """

    parent: Subplot | None = None
    x: int = 0
    y: int = 0
    v_band: Band | None = None
    h_band: Band | None = None

    def __str__(self) -> str:
        return f"[{self.x} {self.y}]"

    def __repr__(self) -> str:
        return f"Subplot{self}"


ROOT_SUBPLOT = Subplot()


def subplot_of(gid: GroupID) -> Subplot:
    """Return the subplot owning gid by walking up its ancestors."""
    for g in gid.ancestors():
        if isinstance(g.label, Subplot):
            return g.label
    return ROOT_SUBPLOT


@dataclass
class _ValInfo:
    index: int
    label: str


@dataclass
class FacetCommon:
    """Base configuration for plot faceting operations.

    Attributes:
        col: Column to facet by. Each distinct value becomes a separate
            subplot. If the values are orderable, facets are in value order;
            otherwise they are in order of first appearance. Missing
            values form a single facet, placed last when values are ordered.
        split_x_scales: Give each band created by this facet (column for
            FacetX, row for FacetY) its own X scale. The default, False,
            keeps sharing X scales.
        split_y_scales: Same as split_x_scales, for Y scales.
        labeler: Function building a facet label from a data value. Defaults
            to str.

    Combined with facet composition, the split flags control scale sharing in
    an X/Y grid built by a FacetX followed by a FacetY:

    - Shared scales everywhere: both flags False in both facets.
    - X shared per column and Y per row: split_x_scales in the FacetX and
      split_y_scales in the FacetY.
    """

    col: str
    split_x_scales: bool = False
    split_y_scales: bool = False
    labeler: Callable[[Any], str] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.col, str) or not self.col:
            raise ConfigError(f"Facet column must be a non-empty string, got {self.col!r}")
        if self.labeler is not None and not callable(self.labeler):
            raise ConfigError(f"Facet labeler must be callable, got {self.labeler!r}")

    def _collect_values(self, gids: list[GroupID]) -> dict[Any, _ValInfo]:
        # Prior facets can leave several groups with the same value, and
        # every missing value is one facet value.
        labeler = self.labeler or default_labeler
        vals: dict[Any, _ValInfo] = {}
        for gid in gids:
            val = gid.label
            try:
                key = generic.na_key(val)
                if key not in vals:
                    vals[key] = _ValInfo(len(vals), labeler(val))
            except TypeError as e:
                raise GroupKeyError(
                    f"Facet column '{self.col}' value {val!r} cannot be a group key"
                ) from e

        ordered = [key for key in vals if key is not generic.NA]
        if generic.can_order_values(ordered):
            generic.sort(ordered)
            if generic.NA in vals:
                ordered.append(generic.NA)
            for i, key in enumerate(ordered):
                vals[key].index = i
        return vals

    def _apply(self, plot: Plot, direction: str) -> None:
        grouped = group_by(plot.data(), self.col)
        vals = self._collect_values(grouped.tables())
        nvals = len(vals)
        splits = dict(zip(AXES, (self.split_x_scales, self.split_y_scales)))

        # Split caches, discarded when this facet is done.
        subplots: dict[Subplot, list[Subplot]] = {}
        bands: dict[Band | None, list[Band]] = {}
        scales: dict[tuple[Band, Scale], Scale] = {}

        ndata = GroupingBuilder()
        for gid, t in grouped.items():
            sub = subplot_of(gid)

            # Split the old band into nvals bands in the orthogonal axis.
            band = sub.v_band if direction == "x" else sub.h_band
            nbands = bands.get(band)
            if nbands is None:
                nbands = [None] * nvals
                for info in vals.values():
                    nbands[info.index] = Band(parent=band, label=info.label)
                bands[band] = nbands

            # Split the old subplot into nvals subplots. Every value gets a
            # slot even if this subplot has no rows for it.
            nsubplots = subplots.get(sub)
            if nsubplots is None:
                nsubplots = [None] * nvals
                for info in vals.values():
                    if direction == "x":
                        ns = Subplot(
                            parent=sub,
                            x=sub.x * nvals + info.index,
                            y=sub.y,
                            v_band=nbands[info.index],
                            h_band=sub.h_band,
                        )
                    else:
                        ns = Subplot(
                            parent=sub,
                            x=sub.x,
                            y=sub.y * nvals + info.index,
                            v_band=sub.v_band,
                            h_band=nbands[info.index],
                        )
                    nsubplots[info.index] = ns
                subplots[sub] = nsubplots

            # Map this group to its new subplot.
            nsub = nsubplots[vals[generic.na_key(gid.label)].index]
            ngid = gid.parent.extend(nsub)
            ndata.add(ngid, t)

            # A band may already hold several scales, so each distinct
            # (band, scale) pair gets its own clone.
            nband = nsub.v_band if direction == "x" else nsub.h_band
            for axis, split in splits.items():
                if not split:
                    continue
                scale = plot.get_scale(axis, gid)
                nscale = scales.get((nband, scale))
                if nscale is None:
                    nscale = scale.clone()
                    scales[(nband, scale)] = nscale
                plot.set_scale_at(axis, nscale, ngid)

        plot.set_data(ndata.done())
        logger.info(
            f"Faceted '{self.col}' along {direction}: {nvals} value(s), "
            f"{len(subplots)} subplot(s) split into {len(subplots) * nvals}"
        )


@dataclass
class FacetX(FacetCommon):
    """Split a plot into columns."""

    def apply(self, plot: Plot) -> None:
        self._apply(plot, "x")


@dataclass
class FacetY(FacetCommon):
    """Split a plot into rows."""

    def apply(self, plot: Plot) -> None:
        self._apply(plot, "y")
