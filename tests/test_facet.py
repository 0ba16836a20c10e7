"""Tests for faceted plot layout and scale splitting."""

import pandas as pd
import pytest

from facet_core.exceptions import ConfigError, MissingColumnError
from facet_core.plot import (
    ROOT_SUBPLOT,
    FacetX,
    FacetY,
    Plot,
    Subplot,
    grid_size,
    layout_frame,
    subplot_of,
)
from facet_core.table import ROOT_GROUP_ID, flatten


def positions(p: Plot) -> list[tuple[int, int]]:
    df = layout_frame(p)
    return list(zip(df["x"].tolist(), df["y"].tolist()))


@pytest.fixture
def grid_df() -> pd.DataFrame:
    """A full site x year cross product."""
    return pd.DataFrame(
        {
            "site": ["a", "a", "b", "b"],
            "year": [2021, 2022, 2021, 2022],
            "v": [1.0, 2.0, 30.0, 40.0],
        }
    )


@pytest.fixture
def three_site_df() -> pd.DataFrame:
    return pd.DataFrame({"site": ["c", "a", "b", "a"], "v": [1.0, 2.0, 3.0, 4.0]})


class TestFacetLayout:
    """Tests for subplot positions and bands."""

    def test_unfaceted_plot_is_one_subplot(self, grid_df: pd.DataFrame) -> None:
        p = Plot(grid_df)
        assert positions(p) == [(0, 0)]
        assert grid_size(p) == (1, 1)
        assert subplot_of(ROOT_GROUP_ID) is ROOT_SUBPLOT

    def test_facet_x_orders_values(self) -> None:
        p = Plot(pd.DataFrame({"c": ["B", "A", "B", "A"], "v": [1, 2, 3, 4]}))
        p.add(FacetX(col="c"))

        # Groups stay in first-occurrence order; positions follow value order.
        assert positions(p) == [(1, 0), (0, 0)]
        assert grid_size(p) == (2, 1)

    def test_new_group_ids_carry_subplots(self, grid_df: pd.DataFrame) -> None:
        p = Plot(grid_df).add(FacetX(col="site"))

        for gid in p.data():
            assert gid.parent is ROOT_GROUP_ID
            assert isinstance(gid.label, Subplot)
            assert subplot_of(gid) is gid.label
            assert subplot_of(gid).parent is ROOT_SUBPLOT
        assert [str(gid) for gid in p.data()] == ["/[0 0]", "/[1 0]"]

    def test_facet_x_then_y_builds_grid(self, grid_df: pd.DataFrame) -> None:
        p = Plot(grid_df).add(FacetX(col="site"), FacetY(col="year"))

        assert sorted(positions(p)) == [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert grid_size(p) == (2, 2)
        df = layout_frame(p)
        assert df["col_labels"].tolist() == [["a"], ["a"], ["b"], ["b"]]
        assert df["row_labels"].tolist() == [["2021"], ["2022"], ["2021"], ["2022"]]
        assert df["rows"].tolist() == [1, 1, 1, 1]

    def test_facet_keeps_rows(self, grid_df: pd.DataFrame) -> None:
        p = Plot(grid_df).add(FacetX(col="site"), FacetY(col="year"))
        flat = flatten(p.data())
        assert sorted(flat.column("v").tolist()) == [1.0, 2.0, 30.0, 40.0]

    def test_composed_facets_nest_positions(self) -> None:
        df = pd.DataFrame({"a": ["p", "q", "q"], "b": [1, 1, 2]})
        p = Plot(df).add(FacetX(col="a"), FacetX(col="b"))

        # Subplot "p" has no b=2 rows but still reserves a slot for it.
        assert positions(p) == [(0, 0), (2, 0), (3, 0)]
        assert grid_size(p) == (4, 1)
        assert layout_frame(p)["col_labels"].tolist() == [["p", "1"], ["q", "1"], ["q", "2"]]

    def test_grid_stays_rectangular_with_missing_combinations(self) -> None:
        df = pd.DataFrame({"site": ["a", "b"], "v": [1.0, 2.0]})
        p = Plot(df).add(FacetX(col="site"), FacetY(col="site"))

        # Faceting again by an already-constant column splits every column
        # into both rows even though each column only has one of them.
        assert positions(p) == [(0, 0), (1, 1)]
        assert grid_size(p) == (2, 2)

    def test_missing_values_share_one_slot(self) -> None:
        df = pd.DataFrame({"a": ["p", "p", "q", "q"], "b": [1.0, float("nan"), 1.0, float("nan")]})
        p = Plot(df).add(FacetX(col="a"), FacetY(col="b"))

        # Every column's NaN rows land in the same, last row of the grid.
        assert positions(p) == [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert grid_size(p) == (2, 2)
        assert layout_frame(p)["row_labels"].tolist() == [["1.0"], ["nan"], ["1.0"], ["nan"]]

    def test_missing_values_in_object_column(self) -> None:
        df = pd.DataFrame({"k": ["b", None, "a", None], "v": [1, 2, 3, 4]})
        p = Plot(df).add(FacetX(col="k"))

        assert positions(p) == [(1, 0), (2, 0), (0, 0)]
        assert grid_size(p) == (3, 1)

    def test_unorderable_values_use_first_appearance(self) -> None:
        df = pd.DataFrame({"k": [(2, 0), (1, 0), (2, 0)], "v": [1, 2, 3]})
        p = Plot(df).add(FacetX(col="k"))
        assert positions(p) == [(0, 0), (1, 0)]

    def test_labeler(self, grid_df: pd.DataFrame) -> None:
        p = Plot(grid_df).add(FacetX(col="site", labeler=lambda v: f"site={v}"))
        assert layout_frame(p)["col_labels"].tolist() == [["site=a"], ["site=b"]]

    def test_subplot_string(self) -> None:
        assert str(Subplot(x=2, y=3)) == "[2 3]"
        assert repr(ROOT_SUBPLOT) == "Subplot[0 0]"


class TestFacetScales:
    """Tests for shared and split axis scales."""

    def test_shared_scales_by_default(self, three_site_df: pd.DataFrame) -> None:
        p = Plot(three_site_df)
        root_x = p.get_scale("x", ROOT_GROUP_ID)
        p.add(FacetX(col="site"))

        assert len(p.data()) == 3
        for gid in p.data():
            assert p.get_scale("x", gid) is root_x
        assert p.scales("x") == [root_x]

    def test_split_x_scales_clones_per_value(self, three_site_df: pd.DataFrame) -> None:
        p = Plot(three_site_df)
        root_x = p.get_scale("x", ROOT_GROUP_ID)
        p.add(FacetX(col="site", split_x_scales=True))

        scales = [p.get_scale("x", gid) for gid in p.data()]
        assert len({id(s) for s in scales}) == 3
        assert all(s is not root_x for s in scales)
        # y scales are untouched
        assert len(p.scales("y")) == 1

    def test_split_scales_are_independent(self, three_site_df: pd.DataFrame) -> None:
        p = Plot(three_site_df).add(FacetX(col="site", split_x_scales=True))
        p.train_scales("x", "v")

        domains = {str(subplot_of(gid)): p.get_scale("x", gid).domain for gid in p.data()}
        assert domains == {"[0 0]": (2.0, 4.0), "[1 0]": (3.0, 3.0), "[2 0]": (1.0, 1.0)}
        assert p.get_scale("x", ROOT_GROUP_ID).domain is None

    def test_split_shared_within_band(self, grid_df: pd.DataFrame) -> None:
        p = Plot(grid_df).add(
            FacetX(col="site", split_x_scales=True),
            FacetY(col="year", split_y_scales=True),
        )

        by_column: dict[int, set[int]] = {}
        by_row: dict[int, set[int]] = {}
        for gid in p.data():
            sub = subplot_of(gid)
            by_column.setdefault(sub.x, set()).add(id(p.get_scale("x", gid)))
            by_row.setdefault(sub.y, set()).add(id(p.get_scale("y", gid)))

        # One X scale per column and one Y scale per row.
        assert all(len(ids) == 1 for ids in by_column.values())
        assert all(len(ids) == 1 for ids in by_row.values())
        assert len(p.scales("x")) == 2
        assert len(p.scales("y")) == 2

    def test_split_y_only_at_facet_y(self, grid_df: pd.DataFrame) -> None:
        p = Plot(grid_df).add(FacetX(col="site"), FacetY(col="year", split_y_scales=True))

        assert len(p.scales("x")) == 1
        assert len(p.scales("y")) == 2


class TestFacetErrors:
    """Tests for facet configuration and data errors."""

    def test_empty_column_name(self) -> None:
        with pytest.raises(ConfigError, match="non-empty string"):
            FacetX(col="")

    def test_labeler_must_be_callable(self) -> None:
        with pytest.raises(ConfigError, match="callable"):
            FacetY(col="site", labeler="nope")

    def test_missing_column(self, grid_df: pd.DataFrame) -> None:
        p = Plot(grid_df)
        with pytest.raises(MissingColumnError):
            p.add(FacetX(col="nope"))
