"""Example: Building a faceted grid and inspecting its layout.

This example demonstrates how to:
- Split a table into groups by column value and merge them back
- Facet a plot into columns by site and rows by year
- Give each column its own X scale while rows share Y scales

Run:
    python examples/facet_grid_example.py
"""

import logging

import pandas as pd

from facet_core.plot import FacetX, FacetY, Plot, grid_size, layout_frame
from facet_core.table import group_by, ungroup

logging.basicConfig(level=logging.INFO)

df = pd.DataFrame(
    {
        "site": ["north", "north", "south", "south", "north", "south"],
        "year": [2023, 2024, 2023, 2024, 2024, 2023],
        "rainfall": [410.0, 388.5, 122.0, 140.25, 402.0, 118.0],
    }
)

# Example 1: Group by site, then undo it
print("=" * 80)
print("Example 1: group_by / ungroup")
print("=" * 80)
grouped = group_by(df, "site", "year")
print(grouped.to_dataframe())
print(f"\nOne level up: {[str(gid) for gid in ungroup(grouped).tables()]}")

# Example 2: Facet into a site x year grid
print("\n" + "=" * 80)
print("Example 2: FacetX by site, FacetY by year")
print("=" * 80)
plot = Plot(df).add(
    FacetX(col="site", split_x_scales=True),
    FacetY(col="year", labeler=lambda y: f"year {y}"),
)
plot.train_scales("x", "rainfall")

print(layout_frame(plot))
print(f"\nGrid size (cols, rows): {grid_size(plot)}")
for scale in plot.scales("x"):
    print(f"X scale: {scale}")
