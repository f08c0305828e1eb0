"""
Layout Base Types

Value types passed between the stages of the tiling pipeline.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..geometry import Box

if TYPE_CHECKING:
    from ..objects import View


# Edges closer than gap + EDGE_TOLERANCE count as touching. Absorbs the
# rounding noise of margin arithmetic.
EDGE_TOLERANCE = 5

# Upper bound on space-filling iterations per pass
MAX_FILL_ITERATIONS = 10


class TilingMode(Enum):
    """Automatic tiling mode."""

    OFF = "off"  # Stacking, the engine does nothing
    SMART = "smart"  # Preserve manually resized views, adapt neighbours
    GRID = "grid"  # Plain grid snapping, ignore resize state


class GridTemplate(Enum):
    """Named grid shapes selected by window count."""

    SINGLE = "1x1"
    SIDE_BY_SIDE = "2x1"
    STACKED = "1x2"
    QUAD = "2x2"
    QUAD_LEFT_SPAN = "2x2-left-span"  # Left column spans the full height
    WIDE = "3x2"
    TALL = "2x3"
    COLUMNS = "3xN"  # Three columns, rows = ceil(count / 3)


@dataclass(frozen=True)
class GridSpec:
    """Column/row layout for a given number of views."""

    count: int
    cols: int
    rows: int
    template: GridTemplate

    @property
    def last_row_count(self) -> int:
        """Number of views in the last row."""
        remainder = self.count % self.cols
        return remainder if remainder else self.cols

    @property
    def vertical_split(self) -> bool:
        """One full-height view on the left, the rest stacked on the right."""
        return self.template is GridTemplate.QUAD_LEFT_SPAN


@dataclass(frozen=True)
class ResizeTarget:
    """The view under (or most recently under) interactive resize.

    `geometry` is the view's last known content box; the full box is derived
    from it with the view's decoration margins.
    """

    view: "View"
    geometry: Box
