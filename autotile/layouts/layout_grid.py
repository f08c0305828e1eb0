"""
Grid Layout

Grid sizing by window count and cell placement inside a layout rectangle.
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from .layout_base import GridSpec, GridTemplate
from ..geometry import Border, Box

if TYPE_CHECKING:
    from ..objects import View

log = logging.getLogger(__name__)


TEMPLATE_SHAPES: Dict[GridTemplate, Tuple[int, int]] = {
    GridTemplate.SINGLE: (1, 1),
    GridTemplate.SIDE_BY_SIDE: (2, 1),
    GridTemplate.STACKED: (1, 2),
    GridTemplate.QUAD: (2, 2),
    GridTemplate.QUAD_LEFT_SPAN: (2, 2),
    GridTemplate.WIDE: (3, 2),
    GridTemplate.TALL: (2, 3),
}

# count -> (horizontal template, vertical template, aspect threshold)
# The vertical template wins when preferred, or when there is no preference
# and the aspect ratio is at or below the threshold.
TEMPLATES_BY_COUNT: Dict[int, Tuple[GridTemplate, GridTemplate, Optional[float]]] = {
    1: (GridTemplate.SINGLE, GridTemplate.SINGLE, None),
    2: (GridTemplate.SIDE_BY_SIDE, GridTemplate.SIDE_BY_SIDE, None),
    3: (GridTemplate.QUAD, GridTemplate.QUAD_LEFT_SPAN, 1.5),
    4: (GridTemplate.QUAD, GridTemplate.QUAD, None),
    5: (GridTemplate.WIDE, GridTemplate.TALL, 1.3),
    6: (GridTemplate.WIDE, GridTemplate.WIDE, None),
}


def prefers_vertical(
    prefer_vertical: bool,
    prefer_horizontal: bool,
    aspect: Optional[float],
    threshold: float,
) -> bool:
    """Orientation tiebreak: explicit preference first, then aspect ratio.

    Conflicting preferences count as no preference. Without an aspect ratio
    the horizontal variant is chosen.
    """
    if prefer_vertical and not prefer_horizontal:
        return True
    if prefer_horizontal and not prefer_vertical:
        return False
    if aspect is None:
        return False
    return aspect <= threshold


def grid_for_template(count: int, template: GridTemplate) -> GridSpec:
    """Build a GridSpec for an explicit template."""
    if template is GridTemplate.COLUMNS:
        return GridSpec(count, 3, (count + 2) // 3, template)
    cols, rows = TEMPLATE_SHAPES[template]
    return GridSpec(count, cols, rows, template)


def size_grid(
    count: int,
    prefer_vertical: bool = False,
    prefer_horizontal: bool = False,
    aspect: Optional[float] = None,
) -> Optional[GridSpec]:
    """
    Pick the grid for a number of views.

    Args:
        count: Number of views to place
        prefer_vertical: Some view asked for a vertical split (tileDirection=yes)
        prefer_horizontal: Some view asked for a horizontal split (tileDirection=no)
        aspect: Layout area width / height, or None for no aspect tiebreak

    Returns:
        GridSpec, or None when there is nothing to place
    """
    if count <= 0:
        return None

    entry = TEMPLATES_BY_COUNT.get(count)
    if entry is None:
        return grid_for_template(count, GridTemplate.COLUMNS)

    horizontal, vertical, threshold = entry
    template = horizontal
    if threshold is not None and prefers_vertical(
        prefer_vertical, prefer_horizontal, aspect, threshold
    ):
        template = vertical
    return grid_for_template(count, template)


def cell_size(area: Box, grid: GridSpec, gap: int) -> Tuple[int, int]:
    """Cell width and height for a grid inside an area.

    Gaps are subtracted when the remaining interior is positive; otherwise the
    area is divided naively. Never negative.
    """
    inner_width = area.width - (grid.cols + 1) * gap
    inner_height = area.height - (grid.rows + 1) * gap
    if inner_width > 0 and inner_height > 0:
        return inner_width // grid.cols, inner_height // grid.rows
    return max(0, area.width // grid.cols), max(0, area.height // grid.rows)


class GridLayout:
    """
    Grid layout - views assigned to cells in registry order.

    An incomplete last row is widened so it still spans the area, and the
    last cell of each row/column absorbs the integer-division remainder.
    """

    def __init__(self, gap: int = 4):
        self.gap = gap

    @property
    def name(self) -> str:
        return "grid"

    def calculate(
        self,
        views: List["View"],
        area: Box,
        grid: Optional[GridSpec],
        margins: Callable[["View"], Border],
        allow_span: bool = True,
    ) -> Dict["View", Box]:
        """
        Calculate content boxes for views.

        Args:
            views: Views to place, in grid index order
            area: Layout rectangle
            grid: Grid to use
            margins: Decoration margins lookup
            allow_span: Honour the left-spanning 3-view template

        Returns:
            Dictionary mapping views to their content boxes
        """
        if not views or grid is None:
            return {}

        if allow_span and grid.vertical_split and len(views) == 3:
            cells = self._span_cells(area)
        else:
            cell_width, cell_height = cell_size(area, grid, self.gap)
            cells = [
                self._cell(idx, area, grid, cell_width, cell_height)
                for idx in range(len(views))
            ]

        result = {}
        for view, cell in zip(views, cells):
            result[view] = cell.inset(margins(view))
            log.debug("GRID CELL %s -> %s", view, cell)
        return result

    def _cell(
        self, idx: int, area: Box, grid: GridSpec, cell_width: int, cell_height: int
    ) -> Box:
        gap = self.gap
        col = idx % grid.cols
        row = idx // grid.cols
        is_last_row = row == grid.rows - 1

        if is_last_row and grid.last_row_count < grid.cols:
            # Incomplete last row - fewer, wider cells spanning the width
            row_length = grid.last_row_count
            width = max(0, (area.width - (row_length + 1) * gap) // row_length)
        else:
            row_length = grid.cols
            width = cell_width

        x = area.x + (col + 1) * gap + col * width
        if col == row_length - 1:
            width = max(width, area.right - gap - x)

        y = area.y + (row + 1) * gap + row * cell_height
        height = cell_height
        if is_last_row:
            height = max(height, area.bottom - gap - y)

        return Box(x, y, width, height)

    def _span_cells(self, area: Box) -> List[Box]:
        """One full-height cell on the left, two stacked cells on the right."""
        gap = self.gap
        half_width = max(0, (area.width - 3 * gap) // 2)
        half_height = max(0, (area.height - 3 * gap) // 2)

        left = Box(area.x + gap, area.y + gap, half_width, max(0, area.height - 2 * gap))

        right_x = area.x + 2 * gap + half_width
        right_width = max(0, area.right - gap - right_x)
        top_right = Box(right_x, area.y + gap, right_width, half_height)

        bottom_y = area.y + 2 * gap + half_height
        bottom_right = Box(right_x, bottom_y, right_width, max(0, area.bottom - gap - bottom_y))

        return [left, top_right, bottom_right]
