"""
Space Filler

Post-pass that grows boundary views into space left between the occupied
bounding box and the usable area of an output.
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from .layout_base import EDGE_TOLERANCE, MAX_FILL_ITERATIONS
from .layout_resize import free_space
from ..geometry import Border, Box, Side, bounding_box, clamp_box

if TYPE_CHECKING:
    from ..objects import View

log = logging.getLogger(__name__)


# (usable area, eligible views) for one output
FillRegion = Tuple[Box, List["View"]]


class SpaceFiller:
    """Iteratively expands views touching the edges of the occupied area."""

    def __init__(self, gap: int = 4, max_iterations: int = MAX_FILL_ITERATIONS):
        self.gap = gap
        self.max_iterations = max_iterations

    def fill(
        self,
        regions: Sequence[FillRegion],
        margins: Callable[["View"], Border],
        apply: Callable[["View", Box], None],
        skip: Optional["View"] = None,
    ) -> int:
        """
        Fill residual gaps on every region.

        Args:
            regions: Usable area and eligible views per output
            margins: Decoration margins lookup
            apply: Called with (view, content box) for every expansion
            skip: View that must keep its size (the live resize target)

        Returns:
            Number of iterations used, never more than max_iterations
        """
        settled = set()
        iterations = 0
        while iterations < self.max_iterations and len(settled) < len(regions):
            iterations += 1
            for idx, (usable, views) in enumerate(regions):
                if idx in settled:
                    continue
                if self._fill_region(usable, views, margins, apply, skip) == 0:
                    settled.add(idx)

        log.debug("FILL: %d iteration(s)", iterations)
        return iterations

    def _fill_region(
        self,
        usable: Box,
        views: List["View"],
        margins: Callable[["View"], Border],
        apply: Callable[["View", Box], None],
        skip: Optional["View"],
    ) -> int:
        gap = self.gap
        tolerance = gap + EDGE_TOLERANCE

        fulls: Dict["View", Box] = {view: view.box.expand(margins(view)) for view in views}
        occupied = bounding_box(fulls.values())
        if occupied is None:
            return 0

        space = free_space(occupied, usable)
        if all(value <= gap for value in space.values()):
            return 0

        expansions = 0
        for view in views:
            if view is skip:
                continue

            full = fulls[view]
            left, top, right, bottom = full.x, full.y, full.right, full.bottom
            if space[Side.LEFT] > gap and abs(full.x - occupied.x) <= tolerance:
                left = usable.x + gap
            if space[Side.RIGHT] > gap and abs(full.right - occupied.right) <= tolerance:
                right = usable.right - gap
            if space[Side.TOP] > gap and abs(full.y - occupied.y) <= tolerance:
                top = usable.y + gap
            if space[Side.BOTTOM] > gap and abs(full.bottom - occupied.bottom) <= tolerance:
                bottom = usable.bottom - gap

            grown = clamp_box(Box.from_edges(left, top, right, bottom), usable)
            if grown == full:
                continue

            apply(view, clamp_box(grown.inset(margins(view)), usable))
            log.debug("FILL %s: %s -> %s", view, full, grown)

            fulls[view] = grown
            occupied = occupied.union(grown)
            space = free_space(occupied, usable)
            expansions += 1

        return expansions
