"""
Resize Reconciliation

Carves the footprint of a manually resized view out of the usable area,
decides where the remaining views go, and deconflicts the resized view's
own rectangle afterwards.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from .layout_adjacency import blocked_sides, classify
from .layout_base import GridSpec, GridTemplate
from .layout_grid import grid_for_template, size_grid
from ..geometry import Box, Side, clamp_box

if TYPE_CHECKING:
    from ..objects import View

log = logging.getLogger(__name__)


# Tie-break order when several sides offer the same free area
SIDE_ORDER = (Side.RIGHT, Side.LEFT, Side.BOTTOM, Side.TOP)

# Expansion priority for the resized view itself
EXPAND_ORDER = (Side.LEFT, Side.RIGHT, Side.TOP, Side.BOTTOM)

HORIZONTAL_SIDES = Side.LEFT | Side.RIGHT
VERTICAL_SIDES = Side.TOP | Side.BOTTOM


@dataclass
class Reconciliation:
    """Result of reconciling the layout around a resized view."""

    resized_full: Box  # Clamped (or carved) full box of the resized view
    layout_area: Box  # Rectangle the placed views are gridded into
    grid: Optional[GridSpec]
    placed: List["View"] = field(default_factory=list)
    adjacent: List["View"] = field(default_factory=list)


def free_space(inner: Box, outer: Box) -> Dict[Side, int]:
    """Distance from each side of `inner` to the same side of `outer`."""
    return {
        Side.LEFT: inner.x - outer.x,
        Side.RIGHT: outer.right - inner.right,
        Side.TOP: inner.y - outer.y,
        Side.BOTTOM: outer.bottom - inner.bottom,
    }


def side_area(side: Side, resized: Box, usable: Box) -> Box:
    """The part of the usable area lying on one side of the resized box.

    The area starts right at the resized edge; the grid placer adds the gap.
    """
    if side == Side.RIGHT:
        return Box.from_edges(resized.right, usable.y, usable.right, usable.bottom)
    if side == Side.LEFT:
        return Box.from_edges(usable.x, usable.y, resized.x, usable.bottom)
    if side == Side.BOTTOM:
        return Box.from_edges(usable.x, resized.bottom, usable.right, usable.bottom)
    return Box.from_edges(usable.x, usable.y, usable.right, resized.y)


def largest_side(resized: Box, usable: Box, gap: int) -> Optional[Side]:
    """Side with the largest free area, among sides with more than `gap` room."""
    space = free_space(resized, usable)
    best: Optional[Side] = None
    best_area = 0
    for side in SIDE_ORDER:
        if space[side] <= gap:
            continue
        area = side_area(side, resized, usable).area
        if area > best_area:
            best = side
            best_area = area
    return best


def relative_sides(full: Box, resized: Box) -> Side:
    """Sides of the resized box a view lies entirely beyond."""
    sides = Side.NONE
    if full.bottom <= resized.y:
        sides |= Side.TOP
    if full.y >= resized.bottom:
        sides |= Side.BOTTOM
    if full.right <= resized.x:
        sides |= Side.LEFT
    if full.x >= resized.right:
        sides |= Side.RIGHT
    return sides


def carve_side(resized: Box, usable: Box) -> Tuple[Box, Side]:
    """Make room when no side of the resized box has any.

    The resized box keeps the leading half of the usable area along its
    longer axis; the trailing half goes to the remaining views.
    """
    if usable.width >= usable.height:
        right = max(resized.x, usable.x + usable.width // 2)
        return Box.from_edges(resized.x, resized.y, right, resized.bottom), Side.RIGHT
    bottom = max(resized.y, usable.y + usable.height // 2)
    return Box.from_edges(resized.x, resized.y, resized.right, bottom), Side.BOTTOM


def _pick_adjacent_side(sides: Side, resized: Box, usable: Box, gap: int) -> Optional[Side]:
    """Choose the remaining-space side from the adjacent views' sides."""
    space = free_space(resized, usable)
    for side, opposite in (
        (Side.RIGHT, Side.LEFT),
        (Side.LEFT, Side.RIGHT),
        (Side.BOTTOM, Side.TOP),
        (Side.TOP, Side.BOTTOM),
    ):
        if sides & side and not sides & opposite:
            if space[side] > gap:
                return side
            break
    return largest_side(resized, usable, gap)


def _two_view_choice(
    fulls: Sequence[Box], side: Side, resized: Box, usable: Box, gap: int
) -> Tuple[Side, GridTemplate]:
    """Band or strip for exactly two remaining views.

    Two views both above (or both below) the resized box share a horizontal
    band side by side; two views both left (or both right) stack in a
    vertical strip. Otherwise the shape of the chosen side decides.
    """
    space = free_space(resized, usable)
    common = relative_sides(fulls[0], resized) & relative_sides(fulls[1], resized)

    for band in (Side.TOP, Side.BOTTOM):
        if common & band and space[band] > gap:
            return band, GridTemplate.SIDE_BY_SIDE
    for strip in (Side.LEFT, Side.RIGHT):
        if common & strip and space[strip] > gap:
            return strip, GridTemplate.STACKED

    if side & HORIZONTAL_SIDES:
        return side, GridTemplate.STACKED
    return side, GridTemplate.SIDE_BY_SIDE


def reconcile(
    resized_full: Box,
    usable: Box,
    remaining: List["View"],
    full_of: Callable[["View"], Box],
    gap: int,
    grid: Optional[GridSpec],
) -> Reconciliation:
    """
    Work out where the non-resized views go.

    Args:
        resized_full: Full box of the resized view
        usable: Usable area of the output
        remaining: Eligible views other than the resized one, in order
        full_of: Current full box lookup
        gap: Configured gap
        grid: Grid sized for all remaining views

    Returns:
        Reconciliation describing the layout area, grid and views to place
    """
    resized = clamp_box(resized_full, usable)

    adjacent = []
    sides = Side.NONE
    for view in remaining:
        classification = classify(full_of(view), resized, gap)
        if classification is None:
            continue
        adjacent.append(view)
        sides |= classification

    if adjacent:
        side = _pick_adjacent_side(sides, resized, usable, gap)
        if side is None:
            resized, side = carve_side(resized, usable)
            log.debug("RECONCILE: no free side, resized view cut to %s", resized)
        layout_area = side_area(side, resized, usable)

        # Views left in place inside the chosen area would be covered
        placed = [
            view
            for view in remaining
            if view in adjacent or full_of(view).overlaps(layout_area)
        ]
        grid = size_grid(len(placed))
        log.debug(
            "RECONCILE: %d adjacent, side=%s, placing %d in %s",
            len(adjacent), side, len(placed), layout_area,
        )
        return Reconciliation(resized, layout_area, grid, placed, adjacent)

    side = largest_side(resized, usable, gap)
    if side is None:
        resized, side = carve_side(resized, usable)
        log.debug("RECONCILE: no free side, resized view cut to %s", resized)
    elif len(remaining) == 2:
        side, template = _two_view_choice(
            [full_of(view) for view in remaining], side, resized, usable, gap
        )
        grid = grid_for_template(2, template)

    layout_area = side_area(side, resized, usable)
    log.debug(
        "RECONCILE: no adjacent views, side=%s, placing %d in %s",
        side, len(remaining), layout_area,
    )
    return Reconciliation(resized, layout_area, grid, list(remaining), [])


def _shrink_off(box: Box, other: Box, gap: int) -> Box:
    """Shrink `box` along the axis of least overlap until it clears `other`."""
    overlap_width = min(box.right, other.right) - max(box.x, other.x)
    overlap_height = min(box.bottom, other.bottom) - max(box.y, other.y)

    left, top, right, bottom = box.x, box.y, box.right, box.bottom
    if overlap_width <= overlap_height:
        if box.x < other.x:
            right = max(left, other.x - gap)
        else:
            left = min(right, other.right + gap)
    else:
        if box.y < other.y:
            bottom = max(top, other.y - gap)
        else:
            top = min(bottom, other.bottom + gap)
    return Box.from_edges(left, top, right, bottom)


def _expand(box: Box, usable: Box, blocked: Side, gap: int) -> Box:
    """Grow one edge of `box` toward the usable edge with the most room."""
    space = free_space(box, usable)
    best: Optional[Side] = None
    for side in EXPAND_ORDER:
        if blocked & side or space[side] <= gap:
            continue
        if best is None or space[side] > space[best]:
            best = side

    if best is None:
        return box

    left, top, right, bottom = box.x, box.y, box.right, box.bottom
    if best == Side.LEFT:
        left = usable.x + gap
    elif best == Side.RIGHT:
        right = usable.right - gap
    elif best == Side.TOP:
        top = usable.y + gap
    else:
        bottom = usable.bottom - gap
    log.debug("RESIZED EXPAND toward %s", best)
    return Box.from_edges(left, top, right, bottom)


def resolve_resized(
    resized_full: Box,
    usable: Box,
    others: Sequence[Box],
    neighbours: Sequence[Box],
    gap: int,
) -> Tuple[Box, bool]:
    """
    Deconflict the resized view's full box.

    Args:
        resized_full: Full box of the resized view
        usable: Usable area of the output
        others: Full boxes of views left in place (non-adjacent)
        neighbours: Full boxes of placed views after placement
        gap: Configured gap

    Returns:
        (full box, adjusted) where adjusted tells whether the box differs
        from `resized_full`
    """
    box = clamp_box(resized_full, usable)

    overlapped = False
    for other in others:
        if box.overlaps(other):
            box = _shrink_off(box, other, gap)
            overlapped = True

    if not overlapped:
        expanded = _expand(box, usable, blocked_sides(neighbours, box, gap), gap)
        if not any(expanded.overlaps(other) for other in list(others) + list(neighbours)):
            box = expanded

    box = clamp_box(box, usable)
    return box, box != resized_full
