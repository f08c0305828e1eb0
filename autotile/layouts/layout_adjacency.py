"""
Adjacency Classification

Pure functions deciding how a view's full box sits relative to the full
box of the view under resize.
"""

from __future__ import annotations
from typing import Iterable, Optional

from .layout_base import EDGE_TOLERANCE
from ..geometry import Box, Side


def spans_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Check whether two 1D spans share any interior."""
    return start_a < end_b and start_b < end_a


def classify(full: Box, resized: Box, gap: int) -> Optional[Side]:
    """
    Classify a view relative to the resized view.

    Args:
        full: Full box of the view being classified
        resized: Full box of the resized view
        gap: Configured gap

    Returns:
        None when the view is not adjacent. Otherwise the set of sides of
        the resized box the view lies on; Side.NONE for a view overlapping
        the resized box with no clear side.
    """
    tolerance = gap + EDGE_TOLERANCE

    adjacent = (
        abs(full.y - resized.bottom) <= tolerance
        or abs(full.bottom - resized.y) <= tolerance
        or spans_overlap(full.y, full.bottom, resized.y, resized.bottom)
        or abs(full.x - resized.right) <= tolerance
        or abs(full.right - resized.x) <= tolerance
        or spans_overlap(full.x, full.right, resized.x, resized.right)
    )
    if not adjacent:
        return None

    sides = Side.NONE
    if full.x >= resized.right - tolerance:
        sides |= Side.RIGHT
    if full.right <= resized.x + tolerance:
        sides |= Side.LEFT
    if full.y >= resized.bottom - tolerance:
        sides |= Side.BOTTOM
    if full.bottom <= resized.y + tolerance:
        sides |= Side.TOP
    return sides


def blocked_sides(neighbours: Iterable[Box], full: Box, gap: int) -> Side:
    """Sides of `full` that have a neighbouring box in the way."""
    blocked = Side.NONE
    for other in neighbours:
        if other.right <= full.x + gap:
            blocked |= Side.LEFT
        if other.x >= full.right - gap:
            blocked |= Side.RIGHT
        if other.bottom <= full.y + gap:
            blocked |= Side.TOP
        if other.y >= full.bottom - gap:
            blocked |= Side.BOTTOM
    return blocked
