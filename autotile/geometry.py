"""
Layout Geometry

Box, Border and Side types shared by every stage of the tiling pipeline.
All coordinates are integer layout coordinates.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntFlag
from typing import Iterable, Optional


class Side(IntFlag):
    """Box side flags."""

    NONE = 0
    TOP = 1
    BOTTOM = 2
    LEFT = 4
    RIGHT = 8


@dataclass(frozen=True)
class Border:
    """Decoration thickness around a content box."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle with position and dimensions."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @classmethod
    def from_edges(cls, left: int, top: int, right: int, bottom: int) -> "Box":
        """Create a box from its four edges."""
        return cls(left, top, right - left, bottom - top)

    def expand(self, border: Border) -> "Box":
        """Grow the box outward by a border (content box -> full box)."""
        return Box(
            self.x - border.left,
            self.y - border.top,
            self.width + border.horizontal,
            self.height + border.vertical,
        )

    def inset(self, border: Border) -> "Box":
        """Shrink the box inward by a border (full box -> content box).

        Dimensions never go below zero.
        """
        return Box(
            self.x + border.left,
            self.y + border.top,
            max(0, self.width - border.horizontal),
            max(0, self.height - border.vertical),
        )

    def overlaps(self, other: "Box") -> bool:
        """Check whether two boxes share any interior area."""
        return not (
            self.right <= other.x
            or self.x >= other.right
            or self.bottom <= other.y
            or self.y >= other.bottom
        )

    def contains(self, other: "Box") -> bool:
        """Check whether another box lies entirely inside this one."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def union(self, other: "Box") -> "Box":
        """Smallest box covering both boxes."""
        return Box.from_edges(
            min(self.x, other.x),
            min(self.y, other.y),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def __str__(self) -> str:
        return f"Box({self.width}x{self.height}+{self.x}+{self.y})"


def clamp_box(box: Box, bounds: Box) -> Box:
    """Clamp a box into bounds.

    An edge that overflows the bounds is pulled inward while the opposite
    edge stays where it is, so the box shrinks instead of being translated.
    """
    x, y, width, height = box.x, box.y, box.width, box.height

    if x < bounds.x:
        width -= bounds.x - x
        x = bounds.x
    if y < bounds.y:
        height -= bounds.y - y
        y = bounds.y
    x = min(x, bounds.right)
    y = min(y, bounds.bottom)
    if x + width > bounds.right:
        width = bounds.right - x
    if y + height > bounds.bottom:
        height = bounds.bottom - y

    return Box(x, y, max(0, width), max(0, height))


def bounding_box(boxes: Iterable[Box]) -> Optional[Box]:
    """Bounding box of a collection of boxes, or None when empty."""
    result: Optional[Box] = None
    for box in boxes:
        result = box if result is None else result.union(box)
    return result
