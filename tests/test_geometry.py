"""
Unit tests for geometry helpers.
"""

import pytest
from autotile.geometry import Border, Box, Side, bounding_box, clamp_box


@pytest.mark.unit
class TestBox:
    """Test Box arithmetic."""

    def test_edges(self):
        box = Box(10, 20, 100, 50)
        assert box.right == 110
        assert box.bottom == 70
        assert box.area == 5000

    def test_from_edges(self):
        assert Box.from_edges(10, 20, 110, 70) == Box(10, 20, 100, 50)

    def test_expand_and_inset_are_inverse(self):
        border = Border(left=2, top=22, right=2, bottom=2)
        content = Box(100, 100, 400, 300)
        full = content.expand(border)
        assert full == Box(98, 78, 404, 324)
        assert full.inset(border) == content

    def test_inset_never_negative(self):
        assert Box(0, 0, 3, 3).inset(Border(5, 5, 5, 5)).width == 0

    def test_overlaps_shared_edge_is_not_overlap(self):
        a = Box(0, 0, 100, 100)
        assert not a.overlaps(Box(100, 0, 100, 100))
        assert a.overlaps(Box(99, 99, 10, 10))

    def test_contains(self):
        outer = Box(0, 0, 100, 100)
        assert outer.contains(Box(10, 10, 90, 90))
        assert not outer.contains(Box(10, 10, 91, 90))

    def test_side_flags_combine(self):
        sides = Side.LEFT | Side.TOP
        assert sides & Side.LEFT
        assert not sides & Side.RIGHT


@pytest.mark.unit
class TestClamp:
    """Test the shrink-from-overflowing-edge clamp."""

    def test_inside_unchanged(self):
        bounds = Box(0, 0, 1000, 800)
        assert clamp_box(Box(10, 10, 100, 100), bounds) == Box(10, 10, 100, 100)

    def test_right_overflow_keeps_left_edge(self):
        bounds = Box(0, 0, 1000, 800)
        assert clamp_box(Box(900, 10, 300, 100), bounds) == Box(900, 10, 100, 100)

    def test_left_overflow_keeps_right_edge(self):
        bounds = Box(0, 0, 1000, 800)
        assert clamp_box(Box(-50, 10, 300, 100), bounds) == Box(0, 10, 250, 100)

    def test_fully_outside_becomes_empty(self):
        bounds = Box(0, 0, 1000, 800)
        clamped = clamp_box(Box(1200, 900, 100, 100), bounds)
        assert clamped.is_empty
        assert bounds.contains(clamped)

    def test_bounding_box(self):
        boxes = [Box(10, 10, 10, 10), Box(100, 50, 20, 20)]
        assert bounding_box(boxes) == Box(10, 10, 110, 60)
        assert bounding_box([]) is None
