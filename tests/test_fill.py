"""
Unit tests for the space-filling post-pass.
"""

import pytest
from autotile.geometry import Box
from autotile.layouts import MAX_FILL_ITERATIONS, SpaceFiller


USABLE = Box(0, 0, 1000, 1000)


def apply(view, box):
    view.move_resize(box)


@pytest.mark.unit
class TestSpaceFiller:
    """Test residual gap filling."""

    def test_boundary_views_grow_to_edges(self, make_view, no_margins):
        a = make_view(Box(10, 10, 480, 480))
        b = make_view(Box(500, 10, 480, 480))

        iterations = SpaceFiller(gap=10).fill([(USABLE, [a, b])], no_margins, apply)

        assert a.box == Box(10, 10, 480, 980)
        assert b.box == Box(500, 10, 490, 480)
        assert iterations == 2

    def test_filled_output_is_untouched(self, make_view, no_margins):
        a = make_view(Box(10, 10, 980, 980))

        iterations = SpaceFiller(gap=10).fill([(USABLE, [a])], no_margins, apply)

        assert a.box == Box(10, 10, 980, 980)
        assert iterations == 1

    def test_skipped_view_keeps_its_size(self, make_view, no_margins):
        resized = make_view(Box(100, 100, 400, 400))

        iterations = SpaceFiller(gap=10).fill(
            [(USABLE, [resized])], no_margins, apply, skip=resized
        )

        assert resized.box == Box(100, 100, 400, 400)
        assert iterations == 1

    def test_expansion_stays_within_usable(self, make_view, ssd_metrics):
        view = make_view(Box(300, 300, 200, 200), use_ssd=True)

        SpaceFiller(gap=10).fill([(USABLE, [view])], ssd_metrics.margins, apply)

        full = view.box.expand(ssd_metrics.margins(view))
        assert full == Box(10, 10, 980, 980)
        assert USABLE.contains(view.box)

    def test_regions_settle_independently(self, make_view, no_margins):
        other_usable = Box(1000, 0, 1000, 1000)
        a = make_view(Box(10, 10, 980, 980))
        b = make_view(Box(1100, 100, 500, 500))

        SpaceFiller(gap=10).fill(
            [(USABLE, [a]), (other_usable, [b])], no_margins, apply
        )

        assert a.box == Box(10, 10, 980, 980)
        assert b.box == Box(1010, 10, 980, 980)

    @pytest.mark.parametrize(
        "boxes",
        [
            [Box(0, 0, 10, 10)],
            [Box(400, 400, 10, 10), Box(600, 600, 10, 10)],
            [Box(-50, -50, 2000, 2000)],
            [Box(100, 100, 100, 100), Box(100, 100, 100, 100), Box(700, 10, 50, 900)],
        ],
    )
    def test_terminates_within_cap(self, make_view, no_margins, boxes):
        views = [make_view(box) for box in boxes]

        iterations = SpaceFiller(gap=10).fill([(USABLE, views)], no_margins, apply)

        assert 1 <= iterations <= MAX_FILL_ITERATIONS

    def test_no_regions(self, no_margins):
        assert SpaceFiller(gap=10).fill([], no_margins, apply) == 0
