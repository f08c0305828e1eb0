"""
Tiling Engine

Runs the auto-tiling pipeline over every output: eligibility filter, grid
sizer, resize reconciler, cell placer, resized-view resolver and, in smart
mode, the space-filling post-pass.
"""

from __future__ import annotations
import logging
from typing import List, Optional, TYPE_CHECKING

from .geometry import Box, clamp_box
from .layouts import (
    GridLayout,
    ResizeTarget,
    SpaceFiller,
    TilingMode,
    reconcile,
    resolve_resized,
    size_grid,
)
from .objects import MaximizeAxis
from .rules import FIXED_POSITION, TILE, TILE_DIRECTION, Prop

if TYPE_CHECKING:
    from .decoration import DecorationMetrics
    from .manager import ViewManager
    from .objects import Output, View

log = logging.getLogger(__name__)


class TilingEngine:
    """
    Computes and applies view geometry for automatic tiling.

    The engine holds no resize state of its own: the live ResizeTarget is
    passed into arrange() and the possibly updated one is returned.
    """

    def __init__(
        self,
        registry: "ViewManager",
        decorations: "DecorationMetrics",
        gap: int = 4,
    ):
        self.registry = registry
        self.decorations = decorations
        self.gap = gap
        self.grid_layout = GridLayout(gap=gap)
        self.filler = SpaceFiller(gap=gap)

    def full_box(self, view: "View") -> Box:
        """Content box expanded by decoration margins."""
        return view.box.expand(self.decorations.margins(view))

    def is_eligible(self, view: "View") -> bool:
        """Check flags and rules that keep a view out of tiling."""
        if view.minimized or view.fullscreen:
            return False
        if view.always_on_top or view.always_on_bottom:
            return False
        if self.registry.get_property(view, FIXED_POSITION) == Prop.TRUE:
            return False
        if self.registry.get_property(view, TILE) == Prop.FALSE:
            return False
        return True

    def eligible_views(self, output: "Output") -> List["View"]:
        """Eligible views on an output's visible workspace, in registry order."""
        workspace = self.registry.current_workspace
        return [
            view
            for view in self.registry.iterate_eligible(output, workspace)
            if self.is_eligible(view)
        ]

    def arrange(
        self, mode: TilingMode, resize: Optional[ResizeTarget] = None
    ) -> Optional[ResizeTarget]:
        """
        Run one tiling pass over all outputs.

        Args:
            mode: Current tiling mode
            resize: View under (or last under) interactive resize

        Returns:
            The resize target to keep for the next pass. Unchanged in OFF
            mode, always None in GRID mode.
        """
        if mode == TilingMode.OFF:
            return resize
        if mode == TilingMode.GRID:
            resize = None

        regions = []
        for output in list(self.registry.outputs.values()):
            usable = self.registry.usable_area(output)
            if usable.is_empty:
                log.debug("Skipping %s: no usable area", output)
                continue

            views = self.eligible_views(output)
            if not views:
                continue

            resize = self._arrange_output(usable, views, resize)
            regions.append((usable, views))

        if mode == TilingMode.SMART and regions:
            self.filler.fill(
                regions,
                self.decorations.margins,
                self._apply,
                skip=resize.view if resize else None,
            )

        return resize

    def _arrange_output(
        self, usable: Box, views: List["View"], resize: Optional[ResizeTarget]
    ) -> Optional[ResizeTarget]:
        margins = self.decorations.margins
        prefer_vertical = any(
            self.registry.get_property(view, TILE_DIRECTION) == Prop.TRUE for view in views
        )
        prefer_horizontal = any(
            self.registry.get_property(view, TILE_DIRECTION) == Prop.FALSE for view in views
        )
        aspect = usable.width / usable.height

        resized_view = resize.view if resize and resize.view in views else None

        if resized_view is None:
            grid = size_grid(len(views), prefer_vertical, prefer_horizontal, aspect)
            boxes = self.grid_layout.calculate(views, usable, grid, margins)
            for view, box in boxes.items():
                self._apply(view, box)
            log.info(
                "Tiled %d view(s) in %s (%s)", len(views), usable, grid.template.value
            )
            return resize

        resized_margins = margins(resized_view)
        resized_full = resize.geometry.expand(resized_margins)
        remaining = [view for view in views if view is not resized_view]

        if not remaining:
            content = clamp_box(clamp_box(resized_full, usable).inset(resized_margins), usable)
            self._apply(resized_view, content)
            return self._persist(resize, content)

        grid = size_grid(len(remaining), prefer_vertical, prefer_horizontal, aspect)
        result = reconcile(resized_full, usable, remaining, self.full_box, self.gap, grid)

        boxes = self.grid_layout.calculate(
            result.placed, result.layout_area, result.grid, margins, allow_span=False
        )
        for view, box in boxes.items():
            self._apply(view, box)

        others = [self.full_box(view) for view in remaining if view not in result.placed]
        neighbours = [self.full_box(view) for view in result.placed]
        full, adjusted = resolve_resized(
            result.resized_full, usable, others, neighbours, self.gap
        )
        if adjusted:
            log.debug("Resized view %s adjusted to %s", resized_view, full)

        content = clamp_box(full.inset(resized_margins), usable)
        self._apply(resized_view, content)
        log.info(
            "Tiled %d view(s) around resized %s in %s",
            len(result.placed), resized_view, result.layout_area,
        )
        return self._persist(resize, content)

    def _persist(self, resize: ResizeTarget, content: Box) -> ResizeTarget:
        if content == resize.geometry:
            return resize
        return ResizeTarget(resize.view, content)

    def _apply(self, view: "View", box: Box):
        """Clamp a content box into the view's output and hand it to the registry."""
        if view.output is not None:
            box = clamp_box(box, self.registry.usable_area(view.output))
        if view.maximized != MaximizeAxis.NONE:
            view.unmaximize()
        if view.is_tiled:
            view.set_untiled()
        self.registry.move_resize(view, box)
