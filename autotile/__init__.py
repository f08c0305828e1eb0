"""
autotile - automatic tiling for stacking window managers

A layout engine that tiles every eligible window of an output into a
grid, keeps a manually resized window's geometry while adapting its
neighbours around it, and fills gaps left at the output edges.

This package provides:
- Geometry, view and output objects
- The tiling pipeline (grid sizer, cell placer, resize reconciler, space filler)
- A tiling manager driven by PyPubSub events
- An i3-compatible IPC server and a command line client

Example usage:
    from autotile import AutotileService, TilingConfig, View, Output, Box

    service = AutotileService(TilingConfig(gap=8))
    output = Output(1, "DP-1", area=Box(0, 0, 1920, 1080))
    service.views.add_output(output)
    service.views.add_view(View(1, app_id="foot"))

Or control a running instance:
    python -m autotile --toggle-tiling
"""

__version__ = "0.1.0"

from .errors import AutotileError, CommandError, ConfigError, IPCError

from .geometry import Border, Box, Side, clamp_box

from .objects import MaximizeAxis, Output, View

from .rules import Prop, WindowRule, WindowRules

from .decoration import DecorationMetrics, DecorationPosition, DecorationStyle

from .layouts import (
    GridLayout,
    GridSpec,
    GridTemplate,
    ResizeTarget,
    SpaceFiller,
    TilingMode,
    classify,
    size_grid,
)

from .config import TilingConfig

from .manager import ViewManager

from .engine import TilingEngine

from .tiling_manager import TilingManager

from .operation_manager import OperationManager

from .service import AutotileService

from . import topics
