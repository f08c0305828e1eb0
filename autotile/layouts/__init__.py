"""
Layout Pipeline

Grid sizing, cell placement, resize reconciliation and space filling.
"""

from .layout_base import (
    EDGE_TOLERANCE,
    MAX_FILL_ITERATIONS,
    TilingMode,
    GridTemplate,
    GridSpec,
    ResizeTarget,
)
from .layout_grid import GridLayout, size_grid, grid_for_template, cell_size
from .layout_adjacency import classify, blocked_sides
from .layout_resize import Reconciliation, reconcile, resolve_resized
from .layout_fill import SpaceFiller

__all__ = [
    # Base types
    "EDGE_TOLERANCE",
    "MAX_FILL_ITERATIONS",
    "TilingMode",
    "GridTemplate",
    "GridSpec",
    "ResizeTarget",
    # Grid
    "GridLayout",
    "size_grid",
    "grid_for_template",
    "cell_size",
    # Resize handling
    "classify",
    "blocked_sides",
    "Reconciliation",
    "reconcile",
    "resolve_resized",
    # Post-pass
    "SpaceFiller",
]
