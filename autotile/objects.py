"""
Window Manager Objects

View and Output objects as seen by the tiling engine. Views are owned by
the view registry (ViewManager); the engine reads their flags and writes
geometry only through ViewManager.move_resize().
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Callable, Optional

from .geometry import Box, Side


class MaximizeAxis(Enum):
    """Axes along which a view is maximized."""

    NONE = auto()
    HORIZONTAL = auto()
    VERTICAL = auto()
    BOTH = auto()


class View:
    """Represents a managed window."""

    def __init__(
        self,
        object_id: int,
        app_id: Optional[str] = None,
        title: Optional[str] = None,
        box: Optional[Box] = None,
        use_ssd: bool = True,
    ):
        self.object_id = object_id
        self.app_id = app_id
        self.title = title

        # Content box in layout coordinates (excludes decorations)
        self.box: Box = box if box is not None else Box()

        # Placement
        self.output: Optional[Output] = None
        self.workspace: Optional[str] = None

        # State flags
        self.minimized = False
        self.fullscreen = False
        self.always_on_top = False
        self.always_on_bottom = False
        self.maximized = MaximizeAxis.NONE
        self.tiled_edges = Side.NONE

        # Server-side decorations
        self.use_ssd = use_ssd

        # Callbacks
        self.on_move_resize: Optional[Callable[[Box], None]] = None

    def move_resize(self, box: Box):
        """Set the content box."""
        self.box = box
        if self.on_move_resize:
            self.on_move_resize(box)

    def unmaximize(self):
        """Drop maximized state without restoring natural geometry."""
        self.maximized = MaximizeAxis.NONE

    def set_untiled(self):
        """Drop edge-snapped tiled state."""
        self.tiled_edges = Side.NONE

    @property
    def is_tiled(self) -> bool:
        return self.tiled_edges != Side.NONE

    def __repr__(self) -> str:
        return f"View(id={self.object_id}, app_id={self.app_id!r}, box={self.box})"


class Output:
    """Represents a display output."""

    def __init__(
        self,
        object_id: int,
        name: str = "",
        area: Optional[Box] = None,
        non_exclusive_area: Optional[Box] = None,
    ):
        self.object_id = object_id
        self.name = name or f"output-{object_id}"
        # Full output rectangle in layout coordinates
        self.area: Box = area if area is not None else Box()
        # Area left over after panels/docks reserve their exclusive zones
        self.non_exclusive_area = non_exclusive_area

    @property
    def usable_area(self) -> Box:
        """Usable area (respecting exclusive zones)."""
        if self.non_exclusive_area is not None and not self.non_exclusive_area.is_empty:
            return self.non_exclusive_area
        return self.area

    @property
    def is_usable(self) -> bool:
        return not self.usable_area.is_empty

    def __repr__(self) -> str:
        return f"Output(id={self.object_id}, name={self.name!r}, usable={self.usable_area})"
