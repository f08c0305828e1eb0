"""
Operation Manager

Tracks interactive resize operations and publishes their start, end and
cancellation on the bus.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from . import topics
from .geometry import Box, Side

if TYPE_CHECKING:
    from .manager import ViewManager
    from .objects import View

log = logging.getLogger(__name__)


# Smallest content size an interactive resize can produce
MIN_SIZE = 100


@dataclass
class Operation:
    """Represents an active interactive resize."""

    view: "View"
    start: Box
    edges: Side = Side.NONE


class OperationManager:
    """
    Manages interactive resize operations.

    Publishes:
    - OPERATION_STARTED when a resize begins
    - OPERATION_ENDED with the final content box
    - OPERATION_CANCELLED after restoring the start geometry
    """

    def __init__(self, bus, registry: "ViewManager"):
        """Initialize operation manager.

        Args:
            bus: Event bus
            registry: View registry used to apply geometry
        """
        self.bus = bus
        self.registry = registry
        self.current: Optional[Operation] = None

    def is_active(self) -> bool:
        """Check if an operation is currently active."""
        return self.current is not None

    def start_resize(self, view: "View", edges: Side) -> bool:
        """Start an interactive resize operation.

        Args:
            view: The view to resize
            edges: Which edges to resize from

        Returns:
            True if operation started, False if operation already active
        """
        if self.current is not None:
            return False

        self.current = Operation(view=view, start=view.box, edges=edges)
        log.debug("Resize started: %s edges=%s", view, edges)
        self.bus.sendMessage(topics.OPERATION_STARTED, view=view, geometry=view.box)
        return True

    def handle_delta(self, dx: int, dy: int) -> Optional[Box]:
        """Handle pointer motion during the operation.

        Args:
            dx: X delta from operation start
            dy: Y delta from operation start

        Returns:
            The new content box, or None without an active resize
        """
        if not self.current or not self.current.edges:
            return None

        start = self.current.start
        edges = self.current.edges
        x, y, width, height = start.x, start.y, start.width, start.height

        # Calculate new dimensions based on which edges are being dragged
        if edges & Side.RIGHT:
            width = max(MIN_SIZE, start.width + dx)
        elif edges & Side.LEFT:
            width = max(MIN_SIZE, start.width - dx)
            x = start.right - width

        if edges & Side.BOTTOM:
            height = max(MIN_SIZE, start.height + dy)
        elif edges & Side.TOP:
            height = max(MIN_SIZE, start.height - dy)
            y = start.bottom - height

        box = Box(x, y, width, height)
        self.registry.move_resize(self.current.view, box)
        return box

    def end_operation(self):
        """End the current operation, keeping the view's geometry."""
        if not self.current:
            return

        view = self.current.view
        self.current = None
        log.debug("Resize ended: %s", view)
        self.bus.sendMessage(topics.OPERATION_ENDED, view=view, geometry=view.box)

    def cancel_operation(self):
        """Abort the current operation and restore the start geometry."""
        if not self.current:
            return

        view = self.current.view
        start = self.current.start
        self.current = None
        self.registry.move_resize(view, start)
        log.debug("Resize cancelled: %s", view)
        self.bus.sendMessage(topics.OPERATION_CANCELLED, view=view, geometry=start)

    def get_current_view(self) -> Optional["View"]:
        """Get the view involved in the current operation."""
        return self.current.view if self.current else None
