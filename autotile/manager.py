"""
View Manager

Registry of views and outputs. Publishes lifecycle events on the bus and
is the only place where view geometry is written.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, Optional

from . import topics
from .geometry import Box
from .objects import Output, View
from .rules import Prop, WindowRules

log = logging.getLogger(__name__)


class ViewManager:
    """
    Owns views and outputs in creation order.

    Publishes:
    - VIEW_CREATED / VIEW_CLOSED
    - VIEW_MINIMIZED / VIEW_RESTORED
    - OUTPUT_CREATED / OUTPUT_REMOVED
    - WORKSPACE_SWITCHED
    """

    def __init__(self, bus, rules: Optional[WindowRules] = None):
        self.bus = bus
        self.rules = rules or WindowRules()
        self.views: Dict[int, View] = {}  # view id -> View, creation order
        self.outputs: Dict[int, Output] = {}  # output id -> Output
        self.current_workspace = "1"

    # Outputs

    def add_output(self, output: Output):
        """Register an output."""
        self.outputs[output.object_id] = output
        log.info("Output added: %s", output)
        self.bus.sendMessage(topics.OUTPUT_CREATED, output=output)

    def remove_output(self, output: Output):
        """Unregister an output. Its views lose their output assignment."""
        if output.object_id not in self.outputs:
            return
        del self.outputs[output.object_id]
        for view in self.views.values():
            if view.output is output:
                view.output = None
        log.info("Output removed: %s", output)
        self.bus.sendMessage(topics.OUTPUT_REMOVED, output=output)

    def get_output(self, name: str) -> Optional[Output]:
        for output in self.outputs.values():
            if output.name == name:
                return output
        return None

    # Views

    def add_view(
        self,
        view: View,
        output: Optional[Output] = None,
        workspace: Optional[str] = None,
    ):
        """
        Register a newly mapped view.

        Args:
            view: The view
            output: Output to place it on (defaults to the first output)
            workspace: Workspace name (defaults to the current workspace)
        """
        if output is None and view.output is None and self.outputs:
            output = next(iter(self.outputs.values()))
        if output is not None:
            view.output = output
        if workspace is not None:
            view.workspace = workspace
        elif view.workspace is None:
            view.workspace = self.current_workspace

        self.views[view.object_id] = view
        log.debug("View added: %s on %s", view, view.output)
        self.bus.sendMessage(topics.VIEW_CREATED, view=view)

    def remove_view(self, view: View):
        """Unregister a view."""
        if self.views.pop(view.object_id, None) is None:
            return
        log.debug("View removed: %s", view)
        self.bus.sendMessage(topics.VIEW_CLOSED, view=view)

    def minimize_view(self, view: View):
        if view.minimized:
            return
        view.minimized = True
        self.bus.sendMessage(topics.VIEW_MINIMIZED, view=view)

    def restore_view(self, view: View):
        if not view.minimized:
            return
        view.minimized = False
        self.bus.sendMessage(topics.VIEW_RESTORED, view=view)

    def switch_workspace(self, workspace: str):
        """Make another workspace visible."""
        if workspace == self.current_workspace:
            return
        old_workspace = self.current_workspace
        self.current_workspace = workspace
        log.info("Workspace switched: %s -> %s", old_workspace, workspace)
        self.bus.sendMessage(
            topics.WORKSPACE_SWITCHED,
            current_workspace=workspace,
            old_workspace=old_workspace,
        )

    # Interface used by the tiling engine

    def iterate_eligible(self, output: Output, workspace: str) -> Iterator[View]:
        """Views on an output and workspace, in creation order.

        Only membership is checked here; state flags and rules are the
        tiling engine's business.
        """
        for view in list(self.views.values()):
            if view.output is output and view.workspace == workspace:
                yield view

    def get_property(self, view: View, key: str) -> Prop:
        return self.rules.get_property(view, key)

    def usable_area(self, output: Output) -> Box:
        return output.usable_area

    def move_resize(self, view: View, box: Box):
        """Apply a new content box to a view.

        Raises:
            ValueError: If the box has a negative size
        """
        if box.width < 0 or box.height < 0:
            raise ValueError(f"Refusing negative size for {view}: {box}")
        if box == view.box:
            return
        log.debug("MOVE_RESIZE %s -> %s", view, box)
        view.move_resize(box)
