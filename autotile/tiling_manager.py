"""
Tiling Manager

Holds the tiling mode and the live resize target, and re-runs the tiling
engine whenever the eligible view set changes.
"""

from __future__ import annotations
import logging
import os
from typing import Optional, TYPE_CHECKING

from pubsub import pub

from . import topics
from .engine import TilingEngine
from .errors import CommandError
from .layouts import ResizeTarget, TilingMode

if TYPE_CHECKING:
    from .config import TilingConfig
    from .manager import ViewManager
    from .objects import Output, View
    from .geometry import Box

log = logging.getLogger(__name__)


# Status strings reported by the "status" command
STATUS_STACKING = "stacking"
STATUS_GRID = "grid"
STATUS_SMART = "smart"

GRID_MODE_ARGS = ("on", "off", "toggle")


class TilingManager:
    """
    Auto-tiling controller.

    This component subscribes to view/output lifecycle events, interactive
    resize events and tiling command events. It publishes
    TILING_MODE_CHANGED and LAYOUT_APPLIED.

    Responsibilities:
    - enable/disable/toggle automatic tiling
    - grid-mode on/off/toggle (plain grid vs smart resize preservation)
    - Track the live ResizeTarget in smart mode
    - Re-run the tiling pipeline on every relevant event
    """

    def __init__(
        self,
        bus,
        registry: "ViewManager",
        config: "TilingConfig",
        engine: Optional[TilingEngine] = None,
    ):
        self.bus = bus
        self.registry = registry
        self.config = config
        self.engine = engine or TilingEngine(
            registry, config.decoration_metrics(), gap=config.gap
        )

        # Grid mode is latched independently of enable/disable
        self.enabled = config.mode != TilingMode.OFF
        self.grid = config.mode == TilingMode.GRID

        self.resize: Optional[ResizeTarget] = None

        if os.getenv("AUTOTILE_DEBUG"):
            self.bus.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self._setup_subscriptions()

    @property
    def mode(self) -> TilingMode:
        if not self.enabled:
            return TilingMode.OFF
        return TilingMode.GRID if self.grid else TilingMode.SMART

    @property
    def status(self) -> str:
        """Mode as reported to clients: stacking, grid or smart."""
        if not self.enabled:
            return STATUS_STACKING
        return STATUS_GRID if self.grid else STATUS_SMART

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items() if k != "topic")
        log.debug("EVENT: %s | %s", topic.getName(), data_str)

    def _setup_subscriptions(self):
        """Subscribe to events TilingManager cares about."""
        # Notification events
        self.bus.subscribe(self._on_view_created, topics.VIEW_CREATED)
        self.bus.subscribe(self._on_view_closed, topics.VIEW_CLOSED)
        self.bus.subscribe(self._on_view_minimized, topics.VIEW_MINIMIZED)
        self.bus.subscribe(self._on_view_restored, topics.VIEW_RESTORED)
        self.bus.subscribe(self._on_output_created, topics.OUTPUT_CREATED)
        self.bus.subscribe(self._on_output_removed, topics.OUTPUT_REMOVED)
        self.bus.subscribe(self._on_workspace_switched, topics.WORKSPACE_SWITCHED)

        # Interactive resize
        self.bus.subscribe(self._on_operation_started, topics.OPERATION_STARTED)
        self.bus.subscribe(self._on_operation_ended, topics.OPERATION_ENDED)
        self.bus.subscribe(self._on_operation_cancelled, topics.OPERATION_CANCELLED)

        # Command events
        self.bus.subscribe(self._on_cmd_tiling, topics.CMD_TILING)
        self.bus.subscribe(self._on_cmd_recalculate, topics.CMD_RECALCULATE)

    # Commands

    def run_command(self, command: str) -> str:
        """
        Execute a tiling command.

        Args:
            command: enable, disable, toggle, grid-mode <on|off|toggle>,
                recalculate or status

        Returns:
            The tiling status after the command

        Raises:
            CommandError: If the command or its argument is unknown
        """
        parts = command.split()
        if not parts:
            raise CommandError("Empty tiling command")

        name, args = parts[0].lower(), parts[1:]
        if name == "status":
            return self.status
        if name == "recalculate":
            self.recalculate()
            return self.status

        if name == "enable":
            self.set_enabled(True)
        elif name == "disable":
            self.set_enabled(False)
        elif name == "toggle":
            self.set_enabled(not self.enabled)
        elif name == "grid-mode":
            if len(args) != 1 or args[0].lower() not in GRID_MODE_ARGS:
                raise CommandError("grid-mode expects one of: on, off, toggle")
            arg = args[0].lower()
            if arg == "toggle":
                self.set_grid_mode(not self.grid)
            else:
                self.set_grid_mode(arg == "on")
        else:
            raise CommandError(f"Unknown tiling command: {name}")
        return self.status

    def set_enabled(self, enabled: bool):
        if enabled == self.enabled:
            return
        self.enabled = enabled
        self._mode_changed()

    def set_grid_mode(self, grid: bool):
        if grid == self.grid:
            return
        self.grid = grid
        if grid:
            self.resize = None
        self._mode_changed()

    def _mode_changed(self):
        log.info("Tiling mode: %s", self.status)
        self.bus.sendMessage(topics.TILING_MODE_CHANGED, mode=self.status)
        self.recalculate()

    def recalculate(self):
        """Re-run the tiling pipeline over all outputs."""
        mode = self.mode
        if mode == TilingMode.OFF:
            return
        self.resize = self.engine.arrange(mode, self.resize)
        self.bus.sendMessage(topics.LAYOUT_APPLIED, mode=self.status)

    # Notification event handlers

    def _on_view_created(self, view: "View"):
        self.recalculate()

    def _on_view_closed(self, view: "View"):
        if self.resize and self.resize.view is view:
            self.resize = None
        self.recalculate()

    def _on_view_minimized(self, view: "View"):
        self.recalculate()

    def _on_view_restored(self, view: "View"):
        self.recalculate()

    def _on_output_created(self, output: "Output"):
        self.recalculate()

    def _on_output_removed(self, output: "Output"):
        self.recalculate()

    def _on_workspace_switched(self, current_workspace, old_workspace):
        self.recalculate()

    # Interactive resize handlers

    def _on_operation_started(self, view: "View", geometry: "Box"):
        """The view under resize keeps its size while tiling adapts around it."""
        if self.mode == TilingMode.SMART:
            self.resize = ResizeTarget(view, geometry)

    def _on_operation_ended(self, view: "View", geometry: "Box"):
        if self.mode == TilingMode.SMART:
            self.resize = ResizeTarget(view, geometry)
        self.recalculate()

    def _on_operation_cancelled(self, view: "View", geometry: "Box"):
        if self.resize and self.resize.view is view:
            self.resize = None

    # Command event handlers

    def _on_cmd_tiling(self, command: str):
        """Handle CMD_TILING command."""
        try:
            self.run_command(command)
        except CommandError as e:
            log.warning("Tiling command %r failed: %s", command, e)

    def _on_cmd_recalculate(self):
        """Handle CMD_RECALCULATE command."""
        self.recalculate()
