"""
Event Topics for autotile

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

Every topic always carries the same keyword arguments; PyPubSub infers a
topic's message data specification from its first use.
"""

# View lifecycle events
VIEW_CREATED = "view.created"
"""Published when a view is mapped. Params: view"""

VIEW_CLOSED = "view.closed"
"""Published when a view is unmapped/destroyed. Params: view"""

VIEW_MINIMIZED = "view.minimized"
"""Published when a view is minimized. Params: view"""

VIEW_RESTORED = "view.restored"
"""Published when a minimized view is restored. Params: view"""

# Output (monitor) events
OUTPUT_CREATED = "output.created"
"""Published when a new output is connected. Params: output"""

OUTPUT_REMOVED = "output.removed"
"""Published when an output is disconnected. Params: output"""

# Workspace events
WORKSPACE_SWITCHED = "workspace.switched"
"""Published when switching workspaces. Params: current_workspace, old_workspace"""

# Interactive resize events
OPERATION_STARTED = "operation.started"
"""Published when an interactive resize starts. Params: view, geometry"""

OPERATION_ENDED = "operation.ended"
"""Published when an interactive resize completes. Params: view, geometry"""

OPERATION_CANCELLED = "operation.cancelled"
"""Published when an interactive resize is aborted. Params: view, geometry"""

# Command events (imperative - tell components to do something)
CMD_TILING = "cmd.tiling"
"""Command: run a tiling command string (enable, toggle, grid-mode on, ...). Params: command"""

CMD_RECALCULATE = "cmd.recalculate"
"""Command: re-run the tiling pipeline."""

# Tiling state notifications
TILING_MODE_CHANGED = "tiling.mode_changed"
"""Published when tiling is enabled/disabled or grid mode changes. Params: mode"""

LAYOUT_APPLIED = "layout.applied"
"""Published after a tiling pass has placed the views. Params: mode"""
