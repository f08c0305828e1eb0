"""
Autotile Service

Wires the event bus, view registry, tiling manager, operation manager and
IPC server together. A compositor integration feeds views and outputs into
`service.views` and calls `service.ipc.poll()` from its event loop.
"""

from __future__ import annotations
import logging
from typing import Optional

from pubsub import pub

from .config import TilingConfig
from .ipc import IPCServer
from .manager import ViewManager
from .operation_manager import OperationManager
from .tiling_manager import TilingManager

log = logging.getLogger(__name__)


class AutotileService:
    """
    Auto-tiling service.

    Architecture:
    1. Event bus (PyPubSub)
    2. Components created in order - they self-subscribe to events
    3. The host publishes lifecycle events through the ViewManager
    """

    def __init__(self, config: Optional[TilingConfig] = None, bus=pub):
        self.config = config or TilingConfig()
        self.bus = bus

        # View registry (publishes lifecycle events)
        self.views = ViewManager(bus=bus, rules=self.config.window_rules())

        # Tiling (self-subscribes to lifecycle, operation and command events)
        self.tiling = TilingManager(bus=bus, registry=self.views, config=self.config)

        # Interactive resize bookkeeping (publishes operation events)
        self.operations = OperationManager(bus=bus, registry=self.views)

        # IPC server (self-subscribes for broadcasting, dispatches commands)
        self.ipc = IPCServer(bus, self.tiling, self.views, self.config.socket_path)

    def run(self, poll_interval: float = 0.5):
        """Serve IPC requests until interrupted."""
        self.ipc.start()
        try:
            while True:
                self.ipc.poll(timeout=poll_interval)
        except KeyboardInterrupt:
            log.info("Interrupted, shutting down")
        finally:
            self.ipc.stop()
        return 0
