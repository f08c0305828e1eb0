"""
i3-compatible IPC for autotile

Unix socket server speaking the i3/sway IPC framing so external programs
can switch tiling modes, force a recalculation and subscribe to tiling
events, plus the matching client used by the command line.

Protocol documentation: https://i3wm.org/docs/ipc.html
"""

from __future__ import annotations
import json
import logging
import os
import select
import socket
import struct
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from . import __version__, topics
from .errors import IPCError

if TYPE_CHECKING:
    from .manager import ViewManager
    from .tiling_manager import TilingManager

log = logging.getLogger(__name__)


MAGIC = b"i3-ipc"
HEADER = struct.Struct("<II")
HEADER_SIZE = len(MAGIC) + HEADER.size


class MessageType(IntEnum):
    """IPC message types. GET_TILING is an autotile extension."""

    RUN_COMMAND = 0
    SUBSCRIBE = 2
    GET_OUTPUTS = 3
    GET_VERSION = 7
    GET_TILING = 100


class EventType(IntEnum):
    """IPC event types (with high bit set)."""

    WORKSPACE = 0x80000000
    OUTPUT = 0x80000001
    TILING = 0x80000064


EVENT_NAMES = {
    "workspace": EventType.WORKSPACE,
    "output": EventType.OUTPUT,
    "tiling": EventType.TILING,
}


def pack_message(msg_type: int, payload: bytes) -> bytes:
    """Frame a payload: magic, little-endian length and type, payload."""
    return MAGIC + HEADER.pack(len(payload), msg_type) + payload


def version_info() -> Dict[str, Any]:
    major, minor, patch = (int(part) for part in __version__.split("."))
    return {
        "human_readable": f"autotile {__version__}",
        "loaded_config_file_name": "",
        "major": major,
        "minor": minor,
        "patch": patch,
    }


class IPCServer:
    """
    i3-compatible IPC server for autotile.

    Non-blocking; poll() must be called regularly from the host event loop.
    """

    MAGIC = MAGIC

    def __init__(
        self,
        bus,
        tiling: "TilingManager",
        registry: "ViewManager",
        socket_path: Union[str, Path],
    ):
        """Initialize the IPC server.

        Args:
            bus: Event bus
            tiling: Tiling manager commands are dispatched to
            registry: View registry queried for outputs
            socket_path: Unix socket path
        """
        self.bus = bus
        self.tiling = tiling
        self.registry = registry
        self.socket_path = Path(socket_path)
        self.server_socket: Optional[socket.socket] = None
        self.clients: List[socket.socket] = []
        # Map client socket to list of subscribed event names
        self.subscribers: Dict[socket.socket, List[str]] = {}

        self._setup_event_subscriptions()

    def _setup_event_subscriptions(self):
        """Subscribe to bus events that are broadcast to IPC clients."""
        self.bus.subscribe(self._on_tiling_mode_changed, topics.TILING_MODE_CHANGED)
        self.bus.subscribe(self._on_workspace_switched, topics.WORKSPACE_SWITCHED)
        self.bus.subscribe(self._on_output_created, topics.OUTPUT_CREATED)
        self.bus.subscribe(self._on_output_removed, topics.OUTPUT_REMOVED)

    def _on_tiling_mode_changed(self, mode):
        self.broadcast_event("tiling", {"change": "mode", "mode": mode})

    def _on_workspace_switched(self, current_workspace, old_workspace):
        self.broadcast_event(
            "workspace",
            {
                "change": "focus",
                "current": {"name": current_workspace, "focused": True},
                "old": {"name": old_workspace, "focused": False},
            },
        )

    def _on_output_created(self, output):
        self.broadcast_event("output", {"change": "added", "name": output.name})

    def _on_output_removed(self, output):
        self.broadcast_event("output", {"change": "removed", "name": output.name})

    def start(self):
        """Start the IPC server and listen for connections."""
        # Remove existing socket if present
        if self.socket_path.exists():
            self.socket_path.unlink()

        self.server_socket = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.server_socket.bind(str(self.socket_path))
        self.server_socket.listen(10)
        self.server_socket.setblocking(False)

        log.info("IPC server listening on %s", self.socket_path)

    def poll(self, timeout: float = 0):
        """Poll for new connections and messages."""
        if not self.server_socket:
            return

        readable, _, _ = select.select([self.server_socket] + self.clients, [], [], timeout)

        for sock in readable:
            if sock is self.server_socket:
                self._accept_client()
            else:
                self._handle_client(sock)

    def _accept_client(self):
        """Accept a new client connection."""
        try:
            client, _ = self.server_socket.accept()
        except BlockingIOError:
            return
        client.setblocking(False)
        self.clients.append(client)
        log.debug("IPC: New client connected (total: %d)", len(self.clients))

    def _handle_client(self, client: socket.socket):
        """Read one message from a client and answer it."""
        try:
            # 14 bytes: 6 magic + 4 length + 4 type
            header = client.recv(HEADER_SIZE)
            if len(header) < HEADER_SIZE:
                self._remove_client(client)
                return

            magic = header[: len(MAGIC)]
            if magic != MAGIC:
                log.warning("IPC: Invalid magic bytes: %r", magic)
                self._remove_client(client)
                return

            length, msg_type = HEADER.unpack(header[len(MAGIC):])

            payload = b""
            while len(payload) < length:
                chunk = client.recv(length - len(payload))
                if not chunk:
                    self._remove_client(client)
                    return
                payload += chunk

        except BlockingIOError:
            # No data available, try again later
            return
        except OSError as e:
            log.warning("IPC: Error reading from client: %s", e)
            self._remove_client(client)
            return

        response = self._handle_message(client, msg_type, payload)
        self._send_message(client, msg_type, response)

    def _remove_client(self, client: socket.socket):
        """Remove and close a client connection."""
        if client in self.clients:
            self.clients.remove(client)
        self.subscribers.pop(client, None)
        client.close()
        log.debug(
            "IPC: Client disconnected (total: %d, subscribers: %d)",
            len(self.clients), len(self.subscribers),
        )

    def _handle_message(self, client: socket.socket, msg_type: int, payload: bytes) -> Any:
        """Process an IPC message and return the response data."""
        log.debug("IPC: Received message type %d", msg_type)
        try:
            if msg_type == MessageType.RUN_COMMAND:
                return self._run_command(payload.decode("utf-8").strip())
            if msg_type == MessageType.SUBSCRIBE:
                return self._subscribe(client, json.loads(payload.decode("utf-8")))
            if msg_type == MessageType.GET_OUTPUTS:
                return self._get_outputs()
            if msg_type == MessageType.GET_VERSION:
                return version_info()
            if msg_type == MessageType.GET_TILING:
                return self._get_tiling()
            return {"success": False, "error": f"Unknown message type: {msg_type}"}
        except Exception as e:
            log.warning("IPC: Error handling message type %d: %s", msg_type, e)
            return {"success": False, "error": str(e)}

    def _run_command(self, command: str) -> List[Dict[str, Any]]:
        """Execute one or more ';'-separated tiling commands."""
        results = []
        for part in command.split(";"):
            part = part.strip()
            if not part:
                continue
            if part.startswith("tiling "):
                part = part[len("tiling "):]
            status = self.tiling.run_command(part)
            results.append({"success": True, "status": status})
        if not results:
            results.append({"success": False, "error": "Empty command"})
        return results

    def _subscribe(self, client: socket.socket, events: List[str]) -> Dict[str, Any]:
        unknown = [name for name in events if name not in EVENT_NAMES]
        if unknown:
            return {"success": False, "error": f"Unknown events: {', '.join(unknown)}"}
        # Add to existing subscriptions rather than replacing
        existing = self.subscribers.get(client, [])
        self.subscribers[client] = existing + [e for e in events if e not in existing]
        log.debug("IPC: Client subscribed to: %s", self.subscribers[client])
        return {"success": True}

    def _get_outputs(self) -> List[Dict[str, Any]]:
        outputs = []
        for output in self.registry.outputs.values():
            usable = output.usable_area
            outputs.append(
                {
                    "name": output.name,
                    "active": output.is_usable,
                    "current_workspace": self.registry.current_workspace,
                    "rect": {
                        "x": usable.x,
                        "y": usable.y,
                        "width": usable.width,
                        "height": usable.height,
                    },
                }
            )
        return outputs

    def _get_tiling(self) -> Dict[str, Any]:
        resize = self.tiling.resize
        resized = None
        if resize is not None:
            box = resize.geometry
            resized = {
                "id": resize.view.object_id,
                "rect": {"x": box.x, "y": box.y, "width": box.width, "height": box.height},
            }
        return {
            "enabled": self.tiling.enabled,
            "grid_mode": self.tiling.grid,
            "status": self.tiling.status,
            "gap": self.tiling.config.gap,
            "resized_view": resized,
        }

    def _send_message(self, client: socket.socket, msg_type: int, payload: Any):
        """Send a message to a client in i3 IPC format."""
        data = json.dumps(payload).encode("utf-8")
        try:
            client.sendall(pack_message(msg_type, data))
        except OSError as e:
            log.warning("IPC: Error sending message: %s", e)
            self._remove_client(client)

    def broadcast_event(self, event_name: str, payload: Dict[str, Any]):
        """Broadcast an event to all subscribed clients."""
        event_type = EVENT_NAMES[event_name]
        for client, subscribed_events in list(self.subscribers.items()):
            if event_name in subscribed_events:
                self._send_message(client, event_type, payload)

    def stop(self):
        """Stop the IPC server and close all connections."""
        for client in list(self.clients):
            self._remove_client(client)

        if self.server_socket:
            self.server_socket.close()
            self.server_socket = None

        if self.socket_path.exists():
            self.socket_path.unlink()

        log.info("IPC server stopped")


class IPCClient:
    """Blocking client for the autotile IPC socket."""

    def __init__(self, socket_path: Union[str, Path], timeout: float = 2.0):
        self.socket_path = Path(socket_path)
        self.timeout = timeout
        self.sock: Optional[socket.socket] = None

    def connect(self):
        """Connect to the server.

        Raises:
            IPCError: If the socket does not exist or refuses the connection
        """
        if not self.socket_path.exists():
            raise IPCError(f"No autotile socket at {self.socket_path}")
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self.timeout)
        try:
            sock.connect(str(self.socket_path))
        except OSError as e:
            sock.close()
            raise IPCError(f"Cannot connect to {self.socket_path}: {e}") from e
        self.sock = sock

    def close(self):
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    def __enter__(self) -> "IPCClient":
        self.connect()
        return self

    def __exit__(self, *exc_info):
        self.close()

    def request(self, msg_type: int, payload: str = "") -> Any:
        """Send one message and return the decoded reply."""
        if self.sock is None:
            self.connect()
        try:
            self.sock.sendall(pack_message(msg_type, payload.encode("utf-8")))
            header = self._recv_exact(HEADER_SIZE)
            if header[: len(MAGIC)] != MAGIC:
                raise IPCError(f"Invalid magic bytes in reply: {header[:len(MAGIC)]!r}")
            length, _ = HEADER.unpack(header[len(MAGIC):])
            body = self._recv_exact(length)
        except OSError as e:
            raise IPCError(f"IPC transport error: {e}") from e
        return json.loads(body.decode("utf-8"))

    def command(self, command: str) -> List[Dict[str, Any]]:
        """Run a tiling command, e.g. "grid-mode toggle"."""
        reply = self.request(MessageType.RUN_COMMAND, command)
        # Errors raised while serving come back as a single object
        return reply if isinstance(reply, list) else [reply]

    def tiling_state(self) -> Dict[str, Any]:
        return self.request(MessageType.GET_TILING)

    def _recv_exact(self, size: int) -> bytes:
        data = b""
        while len(data) < size:
            chunk = self.sock.recv(size - len(data))
            if not chunk:
                raise IPCError("Connection closed by server")
            data += chunk
        return data
