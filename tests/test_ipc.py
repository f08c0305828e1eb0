"""
Tests for the IPC server, client framing and command line.
"""

import json
import socket
import struct
import threading

import pytest
from pubsub import pub

from autotile import cli
from autotile.errors import IPCError
from autotile.geometry import Box, Side
from autotile.ipc import (
    HEADER_SIZE,
    MAGIC,
    EventType,
    IPCClient,
    IPCServer,
    MessageType,
    pack_message,
)
from autotile.objects import View
from autotile.operation_manager import OperationManager
from autotile.tiling_manager import TilingManager


def read_message(sock):
    header = sock.recv(HEADER_SIZE)
    assert header[:6] == MAGIC
    length, msg_type = struct.unpack("<II", header[6:])
    data = b""
    while len(data) < length:
        data += sock.recv(length - len(data))
    return msg_type, json.loads(data.decode("utf-8"))


@pytest.fixture
def tiling(registry, config):
    return TilingManager(bus=pub, registry=registry, config=config)


@pytest.fixture
def server(tiling, registry, tmp_path):
    server = IPCServer(pub, tiling, registry, tmp_path / "autotile.sock")
    yield server
    for client in list(server.clients):
        server._remove_client(client)


@pytest.fixture
def pair():
    server_side, client_side = socket.socketpair()
    client_side.settimeout(2)
    yield server_side, client_side
    server_side.close()
    client_side.close()


@pytest.mark.unit
class TestFraming:
    """Test the i3-ipc message framing."""

    def test_pack_message(self):
        data = pack_message(MessageType.RUN_COMMAND, b"status")
        assert data[:6] == b"i3-ipc"
        assert struct.unpack("<II", data[6:14]) == (6, 0)
        assert data[14:] == b"status"


@pytest.mark.unit
class TestMessageHandling:
    """Test message dispatch without sockets."""

    def test_run_command(self, server, tiling):
        result = server._handle_message(None, MessageType.RUN_COMMAND, b"grid-mode on")
        assert result == [{"success": True, "status": "grid"}]
        assert tiling.status == "grid"

    def test_run_multiple_commands(self, server):
        result = server._handle_message(
            None, MessageType.RUN_COMMAND, b"tiling disable; tiling status"
        )
        assert result == [
            {"success": True, "status": "stacking"},
            {"success": True, "status": "stacking"},
        ]

    def test_unknown_command_reports_error(self, server):
        result = server._handle_message(None, MessageType.RUN_COMMAND, b"explode")
        assert result["success"] is False
        assert "explode" in result["error"]

    def test_unknown_message_type(self, server):
        result = server._handle_message(None, 42, b"")
        assert result["success"] is False

    def test_get_version(self, server):
        result = server._handle_message(None, MessageType.GET_VERSION, b"")
        assert result["human_readable"].startswith("autotile ")
        assert result["major"] == 0

    def test_get_outputs(self, server):
        (output,) = server._handle_message(None, MessageType.GET_OUTPUTS, b"")
        assert output["name"] == "DP-1"
        assert output["rect"] == {"x": 0, "y": 0, "width": 1920, "height": 1080}

    def test_get_tiling(self, server, registry):
        view = View(7, box=Box(0, 0, 300, 200), use_ssd=False)
        registry.add_view(view)
        operations = OperationManager(bus=pub, registry=registry)
        operations.start_resize(view, Side.RIGHT)

        result = server._handle_message(None, MessageType.GET_TILING, b"")

        assert result["status"] == "smart"
        assert result["gap"] == 10
        assert result["resized_view"]["id"] == 7
        assert result["resized_view"]["rect"]["width"] == 1900

    def test_subscribe_unknown_event(self, server, pair):
        server_side, _ = pair
        result = server._handle_message(server_side, MessageType.SUBSCRIBE, b'["window"]')
        assert result["success"] is False


@pytest.mark.unit
class TestClientSockets:
    """Test request handling over a socket pair."""

    def test_request_roundtrip(self, server, pair):
        server_side, client_side = pair
        client_side.sendall(pack_message(MessageType.RUN_COMMAND, b"status"))

        server._handle_client(server_side)

        msg_type, payload = read_message(client_side)
        assert msg_type == MessageType.RUN_COMMAND
        assert payload == [{"success": True, "status": "smart"}]

    def test_bad_magic_drops_client(self, server, pair):
        server_side, client_side = pair
        server.clients.append(server_side)
        client_side.sendall(b"xx-ipc" + struct.pack("<II", 0, 0))

        server._handle_client(server_side)

        assert server_side not in server.clients

    def test_tiling_events_broadcast(self, server, tiling, pair):
        server_side, client_side = pair
        server.clients.append(server_side)
        server._handle_message(server_side, MessageType.SUBSCRIBE, b'["tiling"]')

        tiling.run_command("disable")

        msg_type, payload = read_message(client_side)
        assert msg_type == EventType.TILING
        assert payload == {"change": "mode", "mode": "stacking"}

    def test_workspace_events_broadcast(self, server, registry, pair):
        server_side, client_side = pair
        server._handle_message(server_side, MessageType.SUBSCRIBE, b'["workspace"]')

        registry.switch_workspace("3")

        msg_type, payload = read_message(client_side)
        assert msg_type == EventType.WORKSPACE
        assert payload["current"]["name"] == "3"
        assert payload["old"]["name"] == "1"

    def test_client_reads_tiling_state(self, server, pair, tmp_path):
        server_side, client_side = pair
        client = IPCClient(tmp_path / "unused.sock")
        client.sock = client_side
        worker = threading.Thread(target=server._handle_client, args=(server_side,))
        worker.start()

        state = client.tiling_state()
        worker.join(2)

        assert state["status"] == "smart"
        assert state["enabled"] is True
        assert state["resized_view"] is None


@pytest.mark.unit
class TestClient:
    """Test IPCClient and the command line front end."""

    def test_missing_socket(self, tmp_path):
        client = IPCClient(tmp_path / "missing.sock")
        with pytest.raises(IPCError):
            client.connect()

    def test_cli_missing_socket_exits_1(self, tmp_path, capsys):
        code = cli.main(["--tiling-status", "--socket", str(tmp_path / "missing.sock")])
        assert code == 1
        assert "No autotile socket" in capsys.readouterr().err

    def test_cli_requires_an_action(self):
        with pytest.raises(SystemExit):
            cli.main([])

    def test_cli_grid_mode_command(self, monkeypatch, capsys):
        sent = []

        class FakeClient:
            def __init__(self, socket_path):
                self.socket_path = socket_path

            def __enter__(self):
                return self

            def __exit__(self, *exc_info):
                pass

            def command(self, command):
                sent.append(command)
                return [{"success": True, "status": "grid"}]

        monkeypatch.setattr(cli, "IPCClient", FakeClient)

        assert cli.main(["--tiling-grid-mode", "on", "--socket", "/tmp/x.sock"]) == 0
        assert cli.main(["--tiling-status", "--socket", "/tmp/x.sock"]) == 0

        assert sent == ["grid-mode on", "status"]
        assert capsys.readouterr().out.strip() == "grid"

    def test_cli_failed_command_exits_1(self, monkeypatch, capsys):
        class FakeClient:
            def __init__(self, socket_path):
                pass

            def __enter__(self):
                return self

            def __exit__(self, *exc_info):
                pass

            def command(self, command):
                return [{"success": False, "error": "Unknown tiling command: x"}]

        monkeypatch.setattr(cli, "IPCClient", FakeClient)

        assert cli.main(["--toggle-tiling", "--socket", "/tmp/x.sock"]) == 1
        assert "Unknown tiling command" in capsys.readouterr().err

    def test_cli_prints_tiling_state(self, monkeypatch, capsys):
        class FakeClient:
            def __init__(self, socket_path):
                pass

            def __enter__(self):
                return self

            def __exit__(self, *exc_info):
                pass

            def tiling_state(self):
                return {"status": "grid", "gap": 4, "resized_view": None}

        monkeypatch.setattr(cli, "IPCClient", FakeClient)

        assert cli.main(["--tiling-state", "--socket", "/tmp/x.sock"]) == 0
        assert json.loads(capsys.readouterr().out) == {
            "gap": 4,
            "resized_view": None,
            "status": "grid",
        }
