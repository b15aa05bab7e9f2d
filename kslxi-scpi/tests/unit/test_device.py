"""Tests for LxiDevice against the emulator server."""

from __future__ import annotations

import io
from typing import Iterator
from unittest.mock import patch

import pytest

from kslxi_core.errors import LxiConnectionError
from kslxi_scpi.config import LxiDeviceConfig
from kslxi_scpi.device import LxiDevice
from kslxi_scpi.emulator import ResponseEmulator, make_default_emulator
from kslxi_scpi.errors import ResponseTruncatedError, TrailingGarbageError
from kslxi_scpi.response import Binary, Text
from kslxi_scpi.server import EmulatorServer


@pytest.fixture
def server() -> Iterator[EmulatorServer]:
    """Default emulator served on an ephemeral loopback port."""
    srv = EmulatorServer(make_default_emulator(), port=0)
    srv.start()
    yield srv
    srv.stop()


# ---------------------------------------------------------------------------
# Exchange with an emulated instrument
# ---------------------------------------------------------------------------


@pytest.mark.network
class TestExchange:
    """Tests for send/receive over TCP."""

    def test_text_block_text_sequence(self, server: EmulatorServer) -> None:
        host, port = server.address
        with LxiDevice(host, port) as device:
            device.send(b"*IDN?")
            assert device.receive() == Text("Emulator")

            device.send(b"DATA?")
            assert device.receive() == Binary(bytes([0, 255, 10, 128]))

            device.send(b"*IDN?")
            assert device.receive() == Text("Emulator")

    def test_query(self, server: EmulatorServer) -> None:
        host, port = server.address
        with LxiDevice(host, port) as device:
            assert device.query("DATA?") == Binary(b"\x00\xff\x0a\x80")

    def test_from_config(self, server: EmulatorServer) -> None:
        host, port = server.address
        config = LxiDeviceConfig(host=host, port=port, timeout=2.0)
        with LxiDevice.from_config(config) as device:
            assert device.query("*IDN?") == Text("Emulator")

    def test_large_block(self) -> None:
        payload = bytes(range(256)) * 400
        srv = EmulatorServer(ResponseEmulator({"CURV?": Binary(payload)}), port=0)
        srv.start()
        try:
            with LxiDevice(*srv.address) as device:
                assert device.query("CURV?") == Binary(payload)
        finally:
            srv.stop()

    def test_crlf_server(self) -> None:
        srv = EmulatorServer(make_default_emulator(), port=0, terminator=b"\r\n")
        srv.start()
        try:
            with LxiDevice(*srv.address, write_termination="\r\n") as device:
                assert device.query("*IDN?") == Text("Emulator")
                assert device.query("DATA?") == Binary(b"\x00\xff\x0a\x80")
        finally:
            srv.stop()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    """Tests for connect/close lifecycle."""

    def test_initially_disconnected(self) -> None:
        device = LxiDevice("127.0.0.1", 5025)
        assert not device.is_connected
        assert device.address == ("127.0.0.1", 5025)

    @pytest.mark.network
    def test_connect_and_close(self, server: EmulatorServer) -> None:
        device = LxiDevice(*server.address)
        device.connect()
        device.connect()  # Second call should be a no-op
        assert device.is_connected
        device.close()
        device.close()  # Should not raise
        assert not device.is_connected

    def test_close_without_connect(self) -> None:
        LxiDevice("127.0.0.1").close()  # Should not raise

    def test_connect_failure_raises(self) -> None:
        with patch(
            "kslxi_scpi.device.socket.create_connection",
            side_effect=ConnectionRefusedError("refused"),
        ):
            device = LxiDevice("127.0.0.1", 5025)
            with pytest.raises(LxiConnectionError, match="Failed to connect"):
                device.connect()
        assert not device.is_connected

    def test_send_when_disconnected_raises(self) -> None:
        with pytest.raises(LxiConnectionError, match="not connected"):
            LxiDevice("127.0.0.1").send("*IDN?")

    def test_receive_when_disconnected_raises(self) -> None:
        with pytest.raises(LxiConnectionError, match="not connected"):
            LxiDevice("127.0.0.1").receive()


# ---------------------------------------------------------------------------
# Error propagation
# ---------------------------------------------------------------------------


class _FakeSocket:
    """Socket stand-in whose reader replays fixed bytes."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.sent: list[bytes] = []

    def makefile(self, mode: str) -> io.BytesIO:
        return io.BytesIO(self._data)

    def sendall(self, data: bytes) -> None:
        self.sent.append(data)

    def close(self) -> None:
        pass


class TestErrorPropagation:
    """Decode and stream errors reach the caller."""

    def _connect_fake(self, data: bytes) -> tuple[LxiDevice, _FakeSocket]:
        fake = _FakeSocket(data)
        device = LxiDevice("127.0.0.1")
        with patch("kslxi_scpi.device.socket.create_connection", return_value=fake):
            device.connect()
        return device, fake

    def test_write_termination_appended(self) -> None:
        device, fake = self._connect_fake(b"1\n")
        assert device.query("*OPC?") == Text("1")
        assert fake.sent == [b"*OPC?\n"]

    def test_trailing_garbage(self) -> None:
        device, _ = self._connect_fake(b"#12abXY\n")
        with pytest.raises(TrailingGarbageError):
            device.receive()

    def test_closed_mid_payload(self) -> None:
        device, _ = self._connect_fake(b"#15ab")
        with pytest.raises(ResponseTruncatedError):
            device.receive()
