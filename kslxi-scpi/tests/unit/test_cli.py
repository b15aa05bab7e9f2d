"""Tests for the kslxi command-line interface."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

from kslxi_scpi.cli import build_parser, main
from kslxi_scpi.emulator import ResponseEmulator, make_default_emulator
from kslxi_scpi.response import Binary
from kslxi_scpi.server import EmulatorServer


@pytest.fixture
def server() -> Iterator[EmulatorServer]:
    """Default emulator served on an ephemeral loopback port."""
    srv = EmulatorServer(make_default_emulator(), port=0)
    srv.start()
    yield srv
    srv.stop()


class TestParser:
    """Tests for argument parsing."""

    def test_query_with_host(self) -> None:
        args = build_parser().parse_args(["query", "scope", "*IDN?", "--port", "5555"])
        assert args.host == "scope"
        assert args.command == "*IDN?"
        assert args.port == 5555

    def test_query_with_config_only(self) -> None:
        args = build_parser().parse_args(["query", "--config", "bench.yaml", "*IDN?"])
        assert args.host is None
        assert args.command == "*IDN?"

    def test_subcommand_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


@pytest.mark.network
class TestQueryCommand:
    """Tests for ``kslxi query``."""

    def test_text_response(self, server: EmulatorServer, capsys: pytest.CaptureFixture[str]) -> None:
        host, port = server.address
        assert main(["query", host, "*IDN?", "--port", str(port)]) == 0
        assert capsys.readouterr().out.strip() == "Emulator"

    def test_binary_preview(self, server: EmulatorServer, capsys: pytest.CaptureFixture[str]) -> None:
        host, port = server.address
        assert main(["query", host, "DATA?", "--port", str(port)]) == 0
        assert capsys.readouterr().out.strip() == "<4 bytes> 00 ff 0a 80"

    def test_binary_output_file(self, server: EmulatorServer, tmp_path: Path) -> None:
        host, port = server.address
        out = tmp_path / "data.bin"
        assert main(["query", host, "DATA?", "--port", str(port), "-o", str(out)]) == 0
        assert out.read_bytes() == b"\x00\xff\x0a\x80"

    def test_long_binary_preview_truncated(self, capsys: pytest.CaptureFixture[str]) -> None:
        srv = EmulatorServer(ResponseEmulator({"CURV?": Binary(b"\x01" * 100)}), port=0)
        srv.start()
        try:
            host, port = srv.address
            assert main(["query", host, "CURV?", "--port", str(port)]) == 0
        finally:
            srv.stop()
        out = capsys.readouterr().out.strip()
        assert out.startswith("<100 bytes> 01 01")
        assert out.endswith("...")

    def test_config_file(self, server: EmulatorServer, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        host, port = server.address
        config = tmp_path / "bench.yaml"
        config.write_text(f"device:\n  host: {host}\n  port: {port}\n", encoding="utf-8")
        assert main(["query", "--config", str(config), "*IDN?"]) == 0
        assert capsys.readouterr().out.strip() == "Emulator"


class TestQueryFailures:
    """Tests for ``kslxi query`` error exits."""

    def test_connection_refused(self) -> None:
        with patch(
            "kslxi_scpi.device.socket.create_connection",
            side_effect=ConnectionRefusedError("refused"),
        ):
            assert main(["query", "127.0.0.1", "*IDN?"]) == 1

    def test_missing_host(self) -> None:
        assert main(["query", "*IDN?"]) == 1

    def test_missing_config_file(self, tmp_path: Path) -> None:
        assert main(["query", "--config", str(tmp_path / "nope.yaml"), "*IDN?"]) == 1
