"""TCP server exposing a response emulator for external tools.

Wraps a :class:`ResponseEmulator` and serves it over TCP, allowing an
:class:`LxiDevice` (or telnet, netcat, PyVISA) to interact with it. Replies
are framed with :func:`kslxi_scpi.encoder.encode_response`, so binary data
goes out as definite-length blocks.

Example:
    Start an emulator server on an ephemeral port::

        from kslxi_scpi import EmulatorServer, make_default_emulator

        server = EmulatorServer(make_default_emulator(), port=0)
        server.start()

        host, port = server.address
        print(f"Connect via: TCPIP::{host}::{port}::SOCKET")

        server.stop()
"""

from __future__ import annotations

import logging
import socketserver
import threading
from typing import Any

from kslxi_scpi.emulator import ResponseEmulator
from kslxi_scpi.encoder import encode_response

logger = logging.getLogger(__name__)


class _ScpiRequestHandler(socketserver.StreamRequestHandler):
    """Handle one TCP connection, forwarding lines to the emulator."""

    server: _ScpiTcpServer

    def handle(self) -> None:
        """Process incoming lines until the client disconnects.

        Each line is passed to the emulator; replies to queries are framed
        and written back immediately.
        """
        logger.debug("Client connected from %s", self.client_address)
        for raw_line in self.rfile:
            line = raw_line.decode("utf-8", errors="replace").strip()
            if not line:
                continue
            value = self.server.emulator.handle(line)
            if value is not None:
                self.wfile.write(encode_response(value, self.server.terminator))
                self.wfile.flush()
        logger.debug("Client %s disconnected", self.client_address)


class _ScpiTcpServer(socketserver.TCPServer):
    """TCPServer subclass that holds a reference to the emulator.

    Attributes:
        allow_reuse_address: Set to True to allow quick server restart.
        emulator: The emulator to serve.
        terminator: Line terminator used to frame replies.
    """

    allow_reuse_address = True

    def __init__(
        self,
        server_address: tuple[str, int],
        emulator: ResponseEmulator,
        terminator: bytes,
        **kwargs: Any,
    ) -> None:
        self.emulator = emulator
        self.terminator = terminator
        super().__init__(server_address, _ScpiRequestHandler, **kwargs)


class EmulatorServer:
    """TCP server wrapping a :class:`ResponseEmulator`.

    Runs a TCP server in a background daemon thread. The server handles one
    client connection at a time.

    Args:
        emulator: The emulator to serve.
        host: Bind address (default ``"127.0.0.1"``).
        port: Bind port (default ``5025``). Use ``0`` for an OS-assigned
            ephemeral port.
        terminator: Line terminator for replies, ``b"\\n"`` or ``b"\\r\\n"``.
    """

    def __init__(
        self,
        emulator: ResponseEmulator,
        host: str = "127.0.0.1",
        port: int = 5025,
        terminator: bytes = b"\n",
    ) -> None:
        self._server = _ScpiTcpServer((host, port), emulator, terminator)
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start serving in a daemon thread."""
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()
        logger.info("Emulator server listening on %s:%d", *self.address)

    def serve_forever(self) -> None:
        """Serve in the calling thread until :meth:`stop` or interrupt."""
        logger.info("Emulator server listening on %s:%d", *self.address)
        self._server.serve_forever()

    def stop(self) -> None:
        """Shut down the server and wait for the thread to exit."""
        if self._thread is not None:
            self._server.shutdown()
            self._thread.join()
            self._thread = None
        self._server.server_close()
        logger.info("Emulator server stopped")

    @property
    def address(self) -> tuple[str, int]:
        """Return the actual bound ``(host, port)`` address.

        Useful when binding to port 0 to get an ephemeral port assigned
        by the operating system.
        """
        addr = self._server.server_address
        return (str(addr[0]), int(addr[1]))
