"""Raw TCP connection to an LXI instrument.

This module provides :class:`LxiDevice`, which owns the socket to an
instrument, writes commands to it, and hands the buffered reader to
:func:`kslxi_scpi.decode` once per expected reply. It performs no retries or
reconnects; any failure is reported to the caller.

Typical usage::

    from kslxi_scpi import LxiDevice

    with LxiDevice("192.168.1.100") as device:
        identity = device.query("*IDN?")
        waveform = device.query("DATA?")
"""

from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING, Any, BinaryIO

from kslxi_core.errors import LxiConnectionError

from kslxi_scpi.config import DEFAULT_PORT
from kslxi_scpi.decoder import decode
from kslxi_scpi.response import Binary

if TYPE_CHECKING:
    from kslxi_scpi.config import LxiDeviceConfig
    from kslxi_scpi.response import ResponseValue

logger = logging.getLogger(__name__)


class LxiDevice:
    """SCPI instrument reachable over a raw TCP socket.

    Exchanges must be serialized: send one command, then call
    :meth:`receive` exactly once before sending the next.

    Attributes:
        address: The ``(host, port)`` the device connects to.
        is_connected: Whether the socket is currently open.

    Args:
        host: Instrument host name or IP address.
        port: SCPI raw socket port. Defaults to 5025.
        timeout: Socket timeout in seconds applied to connect and reads.
            ``None`` blocks indefinitely.
        write_termination: Terminator appended to every command.

    Example:
        >>> device = LxiDevice("192.168.1.100")
        >>> device.connect()
        >>> device.send("*IDN?")
        >>> print(device.receive())
        >>> device.close()
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        timeout: float | None = 5.0,
        write_termination: str = "\n",
    ) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout
        self._write_termination = write_termination.encode("ascii")
        self._sock: socket.socket | None = None
        self._reader: BinaryIO | None = None

    @classmethod
    def from_config(cls, config: LxiDeviceConfig) -> LxiDevice:
        """Create a device from a :class:`LxiDeviceConfig`."""
        return cls(
            config.host,
            config.port,
            timeout=config.timeout,
            write_termination=config.write_termination,
        )

    # -- Properties ----------------------------------------------------------

    @property
    def address(self) -> tuple[str, int]:
        """The ``(host, port)`` address of the instrument."""
        return (self._host, self._port)

    @property
    def is_connected(self) -> bool:
        """Return True if the socket is currently open."""
        return self._sock is not None

    # -- Lifecycle -----------------------------------------------------------

    def connect(self) -> None:
        """Open the TCP connection.

        Calling this on a connected device is a no-op.

        Raises:
            LxiConnectionError: If the connection cannot be established.
        """
        if self._sock is not None:
            return

        try:
            sock = socket.create_connection(self.address, timeout=self._timeout)
        except OSError as exc:
            raise LxiConnectionError(
                f"Failed to connect to {self._host}:{self._port}: {exc}"
            ) from exc

        self._sock = sock
        self._reader = sock.makefile("rb")
        logger.debug("Connected to %s:%d", self._host, self._port)

    def close(self) -> None:
        """Close the connection.

        Safe to call multiple times.
        """
        if self._reader is not None:
            self._reader.close()
            self._reader = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None
            logger.debug("Disconnected from %s:%d", self._host, self._port)

    def __enter__(self) -> LxiDevice:
        self.connect()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- Exchange ------------------------------------------------------------

    def send(self, command: bytes | str) -> None:
        """Send a command to the instrument.

        Args:
            command: The SCPI command or query, without terminator.

        Raises:
            LxiConnectionError: If the device is not connected.
            OSError: If the socket write fails.
        """
        if self._sock is None:
            raise LxiConnectionError("Device is not connected")
        if isinstance(command, str):
            command = command.encode("ascii")
        logger.debug("Send %r", command)
        self._sock.sendall(command + self._write_termination)

    def receive(self) -> ResponseValue:
        """Read one response from the instrument.

        Returns:
            The decoded :class:`Text` or :class:`Binary` response.

        Raises:
            LxiConnectionError: If the device is not connected.
            ResponseTruncatedError: If the connection closed mid-response.
            DecodeError: If the response is malformed.
            OSError: If the socket read fails or times out.
        """
        if self._reader is None:
            raise LxiConnectionError("Device is not connected")
        value = decode(self._reader)
        if isinstance(value, Binary):
            logger.debug("Received %d byte block", len(value.data))
        else:
            logger.debug("Received %r", value.value)
        return value

    def query(self, command: bytes | str) -> ResponseValue:
        """Send a query and read its response.

        Args:
            command: The SCPI query string (e.g. ``"*IDN?"``).

        Returns:
            The decoded response.
        """
        self.send(command)
        return self.receive()
