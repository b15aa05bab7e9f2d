"""Byte stream protocol consumed by the response decoder.

This module defines the :class:`ByteStream` protocol, which specifies the
interface a connection must provide for responses to be decoded from it.
Binary file objects already satisfy it, for example ``io.BytesIO``,
``io.BufferedReader`` and the reader returned by ``socket.makefile("rb")``.
"""

from __future__ import annotations

from typing import Protocol

from kslxi_scpi.errors import ResponseTruncatedError


class ByteStream(Protocol):
    """Protocol for a blocking, buffered byte source.

    This is a structural subtyping protocol (duck typing). Any class that
    implements ``read()`` and ``readline()`` with the correct signatures is
    considered a valid stream.

    Example:
        >>> import io
        >>> stream: ByteStream = io.BytesIO(b"Emulator\\n")  # Type checks OK
    """

    def read(self, size: int, /) -> bytes:
        """Read up to ``size`` bytes, blocking until they arrive.

        Returns fewer bytes only when the stream has ended.
        """
        ...

    def readline(self) -> bytes:
        """Read bytes up to and including the next line feed.

        Returns without a line feed only when the stream has ended.
        """
        ...


def read_exact(stream: ByteStream, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``stream``.

    Args:
        stream: The stream to read from.
        size: Number of bytes required.

    Returns:
        Exactly ``size`` bytes.

    Raises:
        ResponseTruncatedError: If the stream ends before ``size`` bytes
            are available.
    """
    if size == 0:
        return b""
    data = stream.read(size)
    while len(data) < size:
        chunk = stream.read(size - len(data))
        if not chunk:
            raise ResponseTruncatedError(size, data)
        data += chunk
    return data
