"""Decoder for SCPI query responses.

Reads exactly one logical response from a :class:`ByteStream` and classifies
it by its first byte:

- Text: any line not starting with ``#``, terminated by ``\\n`` or ``\\r\\n``::

      Emulator\\r\\n

- Definite-length arbitrary block (IEEE 488.2): ``#``, one digit ``k``, ``k``
  decimal digits giving the payload length ``n``, ``n`` raw bytes, then the
  line terminator::

      #14<4 payload bytes>\\n

The decoder keeps no state between calls. It drains the bytes of one response
and its terminator, never more, so the stream is left at the start of the next
response.

Typical usage::

    from kslxi_scpi import decode

    reader = sock.makefile("rb")
    sock.sendall(b"DATA?\\n")
    value = decode(reader)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kslxi_scpi.errors import (
    InvalidLengthDigitCountError,
    InvalidLengthFieldError,
    InvalidTextError,
    TrailingGarbageError,
)
from kslxi_scpi.response import Binary, ResponseValue, Text
from kslxi_scpi.stream import read_exact

if TYPE_CHECKING:
    from kslxi_scpi.stream import ByteStream

BLOCK_MARKER = b"#"


def strip_terminator(data: bytes) -> bytes:
    """Remove a trailing ``\\n`` or ``\\r\\n`` from ``data``.

    A ``\\r`` is only removed when it directly precedes the final ``\\n``;
    anywhere else it is data.

    Args:
        data: Bytes read up to and including a line feed.

    Returns:
        ``data`` without its line terminator.
    """
    if not data.endswith(b"\n"):
        return data
    if data.endswith(b"\r\n"):
        return data[:-2]
    return data[:-1]


def decode(stream: ByteStream) -> ResponseValue:
    """Read and decode one response from ``stream``.

    Args:
        stream: An open, blocking byte stream positioned at the start of a
            response.

    Returns:
        :class:`Text` for a line response or :class:`Binary` for a
        definite-length block.

    Raises:
        ResponseTruncatedError: If the stream ends before the lead byte,
            the block header or the payload is complete.
        InvalidTextError: If a text line is not valid UTF-8.
        InvalidLengthDigitCountError: If the byte after ``#`` is not a digit.
        InvalidLengthFieldError: If the length digits do not parse.
        TrailingGarbageError: If anything but a terminator follows a payload.
        OSError: Stream failures (disconnect, timeout) propagate unchanged.
    """
    lead = read_exact(stream, 1)
    if lead != BLOCK_MARKER:
        return _decode_text(lead, stream)
    return _decode_block(stream)


def _decode_text(lead: bytes, stream: ByteStream) -> Text:
    """Decode a text line whose first byte has already been read."""
    content = strip_terminator(lead + stream.readline())
    try:
        return Text(content.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise InvalidTextError(content) from exc


def _decode_block(stream: ByteStream) -> Binary:
    """Decode a definite-length block after its ``#`` marker."""
    digit_count = read_exact(stream, 1)
    if not b"0" <= digit_count <= b"9":
        raise InvalidLengthDigitCountError(digit_count)

    # A '0' digit count passes the check above but leaves an empty, unparseable field.
    length_field = read_exact(stream, digit_count[0] - ord("0"))
    if not length_field.isdigit():
        raise InvalidLengthFieldError(length_field)

    payload = read_exact(stream, int(length_field))

    trailing = strip_terminator(stream.readline())
    if trailing:
        raise TrailingGarbageError(trailing)
    return Binary(payload)
