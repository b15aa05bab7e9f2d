"""SCPI response error types.

This module defines exception classes for errors that may occur while reading
a response from an instrument. All exceptions inherit from
:class:`kslxi_core.errors.LxiError`.

Two families are kept apart so callers can tell a broken connection from a
peer that sent something unparseable:

- :class:`ResponseTruncatedError`: the stream ended before the response was
  complete. Other stream failures (``OSError``, ``TimeoutError``) are not
  wrapped and reach the caller unchanged.
- :class:`DecodeError` and its subclasses: the bytes arrived but violate the
  response framing.
"""

from __future__ import annotations

from kslxi_core.errors import LxiError


class ScpiError(LxiError):
    """Base exception for SCPI protocol errors.

    All SCPI-related exceptions inherit from this class, allowing callers
    to catch all SCPI errors with a single except clause.
    """


class ResponseTruncatedError(ScpiError, EOFError):
    """Raised when the stream closes before an expected number of bytes arrived.

    This signals a broken connection rather than malformed framing, so it is
    not a :class:`DecodeError`.

    Attributes:
        expected: Number of bytes that were requested.
        received: The bytes that arrived before the stream ended.
    """

    def __init__(self, expected: int, received: bytes) -> None:
        """Initialize the error with the expected count and partial data.

        Args:
            expected: Number of bytes requested from the stream.
            received: Bytes actually read before end of stream.
        """
        self.expected = expected
        self.received = received
        super().__init__(
            f"stream closed after {len(received)} of {expected} expected bytes"
        )


class DecodeError(ScpiError):
    """Base exception for response framing violations.

    Example:
        >>> try:
        ...     value = decode(stream)
        ... except DecodeError as e:
        ...     print(f"Instrument sent a malformed response: {e}")
    """


class InvalidTextError(DecodeError):
    """Raised when a text response is not valid UTF-8.

    Attributes:
        data: The line content with its terminator stripped.
    """

    def __init__(self, data: bytes) -> None:
        self.data = data
        super().__init__("non-UTF-8 sequence in text response")


class InvalidLengthDigitCountError(DecodeError):
    """Raised when the byte following ``#`` is not a decimal digit.

    Attributes:
        byte: The offending digit-count byte.
    """

    def __init__(self, byte: bytes) -> None:
        self.byte = byte
        super().__init__(f"second byte is not a digit: {byte!r}")


class InvalidLengthFieldError(DecodeError):
    """Raised when the declared payload length is not an unsigned integer.

    Attributes:
        field: The raw length field bytes.
    """

    def __init__(self, field: bytes) -> None:
        self.field = field
        super().__init__(f"cannot parse declared payload length: {field!r}")


class TrailingGarbageError(DecodeError):
    """Raised when bytes other than a terminator follow a binary payload.

    Attributes:
        trailing: The unexpected bytes, terminator excluded.
    """

    def __init__(self, trailing: bytes) -> None:
        self.trailing = trailing
        super().__init__(
            f"unexpected bytes between payload end and line terminator: {trailing!r}"
        )
