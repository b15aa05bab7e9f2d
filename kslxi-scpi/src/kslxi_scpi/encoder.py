"""Response framing, the inverse of :mod:`kslxi_scpi.decoder`.

Instrument emulators use these functions to put responses on the wire in the
form :func:`kslxi_scpi.decode` reads back.
"""

from __future__ import annotations

from kslxi_scpi.response import Binary, ResponseValue, Text

# One digit holds the length of the length field.
MAX_LENGTH_DIGITS = 9


def encode_text(value: str, terminator: bytes = b"\n") -> bytes:
    """Frame a text response.

    Args:
        value: The response text.
        terminator: Line terminator, ``b"\\n"`` or ``b"\\r\\n"``.

    Returns:
        The UTF-8 encoded line with its terminator.

    Raises:
        ValueError: If the text would not decode back to the same value.
    """
    if value.startswith("#"):
        raise ValueError(f"Text response must not start with '#': {value!r}")
    if "\n" in value:
        raise ValueError(f"Text response must not contain a line feed: {value!r}")
    if value.endswith("\r"):
        raise ValueError(f"Text response must not end with a carriage return: {value!r}")
    # A lone line feed would be read as the first byte of the following line.
    if not value and terminator == b"\n":
        raise ValueError("Empty text response requires a '\\r\\n' terminator")
    return value.encode("utf-8") + terminator


def encode_block(data: bytes, terminator: bytes = b"\n") -> bytes:
    """Frame a payload as a definite-length arbitrary block.

    Args:
        data: The raw payload.
        terminator: Line terminator appended after the payload.

    Returns:
        ``#<k><n><data><terminator>`` where ``n`` is ``len(data)`` and ``k``
        the number of digits in ``n``.

    Raises:
        ValueError: If the payload length needs more than nine digits.
    """
    length = str(len(data))
    if len(length) > MAX_LENGTH_DIGITS:
        raise ValueError(f"Payload of {len(data)} bytes is too large for a block header")
    return b"#" + str(len(length)).encode("ascii") + length.encode("ascii") + bytes(data) + terminator


def encode_response(value: ResponseValue, terminator: bytes = b"\n") -> bytes:
    """Frame a response value for the wire.

    Args:
        value: A :class:`Text` or :class:`Binary` response.
        terminator: Line terminator.

    Returns:
        The framed bytes.
    """
    if isinstance(value, Binary):
        return encode_block(value.data, terminator)
    if isinstance(value, Text):
        return encode_text(value.value, terminator)
    raise TypeError(f"Unsupported response type: {type(value).__name__}")
