"""SCPI response decoding for LXI instruments.

This package reads SCPI query responses from a byte stream and classifies each
one as a text line or an IEEE 488.2 definite-length binary block. It includes:

- Response decoder and the matching response framing
- Typed response values (:class:`Text`, :class:`Binary`)
- Raw TCP device connection and YAML-backed connection settings
- An in-process emulator and TCP server for testing without hardware
- Custom exception types for decoding and truncated responses

Typical usage::

    from kslxi_scpi import Binary, LxiDevice

    with LxiDevice("192.168.1.100") as device:
        print(device.query("*IDN?"))
        value = device.query("DATA?")
        if isinstance(value, Binary):
            samples = value.data
"""

from kslxi_scpi.config import LxiDeviceConfig, load_device_config
from kslxi_scpi.decoder import decode, strip_terminator
from kslxi_scpi.device import LxiDevice
from kslxi_scpi.emulator import ResponseEmulator, make_default_emulator
from kslxi_scpi.encoder import encode_block, encode_response, encode_text
from kslxi_scpi.errors import (
    DecodeError,
    InvalidLengthDigitCountError,
    InvalidLengthFieldError,
    InvalidTextError,
    ResponseTruncatedError,
    ScpiError,
    TrailingGarbageError,
)
from kslxi_scpi.response import (
    Binary,
    ResponseValue,
    Text,
    as_binary,
    as_text,
    from_bin,
    from_text,
)
from kslxi_scpi.server import EmulatorServer
from kslxi_scpi.stream import ByteStream, read_exact

__all__ = [
    # Config
    "LxiDeviceConfig",
    "load_device_config",
    # Decoding
    "decode",
    "strip_terminator",
    # Device
    "LxiDevice",
    # Emulator
    "EmulatorServer",
    "ResponseEmulator",
    "make_default_emulator",
    # Encoding
    "encode_block",
    "encode_response",
    "encode_text",
    # Errors
    "DecodeError",
    "InvalidLengthDigitCountError",
    "InvalidLengthFieldError",
    "InvalidTextError",
    "ResponseTruncatedError",
    "ScpiError",
    "TrailingGarbageError",
    # Responses
    "Binary",
    "ResponseValue",
    "Text",
    "as_binary",
    "as_text",
    "from_bin",
    "from_text",
    # Stream
    "ByteStream",
    "read_exact",
]
