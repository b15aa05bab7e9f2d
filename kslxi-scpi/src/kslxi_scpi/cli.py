"""Command-line interface for kslxi.

Usage:
    # Query an instrument and print the response
    kslxi query 192.168.1.100 "*IDN?"

    # Save a binary block response to a file
    kslxi query 192.168.1.100 "DATA?" --output data.bin

    # Use connection settings from a YAML file
    kslxi query --config bench.yaml "MEAS:VOLT?"

    # Serve the built-in emulator on the SCPI raw socket port
    kslxi serve --port 5025
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from kslxi_core.errors import LxiError

from kslxi_scpi.config import DEFAULT_PORT, LxiDeviceConfig, load_device_config
from kslxi_scpi.device import LxiDevice
from kslxi_scpi.emulator import make_default_emulator
from kslxi_scpi.response import Binary
from kslxi_scpi.server import EmulatorServer

logger = logging.getLogger(__name__)

# Bytes shown in the hex preview of a binary response.
_PREVIEW_BYTES = 32


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _resolve_config(args: argparse.Namespace) -> LxiDeviceConfig:
    """Build device settings from a config file and/or command-line options."""
    if args.config:
        config = load_device_config(args.config)
        if args.host:
            config = LxiDeviceConfig(
                host=args.host,
                port=config.port,
                timeout=config.timeout,
                write_termination=config.write_termination,
            )
        return config
    if not args.host:
        raise LxiError("A host is required when --config is not given")
    return LxiDeviceConfig(host=args.host, port=args.port, timeout=args.timeout)


def cmd_query(args: argparse.Namespace) -> int:
    """Send one query and print or save the response."""
    try:
        config = _resolve_config(args)
        with LxiDevice.from_config(config) as device:
            value = device.query(args.command)
    except (LxiError, OSError) as exc:
        logger.error("Query %r failed: %s", args.command, exc)
        return 1

    if isinstance(value, Binary):
        if args.output:
            Path(args.output).write_bytes(value.data)
            print(f"Wrote {len(value.data)} bytes to {args.output}")
        else:
            preview = value.data[:_PREVIEW_BYTES].hex(" ")
            suffix = " ..." if len(value.data) > _PREVIEW_BYTES else ""
            print(f"<{len(value.data)} bytes> {preview}{suffix}")
    else:
        print(value.value)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Serve the default emulator until interrupted."""
    server = EmulatorServer(make_default_emulator(), host=args.host, port=args.port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down")
    finally:
        server.stop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kslxi",
        description="Query LXI instruments over raw SCPI sockets",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    query = subparsers.add_parser("query", help="Send a query and print the response")
    query.add_argument("host", nargs="?", help="Instrument host name or IP address")
    query.add_argument("command", help="SCPI query, e.g. '*IDN?'")
    query.add_argument("--port", type=int, default=DEFAULT_PORT, help="SCPI socket port")
    query.add_argument("--timeout", type=float, default=5.0, help="Timeout in seconds")
    query.add_argument("--config", help="YAML file with a 'device' section")
    query.add_argument("--output", "-o", help="Write a binary response to this file")
    query.set_defaults(func=cmd_query)

    serve = subparsers.add_parser("serve", help="Serve the built-in emulator over TCP")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``kslxi`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.debug)
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
