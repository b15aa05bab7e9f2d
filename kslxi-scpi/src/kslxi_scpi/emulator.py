"""In-process instrument emulator answering queries with canned responses.

The emulator maps query headers to :data:`ResponseValue` replies and is served
over TCP by :class:`kslxi_scpi.server.EmulatorServer`, so a
:class:`kslxi_scpi.LxiDevice` can be exercised without hardware.
"""

from __future__ import annotations

import logging
from typing import Mapping

from kslxi_scpi.response import Binary, ResponseValue, Text

logger = logging.getLogger(__name__)

# Reply to an unrecognized query, formatted like a SCPI error queue entry.
UNDEFINED_HEADER = Text('-113,"Undefined header"')


class ResponseEmulator:
    """Emulator that answers queries from a fixed response table.

    Query headers are matched case-insensitively. Lines without a ``?`` are
    treated as commands and produce no reply.

    Args:
        responses: Mapping of query header (e.g. ``"*IDN?"``) to reply.
    """

    def __init__(self, responses: Mapping[str, ResponseValue]) -> None:
        self._responses: dict[str, ResponseValue] = {
            query.strip().upper(): value for query, value in responses.items()
        }
        self._commands: list[str] = []

    @property
    def commands(self) -> tuple[str, ...]:
        """Non-query lines received so far, in order."""
        return tuple(self._commands)

    def set_response(self, query: str, value: ResponseValue) -> None:
        """Add or replace the reply to ``query``."""
        self._responses[query.strip().upper()] = value

    def handle(self, line: str) -> ResponseValue | None:
        """Process one command or query line.

        Args:
            line: The received line without terminator.

        Returns:
            The reply for a query, or None for a command.
        """
        line = line.strip()
        if not line:
            return None
        if "?" not in line:
            self._commands.append(line)
            return None

        header = line[: line.index("?") + 1].upper()
        value = self._responses.get(header)
        if value is None:
            logger.warning("Undefined query header %r", header)
            return UNDEFINED_HEADER
        return value


def make_default_emulator() -> ResponseEmulator:
    """Create an emulator with an identity string and one binary data block.

    Returns:
        Emulator answering ``*IDN?`` with ``"Emulator"`` and ``DATA?`` with
        the four bytes ``00 FF 0A 80``.
    """
    return ResponseEmulator(
        {
            "*IDN?": Text("Emulator"),
            "DATA?": Binary(b"\x00\xff\x0a\x80"),
        }
    )
