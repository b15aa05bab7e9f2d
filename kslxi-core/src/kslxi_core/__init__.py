"""Core library for kslxi instrument communication.

This package provides the base error types shared by the kslxi packages. It is
designed with no external dependencies (stdlib-only) to serve as the base layer
for all other kslxi packages.

Example:
    >>> from kslxi_core import LxiError
    >>> try:
    ...     device.receive()
    ... except LxiError as exc:
    ...     print(f"Instrument problem: {exc}")
"""

from kslxi_core.errors import ConfigError, LxiConnectionError, LxiError

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Errors
    "ConfigError",
    "LxiConnectionError",
    "LxiError",
]
