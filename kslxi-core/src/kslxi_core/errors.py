"""Exception types for kslxi-core.

This module defines the exception hierarchy used throughout kslxi. All kslxi
exceptions inherit from LxiError, allowing consumers to catch all
library-specific errors with a single except clause.

Exception hierarchy:
    LxiError (base)
    +-- LxiConnectionError: Instrument connection failures
    +-- ConfigError: Invalid configuration files or values
"""


class LxiError(Exception):
    """Base exception for all kslxi errors.

    This is the root of the kslxi exception hierarchy. Catch this to handle
    any library-specific error.
    """


class LxiConnectionError(LxiError):
    """Raised when a connection to an LXI instrument fails.

    This may occur when the TCP connection cannot be established, or when
    an operation is attempted on a device that is not connected.
    """


class ConfigError(LxiError):
    """Raised for invalid configuration.

    Common causes include empty or malformed YAML files, unknown keys, or
    values outside their permitted range.
    """
