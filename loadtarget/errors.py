"""Exception hierarchy for loadtarget."""

from __future__ import annotations


class LoadTargetError(Exception):
    """Base exception for all loadtarget errors."""


class ConfigError(LoadTargetError):
    """Raised when a startup flag has an invalid value.

    Examples:
        - ``-bind`` has no port, or the port is not a number.
        - The port is outside 0-65535.
    """


class ServerError(LoadTargetError):
    """Raised when the server cannot bind or listen on its address."""
