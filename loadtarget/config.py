"""Startup configuration for loadtarget."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from loadtarget.errors import ConfigError

DEFAULT_BIND = ":8080"


class Transport(enum.Enum):
    """Listener strategy selected at startup."""

    HTTP1 = "http/1.1"
    H2C = "h2c"


@dataclass(frozen=True)
class ServerConfig:
    """Resolved server settings.

    Attributes:
        host: Address to listen on. Empty string means all interfaces.
        port: TCP port.
        transport: Plain HTTP/1.1, or cleartext HTTP/2 with HTTP/1.1 fallback.
        log_level: Level for the ``loadtarget`` logger.
        json_logs: Emit JSON log lines.
    """

    host: str = ""
    port: int = 8080
    transport: Transport = Transport.HTTP1
    log_level: int = logging.INFO
    json_logs: bool = False


def parse_bind(bind: str) -> tuple[str, int]:
    """Split a ``host:port`` socket address.

    Accepts ``:8080``, ``localhost:8080``, ``10.0.0.1:8080`` and
    ``[::1]:8080``.

    Returns:
        ``(host, port)``; host is ``""`` when omitted.

    Raises:
        ConfigError: If there is no port or the port is not valid.
    """
    host, sep, port_str = bind.rpartition(":")
    if not sep:
        msg = f"bind address must be host:port, got: {bind!r}"
        raise ConfigError(msg)

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        msg = f"IPv6 bind addresses must be bracketed, got: {bind!r}"
        raise ConfigError(msg)

    if not port_str.isdigit():
        msg = f"bind port must be an integer, got: {port_str!r}"
        raise ConfigError(msg)

    port = int(port_str)
    if port > 65535:
        msg = f"bind port must be <= 65535, got: {port}"
        raise ConfigError(msg)

    return host, port


def build_config(
    bind: str = DEFAULT_BIND,
    *,
    h2c: bool = False,
    verbose: bool = False,
    json_logs: bool = False,
) -> ServerConfig:
    """Build a :class:`ServerConfig` from command line flags."""
    host, port = parse_bind(bind)
    return ServerConfig(
        host=host,
        port=port,
        transport=Transport.H2C if h2c else Transport.HTTP1,
        log_level=logging.DEBUG if verbose else logging.INFO,
        json_logs=json_logs,
    )
