"""Transport selection: uvicorn for HTTP/1.1, hypercorn for h2c."""

from __future__ import annotations

import asyncio
import logging
import socket
import threading
from functools import partial

import uvicorn
from fastapi import FastAPI
from hypercorn.asyncio import serve as hypercorn_serve
from hypercorn.config import Config as HypercornConfig

from loadtarget.config import ServerConfig, Transport
from loadtarget.errors import ServerError
from loadtarget.log import get_logger

logger = get_logger("server")


def bind_socket(host: str, port: int) -> socket.socket:
    """Create a listening TCP socket.

    An empty host listens on every interface, IPv6 included where the
    platform supports dual-stack sockets.

    Raises:
        ServerError: If the address cannot be bound.
    """
    try:
        if not host and socket.has_dualstack_ipv6():
            return socket.create_server(("", port), family=socket.AF_INET6, dualstack_ipv6=True)
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        return socket.create_server((host, port), family=family)
    except OSError as exc:
        msg = f"cannot listen on {host or '*'}:{port}: {exc}"
        raise ServerError(msg) from exc


async def _wait_for(event: threading.Event) -> None:
    await asyncio.get_running_loop().run_in_executor(None, event.wait)


def _serve_http1(
    app: FastAPI, sock: socket.socket, config: ServerConfig, shutdown: threading.Event | None
) -> None:
    # log_config=None leaves the "uvicorn" loggers to loadtarget.log
    uv_config = uvicorn.Config(
        app,
        log_config=None,
        log_level=logging.getLevelName(config.log_level).lower(),
    )
    server = uvicorn.Server(uv_config)

    if shutdown is not None:
        def stop() -> None:
            shutdown.wait()
            server.should_exit = True

        threading.Thread(target=stop, name="loadtarget-shutdown", daemon=True).start()

    server.run(sockets=[sock])


def _serve_h2c(
    app: FastAPI, sock: socket.socket, config: ServerConfig, shutdown: threading.Event | None
) -> None:
    # hypercorn answers HTTP/1.1, "Upgrade: h2c" and prior-knowledge HTTP/2 on one socket
    hc_config = HypercornConfig()
    hc_config.bind = [f"fd://{sock.detach()}"]
    hc_config.loglevel = logging.getLevelName(config.log_level)
    hc_config.errorlog = get_logger("hypercorn")
    hc_config.accesslog = get_logger("hypercorn.access")

    # without a trigger hypercorn stops on SIGINT/SIGTERM
    trigger = partial(_wait_for, shutdown) if shutdown is not None else None
    asyncio.run(hypercorn_serve(app, hc_config, shutdown_trigger=trigger))


_STRATEGIES = {
    Transport.HTTP1: _serve_http1,
    Transport.H2C: _serve_h2c,
}


def serve(app: FastAPI, config: ServerConfig, shutdown: threading.Event | None = None) -> None:
    """Bind the configured address and serve ``app``.

    Runs until interrupted, or until ``shutdown`` is set when one is given.

    Raises:
        ServerError: If the address cannot be bound.
    """
    sock = bind_socket(config.host, config.port)
    logger.info(
        "listening on %s:%d (%s)", config.host or "*", config.port, config.transport.value
    )
    _STRATEGIES[config.transport](app, sock, config, shutdown)
