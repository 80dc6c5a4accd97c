"""Tests for the loadtarget command line."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from loadtarget import __version__, cli
from loadtarget.config import Transport
from loadtarget.errors import ServerError

runner = CliRunner()


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch) -> list:
    calls: list = []
    monkeypatch.setattr(cli, "serve", lambda app, config: calls.append((app, config)))
    return calls


def test_version():
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_defaults(served):
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 0
    (_, config), = served
    assert (config.host, config.port, config.transport) == ("", 8080, Transport.HTTP1)


def test_go_style_flags(served):
    result = runner.invoke(cli.app, ["-bind", "127.0.0.1:9090", "-h2c"])
    assert result.exit_code == 0
    (_, config), = served
    assert (config.host, config.port, config.transport) == ("127.0.0.1", 9090, Transport.H2C)


def test_long_flags(served):
    result = runner.invoke(cli.app, ["--bind", ":9091", "--h2c"])
    assert result.exit_code == 0
    assert served[0][1].port == 9091


def test_bad_bind_exits_nonzero(served):
    result = runner.invoke(cli.app, ["-bind", "nope"])
    assert result.exit_code == 1
    assert not served


def test_listen_failure_exits_nonzero(monkeypatch: pytest.MonkeyPatch):
    def fail(app, config):
        raise ServerError("cannot listen on *:8080: address in use")

    monkeypatch.setattr(cli, "serve", fail)
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 1
