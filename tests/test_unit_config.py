"""Tests for startup configuration."""

from __future__ import annotations

import logging

import pytest

from loadtarget.config import ServerConfig, Transport, build_config, parse_bind
from loadtarget.errors import ConfigError


class TestParseBind:

    @pytest.mark.parametrize("bind, expected", [
        (":8080", ("", 8080)),
        ("localhost:9000", ("localhost", 9000)),
        ("10.0.0.1:80", ("10.0.0.1", 80)),
        ("[::1]:8080", ("::1", 8080)),
        (":0", ("", 0)),
    ])
    def test_valid(self, bind, expected):
        assert parse_bind(bind) == expected

    @pytest.mark.parametrize("bind", ["8080", "localhost", ":http", ":", ":70000", "::1:8080"])
    def test_invalid(self, bind):
        with pytest.raises(ConfigError):
            parse_bind(bind)


class TestBuildConfig:

    def test_defaults(self):
        config = build_config()
        assert config == ServerConfig(host="", port=8080, transport=Transport.HTTP1)
        assert config.log_level == logging.INFO

    def test_h2c_selects_transport(self):
        assert build_config(":8080", h2c=True).transport is Transport.H2C

    def test_verbose(self):
        assert build_config(verbose=True).log_level == logging.DEBUG

    def test_frozen(self):
        config = build_config()
        with pytest.raises(AttributeError):
            config.port = 1  # type: ignore[misc]
