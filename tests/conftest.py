"""Shared fixtures for the loadtarget test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from loadtarget import handlers
from loadtarget.main import create_app
from loadtarget.metrics import Metrics


@pytest.fixture
def metrics() -> Metrics:
    return Metrics(version="test")


@pytest.fixture
def client(metrics: Metrics):
    with TestClient(create_app(metrics)) as c:
        yield c


@pytest.fixture
def pauses(monkeypatch: pytest.MonkeyPatch) -> list[int]:
    """Replace the wait handler's sleep with a recorder."""
    recorded: list[int] = []

    async def fake_pause(seconds: int) -> None:
        recorded.append(seconds)

    monkeypatch.setattr(handlers, "_pause", fake_pause)
    return recorded
