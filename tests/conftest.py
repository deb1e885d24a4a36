from __future__ import annotations

import logging
from typing import Any

import httpx
import pytest

from tests.fixtures import modified_server, sample_server

REMOTE_URI = sample_server.URI


class SwitchableApp:
    """ASGI app delegating to another one, swapped to simulate a server restart."""

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        await self.app(scope, receive, send)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("tests.mini_client")


@pytest.fixture
def sample_app():
    return sample_server.create_app({"greetings": " nice to meet you"})


@pytest.fixture
def modified_app():
    return modified_server.create_app()


@pytest.fixture
def server(sample_app) -> SwitchableApp:
    return SwitchableApp(sample_app)


@pytest.fixture
def remote_options(server, logger) -> dict[str, Any]:
    return {
        "logger": logger,
        "transport": {
            "type": "http",
            "uri": REMOTE_URI,
            "http_transport": httpx.ASGITransport(app=server),
        },
    }
