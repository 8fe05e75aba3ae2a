"""Shared test fixtures for mobingi.

Provides environment isolation, output reset, and helpers for faking the
token endpoint with :class:`httpx.MockTransport`. These fixtures are
discovered by pytest and available to every test module.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

import httpx
import pytest

from mobingi.models import Config, HttpClientConfig
from mobingi.output import reset_output

ENV_VARS = [
    "MOBINGI_CLIENT_ID",
    "MOBINGI_CLIENT_SECRET",
    "MOBINGI_USERNAME",
    "MOBINGI_PASSWORD",
]


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove MOBINGI_* credentials so the developer's shell never leaks in."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and drop CLI log handlers after each test.

    The CLI binds Rich consoles to the streams CliRunner swaps in; once the
    test ends those streams are closed.
    """
    yield
    reset_output()
    package_logger = logging.getLogger("mobingi")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Token endpoint fakes
# ---------------------------------------------------------------------------


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
    ) -> None:
        self.status_code = status_code
        self.json_body = {"access_token": "X"} if json_body is None else json_body
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def token_handler() -> RecordingHandler:
    """A handler answering 200 with ``{"access_token": "X"}``."""
    return RecordingHandler()


@pytest.fixture
def mock_config(token_handler: RecordingHandler) -> Callable[..., Config]:
    """Factory for a Config whose HTTP client talks to ``token_handler``."""

    def _make(**kwargs: Any) -> Config:
        kwargs.setdefault(
            "http_client_config",
            HttpClientConfig(transport=httpx.MockTransport(token_handler)),
        )
        return Config(**kwargs)

    return _make
