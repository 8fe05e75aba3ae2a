"""Minimal synchronous HTTP client used for the JSON credential exchange.

:class:`SimpleHttpClient` wraps :class:`httpx.Client` with the options in
:class:`~mobingi.models.HttpClientConfig` and exposes a single
:meth:`~SimpleHttpClient.do` call that sends a prepared request and hands
back both the response and its fully-read body.

A fresh :class:`httpx.Client` is opened for every call and closed before
:meth:`~SimpleHttpClient.do` returns, so there is no pooling and nothing to
clean up afterwards.

Example::

    client = SimpleHttpClient(HttpClientConfig(timeout=10))
    response, body = client.do(httpx.Request("GET", "https://api.mobingi.com/v3"))
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from mobingi.exceptions import ConnectionError_
from mobingi.models import HttpClientConfig

logger = logging.getLogger(__name__)


class SimpleHttpClient:
    """Send one request at a time and return ``(response, body)``.

    Args:
        config: Client options. ``None`` uses the
            :class:`~mobingi.models.HttpClientConfig` defaults.
    """

    def __init__(self, config: Optional[HttpClientConfig] = None) -> None:
        self._config = config or HttpClientConfig()

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    def do(self, request: httpx.Request) -> tuple[httpx.Response, bytes]:
        """Send *request* and read the whole response body.

        Headers from :attr:`HttpClientConfig.headers` are added unless the
        request already sets them.

        Args:
            request: A prepared :class:`httpx.Request`.

        Returns:
            The :class:`httpx.Response` (already closed) and its body bytes.
            Non-2xx responses are returned, not raised.

        Raises:
            ConnectionError_: On network errors (timeout, DNS failure,
                connection refused, protocol errors).
        """
        for key, value in self._config.headers.items():
            request.headers.setdefault(key, value)

        level = logging.INFO if self._config.verbose else logging.DEBUG
        logger.log(level, "%s %s", request.method, request.url)

        try:
            with self._build_client() as client:
                response = client.send(request)
                body = response.read()
        except httpx.HTTPError as exc:
            raise ConnectionError_(f"{request.method} {request.url}: {exc}") from exc

        logger.log(
            level,
            "%s %s -> %d",
            request.method,
            request.url,
            response.status_code,
        )
        return response, body

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=self._config.follow_redirects,
            transport=self._config.transport,
        )
