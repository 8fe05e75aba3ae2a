"""HTTP client used by the credential exchange.

Classes:
    :class:`SimpleHttpClient` -- blocking client backed by :class:`httpx.Client`
    whose :meth:`~SimpleHttpClient.do` returns ``(response, body)``.
"""

from mobingi.client.simple_client import SimpleHttpClient

__all__ = ["SimpleHttpClient"]
