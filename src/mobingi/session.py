"""Authenticated sessions for the Mobingi API.

:func:`new` resolves a :class:`~mobingi.models.Config`, obtains an access
token (unless one is supplied), and returns a :class:`Session`. The token is
fixed for the lifetime of the session; create a new session to
re-authenticate.

Example::

    from mobingi.models import Config
    from mobingi.session import new

    sess = new(Config(client_id="abc", client_secret="xyz"))
    req = sess.simple_auth_request("GET", sess.api_endpoint() + "/alm/stack")
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx

from mobingi.auth import apply_default_scope, get_access_token
from mobingi.config import resolve_config
from mobingi.exceptions import MobingiError
from mobingi.models import Config

logger = logging.getLogger(__name__)

REGISTRY_API_VERSION = "v2"

# RFC 7230 token characters.
_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class Session:
    """A resolved configuration and the access token obtained for it.

    Args:
        config: The resolved session configuration.
        access_token: Bearer token sent by :meth:`simple_auth_request`.
    """

    def __init__(self, config: Config, access_token: str = "") -> None:
        self.config = config
        self.access_token = access_token

    def __repr__(self) -> str:
        return f"Session(api={self.api_endpoint()!r}, authenticated={bool(self.access_token)})"

    def api_endpoint(self) -> str:
        """Return ``{base_api_url}/v{api_version}``, or the base URL when the version is negative."""
        if self.config.api_version > -1:
            return f"{self.config.base_api_url}/v{self.config.api_version}"
        return self.config.base_api_url

    def registry_endpoint(self) -> str:
        return f"{self.config.base_registry_url}/{REGISTRY_API_VERSION}"

    def sesha3_endpoint(self) -> str:
        return self.config.sesha3_url

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    def simple_auth_request(
        self, method: str, url: str, body: Any = None
    ) -> Optional[httpx.Request]:
        """Build a request carrying the session's bearer token.

        Args:
            method: HTTP method, e.g. ``"GET"``.
            url: Absolute request URL.
            body: Optional body: ``bytes``, ``str``, or an iterable/file of
                bytes.

        Returns:
            The :class:`httpx.Request`, or ``None`` if *method* is not a
            valid HTTP token or *url* cannot be parsed.
        """
        if not isinstance(method, str) or not _METHOD_RE.match(method):
            return None
        try:
            return httpx.Request(method, url, content=body, headers=self.auth_headers())
        except (httpx.InvalidURL, TypeError, ValueError):
            return None


def new(config: Optional[Config] = None) -> Session:
    """Create an authenticated :class:`Session`.

    Resolves *config* over the environment defaults (see
    :func:`~mobingi.config.resolve_config`). A pre-supplied
    ``access_token`` is adopted without any network call; otherwise the
    credentials are exchanged at the token endpoint.

    Args:
        config: Optional override configuration.

    Returns:
        A session holding the access token.

    Raises:
        MobingiError: If the credential exchange fails. The message starts
            with ``"get access token failed"`` and ``exc.session`` holds the
            session built so far (configuration set, token empty).
    """
    resolved = resolve_config(config)
    if resolved.access_token:
        logger.debug("Using pre-supplied access token")
        return Session(resolved, resolved.access_token)

    session = Session(apply_default_scope(resolved))
    try:
        session.access_token = get_access_token(session.config, session.api_endpoint())
    except MobingiError as exc:
        raise exc.wrap("get access token failed", session=session) from exc

    logger.info("Authenticated against %s", session.api_endpoint())
    return session
