"""Credential exchange against the Mobingi token endpoint.

:func:`get_access_token` trades the credentials in a
:class:`~mobingi.models.Config` for an access token with a single POST to
``{api_endpoint}/access_token``. The body is either

* a form (``application/x-www-form-urlencoded``) when
  :attr:`~mobingi.models.Config.use_form` is set, built by
  :func:`build_auth_form` and sent with a plain :func:`httpx.post`, or
* a JSON :class:`~mobingi.models.AuthPayload` built by
  :func:`build_auth_payload` and sent through
  :class:`~mobingi.client.SimpleHttpClient`, which honours
  :attr:`~mobingi.models.Config.http_client_config`.

When the grant type is neither ``client_credentials`` nor ``password`` it is
inferred: a non-empty username selects the password grant, otherwise the
client credentials grant is used.

Every failure is raised as a :class:`~mobingi.exceptions.MobingiError`
subclass whose message starts with a short context label such as
``"do failed"`` or ``"unmarshal failed"``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from mobingi.client import SimpleHttpClient
from mobingi.config import DEFAULT_SCOPE
from mobingi.exceptions import AuthError, ConfigError, ConnectionError_
from mobingi.models import AuthPayload, Config, GrantType, HttpClientConfig

logger = logging.getLogger(__name__)

ACCESS_TOKEN_PATH = "/access_token"


def apply_default_scope(config: Config) -> Config:
    """Return *config* with ``scope`` set to ``"openid"`` if it is empty."""
    if config.scope:
        return config
    return config.model_copy(update={"scope": DEFAULT_SCOPE})


def _infer_grant_type(config: Config) -> GrantType:
    if config.grant_type == GrantType.CLIENT_CREDENTIALS:
        return GrantType.CLIENT_CREDENTIALS
    if config.grant_type == GrantType.PASSWORD or config.username:
        return GrantType.PASSWORD
    return GrantType.CLIENT_CREDENTIALS


def _check_password(config: Config) -> None:
    if config.username and not config.password:
        raise AuthError("password cannot be empty")


def build_auth_payload(config: Config) -> AuthPayload:
    """Build the JSON token request body for *config*.

    An explicit grant type sends ``scope`` along; an inferred one does not.

    Raises:
        AuthError: If a username is given without a password.
    """
    grant_type = _infer_grant_type(config)
    explicit = config.grant_type in (GrantType.CLIENT_CREDENTIALS, GrantType.PASSWORD)

    if grant_type == GrantType.PASSWORD:
        _check_password(config)
        return AuthPayload(
            client_id=config.client_id,
            client_secret=config.client_secret,
            grant_type=grant_type.value,
            scope=config.scope if explicit else "",
            username=config.username,
            password=config.password,
        )

    return AuthPayload(
        client_id=config.client_id,
        client_secret=config.client_secret,
        grant_type=grant_type.value,
        scope=config.scope if explicit else "",
    )


def build_auth_form(config: Config) -> dict[str, str]:
    """Build the form-encoded token request body for *config*.

    Raises:
        AuthError: If a username is given without a password.
    """
    grant_type = _infer_grant_type(config)
    form = {
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "grant_type": grant_type.value,
        "scope": config.scope,
    }
    if grant_type == GrantType.PASSWORD:
        _check_password(config)
        form["username"] = config.username
        form["password"] = config.password
    return form


def _post_form(url: str, form: dict[str, str]) -> tuple[httpx.Response, bytes]:
    try:
        response = httpx.post(url, data=form)
    except httpx.InvalidURL as exc:
        raise ConfigError(f"new request failed: {exc}") from exc
    except httpx.HTTPError as exc:
        raise ConnectionError_(f"do failed: {exc}") from exc
    return response, response.content


def _post_json(url: str, payload: AuthPayload, config: Config) -> tuple[httpx.Response, bytes]:
    http_config = config.http_client_config or HttpClientConfig()
    try:
        # header values must be ASCII; httpx raises UnicodeEncodeError otherwise
        headers = httpx.Headers(http_config.headers)
        headers["Content-Type"] = "application/json"
        request = httpx.Request("POST", url, content=payload.to_json(), headers=headers)
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise ConfigError(f"new request failed: {exc}") from exc

    client = SimpleHttpClient(http_config)
    try:
        return client.do(request)
    except ConnectionError_ as exc:
        raise exc.wrap("do failed") from exc


def parse_access_token(body: bytes) -> str:
    """Extract ``access_token`` from a JSON object body.

    Non-string values are rendered as their JSON text (``123``, ``true``).

    Raises:
        AuthError: If the body is not a JSON object (``null`` counts as an
            empty one) or has no ``access_token`` key.
    """
    try:
        data: Any = json.loads(body)
    except ValueError as exc:
        raise AuthError(f"unmarshal failed: {exc}") from exc

    # a JSON null decodes to an empty object
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise AuthError(
            f"unmarshal failed: expected a JSON object, got {type(data).__name__}"
        )

    if "access_token" not in data:
        raise AuthError("cannot find access token")

    token = data["access_token"]
    if isinstance(token, str):
        return token
    return json.dumps(token)


def get_access_token(config: Config, api_endpoint: str) -> str:
    """Exchange the credentials in *config* for an access token.

    Args:
        config: Resolved session configuration.
        api_endpoint: Versioned API endpoint; ``/access_token`` is appended.

    Returns:
        The access token string.

    Raises:
        AuthError: On a non-2xx response (message is the status line, e.g.
            ``"401 Unauthorized"``), an undecodable body, a missing
            ``access_token``, or a username without a password.
        ConnectionError_: On transport failures.
        ConfigError: If the request cannot be built.
    """
    config = apply_default_scope(config)
    url = api_endpoint + ACCESS_TOKEN_PATH

    if config.use_form:
        form = build_auth_form(config)
        logger.debug("Requesting access token (form, grant_type=%s)", form["grant_type"])
        response, body = _post_form(url, form)
    else:
        payload = build_auth_payload(config)
        logger.debug("Requesting access token (json, grant_type=%s)", payload.grant_type)
        response, body = _post_json(url, payload, config)

    if not response.is_success:
        raise AuthError(
            f"{response.status_code} {response.reason_phrase}".rstrip(),
            status_code=response.status_code,
        )

    token = parse_access_token(body)
    logger.debug("Access token obtained from %s", url)
    return token
