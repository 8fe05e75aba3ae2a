"""Pydantic models shared across the mobingi package.

* :class:`HttpClientConfig` -- options for the HTTP client used by the JSON
  credential exchange (:class:`~mobingi.client.SimpleHttpClient`).
* :class:`Config` -- everything a :class:`~mobingi.session.Session` needs:
  credentials, grant type, endpoints, and request encoding.
* :class:`AuthPayload` -- the JSON body posted to the token endpoint.

``Config`` doubles as the override object accepted by
:func:`mobingi.session.new`: fields left at their empty default (``""``,
``0``, ``False``, ``None``) are not applied over the environment-derived
defaults. See :func:`mobingi.config.resolve_config`.
"""

from __future__ import annotations

import enum
import json
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field


class GrantType(str, enum.Enum):
    """OAuth-style grant types understood by the token endpoint."""

    CLIENT_CREDENTIALS = "client_credentials"
    PASSWORD = "password"


class HttpClientConfig(BaseModel):
    """Options for :class:`~mobingi.client.SimpleHttpClient`.

    Leave :attr:`Config.http_client_config` unset to use these defaults.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = True
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers added to every request"
    )
    verbose: bool = Field(
        default=False, description="Log requests and responses at INFO instead of DEBUG"
    )
    transport: Optional[httpx.BaseTransport] = Field(
        default=None, description="Custom httpx transport (e.g. httpx.MockTransport)"
    )


class Config(BaseModel):
    """Session configuration.

    Example::

        Config(
            client_id="abc",
            client_secret="xyz",
            grant_type="client_credentials",
            api_version=3,
        )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    client_id: str = Field(
        default="", description="Client id. Defaults to $MOBINGI_CLIENT_ID"
    )
    client_secret: str = Field(
        default="", description="Client secret. Defaults to $MOBINGI_CLIENT_SECRET"
    )
    grant_type: str = Field(
        default="", description="'client_credentials' or 'password'; inferred when empty"
    )
    scope: str = Field(default="", description="Requested token scope ('openid' when empty)")
    username: str = Field(
        default="", description="Subuser name. Defaults to $MOBINGI_USERNAME"
    )
    password: str = Field(
        default="", description="Subuser password. Required when username is set"
    )
    access_token: str = Field(
        default="", description="Pre-supplied token; skips the credential exchange"
    )
    api_version: int = Field(
        default=0, description="API version; -1 skips the version segment"
    )
    base_api_url: str = ""
    base_registry_url: str = ""
    sesha3_url: str = ""
    use_form: bool = Field(
        default=False, description="Send form data instead of a JSON body"
    )
    http_client_config: Optional[HttpClientConfig] = None


class AuthPayload(BaseModel):
    """JSON body for the token endpoint.

    Empty string fields are left out of the serialised body, as are
    ``username`` and ``password`` when they are ``None``.
    """

    client_id: str = ""
    client_secret: str = ""
    grant_type: str = ""
    scope: str = ""
    username: Optional[str] = None
    password: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_defaults=True)

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")
