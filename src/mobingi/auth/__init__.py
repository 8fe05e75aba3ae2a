"""Credential exchange for mobingi sessions.

The main entry point is :func:`get_access_token`, which posts the
credentials of a :class:`~mobingi.models.Config` to the token endpoint and
returns the access token. :func:`build_auth_payload` and
:func:`build_auth_form` expose the request bodies on their own.

Typical usage::

    from mobingi.auth import get_access_token

    token = get_access_token(config, "https://api.mobingi.com/v3")
"""

from mobingi.auth.token import (
    apply_default_scope,
    build_auth_form,
    build_auth_payload,
    get_access_token,
    parse_access_token,
)

__all__ = [
    "apply_default_scope",
    "build_auth_form",
    "build_auth_payload",
    "get_access_token",
    "parse_access_token",
]
