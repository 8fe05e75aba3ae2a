"""Configuration defaults and override resolution.

Session configuration comes from two places, lowest precedence first:

1. **Defaults** -- credentials from the ``MOBINGI_*`` environment variables,
   the production base URLs below, and API version
   :data:`DEFAULT_API_VERSION`. See :func:`default_config`.
2. **Override** -- a caller-supplied :class:`~mobingi.models.Config`.
   Every field that is non-empty (non-zero, ``True``, not ``None``) replaces
   the default. See :func:`resolve_config`.

Reading the environment is the only side effect; nothing is cached, so two
sessions resolved at different times may see different credentials.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from mobingi.models import Config

logger = logging.getLogger(__name__)

BASE_API_URL = "https://api.mobingi.com"
"""Production API base URL."""

BASE_REGISTRY_URL = "https://registry.mobingi.com"
"""Production Docker registry base URL."""

SESHA3_URL = "https://sesha3.mobingi.com"
"""Production sesha3 base URL."""

DEFAULT_API_VERSION = 3
"""API version used when the override does not set one."""

DEFAULT_SCOPE = "openid"
"""Scope requested when the configuration leaves it empty."""

ENV_CLIENT_ID = "MOBINGI_CLIENT_ID"
ENV_CLIENT_SECRET = "MOBINGI_CLIENT_SECRET"
ENV_USERNAME = "MOBINGI_USERNAME"
ENV_PASSWORD = "MOBINGI_PASSWORD"


def default_config() -> Config:
    """Build the default configuration from the environment and constants.

    Returns:
        A :class:`~mobingi.models.Config` with credentials read from
        ``MOBINGI_CLIENT_ID``, ``MOBINGI_CLIENT_SECRET``,
        ``MOBINGI_USERNAME`` and ``MOBINGI_PASSWORD`` (empty when unset),
        the production URLs, and API version 3.
    """
    return Config(
        client_id=os.environ.get(ENV_CLIENT_ID, ""),
        client_secret=os.environ.get(ENV_CLIENT_SECRET, ""),
        username=os.environ.get(ENV_USERNAME, ""),
        password=os.environ.get(ENV_PASSWORD, ""),
        api_version=DEFAULT_API_VERSION,
        base_api_url=BASE_API_URL,
        base_registry_url=BASE_REGISTRY_URL,
        sesha3_url=SESHA3_URL,
    )


def _is_set(value: Any) -> bool:
    """Return True if *value* should replace a default."""
    if value is None:
        return False
    if isinstance(value, (bool, str, int)):
        return bool(value)
    return True


def resolve_config(override: Optional[Config] = None) -> Config:
    """Merge *override* over :func:`default_config`.

    An ``api_version`` of ``0`` counts as unset, so version 0 cannot be
    selected through an override; ``-1`` disables the version segment.

    Args:
        override: Optional caller configuration. ``None`` yields the
            defaults unchanged.

    Returns:
        A new, fully populated :class:`~mobingi.models.Config`.
    """
    config = default_config()
    if override is None:
        return config

    updates: dict[str, Any] = {}
    for name in Config.model_fields:
        value = getattr(override, name)
        if _is_set(value):
            updates[name] = value

    if updates:
        logger.debug("Config override applied to: %s", ", ".join(sorted(updates)))
    return config.model_copy(update=updates)
