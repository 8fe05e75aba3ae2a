"""Tests for mobingi.config -- environment defaults and override resolution."""

from __future__ import annotations

import httpx
import pytest

from mobingi.config import (
    BASE_API_URL,
    BASE_REGISTRY_URL,
    DEFAULT_API_VERSION,
    SESHA3_URL,
    default_config,
    resolve_config,
)
from mobingi.models import Config, HttpClientConfig


class TestDefaultConfig:
    def test_production_defaults(self) -> None:
        config = default_config()
        assert config.base_api_url == "https://api.mobingi.com"
        assert config.base_registry_url == "https://registry.mobingi.com"
        assert config.sesha3_url == "https://sesha3.mobingi.com"
        assert config.api_version == DEFAULT_API_VERSION == 3

    def test_credentials_empty_without_env(self) -> None:
        config = default_config()
        assert config.client_id == ""
        assert config.client_secret == ""
        assert config.username == ""
        assert config.password == ""

    def test_credentials_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOBINGI_CLIENT_ID", "env-id")
        monkeypatch.setenv("MOBINGI_CLIENT_SECRET", "env-secret")
        monkeypatch.setenv("MOBINGI_USERNAME", "env-user")
        monkeypatch.setenv("MOBINGI_PASSWORD", "env-pass")

        config = default_config()
        assert config.client_id == "env-id"
        assert config.client_secret == "env-secret"
        assert config.username == "env-user"
        assert config.password == "env-pass"

    def test_defaults_leave_other_fields_empty(self) -> None:
        config = default_config()
        assert config.grant_type == ""
        assert config.scope == ""
        assert config.access_token == ""
        assert config.use_form is False
        assert config.http_client_config is None


class TestResolveConfig:
    def test_none_returns_defaults(self) -> None:
        assert resolve_config(None) == default_config()

    def test_empty_override_changes_nothing(self) -> None:
        assert resolve_config(Config()) == default_config()

    def test_override_replaces_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MOBINGI_CLIENT_ID", "env-id")
        monkeypatch.setenv("MOBINGI_CLIENT_SECRET", "env-secret")

        config = resolve_config(Config(client_id="explicit-id"))
        assert config.client_id == "explicit-id"
        assert config.client_secret == "env-secret"

    def test_all_string_fields_applied(self) -> None:
        override = Config(
            client_id="id",
            client_secret="secret",
            grant_type="password",
            scope="custom",
            username="user",
            password="pass",
            access_token="tok",
            base_api_url="http://localhost:8080",
            base_registry_url="http://localhost:5000",
            sesha3_url="http://localhost:9000",
        )
        config = resolve_config(override)
        for name in (
            "client_id",
            "client_secret",
            "grant_type",
            "scope",
            "username",
            "password",
            "access_token",
            "base_api_url",
            "base_registry_url",
            "sesha3_url",
        ):
            assert getattr(config, name) == getattr(override, name)

    def test_api_version_zero_is_unset(self) -> None:
        assert resolve_config(Config(api_version=0)).api_version == 3

    def test_api_version_override(self) -> None:
        assert resolve_config(Config(api_version=2)).api_version == 2

    def test_negative_api_version_applied(self) -> None:
        assert resolve_config(Config(api_version=-1)).api_version == -1

    def test_use_form_applied(self) -> None:
        assert resolve_config(Config(use_form=True)).use_form is True

    def test_http_client_config_applied(self) -> None:
        client_config = HttpClientConfig(timeout=5)
        config = resolve_config(Config(http_client_config=client_config))
        assert config.http_client_config is client_config

    def test_unset_urls_keep_production(self) -> None:
        config = resolve_config(Config(client_id="id"))
        assert config.base_api_url == BASE_API_URL
        assert config.base_registry_url == BASE_REGISTRY_URL
        assert config.sesha3_url == SESHA3_URL

    def test_override_not_mutated(self) -> None:
        override = Config(client_id="id")
        resolve_config(override)
        assert override.base_api_url == ""
        assert override.api_version == 0

    def test_transport_survives_resolution(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200))
        config = resolve_config(
            Config(http_client_config=HttpClientConfig(transport=transport))
        )
        assert config.http_client_config is not None
        assert config.http_client_config.transport is transport
