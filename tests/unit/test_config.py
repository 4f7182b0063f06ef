"""Tests for Settings (environment, validation, derived values)."""

import pytest
from pydantic import ValidationError

from translation_client.core.config import Settings, get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Defaults match the documented configuration surface."""
    monkeypatch.delenv("TRANSLATION_CACHE_STORE")
    settings = Settings(_env_file=None)
    assert settings.manifest_ttl == 300
    assert settings.bundle_ttl == 3600
    assert settings.fallback_on_error is True
    assert settings.preload is True
    assert settings.client == "backend"
    assert settings.cache_store == "redis"
    assert settings.logging_enabled is False
    assert settings.tenant_uuid is None


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRANSLATION_TENANT_UUID", "tenant-9")
    monkeypatch.setenv("TRANSLATION_MANIFEST_TTL", "60")
    monkeypatch.setenv("TRANSLATION_APP_NAME_PREFIX", "EDMS")
    settings = get_settings()
    assert settings.tenant_uuid == "tenant-9"
    assert settings.manifest_ttl == 60
    assert settings.app_name_prefix == "EDMS"


def test_service_url_trailing_slash_stripped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRANSLATION_SERVICE_URL", "https://i18n.example.com/")
    assert get_settings().service_url == "https://i18n.example.com"


def test_empty_tenant_is_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    """An empty env value means auto-detect, not the empty tenant."""
    monkeypatch.setenv("TRANSLATION_TENANT_UUID", "")
    assert get_settings().tenant_uuid is None


def test_locales_split_on_commas() -> None:
    settings = Settings(_env_file=None, available_locales="ar, en ,fr,")
    assert settings.locales == ["ar", "en", "fr"]


@pytest.mark.parametrize(
    "overrides",
    [{"client": "desktop"}, {"cache_store": "memcached"}, {"manifest_ttl": 0}],
)
def test_invalid_choices_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
