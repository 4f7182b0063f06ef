"""Client configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support; every option reads from a TRANSLATION_-prefixed
environment variable (e.g. TRANSLATION_SERVICE_URL).
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from translation_client.shared.enums import CacheStore, ClientType


class Settings(BaseSettings):
    """Translation client settings loaded from environment and .env.

    All settings have defaults; validate_choices rejects unknown client
    types and cache stores at load time.
    """

    # Remote service
    service_url: str = "http://localhost"
    http_timeout: float = 10.0

    # Tenant: unset means auto-detect (actor, then first tenant in registry)
    tenant_uuid: str | None = None
    tenant_database_url: str | None = None
    tenant_header_name: str = "X-Tenant-ID"

    # Loading
    preload: bool = True
    auto_register_namespaces: bool = True
    client: str = ClientType.BACKEND.value
    # Prepended to every group: "EDMS" -> "EDMS:messages", "EDMS:Translation::messages"
    app_name_prefix: str | None = None

    # Cache
    manifest_ttl: int = 300  # 5 minutes
    bundle_ttl: int = 3600  # 1 hour
    fallback_on_error: bool = True
    cache_store: str = CacheStore.REDIS.value
    redis_url: str = "redis://localhost:6379/0"

    # Locales
    available_locales: str = "ar,en"
    default_locale: str = "en"
    locale_header_name: str = "X-Locale"

    # Legacy file import
    lang_path: str = "lang"
    modules_path: str = "src/App"

    # Logging
    logging_enabled: bool = False
    logging_channel: str = "translation_client"
    debug: bool = False

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_prefix="TRANSLATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("service_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("tenant_uuid", "app_name_prefix", mode="before")
    @classmethod
    def empty_to_none(cls, v: str | None) -> str | None:
        """Treat an empty env value the same as an unset one."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_choices(self) -> "Settings":
        """Validate enumerated options (client type, cache store, TTLs)."""
        if self.client not in ClientType.values():
            raise ValueError(
                f"client must be one of {ClientType.values()}, got: {self.client!r}"
            )
        if self.cache_store not in CacheStore.values():
            raise ValueError(
                f"cache_store must be one of {CacheStore.values()}, got: {self.cache_store!r}"
            )
        if self.manifest_ttl < 1 or self.bundle_ttl < 1:
            raise ValueError("manifest_ttl and bundle_ttl must be positive")
        return self

    @property
    def locales(self) -> list[str]:
        """Available locales as a list (comma separated in the environment)."""
        return [loc.strip() for loc in self.available_locales.split(",") if loc.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars
    so the next get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
