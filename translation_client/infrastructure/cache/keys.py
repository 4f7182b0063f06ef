"""Cache key and group name builders. Single place for key format (DRY).

Two key families:

* Loader keys address the process-local tier and are what the host
  framework sees: ``[prefix:]{locale}.{namespace}::{group}`` or
  ``[prefix:]{locale}.{group}``.
* Shared-tier keys address manifests and bundles:
  ``[prefix:]translation:manifest:{tenant}:{locale}:{client}`` and
  ``[prefix:]translation:bundle:{tenant}:{locale}:{groups}:{client}:{format}``.

Every function is pure: same inputs, same key.
"""

from collections.abc import Sequence

from translation_client.core.constants import (
    ALL_GROUPS,
    CACHE_KEY_SEP,
    CACHE_PREFIX_BUNDLE,
    CACHE_PREFIX_INDEX,
    CACHE_PREFIX_MANIFEST,
    CACHE_PREFIX_TRANSLATION,
    GLOBAL_TENANT,
    GROUPS_KEY_SEP,
    KEY_DELIMITER,
    NAMESPACE_SEP,
    NAMESPACE_WILDCARD,
)


def _app(app_prefix: str | None) -> str:
    return f"{app_prefix}{CACHE_KEY_SEP}" if app_prefix else ""


def has_namespace(namespace: str | None) -> bool:
    """True for a real namespace; None, '' and the '*' wildcard mean none."""
    return bool(namespace) and namespace != NAMESPACE_WILDCARD


def prefix_group(group: str, app_prefix: str | None) -> str:
    """Apply the app prefix to a group ('messages' -> 'EDMS:messages')."""
    if not app_prefix:
        return group
    return f"{app_prefix}{CACHE_KEY_SEP}{group}"


def namespaced_group(group: str, namespace: str | None) -> str:
    """Group name as the service stores it, before the app prefix."""
    if has_namespace(namespace):
        return f"{namespace}{NAMESPACE_SEP}{group}"
    return group


def api_group(group: str, namespace: str | None = None, app_prefix: str | None = None) -> str:
    """Group name as it appears in requests and bundle responses.

    Examples:
        api_group("messages") -> "messages"
        api_group("messages", "Translation") -> "Translation::messages"
        api_group("messages", "Translation", "EDMS") -> "EDMS:Translation::messages"
    """
    return prefix_group(namespaced_group(group, namespace), app_prefix)


def loaded_key(
    locale: str,
    group: str,
    namespace: str | None = None,
    app_prefix: str | None = None,
) -> str:
    """Process-local tier key for one (locale, namespace, group)."""
    return f"{_app(app_prefix)}{locale}{KEY_DELIMITER}{namespaced_group(group, namespace)}"


def locale_prefix(locale: str, app_prefix: str | None = None) -> str:
    """Prefix shared by every process-local key of a locale."""
    return f"{_app(app_prefix)}{locale}{KEY_DELIMITER}"


def _tenant(tenant: str | None) -> str:
    return tenant or GLOBAL_TENANT


def manifest_key(
    tenant: str | None,
    locale: str,
    client: str,
    app_prefix: str | None = None,
) -> str:
    """Shared-tier key for the manifest of a (tenant, locale, client)."""
    return CACHE_KEY_SEP.join(
        [
            f"{_app(app_prefix)}{CACHE_PREFIX_TRANSLATION}",
            CACHE_PREFIX_MANIFEST,
            _tenant(tenant),
            locale,
            client,
        ]
    )


def bundle_key(
    tenant: str | None,
    locale: str,
    groups: Sequence[str] | None,
    client: str,
    fmt: str,
    app_prefix: str | None = None,
) -> str:
    """Shared-tier key for a bundle.

    groups are the already app-prefixed API group names; None or empty
    means all groups.
    """
    groups_part = GROUPS_KEY_SEP.join(groups) if groups else ALL_GROUPS
    return CACHE_KEY_SEP.join(
        [
            f"{_app(app_prefix)}{CACHE_PREFIX_TRANSLATION}",
            CACHE_PREFIX_BUNDLE,
            _tenant(tenant),
            locale,
            groups_part,
            client,
            fmt,
        ]
    )


def tenant_index_key(tenant: str | None, app_prefix: str | None = None) -> str:
    """Shared-tier key of the set of bundle/manifest keys written for a tenant."""
    return CACHE_KEY_SEP.join(
        [
            f"{_app(app_prefix)}{CACHE_PREFIX_TRANSLATION}",
            CACHE_PREFIX_INDEX,
            _tenant(tenant),
        ]
    )


def key_locale(key: str, app_prefix: str | None = None) -> str | None:
    """Return the locale segment of a manifest or bundle key, if any."""
    parts = key[len(_app(app_prefix)):].split(CACHE_KEY_SEP)
    # translation:<kind>:<tenant>:<locale>:...
    if len(parts) >= 4 and parts[0] == CACHE_PREFIX_TRANSLATION:
        return parts[3]
    return None
