"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure and the remote service's
wire conventions. Used by the key builder, gateway, loader and importer.
"""

# Shared-tier cache key prefixes
CACHE_PREFIX_TRANSLATION = "translation"
CACHE_PREFIX_MANIFEST = "manifest"
CACHE_PREFIX_BUNDLE = "bundle"
CACHE_PREFIX_INDEX = "index"
CACHE_KEY_FIRST_TENANT = "translation_client:first_tenant"

# Delimiter for composite shared-tier keys and the app prefix
CACHE_KEY_SEP = ":"

# Tenant placeholder when no tenant is resolved (global translations)
GLOBAL_TENANT = "global"

# Group/namespace conventions
NAMESPACE_SEP = "::"
NAMESPACE_WILDCARD = "*"
KEY_DELIMITER = "."
GROUPS_KEY_SEP = "-"
GROUPS_QUERY_SEP = ","
ALL_GROUPS = "all"

# Remote service
API_PREFIX = "/api/v1"
MANIFEST_PATH = "/translation/manifest"
TRANSLATION_PATH = "/translation"
DEFAULT_MANIFEST_VERSION = 1
DEFAULT_MANIFEST_ETAG = 'W/"default-1"'

# Tenant registry lookup TTL (seconds)
FIRST_TENANT_TTL = 3600

# Importer
LANG_DIR_MARKER = "Lang"
DEFAULT_LANG_PATTERN = "*/Lang"
FALLBACK_LANG_PATTERNS = ("*/Lang", "*/*/Lang", "*/*/*/Lang")
SKIPPED_LOCALE_DIRS = frozenset({"vendor"})
SOURCE_FILE_SUFFIXES = (".json", ".yaml", ".yml")
