# =============================================================================
# core/config_store.py - Dotted-Key Configuration Lookup
# =============================================================================
# Read-only view over the application settings, addressed by dotted keys:
#
#   config.key("gzip.enabled")      -> True
#   config.key("cookie")            -> {"path": "/", "domain": None, ...}
#   config.key("missing.key", 42)   -> 42
#
# Templates reach it through the config() helper, services through
# constructor injection.
# =============================================================================

from collections.abc import Mapping
from typing import Any


class ConfigStore:
    """Nested mapping with dotted-path lookup."""

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values: dict[str, Any] = {}
        for name, value in (values or {}).items():
            self._assign(name, value)

    def _assign(self, dotted: str, value: Any) -> None:
        node = self._values
        *parents, leaf = dotted.split(".")
        for part in parents:
            node = node.setdefault(part, {})
        if isinstance(value, Mapping):
            for name, nested in value.items():
                self._assign(f"{dotted}.{name}", nested)
        else:
            node[leaf] = value

    def key(self, name: str, default: Any = None) -> Any:
        """
        Look up a dotted key.

        Returns `default` when any segment is missing.
        """
        node: Any = self._values
        for part in name.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def __contains__(self, name: str) -> bool:
        sentinel = object()
        return self.key(name, sentinel) is not sentinel

    @classmethod
    def from_settings(cls, settings: Any) -> "ConfigStore":
        """
        Build the store from an app.config.Settings instance.

        Directories are resolved against the project root.
        """
        return cls({
            "app.environment": settings.environment.value,
            "app.version": settings.VERSION,
            "base.full_url": settings.BASE_FULL_URL.rstrip("/"),
            "directory.assets": settings.ASSETS_DIRECTORY.strip("/"),
            "directory.storage": str(settings.resolve_directory(settings.STORAGE_DIRECTORY)),
            "directory.templates": str(settings.resolve_directory(settings.TEMPLATES_DIRECTORY)),
            "directory.fixtures": str(settings.resolve_directory(settings.FIXTURES_DIRECTORY)),
            "directory.translations": str(settings.resolve_directory(settings.TRANSLATIONS_DIRECTORY)),
            "gzip.enabled": settings.GZIP_ENABLED,
            "cookie.path": settings.COOKIE_PATH,
            "cookie.domain": settings.COOKIE_DOMAIN,
            "cookie.secure": settings.COOKIE_SECURE,
            "trans.locale": settings.TRANS_LOCALE,
            "trans.fallback_locale": settings.TRANS_FALLBACK_LOCALE,
            "router.use_httpd_rewrite": settings.ROUTER_USE_HTTPD_REWRITE,
        })
