# =============================================================================
# core/services/translation_service.py - Message Catalogs
# =============================================================================
# Loads per-locale YAML catalogs and builds a Translator:
#
#   <translations>/<locale>/messages.yml    -> "messages" domain
#   <translations>/<locale>/validators.yml  -> "validators" domain
#
# Catalogs map message ids to strings. Nested mappings flatten into dotted
# ids, so {"form": {"submit": "Send"}} defines "form.submit".
# Missing messages are looked up in the fallback locale, then the id itself
# is returned.
# =============================================================================

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from app.exceptions import ResourceNotFoundError
from core.config_store import ConfigStore

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "messages"
VALIDATORS_DOMAIN = "validators"
DEFAULT_FALLBACK_LOCALE = "en_EN"


# =============================================================================
# Catalog Loading
# =============================================================================

def _flatten(values: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in values.items():
        message_id = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{message_id}."))
        else:
            flat[message_id] = "" if value is None else str(value)
    return flat


def load_catalog(path: str | Path) -> dict[str, str]:
    """
    Load one YAML catalog file.

    Raises:
        ResourceNotFoundError: If the file is missing or is not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise ResourceNotFoundError(f'Translation resource "{path}" not found.', path=str(path))

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ResourceNotFoundError(
            f'Translation resource "{path}" could not be loaded: {e}',
            path=str(path),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ResourceNotFoundError(
            f'Translation resource "{path}" must contain a mapping of message ids.',
            path=str(path),
        )
    return _flatten(data)


# =============================================================================
# Translator
# =============================================================================

class Translator:
    """
    Catalog lookup for one locale with a fallback locale.

    Example:
        translator.add_catalog("en_EN", "messages", {"hello": "Hello %name%!"})
        translator.trans("hello", {"%name%": "Ann"})  # "Hello Ann!"
    """

    def __init__(self, locale: str, fallback_locale: str = DEFAULT_FALLBACK_LOCALE):
        self.locale = locale
        self.fallback_locale = fallback_locale
        self._catalogs: dict[tuple[str, str], dict[str, str]] = {}

    def add_catalog(self, locale: str, domain: str, messages: Mapping[str, str]) -> None:
        self._catalogs.setdefault((locale, domain), {}).update(messages)

    def has(self, message_id: str, domain: str = DEFAULT_DOMAIN, locale: str | None = None) -> bool:
        return message_id in self._catalogs.get((locale or self.locale, domain), {})

    def trans(
        self,
        message_id: str,
        parameters: Mapping[str, Any] | None = None,
        domain: str = DEFAULT_DOMAIN,
        locale: str | None = None,
    ) -> str:
        """
        Translate a message id.

        Parameter keys are replaced literally, placeholders included.
        """
        message = message_id
        for candidate in (locale or self.locale, self.fallback_locale):
            catalog = self._catalogs.get((candidate, domain), {})
            if message_id in catalog:
                message = catalog[message_id]
                break

        for placeholder, value in (parameters or {}).items():
            message = message.replace(placeholder, str(value))
        return message

    # -------------------------------------------------------------------------
    # jinja2.ext.i18n callables
    # -------------------------------------------------------------------------

    def gettext(self, message: str) -> str:
        return self.trans(message)

    def ngettext(self, singular: str, plural: str, count: int) -> str:
        """
        Pluralized lookup.

        The plural form is stored under the plural string itself.
        """
        if count == 1:
            return self.trans(singular)
        return self.trans(plural)


# =============================================================================
# Service
# =============================================================================

class TranslationService:
    """Builds translators from the catalogs under the translations directory."""

    def __init__(self, config: ConfigStore, resources_directory: str | Path | None = None):
        self.config = config
        self.resources_directory = Path(
            resources_directory or config.key("directory.translations", "translations")
        )

    def catalog_path(self, locale: str, domain: str = DEFAULT_DOMAIN) -> Path:
        return self.resources_directory / locale / f"{domain}.yml"

    def has_locale(self, locale: str) -> bool:
        """Whether a messages catalog exists for `locale`."""
        return locale.replace("_", "").isalnum() and self.catalog_path(locale).is_file()

    def get_translator(self, resource: str | Path | None = None, locale: str | None = None) -> Translator:
        """
        Build a translator for `locale` (default: config "trans.locale").

        Args:
            resource: Explicit messages catalog replacing the default one
            locale: Locale the catalog is registered under

        Raises:
            ResourceNotFoundError: If the messages catalog is missing or malformed
        """
        locale = locale or self.config.key("trans.locale", DEFAULT_FALLBACK_LOCALE)
        fallback = self.config.key("trans.fallback_locale", DEFAULT_FALLBACK_LOCALE)

        translator = Translator(locale, fallback_locale=fallback)
        messages_path = Path(resource) if resource is not None else self.catalog_path(locale)
        translator.add_catalog(locale, DEFAULT_DOMAIN, load_catalog(messages_path))

        validators_path = self.catalog_path(locale, VALIDATORS_DOMAIN)
        if validators_path.is_file():
            translator.add_catalog(locale, VALIDATORS_DOMAIN, load_catalog(validators_path))

        if fallback != locale:
            self._add_fallback_catalogs(translator, fallback)

        logger.debug(f"Translator ready for {locale} (catalog: {messages_path})")
        return translator

    def _add_fallback_catalogs(self, translator: Translator, fallback: str) -> None:
        for domain in (DEFAULT_DOMAIN, VALIDATORS_DOMAIN):
            path = self.catalog_path(fallback, domain)
            if path.is_file():
                translator.add_catalog(fallback, domain, load_catalog(path))
