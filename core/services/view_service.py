# =============================================================================
# core/services/view_service.py - Template Rendering
# =============================================================================
# Owns the Jinja2 environment for one request.
#
# Usage:
#   view = View(config, environment, resolver, response, routing, ...).register()
#   view.display("Actions", "IndexAction", {"title": "Home"})
#   html = view.display("Mail", "Welcome", {...}, return_mode=True)
#
# Environment-dependent options:
#   production:  bytecode cache, no auto reload, undefined values and attribute chains -> ""
#   otherwise:   no cache, auto reload, StrictUndefined, debug extension
# =============================================================================

import logging
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any

from jinja2 import (
    ChainableUndefined,
    Environment as JinjaEnvironment,
    FileSystemBytecodeCache,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    UndefinedError,
)

from app.exceptions import TemplateNotFoundError, UndefinedVariableError
from core.config_store import ConfigStore
from core.models.environment import Environment
from core.models.response import ResponseBuffer
from core.services.form_service import CsrfProvider, FormIntegration
from core.services.routing_service import RoutingProvider
from core.services.template_path_resolver import TemplateSearchPathResolver
from core.services.translation_service import TranslationService
from lib.utils import ends_with

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html.j2"
FIXTURE_CATALOG = "translation_en_EN.yml"
FIXTURE_LOCALE = "en_EN"


class View:
    """
    Jinja2 integration.

    Templates see three globals (app, session, member) and the helper
    functions config(), assets() and url(). Unless registered in safe mode
    they also get the form helpers and the i18n extension.
    """

    def __init__(
        self,
        config: ConfigStore,
        environment: Environment,
        resolver: TemplateSearchPathResolver,
        response: ResponseBuffer,
        routing: RoutingProvider,
        translation_service: TranslationService | None = None,
        application: Any = None,
        session: MutableMapping[str, Any] | None = None,
        member: Any = None,
        locale: str | None = None,
    ):
        self.config = config
        self.environment = environment
        self.resolver = resolver
        self.response = response
        self.routing = routing
        self.translation_service = translation_service
        self.application = application
        self.session = session if session is not None else {}
        self.member = member
        self.locale = locale

        self.search_path: list[str] = []
        self._jinja: JinjaEnvironment | None = None

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, safe_mode: bool = False) -> "View":
        """
        Build the Jinja2 environment.

        Args:
            safe_mode: Skip form and translation integration (used while
                       reporting bootstrap failures)
        """
        self.search_path = self.resolver.resolve(self.environment)
        self._jinja = JinjaEnvironment(
            loader=FileSystemLoader(self.search_path),
            autoescape=True,
            **self._environment_options(),
        )

        self._register_globals()
        self._register_functions()

        if not safe_mode:
            self._form_integration()
            self._trans_integration()

        return self

    @property
    def jinja_environment(self) -> JinjaEnvironment | None:
        return self._jinja

    def _environment_options(self) -> dict[str, Any]:
        if self.environment is Environment.PRODUCTION:
            cache_directory = Path(self.config.key("directory.storage", "storage")) / "jinja"
            cache_directory.mkdir(parents=True, exist_ok=True)
            return {
                "bytecode_cache": FileSystemBytecodeCache(str(cache_directory)),
                "auto_reload": False,
                "undefined": ChainableUndefined,
            }

        return {
            "auto_reload": True,
            "undefined": StrictUndefined,
            "extensions": ["jinja2.ext.debug"],
        }

    def _register_globals(self) -> None:
        self._jinja.globals.update(
            app=self.application,
            session=self.session,
            member=self.member,
        )

    def _register_functions(self) -> None:
        self._jinja.globals.update(
            config=self.config.key,
            assets=self.asset_url,
            url=self.routing.build_url,
        )

    def _form_integration(self) -> None:
        FormIntegration(CsrfProvider(self.session)).register(self._jinja)

    def _trans_integration(self) -> None:
        if self.translation_service is None:
            logger.warning("No translation service configured; skipping i18n integration")
            return

        if self.environment is Environment.TEST:
            fixtures = Path(self.config.key("directory.fixtures", "tests/fixtures"))
            translator = self.translation_service.get_translator(fixtures / FIXTURE_CATALOG, FIXTURE_LOCALE)
        else:
            translator = self.translation_service.get_translator(locale=self.locale)

        self._jinja.add_extension("jinja2.ext.i18n")
        self._jinja.install_gettext_callables(translator.gettext, translator.ngettext, newstyle=False)
        self._jinja.filters["trans"] = translator.trans
        self._jinja.globals["translator"] = translator

    def asset_url(self, section: str, file: str) -> str:
        """Absolute URL of a public asset."""
        return "/".join([
            self.config.key("base.full_url", ""),
            self.config.key("directory.assets", "assets"),
            section,
            file,
        ])

    # =========================================================================
    # Rendering
    # =========================================================================

    def display(
        self,
        section: str | None,
        name: str,
        variables: Mapping[str, Any] | None = None,
        return_mode: bool = False,
    ) -> str | None:
        """
        Render a template.

        Args:
            section: Template subdirectory, or None
            name: Template name; the ".html.j2" suffix is optional
            variables: Template variables
            return_mode: Return the output instead of writing it

        Returns:
            The rendered text in return mode, otherwise None

        Raises:
            TemplateNotFoundError: If no search path directory holds the template
            UndefinedVariableError: If a variable is undefined (strict mode)
        """
        if self._jinja is None:
            raise RuntimeError("View.register() must be called before display()")

        if not ends_with(TEMPLATE_SUFFIX, name, len(TEMPLATE_SUFFIX)):
            name += TEMPLATE_SUFFIX

        template_path = f"{section}/{name}" if section else name
        variables = variables or {}

        if self.config.key("gzip.enabled", False) and self.response.compression_available():
            with self.response.gzip_capture():
                output = self._output(template_path, variables, return_mode)
                self.response.headers["Connection"] = "close"
            return output

        return self._output(template_path, variables, return_mode)

    def _output(self, template_path: str, variables: Mapping[str, Any], return_mode: bool) -> str | None:
        rendered = self.render(template_path, variables)
        if return_mode:
            return rendered

        self.response.write(rendered)
        return None

    def render(self, template_path: str, variables: Mapping[str, Any]) -> str:
        """Render a resolved template path to text."""
        try:
            template = self._jinja.get_template(template_path)
            return template.render(variables)
        except TemplateNotFound as e:
            raise TemplateNotFoundError(e.name or template_path, self.search_path) from e
        except UndefinedError as e:
            raise UndefinedVariableError(template_path, str(e)) from e
