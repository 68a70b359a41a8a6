# =============================================================================
# core/application.py - Application Container
# =============================================================================
# Holds what every request shares (configuration, environment, version,
# routing, translations) and builds the request-scoped services.
#
# There is no global instance: app/main.py creates one at startup and the
# request dependencies receive it from app.state. Templates see it as the
# "app" global.
# =============================================================================

import logging
from collections.abc import Iterable, MutableMapping
from pathlib import Path
from typing import Any, Callable

from core.config_store import ConfigStore
from core.models.environment import Environment
from core.models.response import ResponseBuffer
from core.services.cookie_jar import CookieJar
from core.services.exception_logger import ExceptionLogger
from core.services.exception_presenter import ExceptionPresenter
from core.services.routing_service import RoutingProvider
from core.services.template_path_resolver import TemplateSearchPathResolver
from core.services.translation_service import TranslationService, Translator
from core.services.view_service import View
from lib.error_reporting import setup_error_reporting

logger = logging.getLogger(__name__)


class Application:
    """
    Shared services and factories for request-scoped ones.

    Example:
        application = Application.from_settings(settings)
        application.bootstrap([("home", "/")])
        view = application.view(ResponseBuffer())
    """

    def __init__(
        self,
        config: ConfigStore,
        environment: Environment,
        base_directory: str | Path,
        version: str = "undefined",
    ):
        self.config = config
        self.environment = environment
        self.base_directory = Path(base_directory)
        self.version = version

        self.routing = RoutingProvider(config)
        self.translation_service = TranslationService(config)
        self.resolver = TemplateSearchPathResolver(
            config.key("directory.templates", self.base_directory / "app" / "templates"),
            Path(config.key("directory.fixtures", self.base_directory / "tests" / "fixtures")) / "templates",
        )
        self._restore_error_reporting: Callable[[], None] | None = None

    @classmethod
    def from_settings(cls, settings: Any) -> "Application":
        from app.config import BASE_DIRECTORY

        return cls(
            config=ConfigStore.from_settings(settings),
            environment=settings.environment,
            base_directory=BASE_DIRECTORY,
            version=settings.VERSION,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def bootstrap(self, routes: Iterable[tuple[str, str]]) -> ResponseBuffer | None:
        """
        Configure error reporting and register the routes.

        A failure while registering routes is rendered with a safe-mode view
        and the resulting page is returned; None means success.
        """
        self._restore_error_reporting = setup_error_reporting(self.environment)

        try:
            self.routing.register(routes)
        except Exception as exception:
            logger.exception(f"Application bootstrap failed: {exception}")
            response = ResponseBuffer()
            view = self.view(response, safe_mode=True)
            self.exception_presenter(view, response).handle(exception)
            return response

        logger.info(f"Application ready ({self.environment.value}, version {self.version})")
        return None

    def shutdown(self) -> None:
        if self._restore_error_reporting is not None:
            self._restore_error_reporting()
            self._restore_error_reporting = None

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_env(self) -> str:
        return self.environment.value

    def get_version(self) -> str:
        return self.version or "undefined"

    def create_path(self, path: str | None = None) -> str:
        """
        Absolute path under the project root from a colon-separated path.

        Example:
            application.create_path("app:templates:Actions")
            # "/srv/tricolore/app/templates/Actions"
        """
        if path is None:
            return str(self.base_directory)
        return str(self.base_directory.joinpath(*path.split(":")))

    def build_url(self, route_name: str | None = None, arguments: dict | None = None) -> str:
        return self.routing.build_url(route_name, arguments)

    # =========================================================================
    # Service Factories
    # =========================================================================

    def view(
        self,
        response: ResponseBuffer,
        session: MutableMapping[str, Any] | None = None,
        member: Any = None,
        locale: str | None = None,
        safe_mode: bool = False,
    ) -> View:
        """Registered View writing to `response`."""
        return View(
            config=self.config,
            environment=self.environment,
            resolver=self.resolver,
            response=response,
            routing=self.routing,
            translation_service=self.translation_service,
            application=self,
            session=session,
            member=member,
            locale=locale,
        ).register(safe_mode=safe_mode)

    def translator(self, resource: str | Path | None = None, locale: str | None = None) -> Translator:
        return self.translation_service.get_translator(resource, locale)

    def cookie_jar(self, request_cookies: MutableMapping[str, str], response: ResponseBuffer) -> CookieJar:
        return CookieJar(self.config, request_cookies, response)

    def exception_logger(self) -> ExceptionLogger:
        return ExceptionLogger(self.config, self.environment)

    def exception_presenter(self, view: View, response: ResponseBuffer, path_info: str = "/") -> ExceptionPresenter:
        return ExceptionPresenter(
            view=view,
            exception_logger=self.exception_logger(),
            response=response,
            environment=self.environment,
            path_info=path_info,
        )
