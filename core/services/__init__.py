# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .cookie_jar import CookieJar
from .exception_logger import ExceptionLogger
from .exception_presenter import ExceptionPresenter
from .form_service import CsrfProvider, FormIntegration
from .routing_service import RoutingProvider
from .template_path_resolver import TemplateSearchPathResolver
from .translation_service import TranslationService, Translator
from .view_service import View

__all__ = [
    "CookieJar",
    "ExceptionLogger",
    "ExceptionPresenter",
    "CsrfProvider",
    "FormIntegration",
    "RoutingProvider",
    "TemplateSearchPathResolver",
    "TranslationService",
    "Translator",
    "View",
]
