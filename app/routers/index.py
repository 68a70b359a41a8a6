# =============================================================================
# app/routers/index.py - Page Controllers
# =============================================================================
# HTML actions. Each action renders "Actions/<ActionName>" where the
# template name is the CamelCase form of the handler name.
# =============================================================================

import logging

from fastapi import APIRouter
from fastapi.responses import RedirectResponse, Response

from app.dependencies import LOCALE_COOKIE, ContextDep, to_response
from lib.utils import underscore_to_camel_case

logger = logging.getLogger(__name__)

router = APIRouter()

ACTIONS_SECTION = "Actions"


@router.get("/", name="home", include_in_schema=False)
def index_action(context: ContextDep) -> Response:
    """Home page."""
    return context.render(ACTIONS_SECTION, underscore_to_camel_case(index_action.__name__))


@router.get("/locale/{locale}", name="locale", include_in_schema=False)
def locale_action(locale: str, context: ContextDep) -> Response:
    """
    Remember the visitor's locale and go back home.

    Unknown locales clear the preference instead.
    """
    if context.application.translation_service.has_locale(locale):
        context.cookies.set(LOCALE_COOKIE, locale)
    else:
        logger.info(f"Unknown locale requested: {locale}")
        context.cookies.destroy(LOCALE_COOKIE)

    buffer = context.response
    buffer.status_code = 303
    buffer.headers["Location"] = context.application.build_url("home")
    return to_response(buffer)
