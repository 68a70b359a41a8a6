# =============================================================================
# app/dependencies.py - Request-Scoped Dependencies
# =============================================================================
# FastAPI dependency injection for the view layer.
# Each request gets its own ResponseBuffer, View and CookieJar, built by the
# shared Application stored on app.state.
# =============================================================================

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.responses import Response

from core.application import Application
from core.models.response import ResponseBuffer
from core.services.cookie_jar import CookieJar
from core.services.view_service import View

LOCALE_COOKIE = "locale"


# =============================================================================
# Response Conversion
# =============================================================================

def to_response(buffer: ResponseBuffer) -> Response:
    """Convert a ResponseBuffer into a Starlette Response."""
    response = Response(
        content=buffer.body,
        status_code=buffer.status_code,
        headers=buffer.headers,
        media_type=buffer.media_type,
    )
    for cookie in buffer.cookies:
        if cookie.expires:
            response.delete_cookie(
                cookie.name, path=cookie.path, domain=cookie.domain, secure=cookie.secure
            )
        else:
            response.set_cookie(
                cookie.name,
                cookie.value,
                max_age=cookie.max_age,
                path=cookie.path,
                domain=cookie.domain,
                secure=cookie.secure,
                httponly=True,
            )
    return response


# =============================================================================
# Request Context
# =============================================================================

def get_application(request: Request) -> Application:
    return request.app.state.application


def get_session(request: Request) -> MutableMapping[str, Any]:
    """The signed-cookie session, or a throwaway dict without SessionMiddleware."""
    if "session" in request.scope:
        return request.session
    return {}


def new_response_buffer(request: Request) -> ResponseBuffer:
    return ResponseBuffer(accept_encoding=request.headers.get("accept-encoding", ""))


@dataclass
class RequestContext:
    """Services for one request."""

    application: Application
    response: ResponseBuffer
    view: View
    cookies: CookieJar

    def render(self, section: str | None, name: str, variables: dict | None = None) -> Response:
        """Display a template and return the finished response."""
        self.view.display(section, name, variables)
        return to_response(self.response)


def get_request_context(request: Request) -> RequestContext:
    application = get_application(request)
    response = new_response_buffer(request)
    cookies = application.cookie_jar(dict(request.cookies), response)

    locale = cookies.get(LOCALE_COOKIE)
    if locale and not application.translation_service.has_locale(locale):
        locale = None

    view = application.view(
        response,
        session=get_session(request),
        member=getattr(request.state, "member", None),
        locale=locale,
    )
    return RequestContext(application=application, response=response, view=view, cookies=cookies)


# Type alias for dependency injection
ContextDep = Annotated[RequestContext, Depends(get_request_context)]
