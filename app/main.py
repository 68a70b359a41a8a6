# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# Configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from app.config import settings
from app.dependencies import get_application, get_session, new_response_buffer, to_response
from app.exceptions import TricoloreException, tricolore_exception_handler
from app.routers import health, index
from core.application import Application

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# (router, prefix) pairs passed to include_router()
INCLUDED_ROUTERS: list[tuple[APIRouter, str]] = []


def named_routes(app: FastAPI) -> list[tuple[str, str]]:
    """
    (name, path) of every APIRoute, including those of included routers.

    Included routers are read from INCLUDED_ROUTERS; only older FastAPI
    releases flatten their routes into app.routes.
    """
    routes = {route.name: route.path for route in app.routes if isinstance(route, APIRoute)}
    for router, prefix in INCLUDED_ROUTERS:
        for route in router.routes:
            if isinstance(route, APIRoute):
                routes.setdefault(route.name, f"{prefix}{route.path}")
    return list(routes.items())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: configure error reporting, register named routes
    - Shutdown: restore error reporting
    """
    application = app.state.application
    logger.info(f"Starting Tricolore in {application.get_env()} mode")

    app.state.bootstrap_failure = application.bootstrap(named_routes(app))

    yield

    logger.info("Shutting down Tricolore")
    application.shutdown()


# Create FastAPI application
app = FastAPI(
    title="Tricolore",
    description="MVC-style web application scaffold",
    version=settings.VERSION,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    lifespan=lifespan,
)
app.state.application = Application.from_settings(settings)
app.state.bootstrap_failure = None


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    https_only=settings.COOKIE_SECURE,
)


@app.middleware("http")
async def serve_bootstrap_failure(request: Request, call_next):
    """Answer every request with the error page if startup failed."""
    failure = request.app.state.bootstrap_failure
    if failure is not None:
        return to_response(failure)
    return await call_next(request)


# =============================================================================
# Exception Handlers
# =============================================================================

def present_exception(request: Request, exc: Exception):
    """
    Render an exception page through the exception presenter.

    If the presenter itself fails, a plain 500 is returned.
    """
    try:
        application = get_application(request)
        buffer = new_response_buffer(request)
        view = application.view(buffer, session=get_session(request))
        presenter = application.exception_presenter(view, buffer, path_info=request.url.path)
        presenter.handle(exc)
        return to_response(buffer)
    except Exception as e:
        logger.exception(f"Exception presenter failed while handling {exc!r}: {e}")
        return PlainTextResponse("Internal Server Error", status_code=500)


@app.exception_handler(TricoloreException)
async def handle_tricolore_exception(request: Request, exc: TricoloreException):
    """Structured JSON for API routes, error page otherwise."""
    if request.url.path.startswith(API_PREFIX):
        return await tricolore_exception_handler(request, exc)
    logger.error(f"{exc.code}: {exc.message}")
    return present_exception(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    if request.url.path.startswith(API_PREFIX):
        return JSONResponse(
            status_code=500,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )
    return present_exception(request, exc)


# =============================================================================
# Routers
# =============================================================================

def include_router(router: APIRouter, prefix: str = "", **kwargs) -> None:
    app.include_router(router, prefix=prefix, **kwargs)
    INCLUDED_ROUTERS.append((router, prefix))


# Health check endpoints
include_router(
    health.router,
    prefix=API_PREFIX,
    tags=["Health"]
)

# HTML actions
include_router(index.router)

# Public assets
app.mount(
    f"/{settings.ASSETS_DIRECTORY.strip('/')}",
    StaticFiles(directory=settings.resolve_directory(settings.ASSETS_DIRECTORY), check_dir=False),
    name="assets",
)
