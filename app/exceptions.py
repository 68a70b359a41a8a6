# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception types for the application.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class TricoloreException(Exception):
    """
    Base exception for Tricolore.

    All custom exceptions inherit from this class.
    Provides structured error details with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "TRICOLORE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Resource Exceptions
# =============================================================================

class ResourceNotFoundError(TricoloreException):
    """Raised when a required resource (template root, catalog) is missing."""

    def __init__(self, message: str, path: str | None = None, code: str = "RESOURCE_NOT_FOUND"):
        super().__init__(
            message=message,
            code=code,
            status_code=404,
            suggestion="Check that the file or directory exists and is readable",
            details={"path": path} if path else None,
        )
        self.path = path


class TemplateNotFoundError(ResourceNotFoundError):
    """Raised when no directory of the search path holds the template."""

    def __init__(self, template: str, search_path: list[str] | None = None):
        super().__init__(
            message=f"Template not found: {template}",
            path=template,
            code="TEMPLATE_NOT_FOUND",
        )
        self.template = template
        self.search_path = search_path or []
        if self.search_path:
            self.details["search_path"] = self.search_path


# =============================================================================
# Rendering Exceptions
# =============================================================================

class UndefinedVariableError(TricoloreException):
    """Raised outside production when a template uses an undefined variable."""

    def __init__(self, template: str, error: str):
        super().__init__(
            message=f"Undefined variable in {template}: {error}",
            code="UNDEFINED_VARIABLE",
            status_code=500,
            suggestion="Pass the variable to display() or guard it with 'is defined'",
            details={"template": template, "error": error},
        )
        self.template = template


# =============================================================================
# Routing Exceptions
# =============================================================================

class RouteNotFoundError(TricoloreException):
    """Raised when a URL is requested for an unknown route."""

    def __init__(self, route_name: str, reason: str | None = None):
        message = f"Route not found: {route_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message=message,
            code="ROUTE_NOT_FOUND",
            status_code=500,
            suggestion="Check the route name and its required path parameters",
            details={"route_name": route_name},
        )
        self.route_name = route_name


# =============================================================================
# Runtime Errors
# =============================================================================

class WrappedRuntimeError(TricoloreException):
    """
    A Python warning reclassified into a catchable error.

    Carries the location reported by the warning itself, which usually
    points at the caller rather than at the frame that raised this error.
    These errors are shown to developers but kept out of the exception log.
    """

    def __init__(self, message: str, severity: str, error_file: str, error_line: int):
        super().__init__(
            message=message,
            code="RUNTIME_ERROR",
            status_code=500,
            details={"severity": severity, "file": error_file, "line": error_line},
        )
        self.severity = severity
        self.error_file = error_file
        self.error_line = error_line


# =============================================================================
# Exception Handlers
# =============================================================================

async def tricolore_exception_handler(
    request: Request,
    exc: TricoloreException
) -> JSONResponse:
    """
    Convert TricoloreException to a JSON response.

    Used for API routes; HTML routes go through the exception presenter.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
