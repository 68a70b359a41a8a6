# =============================================================================
# core/models/ - Data Models
# =============================================================================
# This package contains the framework-free data types:
# - environment.py: Environment enum (development, production, test)
# - exception_record.py: ExceptionRecord snapshot and ErrorKind tag
# - response.py: ResponseBuffer (status, headers, body, cookies)
# =============================================================================

from .environment import Environment
from .response import CookieInstruction, ResponseBuffer

__all__ = [
    "Environment",
    "CookieInstruction",
    "ResponseBuffer",
]
