# =============================================================================
# lib/error_reporting.py - Warning to Error Promotion
# =============================================================================
# In development every Python warning is raised as a WrappedRuntimeError
# carrying the location the warning reported, so it reaches the developer
# error page like any other exception. In production warnings are ignored.
# The test environment keeps the interpreter defaults so pytest can still
# capture warnings.
#
# Usage:
#   restore = setup_error_reporting(Environment.DEVELOPMENT)
#   ...
#   restore()
# =============================================================================

import logging
import warnings
from typing import Callable

from app.exceptions import WrappedRuntimeError
from core.models.environment import Environment

logger = logging.getLogger(__name__)


def _raise_wrapped(message, category, filename, lineno, file=None, line=None):
    """warnings.showwarning replacement that raises instead of printing."""
    raise WrappedRuntimeError(
        message=str(message),
        severity=category.__name__,
        error_file=filename,
        error_line=lineno,
    )


def setup_error_reporting(environment: Environment) -> Callable[[], None]:
    """
    Configure how warnings are reported for the given environment.

    Returns:
        A callable restoring the previous warning filters and hook
    """
    saved = warnings.catch_warnings()
    saved.__enter__()

    if environment is Environment.PRODUCTION:
        warnings.simplefilter("ignore")
    elif environment is Environment.DEVELOPMENT:
        warnings.simplefilter("always")
        warnings.showwarning = _raise_wrapped

    logger.debug(f"Error reporting configured for {environment.value}")

    def restore() -> None:
        saved.__exit__(None, None, None)

    return restore
