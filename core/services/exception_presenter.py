# =============================================================================
# core/services/exception_presenter.py - Error Pages
# =============================================================================
# Turns a caught exception into an HTTP 500 page:
# - production: Exceptions/HandleClientException, no diagnostic detail
# - otherwise:  Exceptions/HandleDevException with message, location, the
#               source file lines and the request path
#
# Application errors are also written to the last-exception file; wrapped
# warnings (WrappedRuntimeError) are shown but not logged.
# =============================================================================

import logging
from pathlib import Path

from core.models.environment import Environment
from core.models.exception_record import ExceptionRecord
from core.models.response import ResponseBuffer
from core.services.exception_logger import ExceptionLogger
from core.services.view_service import View

logger = logging.getLogger(__name__)

EXCEPTIONS_SECTION = "Exceptions"
CLIENT_TEMPLATE = "HandleClientException"
DEVELOPER_TEMPLATE = "HandleDevException"


def read_source_lines(path: str) -> list[str]:
    """
    Read a source file for the code excerpt.

    Returns an empty list if the file cannot be read.
    """
    if not path:
        return []
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace").splitlines(keepends=True)
    except OSError as e:
        logger.warning(f"Could not read source for error page: {path} ({e})")
        return []


class ExceptionPresenter:
    """Renders error pages through a borrowed View."""

    def __init__(
        self,
        view: View,
        exception_logger: ExceptionLogger,
        response: ResponseBuffer,
        environment: Environment,
        path_info: str = "/",
    ):
        self.view = view
        self.exception_logger = exception_logger
        self.response = response
        self.environment = environment
        self.path_info = path_info

    def handle(self, exception: BaseException, return_mode: bool = False) -> str | None:
        """
        Present an exception.

        Sets the status to 500 before anything else.
        """
        self.response.status_code = 500
        record = ExceptionRecord.from_exception(exception)

        if not record.is_wrapped_runtime_error:
            self._log(exception)

        if self.environment is Environment.PRODUCTION:
            return self.view.display(EXCEPTIONS_SECTION, CLIENT_TEMPLATE, {}, return_mode)

        return self.view.display(EXCEPTIONS_SECTION, DEVELOPER_TEMPLATE, {
            "exception": exception,
            "file_array": read_source_lines(record.source_file),
            "error_line": record.source_line,
            "error_file": record.source_file,
            "exception_name": record.kind_name,
            "path_info": self.path_info,
        }, return_mode)

    def _log(self, exception: BaseException) -> None:
        try:
            self.exception_logger.log(exception)
        except Exception as e:
            logger.warning(f"Exception logger failed: {e}")
