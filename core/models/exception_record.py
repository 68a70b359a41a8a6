# =============================================================================
# core/models/exception_record.py - Exception Diagnostics
# =============================================================================
# A flat, template-friendly snapshot of a caught exception. The kind is
# decided once, here, from the error type:
# - WRAPPED_RUNTIME: a warning reclassified into WrappedRuntimeError; the
#   location is the one the warning reported
# - APPLICATION: anything else; the location is the innermost traceback frame
# =============================================================================

import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from app.exceptions import WrappedRuntimeError

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ErrorKind(str, Enum):
    """Which extraction path produced the record."""
    WRAPPED_RUNTIME = "wrapped_runtime"
    APPLICATION = "application"


@dataclass(frozen=True)
class ExceptionRecord:
    """Message, location and type of one exception."""

    message: str
    source_file: str
    source_line: int
    kind_name: str
    kind: ErrorKind
    timestamp: str = field(default_factory=lambda: datetime.now().strftime(TIMESTAMP_FORMAT))

    @property
    def is_wrapped_runtime_error(self) -> bool:
        return self.kind is ErrorKind.WRAPPED_RUNTIME

    @classmethod
    def from_exception(cls, exception: BaseException) -> "ExceptionRecord":
        """
        Build a record from a caught exception.

        An exception that was never raised has no traceback; its location
        is reported as ("", 0).
        """
        if isinstance(exception, WrappedRuntimeError):
            return cls(
                message=exception.message,
                source_file=exception.error_file,
                source_line=exception.error_line,
                kind_name=type(exception).__name__,
                kind=ErrorKind.WRAPPED_RUNTIME,
            )

        source_file, source_line = "", 0
        frames = traceback.extract_tb(exception.__traceback__)
        if frames:
            source_file, source_line = frames[-1].filename, frames[-1].lineno or 0

        return cls(
            message=str(exception),
            source_file=source_file,
            source_line=source_line,
            kind_name=type(exception).__name__,
            kind=ErrorKind.APPLICATION,
        )
