# =============================================================================
# core/services/exception_logger.py - Last Exception File
# =============================================================================
# Writes the most recent application exception to
# <storage>/last_exception.txt, replacing the previous content.
#
# This is a diagnostic aid, not an audit log: only the last exception is
# kept, concurrent writers race (last writer wins), and write failures are
# reported through logging and otherwise ignored. Nothing is written in the
# test environment.
# =============================================================================

import logging
from pathlib import Path

from core.config_store import ConfigStore
from core.models.environment import Environment
from core.models.exception_record import ExceptionRecord

logger = logging.getLogger(__name__)

LOG_FILENAME = "last_exception.txt"
BANNER = "-" * 20 + " LAST EXCEPTION LOG " + "-" * 20


def format_log_entry(record: ExceptionRecord) -> str:
    """
    Format the banner block for one exception.

    Example:
        -------------------- LAST EXCEPTION LOG --------------------

        MESSAGE: division by zero
        FILE: /srv/app/core/services/view_service.py
        LINE: 42
        TIME: 2024-01-15 10:30:00

        -------------------- LAST EXCEPTION LOG --------------------
    """
    return "\n".join([
        BANNER,
        "",
        f"MESSAGE: {record.message}",
        f"FILE: {record.source_file}",
        f"LINE: {record.source_line}",
        f"TIME: {record.timestamp}",
        "",
        BANNER,
    ])


class ExceptionLogger:
    """Best-effort single-slot exception log."""

    def __init__(self, config: ConfigStore, environment: Environment):
        self.config = config
        self.environment = environment

    @property
    def log_path(self) -> Path:
        return Path(self.config.key("directory.storage", "storage")) / LOG_FILENAME

    def log(self, exception: BaseException) -> None:
        """Overwrite the log file with this exception. Never raises."""
        if self.environment is Environment.TEST:
            return

        try:
            entry = format_log_entry(ExceptionRecord.from_exception(exception))
            path = self.log_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(entry, encoding="utf-8")
        except Exception as e:
            logger.warning(f"Could not write exception log: {e}")
