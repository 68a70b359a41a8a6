# =============================================================================
# tests/test_exception_logger.py - Last Exception File Tests
# =============================================================================

from unittest.mock import patch

import pytest

from core.models.environment import Environment
from core.models.exception_record import ExceptionRecord, ErrorKind
from core.services.exception_logger import BANNER, ExceptionLogger, format_log_entry
from tests.conftest import make_config


def raised(message: str) -> Exception:
    try:
        raise RuntimeError(message)
    except RuntimeError as e:
        return e


class TestFormatLogEntry:
    """Tests for format_log_entry()."""

    def test_banner_block(self):
        record = ExceptionRecord(
            message="division by zero",
            source_file="/srv/app/module.py",
            source_line=42,
            kind_name="ZeroDivisionError",
            kind=ErrorKind.APPLICATION,
            timestamp="2024-01-15 10:30:00",
        )

        entry = format_log_entry(record)

        assert entry == "\n".join([
            "-------------------- LAST EXCEPTION LOG --------------------",
            "",
            "MESSAGE: division by zero",
            "FILE: /srv/app/module.py",
            "LINE: 42",
            "TIME: 2024-01-15 10:30:00",
            "",
            "-------------------- LAST EXCEPTION LOG --------------------",
        ])


class TestExceptionLogger:
    """Tests for ExceptionLogger.log()."""

    @pytest.mark.parametrize("environment", [Environment.DEVELOPMENT, Environment.PRODUCTION])
    def test_writes_log_file(self, tmp_path, environment):
        exception_logger = ExceptionLogger(make_config(tmp_path), environment)

        exception_logger.log(raised("first"))

        content = (tmp_path / "storage" / "last_exception.txt").read_text(encoding="utf-8")
        assert content.startswith(BANNER)
        assert "MESSAGE: first" in content
        assert f"FILE: {__file__}" in content

    def test_overwrites_previous_entry(self, tmp_path):
        exception_logger = ExceptionLogger(make_config(tmp_path), Environment.PRODUCTION)

        exception_logger.log(raised("first"))
        exception_logger.log(raised("second"))

        content = exception_logger.log_path.read_text(encoding="utf-8")
        assert "MESSAGE: second" in content
        assert "MESSAGE: first" not in content
        assert content.count(BANNER) == 2

    def test_noop_in_test_environment(self, tmp_path):
        exception_logger = ExceptionLogger(make_config(tmp_path), Environment.TEST)

        exception_logger.log(raised("ignored"))

        assert not (tmp_path / "storage").exists()

    def test_write_failure_is_swallowed(self, tmp_path):
        exception_logger = ExceptionLogger(make_config(tmp_path), Environment.PRODUCTION)

        with patch("pathlib.Path.write_text", side_effect=PermissionError("read-only")):
            exception_logger.log(raised("lost"))

        assert not exception_logger.log_path.exists()

    def test_unwritable_storage_is_swallowed(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        config = make_config(tmp_path, **{"directory.storage": str(blocker / "storage")})

        ExceptionLogger(config, Environment.PRODUCTION).log(raised("lost"))
