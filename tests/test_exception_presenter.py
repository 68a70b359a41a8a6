# =============================================================================
# tests/test_exception_presenter.py - Error Page Tests
# =============================================================================
# This module contains tests for:
# - ExceptionRecord extraction (wrapped warnings vs. application errors)
# - Production pages never showing diagnostics
# - Developer pages showing location and source excerpt
# - Logging side channel (skipped for wrapped warnings, failures contained)
# =============================================================================

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from app.exceptions import WrappedRuntimeError
from core.models.environment import Environment
from core.models.exception_record import ErrorKind, ExceptionRecord
from core.models.response import ResponseBuffer
from core.services.exception_presenter import ExceptionPresenter, read_source_lines
from tests.conftest import make_application

SECRET_MESSAGE = "secret-message-for-presenter"


def raise_and_catch() -> tuple[Exception, int]:
    """Raise a ValueError and return it with the raising line number."""
    excerpt_marker = SECRET_MESSAGE
    try:
        raise ValueError(excerpt_marker)
    except ValueError as e:
        return e, e.__traceback__.tb_lineno


def make_presenter(tmp_path, environment, exception_logger=None, path_info="/broken"):
    application = make_application(tmp_path, environment)
    response = ResponseBuffer()
    view = application.view(response)
    presenter = ExceptionPresenter(
        view=view,
        exception_logger=exception_logger or MagicMock(),
        response=response,
        environment=environment,
        path_info=path_info,
    )
    return presenter, response


# =============================================================================
# ExceptionRecord
# =============================================================================

class TestExceptionRecord:
    """Tests for ExceptionRecord.from_exception()."""

    def test_application_error_uses_traceback(self):
        exception, line = raise_and_catch()

        record = ExceptionRecord.from_exception(exception)

        assert record.kind is ErrorKind.APPLICATION
        assert record.is_wrapped_runtime_error is False
        assert record.message == SECRET_MESSAGE
        assert record.source_file == __file__
        assert record.source_line == line
        assert record.kind_name == "ValueError"

    def test_wrapped_runtime_error_uses_own_location(self):
        exception = WrappedRuntimeError("deprecated", "DeprecationWarning", "/srv/app/module.py", 12)

        record = ExceptionRecord.from_exception(exception)

        assert record.kind is ErrorKind.WRAPPED_RUNTIME
        assert record.is_wrapped_runtime_error is True
        assert record.source_file == "/srv/app/module.py"
        assert record.source_line == 12
        assert record.kind_name == "WrappedRuntimeError"

    def test_unraised_exception_has_no_location(self):
        record = ExceptionRecord.from_exception(RuntimeError("never raised"))

        assert record.source_file == ""
        assert record.source_line == 0

    def test_timestamp_format(self):
        record = ExceptionRecord.from_exception(RuntimeError("x"))

        assert len(record.timestamp) == len("2024-01-15 10:30:00")


# =============================================================================
# Production
# =============================================================================

class TestProductionPage:
    """Production pages hide exception internals."""

    @pytest.mark.parametrize("make_exception", [
        lambda: raise_and_catch()[0],
        lambda: WrappedRuntimeError(SECRET_MESSAGE, "UserWarning", __file__, 4242),
    ])
    def test_no_diagnostics(self, tmp_path, make_exception):
        presenter, response = make_presenter(tmp_path, Environment.PRODUCTION)
        exception = make_exception()

        html = presenter.handle(exception, return_mode=True)

        assert response.status_code == 500
        assert "Something went wrong" in html
        assert SECRET_MESSAGE not in html
        assert __file__ not in html
        assert "4242" not in html

    def test_write_mode(self, tmp_path):
        presenter, response = make_presenter(tmp_path, Environment.PRODUCTION)

        result = presenter.handle(RuntimeError("boom"))

        assert result is None
        assert b"Something went wrong" in response.body


# =============================================================================
# Development
# =============================================================================

class TestDeveloperPage:
    """Developer pages show location and source."""

    def test_location_and_excerpt(self, tmp_path):
        presenter, response = make_presenter(tmp_path, Environment.DEVELOPMENT)
        exception, line = raise_and_catch()

        html = presenter.handle(exception, return_mode=True)

        assert response.status_code == 500
        assert f'<dd class="error-line">{line}</dd>' in html
        assert f'<dd class="error-file">{__file__}</dd>' in html
        assert "<h1>ValueError</h1>" in html
        assert "excerpt_marker" in html
        assert '<dd class="path-info">/broken</dd>' in html

    def test_wrapped_runtime_error_location(self, tmp_path):
        presenter, _ = make_presenter(tmp_path, Environment.DEVELOPMENT)
        exception = WrappedRuntimeError("careful", "UserWarning", __file__, 3)

        html = presenter.handle(exception, return_mode=True)

        assert '<dd class="error-line">3</dd>' in html
        assert "<h1>WrappedRuntimeError</h1>" in html

    def test_unreadable_source_is_omitted(self, tmp_path):
        presenter, _ = make_presenter(tmp_path, Environment.DEVELOPMENT)
        exception = WrappedRuntimeError("gone", "UserWarning", str(tmp_path / "deleted.py"), 7)

        html = presenter.handle(exception, return_mode=True)

        assert "Source not available." in html
        assert '<dd class="error-line">7</dd>' in html


# =============================================================================
# Logging Side Channel
# =============================================================================

class TestLogging:
    """Tests for the exception logger call."""

    def test_application_errors_are_logged(self, tmp_path):
        exception_logger = MagicMock()
        presenter, _ = make_presenter(tmp_path, Environment.PRODUCTION, exception_logger)
        exception = RuntimeError("logged")

        presenter.handle(exception, return_mode=True)

        exception_logger.log.assert_called_once_with(exception)

    def test_wrapped_runtime_errors_are_not_logged(self, tmp_path):
        exception_logger = MagicMock()
        presenter, _ = make_presenter(tmp_path, Environment.PRODUCTION, exception_logger)

        presenter.handle(WrappedRuntimeError("w", "UserWarning", __file__, 1), return_mode=True)

        exception_logger.log.assert_not_called()

    def test_logger_failure_does_not_break_rendering(self, tmp_path):
        exception_logger = MagicMock()
        exception_logger.log.side_effect = OSError("disk full")
        presenter, _ = make_presenter(tmp_path, Environment.PRODUCTION, exception_logger)

        html = presenter.handle(RuntimeError("x"), return_mode=True)

        assert "Something went wrong" in html


class TestReadSourceLines:
    """Tests for read_source_lines()."""

    def test_reads_lines(self, tmp_path):
        source = tmp_path / "module.py"
        source.write_text("a = 1\nb = 2\n", encoding="utf-8")

        assert read_source_lines(str(source)) == ["a = 1\n", "b = 2\n"]

    def test_missing_file(self, tmp_path):
        assert read_source_lines(str(tmp_path / "missing.py")) == []

    def test_empty_path(self):
        assert read_source_lines("") == []
