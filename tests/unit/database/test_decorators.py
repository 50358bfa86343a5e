"""
Tests for database decorators and the DatabaseOperation context manager.
"""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, OperationalError

from vrcms.core.exceptions import DatabaseError
from vrcms.core.logging_manager import CmsLogger
from vrcms.database.decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
)


class TestDatabaseOperation:
    """Test DatabaseOperation context manager."""

    def test_success_logs_completion(self, mock_logger):
        """Completion is logged with duration and details."""
        with DatabaseOperation(mock_logger, "find_products", details={"collection": "products"}):
            pass

        mock_logger.log_operation.assert_called_once()
        name, details = mock_logger.log_operation.call_args[0]
        assert name == "find_products_completed"
        assert details["success"] is True
        assert isinstance(details["duration_seconds"], float)
        assert details["collection"] == "products"

    def test_log_start(self, mock_logger):
        with DatabaseOperation(mock_logger, "create_media", log_start=True):
            pass
        mock_logger.log_debug.assert_called_once()
        assert "Starting create_media" in mock_logger.log_debug.call_args[0][0]

    def test_integrity_error_converted(self, mock_logger):
        """IntegrityError becomes DatabaseError after being logged once."""
        with pytest.raises(DatabaseError, match="integrity violation"):
            with DatabaseOperation(mock_logger, "create_products"):
                raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        mock_logger.log_error.assert_called_once()
        mock_logger.log_operation.assert_not_called()

    def test_sqlalchemy_error_converted(self, mock_logger):
        with pytest.raises(DatabaseError, match="Database operation failed"):
            with DatabaseOperation(mock_logger, "find_tools"):
                raise OperationalError("SELECT", {}, Exception("database is locked"))

    def test_other_errors_propagate_unchanged(self, mock_logger):
        with pytest.raises(KeyError):
            with DatabaseOperation(mock_logger, "update_services"):
                raise KeyError("slug")
        mock_logger.log_error.assert_called_once()

    def test_none_logger(self):
        """A None logger is replaced by the null logger."""
        with DatabaseOperation(None, "count_media"):
            pass


class TestHandleDbErrors:
    """Test handle_db_errors decorator."""

    def test_passes_result_through(self):
        @handle_db_errors
        def ok():
            return 42

        assert ok() == 42

    def test_converts_integrity_error(self):
        @handle_db_errors
        def broken():
            raise IntegrityError("INSERT", {}, Exception("duplicate"))

        with pytest.raises(DatabaseError, match="integrity violation"):
            broken()

    def test_leaves_other_errors(self):
        @handle_db_errors
        def broken():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            broken()


class TestLogDatabaseOperation:
    """Test log_database_operation decorator."""

    def _holder(self, logger):
        class Holder:
            def __init__(self, logger):
                self.logger = logger

            @log_database_operation("do_work")
            def work(self, fail=False):
                if fail:
                    raise RuntimeError("failed")
                return "done"

        return Holder(logger)

    def test_logs_start_and_completion(self, mock_logger):
        assert self._holder(mock_logger).work() == "done"
        mock_logger.log_debug.assert_called_once()
        name, details = mock_logger.log_operation.call_args[0]
        assert name == "do_work_completed"
        assert details["success"] is True

    def test_logs_error_and_reraises(self, mock_logger):
        with pytest.raises(RuntimeError):
            self._holder(mock_logger).work(fail=True)
        mock_logger.log_error.assert_called_once()
        mock_logger.log_operation.assert_not_called()

    def test_works_without_logger(self):
        holder = self._holder(None)
        assert holder.work() == "done"
