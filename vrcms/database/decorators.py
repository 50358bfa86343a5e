#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators and context managers for database operations.

Components:
    DatabaseOperation: Context manager that times a unit of work, logs it,
        and converts SQLAlchemy errors into DatabaseError
    handle_db_errors: Decorator form of the same error conversion
    log_database_operation: Decorator that logs start/completion/failure of
        a method on any object exposing a ``logger`` attribute

Usage:
    with DatabaseOperation(self.logger, "find_products"):
        ...

    @handle_db_errors
    @log_database_operation("create_record")
    def create(self, collection, data): ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from functools import wraps
from types import TracebackType
from typing import Any, Callable, Dict, Optional, Type

# --- Third party imports ---
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# --- Local imports ---
from vrcms.core.exceptions import DatabaseError
from vrcms.core.logging_manager import CmsLogger, safe_logger


class DatabaseOperation:
    """
    Context manager wrapping a database unit of work.

    On success logs ``<name>_completed`` with the duration. On failure logs
    the error once, then re-raises: IntegrityError and SQLAlchemyError are
    converted to DatabaseError, anything else propagates unchanged.

    Attributes:
        logger: Logger (None is replaced by a NullLogger)
        name: Operation name used in log entries
        log_start: Whether to emit a debug line on entry
        details: Extra fields merged into the completion entry
    """

    def __init__(
        self,
        logger: Optional[CmsLogger],
        name: str,
        log_start: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.logger = safe_logger(logger)
        self.name = name
        self.log_start = log_start
        self.details = details or {}
        self.start_time: Optional[datetime] = None

    def _elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        return (datetime.now() - self.start_time).total_seconds()

    def __enter__(self) -> "DatabaseOperation":
        self.start_time = datetime.now()
        if self.log_start:
            self.logger.log_debug(f"Starting {self.name}", self.details or None)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        duration = float(self._elapsed())

        if exc is None:
            completion = {"success": True, "duration_seconds": duration}
            completion.update(self.details)
            self.logger.log_operation(f"{self.name}_completed", completion)
            return False

        if not isinstance(exc, Exception):
            return False

        self.logger.log_error(
            exc,
            {"operation": self.name, "duration_seconds": duration, **self.details},
        )

        if isinstance(exc, IntegrityError):
            raise DatabaseError(f"Data integrity violation: {exc}") from exc
        if isinstance(exc, SQLAlchemyError):
            raise DatabaseError(f"Database operation failed: {exc}") from exc
        return False


def log_database_operation(operation_name: str):
    """
    Decorator to log database operations with timing and context.

    Args:
        operation_name: Name of the operation being logged

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"
            logger = safe_logger(getattr(self, "logger", None))

            logger.log_debug(
                f"Starting {operation_name}",
                {
                    "operation_id": operation_id,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "operation_id": operation_id,
                        "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    },
                )
                raise

            logger.log_operation(
                f"{operation_name}_completed",
                {
                    "operation_id": operation_id,
                    "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    "success": True,
                },
            )
            return result

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator to handle common database errors.

    Args:
        function: Function to wrap

    Returns:
        Wrapped function with error handling
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise DatabaseError(f"Data integrity violation: {e}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database operation failed: {e}") from e

    return wrapper
