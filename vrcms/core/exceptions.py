#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the VRC content backend.

This module defines a hierarchy of exceptions used throughout the project
to handle specific error conditions in different subsystems.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all record store errors
    │   └── RecordNotFoundError - Lookup by ID found nothing
    ├── ValidationError - Data validation failures
    ├── CleanupError - Base for reference cleanup failures
    │   ├── ReferenceScanError - Query for referencing records failed
    │   └── ReferenceUpdateError - Write-back of a stripped field failed
    └── SeedError - Base for seeding failures
        └── MediaUploadError - Asset could not be uploaded

Usage:
    from vrcms.core.exceptions import DatabaseError, ValidationError

    try:
        store.update("products", product_id, {"name": "Chiller"})
    except ValidationError as e:
        logger.log_warning(f"Invalid data: {e}")
    except DatabaseError as e:
        logger.log_error(e, {"operation": "update_product"})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional


class DatabaseError(Exception):
    """
    Base exception for record store errors.

    Raised when store operations fail due to connection issues,
    query errors, integrity violations, or other database problems.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
        >>> raise DatabaseError("Data integrity violation: duplicate slug")
    """

    pass


class RecordNotFoundError(DatabaseError):
    """
    Exception for lookups of records that do not exist.

    Attributes:
        collection: Collection that was queried
        record_id: ID that could not be found
    """

    def __init__(self, collection: str, record_id: str) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"No record '{record_id}' in collection '{collection}'")


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Missing required fields
    - Unknown collection or field names
    - Blank record IDs
    - Type mismatches

    Examples:
        >>> raise ValidationError("Required field 'slug' missing or empty")
        >>> raise ValidationError("Unknown collection: 'widgets'")
    """

    pass


class CleanupError(Exception):
    """
    Base exception for reference cleanup failures.

    Cleanup errors are never raised out of a delete hook. They are
    captured on a CleanupResult and logged by the caller.

    Attributes:
        collection: Collection whose references were being cleaned
        record_id: ID of the deleted record
    """

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        record_id: Optional[str] = None,
    ) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(message)


class ReferenceScanError(CleanupError):
    """
    Exception for failures while querying referencing records.

    Raised when the store cannot answer the "which records contain this ID"
    query (store unavailable, timeout, malformed filter).

    Examples:
        >>> raise ReferenceScanError("Scan of products.related_products failed")
    """

    pass


class ReferenceUpdateError(CleanupError):
    """
    Exception for a failed write-back of a cleaned relationship field.

    Attributes:
        target_id: ID of the referencing record that could not be updated
    """

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        record_id: Optional[str] = None,
        target_id: Optional[str] = None,
    ) -> None:
        self.target_id = target_id
        super().__init__(message, collection=collection, record_id=record_id)


class SeedError(Exception):
    """
    Base exception for seeding failures.

    Raised when seed data cannot be loaded or a seed record cannot be
    created. Duplicate records are not errors; they are skipped.

    Examples:
        >>> raise SeedError("Seed file not found: services.yaml")
        >>> raise SeedError("Seed item missing slug")
    """

    pass


class MediaUploadError(SeedError):
    """
    Exception for asset upload failures during seeding.

    Seeding never fails a record because of this error; the record is
    created without its image field.
    """

    pass
