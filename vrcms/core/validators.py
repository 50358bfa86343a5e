#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization helpers for record store operations.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .exceptions import ValidationError


class DataValidator:
    """Centralized data validation for record operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        for field in required_fields:
            if field not in data or not data[field]:
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def validate_record_id(record_id: Any) -> str:
        """
        Validate an opaque record ID.

        IDs are strings and are never coerced: ``5`` is not ``"5"``.

        Args:
            record_id: Candidate ID

        Returns:
            The ID unchanged

        Raises:
            ValidationError: If the ID is not a non-empty string
        """
        if not isinstance(record_id, str):
            raise ValidationError(
                f"Record ID must be a string, got {type(record_id).__name__}"
            )
        if not record_id.strip():
            raise ValidationError("Record ID must not be empty")
        return record_id

    @staticmethod
    def validate_known_fields(
        data: Dict[str, Any], known_fields: Iterable[str], collection: str
    ) -> None:
        """
        Reject field names a collection does not define.

        Raises:
            ValidationError: If any key of ``data`` is unknown
        """
        unknown = sorted(set(data) - set(known_fields))
        if unknown:
            raise ValidationError(
                f"Unknown field(s) for '{collection}': {', '.join(unknown)}"
            )

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Strip a string value; empty strings become None.

        Args:
            value: Value to normalize

        Returns:
            Normalized string or None
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_bool(value: Any) -> Optional[bool]:
        """
        Convert various inputs to boolean.

        Raises:
            ValidationError: If conversion fails
        """
        if isinstance(value, bool):
            return value
        elif isinstance(value, (int, float)):
            if value == 0:
                return False
            elif value == 1:
                return True
            raise ValidationError(f"Cannot convert numeric '{value}' to boolean")
        elif isinstance(value, str):
            if value.lower() in ("true", "1", "yes", "on"):
                return True
            elif value.lower() in ("false", "0", "no", "off"):
                return False
            raise ValidationError(f"Cannot convert '{value}' to boolean")
        elif value is not None:
            return bool(value)
        return None

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to integer.

        Raises:
            ValidationError: If the value is not integral
        """
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Cannot convert '{value}' to integer")
