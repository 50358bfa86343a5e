#!/usr/bin/env python3
"""
scanner.py
----------
Find the records whose relationship field points at a given ID.

The scanner only reads. It asks the store for every record of a collection
whose relationship field contains the target ID (array membership, never
exact match) and hands back the records as currently stored.

Usage:
    scanner = ReferenceScanner(store, logger)
    referencing = scanner.scan("products", "related_products", product_id)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING, Any, Dict, List, Optional

# --- Local imports ---
from vrcms.core.exceptions import ReferenceScanError, ValidationError
from vrcms.core.logging_manager import CmsLogger, safe_logger
from vrcms.database.filters import Contains

if TYPE_CHECKING:
    from vrcms.database.store import RecordStore


class ReferenceScanner:
    """
    Query referencing records through the record store.

    Attributes:
        store: RecordStore (anything with a compatible ``find``)
        logger: CmsLogger (or None)
    """

    def __init__(self, store: "RecordStore", logger: Optional[CmsLogger] = None) -> None:
        self.store = store
        self.logger = logger

    def scan(
        self, collection: str, field: str, target_id: str
    ) -> List[Dict[str, Any]]:
        """
        Return every record of ``collection`` whose ``field`` holds ``target_id``.

        Args:
            collection: Collection to search
            field: Relationship field to test membership on
            target_id: ID of the record being deleted

        Returns:
            Matching records with the field value as currently stored

        Raises:
            ValidationError: If target_id is empty or blank
            ReferenceScanError: If the store query fails
        """
        if not isinstance(target_id, str) or not target_id.strip():
            raise ValidationError("Target ID for a reference scan must not be empty")

        try:
            result = self.store.find(collection, Contains(field, target_id))
        except Exception as e:
            raise ReferenceScanError(
                f"Scan of {collection}.{field} for '{target_id}' failed: {e}",
                collection=collection,
                record_id=target_id,
            ) from e

        docs = list(result.get("docs", []))
        safe_logger(self.logger).log_debug(
            "Reference scan complete",
            {
                "collection": collection,
                "field": field,
                "target_id": target_id,
                "matches": len(docs),
            },
        )
        return docs
