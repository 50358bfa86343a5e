#!/usr/bin/env python3
"""
cleanup.py
----------
Strip a deleted record's ID out of the records that reference it.

ReferenceCleanup ties the scanner and the normalizer together:

    1. Scan every watched relationship field for the deleted ID
    2. De-duplicate candidates by record ID, skipping the deleted record
    3. Re-fetch each candidate, strip the ID from its watched fields and
       write back only the fields that got shorter

Failures never escape run(). A failed scan stops work on that field and is
recorded as the result's ``error``; a failed write-back is recorded as a
per-record failure and the remaining candidates are still processed.

Usage:
    cleanup = ReferenceCleanup(store, [WatchedField("products", "related_products")])
    result = cleanup.run("products", deleted_id)
    if not result.ok:
        ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

# --- Local imports ---
from vrcms.core.exceptions import (
    CleanupError,
    ReferenceScanError,
    ReferenceUpdateError,
    ValidationError,
)
from vrcms.core.logging_manager import CmsLogger, safe_logger

from .references import as_reference_list, strip_reference
from .scanner import ReferenceScanner

if TYPE_CHECKING:
    from vrcms.database.store import RecordStore


@dataclass(frozen=True)
class WatchedField:
    """A relationship field that may hold IDs of the deleted collection."""

    collection: str
    field: str


@dataclass
class ReferenceUpdateFailure:
    """A referencing record that could not be rewritten."""

    collection: str
    record_id: str
    error: ReferenceUpdateError


@dataclass
class CleanupResult:
    """
    Outcome of one cleanup run.

    Attributes:
        collection: Collection of the deleted record
        record_id: ID of the deleted record
        updated: IDs of referencing records that were rewritten
        skipped: IDs of candidates that needed no write (or vanished)
        failures: Candidates whose write-back failed
        error: Scan failure that stopped work on a field, if any
    """

    collection: str
    record_id: str
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: List[ReferenceUpdateFailure] = field(default_factory=list)
    error: Optional[CleanupError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "collection": self.collection,
            "record_id": self.record_id,
            "updated": list(self.updated),
            "skipped": list(self.skipped),
            "failures": [
                {"collection": f.collection, "id": f.record_id, "error": str(f.error)}
                for f in self.failures
            ],
            "error": str(self.error) if self.error else None,
            "ok": self.ok,
        }


class ReferenceCleanup:
    """
    Remove references to a deleted record from the watched fields.

    Attributes:
        store: RecordStore used for scans, re-fetches and updates
        watched: Relationship fields to clean
        logger: CmsLogger (or None)
    """

    def __init__(
        self,
        store: "RecordStore",
        watched: Sequence[WatchedField],
        logger: Optional[CmsLogger] = None,
    ) -> None:
        self.store = store
        self.watched = list(watched)
        self.logger = logger
        self.scanner = ReferenceScanner(store, logger)

    def run(self, collection: str, record_id: str) -> CleanupResult:
        """
        Clean every watched field of references to ``record_id``.

        Args:
            collection: Collection the deleted record belonged to
            record_id: ID of the deleted record

        Returns:
            CleanupResult; never raises
        """
        log = safe_logger(self.logger)
        result = CleanupResult(collection=collection, record_id=record_id)

        # ---- Scan ----
        # (collection, id) -> watched fields the candidate was found through
        candidates: Dict[tuple, List[str]] = {}
        for watched in self.watched:
            try:
                docs = self.scanner.scan(watched.collection, watched.field, record_id)
            except ValidationError as e:
                result.error = CleanupError(
                    str(e), collection=collection, record_id=record_id
                )
                log.log_error(e, {"operation": "reference_cleanup", **result.to_dict()})
                return result
            except ReferenceScanError as e:
                if result.error is None:
                    result.error = e
                log.log_error(
                    e,
                    {
                        "operation": "reference_scan",
                        "collection": watched.collection,
                        "field": watched.field,
                        "record_id": record_id,
                    },
                )
                continue

            for doc in docs:
                doc_id = doc.get("id")
                if watched.collection == collection and doc_id == record_id:
                    continue
                fields = candidates.setdefault((watched.collection, doc_id), [])
                if watched.field not in fields:
                    fields.append(watched.field)

        # ---- Update ----
        for (candidate_collection, candidate_id), fields in candidates.items():
            try:
                changed = self._clean_record(
                    candidate_collection, candidate_id, fields, record_id
                )
            except Exception as e:
                failure = ReferenceUpdateError(
                    f"Could not remove '{record_id}' from "
                    f"{candidate_collection} '{candidate_id}': {e}",
                    collection=collection,
                    record_id=record_id,
                    target_id=candidate_id,
                )
                failure.__cause__ = e
                result.failures.append(
                    ReferenceUpdateFailure(candidate_collection, candidate_id, failure)
                )
                log.log_error(
                    failure,
                    {
                        "operation": "reference_update",
                        "collection": candidate_collection,
                        "id": candidate_id,
                        "deleted_id": record_id,
                    },
                )
                continue

            if changed:
                result.updated.append(candidate_id)
            else:
                result.skipped.append(candidate_id)

        log.log_operation("reference_cleanup", result.to_dict())
        return result

    def _clean_record(
        self, collection: str, record_id: str, fields: List[str], target_id: str
    ) -> bool:
        """
        Re-fetch one record and strip ``target_id`` from ``fields``.

        Returns:
            True if an update was written
        """
        fresh = self.store.find_by_id(collection, record_id)
        if fresh is None:
            return False

        changes: Dict[str, List[Any]] = {}
        for name in fields:
            current = as_reference_list(fresh.get(name))
            cleaned = strip_reference(current, target_id)
            if len(cleaned) < len(current):
                changes[name] = cleaned

        if not changes:
            return False

        self.store.update(collection, record_id, changes)
        safe_logger(self.logger).log_debug(
            "Removed stale reference",
            {"collection": collection, "id": record_id, "fields": list(changes)},
        )
        return True
