#!/usr/bin/env python3
"""
audit.py
--------
Detect and repair relationship entries that point at deleted records.

Delete-time cleanup is best effort: a failed scan or write-back leaves a
stale reference behind. The audit walks a relationship field, resolves each
entry with the reference parser and reports the IDs that no longer exist in
the target collection. ``repair_dangling_references`` strips them.

Usage:
    dangling = find_dangling_references(store, "products", "related_products")
    repaired = repair_dangling_references(store, dangling)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

# --- Local imports ---
from vrcms.core.cli import IntegrityStats
from vrcms.core.exceptions import ValidationError
from vrcms.core.logging_manager import CmsLogger, safe_logger
from vrcms.database.collections import COLLECTIONS, get_collection

from .references import as_reference_list, resolved_id, strip_reference

if TYPE_CHECKING:
    from vrcms.database.store import RecordStore


@dataclass(frozen=True)
class DanglingReference:
    """One relationship entry whose target is missing."""

    collection: str
    record_id: str
    field: str
    missing_id: str


def _existing_ids(store: "RecordStore", collection: str) -> Set[str]:
    return {doc["id"] for doc in store.find(collection)["docs"]}


def find_dangling_references(
    store: "RecordStore", collection: str, field: str
) -> List[DanglingReference]:
    """
    Report entries of ``collection.field`` pointing at missing records.

    Entries of unknown shape are not reported.

    Raises:
        ValidationError: If ``field`` is not a relationship field
    """
    config = get_collection(collection)
    target = config.relationships.get(field)
    if target is None:
        raise ValidationError(
            f"'{field}' is not a relationship field of '{collection}'"
        )

    existing = _existing_ids(store, target)
    dangling: List[DanglingReference] = []
    for doc in store.find(collection)["docs"]:
        seen: Set[str] = set()
        for element in as_reference_list(doc.get(field)):
            ref_id = resolved_id(element)
            if ref_id is None or ref_id in existing or ref_id in seen:
                continue
            seen.add(ref_id)
            dangling.append(DanglingReference(collection, doc["id"], field, ref_id))
    return dangling


def repair_dangling_references(
    store: "RecordStore",
    dangling: List[DanglingReference],
    logger: Optional[CmsLogger] = None,
) -> int:
    """
    Strip every reported missing ID from its record.

    Records are re-fetched before writing. Update failures are logged and
    skipped.

    Returns:
        Number of records rewritten
    """
    log = safe_logger(logger)
    grouped: Dict[Tuple[str, str, str], List[str]] = {}
    for item in dangling:
        grouped.setdefault((item.collection, item.record_id, item.field), []).append(
            item.missing_id
        )

    repaired = 0
    for (collection, record_id, field), missing in grouped.items():
        fresh = store.find_by_id(collection, record_id)
        if fresh is None:
            continue
        current = as_reference_list(fresh.get(field))
        cleaned = current
        for missing_id in missing:
            cleaned = strip_reference(cleaned, missing_id)
        if len(cleaned) == len(current):
            continue
        try:
            store.update(collection, record_id, {field: cleaned})
        except Exception as e:
            log.log_error(
                e,
                {"operation": "repair_reference", "collection": collection, "id": record_id},
            )
            continue
        repaired += 1
    return repaired


def audit_references(
    store: "RecordStore",
    collection: Optional[str] = None,
    fix: bool = False,
    logger: Optional[CmsLogger] = None,
) -> Tuple[IntegrityStats, List[DanglingReference]]:
    """
    Audit every relationship field (optionally of one collection).

    Args:
        store: RecordStore
        collection: Restrict to one collection
        fix: Strip what was found
        logger: CmsLogger (or None)

    Returns:
        (stats, dangling references found)
    """
    configs = [get_collection(collection)] if collection else list(COLLECTIONS.values())
    stats = IntegrityStats()
    found: List[DanglingReference] = []

    for config in configs:
        for field in config.relationships:
            stats.items_processed += store.count(config.name)
            dangling = find_dangling_references(store, config.name, field)
            found.extend(dangling)

    stats.dangling_found = len(found)
    if fix and found:
        stats.records_repaired = repair_dangling_references(store, found, logger)

    safe_logger(logger).log_operation("integrity_audit", stats.to_dict())
    return stats, found
