#!/usr/bin/env python3
"""
delete_hooks.py
---------------
Wire reference cleanup into the record store's delete pipeline.

register_reference_cleanup() installs a hook that runs ReferenceCleanup for
every delete of a collection. The hook never raises: whatever happens, the
CleanupResult is logged and appended to ``event.context["cleanup_results"]``
so callers (CLI, tests) can inspect it.

register_default_hooks() wires the website's collections:
    products.related_products   cleaned before a product is deleted
    tools.related_tools         cleaned before a tool is deleted
    services.related_services   cleaned before a service is deleted
plus an after-delete log line for every collection.

Usage:
    store = RecordStore(db)
    register_default_hooks(store.hooks, logger)
    store.delete("products", product_id)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Callable, Dict, List, Optional, Sequence, Union

# --- Local imports ---
from vrcms.core.exceptions import CleanupError
from vrcms.core.logging_manager import CmsLogger, safe_logger
from vrcms.database.collections import COLLECTIONS
from vrcms.database.hooks import BEFORE_DELETE, DeleteEvent, HookRegistry

from .cleanup import CleanupResult, ReferenceCleanup, WatchedField

CLEANUP_RESULTS_KEY = "cleanup_results"


# Collection -> relationship fields cleaned when one of its records is deleted
DEFAULT_CLEANUP_FIELDS: Dict[str, List[str]] = {
    "products": ["related_products"],
    "tools": ["related_tools"],
    "services": ["related_services"],
}


def register_reference_cleanup(
    registry: HookRegistry,
    collection: str,
    fields: Sequence[Union[str, WatchedField]],
    when: str = BEFORE_DELETE,
    logger: Optional[CmsLogger] = None,
) -> Callable[[DeleteEvent], CleanupResult]:
    """
    Register a hook that strips a deleted record's ID from ``fields``.

    Args:
        registry: Hook registry of the store
        collection: Collection whose deletes trigger the cleanup
        fields: Field names on ``collection`` itself, or WatchedField
            entries for fields on other collections
        when: 'before' or 'after' the delete
        logger: CmsLogger (or None)

    Returns:
        The registered hook
    """
    watched = [
        f if isinstance(f, WatchedField) else WatchedField(collection, f)
        for f in fields
    ]
    log = safe_logger(logger)

    def cleanup_references(event: DeleteEvent) -> CleanupResult:
        try:
            result = ReferenceCleanup(event.store, watched, logger).run(
                event.collection, event.record_id
            )
        except Exception as e:
            # Reached only when the store object itself is broken
            log.log_error(
                e,
                {
                    "operation": "reference_cleanup_hook",
                    "collection": event.collection,
                    "id": event.record_id,
                },
            )
            error = CleanupError(
                f"Reference cleanup crashed: {e}",
                collection=event.collection,
                record_id=event.record_id,
            )
            error.__cause__ = e
            result = CleanupResult(event.collection, event.record_id, error=error)

        if result.ok:
            log.log_info(
                f"Cleaned references to {event.collection} '{event.record_id}'",
                {"updated": len(result.updated), "skipped": len(result.skipped)},
            )
        else:
            log.log_warning(
                f"Reference cleanup incomplete for {event.collection} "
                f"'{event.record_id}'",
                result.to_dict(),
            )

        event.context.setdefault(CLEANUP_RESULTS_KEY, []).append(result)
        return result

    cleanup_references.__name__ = f"cleanup_{collection}_references"
    registry.register(collection, cleanup_references, when=when)
    return cleanup_references


def log_deletion(logger: Optional[CmsLogger]) -> Callable[[DeleteEvent], None]:
    """Build an after-delete hook that records the deletion."""
    log = safe_logger(logger)

    def log_deleted_record(event: DeleteEvent) -> None:
        doc = event.doc or {}
        log.log_operation(
            "record_deleted",
            {
                "collection": event.collection,
                "id": event.record_id,
                "slug": doc.get("slug"),
                "context": event.context.get("source"),
            },
        )

    return log_deleted_record


def register_default_hooks(
    registry: HookRegistry, logger: Optional[CmsLogger] = None
) -> Dict[str, List[WatchedField]]:
    """
    Install the website's delete hooks.

    Returns:
        Collection name -> watched fields registered for it
    """
    registered: Dict[str, List[WatchedField]] = {}
    after_hook = log_deletion(logger)

    for name, fields in DEFAULT_CLEANUP_FIELDS.items():
        watched = [WatchedField(name, f) for f in fields]
        register_reference_cleanup(registry, name, watched, logger=logger)
        registered[name] = watched

    for name in COLLECTIONS:
        registry.register_after_delete(name, after_hook)

    return registered
