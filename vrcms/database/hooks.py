#!/usr/bin/env python3
"""
hooks.py
--------
Delete-hook registry for the record store.

Hooks are plain callables taking a DeleteEvent. For each collection the
registry keeps two ordered lists:

    before_delete   run before the record is removed; a hook that raises
                    aborts the delete
    after_delete    run once the delete is committed; errors are logged
                    and re-raised to the caller

Usage:
    registry = HookRegistry()
    registry.register_before_delete("products", my_hook)

    def my_hook(event: DeleteEvent) -> None:
        print(event.collection, event.record_id)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

# --- Local imports ---
from vrcms.core.logging_manager import CmsLogger, safe_logger

if TYPE_CHECKING:
    from .store import RecordStore


@dataclass
class DeleteEvent:
    """
    Everything a delete hook gets to see.

    Attributes:
        collection: Collection the record belongs to
        record_id: ID of the record being deleted
        store: Store to run follow-up queries and updates through
        context: Free-form request context passed to delete()
        doc: The record as it was just before deletion
    """

    collection: str
    record_id: str
    store: "RecordStore"
    context: Dict[str, Any] = field(default_factory=dict)
    doc: Optional[Dict[str, Any]] = None


DeleteHook = Callable[[DeleteEvent], Any]

BEFORE_DELETE = "before"
AFTER_DELETE = "after"


class HookRegistry:
    """Per-collection before/after delete hooks."""

    def __init__(self, logger: Optional[CmsLogger] = None) -> None:
        self.logger = logger
        self._before: Dict[str, List[DeleteHook]] = {}
        self._after: Dict[str, List[DeleteHook]] = {}

    def register_before_delete(self, collection: str, hook: DeleteHook) -> None:
        self._before.setdefault(collection, []).append(hook)

    def register_after_delete(self, collection: str, hook: DeleteHook) -> None:
        self._after.setdefault(collection, []).append(hook)

    def register(self, collection: str, hook: DeleteHook, when: str = BEFORE_DELETE) -> None:
        """
        Register a hook by phase name.

        Args:
            collection: Collection name
            hook: Callable taking a DeleteEvent
            when: 'before' or 'after'

        Raises:
            ValueError: If ``when`` is not a known phase
        """
        if when == BEFORE_DELETE:
            self.register_before_delete(collection, hook)
        elif when == AFTER_DELETE:
            self.register_after_delete(collection, hook)
        else:
            raise ValueError(f"Unknown hook phase '{when}', expected 'before' or 'after'")

    def before_delete(self, collection: str) -> List[DeleteHook]:
        return list(self._before.get(collection, []))

    def after_delete(self, collection: str) -> List[DeleteHook]:
        return list(self._after.get(collection, []))

    def run_before_delete(self, event: DeleteEvent) -> None:
        """Run before-delete hooks in registration order; the first error aborts."""
        self._run(self.before_delete(event.collection), event, BEFORE_DELETE)

    def run_after_delete(self, event: DeleteEvent) -> None:
        """Run after-delete hooks in registration order."""
        self._run(self.after_delete(event.collection), event, AFTER_DELETE)

    def _run(self, hooks: List[DeleteHook], event: DeleteEvent, phase: str) -> None:
        log = safe_logger(self.logger)
        for hook in hooks:
            name = getattr(hook, "__name__", repr(hook))
            log.log_debug(
                f"Running {phase}_delete hook",
                {"hook": name, "collection": event.collection, "id": event.record_id},
            )
            try:
                hook(event)
            except Exception as e:
                log.log_error(
                    e,
                    {
                        "operation": f"{phase}_delete_hook",
                        "hook": name,
                        "collection": event.collection,
                        "id": event.record_id,
                    },
                )
                raise
