"""
Reference Integrity Package
---------------------------

Keeps relationship fields consistent when records are deleted.

Modules:
    - references: Parse relationship entries; strip_reference()
    - scanner: ReferenceScanner (who points at this ID?)
    - cleanup: ReferenceCleanup orchestrator and CleanupResult
    - delete_hooks: register_reference_cleanup(), register_default_hooks()
    - audit: Find and repair dangling references
"""
from .references import (
    BareReference,
    IdReference,
    UnknownReference,
    ValueReference,
    parse_reference,
    strip_reference,
)
from .scanner import ReferenceScanner
from .cleanup import CleanupResult, ReferenceCleanup, ReferenceUpdateFailure, WatchedField
from .delete_hooks import register_default_hooks, register_reference_cleanup
from .audit import (
    DanglingReference,
    audit_references,
    find_dangling_references,
    repair_dangling_references,
)

__all__ = [
    "BareReference",
    "IdReference",
    "UnknownReference",
    "ValueReference",
    "parse_reference",
    "strip_reference",
    "ReferenceScanner",
    "CleanupResult",
    "ReferenceCleanup",
    "ReferenceUpdateFailure",
    "WatchedField",
    "register_default_hooks",
    "register_reference_cleanup",
    "DanglingReference",
    "audit_references",
    "find_dangling_references",
    "repair_dangling_references",
]
