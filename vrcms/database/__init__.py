#!/usr/bin/env python3
"""
VRC Content Database Package
----------------------------
Storage layer of the content backend.

This package provides:
- ContentDB: engine, sessions and Alembic migrations
- RecordStore: collection-level find/create/update/delete
- HookRegistry / DeleteEvent: delete hooks run by RecordStore.delete
- Equals / Contains: query predicates
- Collection registry and ORM models
"""

from .manager import ContentDB
from vrcms.core.exceptions import (
    DatabaseError,
    RecordNotFoundError,
    ValidationError,
)
from .collections import CollectionConfig, collection_names, get_collection
from .decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
)
from .filters import Contains, Equals
from .hooks import DeleteEvent, HookRegistry
from .store import RecordStore, UploadFile

__all__ = [
    # Main manager
    "ContentDB",
    "RecordStore",
    "UploadFile",
    # Exceptions
    "DatabaseError",
    "RecordNotFoundError",
    "ValidationError",
    # Collections
    "CollectionConfig",
    "collection_names",
    "get_collection",
    # Hooks
    "DeleteEvent",
    "HookRegistry",
    # Filters
    "Contains",
    "Equals",
    # Decorators
    "DatabaseOperation",
    "handle_db_errors",
    "log_database_operation",
]
