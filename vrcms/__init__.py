"""
VRC Content Backend
===================

Content store for the VRC corporate website: products, tools, services and
media records kept in SQLite through SQLAlchemy.

Main Components:
    - database: ORM models, record store, delete-hook registry, ContentDB
    - integrity: Reference scanner, normalizer and delete-time cleanup
    - seed: Idempotent seeding with media upload and per-run upload cache
    - core: Logging, exceptions, validation, paths, CLI helpers
    - utils: Slug formatting

Primary Interfaces:
    - vrcms.cli: ``vrcms`` command line
    - vrcms.database.manager.ContentDB: engine, sessions and migrations
    - vrcms.database.store.RecordStore: find/create/update/delete with hooks

Example Usage:
    >>> from vrcms.database import ContentDB, RecordStore
    >>> from vrcms.integrity import register_default_hooks
    >>> db = ContentDB(db_path="data/vrcms.db")
    >>> store = RecordStore(db)
    >>> register_default_hooks(store.hooks)
    >>> store.delete("products", product_id)
"""

__version__ = "1.0.0"
