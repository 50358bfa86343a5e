"""
Database Models Package
------------------------

SQLAlchemy ORM models for the VRC content database.

This package provides:
- base: Base class, record ID and timestamp mixins
- enums: Enumeration types
- content: Media, Product, Tool, Service

Usage:
    from vrcms.database.models import Product, Service
"""
# Base classes
from .base import Base, RecordMixin, TimestampMixin, new_record_id

# Enumerations
from .enums import ContentStatus, ServiceType

# Content models
from .content import Media, Product, Service, Tool

__all__ = [
    # Base
    "Base",
    "RecordMixin",
    "TimestampMixin",
    "new_record_id",
    # Enums
    "ContentStatus",
    "ServiceType",
    # Content
    "Media",
    "Product",
    "Service",
    "Tool",
]
