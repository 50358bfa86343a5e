#!/usr/bin/env python3
"""
collections.py
--------------
Config-driven registry of the content collections.

Each collection is described by a CollectionConfig naming:
- The model class backing it
- The field its slug is derived from (if any)
- Its relationship fields and the collection they point into
- Normalizers applied to scalar fields on create/update

RecordStore resolves every collection name through this registry, so an
unknown name fails the same way everywhere.

Usage:
    from vrcms.database.collections import get_collection

    config = get_collection("services")
    config.model_class      # Service
    config.relationships    # {"related_services": "services"}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

# --- Local imports ---
from vrcms.core.exceptions import ValidationError
from vrcms.core.validators import DataValidator

from .models import ContentStatus, Media, Product, Service, ServiceType, Tool


def _normalize_status(value: Any) -> Optional[str]:
    text = DataValidator.normalize_string(value)
    if text is None:
        return None
    if text not in ContentStatus.choices():
        raise ValidationError(f"Invalid status '{text}'")
    return text


def _normalize_service_type(value: Any) -> Optional[str]:
    text = DataValidator.normalize_string(value)
    if text is None:
        return None
    if text not in ServiceType.choices():
        raise ValidationError(f"Invalid service type '{text}'")
    return text


@dataclass
class CollectionConfig:
    """
    Configuration for a content collection.

    Attributes:
        name: Collection name used by the store and CLI
        model_class: SQLAlchemy model class
        slug_source: Field the slug is derived from, or None
        required_fields: Fields that must be present and non-empty on create
        relationships: Relationship field name -> target collection name
        normalizers: Field name -> callable applied before writing
    """

    name: str
    model_class: Type
    slug_source: Optional[str] = None
    required_fields: List[str] = field(default_factory=list)
    relationships: Dict[str, str] = field(default_factory=dict)
    normalizers: Dict[str, Callable[[Any], Any]] = field(default_factory=dict)

    @property
    def field_names(self) -> List[str]:
        """All writable field names of the collection."""
        return self.model_class.field_names()

    @property
    def has_slug(self) -> bool:
        return self.slug_source is not None


MEDIA_CONFIG = CollectionConfig(
    name="media",
    model_class=Media,
    required_fields=["filename"],
    normalizers={
        "alt": DataValidator.normalize_string,
        "filesize": DataValidator.normalize_int,
    },
)

PRODUCT_CONFIG = CollectionConfig(
    name="products",
    model_class=Product,
    slug_source="name",
    required_fields=["name"],
    relationships={"related_products": "products"},
    normalizers={
        "status": _normalize_status,
        "featured": DataValidator.normalize_bool,
        "sort_order": DataValidator.normalize_int,
    },
)

TOOL_CONFIG = CollectionConfig(
    name="tools",
    model_class=Tool,
    slug_source="name",
    required_fields=["name"],
    relationships={"related_tools": "tools"},
    normalizers={
        "status": _normalize_status,
        "featured": DataValidator.normalize_bool,
    },
)

SERVICE_CONFIG = CollectionConfig(
    name="services",
    model_class=Service,
    slug_source="title",
    required_fields=["title"],
    relationships={"related_services": "services"},
    normalizers={
        "status": _normalize_status,
        "type": _normalize_service_type,
        "featured": DataValidator.normalize_bool,
        "order": DataValidator.normalize_int,
    },
)

COLLECTIONS: Dict[str, CollectionConfig] = {
    config.name: config
    for config in (MEDIA_CONFIG, PRODUCT_CONFIG, TOOL_CONFIG, SERVICE_CONFIG)
}


def get_collection(name: str) -> CollectionConfig:
    """
    Look up a collection by name.

    Raises:
        ValidationError: If the collection is unknown
    """
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise ValidationError(f"Unknown collection: '{name}'") from None


def collection_names() -> List[str]:
    return list(COLLECTIONS)
