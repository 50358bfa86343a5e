"""
Base Classes and Mixins
------------------------

Foundational ORM classes for the VRC content database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - RecordMixin: Opaque string ID plus dict serialization
    - TimestampMixin: created_at/updated_at columns

Every collection model inherits from all three. Records leave the database
layer as plain dictionaries (``to_dict``) so that hooks and the cleanup core
never hold live ORM instances across sessions.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

# --- Third party ---
from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_record_id() -> str:
    """Generate an opaque 32-character hex record ID."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    pass


class RecordMixin:
    """
    Mixin giving a model an opaque string primary key and dict output.

    Attributes:
        id: 32-character hex identifier
    """

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=new_record_id, doc="Opaque record ID"
    )

    @classmethod
    def field_names(cls) -> List[str]:
        """Names of all mapped columns, in table order."""
        return [column.key for column in cls.__table__.columns]  # type: ignore[attr-defined]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the record as a plain dictionary.

        JSON list/dict values are shallow-copied so callers can never
        mutate ORM state through the returned document.
        """
        doc: Dict[str, Any] = {}
        for name in self.field_names():
            value = getattr(self, name)
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            doc[name] = value
        return doc


# --- Timestamps ---
class TimestampMixin:
    """
    Mixin providing creation and modification timestamps.

    Attributes:
        created_at: Set once on insert
        updated_at: Refreshed on every update
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )
