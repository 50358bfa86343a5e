#!/usr/bin/env python3
"""
store.py
--------
Collection-level record store on top of ContentDB.

RecordStore is the single entry point the rest of the backend uses to read
and write content. It speaks in collection names and plain dictionaries:

    find(collection, where=None, limit=None)   -> {"docs": [...], "total": n}
    find_by_id(collection, record_id)          -> dict | None
    create(collection, data, file=None)        -> dict
    update(collection, record_id, data)        -> dict
    delete(collection, record_id, context=None) -> dict
    count(collection, where=None)              -> int

Every call is its own unit of work with its own session scope. Deletes run
the HookRegistry's before-delete hooks, remove the record, then run the
after-delete hooks; nothing spans the three steps transactionally.

Relationship membership (Contains) is evaluated in two steps: a LIKE
prefilter on the JSON text of the column, then exact confirmation with the
reference parser so that substrings of longer IDs never match.

Usage:
    store = RecordStore(db, media_dir=paths.MEDIA_DIR)
    product = store.create("products", {"name": "Máy nén khí"})
    store.find("products", Contains("related_products", product["id"]))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# --- Third party imports ---
from sqlalchemy import String, cast, func, select
from sqlalchemy.orm import Session

# --- Local imports ---
from vrcms.core.exceptions import RecordNotFoundError, ValidationError
from vrcms.core.logging_manager import CmsLogger, safe_logger
from vrcms.core.paths import MEDIA_DIR
from vrcms.core.validators import DataValidator
from vrcms.integrity.references import contains_reference
from vrcms.utils.slugify import resolve_slug, slugify

from .collections import CollectionConfig, get_collection
from .decorators import DatabaseOperation
from .filters import Contains, Equals, Where, as_filter_list
from .hooks import DeleteEvent, HookRegistry
from .manager import ContentDB

READ_ONLY_FIELDS = ("id", "created_at", "updated_at")


@dataclass
class UploadFile:
    """
    File payload for a media create.

    Attributes:
        data: Raw file bytes
        filename: Original filename (used for the stored name and extension)
        mimetype: MIME type; guessed from the filename when None
    """

    data: bytes
    filename: str
    mimetype: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "UploadFile":
        """Read a file from disk into an UploadFile."""
        path = Path(path)
        mimetype, _ = mimetypes.guess_type(path.name)
        return cls(data=path.read_bytes(), filename=path.name, mimetype=mimetype)


class RecordStore:
    """
    Find/create/update/delete over the content collections.

    Attributes:
        db: ContentDB providing session scopes
        media_dir: Directory uploaded media files are written to
        hooks: Delete-hook registry
        logger: CmsLogger (or None)
    """

    def __init__(
        self,
        db: ContentDB,
        media_dir: Optional[Union[str, Path]] = None,
        hooks: Optional[HookRegistry] = None,
        logger: Optional[CmsLogger] = None,
    ) -> None:
        self.db = db
        self.media_dir = Path(media_dir) if media_dir else MEDIA_DIR
        self.logger = logger if logger is not None else db.logger
        self.hooks = hooks if hooks is not None else HookRegistry(self.logger)

    # =========================================================================
    # Queries
    # =========================================================================

    def find(
        self,
        collection: str,
        where: Where = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Query a collection.

        Args:
            collection: Collection name
            where: Equals/Contains predicate or list of predicates (AND)
            limit: Maximum number of docs returned; ``total`` is unaffected

        Returns:
            {"docs": [record dicts], "total": number of matches}

        Raises:
            ValidationError: Unknown collection or field, bad Contains value
            DatabaseError: Query failed
        """
        config = get_collection(collection)
        filters = as_filter_list(where)
        self._validate_filters(config, filters)
        if limit is not None and limit < 0:
            raise ValidationError(f"limit must be non-negative, got {limit}")

        with DatabaseOperation(self.logger, f"find_{collection}"):
            with self.db.session_scope() as session:
                if self._needs_membership_check(filters):
                    rows = self._select(session, config, filters)
                    total = len(rows)
                    if limit is not None:
                        rows = rows[:limit]
                else:
                    rows = self._select(session, config, filters, limit=limit)
                    total = (
                        self._count(session, config, filters)
                        if limit is not None
                        else len(rows)
                    )
                docs = [row.to_dict() for row in rows]

        return {"docs": docs, "total": total}

    def find_by_id(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one record by ID.

        Returns:
            The record dict, or None if it does not exist
        """
        config = get_collection(collection)
        DataValidator.validate_record_id(record_id)

        with DatabaseOperation(self.logger, f"get_{collection}"):
            with self.db.session_scope() as session:
                row = session.get(config.model_class, record_id)
                return row.to_dict() if row is not None else None

    def count(self, collection: str, where: Where = None) -> int:
        """
        Number of records matching ``where``.

        Runs a SQL COUNT unless a Contains filter needs exact confirmation.
        """
        config = get_collection(collection)
        filters = as_filter_list(where)
        self._validate_filters(config, filters)
        if self._needs_membership_check(filters):
            return self.find(collection, where)["total"]

        with DatabaseOperation(self.logger, f"count_{collection}"):
            with self.db.session_scope() as session:
                return self._count(session, config, filters)

    def _validate_filters(self, config: CollectionConfig, filters: List[Any]) -> None:
        known = config.field_names
        for predicate in filters:
            if not isinstance(predicate, (Equals, Contains)):
                raise ValidationError(f"Unsupported filter: {predicate!r}")
            if predicate.field not in known:
                raise ValidationError(
                    f"Unknown field '{predicate.field}' for '{config.name}'"
                )
            if isinstance(predicate, Contains):
                DataValidator.validate_record_id(predicate.value)

    @staticmethod
    def _needs_membership_check(filters: List[Any]) -> bool:
        return any(isinstance(p, Contains) for p in filters)

    @staticmethod
    def _conditions(config: CollectionConfig, filters: List[Any]) -> List[Any]:
        model = config.model_class
        conditions = []
        for predicate in filters:
            column = getattr(model, predicate.field)
            if isinstance(predicate, Equals):
                conditions.append(column == predicate.value)
            else:
                needle = json.dumps(predicate.value)
                conditions.append(
                    cast(column, String).contains(needle, autoescape=True)
                )
        return conditions

    def _count(
        self, session: Session, config: CollectionConfig, filters: List[Any]
    ) -> int:
        stmt = select(func.count()).select_from(config.model_class)
        for condition in self._conditions(config, filters):
            stmt = stmt.where(condition)
        return session.scalar(stmt) or 0

    def _select(
        self,
        session: Session,
        config: CollectionConfig,
        filters: List[Any],
        limit: Optional[int] = None,
    ) -> List[Any]:
        """
        Run the query; ``limit`` is only pushed into SQL by callers that
        have no Contains filter to confirm afterwards.
        """
        model = config.model_class
        stmt = select(model)
        for condition in self._conditions(config, filters):
            stmt = stmt.where(condition)
        stmt = stmt.order_by(model.created_at, model.id)
        if limit is not None:
            stmt = stmt.limit(limit)

        rows = list(session.scalars(stmt))
        contains = [p for p in filters if isinstance(p, Contains)]
        if contains:
            rows = [
                row
                for row in rows
                if all(
                    contains_reference(getattr(row, p.field), p.value) for p in contains
                )
            ]
        return rows

    # =========================================================================
    # Writes
    # =========================================================================

    def create(
        self,
        collection: str,
        data: Dict[str, Any],
        file: Optional[UploadFile] = None,
    ) -> Dict[str, Any]:
        """
        Create a record.

        Content collections get a slug derived from their source field when
        none is given. Media records may carry an UploadFile whose bytes are
        written under ``media_dir`` with a unique filename.

        Args:
            collection: Collection name
            data: Field values
            file: Upload payload (media only)

        Returns:
            The created record dict

        Raises:
            ValidationError: Unknown field, missing required field, bad value
            DatabaseError: Insert failed (e.g. duplicate slug)
        """
        config = get_collection(collection)
        values = dict(data)
        DataValidator.validate_known_fields(values, config.field_names, collection)
        if "id" in values:
            DataValidator.validate_record_id(values["id"])
        for name in ("created_at", "updated_at"):
            values.pop(name, None)

        if file is not None:
            if collection != "media":
                raise ValidationError(f"Collection '{collection}' does not accept files")
            values.update(self._file_values(file))

        if config.has_slug:
            slug = resolve_slug(values, config.slug_source)
            if slug:
                values["slug"] = slug

        self._normalize(config, values, drop_none=True)
        DataValidator.validate_required_fields(
            values, config.required_fields + (["slug"] if config.has_slug else [])
        )

        stored_path: Optional[Path] = None
        if file is not None:
            stored_path = self._write_media_file(values["filename"], file)

        try:
            with DatabaseOperation(
                self.logger, f"create_{collection}", details={"collection": collection}
            ):
                with self.db.session_scope() as session:
                    record = config.model_class(**values)
                    session.add(record)
                    session.flush()
                    doc = record.to_dict()
        except Exception:
            if stored_path is not None:
                stored_path.unlink(missing_ok=True)
            raise

        safe_logger(self.logger).log_info(
            f"Created {collection} record", {"id": doc["id"]}
        )
        return doc

    def update(
        self, collection: str, record_id: str, data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Partially update a record.

        Only the fields present in ``data`` are written.

        Returns:
            The updated record dict

        Raises:
            ValidationError: Unknown or read-only field, bad value
            RecordNotFoundError: No record with this ID
            DatabaseError: Update failed
        """
        config = get_collection(collection)
        DataValidator.validate_record_id(record_id)
        values = dict(data)
        DataValidator.validate_known_fields(values, config.field_names, collection)
        read_only = sorted(set(values) & set(READ_ONLY_FIELDS))
        if read_only:
            raise ValidationError(
                f"Read-only field(s) for '{collection}': {', '.join(read_only)}"
            )
        if config.has_slug and "slug" in values:
            values["slug"] = slugify(values["slug"] or "")
            DataValidator.validate_required_fields(values, ["slug"])
        self._normalize(config, values, drop_none=False)

        with DatabaseOperation(
            self.logger,
            f"update_{collection}",
            details={"collection": collection, "id": record_id},
        ):
            with self.db.session_scope() as session:
                record = session.get(config.model_class, record_id)
                if record is None:
                    raise RecordNotFoundError(collection, record_id)
                for name, value in values.items():
                    setattr(record, name, value)
                session.flush()
                return record.to_dict()

    def delete(
        self,
        collection: str,
        record_id: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Delete a record through the hook pipeline.

        Steps, each its own unit of work:
            1. Run before-delete hooks (a raising hook aborts the delete)
            2. Delete the record
            3. Run after-delete hooks

        Hooks see ``context`` itself, so whatever they add to it is visible
        to the caller afterwards.

        Returns:
            The record as it was before deletion

        Raises:
            RecordNotFoundError: No record with this ID
            DatabaseError: Delete failed
        """
        config = get_collection(collection)
        DataValidator.validate_record_id(record_id)

        doc = self.find_by_id(collection, record_id)
        if doc is None:
            raise RecordNotFoundError(collection, record_id)

        event = DeleteEvent(
            collection=collection,
            record_id=record_id,
            store=self,
            context=context if context is not None else {},
            doc=doc,
        )
        self.hooks.run_before_delete(event)

        with DatabaseOperation(
            self.logger,
            f"delete_{collection}",
            details={"collection": collection, "id": record_id},
        ):
            with self.db.session_scope() as session:
                record = session.get(config.model_class, record_id)
                if record is None:
                    raise RecordNotFoundError(collection, record_id)
                session.delete(record)

        if collection == "media":
            (self.media_dir / doc["filename"]).unlink(missing_ok=True)

        self.hooks.run_after_delete(event)
        return doc

    # =========================================================================
    # Helpers
    # =========================================================================

    def _normalize(
        self, config: CollectionConfig, values: Dict[str, Any], drop_none: bool
    ) -> None:
        """Apply field normalizers in place; optionally drop fields left at None."""
        for name, normalizer in config.normalizers.items():
            if name in values:
                values[name] = normalizer(values[name])

        if drop_none:
            for name in [k for k, v in values.items() if v is None]:
                del values[name]

        for name in config.relationships:
            if name in values and not isinstance(values[name], list):
                raise ValidationError(
                    f"Relationship field '{name}' must be a list, "
                    f"got {type(values[name]).__name__}"
                )

    def _file_values(self, file: UploadFile) -> Dict[str, Any]:
        filename = self._unique_filename(file.filename)
        mimetype = file.mimetype or mimetypes.guess_type(file.filename)[0]
        return {
            "filename": filename,
            "mime_type": mimetype,
            "filesize": file.size,
            "url": f"/media/{filename}",
        }

    def _unique_filename(self, original: str) -> str:
        """
        Sanitize a filename and make it unique inside ``media_dir``.

        ``photo.jpg`` becomes ``photo-1.jpg``, ``photo-2.jpg``... on clashes.
        """
        path = Path(original)
        stem = slugify(path.stem) or "file"
        suffix = re.sub(r"[^a-z0-9.]", "", path.suffix.lower())

        candidate = f"{stem}{suffix}"
        counter = 1
        while (self.media_dir / candidate).exists():
            candidate = f"{stem}-{counter}{suffix}"
            counter += 1
        return candidate

    def _write_media_file(self, filename: str, file: UploadFile) -> Path:
        self.media_dir.mkdir(parents=True, exist_ok=True)
        target = self.media_dir / filename
        target.write_bytes(file.data)
        return target
