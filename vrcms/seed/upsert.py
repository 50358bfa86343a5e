#!/usr/bin/env python3
"""
upsert.py
---------
Idempotent seeding keyed by slug.

For every item:
    1. Look the slug up (exact match, limit 1)
    2. Existing  -> SKIPPED: nothing uploaded, nothing written
    3. Otherwise upload the item's image (cached per run, default asset
       fallback) and create the record, omitting the image field when no
       media could be uploaded. A media record uploaded for an item whose
       create then fails is deleted again
    4. CREATED on success, FAILED on any error

A failed existence check counts as FAILED rather than "not found", so a
flaky store never produces duplicates.

Usage:
    upserter = SeedUpserter(store, uploader, logger)
    stats = upserter.seed_batch("services", items)
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

# --- Local imports ---
from vrcms.core.cli import SeedStats
from vrcms.core.logging_manager import CmsLogger, safe_logger
from vrcms.database.collections import get_collection
from vrcms.database.filters import Equals
from vrcms.utils.slugify import resolve_slug

from .media import MediaUploader

if TYPE_CHECKING:
    from vrcms.database.store import RecordStore

# Collection -> field holding the uploaded media ID
IMAGE_FIELDS: Dict[str, str] = {
    "services": "featured_image",
    "products": "main_image",
}

IMAGE_KEY = "image"


class SeedOutcome(str, Enum):
    """Result of seeding one item."""

    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


class SeedUpserter:
    """
    Create seed records that do not exist yet.

    Attributes:
        store: RecordStore
        uploader: MediaUploader (None disables image upload)
        logger: CmsLogger (or None)
    """

    def __init__(
        self,
        store: "RecordStore",
        uploader: Optional[MediaUploader] = None,
        logger: Optional[CmsLogger] = None,
    ) -> None:
        self.store = store
        self.uploader = uploader
        self.logger = logger

    def exists(self, collection: str, slug: str) -> bool:
        """
        Whether a record with this slug exists.

        Raises:
            Whatever the store raises; callers decide how to count it
        """
        result = self.store.find(collection, Equals("slug", slug), limit=1)
        return len(result["docs"]) > 0

    def seed_item(self, collection: str, item: Dict[str, Any]) -> SeedOutcome:
        """
        Seed one item.

        Args:
            collection: Target collection
            item: Field values plus an optional ``image`` filename

        Returns:
            SeedOutcome
        """
        log = safe_logger(self.logger)
        data = dict(item)
        image = data.pop(IMAGE_KEY, None)

        try:
            config = get_collection(collection)
            slug = resolve_slug(data, config.slug_source)
            if not slug:
                log.log_warning(
                    "Seed item has no slug and nothing to derive one from",
                    {"collection": collection},
                )
                return SeedOutcome.FAILED
            data["slug"] = slug

            if self.exists(collection, slug):
                log.log_info(
                    f"{collection} '{slug}' already exists, skipping",
                )
                return SeedOutcome.SKIPPED
        except Exception as e:
            log.log_error(
                e,
                {"operation": "seed_exists_check", "collection": collection, "item": item.get("slug")},
            )
            return SeedOutcome.FAILED

        image_field = IMAGE_FIELDS.get(collection)
        fresh_upload = None
        if image and image_field and self.uploader is not None:
            uploads_before = self.uploader.uploaded
            media_id = self.uploader.upload(image, alt=f"Featured image for {slug}")
            if media_id:
                data[image_field] = media_id
                if self.uploader.uploaded > uploads_before:
                    fresh_upload = media_id

        try:
            doc = self.store.create(collection, data)
        except Exception as e:
            log.log_error(e, {"operation": "seed_create", "collection": collection, "slug": slug})
            # Cached uploads may already back earlier records
            if fresh_upload is not None:
                self.uploader.discard(fresh_upload)
            return SeedOutcome.FAILED

        log.log_operation(
            "seed_item_created",
            {
                "collection": collection,
                "slug": slug,
                "id": doc["id"],
                "image": data.get(image_field) if image_field else None,
            },
        )
        return SeedOutcome.CREATED

    def seed_batch(
        self, collection: str, items: Iterable[Dict[str, Any]]
    ) -> SeedStats:
        """
        Seed items in order.

        Returns:
            SeedStats with created/skipped/failed counts
        """
        stats = SeedStats()
        uploads_before = self.uploader.uploaded if self.uploader else 0

        for item in items:
            stats.items_processed += 1
            outcome = self.seed_item(collection, item)
            if outcome is SeedOutcome.CREATED:
                stats.created += 1
            elif outcome is SeedOutcome.SKIPPED:
                stats.skipped += 1
            else:
                stats.failed += 1
                stats.errors += 1

        if self.uploader:
            stats.media_uploaded = self.uploader.uploaded - uploads_before

        safe_logger(self.logger).log_operation(
            f"seed_{collection}_complete", stats.to_dict()
        )
        return stats
