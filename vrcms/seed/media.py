#!/usr/bin/env python3
"""
media.py
--------
Asset resolution and media upload for seeding.

A seed item names an image by filename. MediaUploader looks for it in the
asset search paths, falls back to the default asset when it is missing, and
uploads it into the ``media`` collection. Uploads go through an UploadCache
so one source file becomes one media record per seeding run, however many
items reference it.

Nothing here raises on a missing or broken asset: the uploader returns None
and the item is created without its image.

Usage:
    cache = UploadCache()
    uploader = MediaUploader(store, asset_search_paths(), cache=cache)
    media_id = uploader.upload("vrc-post-he-thong.jpg", alt="Featured image")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

# --- Local imports ---
from vrcms.core.exceptions import MediaUploadError
from vrcms.core.logging_manager import CmsLogger, safe_logger
from vrcms.core.paths import DEFAULT_IMAGE
from vrcms.database.store import UploadFile

if TYPE_CHECKING:
    from vrcms.database.store import RecordStore

DEFAULT_MIME_TYPE = "application/octet-stream"


class UploadCache:
    """
    Resolved source path -> media record ID, for one seeding run.

    Create a fresh cache per run; it is never shared between runs.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    @staticmethod
    def _key(path: Path) -> str:
        return str(Path(path).resolve())

    def get(self, path: Path) -> Optional[str]:
        return self._entries.get(self._key(path))

    def put(self, path: Path, media_id: str) -> None:
        self._entries[self._key(path)] = media_id

    def __contains__(self, path: object) -> bool:
        return isinstance(path, Path) and self._key(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def discard(self, media_id: str) -> None:
        """Forget every path that maps to ``media_id``."""
        for key in [k for k, v in self._entries.items() if v == media_id]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()


class MediaUploader:
    """
    Resolve seed assets and upload them as media records.

    Attributes:
        store: RecordStore to create media records in
        search_paths: Directories searched in order
        default_asset: Filename used when the requested one is missing
        cache: UploadCache of this run
        uploaded: Number of real uploads (cache hits excluded)
    """

    def __init__(
        self,
        store: "RecordStore",
        search_paths: Iterable[Path],
        default_asset: Optional[str] = DEFAULT_IMAGE,
        cache: Optional[UploadCache] = None,
        logger: Optional[CmsLogger] = None,
    ) -> None:
        self.store = store
        self.search_paths: List[Path] = [Path(p) for p in search_paths]
        self.default_asset = default_asset
        self.cache = cache if cache is not None else UploadCache()
        self.logger = logger
        self.uploaded = 0

    # ---- Resolution ----
    def find_asset(self, filename: str) -> Optional[Path]:
        """First existing ``<search_path>/<filename>``, or None."""
        for directory in self.search_paths:
            candidate = directory / filename
            if candidate.is_file():
                return candidate.resolve()
        return None

    def resolve(self, filename: Optional[str]) -> Optional[Path]:
        """
        Resolve an asset, falling back to the default asset.

        Returns:
            Path of the file to upload, or None if neither exists
        """
        log = safe_logger(self.logger)

        if filename:
            found = self.find_asset(filename)
            if found is not None:
                return found
            log.log_warning(f"Asset not found: {filename}")

        if self.default_asset:
            fallback = self.find_asset(self.default_asset)
            if fallback is not None:
                log.log_info(
                    "Using default asset",
                    {"requested": filename, "default": self.default_asset},
                )
                return fallback
            log.log_warning(f"Default asset not found: {self.default_asset}")

        return None

    # ---- Upload ----
    def upload(self, filename: Optional[str], alt: Optional[str] = None) -> Optional[str]:
        """
        Upload an asset (or reuse this run's earlier upload of it).

        Args:
            filename: Asset filename from the seed item
            alt: Alt text for the media record

        Returns:
            Media record ID, or None if nothing could be uploaded
        """
        log = safe_logger(self.logger)
        path = self.resolve(filename)
        if path is None:
            return None

        cached = self.cache.get(path)
        if cached is not None:
            log.log_debug("Upload cache hit", {"path": str(path), "media_id": cached})
            return cached

        try:
            media_id = self._create_media(path, alt)
        except Exception as e:
            error = MediaUploadError(f"Could not upload {path.name}: {e}")
            error.__cause__ = e
            log.log_error(error, {"operation": "upload_media", "path": str(path)})
            return None

        self.cache.put(path, media_id)
        self.uploaded += 1
        log.log_operation("media_uploaded", {"path": str(path), "media_id": media_id})
        return media_id

    def discard(self, media_id: str) -> None:
        """
        Delete a media record this run uploaded but no record ended up using.

        The record is also dropped from the cache and from ``uploaded``.
        Failures are logged, never raised.
        """
        log = safe_logger(self.logger)
        try:
            self.store.delete("media", media_id)
        except Exception as e:
            error = MediaUploadError(f"Could not remove unused media {media_id}: {e}")
            error.__cause__ = e
            log.log_error(error, {"operation": "discard_media", "media_id": media_id})
            return
        self.cache.discard(media_id)
        self.uploaded -= 1
        log.log_operation("media_discarded", {"media_id": media_id})

    def _create_media(self, path: Path, alt: Optional[str]) -> str:
        mimetype = mimetypes.guess_type(path.name)[0] or DEFAULT_MIME_TYPE
        upload = UploadFile(data=path.read_bytes(), filename=path.name, mimetype=mimetype)
        doc = self.store.create("media", {"alt": alt or path.stem}, file=upload)
        media_id = doc.get("id")
        if not media_id:
            raise MediaUploadError(f"Media record for {path.name} has no ID")
        return media_id
