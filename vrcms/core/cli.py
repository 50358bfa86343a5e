#!/usr/bin/env python3
"""
cli.py
------
Shared CLI helpers and statistics for vrcms commands.

Functions:
    setup_logger: Initialize a CmsLogger for a CLI component

Classes:
    OperationStats: Base class for all statistics
    SeedStats: Created/skipped/failed counts of a seed batch
    IntegrityStats: Results of a dangling-reference audit

Usage:
    from vrcms.core.cli import setup_logger, SeedStats

    logger = setup_logger(log_dir, "seed")
    stats = SeedStats()
    stats.created += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from vrcms.core.logging_manager import CmsLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> CmsLogger:
    """
    Setup logging for CLI operations.

    Args:
        log_dir: Base log directory (typically paths.LOG_DIR)
        component_name: Component identifier (e.g. 'seed', 'integrity')

    Returns:
        Configured CmsLogger writing under ``log_dir/operations``
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return CmsLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        items_processed: Number of items looked at
        errors: Number of errors encountered
        start_time: Operation start timestamp
    """
    items_processed: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        if self.items_processed < 0:
            raise ValueError(f"items_processed must be non-negative, got {self.items_processed}")
        if self.errors < 0:
            raise ValueError(f"errors must be non-negative, got {self.errors}")

    def duration(self) -> float:
        """Elapsed seconds since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        """Human-readable summary."""
        return (
            f"{self.items_processed} items processed, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary form for JSON output and log details."""
        return {
            "items_processed": self.items_processed,
            "errors": self.errors,
            "duration": self.duration(),
        }


@dataclass
class SeedStats(OperationStats):
    """
    Statistics for a seed batch.

    Purely observational: nothing branches on these counts.

    Attributes:
        created: Records created
        skipped: Records whose slug already existed
        failed: Records that could not be created
        media_uploaded: Assets uploaded (cache hits excluded)
    """
    created: int = 0
    skipped: int = 0
    failed: int = 0
    media_uploaded: int = 0

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        super().__post_init__()
        for name in ("created", "skipped", "failed", "media_uploaded"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    def summary(self) -> str:
        """Formatted summary with seed metrics."""
        return (
            f"{self.created} created, "
            f"{self.skipped} skipped, "
            f"{self.failed} failed, "
            f"{self.media_uploaded} media uploaded, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "created": self.created,
            "skipped": self.skipped,
            "failed": self.failed,
            "media_uploaded": self.media_uploaded,
        })
        return d


@dataclass
class IntegrityStats(OperationStats):
    """
    Statistics for a dangling-reference audit.

    Attributes:
        dangling_found: Relationship entries pointing at missing records
        records_repaired: Records rewritten by --fix
    """
    dangling_found: int = 0
    records_repaired: int = 0

    def summary(self) -> str:
        """Formatted summary with audit metrics."""
        return (
            f"{self.items_processed} records scanned, "
            f"{self.dangling_found} dangling references, "
            f"{self.records_repaired} repaired, "
            f"{self.errors} errors"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "dangling_found": self.dangling_found,
            "records_repaired": self.records_repaired,
        })
        return d
