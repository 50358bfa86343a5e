#!/usr/bin/env python3
"""
loader.py
---------
Load seed data files.

A seed file is YAML with a target collection, an optional default image and
a list of items:

    collection: services
    default_image: projects-overview.jpg
    items:
      - title: Tư vấn thiết kế
        slug: tu-van-thiet-ke
        image: vrc-post-he-thong-quan-ly-nang-luong-thong-minh.jpg
        ...

Usage:
    seed = load_seed_file(SEED_DATA_DIR / "services.yaml")
    upserter.seed_batch(seed.collection, seed.items)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from vrcms.core.exceptions import SeedError
from vrcms.core.paths import SEED_DATA_DIR


@dataclass
class SeedFile:
    """Parsed seed file."""

    collection: str
    items: List[Dict[str, Any]] = field(default_factory=list)
    default_image: Optional[str] = None
    source: Optional[Path] = None


def load_seed_file(path: Union[str, Path]) -> SeedFile:
    """
    Parse a seed YAML file.

    Args:
        path: File to read

    Returns:
        SeedFile

    Raises:
        SeedError: Missing file, invalid YAML or wrong structure
    """
    path = Path(path)
    if not path.is_file():
        raise SeedError(f"Seed file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise SeedError(f"Invalid YAML in {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise SeedError(f"Seed file {path.name} must contain a mapping")

    collection = data.get("collection")
    if not isinstance(collection, str) or not collection:
        raise SeedError(f"Seed file {path.name} does not name a collection")

    items = data.get("items") or []
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise SeedError(f"'items' in {path.name} must be a list of mappings")

    return SeedFile(
        collection=collection,
        items=items,
        default_image=data.get("default_image"),
        source=path,
    )


def default_seed_file(name: str) -> Path:
    """Path of a seed file shipped with the package, e.g. 'services'."""
    return SEED_DATA_DIR / f"{name}.yaml"
