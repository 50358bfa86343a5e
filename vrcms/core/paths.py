#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the VRC content backend.

All paths are Path objects relative to the project root. CLI options can
override any of them at runtime.

The project structure:
    ROOT/
    ├── vrcms/         # Backend package
    ├── data/          # SQLite database and uploaded media
    ├── assets/        # Frontend images used by seed scripts
    └── logs/          # Application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import List


def _get_project_root() -> Path:
    """
    Determine the project root directory.

    Assumes this file is at ROOT/vrcms/core/paths.py.

    Returns:
        Path object for project root
    """
    # paths.py -> core/ -> vrcms/ -> ROOT/
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = ROOT / "vrcms"
DATA_DIR = ROOT / "data"

# ---- Database ----
DB_PATH = DATA_DIR / "vrcms.db"
ALEMBIC_DIR = PACKAGE_DIR / "migrations"
ALEMBIC_INI = ROOT / "alembic.ini"

# ---- Media ----
MEDIA_DIR = DATA_DIR / "media"

# ---- Seed assets ----
SEED_DATA_DIR = PACKAGE_DIR / "seed" / "data"
ASSETS_DIR = ROOT / "assets"
ASSET_IMAGES_DIR = ASSETS_DIR / "images"
ASSET_SVG_DIR = ASSETS_DIR / "svg"
ASSET_UPLOADS_DIR = ASSETS_DIR / "uploads"
DEFAULT_IMAGE = "projects-overview.jpg"

# ---- Logs ----
LOG_DIR = ROOT / "logs"


def asset_search_paths(assets_dir: Path = ASSETS_DIR) -> List[Path]:
    """
    Directories searched, in order, when resolving a seed image filename.

    Args:
        assets_dir: Base assets directory

    Returns:
        Ordered list of candidate directories
    """
    return [
        assets_dir / "images",
        assets_dir / "svg",
        assets_dir / "uploads",
        assets_dir,
    ]
