"""
Seeding Package
---------------

Idempotent seeding of content collections from YAML files.

Modules:
    - loader: Parse seed YAML files
    - media: UploadCache and MediaUploader (asset resolution + upload)
    - upsert: SeedUpserter, SeedOutcome

Usage:
    from vrcms.seed import SeedUpserter, MediaUploader, UploadCache, load_seed_file
"""
from .loader import SeedFile, default_seed_file, load_seed_file
from .media import MediaUploader, UploadCache
from .upsert import SeedOutcome, SeedUpserter

__all__ = [
    "SeedFile",
    "default_seed_file",
    "load_seed_file",
    "MediaUploader",
    "UploadCache",
    "SeedOutcome",
    "SeedUpserter",
]
