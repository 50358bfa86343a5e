"""
conftest.py
-----------
Shared pytest fixtures for the VRC content backend tests.

Provides fixtures for:
- Temporary directories and database paths
- A ContentDB with the schema created from the ORM metadata
- RecordStore instances with and without the default delete hooks
- Asset directories with small image files for seeding
- Record factories
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def media_dir(tmp_dir):
    """Directory uploaded media files are written to."""
    return tmp_dir / "media"


@pytest.fixture
def assets_dir(tmp_dir):
    """
    Asset tree mirroring the frontend layout.

    assets/images holds one mapped service image and the default image;
    every other seed image is missing.
    """
    root = tmp_dir / "assets"
    images = root / "images"
    images.mkdir(parents=True)
    (root / "svg").mkdir()
    (root / "uploads").mkdir()
    (images / "vrc-post-he-thong-quan-ly-nang-luong-thong-minh.jpg").write_bytes(
        b"\xff\xd8\xff\xe0 mapped image"
    )
    (images / "projects-overview.jpg").write_bytes(b"\xff\xd8\xff\xe0 default image")
    return root


# ----- Logger Fixtures -----

@pytest.fixture
def mock_logger():
    """MagicMock constrained to the CmsLogger interface."""
    from vrcms.core.logging_manager import CmsLogger
    return MagicMock(spec=CmsLogger)


# ----- Test Database Fixtures -----

@pytest.fixture
def test_db(test_db_path):
    """
    Create test database instance with schema.

    Alembic is not configured; the schema comes from the ORM metadata.
    """
    from vrcms.database.manager import ContentDB

    db = ContentDB(db_path=test_db_path)

    yield db

    db.dispose()


@pytest.fixture
def db_session(test_db):
    """Provide a session inside a transactional scope."""
    with test_db.session_scope() as session:
        yield session


@pytest.fixture
def store(test_db, media_dir):
    """RecordStore without any delete hooks."""
    from vrcms.database.store import RecordStore
    return RecordStore(test_db, media_dir=media_dir)


@pytest.fixture
def hooked_store(test_db, media_dir):
    """RecordStore with the website's default delete hooks."""
    from vrcms.database.store import RecordStore
    from vrcms.integrity.delete_hooks import register_default_hooks

    store = RecordStore(test_db, media_dir=media_dir)
    register_default_hooks(store.hooks)
    return store


# ----- Record Factories -----

@pytest.fixture
def make_product(store):
    """Create a product; relationship entries are stored exactly as given."""
    counter = {"n": 0}

    def _make(related=None, **fields):
        counter["n"] += 1
        data = {"name": f"Product {counter['n']}"}
        data.update(fields)
        if related is not None:
            data["related_products"] = related
        return store.create("products", data)

    return _make


@pytest.fixture
def make_tool(store):
    """Create a tool with optional related_tools entries."""
    counter = {"n": 0}

    def _make(related=None, **fields):
        counter["n"] += 1
        data = {"name": f"Tool {counter['n']}"}
        data.update(fields)
        if related is not None:
            data["related_tools"] = related
        return store.create("tools", data)

    return _make


@pytest.fixture
def service_items():
    """Two seed items, one with a resolvable image and one without."""
    return [
        {
            "title": "Tư vấn thiết kế",
            "slug": "tu-van-thiet-ke",
            "type": "consulting",
            "image": "vrc-post-he-thong-quan-ly-nang-luong-thong-minh.jpg",
            "status": "published",
        },
        {
            "title": "Bảo trì định kỳ",
            "slug": "bao-tri-dinh-ky",
            "type": "maintenance",
            "image": "vrc-post-khoa-dao-tao-ky-thuat-vien-bao-tri.jpeg",
            "status": "published",
        },
    ]
