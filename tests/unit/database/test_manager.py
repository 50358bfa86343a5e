"""
Tests for ContentDB engine, session and schema management.
"""
import pytest
from pathlib import Path

from sqlalchemy import inspect, select

from vrcms.core.exceptions import DatabaseError
from vrcms.database.manager import ContentDB
from vrcms.database.models import Product, Service

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "vrcms" / "migrations"


class TestContentDBInit:
    """Test database initialization."""

    def test_fresh_database_gets_all_tables(self, test_db):
        tables = set(inspect(test_db.engine).get_table_names())
        assert {"media", "products", "tools", "services"} <= tables

    def test_creates_parent_directory(self, tmp_dir):
        db = ContentDB(tmp_dir / "nested" / "dir" / "vrcms.db")
        try:
            assert db.db_path.exists()
        finally:
            db.dispose()

    def test_reopening_existing_database(self, test_db_path):
        first = ContentDB(test_db_path)
        with first.session_scope() as session:
            session.add(Product(name="Chiller", slug="chiller"))
        first.dispose()

        second = ContentDB(test_db_path)
        try:
            with second.session_scope() as session:
                assert session.scalars(select(Product)).one().slug == "chiller"
        finally:
            second.dispose()

    def test_without_alembic_history_is_empty(self, test_db):
        assert test_db.alembic_cfg is None
        history = test_db.get_migration_history()
        assert history["current_revision"] is None
        assert history["status"] == "needs_migration"

    def test_upgrade_without_alembic_raises(self, test_db):
        with pytest.raises(DatabaseError, match="not configured"):
            test_db.upgrade_database()

    @pytest.mark.skipif(not MIGRATIONS_DIR.is_dir(), reason="migrations not available")
    def test_fresh_database_is_stamped_at_head(self, test_db_path):
        db = ContentDB(test_db_path, alembic_dir=MIGRATIONS_DIR)
        try:
            history = db.get_migration_history()
            assert history["current_revision"] == "7c1e4b2a9d01"
            assert history["status"] == "up_to_date"
        finally:
            db.dispose()

    def test_context_manager_disposes(self, test_db_path):
        with ContentDB(test_db_path) as db:
            assert db.engine is not None


class TestSessionScope:
    """Test transactional session scope."""

    def test_commits_on_success(self, test_db):
        with test_db.session_scope() as session:
            session.add(Service(title="Tư vấn thiết kế", slug="tu-van-thiet-ke"))

        with test_db.session_scope() as session:
            assert session.scalars(select(Service)).one().slug == "tu-van-thiet-ke"

    def test_rolls_back_on_error(self, test_db):
        with pytest.raises(RuntimeError):
            with test_db.session_scope() as session:
                session.add(Service(title="Bảo trì", slug="bao-tri"))
                session.flush()
                raise RuntimeError("abort")

        with test_db.session_scope() as session:
            assert session.scalars(select(Service)).all() == []

    def test_logs_rollback(self, test_db_path, mock_logger):
        db = ContentDB(test_db_path, logger=mock_logger)
        try:
            with pytest.raises(RuntimeError):
                with db.session_scope():
                    raise RuntimeError("abort")
            contexts = [c.args[1] for c in mock_logger.log_error.call_args_list]
            assert any(c.get("operation") == "session_rollback" for c in contexts)
        finally:
            db.dispose()
