#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the VRC content backend.

Provides the ContentDB class that owns the SQLite engine, the session
factory and the Alembic configuration.

Handles:
    - Initialization of the database engine and sessionmaker
    - Transactional session scopes with automatic rollback
    - Schema creation for fresh databases (stamped at Alembic head)
    - Migration management via Alembic for existing databases

Record-level operations (find/create/update/delete with hooks) live in
vrcms.database.store.RecordStore, which is built on top of ContentDB.

Usage:
    db = ContentDB("data/vrcms.db", alembic_dir="vrcms/migrations")
    with db.session_scope() as session:
        session.add(Service(title="Tư vấn thiết kế", slug="tu-van-thiet-ke"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

# --- Third party imports ---
from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy import Engine, create_engine, inspect
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from vrcms.core.exceptions import DatabaseError
from vrcms.core.logging_manager import CmsLogger, safe_logger
from vrcms.core.paths import ALEMBIC_INI

from .decorators import handle_db_errors, log_database_operation
from .models import Base


class ContentDB:
    """
    Engine, session and migration manager for the content database.

    Attributes:
        db_path: Filesystem path to the SQLite database file
        alembic_dir: Alembic script directory, or None to manage the
            schema from the ORM metadata alone
        engine: SQLAlchemy engine instance
        SessionLocal: SQLAlchemy session factory
        logger: CmsLogger (or None)

    Usage:
        db = ContentDB("~/vrc/vrcms.db", alembic_dir=paths.ALEMBIC_DIR)
        with db.session_scope() as session:
            count = session.query(Product).count()
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        alembic_dir: Optional[Union[str, Path]] = None,
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[CmsLogger] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            db_path: Path to the SQLite file
            alembic_dir: Path to the Alembic directory (optional)
            log_dir: Directory for log files (optional)
            logger: Pre-built logger, takes precedence over log_dir
        """
        self.db_path = Path(db_path).expanduser().resolve()
        self.alembic_dir = (
            Path(alembic_dir).expanduser().resolve() if alembic_dir else None
        )

        # --- Logging ---
        if logger is not None:
            self.logger: Optional[CmsLogger] = logger
        elif log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve() / "system"
            self.logger = CmsLogger(self.log_dir, component_name="database")
        else:
            self.logger = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        log = safe_logger(self.logger)
        try:
            log.log_operation(
                "database_init_start",
                {
                    "db_path": str(self.db_path),
                    "alembic_dir": str(self.alembic_dir) if self.alembic_dir else None,
                },
            )

            is_new_file = not self.db_path.exists()
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                future=True,
                pool_pre_ping=True,
            )

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
                future=True,
            )

            self.alembic_cfg: Optional[Config] = (
                self._setup_alembic() if self.alembic_dir else None
            )

            if is_new_file:
                self.initialize_schema()

            log.log_operation("database_init_complete", {"success": True})

        except DatabaseError:
            raise
        except Exception as e:
            log.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around a unit of work.

        Commits on success, rolls back and re-raises on any exception,
        always closes the session.

        Usage:
            with db.session_scope() as session:
                session.add(product)
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        log = safe_logger(self.logger)

        log.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            log.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            log.log_error(
                e, {"operation": "session_rollback", "session_id": session_id}
            )
            raise
        finally:
            session.close()
            log.log_debug("session_close", {"session_id": session_id})

    # ---- Alembic setup ----
    def _setup_alembic(self) -> Config:
        """Setup Alembic configuration."""
        log = safe_logger(self.logger)
        try:
            log.log_debug("Setting up Alembic configuration...")

            if ALEMBIC_INI.exists():
                alembic_cfg = Config(str(ALEMBIC_INI))
            else:
                alembic_cfg = Config()
            alembic_cfg.set_main_option("script_location", str(self.alembic_dir))
            alembic_cfg.set_main_option("sqlalchemy.url", f"sqlite:///{self.db_path}")

            log.log_debug("Alembic configuration setup complete")
            return alembic_cfg
        except Exception as e:
            log.log_error(e, {"operation": "setup_alembic"})
            raise DatabaseError(f"Alembic configuration failed: {e}") from e

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """
        Initialize database: create tables if needed, or run migrations.

        Actions:
            Checks if the database is fresh (no tables)
            If fresh,
                creates all tables from the ORM models
                stamps the Alembic revision to head
            If not,
                runs pending migrations to update schema
        """
        log = safe_logger(self.logger)
        try:
            table_names = inspect(self.engine).get_table_names()
            is_fresh_db = len(table_names) == 0

            if is_fresh_db:
                Base.metadata.create_all(bind=self.engine)
                log.log_operation(
                    "fresh_database_created",
                    {"tables_created": len(Base.metadata.tables)},
                )
                if self.alembic_cfg is not None:
                    try:
                        command.stamp(self.alembic_cfg, "head")
                    except Exception as e:
                        log.log_error(e, {"operation": "stamp_database"})
            elif self.alembic_cfg is not None:
                self.upgrade_database()
                log.log_operation(
                    "existing_database_migrated",
                    {"table_count": len(table_names)},
                )
            else:
                # No migration scripts: only add tables that are missing
                Base.metadata.create_all(bind=self.engine)

        except DatabaseError:
            raise
        except Exception as e:
            raise DatabaseError(f"Could not initialize database: {e}") from e

    @handle_db_errors
    @log_database_operation("upgrade_database")
    def upgrade_database(self, revision: str = "head") -> None:
        """
        Upgrade the database schema to the specified Alembic revision.

        Args:
            revision: Target revision (default: 'head')
        """
        if self.alembic_cfg is None:
            raise DatabaseError("Alembic is not configured for this database")
        try:
            command.upgrade(self.alembic_cfg, revision)
        except Exception as e:
            raise DatabaseError(f"Database upgrade failed: {e}") from e

    def get_migration_history(self) -> Dict[str, Optional[str]]:
        """
        Get the current migration status of the database.

        Returns:
            Dictionary with keys:
                - 'current_revision': Current Alembic revision or None
                - 'status': 'up_to_date' or 'needs_migration'
                - 'error': Present if an exception occurred
        """
        try:
            with self.engine.connect() as conn:
                context = MigrationContext.configure(conn)
                current_rev = context.get_current_revision()

            return {
                "current_revision": current_rev,
                "status": "up_to_date" if current_rev else "needs_migration",
            }
        except Exception as e:
            safe_logger(self.logger).log_error(
                e, {"operation": "get_migration_history"}
            )
            return {"error": str(e)}

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    def __enter__(self) -> "ContentDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()
