#!/usr/bin/env python3
"""
VRC Content Backend CLI
-----------------------

Command-line interface for the content database.

This module provides the main CLI group and the shared context setup for
all commands.

Command Structure:
    - Setup (init)
    - Seeding (seed services)
    - Records (delete)
    - Integrity (integrity check)

Usage:
    # Create or upgrade the schema
    vrcms init

    # Seed the official services (safe to re-run)
    vrcms seed services

    # Delete a record; references to it are cleaned up
    vrcms delete products 3f2a...

    # Audit relationship fields, optionally repairing them
    vrcms integrity check --fix
"""
from __future__ import annotations

import logging
from pathlib import Path

import click

from vrcms.core.cli import setup_logger
from vrcms.core.paths import ALEMBIC_DIR, ASSETS_DIR, DB_PATH, LOG_DIR, MEDIA_DIR
from vrcms.database import ContentDB, RecordStore
from vrcms.integrity import register_default_hooks


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=str(DB_PATH),
    help="Path to database file",
)
@click.option(
    "--alembic-dir",
    type=click.Path(),
    default=str(ALEMBIC_DIR),
    help="Path to Alembic directory",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Path to log directory",
)
@click.option(
    "--media-dir",
    type=click.Path(),
    default=str(MEDIA_DIR),
    help="Directory uploaded media files are stored in",
)
@click.option(
    "--assets-dir",
    type=click.Path(),
    default=str(ASSETS_DIR),
    help="Directory seed images are looked up in",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, alembic_dir, log_dir, media_dir, assets_dir, verbose):
    """VRC Content Backend CLI"""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["db_path"] = Path(db_path)
    ctx.obj["alembic_dir"] = Path(alembic_dir)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["media_dir"] = Path(media_dir)
    ctx.obj["assets_dir"] = Path(assets_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "cli")


def get_db(ctx) -> ContentDB:
    """Get or create database instance from context."""
    if "db" not in ctx.obj:
        alembic_dir = ctx.obj["alembic_dir"]
        ctx.obj["db"] = ContentDB(
            db_path=ctx.obj["db_path"],
            alembic_dir=alembic_dir if alembic_dir.is_dir() else None,
            log_dir=ctx.obj["log_dir"],
        )
    return ctx.obj["db"]


def get_store(ctx) -> RecordStore:
    """Get or create the record store, with the default delete hooks installed."""
    if "store" not in ctx.obj:
        logger = ctx.obj["logger"]
        store = RecordStore(get_db(ctx), media_dir=ctx.obj["media_dir"], logger=logger)
        register_default_hooks(store.hooks, logger)
        ctx.obj["store"] = store
    return ctx.obj["store"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .seed import seed  # noqa: E402
from .records import delete  # noqa: E402
from .integrity import integrity  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(delete)

# Register command groups
cli.add_command(seed)
cli.add_command(integrity)


if __name__ == "__main__":
    cli(obj={})
