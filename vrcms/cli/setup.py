"""
Setup & Initialization Commands
--------------------------------

Commands:
    - init: Create a fresh schema or upgrade an existing one
"""
import click

from vrcms.core.exceptions import DatabaseError
from vrcms.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.pass_context
def init(ctx):
    """Create or upgrade the database schema."""
    try:
        click.echo("🗄️  Initializing database schema...")
        db = get_db(ctx)
        db.initialize_schema()

        history = db.get_migration_history()
        revision = history.get("current_revision") or "none (alembic not configured)"
        click.echo(f"✅ Database ready: {db.db_path}")
        click.echo(f"   Schema revision: {revision}")

    except DatabaseError as e:
        handle_cli_error(ctx, e, "init")
