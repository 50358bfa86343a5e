"""
Integrity Commands
------------------

Commands:
    - integrity check: Report (and optionally repair) dangling references
"""
import click

from vrcms.core.exceptions import DatabaseError, ValidationError
from vrcms.core.logging_manager import handle_cli_error
from vrcms.database import collection_names
from vrcms.integrity import audit_references
from . import get_store


@click.group()
def integrity():
    """Reference integrity tools."""
    pass


@integrity.command()
@click.option(
    "--collection",
    type=click.Choice(collection_names()),
    default=None,
    help="Only audit this collection",
)
@click.option("--fix", is_flag=True, help="Remove dangling references")
@click.pass_context
def check(ctx, collection, fix):
    """Find relationship entries pointing at deleted records."""
    try:
        store = get_store(ctx)
        click.echo("🔍 Checking relationship fields...")
        stats, dangling = audit_references(
            store, collection=collection, fix=fix, logger=ctx.obj["logger"]
        )

        for item in dangling:
            click.echo(
                f"  ⚠️  {item.collection} {item.record_id}.{item.field} "
                f"→ missing {item.missing_id}"
            )

        if not dangling:
            click.echo("✅ No dangling references")
        elif fix:
            click.echo(f"🔧 Repaired {stats.records_repaired} record(s)")
        else:
            click.echo(f"❌ {stats.dangling_found} dangling reference(s); re-run with --fix")

        click.echo(f"📊 {stats.summary()}")

        if dangling and not fix:
            ctx.exit(1)

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "integrity_check")
