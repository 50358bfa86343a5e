"""
Record Commands
---------------

Commands:
    - delete: Delete a record through the delete-hook pipeline
"""
import click

from vrcms.core.exceptions import DatabaseError, ValidationError
from vrcms.core.logging_manager import handle_cli_error
from vrcms.database import collection_names
from vrcms.integrity.delete_hooks import CLEANUP_RESULTS_KEY
from . import get_store


@click.command()
@click.argument("collection", type=click.Choice(collection_names()))
@click.argument("record_id")
@click.pass_context
def delete(ctx, collection, record_id):
    """Delete a record and clean up references to it."""
    try:
        store = get_store(ctx)
        context = {"source": "cli"}
        doc = store.delete(collection, record_id, context=context)

        label = doc.get("slug") or doc.get("filename") or record_id
        click.echo(f"🗑️  Deleted {collection} '{label}'")

        failed = False
        for result in context.get(CLEANUP_RESULTS_KEY, []):
            click.echo(
                f"  🔗 References removed from {len(result.updated)} record(s), "
                f"{len(result.skipped)} unchanged"
            )
            for failure in result.failures:
                failed = True
                click.echo(f"  ❌ {failure.collection} {failure.record_id}: {failure.error}", err=True)
            if result.error is not None:
                failed = True
                click.echo(f"  ❌ Scan failed: {result.error}", err=True)

        if failed:
            click.echo("⚠️  Some references may remain; run 'vrcms integrity check --fix'")
            ctx.exit(1)

    except (DatabaseError, ValidationError) as e:
        handle_cli_error(ctx, e, "delete", {"collection": collection, "id": record_id})
