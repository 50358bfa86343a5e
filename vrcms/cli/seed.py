"""
Seeding Commands
----------------

Commands:
    - seed services: Create the official service records (idempotent)
"""
from pathlib import Path

import click

from vrcms.core.exceptions import DatabaseError, SeedError
from vrcms.core.logging_manager import handle_cli_error
from vrcms.core.paths import DEFAULT_IMAGE, asset_search_paths
from vrcms.seed import MediaUploader, SeedUpserter, UploadCache, default_seed_file, load_seed_file
from . import get_store


@click.group()
def seed():
    """Seed content collections."""
    pass


@seed.command()
@click.option(
    "--file",
    "seed_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Seed YAML file (default: bundled services.yaml)",
)
@click.pass_context
def services(ctx, seed_file):
    """Create service records whose slug does not exist yet."""
    logger = ctx.obj["logger"]
    try:
        path = Path(seed_file) if seed_file else default_seed_file("services")
        data = load_seed_file(path)
        if data.collection != "services":
            raise SeedError(
                f"{path.name} seeds '{data.collection}', expected 'services'"
            )

        store = get_store(ctx)
        uploader = MediaUploader(
            store,
            asset_search_paths(ctx.obj["assets_dir"]),
            default_asset=data.default_image or DEFAULT_IMAGE,
            cache=UploadCache(),
            logger=logger,
        )
        upserter = SeedUpserter(store, uploader, logger)

        click.echo(f"🌱 Seeding services from {path.name}...")
        stats = upserter.seed_batch("services", data.items)

        click.echo("\n📈 Seed summary:")
        click.echo(f"  ✅ Created: {stats.created}")
        click.echo(f"  ⚠️  Skipped (already exists): {stats.skipped}")
        click.echo(f"  ❌ Failed: {stats.failed}")
        click.echo(f"  📸 Media uploaded: {stats.media_uploaded}")
        click.echo(f"  📊 Total services in database: {store.count('services')}")
        click.echo(f"\n⏱️  {stats.duration():.2f}s")

        if stats.failed:
            ctx.exit(1)

    except (SeedError, DatabaseError) as e:
        handle_cli_error(ctx, e, "seed_services")
