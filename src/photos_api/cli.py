# cli.py
import click
import logging

from photos_api.config.settings import get_settings
from photos_api.db_layer.post_service import PostService
from photos_api.main import configure_logging, create_app
from photos_api.reconcile import DEFAULT_MIN_AGE_SECONDS, reconcile_orphaned_objects
from photos_api.s3.client import build_s3_client

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Photos API"""
    configure_logging(get_settings().log_level)


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    for key, value in settings.get_environment_dict().items():
        click.echo(f"  {key}: {value}")


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to HOST)")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT)")
def serve(host, port):
    """Run the API with uvicorn"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@cli.command()
def init_db():
    """Create the posts table if it does not exist"""
    settings = get_settings()
    PostService(settings.database_path).init_schema()
    click.echo(f"Database ready at {settings.database_path}")


@cli.command()
@click.option("--apply", is_flag=True, default=False,
              help="Delete orphaned objects instead of only listing them")
@click.option("--min-age", "min_age_seconds", type=int, default=DEFAULT_MIN_AGE_SECONDS,
              show_default=True, help="Skip objects younger than this many seconds")
def reconcile(apply, min_age_seconds):
    """Find images in the bucket that no post references"""
    settings = get_settings()
    report = reconcile_orphaned_objects(
        build_s3_client(settings),
        settings.bucket_name,
        PostService(settings.database_path),
        apply=apply,
        min_age_seconds=min_age_seconds,
    )

    for key in report.orphaned_objects:
        action = "deleted" if key in report.deleted_objects else "orphaned"
        click.echo(f"{action}: {key}")
    for key in report.dangling_rows:
        click.echo(f"missing object for row: {key}")

    if report.clean:
        click.echo("Bucket and database are in sync")
    elif not apply and report.orphaned_objects:
        click.echo("Re-run with --apply to delete orphaned objects")


if __name__ == "__main__":
    cli()
