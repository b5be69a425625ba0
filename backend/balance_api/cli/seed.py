"""``flask seed`` commands: demo users, games, choices and comments."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from balance_api.core.extensions import db
from balance_api.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _print_summary(summary: dict[str, dict[str, int]]) -> None:
    click.echo("Seed summary:")
    if not summary:
        click.echo("  nothing to do")
        return
    pad = max(map(len, summary))
    for table in sorted(summary):
        counts = summary[table]
        click.echo(
            f"  {table:<{pad}}  created={counts.get('created', 0):>2}"
            f"  existing={counts.get('existing', 0):>2}"
        )


def _seed_or_fail(verbose: bool) -> None:
    try:
        summary = seed_data.run_all(db, verbose=verbose)
    except Exception as exc:
        db.session.rollback()
        LOGGER.exception("seed.failed")
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _print_summary(summary)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeded row.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Populate the database with demo data."""
    ctx.obj = {"verbose": verbose}
    logging.getLogger(seed_data.__name__).setLevel(logging.DEBUG if verbose else logging.INFO)


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Insert missing demo rows; existing rows are left untouched."""
    _seed_or_fail(ctx.obj["verbose"])


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed. Refused in production."""
    if not (current_app.config.get("TESTING") or current_app.config.get("DEBUG")):
        raise click.UsageError("'flask seed fresh' only runs in development or testing.")
    if not yes:
        click.confirm("Drop every table and reseed?", abort=True)

    LOGGER.info("seed.fresh.reset_schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _seed_or_fail(ctx.obj["verbose"])
