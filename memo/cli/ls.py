"""List command for memo CLI."""

from __future__ import annotations

import sys

import click

from ..services.listing import ListOptions, iter_listing
from ..storage import StorageError
from ..templating import TemplateError
from ._common import MemoCliError, get_app


@click.command(name="list")
@click.argument("pattern", required=False)
@click.option("--fullpath", is_flag=True, help="Show file path")
@click.option(
    "--format",
    "format_template",
    metavar="TEMPLATE",
    default=None,
    help="Print each note using a template such as '{{.File}}: {{.Title}}'.",
)
@click.pass_context
def list_notes(
    ctx: click.Context,
    pattern: str | None,
    fullpath: bool,
    format_template: str | None,
) -> None:
    """List notes, newest first, optionally filtered by PATTERN."""

    app = get_app(ctx)
    options = ListOptions(
        pattern=pattern,
        fullpath=fullpath,
        format=format_template,
        is_tty=sys.stdout.isatty(),
    )

    try:
        for line in iter_listing(app, options):
            click.echo(line)
    except (StorageError, TemplateError) as exc:
        raise MemoCliError(str(exc)) from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(list_notes)
