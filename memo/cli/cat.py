"""Cat command for memo CLI."""

from __future__ import annotations

import click

from ..runner import CommandError
from ..services.notes import NoSelectionError, cat_notes
from ..storage import StorageError
from ._common import MemoCliError, get_app


@click.command(name="cat")
@click.argument("name", required=False)
@click.pass_context
def cat(ctx: click.Context, name: str | None) -> None:
    """Print the note NAME, or notes picked with the select command."""

    app = get_app(ctx)

    try:
        cat_notes(app, name, echo=click.echo)
    except (NoSelectionError, CommandError, StorageError, OSError) as exc:
        raise MemoCliError(str(exc)) from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(cat)
