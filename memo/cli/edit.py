"""Edit command for memo CLI."""

from __future__ import annotations

import click

from ..runner import CommandError
from ..services.notes import NoSelectionError, edit_notes
from ..storage import StorageError
from ._common import MemoCliError, get_app


@click.command(name="edit")
@click.argument("name", required=False)
@click.pass_context
def edit(ctx: click.Context, name: str | None) -> None:
    """Edit the note NAME, or pick notes with the select command."""

    app = get_app(ctx)

    try:
        edit_notes(app, name)
    except (NoSelectionError, CommandError, StorageError) as exc:
        raise MemoCliError(str(exc)) from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(edit)
