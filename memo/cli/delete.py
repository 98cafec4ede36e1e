"""Delete command for memo CLI."""

from __future__ import annotations

import click

from ..services.notes import delete_notes, matching_notes
from ..storage import StorageError
from ._common import MemoCliError, get_app


@click.command(name="delete")
@click.option(
    "-y",
    "--yes",
    "assume_yes",
    is_flag=True,
    help="Skip confirmation prompts",
)
@click.argument("pattern")
@click.pass_context
def delete(ctx: click.Context, pattern: str, assume_yes: bool) -> None:
    """Delete the notes whose file name contains PATTERN."""

    app = get_app(ctx)

    try:
        targets = matching_notes(app, pattern)
    except StorageError as exc:
        raise MemoCliError(str(exc)) from exc

    if not targets:
        click.secho("No matched entry", fg="yellow")
        return

    for path in targets:
        click.echo(path.name)

    if not assume_yes:
        click.secho("Will delete those entry. Are you sure?", fg="red")
        if not click.confirm("Are you sure?", default=False):
            return
        if not click.confirm("Really?", default=False):
            return

    try:
        delete_notes(app, targets)
    except StorageError as exc:
        raise MemoCliError(str(exc)) from exc

    for path in targets:
        click.secho(f"Deleted: {path}", fg="yellow")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(delete)
