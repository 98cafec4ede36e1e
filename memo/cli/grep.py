"""Grep command for memo CLI."""

from __future__ import annotations

import click

from ..runner import CommandError
from ..services.notes import grep_notes
from ..storage import StorageError
from ._common import MemoCliError, get_app


@click.command(name="grep")
@click.argument("pattern")
@click.pass_context
def grep(ctx: click.Context, pattern: str) -> None:
    """Search all notes for PATTERN with the configured grep command."""

    app = get_app(ctx)

    try:
        grep_notes(app, pattern)
    except (CommandError, StorageError) as exc:
        raise MemoCliError(str(exc)) from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(grep)
