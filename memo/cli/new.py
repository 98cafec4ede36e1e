"""New command for memo CLI."""

from __future__ import annotations

import click

from ..runner import CommandError
from ..services.notes import CreationCanceled, create_note
from ..templating import TemplateError
from ._common import MemoCliError, get_app


@click.command(name="new")
@click.argument("title", required=False)
@click.pass_context
def new(ctx: click.Context, title: str | None) -> None:
    """Create a note, or append piped input to today's note with TITLE."""

    app = get_app(ctx)
    stdin = click.get_binary_stream("stdin")

    try:
        create_note(
            app,
            title,
            stdin=stdin,
            interactive=stdin.isatty(),
            echo=lambda msg: click.echo(msg, nl=False),
        )
    except CreationCanceled as exc:
        raise MemoCliError("Creation canceled.") from exc
    except (TemplateError, CommandError, OSError) as exc:
        raise MemoCliError(str(exc)) from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(new)
