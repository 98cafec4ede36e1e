"""Config command for memo CLI."""

from __future__ import annotations

import click

from ..editor import open_editor
from ..runner import CommandError
from ._common import MemoCliError, get_app


@click.command(name="config")
@click.option("--cat", "cat_file", is_flag=True, help="Print the configuration file.")
@click.pass_context
def config(ctx: click.Context, cat_file: bool) -> None:
    """Open the memo configuration file in the editor."""

    app = get_app(ctx)
    config_path = app.config.source_path
    if config_path is None:  # pragma: no cover - bootstrap always records it
        raise MemoCliError("Configuration path is unknown.")

    if cat_file:
        try:
            click.echo(config_path.read_text(encoding="utf-8"), nl=False)
        except OSError as exc:
            raise MemoCliError(str(exc)) from exc
        return

    try:
        open_editor(app.config, app.runner, [config_path])
    except CommandError as exc:
        raise MemoCliError(f"Failed to launch editor: {exc}") from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(config)
