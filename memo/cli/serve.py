"""Serve command for memo CLI."""

from __future__ import annotations

import click

from ..viewer import create_app, parse_addr
from ._common import MemoCliError, get_app


@click.command(name="serve")
@click.option("--addr", default=":8080", show_default=True, help="Server address")
@click.pass_context
def serve(ctx: click.Context, addr: str) -> None:
    """Start the read-only HTTP viewer and open it in the browser."""

    app = get_app(ctx)

    try:
        host, port, url = parse_addr(addr)
    except ValueError as exc:
        raise MemoCliError(str(exc)) from exc

    web_app = create_app(app.config, app.notes)
    click.echo(f"Serving notes on {url}")
    click.launch(url)
    try:
        web_app.run(host=host, port=port)
    except OSError as exc:
        raise MemoCliError(f"Cannot serve on {addr}: {exc}") from exc


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(serve)
