"""memo CLI package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import click

from .. import __version__
from ..plugins import PluginRegistrationError, SubcommandContribution, load_subcommands
from ..runner import CommandError
from . import cat, config_cmd, delete, edit, grep, ls, new, serve
from ._common import CONTEXT_SETTINGS, MemoCliError, get_app

__all__ = ["cli", "main", "MemoCliError"]

logger = logging.getLogger(__name__)

ALIASES = {
    "n": "new",
    "l": "list",
    "e": "edit",
    "v": "cat",
    "d": "delete",
    "g": "grep",
    "c": "config",
    "s": "serve",
}


def _plugin_subcommands(ctx: click.Context) -> dict[str, SubcommandContribution]:
    app = get_app(ctx)
    try:
        return load_subcommands(app.config)
    except PluginRegistrationError as exc:
        raise MemoCliError(str(exc)) from exc


def _plugin_command(contribution: SubcommandContribution) -> click.Command:
    @click.command(
        name=contribution.name,
        add_help_option=False,
        context_settings={"ignore_unknown_options": True},
    )
    @click.argument("args", nargs=-1, type=click.UNPROCESSED)
    @click.pass_context
    def run_plugin(ctx: click.Context, args: tuple[str, ...]) -> None:
        app = get_app(ctx)
        try:
            contribution.handler(args, config=app.config, runner=app.runner)
        except CommandError as exc:
            raise MemoCliError(str(exc)) from exc

    return run_plugin


class MemoGroup(click.Group):
    """Command group resolving short aliases and plugin subcommands."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))
        if command is not None:
            return command
        contribution = _plugin_subcommands(ctx).get(cmd_name)
        if contribution is None:
            return None
        return _plugin_command(contribution)

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_commands(ctx, formatter)
        try:
            plugins = _plugin_subcommands(ctx)
        except MemoCliError as exc:
            logger.debug("Skipping plugin listing: %s", exc.message)
            return
        if not plugins:
            return
        rows = []
        for name in sorted(plugins):
            describe = plugins[name].describe
            rows.append((name, describe() if describe is not None else ""))
        with formatter.section("Sub commands"):
            formatter.write_dl(rows)


@click.group(cls=MemoGroup, context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration TOML file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="memo")
@click.pass_context
def cli(ctx: click.Context, config_path_opt: Path | None, verbose: bool) -> None:
    """Memo Life For You."""

    ctx.ensure_object(dict)
    invoked = ctx.invoked_subcommand

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if invoked is None:
        click.echo(ctx.command.get_help(ctx))
        ctx.exit(0)

    ctx.obj["config_path"] = config_path_opt


for register_command in (
    new.register,
    ls.register,
    edit.register,
    cat.register,
    delete.register,
    grep.register,
    config_cmd.register,
    serve.register,
):
    register_command(cli)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        rv = cli.main(args=args, prog_name="memo", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)
    return rv if isinstance(rv, int) else 0
