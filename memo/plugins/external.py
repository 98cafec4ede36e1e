"""Built-in plugin exposing executables in the plugins directory as subcommands."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Sequence

from ..config import MEMODIR_ENV, MemoConfig
from ..runner import CommandError, CommandRunner, SubprocessRunner
from ._markers import hookimpl
from .types import SubcommandContribution


def _is_plugin_program(path: Path) -> bool:
    if not path.is_file():
        return False
    if sys.platform == "win32":
        pathext = os.environ.get("PATHEXT", "").lower().split(";")
        return path.suffix.lower() in pathext
    return os.access(path, os.X_OK)


def _command_name(path: Path) -> str:
    if sys.platform == "win32":
        return path.stem
    return path.name


def discover_programs(plugins_dir: Path | None) -> list[Path]:
    """Return plugin executables under ``plugins_dir`` sorted by name."""

    if plugins_dir is None or not plugins_dir.is_dir():
        return []
    return sorted(
        (entry for entry in plugins_dir.iterdir() if _is_plugin_program(entry)),
        key=lambda entry: entry.name,
    )


def make_handler(program: Path):
    def handler(
        args: Sequence[str], *, config: MemoConfig, runner: CommandRunner
    ) -> None:
        runner(
            [str(program), *args],
            env={MEMODIR_ENV: str(config.memo_dir)},
        )

    return handler


def make_describe(program: Path, runner: CommandRunner | None = None):
    def describe() -> str:
        run = runner or SubprocessRunner()
        try:
            return run([str(program), "-usage"], capture=True).rstrip("\n")
        except CommandError:
            return ""

    return describe


@hookimpl
def memo_subcommands(config: MemoConfig) -> tuple[SubcommandContribution, ...]:
    """Expose every plugin program as a ``memo <name>`` subcommand."""

    return tuple(
        SubcommandContribution(
            name=_command_name(program),
            handler=make_handler(program),
            describe=make_describe(program),
        )
        for program in discover_programs(config.plugins_dir)
    )
