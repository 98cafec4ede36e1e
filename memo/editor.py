"""Utilities for opening notes in the configured editor."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .config import MemoConfig
from .runner import CommandRunner, expand_command, shell_argv


def open_editor(
    config: MemoConfig, runner: CommandRunner, files: Sequence[Path]
) -> None:
    """Open ``files`` in ``config.editor`` and wait for it to exit."""

    command = expand_command(
        config.editor,
        files=[str(f) for f in files],
        memo_dir=str(config.memo_dir),
    )
    runner(shell_argv(command))
