"""Application bootstrap and context container for memo."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import DEFAULT_CONFIG_PATH, MemoConfig, bootstrap_config_file, load_config
from .runner import CommandRunner, SubprocessRunner
from .storage import NoteDirectory


@dataclass(slots=True)
class AppContext:
    """Aggregates core services for the CLI lifecycle."""

    config: MemoConfig
    notes: NoteDirectory
    runner: CommandRunner = field(default_factory=SubprocessRunner)


def bootstrap(config_path: Path | None) -> AppContext:
    """Load configuration (writing defaults on first run) and build services."""

    effective_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
    bootstrap_config_file(effective_path)
    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(effective_path)
    return AppContext(config=config, notes=NoteDirectory(config.memo_dir))
