"""High-level note workflows used by the CLI."""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable

from ..app import AppContext
from ..editor import open_editor
from ..runner import expand_command, shell_argv
from ..templating import (
    DEFAULT_NOTE_TEMPLATE,
    NoteMetadata,
    render_note,
    rewrite_placeholders,
)

logger = logging.getLogger(__name__)

EchoFunc = Callable[[str], None]

_UNSAFE_CHARS_RE = re.compile(r'[ <>:"/\\|?*%#]')
_DASH_RUN_RE = re.compile(r"--+")

PAGE_BREAK = "\x12"


class CreationCanceled(RuntimeError):
    """Raised when the interactive title prompt receives no input."""

    def __init__(self) -> None:
        super().__init__("canceled")


class NoSelectionError(RuntimeError):
    """Raised when the select command returns no note."""


@dataclass(slots=True, frozen=True)
class NoteResult:
    """Outcome of ``create_note``."""

    path: Path
    created: bool
    appended: bool


def _now() -> datetime:
    return datetime.now()


def escape_title(name: str) -> str:
    """Make ``name`` safe to use as part of a file name."""

    s = _UNSAFE_CHARS_RE.sub("-", name)
    s = _DASH_RUN_RE.sub("-", s)
    return s.strip("- ")


def note_filename(title: str, when: datetime) -> str:
    """Return ``YYYY-MM-DD-<escaped title>.md`` or ``YYYY-MM-DD.md``."""

    date = when.strftime("%Y-%m-%d")
    escaped = escape_title(title)
    if not escaped:
        return f"{date}.md"
    return f"{date}-{escaped}.md"


def load_note_template(template_path: Path | None) -> str:
    """Return the rewritten user template, or the built-in default."""

    if template_path is not None and template_path.exists():
        return rewrite_placeholders(template_path.read_text(encoding="utf-8"))
    return DEFAULT_NOTE_TEMPLATE


def append_stream(path: Path, stream: BinaryIO) -> None:
    """Append the raw bytes readable from ``stream`` to ``path``."""

    with path.open("ab") as fh:
        shutil.copyfileobj(stream, fh)


def prompt_title(stdin: BinaryIO, echo: EchoFunc) -> str:
    echo("Title: ")
    line = stdin.readline()
    if not line:
        raise CreationCanceled()
    return line.decode("utf-8", errors="replace").rstrip("\r\n")


def create_note(
    ctx: AppContext,
    title: str | None,
    *,
    stdin: BinaryIO,
    interactive: bool,
    echo: EchoFunc,
) -> NoteResult:
    """Create a note from the template, or route input to an existing one.

    When the target file already exists it is never re-rendered: piped input
    is appended to it, or it is opened in the editor. A new file is rendered
    in memory first and created exclusively, so a template failure leaves
    nothing behind.
    """

    if title is None:
        title = prompt_title(stdin, echo)
    now = _now()

    filename = note_filename(title, now)
    if not escape_title(title):
        title = now.strftime("%Y-%m-%d")
    path = ctx.notes.path_for(filename)

    if path.exists():
        logger.debug("Note %s already exists", path)
        return _route_input(ctx, path, stdin=stdin, interactive=interactive, created=False)

    source = load_note_template(ctx.config.memo_template)
    metadata = NoteMetadata(title=title, date=now.strftime("%Y-%m-%d %H:%M"))
    content = render_note(source, metadata)

    with path.open("x", encoding="utf-8") as fh:
        fh.write(content)
    logger.debug("Created note %s", path)

    return _route_input(ctx, path, stdin=stdin, interactive=interactive, created=True)


def _route_input(
    ctx: AppContext,
    path: Path,
    *,
    stdin: BinaryIO,
    interactive: bool,
    created: bool,
) -> NoteResult:
    if not interactive:
        append_stream(path, stdin)
        return NoteResult(path=path, created=created, appended=True)
    open_editor(ctx.config, ctx.runner, [path])
    return NoteResult(path=path, created=created, appended=False)


def select_notes(ctx: AppContext) -> list[Path]:
    """Let the configured select command pick notes and return their paths."""

    names = ctx.notes.list_names()
    command = expand_command(ctx.config.select_cmd, memo_dir=str(ctx.config.memo_dir))
    output = ctx.runner(shell_argv(command), input="\n".join(names), capture=True)
    chosen = output.strip()
    if not chosen:
        raise NoSelectionError("No files selected")
    return [ctx.notes.path_for(line) for line in chosen.split("\n")]


def resolve_targets(ctx: AppContext, name: str | None) -> list[Path]:
    if name:
        return [ctx.notes.path_for(name)]
    return select_notes(ctx)


def edit_notes(ctx: AppContext, name: str | None) -> list[Path]:
    targets = resolve_targets(ctx, name)
    open_editor(ctx.config, ctx.runner, targets)
    return targets


def cat_notes(ctx: AppContext, name: str | None, echo: EchoFunc) -> None:
    """Print notes, separating several of them with a page break line."""

    for index, path in enumerate(resolve_targets(ctx, name)):
        if index > 0:
            echo(PAGE_BREAK)
        with path.open(encoding="utf-8") as fh:
            for line in fh:
                echo(line.rstrip("\n"))


def grep_notes(ctx: AppContext, pattern: str) -> None:
    names = ctx.notes.list_names()
    if not names:
        return
    files = [str(ctx.notes.path_for(name)) for name in names]
    command = expand_command(
        ctx.config.grep_cmd,
        files=files,
        pattern=pattern,
        memo_dir=str(ctx.config.memo_dir),
    )
    ctx.runner(shell_argv(command))


def matching_notes(ctx: AppContext, pattern: str) -> list[Path]:
    return [ctx.notes.path_for(name) for name in ctx.notes.list_names(pattern)]


def delete_notes(ctx: AppContext, paths: list[Path]) -> None:
    for path in paths:
        ctx.notes.delete(path)
