"""Formatting of the note listing."""

from __future__ import annotations

from dataclasses import dataclass

import click
from rich.cells import cell_len, set_cell_size

from ..app import AppContext
from ..templating import render_fields

ELLIPSIS = "..."


@dataclass(slots=True, frozen=True)
class ListOptions:
    pattern: str | None = None
    fullpath: bool = False
    format: str | None = None
    is_tty: bool = False


def truncate(text: str, width: int, tail: str = ELLIPSIS) -> str:
    """Truncate ``text`` to ``width`` terminal cells, ending it with ``tail``."""

    if cell_len(text) <= width:
        return text
    room = width - cell_len(tail)
    if room <= 0:
        return set_cell_size(tail, max(width, 0))
    return set_cell_size(text, room) + tail


def fill_right(text: str, width: int) -> str:
    if cell_len(text) >= width:
        return text
    return set_cell_size(text, width)


def format_columns(name: str, title: str, *, column: int, width: int) -> str:
    """Render ``<name> : <title>`` aligned on ``column`` cells."""

    title_cells = max(width - 4 - column, 0)
    shown_title = truncate(title, title_cells)
    shown_name = fill_right(truncate(name, column), column)
    return f"{click.style(shown_name, fg='green')} : {click.style(shown_title, fg='yellow')}"


def iter_listing(ctx: AppContext, options: ListOptions):
    """Yield one output line per note matching ``options.pattern``."""

    config = ctx.config
    for name in ctx.notes.list_names(options.pattern):
        full = ctx.notes.path_for(name)
        if options.format:
            yield render_fields(
                options.format,
                {
                    "File": name,
                    "Title": ctx.notes.first_line(name),
                    "Fullpath": str(full),
                    "Meta": ctx.notes.metadata(name),
                },
            )
        elif options.is_tty and not options.fullpath:
            yield format_columns(
                name,
                ctx.notes.first_line(name),
                column=config.effective_column,
                width=config.effective_width,
            )
        elif options.fullpath:
            yield str(full)
        else:
            yield name
