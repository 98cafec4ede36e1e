from __future__ import annotations

import click
from memo.services.listing import (
    ListOptions,
    fill_right,
    format_columns,
    iter_listing,
    truncate,
)


def _seed(app) -> None:
    app.notes.path_for("2024-01-01-first.md").write_text(
        "---\ntitle: First\n---\n# First note\n", encoding="utf-8"
    )
    app.notes.path_for("2024-01-02-second.md").write_text(
        "# Second note\n", encoding="utf-8"
    )


def test_truncate_respects_cell_width() -> None:
    assert truncate("short", 10) == "short"
    assert truncate("abcdefghij", 6) == "abc..."
    assert truncate("日本語のメモ", 7) == "日本..."
    assert truncate("abcdef", 2) == ".."


def test_fill_right_pads_to_width() -> None:
    assert fill_right("ab", 4) == "ab  "
    assert fill_right("abcdef", 4) == "abcdef"


def test_format_columns_layout() -> None:
    line = click.unstyle(
        format_columns("2024-01-01-a-long-file-name.md", "Title", column=10, width=30)
    )
    assert line == "2024-01... : Title"


def test_plain_listing_prints_names(app) -> None:
    _seed(app)
    lines = list(iter_listing(app, ListOptions()))
    assert lines == ["2024-01-02-second.md", "2024-01-01-first.md"]


def test_fullpath_listing(app) -> None:
    _seed(app)
    lines = list(iter_listing(app, ListOptions(pattern="first", fullpath=True)))
    assert lines == [str(app.notes.path_for("2024-01-01-first.md"))]


def test_tty_listing_shows_titles(app) -> None:
    _seed(app)
    lines = [click.unstyle(line) for line in iter_listing(app, ListOptions(is_tty=True))]
    assert lines[0].startswith("2024-01-02-second.md")
    assert lines[0].endswith(" : Second note")
    assert lines[1].endswith(" : First note")


def test_format_listing(app) -> None:
    _seed(app)
    options = ListOptions(pattern="first", format="{{.File}}|{{.Title}}|{{ Meta.title }}")
    assert list(iter_listing(app, options)) == ["2024-01-01-first.md|First note|First"]


def test_format_listing_reads_front_matter_keys(app) -> None:
    _seed(app)
    options = ListOptions(pattern="first", format="{{.File}}: {{.Meta.title}}")
    assert list(iter_listing(app, options)) == ["2024-01-01-first.md: First"]
