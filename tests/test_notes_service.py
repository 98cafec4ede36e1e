from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path

import pytest
from memo.services import notes as notes_service
from memo.services.notes import (
    CreationCanceled,
    NoSelectionError,
    create_note,
    escape_title,
    note_filename,
)
from memo.templating import TemplateError

FIXED_NOW = datetime(2024, 1, 2, 9, 30)


@pytest.fixture(autouse=True)
def fixed_clock(monkeypatch) -> None:
    monkeypatch.setattr(notes_service, "_now", lambda: FIXED_NOW)


def _collect() -> tuple[list[str], object]:
    messages: list[str] = []
    return messages, messages.append


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("My: Note/Idea", "My-Note-Idea"),
        ("Hello World", "Hello-World"),
        ('a<b>c:d"e/f\\g|h?i*j%k#l', "a-b-c-d-e-f-g-h-i-j-k-l"),
        ("a -- b", "a-b"),
        ("  padded  ", "padded"),
        ("***", ""),
    ],
)
def test_escape_title(title: str, expected: str) -> None:
    assert escape_title(title) == expected


def test_note_filename_with_and_without_title() -> None:
    assert note_filename("Hello World", FIXED_NOW) == "2024-01-02-Hello-World.md"
    assert note_filename("", FIXED_NOW) == "2024-01-02.md"
    assert note_filename("???", FIXED_NOW) == "2024-01-02.md"


def test_create_note_with_default_template(app, fake_runner) -> None:
    messages, echo = _collect()
    result = create_note(
        app, "Hello World", stdin=io.BytesIO(), interactive=True, echo=echo
    )

    assert result.path.name == "2024-01-02-Hello-World.md"
    assert result.created
    assert result.path.read_text(encoding="utf-8") == "# Hello World\n"
    assert len(fake_runner.calls) == 1
    argv = fake_runner.calls[0]["argv"]
    assert argv[:2] == ["sh", "-c"]
    assert argv[2].startswith("vim ")
    assert str(result.path) in argv[2]
    assert messages == []


def test_create_note_with_custom_template(app, tmp_path: Path) -> None:
    template = tmp_path / "template.txt"
    template.write_text(
        "---\ntitle: {{_title_}}\ndate: {{_date_}}\ntags: [{{_tags_}}]\n---\n",
        encoding="utf-8",
    )
    app.config.memo_template = template

    result = create_note(
        app, "Idea", stdin=io.BytesIO(b""), interactive=False, echo=lambda _: None
    )

    assert result.path.read_text(encoding="utf-8") == (
        "---\ntitle: Idea\ndate: 2024-01-02 09:30\ntags: []\n---\n"
    )


def test_piped_input_is_appended_to_new_note(app, fake_runner) -> None:
    result = create_note(
        app,
        "Piped",
        stdin=io.BytesIO(b"line one\nline two\n"),
        interactive=False,
        echo=lambda _: None,
    )

    assert result.appended
    assert result.path.read_text(encoding="utf-8") == "# Piped\nline one\nline two\n"
    assert fake_runner.calls == []


def test_existing_note_is_not_rerendered(app, fake_runner) -> None:
    existing = app.notes.path_for("2024-01-02-Hello-World.md")
    existing.write_text("kept content\n", encoding="utf-8")

    result = create_note(
        app,
        "Hello World",
        stdin=io.BytesIO(b"more\n"),
        interactive=False,
        echo=lambda _: None,
    )

    assert not result.created
    assert existing.read_text(encoding="utf-8") == "kept content\nmore\n"
    assert fake_runner.calls == []


def test_existing_note_opens_editor_when_interactive(app, fake_runner) -> None:
    existing = app.notes.path_for("2024-01-02-Hello-World.md")
    existing.write_text("kept content\n", encoding="utf-8")

    result = create_note(
        app, "Hello World", stdin=io.BytesIO(), interactive=True, echo=lambda _: None
    )

    assert not result.created
    assert existing.read_text(encoding="utf-8") == "kept content\n"
    assert len(fake_runner.calls) == 1


def test_prompts_for_title_when_missing(app) -> None:
    messages, echo = _collect()
    result = create_note(
        app,
        None,
        stdin=io.BytesIO(b"Prompted Title\nbody\n"),
        interactive=False,
        echo=echo,
    )

    assert messages == ["Title: "]
    assert result.path.name == "2024-01-02-Prompted-Title.md"
    assert result.path.read_text(encoding="utf-8") == "# Prompted Title\nbody\n"


def test_empty_prompt_uses_date_as_title(app) -> None:
    result = create_note(
        app, None, stdin=io.BytesIO(b"\n"), interactive=False, echo=lambda _: None
    )

    assert result.path.name == "2024-01-02.md"
    assert result.path.read_text(encoding="utf-8") == "# 2024-01-02\n"


def test_prompt_end_of_input_cancels(app) -> None:
    with pytest.raises(CreationCanceled):
        create_note(
            app, None, stdin=io.BytesIO(b""), interactive=False, echo=lambda _: None
        )
    assert list(app.notes.path.iterdir()) == []


def test_template_failure_leaves_no_file(app, tmp_path: Path, fake_runner) -> None:
    template = tmp_path / "template.txt"
    template.write_text("{{_author_}}\n", encoding="utf-8")
    app.config.memo_template = template

    with pytest.raises(TemplateError):
        create_note(
            app, "Broken", stdin=io.BytesIO(), interactive=True, echo=lambda _: None
        )

    assert not app.notes.path_for("2024-01-02-Broken.md").exists()
    assert fake_runner.calls == []


def test_missing_notes_directory_raises_os_error(app, tmp_path: Path) -> None:
    app.notes.path = tmp_path / "does-not-exist"
    with pytest.raises(OSError):
        create_note(
            app, "x", stdin=io.BytesIO(), interactive=False, echo=lambda _: None
        )


def test_select_notes_uses_selector_output(app, fake_runner) -> None:
    for name in ("2024-01-01-a.md", "2024-01-02-b.md", "readme.txt"):
        app.notes.path_for(name).write_text("x", encoding="utf-8")
    fake_runner.output = "2024-01-01-a.md\n"

    paths = notes_service.select_notes(app)

    assert paths == [app.notes.path_for("2024-01-01-a.md")]
    call = fake_runner.calls[0]
    assert call["input"] == "2024-01-02-b.md\n2024-01-01-a.md"
    assert call["capture"] is True
    assert call["argv"] == ["sh", "-c", "peco"]


def test_select_notes_without_selection_fails(app, fake_runner) -> None:
    fake_runner.output = "\n"
    with pytest.raises(NoSelectionError):
        notes_service.select_notes(app)


def test_grep_passes_pattern_and_files(app, fake_runner) -> None:
    app.notes.path_for("2024-01-01-a.md").write_text("x", encoding="utf-8")

    notes_service.grep_notes(app, "needle")

    command = fake_runner.calls[0]["argv"][2]
    assert command.startswith("grep -nH needle ")
    assert "2024-01-01-a.md" in command


def test_grep_on_empty_directory_runs_nothing(app, fake_runner) -> None:
    notes_service.grep_notes(app, "needle")
    assert fake_runner.calls == []


def test_cat_separates_notes_with_page_break(app, monkeypatch) -> None:
    first = app.notes.path_for("a.md")
    second = app.notes.path_for("b.md")
    first.write_text("one\n", encoding="utf-8")
    second.write_text("two\n", encoding="utf-8")
    monkeypatch.setattr(notes_service, "select_notes", lambda ctx: [first, second])

    messages, echo = _collect()
    notes_service.cat_notes(app, None, echo)

    assert messages == ["one", "\x12", "two"]


def test_date_is_taken_after_the_title_prompt(app, monkeypatch) -> None:
    clock = [FIXED_NOW]
    monkeypatch.setattr(notes_service, "_now", lambda: clock[0])

    class SlowStdin(io.BytesIO):
        def readline(self, *args):
            clock[0] = datetime(2024, 1, 3, 0, 1)
            return super().readline(*args)

    result = create_note(
        app, None, stdin=SlowStdin(b"Late\n"), interactive=False, echo=lambda _: None
    )

    assert result.path.name == "2024-01-03-Late.md"
