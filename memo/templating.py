"""Note templates: placeholder rewriting and field-reference rendering.

User templates use ``{{_title_}}`` style placeholders (the memolist.vim
format). They are rewritten into field references such as ``{{.Title}}``
which are then rendered with Jinja2 against a record of named fields.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, TemplateError as JinjaTemplateError

DEFAULT_NOTE_TEMPLATE = "# {{.Title}}\n"

_PLACEHOLDER_RE = re.compile(r"\{\{_(.+?)_\}\}")
_FIELD_REF_RE = re.compile(r"\{\{\s*\.([A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)\s*\}\}")
_WORD_START_RE = re.compile(r"(?<!\S)\S")

# Only variable tags are template syntax; block and comment markers are moved
# to sequences that cannot occur in note text.
_env = Environment(
    block_start_string="{%\x00",
    block_end_string="\x00%}",
    comment_start_string="{#\x00",
    comment_end_string="\x00#}",
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


class TemplateError(RuntimeError):
    """Raised when a template cannot be parsed or rendered."""


@dataclass(slots=True, frozen=True)
class NoteMetadata:
    """Fields available to note templates."""

    title: str
    date: str
    tags: str = ""
    categories: str = ""

    def as_fields(self) -> dict[str, str]:
        return {
            "Title": self.title,
            "Date": self.date,
            "Tags": self.tags,
            "Categories": self.categories,
        }


def title_case(name: str) -> str:
    """Upper-case the first letter of each word, leaving the rest unchanged."""

    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), name)


def rewrite_placeholders(source: str) -> str:
    """Rewrite every ``{{_name_}}`` placeholder into ``{{.Name}}``."""

    return _PLACEHOLDER_RE.sub(lambda m: "{{." + title_case(m.group(1)) + "}}", source)


def compile_fields(source: str) -> str:
    """Translate ``{{.Name}}`` field references into Jinja2 expressions."""

    return _FIELD_REF_RE.sub(lambda m: "{{ " + m.group(1) + " }}", source)


def render_fields(source: str, fields: Mapping[str, Any]) -> str:
    """Render ``source`` against ``fields``.

    Raises
    ------
    TemplateError
        If the template does not parse or references an unknown field.
    """

    try:
        template = _env.from_string(compile_fields(source))
        return template.render(**fields)
    except JinjaTemplateError as exc:
        raise TemplateError(f"Template error: {exc}") from exc


def render_note(source: str, metadata: NoteMetadata) -> str:
    return render_fields(source, metadata.as_fields())
