"""Read-only HTTP viewer for notes, built on Flask."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import markdown
from flask import Flask, abort, render_template_string, send_from_directory
from markupsafe import Markup

from .config import MemoConfig
from .frontmatter import split_front_matter
from .services.listing import truncate
from .services.notes import escape_title
from .storage import NoteDirectory, StorageError

logger = logging.getLogger(__name__)

INDEX_SUMMARY_CELLS = 80

DIR_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Memo Life For You</title>
</head>
<style>
li {list-style-type: none;}
</style>
<body>
<ul>{% for entry in entries %}
  <li><a href="/{{ entry.name }}">{{ entry.name }}</a><dd>{{ entry.body }}</dd></li>{% endfor %}
</ul>
</body>
</html>
"""

BODY_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>{{ name }}</title>
</head>
<body>
{{ body }}</body>
</html>
"""


@dataclass(slots=True, frozen=True)
class Entry:
    name: str
    body: str | Markup


def render_markdown(text: str) -> Markup:
    """Convert a note body to HTML, dropping any front matter."""

    _, body = split_front_matter(text)
    html = markdown.markdown(body, extensions=["extra", "sane_lists"], output_format="html")
    return Markup(html)


def _template_source(custom: Path | None, default: str) -> str:
    if custom is None:
        return default
    return custom.read_text(encoding="utf-8")


def create_app(config: MemoConfig, notes: NoteDirectory | None = None) -> Flask:
    """Build the viewer application for ``config``."""

    store = notes or NoteDirectory(config.memo_dir)
    app = Flask(__name__, static_folder=None)

    @app.route("/")
    def index():
        try:
            names = store.list_names()
        except StorageError as exc:
            logger.error("%s", exc)
            abort(500)
        entries = [
            Entry(name=name, body=truncate(store.first_line(name), INDEX_SUMMARY_CELLS))
            for name in names
        ]
        source = _template_source(config.template_dir_file, DIR_TEMPLATE)
        return render_template_string(source, entries=entries)

    @app.route("/assets/<path:filename>")
    def assets(filename: str):
        return send_from_directory(config.assets_dir.resolve(), filename)

    @app.route("/<path:name>")
    def note(name: str):
        safe_name = escape_title(name)
        try:
            text = store.read_text(safe_name)
        except FileNotFoundError:
            abort(404)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read %s: %s", safe_name, exc)
            abort(500)
        source = _template_source(config.template_body_file, BODY_TEMPLATE)
        return render_template_string(source, name=safe_name, body=render_markdown(text))

    return app


def parse_addr(addr: str) -> tuple[str, int, str]:
    """Split ``host:port`` (host optional) and return it with a browsable URL."""

    host, _, port_raw = addr.rpartition(":")
    if not port_raw.isdigit():
        raise ValueError(f"Invalid address: {addr}")
    port = int(port_raw)
    url_host = host or "localhost"
    return host or "127.0.0.1", port, f"http://{url_host}:{port}"
