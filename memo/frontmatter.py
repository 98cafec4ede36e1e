"""Front matter handling for note files."""

from __future__ import annotations

from typing import Any

import yaml

FRONTMATTER_DELIM = "---\n"


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split ``text`` into its YAML front matter and the remaining body.

    Only a block opening on the very first line is recognised. Unparsable
    YAML yields empty metadata, but the block is still removed from the body.
    """

    if not text.startswith(FRONTMATTER_DELIM):
        return {}, text

    rest = text[len(FRONTMATTER_DELIM) :]
    pos = rest.find(FRONTMATTER_DELIM)
    if pos <= 0:
        return {}, text

    metadata_block = rest[:pos]
    body = rest[pos + len(FRONTMATTER_DELIM) :]

    metadata: dict[str, Any] = {}
    try:
        loaded = yaml.safe_load(metadata_block) or {}
        if isinstance(loaded, dict):
            metadata = loaded
    except yaml.YAMLError:
        metadata = {}
    return metadata, body


def first_line(text: str) -> str:
    """Return the first line of the body with Markdown heading marks removed."""

    _, body = split_front_matter(text)
    stripped = body.strip()
    if not stripped:
        return ""
    line = stripped.split("\n", 1)[0]
    return line.lstrip("# ")
