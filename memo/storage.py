"""Flat-file note directory access for memo."""

from __future__ import annotations

import logging
from pathlib import Path

from .frontmatter import first_line, split_front_matter

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


class StorageError(RuntimeError):
    """Raised when the notes directory cannot be read or modified."""


class NoteDirectory:
    """High-level helper for the directory holding Markdown notes."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def list_names(self, pattern: str | None = None) -> list[str]:
        """Return note file names, newest first, optionally filtered.

        Notes are named ``YYYY-MM-DD-...``, so reverse lexical order puts
        the most recent ones on top.
        """

        try:
            names = [
                entry.name
                for entry in self.path.iterdir()
                if entry.name.endswith(NOTE_SUFFIX)
            ]
        except OSError as exc:
            raise StorageError(f"Cannot read notes directory {self.path}: {exc}") from exc

        names.sort(reverse=True)
        if pattern:
            names = [name for name in names if pattern in name]
        return names

    def path_for(self, name: str) -> Path:
        return self.path / name

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def read_text(self, name: str) -> str:
        return self.path_for(name).read_text(encoding="utf-8")

    def first_line(self, name: str) -> str:
        try:
            return first_line(self.read_text(name))
        except (OSError, UnicodeDecodeError):
            return ""

    def metadata(self, name: str) -> dict[str, object]:
        try:
            meta, _ = split_front_matter(self.read_text(name))
        except (OSError, UnicodeDecodeError):
            return {}
        return meta

    def delete(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError as exc:
            raise StorageError(f"Failed to delete {path}: {exc}") from exc
        logger.debug("Deleted %s", path)
