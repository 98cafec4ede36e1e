"""Configuration management for memo."""

from __future__ import annotations

import logging
import os
import re
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_COLUMN = 30
DEFAULT_WIDTH = 80
DEFAULT_SELECT_CMD = "peco"
DEFAULT_GREP_CMD = "grep -nH ${PATTERN} ${FILES}"
MEMODIR_ENV = "MEMODIR"

_VAR_RE = re.compile(r"\$\{([^}]*)\}|\$([A-Za-z0-9_]+)")


def _default_config_dir() -> Path:
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "memo"
        return Path.home() / "Application Data" / "memo"
    return Path("~/.config/memo").expanduser()


DEFAULT_CONFIG_DIR = _default_config_dir()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when the configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file holds malformed values."""


@dataclass(slots=True)
class MemoConfig:
    """In-memory representation of the memo configuration file."""

    memo_dir: Path
    editor: str = "vim"
    column: int = 0
    width: int = 0
    select_cmd: str = DEFAULT_SELECT_CMD
    grep_cmd: str = DEFAULT_GREP_CMD
    memo_template: Path | None = None
    assets_dir: Path = Path(".")
    plugins_dir: Path | None = None
    template_dir_file: Path | None = None
    template_body_file: Path | None = None
    source_path: Path | None = None

    @property
    def effective_column(self) -> int:
        return self.column or DEFAULT_COLUMN

    @property
    def effective_width(self) -> int:
        return self.width or DEFAULT_WIDTH


def expand_path(value: str, env: Mapping[str, str] | None = None) -> str:
    """Expand a leading ``~/`` and ``$VAR``/``${VAR}`` references in ``value``.

    Unknown variables expand to the empty string.
    """

    environ = os.environ if env is None else env
    if len(value) >= 2 and value[0] == "~" and value[1] in ("/", os.sep):
        value = str(Path.home() / value[2:])
    return _VAR_RE.sub(
        lambda m: environ.get(m.group(1) or m.group(2), ""),
        value,
    )


def load_config(path: Path | None = None) -> MemoConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/memo/config.toml``) is used.

    Raises
    ------
    MissingConfigError
        If the file cannot be found.
    InvalidConfigError
        If the file cannot be parsed or a setting has the wrong type.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        raise MissingConfigError(config_path)

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    config_dir = config_path.parent

    memo_dir_raw = _get_str(raw, "memodir")
    env_dir = os.environ.get(MEMODIR_ENV)
    if env_dir:
        memo_dir_raw = env_dir
    if not memo_dir_raw:
        raise InvalidConfigError("'memodir' is required and must be a non-empty string")

    memo_template_raw = _get_str(raw, "memotemplate")
    plugins_dir_raw = _get_str(raw, "pluginsdir")

    config = MemoConfig(
        memo_dir=Path(expand_path(memo_dir_raw)),
        editor=_get_str(raw, "editor") or os.environ.get("EDITOR") or "vim",
        column=_get_int(raw, "column"),
        width=_get_int(raw, "width"),
        select_cmd=_get_str(raw, "selectcmd") or DEFAULT_SELECT_CMD,
        grep_cmd=_get_str(raw, "grepcmd") or DEFAULT_GREP_CMD,
        memo_template=Path(expand_path(memo_template_raw))
        if memo_template_raw
        else config_dir / "template.txt",
        assets_dir=Path(expand_path(_get_str(raw, "assetsdir") or ".")),
        plugins_dir=Path(expand_path(plugins_dir_raw))
        if plugins_dir_raw
        else config_dir / "plugins",
        template_dir_file=_optional_path(raw, "templatedirfile"),
        template_body_file=_optional_path(raw, "templatebodyfile"),
        source_path=config_path,
    )
    logger.debug("Loaded configuration from %s", config_path)
    return config


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    config_dir = path.parent
    config_dir.mkdir(parents=True, exist_ok=True)

    memo_dir = config_dir / "_posts"
    memo_dir.mkdir(parents=True, exist_ok=True)
    plugins_dir = config_dir / "plugins"
    plugins_dir.mkdir(parents=True, exist_ok=True)

    editor = os.environ.get("EDITOR") or "vim"
    lines = [
        f"memodir = {_quote(memo_dir.as_posix())}",
        f"editor = {_quote(editor)}",
        "column = 20",
        "width = 0",
        f"selectcmd = {_quote(DEFAULT_SELECT_CMD)}",
        f"grepcmd = {_quote(DEFAULT_GREP_CMD)}",
        'memotemplate = ""',
        'assetsdir = "."',
        f"pluginsdir = {_quote(plugins_dir.as_posix())}",
        'templatedirfile = ""',
        'templatebodyfile = ""',
    ]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.debug("Wrote default configuration to %s", path)
    return True


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _get_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidConfigError(f"'{key}' must be a string when provided")
    return value.strip()


def _get_int(raw: dict[str, Any], key: str) -> int:
    value = raw.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(f"'{key}' must be an integer when provided")
    if value < 0:
        raise InvalidConfigError(f"'{key}' must not be negative")
    return value


def _optional_path(raw: dict[str, Any], key: str) -> Path | None:
    value = _get_str(raw, key)
    if not value:
        return None
    return Path(expand_path(value))
