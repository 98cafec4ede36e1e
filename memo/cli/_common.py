"""Shared helpers for memo CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from ..app import AppContext, bootstrap
from ..config import ConfigError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class MemoCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def selected_config_path(ctx: click.Context) -> Path | None:
    """Return the ``--config`` value of the root command, if any."""

    root = ctx.find_root()
    root.ensure_object(dict)
    if "config_path" in root.obj:
        return root.obj["config_path"]
    return root.params.get("config_path_opt")


def get_app(ctx: click.Context) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    root = ctx.find_root()
    root.ensure_object(dict)
    app: AppContext | None = root.obj.get("app")
    if app is not None:
        return app

    try:
        app = bootstrap(selected_config_path(ctx))
    except ConfigError as exc:
        raise MemoCliError(str(exc)) from exc
    except OSError as exc:
        raise MemoCliError(f"Cannot prepare configuration: {exc}") from exc

    root.obj["app"] = app
    return app
