"""Hook specifications for memo plugins."""

from __future__ import annotations

from collections.abc import Iterable

from memo.config import MemoConfig

from ._markers import hookspec
from .types import SubcommandContribution


class MemoHookSpec:
    """Collection of pluggy hook specifications."""

    @hookspec
    def memo_subcommands(
        self, config: MemoConfig
    ) -> Iterable[SubcommandContribution]:
        """Return subcommands provided by the plugin."""
