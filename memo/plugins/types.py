"""Type definitions for memo plugin contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover - type check only
    from ..config import MemoConfig
    from ..runner import CommandRunner


class SubcommandHandler(Protocol):
    """Callable executing a plugin subcommand with its raw arguments."""

    def __call__(
        self,
        args: Sequence[str],
        *,
        config: "MemoConfig",
        runner: "CommandRunner",
    ) -> None:  # pragma: no cover - Protocol
        """Run the subcommand."""


@dataclass(slots=True, frozen=True)
class SubcommandContribution:
    """Descriptor of an extra subcommand provided by a plugin."""

    name: str
    handler: SubcommandHandler
    describe: Callable[[], str] | None = None
