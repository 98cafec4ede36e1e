"""Helpers for creating and working with the memo plugin manager."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache
from typing import Iterable as TypingIterable
from typing import Tuple

import pluggy

from ..config import MemoConfig
from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE
from .spec import MemoHookSpec
from .types import SubcommandContribution

logger = logging.getLogger(__name__)


class PluginRegistrationError(RuntimeError):
    """Raised when a plugin fails validation or registration."""


def create_plugin_manager(*, load_entry_points: bool = True) -> pluggy.PluginManager:
    """Instantiate a pluggy ``PluginManager`` configured for memo."""

    manager = pluggy.PluginManager(PLUGIN_NAMESPACE)
    manager.add_hookspecs(MemoHookSpec)

    if load_entry_points:
        loaded = manager.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        logger.debug("Loaded %d plugin entry point(s)", loaded)

    return manager


def register_modules(
    manager: pluggy.PluginManager,
    modules: Sequence[object],
) -> None:
    """Register in-process plugin modules with the manager."""

    for module in modules:
        try:
            manager.register(module)
        except pluggy.PluginValidationError as exc:
            raise PluginRegistrationError(str(exc)) from exc


def iter_subcommand_contributions(
    manager: pluggy.PluginManager,
    config: MemoConfig,
) -> Iterator[SubcommandContribution]:
    """Yield subcommand contributions from all registered plugins."""

    for contributions in manager.hook.memo_subcommands(config=config):
        if not contributions:
            continue
        yield from _ensure_iterable(contributions)


@lru_cache(maxsize=1)
def _builtin_plugin_modules() -> Tuple[object, ...]:
    from . import external

    return (external,)


@lru_cache(maxsize=1)
def _build_plugin_manager() -> pluggy.PluginManager:
    manager = create_plugin_manager()
    register_modules(manager, _builtin_plugin_modules())
    return manager


def get_plugin_manager() -> pluggy.PluginManager:
    """Return the cached plugin manager instance."""

    return _build_plugin_manager()


def reset_plugin_manager_cache() -> None:
    """Clear cached plugin manager so future calls rebuild state."""

    _build_plugin_manager.cache_clear()
    _builtin_plugin_modules.cache_clear()


def load_subcommands(config: MemoConfig) -> dict[str, SubcommandContribution]:
    """Collect plugin subcommands keyed by name."""

    manager = get_plugin_manager()

    subcommands: dict[str, SubcommandContribution] = {}
    for contribution in iter_subcommand_contributions(manager, config):
        if contribution.name in subcommands:
            raise PluginRegistrationError(
                f"Duplicate plugin subcommand detected: '{contribution.name}'."
            )
        subcommands[contribution.name] = contribution

    return subcommands


def _ensure_iterable(
    contributions: object,
) -> TypingIterable[SubcommandContribution]:
    """Normalize hook return values to a concrete iterable of contributions."""

    if isinstance(contributions, SubcommandContribution):
        return (contributions,)

    if not isinstance(contributions, Iterable) or isinstance(
        contributions, (str, bytes)
    ):
        raise PluginRegistrationError(
            "Plugin hook did not return an iterable contribution collection."
        )

    normalized: list[SubcommandContribution] = []
    for item in contributions:
        if not isinstance(item, SubcommandContribution):
            raise PluginRegistrationError(
                "Subcommand contributions must be SubcommandContribution instances."
            )
        normalized.append(item)
    return tuple(normalized)


__all__ = [
    "PluginRegistrationError",
    "create_plugin_manager",
    "get_plugin_manager",
    "iter_subcommand_contributions",
    "load_subcommands",
    "register_modules",
    "reset_plugin_manager_cache",
]
