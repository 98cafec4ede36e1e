"""memo plugin infrastructure based on pluggy."""

from __future__ import annotations

from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE, hookimpl, hookspec
from .manager import (
    PluginRegistrationError,
    get_plugin_manager,
    load_subcommands,
    reset_plugin_manager_cache,
)
from .types import SubcommandContribution, SubcommandHandler

__all__ = [
    "ENTRY_POINT_GROUP",
    "PLUGIN_NAMESPACE",
    "PluginRegistrationError",
    "SubcommandContribution",
    "SubcommandHandler",
    "get_plugin_manager",
    "hookimpl",
    "hookspec",
    "load_subcommands",
    "reset_plugin_manager_cache",
]
