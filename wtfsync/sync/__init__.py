"""Sync engine for wtfsync - propagate a prototype character's settings."""

from .engine import SyncEngine
from .filesystem import FileSystem, LocalFileSystem
from .filters import (
    addon_stem,
    should_include_character,
    should_skip_addon_file,
    should_skip_char_item,
)
from .resolver import (
    ResolvedPrototype,
    check_account_root,
    enumerate_accounts,
    enumerate_characters,
    resolve_prototype,
)
from .runner import EXIT_FATAL, EXIT_ITEM_FAILURES, EXIT_OK, run_sync
from .targets import (
    ACCOUNT_ITEMS,
    CHARACTER_ITEMS,
    AccountTarget,
    CharacterTarget,
    CopyItem,
    CopyPlan,
    SyncAction,
    SyncDecision,
)

__all__ = [
    "SyncEngine",
    "FileSystem",
    "LocalFileSystem",
    "addon_stem",
    "should_include_character",
    "should_skip_addon_file",
    "should_skip_char_item",
    "ResolvedPrototype",
    "check_account_root",
    "enumerate_accounts",
    "enumerate_characters",
    "resolve_prototype",
    "run_sync",
    "EXIT_OK",
    "EXIT_FATAL",
    "EXIT_ITEM_FAILURES",
    "ACCOUNT_ITEMS",
    "CHARACTER_ITEMS",
    "AccountTarget",
    "CharacterTarget",
    "CopyItem",
    "CopyPlan",
    "SyncAction",
    "SyncDecision",
]
