"""wtfsync - copy a prototype character's WTF settings to every other character."""

from .config import (
    Prototype,
    SyncConfig,
    SyncOptions,
    load_config,
    load_config_file,
)
from .exceptions import (
    ConfigError,
    ConfigErrorReason,
    ItemCopyError,
    ResolverError,
    ResolverErrorReason,
    WtfSyncError,
)
from .output import OutputFormatter
from .sync import SyncEngine, run_sync

__all__ = [
    "Prototype",
    "SyncConfig",
    "SyncOptions",
    "load_config",
    "load_config_file",
    "ConfigError",
    "ConfigErrorReason",
    "ItemCopyError",
    "ResolverError",
    "ResolverErrorReason",
    "WtfSyncError",
    "OutputFormatter",
    "SyncEngine",
    "run_sync",
]
