"""Exceptions raised by wtfsync."""

from enum import Enum
from pathlib import Path
from typing import Optional


class WtfSyncError(Exception):
    """Base exception for all wtfsync errors."""


class ConfigErrorReason(str, Enum):
    """Why a configuration could not be loaded."""

    MISSING_PROTOTYPE = "missing_prototype"
    INVALID_PROTOTYPE = "invalid_prototype"
    FILE_NOT_FOUND = "file_not_found"
    UNREADABLE = "unreadable"


class ConfigError(WtfSyncError):
    """Raised when the sync configuration is missing or malformed."""

    def __init__(self, reason: ConfigErrorReason, message: str):
        super().__init__(message)
        self.reason = reason


class ResolverErrorReason(str, Enum):
    """Why the account tree could not be resolved."""

    PROTOTYPE_NOT_FOUND = "prototype_not_found"
    ACCOUNT_ROOT_NOT_FOUND = "account_root_not_found"
    UNREADABLE = "unreadable"


class ResolverError(WtfSyncError):
    """Raised when the prototype or the account root cannot be located."""

    def __init__(self, reason: ResolverErrorReason, message: str):
        super().__init__(message)
        self.reason = reason


class ItemCopyError(WtfSyncError):
    """Raised when a single filesystem operation on one item fails.

    These errors are not fatal: the engine reports them, skips the item
    and continues with the next one.
    """

    def __init__(
        self,
        action: str,
        path: Path,
        cause: Optional[OSError] = None,
    ):
        self.action = action
        self.path = path
        self.cause = cause
        detail = f": {cause.strerror or cause}" if cause is not None else ""
        super().__init__(f"Failed to {action} {path}{detail}")
