"""Sync targets and per-target copy plans."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

SAVED_VARIABLES_DIR = "SavedVariables"
"""Folder holding one or more files per addon"""

ACCOUNT_SAVED_VARIABLES_FILE = "SavedVariables.lua"
"""Account-wide saved variables file"""

CHARACTER_ITEMS: tuple[str, ...] = (
    "bindings-cache.wtf",
    "camera-settings.txt",
    "chat-cache.txt",
    "layout-cache.txt",
    "macros-cache.txt",
    "macros-local.txt",
    "AddOns.txt",
    SAVED_VARIABLES_DIR,
)
"""Items copied from the prototype into every character directory"""

ACCOUNT_ITEMS: tuple[str, ...] = (
    ACCOUNT_SAVED_VARIABLES_FILE,
    SAVED_VARIABLES_DIR,
)
"""Items copied from the prototype's account into every other account"""


@dataclass(frozen=True)
class CharacterTarget:
    """A character directory that receives the prototype's files."""

    account: str
    realm: str
    character: str
    path: Path

    @property
    def display(self) -> str:
        return f"{self.account}/{self.realm}/{self.character}"


@dataclass(frozen=True)
class AccountTarget:
    """An account directory that receives the prototype account's files."""

    account: str
    path: Path

    @property
    def display(self) -> str:
        return self.account


class SyncAction(str, Enum):
    """Actions that can be planned for an item."""

    COPY = "copy"
    """Copy a file, overwriting the destination"""

    MIRROR = "mirror"
    """Mirror the files of a SavedVariables folder"""

    REMOVE = "remove"
    """Remove an excluded file from the destination"""

    EXCLUDE = "exclude"
    """Item left out by configuration"""

    SKIP_MISSING = "skip_missing"
    """Item does not exist at the source"""


@dataclass(frozen=True)
class SyncDecision:
    """Represents a decision about one item of a target."""

    action: SyncAction
    """Action to take"""

    name: str
    """Base name of the item"""

    source: Optional[Path] = None
    """Source path (copy, mirror, skip-missing)"""

    destination: Optional[Path] = None
    """Destination path (copy, mirror, remove)"""


@dataclass(frozen=True)
class CopyItem:
    """A single source → destination pair that survived filtering."""

    source: Path
    destination: Path
    is_directory: bool = False


@dataclass
class CopyPlan:
    """What to do for one target directory, in order.

    Built per target and consumed right away; never stored.
    """

    destination: Path
    """Directory that must exist before anything is copied"""

    decisions: list[SyncDecision] = field(default_factory=list)
    """Ordered decisions for the items of this target"""

    def add(
        self,
        action: SyncAction,
        name: str,
        source: Optional[Path] = None,
        destination: Optional[Path] = None,
    ) -> None:
        self.decisions.append(
            SyncDecision(
                action=action, name=name, source=source, destination=destination
            )
        )

    @property
    def items(self) -> list[CopyItem]:
        """Copy and mirror decisions as (source, destination, is_directory)."""
        return [
            CopyItem(
                source=d.source,
                destination=d.destination,
                is_directory=d.action == SyncAction.MIRROR,
            )
            for d in self.decisions
            if d.action in (SyncAction.COPY, SyncAction.MIRROR)
            and d.source is not None
            and d.destination is not None
        ]

    @property
    def prune(self) -> list[Path]:
        """Destination files that will be removed."""
        return [
            d.destination
            for d in self.decisions
            if d.action == SyncAction.REMOVE and d.destination is not None
        ]

    @property
    def excluded(self) -> list[str]:
        return [d.name for d in self.decisions if d.action == SyncAction.EXCLUDE]
